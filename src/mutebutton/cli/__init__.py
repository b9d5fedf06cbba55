"""Command-line interface for mutebutton."""
