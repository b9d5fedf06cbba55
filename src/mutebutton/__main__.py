"""Main entry point for mutebutton."""

from mutebutton.cli.main import cli

if __name__ == "__main__":
    cli()
