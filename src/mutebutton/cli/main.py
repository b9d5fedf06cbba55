"""Main CLI entry point."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import click

from mutebutton import __version__

from .commands import config, device_group

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".mutebutton" / "logs"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Return the file the application logs to for the given options."""
    if log_file:
        return log_file
    if debug:
        # Debug mode: log to current directory
        return Path.cwd() / "mutebutton-debug.log"
    return DEFAULT_LOG_DIR / "mutebutton.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    if debug:
        console_level = logging.DEBUG
    elif verbose >= 2:
        console_level = logging.DEBUG
    elif verbose == 1:
        console_level = logging.INFO
    else:
        console_level = logging.WARNING

    file_level = logging.DEBUG if debug else getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Create rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(min(file_level, console_level))
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(
        f"Logging configured: console={logging.getLevelName(console_level)}, "
        f"file={logging.getLevelName(file_level)} ({log_path})"
    )


def show_error(error: Exception, log_path: Path) -> None:
    """Print a clean error message with its recovery hint, without a traceback."""
    from mutebutton.exceptions import format_error_for_display

    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    click.echo(f"\nFor details, check the log file: {log_path}", err=True)
    click.echo("For logging options, run: mutebutton --help", err=True)


def run_session(log_path: Path) -> None:
    """Run the button session in the foreground until Ctrl+C."""
    from mutebutton.audio import PulseAudioMicrophone
    from mutebutton.channel import UiChannel
    from mutebutton.core import ButtonSession
    from mutebutton.models import AppConfig, InboundUiMessage

    logger.info("Starting mute button session")

    session = None
    try:
        config_obj = AppConfig.load_or_default()

        channel = UiChannel()
        session = ButtonSession.from_config(config_obj, PulseAudioMicrophone(), channel)
        session.start()

        click.echo("Waiting for the mute button. Press Ctrl+C to stop.")
        try:
            while True:
                message = channel.receive_from_button(timeout=0.5)
                if message is not None:
                    click.echo(f"[button] {message.value}")
        except KeyboardInterrupt:
            logger.info("Session interrupted by user")
            click.echo("\nShutting down...", err=True)
            # Turn the LED off before the device is released
            channel.send_to_button(InboundUiMessage.shutting_down())
            session.cancel_event.wait(0.5)

    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running mute button session")
        show_error(e, log_path)
        sys.exit(1)
    finally:
        if session is not None:
            session.stop()


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="mutebutton")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./mutebutton-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Mute button - toggles the microphone from a MuteMe touch button.

    Touch the button to mute or unmute the default PulseAudio source.
    The LED shows the current state (red = muted, green = live by default).

    \b
    Examples:
      # Run the button session
      mutebutton

      # Run with INFO output on the console
      mutebutton -v

      # List attached buttons
      mutebutton device list

      # Check the LED
      mutebutton device cycle-colors

      # Change the muted color
      mutebutton config set --muted-color Purple
    """
    ctx.ensure_object(dict)
    ctx.obj["log_path"] = resolve_log_path(debug, log_file)

    setup_logging(verbose, debug, log_file, log_level)

    # If a subcommand was invoked, don't run the session
    if ctx.invoked_subcommand is not None:
        return

    run_session(ctx.obj["log_path"])


@cli.command(name="run")
@click.pass_context
def run(ctx):
    """Run the button session (same as no subcommand)."""
    run_session(ctx.obj["log_path"])


# Register utility commands
cli.add_command(device_group)
cli.add_command(config)

if __name__ == "__main__":
    cli()
