"""
Config command implementations.

Commands:
    - config show                           # Display configuration
    - config set --option VALUE ...         # Update configuration
    - config reset [--field FIELD]          # Reset to defaults
"""

from pathlib import Path
from typing import Optional

import click

from mutebutton.exceptions import ConfigurationError, format_error_for_display
from mutebutton.models import DEFAULT_CONFIG_PATH, AppConfig, ButtonColor

# Fields that can be changed from the command line
SETTABLE_FIELDS = (
    "muted_color",
    "unmuted_color",
    "device_check_interval",
    "open_retry_delay",
    "read_timeout_ms",
    "ui_send_timeout",
)

config_path_option = click.option(
    "--config-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Configuration file (default: {DEFAULT_CONFIG_PATH})",
)


def _load(ctx: click.Context, path: Optional[Path]) -> AppConfig:
    try:
        return AppConfig.load_or_default(path)
    except ConfigurationError as e:
        user_message, recovery_hint = format_error_for_display(e)
        click.echo(f"Error: {user_message}", err=True)
        if recovery_hint:
            click.echo(recovery_hint, err=True)
        ctx.exit(1)


def _echo_config(config_obj: AppConfig) -> None:
    for name in AppConfig.model_fields:
        value = getattr(config_obj, name)
        if isinstance(value, ButtonColor):
            value = value.value
        elif isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        click.echo(f"  {name}: {value}")


@click.group(name="config")
def config():
    """Configure mute button settings."""
    pass


@config.command(name="show")
@config_path_option
@click.option("--field", "-f", type=click.Choice(list(AppConfig.model_fields)), default=None,
              help="Show a single field")
@click.pass_context
def show(ctx, config_file: Optional[Path], field: Optional[str]):
    """Display the current configuration."""
    config_obj = _load(ctx, config_file)

    if field:
        value = getattr(config_obj, field)
        click.echo(value.value if isinstance(value, ButtonColor) else value)
        return

    click.echo(f"Configuration ({config_file or DEFAULT_CONFIG_PATH}):\n")
    _echo_config(config_obj)


@config.command(name="set")
@config_path_option
@click.option("--muted-color", "-m", type=click.Choice(ButtonColor.names()), default=None,
              help="LED color while muted")
@click.option("--unmuted-color", "-u", type=click.Choice(ButtonColor.names()), default=None,
              help="LED color while unmuted")
@click.option("--device-check-interval", type=float, default=None,
              help="How often to check for the button (seconds)")
@click.option("--open-retry-delay", type=float, default=None,
              help="Wait before retrying a button that cannot be opened (seconds)")
@click.option("--read-timeout-ms", type=int, default=None,
              help="HID read timeout in milliseconds")
@click.option("--ui-send-timeout", type=float, default=None,
              help="How long a notification may wait for the UI (seconds)")
@click.pass_context
def set_config(ctx, config_file: Optional[Path], **options):
    """Update configuration values."""
    updates = {name: value for name, value in options.items() if value is not None}
    if not updates:
        click.echo("Nothing to update. See: mutebutton config set --help")
        return

    config_obj = _load(ctx, config_file)
    data = config_obj.model_dump()
    data.update(updates)

    try:
        new_config = AppConfig.model_validate(data)
    except ValueError as e:
        click.echo(f"Error: invalid value: {e}", err=True)
        ctx.exit(1)

    new_config.save(config_file)
    for name in SETTABLE_FIELDS:
        if name in updates:
            click.echo(f"Set {name} = {updates[name]}")


@config.command(name="reset")
@config_path_option
@click.option("--field", "-f", type=click.Choice(list(AppConfig.model_fields)), default=None,
              help="Reset a single field (default: all fields)")
@click.pass_context
def reset(ctx, config_file: Optional[Path], field: Optional[str]):
    """Reset configuration to defaults."""
    defaults = AppConfig()

    if field is None:
        defaults.save(config_file)
        click.echo("Configuration reset to defaults")
        return

    config_obj = _load(ctx, config_file)
    data = config_obj.model_dump()
    data[field] = defaults.model_dump()[field]
    AppConfig.model_validate(data).save(config_file)
    click.echo(f"Reset {field} to default")
