"""Device command implementations."""

import logging

import click

from mutebutton.device import DeviceLocator

logger = logging.getLogger(__name__)


def _build_locator() -> DeviceLocator:
    from mutebutton.models import AppConfig

    return DeviceLocator(AppConfig.load_or_default().devices)


@click.group(name="device")
def device_group():
    """Mute button device commands."""
    pass


@device_group.command(name="list")
def list_devices():
    """List attached mute buttons."""
    locator = _build_locator()
    devices = locator.list_devices()

    click.echo("Mute buttons:\n")
    if not devices:
        click.echo("  No mute button found.")
        click.echo("\n  Recognized devices: " + ", ".join(str(i) for i in locator.identities))
        return

    for i, info in enumerate(devices):
        name = " ".join(part for part in (info["manufacturer"], info["product"]) if part) or "Unknown"
        click.echo(f"  [{i}] {info['identity']}  {name}")
        if info["serial"]:
            click.echo(f"      serial: {info['serial']}")
        click.echo(f"      path:   {info['path']}")


@device_group.command(name="cycle-colors")
@click.option(
    "--delay",
    type=click.FloatRange(min=0.0),
    default=0.5,
    show_default=True,
    help="Seconds to show each color",
)
@click.pass_context
def cycle_colors(ctx, delay: float):
    """
    Show every LED color on the button in turn.

    Useful to check that the button is detected and that its LED works.
    Do not run while a mute button session is running.
    """
    from mutebutton.audio import PulseAudioMicrophone
    from mutebutton.channel import UiChannel
    from mutebutton.core import ButtonSession
    from mutebutton.exceptions import DeviceError, format_error_for_display

    session = ButtonSession(PulseAudioMicrophone(), UiChannel(), locator=_build_locator())

    click.echo("Cycling colors...")
    try:
        session.cycle_colors(delay=delay)
    except DeviceError as e:
        logger.error(f"Color cycle failed: {e.technical_message}")
        user_message, recovery_hint = format_error_for_display(e)
        click.echo(f"Error: {user_message}", err=True)
        if recovery_hint:
            click.echo(recovery_hint, err=True)
        ctx.exit(1)
    except KeyboardInterrupt:
        session.cancel_event.set()
        click.echo("\nInterrupted", err=True)
        ctx.exit(1)

    click.echo("Done!")
