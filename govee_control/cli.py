"""
Command line control of a single Govee device.

Usage:
    govee-control --id DEVICE_ID on
    govee-control --id DEVICE_ID brightness 40
    govee-control --id DEVICE_ID scene --list
    govee-control --id DEVICE_ID music --sensitivity 80 --auto-color Energetic

Reads from the environment (or .env):
    GOVEE_API_KEY           - Platform API key (or pass --api-key)
    GOVEE_BASE_URL          - API base URL override
    GOVEE_CONTROL_LOG_LEVEL - logging level (default WARNING)
"""

import argparse
import asyncio
import logging
from typing import Callable, Optional, Sequence

from pydantic import ValidationError
from pydantic_extra_types.color import Color

from .capabilities.actions import ControlDispatcher
from .capabilities.backends import DeviceClient, GoveePlatformClient
from .capabilities.exceptions import ControlError
from .capabilities.resolver import parse_color
from .config import settings
from .display import show_error, show_names, show_result

logger = logging.getLogger("govee.cli")


def _bounded_int(low: int, high: int) -> Callable[[str], int]:
    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
        if not low <= number <= high:
            raise argparse.ArgumentTypeError(f"{number} is not in {low}..{high}")
        return number
    return parse


def _color(value: str) -> Color:
    try:
        return parse_color(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid color {value!r}: {e}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="govee-control",
        description="Control a Govee device through the Platform API",
    )
    parser.add_argument("--id", required=True, dest="device_id", help="Device id")
    parser.add_argument("--api-key", help="Govee Platform API key (default: $GOVEE_API_KEY)")
    parser.add_argument("--log-level", help="Logging level (default: from settings)")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("on", help="Turn the device on")
    sub.add_parser("off", help="Turn the device off")

    p = sub.add_parser("brightness", help="Set brightness")
    p.add_argument("percent", type=_bounded_int(0, 100))

    p = sub.add_parser("temperature", help="Set color temperature")
    p.add_argument("kelvin", type=_bounded_int(0, 2**32 - 1))

    p = sub.add_parser("color", help="Set color")
    p.add_argument("color", type=_color, help="CSS color, e.g. '#ff0080' or 'hotpink'")

    p = sub.add_parser("scene", help="List or activate scenes")
    p.add_argument("--list", action="store_true", help="List available scenes")
    p.add_argument("scene", nargs="?", help="Name of a scene to activate")

    p = sub.add_parser("music", help="List or activate music modes")
    p.add_argument("--list", action="store_true", help="List available modes")
    p.add_argument("--sensitivity", type=_bounded_int(0, 255), default=100)
    p.add_argument("--auto-color", action="store_true", default=False)
    p.add_argument("--color", type=_color, default=None)
    p.add_argument("mode", nargs="?", help="Name of a music mode to activate")

    return parser


async def run(args: argparse.Namespace, client: DeviceClient) -> None:
    """Fetch the device and carry out the requested command."""
    device = await client.fetch_device(args.device_id)
    dispatcher = ControlDispatcher(client)
    cmd = args.command

    if cmd == "on":
        show_result(await dispatcher.turn_on(device))
    elif cmd == "off":
        show_result(await dispatcher.turn_off(device))
    elif cmd == "brightness":
        show_result(await dispatcher.set_brightness(device, args.percent))
    elif cmd == "temperature":
        show_result(await dispatcher.set_temperature(device, args.kelvin))
    elif cmd == "color":
        show_result(await dispatcher.set_color(device, args.color))
    elif cmd == "scene":
        if args.list:
            show_names(await dispatcher.list_scenes(device))
        else:
            show_result(await dispatcher.activate_scene(device, args.scene))
    elif cmd == "music":
        if args.list:
            show_names(await dispatcher.list_music_modes(device))
        else:
            show_result(await dispatcher.activate_music_mode(
                device,
                args.mode,
                sensitivity=args.sensitivity,
                auto_color=args.auto_color,
                color=args.color,
            ))
    else:
        raise ValueError(f"unknown command: {cmd}")


async def _run_with_platform(args: argparse.Namespace, api_key: str) -> None:
    async with GoveePlatformClient(
        api_key,
        base_url=settings.api.base_url,
        timeout=settings.api.timeout,
    ) as client:
        await run(args, client)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in ("scene", "music") and not args.list:
        name = args.scene if args.command == "scene" else args.mode
        if not name:
            parser.error(f"{args.command}: a name is required unless --list is given")

    api_key = args.api_key or settings.api.api_key
    if not api_key:
        parser.error("no API key: pass --api-key or set GOVEE_API_KEY")

    level_name = args.log_level or ("DEBUG" if settings.debug else settings.log_level)
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        asyncio.run(_run_with_platform(args, api_key))
    except (ControlError, ValidationError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        show_error(str(e))
        return 1
    return 0
