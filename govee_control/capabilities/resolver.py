"""
Command resolution: turn a user intent into a control value.

Every resolver is a pure function of a capability (and its parameter
schema) plus user input. Nothing here talks to the network; see
actions.ControlDispatcher for the code that submits the resolved value.
"""

import logging
from typing import Any, Callable, Iterable, Optional, Union

from pydantic_extra_types.color import Color

from .exceptions import SchemaMismatchError, ValueNotFoundError
from .schema import (
    Capability,
    EnumOption,
    EnumParameters,
    IntegerParameters,
    StructParameters,
)

logger = logging.getLogger("govee.capabilities.resolver")

# Capability instance names
POWER_INSTANCE = "powerSwitch"
BRIGHTNESS_INSTANCE = "brightness"
TEMPERATURE_INSTANCE = "colorTemperatureK"
COLOR_INSTANCE = "colorRgb"
MUSIC_MODE_INSTANCE = "musicMode"

# Name of the STRUCT field that holds the music mode options
MUSIC_MODE_FIELD = "musicMode"

ColorInput = Union[Color, str, tuple]

# Visitor for walk_music_modes: return True to continue, False to halt.
OptionVisitor = Callable[[EnumOption], bool]


def _names_match(requested: str, option_name: str) -> bool:
    return requested.casefold() == option_name.casefold()


def _integer_parameters(capability: Capability) -> IntegerParameters:
    params = capability.parameters
    if not isinstance(params, IntegerParameters):
        raise SchemaMismatchError(capability.instance, "INTEGER", params)
    return params


def _enum_parameters(capability: Capability, allow_empty: bool = False) -> EnumParameters:
    params = capability.parameters
    if not isinstance(params, EnumParameters):
        raise SchemaMismatchError(capability.instance, "ENUM", params)
    if not params.options and not allow_empty:
        raise ValueNotFoundError(
            "option", capability.instance, f"{capability.instance} has no options"
        )
    return params


# ------------------------------------------------------------------ #
# Power, brightness, temperature, color
# ------------------------------------------------------------------ #

def resolve_power(capability: Capability, on: bool) -> Any:
    """
    Resolve the value for switching a device on or off.

    The option name must equal "on" or "off" exactly; unlike scenes and
    music modes this match is case-sensitive.
    """
    literal = "on" if on else "off"
    option = _enum_parameters(capability).option_by_name(literal)
    if option is None:
        raise ValueNotFoundError(
            "option", literal, f"{capability.instance} has no {literal} option"
        )
    logger.debug("%s %s -> %r", capability.instance, literal, option.value)
    return option.value


def resolve_brightness(capability: Capability, percent: int) -> int:
    """
    Clamp a brightness percentage into the capability's range.

    The percentage is used as the raw control value; it is not rescaled
    to the range's units.
    """
    value = _integer_parameters(capability).range.clamp(percent)
    logger.debug("%s %d%% -> %d", capability.instance, percent, value)
    return value


def resolve_temperature(capability: Capability, kelvin: int) -> int:
    """Clamp a color temperature in kelvin into the capability's range."""
    value = _integer_parameters(capability).range.clamp(kelvin)
    logger.debug("%s %dK -> %d", capability.instance, kelvin, value)
    return value


def parse_color(value: ColorInput) -> Color:
    """Parse a CSS color string (or RGB/RGBA tuple) into a Color."""
    if isinstance(value, Color):
        return value
    return Color(value)


def pack_rgb(color: ColorInput) -> int:
    """Pack a color as a 24-bit 0xRRGGBB integer. Alpha is discarded."""
    r, g, b = parse_color(color).as_rgb_tuple(alpha=False)
    return (r << 16) | (g << 8) | b


def resolve_color(capability: Capability, color: ColorInput) -> int:
    _integer_parameters(capability)
    value = pack_rgb(color)
    logger.debug("%s %s -> 0x%06X", capability.instance, color, value)
    return value


# ------------------------------------------------------------------ #
# Scenes
# ------------------------------------------------------------------ #

def list_scene_names(scene_capabilities: Iterable[Capability]) -> list[str]:
    """All scene names, in capability order then option order."""
    names: list[str] = []
    for cap in scene_capabilities:
        names.extend(opt.name for opt in _enum_parameters(cap, allow_empty=True).options)
    return names


def find_scene(
    scene_capabilities: Iterable[Capability],
    scene: str,
) -> tuple[Capability, Any]:
    """
    Find the first scene whose name matches, ignoring case.

    Capabilities are searched in order and the search stops at the first
    match across all of them.

    Returns:
        The capability that holds the scene and the scene's control value.
    """
    for cap in scene_capabilities:
        for opt in _enum_parameters(cap, allow_empty=True).options:
            if _names_match(scene, opt.name):
                logger.debug("Scene %r found in %s: %r", scene, cap.instance, opt.value)
                return cap, opt.value
    raise ValueNotFoundError("scene", scene)


# ------------------------------------------------------------------ #
# Music mode
# ------------------------------------------------------------------ #

def walk_music_modes(parameters: Any, visit: OptionVisitor) -> bool:
    """
    Visit each music mode option in order until the visitor halts.

    The parameters must be a STRUCT with a field named "musicMode" whose
    type is ENUM.

    Args:
        parameters: The music mode capability's parameter schema
        visit: Called per option; returns True to continue, False to halt

    Returns:
        True if every option was visited, False if the visitor halted
    """
    if not isinstance(parameters, StructParameters):
        raise SchemaMismatchError(MUSIC_MODE_INSTANCE, "STRUCT", parameters)

    field = parameters.field_by_name(MUSIC_MODE_FIELD)
    if field is None:
        raise ValueNotFoundError(
            "field",
            MUSIC_MODE_FIELD,
            f"{MUSIC_MODE_FIELD} not found in {[f.field_name for f in parameters.fields]}",
        )
    if not isinstance(field.field_type, EnumParameters):
        raise SchemaMismatchError(MUSIC_MODE_FIELD, "ENUM", field.field_type)
    if not field.field_type.options:
        raise ValueNotFoundError(
            "field", MUSIC_MODE_FIELD, f"{MUSIC_MODE_FIELD} has no options"
        )

    for opt in field.field_type.options:
        if not visit(opt):
            return False
    return True


def list_music_modes(capability: Capability) -> list[str]:
    names: list[str] = []

    def collect(opt: EnumOption) -> bool:
        names.append(opt.name)
        return True

    walk_music_modes(capability.parameters, collect)
    return names


def find_music_mode(capability: Capability, mode: str) -> Any:
    """Return the value of the first music mode matching ``mode``, ignoring case."""
    found: list[Any] = []

    def match(opt: EnumOption) -> bool:
        if _names_match(mode, opt.name):
            found.append(opt.value)
            return False
        return True

    if walk_music_modes(capability.parameters, match):
        raise ValueNotFoundError("mode", mode, f"mode {mode} not found")
    return found[0]


def resolve_music_mode(
    capability: Capability,
    mode: str,
    sensitivity: int = 100,
    auto_color: bool = False,
    color: Optional[ColorInput] = None,
) -> dict[str, Any]:
    """
    Build the composite music mode control value.

    ``sensitivity`` is passed through as given; ``rgb`` is None when no
    color is supplied.
    """
    value = {
        "musicMode": find_music_mode(capability, mode),
        "sensitivity": sensitivity,
        "autoColor": 1 if auto_color else 0,
        "rgb": pack_rgb(color) if color is not None else None,
    }
    logger.debug("%s %r -> %s", capability.instance, mode, value)
    return value
