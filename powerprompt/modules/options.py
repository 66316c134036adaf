"""
Module option resolution.

Every prompt module shares a handful of generic settings under
``modules.<name>``; modules that need more declare extra fields with typed
defaults. This is the only place new per-module config keys are read.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from rich.color import ColorSystem

from ..config import ConfigTree
from ..constants import DEFAULT_COLOR_SYSTEM
from ..errors import ConvertError, ErrorKind
from ..style import Style, read_style


COLOR_SYSTEMS: dict[str, ColorSystem] = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "eight_bit": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
    "windows": ColorSystem.WINDOWS,
}


@dataclass(frozen=True)
class ModuleOptions:
    """Resolved display options for one module render.

    Attributes:
        name: The module name the options were read for.
        style: The style used to paint the segment.
        enabled: Whether the module renders at all.
        symbol: Text overriding the module's default content.
        padding: Spaces added on each side of the content.
        divider: Glyph drawn at the seam with the previous segment.
        color_system: Terminal color capability to render for.
        extra: Module-declared fields, read-only.
    """
    name: str
    style: Style = field(default_factory=Style)
    enabled: bool = True
    symbol: Optional[str] = None
    padding: int = 0
    divider: str = ""
    color_system: ColorSystem = ColorSystem.TRUECOLOR
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


def read_color_system(config: ConfigTree) -> ColorSystem:
    """Read the top-level color_system setting."""
    name = config.get_str("color_system") or DEFAULT_COLOR_SYSTEM
    try:
        return COLOR_SYSTEMS[name.strip().lower()]
    except KeyError:
        raise ConvertError(
            ErrorKind.NO_SUCH_MATCH,
            f"unknown color system '{name}'",
            key="color_system",
        ) from None


def _read_extra_field(key: str, default: Any, config: ConfigTree) -> Any:
    if key not in config:
        return default
    value = config.get(key)
    # bool is a subclass of int, so compare exact types
    if default is not None and type(value) is not type(default):
        raise ConvertError(
            ErrorKind.INVALID_TYPE_IN_CONFIG,
            f"expected {type(default).__name__}, got {type(value).__name__}",
            key=key,
        )
    return value


def read_options(
    module_name: str,
    config: ConfigTree,
    extra_fields: Optional[Mapping[str, Any]] = None,
    style: Optional[Style] = None,
) -> ModuleOptions:
    """Assemble the full option set for a module.

    Args:
        module_name: Name under ``modules.`` to read from.
        config: The config tree.
        extra_fields: Module-declared field names mapped to their defaults.
            Configured values must have the same type as the default.
        style: Style chosen by the caller. When omitted the style is read
            from ``modules.<name>.style``.

    Returns:
        The resolved ModuleOptions.

    Raises:
        ConvertError: From the style resolver or any typed read.
    """
    prefix = f"modules.{module_name}"

    if style is None:
        style = read_style(f"{prefix}.style", config)

    enabled = config.get_bool(f"{prefix}.enabled")
    padding = config.get_int(f"{prefix}.padding")
    if padding is not None and padding < 0:
        raise ConvertError(
            ErrorKind.INVALID_FORM,
            f"padding must not be negative, got {padding}",
            key=f"{prefix}.padding",
        )

    divider = config.get_str(f"{prefix}.divider")
    if divider is None:
        divider = config.get_str("divider") or ""

    extra = {
        name: _read_extra_field(f"{prefix}.{name}", default, config)
        for name, default in (extra_fields or {}).items()
    }

    return ModuleOptions(
        name=module_name,
        style=style,
        enabled=True if enabled is None else enabled,
        symbol=config.get_str(f"{prefix}.symbol"),
        padding=padding or 0,
        divider=divider,
        color_system=read_color_system(config),
        extra=MappingProxyType(extra),
    )
