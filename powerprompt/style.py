"""
Style resolution for prompt segments.

Turns config tables such as

    [modules.prompt.style_success]
    foreground = "white"
    background = "green"
    attributes = ["bold"]

into Style values. Unset fields mean "inherit the terminal default".
"""
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from rich.color import Color
from rich.style import Style as RichStyle

from .config import ConfigTree, get_array
from .errors import ConvertError, ErrorKind, converting


# Config attribute name -> rich.style.Style keyword
ATTRIBUTES: dict[str, str] = {
    "bold": "bold",
    "dimmed": "dim",
    "italic": "italic",
    "underline": "underline",
    "blink": "blink",
    "reverse": "reverse",
    "hidden": "conceal",
    "strikethrough": "strike",
}

_INDEX_RE = re.compile(r"^\d+$")


@dataclass(frozen=True)
class Style:
    """Foreground, background and text attributes for a segment."""
    foreground: Optional[Color] = None
    background: Optional[Color] = None
    attributes: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_default(self) -> bool:
        return self.foreground is None and self.background is None and not self.attributes

    def to_rich(self) -> RichStyle:
        """Convert to a rich Style for painting."""
        flags = {ATTRIBUTES[name]: True for name in self.attributes}
        return RichStyle(color=self.foreground, bgcolor=self.background, **flags)


def parse_color(value: Any, key: Optional[str] = None) -> Color:
    """Parse a color from a config value.

    Accepts anything rich understands ('green', 'bright_red', '#ff8700',
    'rgb(10,20,30)', 'color(208)'), a decimal index string such as '208',
    or an integer index 0-255.

    Args:
        value: The raw config value.
        key: Config key for error reporting.

    Returns:
        The parsed Color.

    Raises:
        ConvertError: INVALID_FORM for unparseable or out-of-range values,
            INVALID_TYPE_IN_CONFIG for values that are not strings or ints.
    """
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConvertError(
            ErrorKind.INVALID_TYPE_IN_CONFIG,
            f"expected a color name or index, got {type(value).__name__}",
            key=key,
        )

    if isinstance(value, str):
        text = value.strip()
        if not _INDEX_RE.match(text):
            with converting(key=key):
                return Color.parse(text)
        with converting(key=key):
            value = int(text)

    if not 0 <= value <= 255:
        raise ConvertError(
            ErrorKind.INVALID_FORM,
            f"color index {value} is outside 0-255",
            key=key,
        )
    return Color.from_ansi(value)


def parse_attribute(value: Any, key: Optional[str] = None) -> str:
    """Match a config entry against the attribute vocabulary.

    Raises:
        ConvertError: NO_SUCH_MATCH for unknown names,
            INVALID_TYPE_IN_CONFIG for non-string entries.
    """
    if not isinstance(value, str):
        raise ConvertError(
            ErrorKind.INVALID_TYPE_IN_CONFIG,
            f"attribute names must be strings, got {type(value).__name__}",
            key=key,
        )
    name = value.strip().lower()
    if name not in ATTRIBUTES:
        raise ConvertError(ErrorKind.NO_SUCH_MATCH, f"unknown attribute '{value}'", key=key)
    return name


def read_style(path: str, config: ConfigTree) -> Style:
    """Read a Style from the config table at a dotted path.

    An absent key is not an error: it yields the all-default Style.

    Args:
        path: Dotted key such as 'modules.prompt.style_success'.
        config: The config tree.

    Returns:
        The resolved Style.

    Raises:
        ConvertError: If the entry isn't a table or any field fails to parse.
    """
    table = config.get_table(path)
    if table is None:
        return Style()

    foreground = None
    if table.get("foreground") is not None:
        foreground = parse_color(table["foreground"], key=f"{path}.foreground")

    background = None
    if table.get("background") is not None:
        background = parse_color(table["background"], key=f"{path}.background")

    attributes: frozenset[str] = frozenset()
    attributes_key = f"{path}.attributes"
    if attributes_key in config:
        entries = get_array(attributes_key, config)
        if entries is None:
            raise ConvertError(
                ErrorKind.INVALID_TYPE_IN_CONFIG,
                "expected an array of attribute names",
                key=attributes_key,
            )
        attributes = frozenset(parse_attribute(entry, key=attributes_key) for entry in entries)

    return Style(foreground=foreground, background=background, attributes=attributes)
