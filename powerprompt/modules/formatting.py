"""
Segment formatting.

Paints a module's text with its style and draws the powerline seam against
the previous segment's background.
"""
from dataclasses import dataclass, field
from typing import Optional

from rich.cells import cell_len
from rich.color import Color, ColorSystem

from ..shell import Shell, escape_text, wrap_invisible
from ..style import Style
from .options import ModuleOptions


@dataclass(frozen=True)
class StyledText:
    """A painted piece of prompt.

    Attributes:
        text: The visible characters.
        rendered: The text with escape sequences and shell markers.
        style: The style of the segment body.
    """
    text: str = ""
    rendered: str = ""
    style: Style = field(default_factory=Style)

    @property
    def width(self) -> int:
        """Number of terminal cells the text occupies."""
        return cell_len(self.text)

    def __str__(self) -> str:
        return self.rendered


def paint(text: str, style: Style, shell: Shell, color_system: ColorSystem) -> str:
    """Render text with a style, escaped and wrapped for the shell."""
    rendered = style.to_rich().render(escape_text(shell, text), color_system=color_system)
    return wrap_invisible(shell, rendered)


def format_for_module(
    text: str,
    options: ModuleOptions,
    incoming_bg: Optional[Color],
    shell: Shell,
) -> StyledText:
    """Render one segment.

    When the previous segment left a background behind, the divider glyph is
    drawn first with that color as its foreground and this segment's
    background behind it, so the two segments join into one ribbon.

    Args:
        text: The segment content.
        options: Resolved options for the module.
        incoming_bg: Trailing background of the previous segment, if any.
        shell: Shell the prompt is rendered for.

    Returns:
        The painted segment.
    """
    pad = " " * options.padding
    body = f"{pad}{text}{pad}"
    visible = body
    rendered = paint(body, options.style, shell, options.color_system)

    if incoming_bg is not None and options.divider:
        seam = Style(foreground=incoming_bg, background=options.style.background)
        rendered = paint(options.divider, seam, shell, options.color_system) + rendered
        visible = options.divider + visible

    return StyledText(text=visible, rendered=rendered, style=options.style)


def close_ribbon(
    last_bg: Optional[Color],
    divider: str,
    shell: Shell,
    color_system: ColorSystem,
) -> StyledText:
    """Draw the arrow that ends the ribbon on the terminal background."""
    if last_bg is None or not divider:
        return StyledText()
    style = Style(foreground=last_bg)
    return StyledText(
        text=divider,
        rendered=paint(divider, style, shell, color_system),
        style=style,
    )
