"""
Exit-status prompt symbol.
"""
from typing import Optional

from rich.color import Color

from ..config import ConfigTree
from ..constants import DEFAULT_PROMPT_SYMBOL
from ..shell import Shell
from ..style import Style, read_style
from .base import FormatResult, PromptModule, RuntimeSignals
from .formatting import format_for_module
from .options import read_options


def select_style(exit_code: int, style_success: Style, style_error: Style) -> Style:
    """Pick the style for the last command's outcome."""
    # A command exited successfully if and only if the exit code is 0
    return style_success if exit_code == 0 else style_error


def format_prompt(
    config: ConfigTree,
    exit_code: int,
    incoming_bg: Optional[Color],
    shell: Shell,
) -> FormatResult:
    """Render the prompt symbol styled by the last exit code.

    Both exit-status styles and the generic modules.prompt.style are
    resolved on every call, so a broken style is reported even when the
    other one is selected.

    Raises:
        ConvertError: If option or style resolution fails.
    """
    # The generic style is replaced below but must still be well formed
    read_style("modules.prompt.style", config)
    style_success = read_style("modules.prompt.style_success", config)
    style_error = read_style("modules.prompt.style_error", config)

    options = read_options(
        "prompt",
        config,
        style=select_style(exit_code, style_success, style_error),
    )
    if not options.enabled:
        return FormatResult.skipped(incoming_bg)

    symbol = options.symbol if options.symbol is not None else DEFAULT_PROMPT_SYMBOL
    return FormatResult(
        output=format_for_module(symbol, options, incoming_bg, shell),
        next_bg=options.style.background,
        divider=options.divider,
    )


class ExitStatusModule(PromptModule):
    """The '$' symbol, green or red depending on the last exit code."""

    @property
    def name(self) -> str:
        return "prompt"

    def format(
        self,
        config: ConfigTree,
        signals: RuntimeSignals,
        incoming_bg: Optional[Color],
        shell: Shell,
    ) -> FormatResult:
        return format_prompt(config, signals.exit_code, incoming_bg, shell)
