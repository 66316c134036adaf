"""
Static text segment.
"""
from typing import Optional

from rich.color import Color

from ..config import ConfigTree
from ..shell import Shell
from .base import FormatResult, PromptModule, RuntimeSignals
from .formatting import format_for_module
from .options import read_options


class TextModule(PromptModule):
    """Renders the literal string configured in ``modules.text.content``."""

    extra_fields = {"content": ""}

    @property
    def name(self) -> str:
        return "text"

    def format(
        self,
        config: ConfigTree,
        signals: RuntimeSignals,
        incoming_bg: Optional[Color],
        shell: Shell,
    ) -> FormatResult:
        options = read_options(self.name, config, extra_fields=self.extra_fields)
        content = options.symbol if options.symbol is not None else options.extra["content"]
        if not options.enabled or not content:
            return FormatResult.skipped(incoming_bg)
        return FormatResult(
            output=format_for_module(content, options, incoming_bg, shell),
            next_bg=options.style.background,
            divider=options.divider,
        )
