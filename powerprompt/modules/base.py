"""
Base classes for prompt modules.

Provides the PromptModule abstract base class together with the values that
flow in and out of a module render.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from rich.color import Color

from ..config import ConfigTree
from ..shell import Shell
from .formatting import StyledText


@dataclass(frozen=True)
class RuntimeSignals:
    """Facts about the shell session handed to modules on each render."""
    exit_code: int = 0


@dataclass(frozen=True)
class FormatResult:
    """Outcome of rendering one module.

    Attributes:
        output: The painted segment, or None if the module must be skipped.
        next_bg: Background the next segment's seam must match.
        divider: Glyph that closes the ribbon if this is the last segment.
            None defers to the top-level divider.
    """
    output: Optional[StyledText]
    next_bg: Optional[Color]
    divider: Optional[str] = None

    @classmethod
    def skipped(cls, incoming_bg: Optional[Color]) -> "FormatResult":
        """A result that renders nothing and passes the hand-off through."""
        return cls(output=None, next_bg=incoming_bg)


class PromptModule(ABC):
    """Abstract base class for prompt modules.

    Each module owns its option schema and rendering policy. The manager
    calls modules in configured order, feeding each one the previous
    module's next_bg.

    Example:
        class HostModule(PromptModule):
            @property
            def name(self) -> str:
                return "host"

            def format(self, config, signals, incoming_bg, shell):
                options = read_options(self.name, config)
                segment = format_for_module(socket.gethostname(), options, incoming_bg, shell)
                return FormatResult(segment, options.style.background)
    """

    extra_fields: Mapping[str, Any] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Module identifier used under ``modules.`` in the config."""
        ...

    @abstractmethod
    def format(
        self,
        config: ConfigTree,
        signals: RuntimeSignals,
        incoming_bg: Optional[Color],
        shell: Shell,
    ) -> FormatResult:
        """Render this module.

        Args:
            config: The config tree for this render.
            signals: Runtime signals such as the last exit code.
            incoming_bg: Trailing background of the previous segment.
            shell: Shell the prompt is rendered for.

        Returns:
            The FormatResult for this module.

        Raises:
            ConvertError: If the module's options can't be resolved.
        """
        ...
