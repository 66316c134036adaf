"""
ModuleManager - Manages prompt module registration and rendering.

Renders the configured modules strictly in order, handing each one the
background color the previous segment ended on.
"""
import logging
from typing import Optional

from rich.color import Color

from ..config import ConfigTree, get_array
from ..constants import DEFAULT_MODULE_ORDER
from ..errors import ConvertError, ErrorKind
from ..shell import Shell
from .base import FormatResult, PromptModule, RuntimeSignals
from .formatting import close_ribbon
from .options import read_color_system
from .prompt import ExitStatusModule
from .text import TextModule


logger = logging.getLogger(__name__)


class ModuleManager:
    """Manages prompt module registration and rendering.

    The ModuleManager maintains a registry of PromptModule instances and
    renders the ones listed in ``modules.order``.

    Example:
        manager = ModuleManager()
        manager.register(ExitStatusModule())
        manager.register(TextModule())

        prompt = manager.render_all(config, RuntimeSignals(exit_code=1), Shell.BASH)
    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize an empty ModuleManager.

        Args:
            strict: Re-raise module errors instead of omitting the module.
        """
        self._modules: dict[str, PromptModule] = {}
        self.strict = strict

    def register(self, module: PromptModule) -> None:
        """Register a prompt module.

        Raises:
            ValueError: If a module with the same name is already registered.
        """
        if module.name in self._modules:
            raise ValueError(f"Module '{module.name}' is already registered")
        self._modules[module.name] = module

    def unregister(self, name: str) -> None:
        """Unregister a prompt module by name.

        Raises:
            KeyError: If no module with the given name is registered.
        """
        if name not in self._modules:
            raise KeyError(f"Module '{name}' is not registered")
        del self._modules[name]

    def get(self, name: str) -> Optional[PromptModule]:
        """Get a registered module by name, or None."""
        return self._modules.get(name)

    def list_modules(self) -> list[str]:
        """List registered module names in registration order."""
        return list(self._modules.keys())

    def read_order(self, config: ConfigTree) -> list[str]:
        """Read the ordered list of module names to render.

        Raises:
            ConvertError: If modules.order isn't an array of strings.
        """
        if "modules.order" not in config:
            return list(DEFAULT_MODULE_ORDER)

        entries = get_array("modules.order", config)
        if entries is None:
            raise ConvertError(
                ErrorKind.INVALID_TYPE_IN_CONFIG,
                "expected an array of module names",
                key="modules.order",
            )
        for entry in entries:
            if not isinstance(entry, str):
                raise ConvertError(
                    ErrorKind.INVALID_TYPE_IN_CONFIG,
                    f"module names must be strings, got {type(entry).__name__}",
                    key="modules.order",
                )
        return entries

    def _format_one(
        self,
        name: str,
        config: ConfigTree,
        signals: RuntimeSignals,
        incoming_bg: Optional[Color],
        shell: Shell,
    ) -> FormatResult:
        module = self._modules.get(name)
        if module is None:
            raise ConvertError(ErrorKind.NO_SUCH_MATCH, f"unknown module '{name}'", key="modules.order")
        return module.format(config, signals, incoming_bg, shell)

    def render_segments(
        self,
        config: ConfigTree,
        signals: RuntimeSignals,
        shell: Shell,
    ) -> list[FormatResult]:
        """Render every configured module in order.

        Each module receives the previous result's next_bg. A module that
        fails is omitted (and logged) unless the manager is strict; the
        hand-off then continues from the last successful module.

        Returns:
            The results of all modules that rendered without error, including
            ones that chose to produce no output.

        Raises:
            ConvertError: If modules.order is malformed, or in strict mode
                when any module fails.
        """
        results: list[FormatResult] = []
        next_bg = None

        for name in self.read_order(config):
            try:
                result = self._format_one(name, config, signals, next_bg, shell)
            except ConvertError as e:
                if self.strict:
                    raise
                logger.warning("Skipping module '%s': %s", name, e)
                continue

            logger.debug("Rendered module '%s' (skipped=%s)", name, result.output is None)
            results.append(result)
            next_bg = result.next_bg

        return results

    def render_all(
        self,
        config: ConfigTree,
        signals: RuntimeSignals,
        shell: Shell,
    ) -> str:
        """Render the whole prompt as one string.

        Returns:
            The concatenated segments followed by the closing divider.
        """
        results = self.render_segments(config, signals, shell)
        parts = [result.output.rendered for result in results if result.output is not None]

        last_bg = results[-1].next_bg if results else None
        if last_bg is not None:
            # The last segment that rendered owns the closing glyph
            divider = next(
                (r.divider for r in reversed(results) if r.output is not None),
                None,
            )
            try:
                if divider is None:
                    divider = config.get_str("divider") or ""
                ending = close_ribbon(last_bg, divider, shell, read_color_system(config))
            except ConvertError as e:
                if self.strict:
                    raise
                logger.warning("Skipping ribbon end: %s", e)
            else:
                parts.append(ending.rendered)

        return "".join(parts)

    def __len__(self) -> int:
        """Return the number of registered modules."""
        return len(self._modules)

    def __contains__(self, name: str) -> bool:
        """Check if a module is registered."""
        return name in self._modules


def default_manager(strict: bool = False) -> ModuleManager:
    """Create a manager with the built-in modules registered."""
    manager = ModuleManager(strict=strict)
    manager.register(ExitStatusModule())
    manager.register(TextModule())
    return manager
