"""
Prompt modules for powerprompt.

Each module renders one segment of the prompt; the ModuleManager chains
them together in configured order.
"""

from .base import FormatResult, PromptModule, RuntimeSignals
from .formatting import StyledText, close_ribbon, format_for_module, paint
from .manager import ModuleManager, default_manager
from .options import ModuleOptions, read_options
from .prompt import ExitStatusModule, format_prompt, select_style
from .text import TextModule

__all__ = [
    "FormatResult",
    "PromptModule",
    "RuntimeSignals",
    "StyledText",
    "close_ribbon",
    "format_for_module",
    "paint",
    "ModuleManager",
    "default_manager",
    "ModuleOptions",
    "read_options",
    "ExitStatusModule",
    "format_prompt",
    "select_style",
    "TextModule",
]
