"""
Constants and configuration defaults for powerprompt.
"""
from pathlib import Path
from typing import Any, Final

APP_NAME: Final[str] = "powerprompt"
APP_VERSION: Final[str] = "0.3.0"
APP_DESCRIPTION: Final[str] = "Render a powerline-style shell prompt from a layered configuration"

CONFIG_DIR: Final[Path] = Path.home() / ".powerprompt"
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.toml"
CONFIG_ENV_VAR: Final[str] = "POWERPROMPT_CONFIG"

# Powerline right-pointing solid arrow (Nerd Fonts / powerline-patched fonts)
DEFAULT_DIVIDER: Final[str] = "\ue0b0"
DEFAULT_COLOR_SYSTEM: Final[str] = "truecolor"
DEFAULT_MODULE_ORDER: Final[tuple[str, ...]] = ("prompt",)
DEFAULT_PROMPT_SYMBOL: Final[str] = "$"

DEFAULT_CONFIG: Final[dict[str, Any]] = {
    "divider": DEFAULT_DIVIDER,
    "color_system": DEFAULT_COLOR_SYSTEM,
    "modules": {
        "order": list(DEFAULT_MODULE_ORDER),
        "prompt": {
            "style_success": {"foreground": "white", "background": "green"},
            "style_error": {"foreground": "white", "background": "red"},
        },
    },
}
