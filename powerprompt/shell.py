"""
Shell targets and their prompt escaping rules.

Interactive shells measure the prompt's width to place the cursor. Escape
sequences occupy no columns, so bash and zsh need them wrapped in markers
that exclude them from that calculation.
"""
import os
import re
from enum import Enum
from typing import Mapping, Optional

from .errors import ConvertError, ErrorKind


ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")


class Shell(Enum):
    """Interactive shells a prompt can be rendered for."""
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    POWERSHELL = "powershell"
    ELVISH = "elvish"

    @classmethod
    def from_name(cls, name: str) -> "Shell":
        """Look up a shell by name, ignoring case.

        Raises:
            ConvertError: NO_SUCH_MATCH if the name isn't a known shell.
        """
        normalized = name.strip().lower()
        if normalized == "pwsh":
            normalized = "powershell"
        for shell in cls:
            if shell.value == normalized:
                return shell
        raise ConvertError(ErrorKind.NO_SUCH_MATCH, f"unknown shell '{name}'")

    @classmethod
    def detect(cls, environ: Optional[Mapping[str, str]] = None) -> "Shell":
        """Guess the shell from $SHELL, falling back to bash."""
        env = os.environ if environ is None else environ
        name = os.path.basename(env.get("SHELL", "").strip())
        try:
            return cls.from_name(name)
        except ConvertError:
            return cls.BASH

    @property
    def invisible_markers(self) -> tuple[str, str]:
        """Start/end markers around zero-width sequences ('' if none needed)."""
        return _MARKERS.get(self, ("", ""))


_MARKERS = {
    Shell.BASH: ("\\[", "\\]"),
    Shell.ZSH: ("%{", "%}"),
}


def wrap_invisible(shell: Shell, rendered: str) -> str:
    """Wrap every ANSI escape sequence in the shell's invisible markers."""
    start, end = shell.invisible_markers
    if not start:
        return rendered
    return ANSI_ESCAPE_RE.sub(lambda m: f"{start}{m.group(0)}{end}", rendered)


def escape_text(shell: Shell, text: str) -> str:
    """Escape literal prompt text so the shell prints it verbatim."""
    if shell is Shell.ZSH:
        return text.replace("%", "%%")
    if shell is Shell.BASH:
        # PS1 is decoded and then expanded again, so backslashes are
        # escaped for both passes and expansion characters for the second
        text = text.replace("\\", "\\" * 4)
        return text.replace("$", "\\\\$").replace("`", "\\\\`")
    return text
