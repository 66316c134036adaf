"""
Error model for powerprompt.

Every failure while turning configuration into prompt segments surfaces as a
single ConvertError carrying one of a closed set of ErrorKind values.
"""
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

from rich.color import ColorParseError


class ErrorKind(Enum):
    """Kinds of conversion failures."""
    NO_SUCH_MATCH = "no_such_match"
    INVALID_FORM = "invalid_form"
    INVALID_TYPE_IN_CONFIG = "invalid_type_in_config"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ErrorKind.NO_SUCH_MATCH: "no match was found for the provided input",
    ErrorKind.INVALID_FORM: "provided input was malformed and could not be parsed",
    ErrorKind.INVALID_TYPE_IN_CONFIG: "config entry has the wrong type",
}


class ConvertError(Exception):
    """Raised when a configuration value cannot be converted.
    
    Attributes:
        kind: The ErrorKind classifying the failure.
        message: Optional human-readable detail.
        key: The config key being read, if known.
    """
    
    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        key: Optional[str] = None,
    ):
        self.kind = kind
        self.message = message
        self.key = key
        
        text = kind.description
        if message:
            text = f"{text}: {message}"
        if key:
            text = f"{text} (at '{key}')"
        super().__init__(text)
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConvertError):
            return NotImplemented
        return (self.kind, self.message, self.key) == (other.kind, other.message, other.key)
    
    def __hash__(self) -> int:
        return hash((self.kind, self.message, self.key))
    
    @classmethod
    def from_parse_error(
        cls,
        exc: Exception,
        key: Optional[str] = None,
        kind: ErrorKind = ErrorKind.INVALID_FORM,
    ) -> "ConvertError":
        """Map a lower-level parse failure onto the error model.
        
        Args:
            exc: The ValueError or ColorParseError raised while parsing.
            key: The config key whose value failed to parse.
            kind: INVALID_FORM or INVALID_TYPE_IN_CONFIG.
        
        Returns:
            A ConvertError carrying the original failure's text only.
        """
        if kind is ErrorKind.NO_SUCH_MATCH:
            raise ValueError("parse errors map to INVALID_FORM or INVALID_TYPE_IN_CONFIG")
        return cls(kind, str(exc) or None, key=key)


@contextmanager
def converting(
    key: Optional[str] = None,
    kind: ErrorKind = ErrorKind.INVALID_FORM,
) -> Iterator[None]:
    """Re-raise parse failures inside the block as ConvertError.
    
    Example:
        with converting(key="modules.prompt.padding"):
            padding = int(raw)
    """
    try:
        yield
    except (ValueError, ColorParseError) as e:
        raise ConvertError.from_parse_error(e, key=key, kind=kind) from None
