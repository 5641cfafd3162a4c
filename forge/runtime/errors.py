"""
Error values returned by generated dispatch modules.
"""

from dataclasses import dataclass
from enum import Enum


class DispatchErrorKind(str, Enum):
    UNKNOWN_FUNCTION = "unknown_function"
    UNKNOWN_EVENT = "unknown_event"
    UNSUPPORTED = "unsupported"
    MALFORMED_INPUT = "malformed_input"


@dataclass(frozen=True)
class DispatchError:
    """
    Explicit failure result of a dispatch entry point.

    Dispatch functions return this instead of raising, so callers can tell
    an unknown name from an undecodable payload without exception handling.
    """

    kind: DispatchErrorKind
    name: str
    message: str = ""

    @classmethod
    def unknown_function(cls, name: str) -> "DispatchError":
        return cls(DispatchErrorKind.UNKNOWN_FUNCTION, name, f"Unknown function '{name}'")

    @classmethod
    def unknown_event(cls, topic: str) -> "DispatchError":
        return cls(DispatchErrorKind.UNKNOWN_EVENT, topic, f"Unknown event '{topic}'")

    @classmethod
    def unsupported(cls, name: str) -> "DispatchError":
        return cls(
            DispatchErrorKind.UNSUPPORTED,
            name,
            f"Function '{name}' is custom and has no handler for this role",
        )

    @classmethod
    def malformed_input(cls, name: str, reason: str) -> "DispatchError":
        return cls(DispatchErrorKind.MALFORMED_INPUT, name, f"Malformed input for '{name}': {reason}")

    def __str__(self) -> str:
        return self.message or f"{self.kind.value}: {self.name}"
