"""
Contracts of the external collaborators used by generated code.

Generated wrapper modules import ``wrap_call`` from the configured boundary
module; generated dispatch modules import ``json_to_binary`` and
``binary_to_json`` from the configured codec module. Neither is implemented
by forge.
"""

from collections.abc import Callable
from typing import Any, Protocol


class BoundaryRuntime(Protocol):
    """Calling convention for crossing into the component."""

    def wrap_call(
        self,
        arg_len: int,
        input_type: str | None,
        call: Callable[[Any], Any],
        *,
        readonly: bool = False,
    ) -> int:
        """
        Read ``arg_len`` argument bytes, decode them as ``input_type``, run
        ``call`` on the decoded value and write the encoded result.

        Returns:
            Length of the written result
        """
        ...

    def emit(self, topic: Any, payload: Any) -> None:
        """Announce an event."""
        ...

    def feed(self, item: Any) -> None:
        """Stream one item back to the caller."""
        ...


class Codec(Protocol):
    """Conversion between the human-facing JSON text and the binary encoding."""

    def json_to_binary(self, type_name: str, json_text: str) -> bytes:
        """Raises when the text does not match the type."""
        ...

    def binary_to_json(self, type_name: str, data: bytes) -> str:
        """Raises when the bytes do not decode as the type."""
        ...
