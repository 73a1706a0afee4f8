"""Base class shared by every packet type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .debug import hexdump

if TYPE_CHECKING:
    from .handle import Handle

MAX_PACKET_LEN = 10000
MAX_EXT_DATA_LEN = 98000


class Packet(ABC):
    """A packet built from header fields plus optional trailing data.

    Subclasses implement compile(), which rebuilds ``data`` from their
    fields and then calls compile_add_data() to append the extra data.
    """

    def __init__(self) -> None:
        self.data = bytearray()
        self.ext_data = b""

    @abstractmethod
    def compile(self) -> None:
        """Rebuild ``data`` from the packet's fields."""

    def add_data(self, data: bytes) -> None:
        """Set the data appended after the headers, replacing any earlier data."""
        data = bytes(data)
        if len(data) > MAX_EXT_DATA_LEN:
            raise ValueError(f"extension data is too long: {len(data)} bytes")
        self.ext_data = data

    def compile_add_data(self) -> None:
        """Append the extra data to the compiled headers."""
        if not self.ext_data:
            return
        if len(self.data) + len(self.ext_data) >= MAX_PACKET_LEN:
            raise ValueError("packet length is too large")
        self.data += self.ext_data

    def hex(self) -> None:
        """Print a hex dump of the compiled packet."""
        self.compile()
        hexdump(bytes(self.data))

    def length(self) -> int:
        self.compile()
        return len(self.data)

    def to_bytes(self) -> bytes:
        self.compile()
        return bytes(self.data)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def send_handle(self, handle: "Handle") -> int:
        """Compile the packet and write it to handle."""
        self.compile()
        return handle.send(bytes(self.data))