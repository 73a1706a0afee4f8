"""IPv4 and Ethernet address values."""

from __future__ import annotations

import functools
import re
import socket

from .errors import ErrorCode, PgenError
from .netutil import get_ip_by_dev, get_mac_by_dev, get_mask_by_dev

VENDOR_FILE = "/usr/local/etc/mac_code.list"

_MAC_PATTERN = re.compile(
    r"\s*([0-9a-fA-F]{1,2}):\s*([0-9a-fA-F]{1,2}):\s*([0-9a-fA-F]{1,2}):"
    r"\s*([0-9a-fA-F]{1,2}):\s*([0-9a-fA-F]{1,2}):\s*([0-9a-fA-F]{1,2})"
)
_VENDOR_LINE = re.compile(r"([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})\t\s*(\S+)")
_VENDOR_NAME_MAX = 31


@functools.total_ordering
class IPAddr:
    """A mutable IPv4 address held as four octets in dotted order."""

    def __init__(self, value: "IPAddr | str | int | bytes | None" = None):
        if value is None:
            self._octets = bytearray(4)
        elif isinstance(value, IPAddr):
            self._octets = bytearray(value._octets)
        elif isinstance(value, str):
            try:
                self._octets = bytearray(socket.inet_pton(socket.AF_INET, value))
            except OSError as exc:
                raise ValueError(f"invalid IPv4 address: {value!r}") from exc
        elif isinstance(value, int):
            if not 0 <= value <= 0xFFFFFFFF:
                raise ValueError(f"IPv4 address out of range: {value}")
            self._octets = bytearray(value.to_bytes(4, "big"))
        elif isinstance(value, (bytes, bytearray)):
            if len(value) != 4:
                raise ValueError("an IPv4 address needs exactly 4 bytes")
            self._octets = bytearray(value)
        else:
            raise TypeError(f"cannot build an IPv4 address from {type(value).__name__}")

    def get_octet(self, n: int) -> int:
        if not 0 <= n < 4:
            raise IndexError(f"IPv4 octet index out of range: {n}")
        return self._octets[n]

    def set_octet(self, n: int, value: int) -> None:
        if not 0 <= n < 4:
            raise IndexError(f"IPv4 octet index out of range: {n}")
        self._octets[n] = value & 0xFF

    def clear(self) -> None:
        self._octets = bytearray(4)

    def increment(self) -> "IPAddr":
        """Raise the last octet below 255 by one; return the previous value."""
        previous = IPAddr(self)
        for i in reversed(range(4)):
            if self._octets[i] < 255:
                self._octets[i] += 1
                break
        return previous

    @classmethod
    def from_device(cls, ifname: str) -> "IPAddr":
        return cls(get_ip_by_dev(ifname))

    @classmethod
    def mask_from_device(cls, ifname: str) -> "IPAddr":
        return cls(get_mask_by_dev(ifname))

    def __bytes__(self) -> bytes:
        return bytes(self._octets)

    def __int__(self) -> int:
        return int.from_bytes(self._octets, "big")

    def __str__(self) -> str:
        return ".".join(str(b) for b in self._octets)

    def __repr__(self) -> str:
        return f"IPAddr({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IPAddr):
            return NotImplemented
        return self._octets == other._octets

    def __lt__(self, other: "IPAddr") -> bool:
        if not isinstance(other, IPAddr):
            return NotImplemented
        return bytes(self._octets) < bytes(other._octets)

    __hash__ = None  # type: ignore[assignment]


@functools.total_ordering
class MacAddr:
    """A mutable Ethernet address held as six octets."""

    def __init__(self, value: "MacAddr | str | int | bytes | None" = None):
        if value is None:
            self._octets = bytearray(6)
        elif isinstance(value, MacAddr):
            self._octets = bytearray(value._octets)
        elif isinstance(value, str):
            match = _MAC_PATTERN.match(value)
            if match is None:
                raise ValueError(f"invalid MAC address: {value!r}")
            self._octets = bytearray(int(part, 16) for part in match.groups())
        elif isinstance(value, int):
            self._octets = bytearray([value & 0xFF] * 6)
        elif isinstance(value, (bytes, bytearray)):
            if len(value) < 6:
                raise ValueError("a MAC address needs at least 6 bytes")
            self._octets = bytearray(value[:6])
        else:
            raise TypeError(f"cannot build a MAC address from {type(value).__name__}")

    def get_octet(self, n: int) -> int:
        if not 0 <= n < 6:
            raise IndexError(f"MAC octet index out of range: {n}")
        return self._octets[n]

    def set_octet(self, n: int, value: int) -> None:
        if not 0 <= n < 6:
            raise IndexError(f"MAC octet index out of range: {n}")
        self._octets[n] = value & 0xFF

    def clear(self) -> None:
        self._octets = bytearray(6)

    @classmethod
    def broadcast(cls) -> "MacAddr":
        return cls(0xFF)

    @classmethod
    def from_bytes(cls, data: bytes) -> "MacAddr":
        return cls(bytes(data))

    @classmethod
    def from_device(cls, ifname: str) -> "MacAddr":
        return cls(get_mac_by_dev(ifname))

    def vendor(self, path: str = VENDOR_FILE) -> str:
        """Look up the vendor of this address's prefix in a vendor list file."""
        prefix = tuple(self._octets[:3])
        try:
            with open(path, encoding="utf-8", errors="replace") as fp:
                for line in fp:
                    match = _VENDOR_LINE.match(line)
                    if match is None:
                        continue
                    code = tuple(int(part, 16) for part in match.groups()[:3])
                    if code == prefix:
                        return match.group(4)[:_VENDOR_NAME_MAX]
        except OSError as exc:
            raise PgenError("MacAddr.vendor", ErrorCode.FOPEN, exc.errno or 0) from exc
        return "not-found"

    def __bytes__(self) -> bytes:
        return bytes(self._octets)

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self._octets)

    def __repr__(self) -> str:
        return f"MacAddr({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MacAddr):
            return NotImplemented
        return self._octets == other._octets

    def __lt__(self, other: "MacAddr") -> bool:
        if not isinstance(other, MacAddr):
            return NotImplemented
        return bytes(self._octets) < bytes(other._octets)

    __hash__ = None  # type: ignore[assignment]