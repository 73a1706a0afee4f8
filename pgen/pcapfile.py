"""Pcap file headers and per-packet records."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

from .errors import ErrorCode, PgenError

PCAP_MAGIC = 0xA1B2C3D4


@dataclass
class FileHeader:
    """The global header at the start of a pcap file."""

    magic: int = PCAP_MAGIC
    version_major: int = 2
    version_minor: int = 4
    timezone: int = 0
    sigfigs: int = 0
    snaplen: int = 0xFFFF
    linktype: int = 1

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<IHHIIII")
    SIZE: ClassVar[int] = _FORMAT.size

    def pack(self) -> bytes:
        return self._FORMAT.pack(
            self.magic,
            self.version_major,
            self.version_minor,
            self.timezone,
            self.sigfigs,
            self.snaplen,
            self.linktype,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "FileHeader":
        if len(data) < cls.SIZE:
            raise ValueError(f"pcap file header needs {cls.SIZE} bytes, got {len(data)}")
        return cls(*cls._FORMAT.unpack_from(data))


@dataclass
class RecordHeader:
    """The header before each packet in a pcap file."""

    ts_sec: int = 0
    ts_usec: int = 0
    caplen: int = 0
    length: int = 0

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<IIII")
    SIZE: ClassVar[int] = _FORMAT.size

    def pack(self) -> bytes:
        return self._FORMAT.pack(self.ts_sec, self.ts_usec, self.caplen, self.length)

    @classmethod
    def unpack(cls, data: bytes) -> "RecordHeader":
        if len(data) < cls.SIZE:
            raise ValueError(f"pcap record header needs {cls.SIZE} bytes, got {len(data)}")
        return cls(*cls._FORMAT.unpack_from(data))


def _split_timestamp(timestamp: float | None) -> tuple[int, int]:
    if timestamp is None:
        sec, rem = divmod(time.time_ns(), 1_000_000_000)
        usec = rem // 1000
    else:
        sec = int(timestamp)
        usec = int(round((timestamp - sec) * 1_000_000))
        if usec >= 1_000_000:
            sec += 1
            usec -= 1_000_000
    return sec & 0xFFFFFFFF, usec & 0xFFFFFFFF


def write_packet(fp: BinaryIO, data: bytes, timestamp: float | None = None) -> int:
    """Append one packet record to fp; return the number of packet bytes."""
    data = bytes(data)
    sec, usec = _split_timestamp(timestamp)
    header = RecordHeader(sec, usec, len(data), len(data))
    try:
        fp.write(header.pack())
        fp.write(data)
    except OSError as exc:
        raise PgenError("write_packet", ErrorCode.FWRITE, exc.errno or 0) from exc
    return len(data)


def read_packet(fp: BinaryIO) -> bytes:
    """Read the next packet record from fp and return its bytes."""
    try:
        raw = fp.read(RecordHeader.SIZE)
        if len(raw) < RecordHeader.SIZE:
            raise PgenError("read_packet", ErrorCode.FREAD)
        header = RecordHeader.unpack(raw)
        body = fp.read(header.length)
    except OSError as exc:
        raise PgenError("read_packet", ErrorCode.FREAD, exc.errno or 0) from exc
    if len(body) < header.length:
        raise PgenError("read_packet", ErrorCode.FREAD)
    return body