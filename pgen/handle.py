"""Packet I/O handles for interfaces and pcap files, plus checksums."""

from __future__ import annotations

import socket
import struct
import sys
from enum import IntEnum
from typing import BinaryIO, Callable

from .errors import ErrorCode, PgenError
from .netutil import RECV_BUFFER_SIZE, open_raw_socket, recv_from_netif, send_to_netif
from .pcapfile import FileHeader, read_packet, write_packet

_IP_HDR_LEN = 20
_TCP_HDR_LEN = 20
_UDP_HDR_LEN = 8
_TCP_CHECK_OFFSET = 16


class Mode(IntEnum):
    """How a pcap file is opened."""

    READ = 0
    WRITE = 1


class Handle:
    """A source or sink of packets: a raw socket or a pcap file."""

    def __init__(
        self,
        *,
        sock: socket.socket | None = None,
        file: BinaryIO | None = None,
        readable: bool = True,
        writable: bool = True,
        file_header: FileHeader | None = None,
    ):
        if (sock is None) == (file is None):
            raise ValueError("a handle needs exactly one of a socket or a file")
        self._sock = sock
        self._file = file
        self.readable = readable
        self.writable = writable
        self.file_header = file_header
        self._closed = False

    @property
    def offline(self) -> bool:
        """True when the handle reads or writes a pcap file."""
        return self._file is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @classmethod
    def open(cls, dev: str) -> "Handle":
        """Open a promiscuous link-layer socket on dev for reading and writing."""
        sock = open_raw_socket(dev, promisc=True, over_ip=False)
        return cls(sock=sock, readable=True, writable=True)

    @classmethod
    def open_offline(cls, filename: str, mode: int = Mode.READ) -> "Handle":
        """Open a pcap file for reading or create one for writing."""
        try:
            mode = Mode(mode)
        except ValueError as exc:
            raise ValueError(f"mode not found: {mode!r}") from exc

        if mode is Mode.READ:
            try:
                fp = open(filename, "rb")
            except OSError as exc:
                raise PgenError("open_offline", ErrorCode.FOPEN, exc.errno or 0) from exc
            try:
                raw = fp.read(FileHeader.SIZE)
            except OSError as exc:
                fp.close()
                raise PgenError("open_offline", ErrorCode.FREAD, exc.errno or 0) from exc
            if len(raw) < FileHeader.SIZE:
                fp.close()
                raise PgenError("open_offline", ErrorCode.FREAD)
            return cls(file=fp, readable=True, writable=False, file_header=FileHeader.unpack(raw))

        try:
            fp = open(filename, "wb")
        except OSError as exc:
            raise PgenError("open_offline", ErrorCode.FOPEN, exc.errno or 0) from exc
        header = FileHeader()
        try:
            fp.write(header.pack())
        except OSError as exc:
            fp.close()
            raise PgenError("open_offline", ErrorCode.FWRITE, exc.errno or 0) from exc
        return cls(file=fp, readable=False, writable=True, file_header=header)

    def close(self) -> None:
        """Release the file or socket; closing twice does nothing."""
        if self._closed:
            return
        self._closed = True
        if self._file is not None:
            self._file.close()
        else:
            self._sock.close()

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on a closed handle")

    def send(self, data: bytes) -> int:
        """Write one packet; return the number of bytes written."""
        self._check_open()
        if not self.writable:
            raise PgenError("send", ErrorCode.RONLY)
        if self._file is not None:
            return write_packet(self._file, data)
        return send_to_netif(self._sock, data)

    def _at_end(self) -> bool:
        position = self._file.tell()
        if not self._file.read(1):
            return True
        self._file.seek(position)
        return False

    def sniff(self, callback: Callable[[bytes], bool]) -> int:
        """Pass each received packet to callback until it returns false.

        A pcap file also ends the loop when it runs out of packets.
        Returns the number of packets handed to callback.
        """
        self._check_open()
        if not self.readable:
            raise PgenError("sniff", ErrorCode.WONLY)
        count = 0
        while True:
            if self._file is not None:
                if self._at_end():
                    break
                packet = read_packet(self._file)
            else:
                packet = recv_from_netif(self._sock, RECV_BUFFER_SIZE)
            count += 1
            if not callback(packet):
                break
        return count

    def __enter__(self) -> "Handle":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def send_l2(dev: str, data: bytes) -> int:
    """Send a complete Ethernet frame out of dev."""
    with open_raw_socket(dev, promisc=False, over_ip=False) as sock:
        return send_to_netif(sock, data)


def send_l3(dev: str, data: bytes, address) -> int:
    """Send a complete IPv4 packet out of dev towards address."""
    if not sys.platform.startswith("linux"):
        raise PgenError("send_l3", ErrorCode.NOSUPPORT)
    with open_raw_socket(dev, promisc=False, over_ip=True) as sock:
        try:
            return sock.sendto(bytes(data), (str(address), 0))
        except OSError as exc:
            raise PgenError("send_l3", ErrorCode.SENDTO, exc.errno or 0) from exc


def checksum(data: bytes) -> int:
    """Return the Internet checksum of data as a value in network byte order."""
    data = bytes(data)
    if len(data) % 2:
        data += b"\x00"
    total = sum(struct.unpack(f"!{len(data) // 2}H", data))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def checksum_tcp(data: bytes) -> int:
    """Return the TCP checksum of an IPv4 packet holding a TCP segment.

    The checksum field of the segment is ignored.
    """
    data = bytes(data)
    if len(data) < _IP_HDR_LEN:
        raise ValueError("packet is shorter than an IPv4 header")
    ihl = (data[0] & 0x0F) * 4
    if ihl < _IP_HDR_LEN or len(data) < ihl + _TCP_HDR_LEN:
        raise ValueError("packet is too short to hold a TCP header")
    segment = bytearray(data[ihl:])
    segment[_TCP_CHECK_OFFSET:_TCP_CHECK_OFFSET + 2] = b"\x00\x00"
    pseudo = data[12:20] + bytes([0, socket.IPPROTO_TCP]) + len(segment).to_bytes(2, "big")
    return checksum(pseudo + bytes(segment))


def checksum_udp(data: bytes) -> int:
    """Return the UDP checksum of an IPv4 packet holding a UDP datagram.

    UDP checksums are not computed: zero marks the field as unused.
    """
    data = bytes(data)
    if len(data) < _IP_HDR_LEN:
        raise ValueError("packet is shorter than an IPv4 header")
    ihl = (data[0] & 0x0F) * 4
    if ihl < _IP_HDR_LEN or len(data) < ihl + _UDP_HDR_LEN:
        raise ValueError("packet is too short to hold a UDP header")
    return 0