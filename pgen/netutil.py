"""Raw sockets and network interface queries."""

from __future__ import annotations

import socket
import struct
import sys
from enum import IntEnum

from .errors import ErrorCode, PgenError

ETH_P_ALL = 0x0003
RECV_BUFFER_SIZE = 4096

_IS_LINUX = sys.platform.startswith("linux")
_IFNAMSIZ = 16
_IFREQ_SIZE = 40
_IFF_PROMISC = 0x100
_SO_BINDTODEVICE = getattr(socket, "SO_BINDTODEVICE", 25)

_SIOCGIFFLAGS = 0x8913
_SIOCSIFFLAGS = 0x8914
_SIOCGIFADDR = 0x8915
_SIOCGIFNETMASK = 0x891B
_SIOCGIFHWADDR = 0x8927

_SERVICE_NAME_MAX = 15


class ServiceProtocol(IntEnum):
    """Transport protocol for a service lookup."""

    TCP = 1
    UDP = 2


def _ifreq(dev: str, family: int = 0, flags: int | None = None) -> bytes:
    name = dev.encode()[: _IFNAMSIZ - 1]
    if flags is not None:
        return struct.pack("16sH22s", name, flags & 0xFFFF, b"")
    return struct.pack("16sH22s", name, family, b"")


def _ioctl(sock: socket.socket, request: int, buf: bytes) -> bytes:
    import fcntl

    return fcntl.ioctl(sock.fileno(), request, buf)


def send_to_netif(sock: socket.socket, data: bytes) -> int:
    """Write data to an open socket; return the number of bytes sent."""
    try:
        return sock.send(bytes(data))
    except OSError as exc:
        raise PgenError("send_to_netif", ErrorCode.WRITE, exc.errno or 0) from exc


def recv_from_netif(sock: socket.socket, size: int = RECV_BUFFER_SIZE) -> bytes:
    """Read one frame from an open socket."""
    try:
        return sock.recv(size)
    except OSError as exc:
        raise PgenError("recv_from_netif", ErrorCode.READ, exc.errno or 0) from exc


def _open_ip_socket(dev: str) -> socket.socket:
    proto = socket.IPPROTO_RAW if _IS_LINUX else socket.IPPROTO_IP
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_RAW, proto)
    except OSError as exc:
        raise PgenError("open_raw_socket", ErrorCode.SOCKET, exc.errno or 0) from exc
    try:
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_HDRINCL, 1)
    except OSError as exc:
        sock.close()
        raise PgenError("open_raw_socket", ErrorCode.HDRINC, exc.errno or 0) from exc
    if _IS_LINUX:
        try:
            sock.setsockopt(socket.SOL_SOCKET, _SO_BINDTODEVICE, dev.encode())
        except OSError as exc:
            sock.close()
            raise PgenError("open_raw_socket", ErrorCode.BIND, exc.errno or 0) from exc
    return sock


def _set_promisc(sock: socket.socket, dev: str) -> None:
    result = _ioctl(sock, _SIOCGIFFLAGS, _ifreq(dev))
    (flags,) = struct.unpack_from("H", result, _IFNAMSIZ)
    _ioctl(sock, _SIOCSIFFLAGS, _ifreq(dev, flags=flags | _IFF_PROMISC))


def _open_link_socket(dev: str, promisc: bool) -> socket.socket:
    if not _IS_LINUX:
        raise PgenError("open_raw_socket", ErrorCode.NOSUPPORT)
    try:
        sock = socket.socket(socket.AF_PACKET, socket.SOCK_RAW, socket.htons(ETH_P_ALL))
    except OSError as exc:
        raise PgenError("open_raw_socket", ErrorCode.SOCKET, exc.errno or 0) from exc
    try:
        sock.bind((dev, ETH_P_ALL))
    except OSError as exc:
        sock.close()
        raise PgenError("open_raw_socket", ErrorCode.BIND, exc.errno or 0) from exc
    if promisc:
        try:
            _set_promisc(sock, dev)
        except OSError as exc:
            sock.close()
            raise PgenError("open_raw_socket", ErrorCode.PROMISC, exc.errno or 0) from exc
    return sock


def open_raw_socket(dev: str, promisc: bool = False, over_ip: bool = False) -> socket.socket:
    """Open a raw socket bound to dev, at the link layer or over IP."""
    if over_ip:
        return _open_ip_socket(dev)
    return _open_link_socket(dev, promisc)


def _query_interface(dev: str, request: int, where: str) -> bytes:
    if not _IS_LINUX:
        raise PgenError(where, ErrorCode.NOSUPPORT)
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        raise PgenError(where, ErrorCode.SOCKET, exc.errno or 0) from exc
    with sock:
        try:
            return _ioctl(sock, request, _ifreq(dev, socket.AF_INET))
        except OSError as exc:
            raise PgenError(where, ErrorCode.IOCTL, exc.errno or 0) from exc


def get_ip_by_dev(dev: str) -> str:
    """Return the IPv4 address of an interface in dotted form."""
    result = _query_interface(dev, _SIOCGIFADDR, "get_ip_by_dev")
    return socket.inet_ntoa(result[20:24])


def get_mask_by_dev(dev: str) -> str:
    """Return the IPv4 netmask of an interface in dotted form."""
    result = _query_interface(dev, _SIOCGIFNETMASK, "get_mask_by_dev")
    return socket.inet_ntoa(result[20:24])


def get_mac_by_dev(dev: str) -> str:
    """Return the hardware address of an interface as colon-separated hex."""
    result = _query_interface(dev, _SIOCGIFHWADDR, "get_mac_by_dev")
    return ":".join(f"{b:02x}" for b in result[18:24])


def port_to_service(port: int, protocol: int) -> str:
    """Return the service name for a port, or "not-found"."""
    proto = ServiceProtocol(protocol)
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port out of range: {port}")
    try:
        name = socket.getservbyport(port, proto.name.lower())
    except OSError:
        return "not-found"
    return name[:_SERVICE_NAME_MAX]