"""Error codes and the exception raised by the packet generator."""

from __future__ import annotations

import os
from enum import IntEnum


class ErrorCode(IntEnum):
    """The operation that failed."""

    SUCCESS = 0
    BIND = 1
    HDRINC = 2
    PROMISC = 3
    WONLY = 4
    RONLY = 5
    FWRITE = 6
    FREAD = 7
    WRITE = 8
    READ = 9
    SENDTO = 10
    FOPEN = 11
    IOCTL = 12
    SOCKET = 13
    NOSUPPORT = 255

    BSD_OPENBPF = -1
    BSD_SETBUF = -2
    BSD_BIND = -3
    BSD_PROMISC = -4
    BSD_IMMEDIATE = -5
    BSD_RCVALL = -6
    BSD_FLUSH = -7
    BSD_NCMPMAC = -8

    def describe(self) -> str:
        """Return a short description of the failed operation."""
        return _DESCRIPTIONS.get(self, _UNKNOWN)


_UNKNOWN = "unknown error!"

_DESCRIPTIONS = {
    ErrorCode.SUCCESS: "success",
    ErrorCode.BIND: "bind",
    ErrorCode.HDRINC: "setsockopt hdrinc",
    ErrorCode.PROMISC: "set promisc",
    ErrorCode.WONLY: "handle is write only",
    ErrorCode.RONLY: "handle is read only",
    ErrorCode.FWRITE: "fwrite",
    ErrorCode.FREAD: "fread",
    ErrorCode.WRITE: "write",
    ErrorCode.READ: "read",
    ErrorCode.SENDTO: "sendto",
    ErrorCode.FOPEN: "fopen",
    ErrorCode.IOCTL: "ioctl",
    ErrorCode.SOCKET: "socket",
    ErrorCode.NOSUPPORT: "not support",
    ErrorCode.BSD_OPENBPF: "open bpf",
    ErrorCode.BSD_SETBUF: "set buf",
    ErrorCode.BSD_BIND: "bind",
    ErrorCode.BSD_PROMISC: "set promisc",
    ErrorCode.BSD_IMMEDIATE: "set immediate",
    ErrorCode.BSD_RCVALL: "set rcv all",
    ErrorCode.BSD_FLUSH: "buf flush",
    ErrorCode.BSD_NCMPMAC: "no cmpl mac",
}


def strerror(errnum: int) -> str:
    """Return the system message for an errno value."""
    return os.strerror(errnum)


def format_error(message: str, code: int, errnum: int) -> str:
    """Build the one-line report for a failure."""
    try:
        description = ErrorCode(code).describe()
    except ValueError:
        description = _UNKNOWN
    return f"{message}({description}): {strerror(errnum)}"


class PgenError(Exception):
    """A failure in packet I/O, carrying the operation code and errno."""

    def __init__(self, message: str, code: int = ErrorCode.SUCCESS, errnum: int = 0):
        super().__init__(format_error(message, code, errnum))
        self.message = message
        self.code = code
        self.errnum = errnum