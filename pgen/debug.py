"""Debug output helpers: conditional printing and hex dumps."""

from __future__ import annotations

import sys
from typing import TextIO


def debug_print(flag: bool, text: str) -> None:
    """Write text to standard output when flag is set."""
    if flag:
        sys.stdout.write(text)


def format_hexdump(data: bytes) -> str:
    """Return a hex and ASCII dump of data, sixteen bytes per row."""
    data = bytes(data)
    size = len(data)
    parts = [f"hexdump len: {size} \n"]

    for row in range(0, size or 1, 16):
        columns = range(row, row + 16)
        for i in columns:
            mid_row = i % 8 == 0 and i % 16 != 0
            if i >= size:
                parts.append("   ")
                if mid_row:
                    parts.append(" ")
            else:
                if i % 16 == 0:
                    parts.append(f"{i:04x}:    ")
                if mid_row:
                    parts.append(" ")
                parts.append(f"{data[i]:02x} ")

        for i in columns:
            if i >= size:
                parts.append(" ")
                continue
            if i % 16 == 0:
                parts.append("  ")
            if i % 8 == 0 and i % 16 != 0:
                parts.append("  ")
            byte = data[i]
            parts.append(chr(byte) if 0x20 <= byte <= 0x7E else ".")
            if (i + 1) % 16 == 0:
                parts.append("\n")

    parts.append("\n")
    return "".join(parts)


def hexdump(data: bytes, file: TextIO | None = None) -> None:
    """Write the hex dump of data to file, standard output by default."""
    (file or sys.stdout).write(format_hexdump(data))