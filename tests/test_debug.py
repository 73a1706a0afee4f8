import io

import pytest

from pgen.debug import debug_print, format_hexdump, hexdump


def test_debug_print_enabled(capsys):
    debug_print(True, "abc")
    assert capsys.readouterr().out == "abc"


def test_debug_print_disabled(capsys):
    debug_print(False, "abc")
    assert capsys.readouterr().out == ""


def test_header_line():
    assert format_hexdump(b"ABC").startswith("hexdump len: 3 \n")


def test_short_row_contents():
    text = format_hexdump(b"ABC")
    assert "0000:    41 42 43 " in text
    assert "  ABC" in text
    assert text.endswith("\n")


def test_full_row_layout():
    text = format_hexdump(b"0123456789abcdef")
    expected = (
        "0000:    30 31 32 33 34 35 36 37  38 39 61 62 63 64 65 66"
        "   01234567  89abcdef\n"
    )
    assert expected in text


def test_nonprintable_shown_as_dots():
    text = format_hexdump(bytes(range(8)))
    assert "........" in text
    assert "00 01 02 03 04 05 06 07" in text


@pytest.mark.parametrize("size, has_second", [(16, False), (17, True), (32, True)])
def test_row_offsets(size, has_second):
    text = format_hexdump(bytes(size))
    assert ("0010:" in text) is has_second
    assert "0000:" in text


def test_empty_data_has_no_offset():
    text = format_hexdump(b"")
    assert text.startswith("hexdump len: 0 \n")
    assert "0000:" not in text


def test_hexdump_writes_format():
    buf = io.StringIO()
    data = b"hello, world\x00\xff"
    hexdump(data, buf)
    assert buf.getvalue() == format_hexdump(data)


def test_hexdump_default_stdout(capsys):
    hexdump(b"xyz")
    assert capsys.readouterr().out == format_hexdump(b"xyz")