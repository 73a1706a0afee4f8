import pytest

from pgen.handle import Handle, Mode
from pgen.packet import MAX_EXT_DATA_LEN, MAX_PACKET_LEN, Packet


class FixedPacket(Packet):
    def __init__(self, header=b"AB"):
        super().__init__()
        self.header = header

    def compile(self):
        self.data = bytearray(self.header)
        Packet.compile_add_data(self)


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        Packet()


def test_packet_without_data():
    packet = FixedPacket()
    assert Packet.to_bytes(packet) == b"AB"
    assert Packet.length(packet) == 2


def test_add_data_is_appended():
    packet = FixedPacket()
    Packet.add_data(packet, b"payload")
    assert Packet.to_bytes(packet) == b"ABpayload"
    assert Packet.length(packet) == 2 + len(b"payload")
    assert bytes(packet) == Packet.to_bytes(packet)


def test_add_data_replaces_previous():
    packet = FixedPacket()
    Packet.add_data(packet, b"first")
    Packet.add_data(packet, b"second")
    assert Packet.to_bytes(packet) == b"ABsecond"


def test_compile_is_repeatable():
    packet = FixedPacket()
    Packet.add_data(packet, b"xy")
    first = Packet.to_bytes(packet)
    assert first == b"ABxy"
    assert Packet.to_bytes(packet) == first


def test_add_data_too_long():
    packet = FixedPacket()
    with pytest.raises(ValueError):
        Packet.add_data(packet, bytes(MAX_EXT_DATA_LEN + 1))
    assert Packet.to_bytes(packet) == b"AB"


def test_compiled_packet_too_large():
    packet = FixedPacket()
    Packet.add_data(packet, bytes(MAX_PACKET_LEN - 2))
    with pytest.raises(ValueError):
        Packet.to_bytes(packet)


def test_largest_allowed_packet():
    packet = FixedPacket()
    Packet.add_data(packet, bytes(MAX_PACKET_LEN - 3))
    assert Packet.length(packet) == MAX_PACKET_LEN - 1


def test_hex_prints_dump(capsys):
    packet = FixedPacket()
    Packet.hex(packet)
    out = capsys.readouterr().out
    assert out.startswith("hexdump len: 2 \n")
    assert "0000:    41 42 " in out


def test_send_handle_writes_to_pcap(tmp_path):
    path = tmp_path / "out.pcap"
    packet = FixedPacket()
    Packet.add_data(packet, b"body")
    with Handle.open_offline(str(path), Mode.WRITE) as handle:
        assert Packet.send_handle(packet, handle) == len(b"ABbody")
    seen = []
    with Handle.open_offline(str(path), Mode.READ) as handle:
        handle.sniff(lambda p: seen.append(p) or True)
    assert seen == [b"ABbody"]