import pytest

from pgen.address import IPAddr, MacAddr
from pgen.errors import ErrorCode, PgenError


def test_ip_string_round_trip():
    assert str(IPAddr("192.168.0.6")) == "192.168.0.6"


def test_ip_default_is_zero():
    assert int(IPAddr()) == 0
    assert IPAddr() == IPAddr(0)


def test_ip_octets_follow_dotted_order():
    addr = IPAddr("10.20.30.40")
    assert [addr.get_octet(i) for i in range(4)] == [10, 20, 30, 40]


def test_ip_bytes_and_int_round_trip():
    addr = IPAddr("172.16.5.9")
    assert IPAddr(bytes(addr)) == addr
    assert IPAddr(int(addr)) == addr


def test_ip_copy_is_independent():
    original = IPAddr("10.0.0.1")
    copy = IPAddr(original)
    copy.set_octet(3, 7)
    assert original == IPAddr("10.0.0.1")
    assert copy.get_octet(3) == 7


def test_ip_set_octet_truncates_to_byte():
    addr = IPAddr("10.0.0.1")
    addr.set_octet(2, 0x1FF)
    assert addr.get_octet(2) == 0xFF


@pytest.mark.parametrize("index", [4, -1])
def test_ip_octet_index_errors(index):
    addr = IPAddr("10.0.0.1")
    with pytest.raises(IndexError):
        addr.get_octet(index)
    with pytest.raises(IndexError):
        addr.set_octet(index, 1)


@pytest.mark.parametrize("text", ["300.1.1.1", "not-an-ip", "1.2.3"])
def test_ip_invalid_string(text):
    with pytest.raises(ValueError):
        IPAddr(text)


def test_ip_clear():
    addr = IPAddr("1.2.3.4")
    addr.clear()
    assert addr == IPAddr()


def test_ip_increment_returns_previous_value():
    addr = IPAddr("10.0.0.1")
    previous = addr.increment()
    assert previous == IPAddr("10.0.0.1")
    assert addr > previous
    assert addr.get_octet(3) == previous.get_octet(3) + 1


def test_ip_increment_skips_full_octets_without_carry():
    addr = IPAddr("10.0.0.255")
    addr.increment()
    assert addr.get_octet(3) == 255
    assert addr.get_octet(2) == 1


def test_ip_increment_at_max_is_unchanged():
    addr = IPAddr("255.255.255.255")
    addr.increment()
    assert addr == IPAddr("255.255.255.255")


def test_ip_ordering_is_octet_wise():
    low = IPAddr("9.255.255.255")
    high = IPAddr("10.0.0.0")
    assert low < high
    assert high > low
    assert low <= high
    assert sorted([high, low]) == [low, high]


def test_ip_from_unknown_device_raises():
    with pytest.raises(PgenError):
        IPAddr.from_device("nosuchdev0")
    with pytest.raises(PgenError):
        IPAddr.mask_from_device("nosuchdev0")


def test_mac_string_is_lower_case_hex():
    assert str(MacAddr("AA:BB:CC:DD:EE:0F")) == "aa:bb:cc:dd:ee:0f"


def test_mac_broadcast():
    assert str(MacAddr.broadcast()) == "ff:ff:ff:ff:ff:ff"


def test_mac_from_int_fills_all_octets():
    mac = MacAddr(0x12)
    assert {mac.get_octet(i) for i in range(6)} == {0x12}


def test_mac_bytes_round_trip():
    data = bytes([0x02, 0x00, 0x5E, 0x10, 0x20, 0x30])
    mac = MacAddr.from_bytes(data)
    assert bytes(mac) == data
    assert MacAddr(str(mac)) == mac


def test_mac_from_short_bytes_fails():
    with pytest.raises(ValueError):
        MacAddr.from_bytes(b"\x01\x02")


def test_mac_invalid_string():
    with pytest.raises(ValueError):
        MacAddr("zz:00:00:00:00:00")


def test_mac_octets_and_clear():
    mac = MacAddr("02:00:00:00:00:01")
    mac.set_octet(5, 0x42)
    assert mac.get_octet(5) == 0x42
    with pytest.raises(IndexError):
        mac.get_octet(6)
    with pytest.raises(IndexError):
        mac.set_octet(6, 1)
    mac.clear()
    assert mac == MacAddr()


def test_mac_ordering():
    a = MacAddr("02:00:00:00:00:01")
    b = MacAddr("02:00:00:00:01:00")
    assert a < b
    assert b >= a
    assert a != b
    assert MacAddr(a) == a


def test_mac_vendor_lookup(tmp_path):
    listing = tmp_path / "mac_code.list"
    listing.write_text("00AABB\tOtherVendor\n0A1B2C\tMadeUpCorp\n")
    mac = MacAddr("0a:1b:2c:00:00:01")
    assert mac.vendor(str(listing)) == "MadeUpCorp"


def test_mac_vendor_not_found(tmp_path):
    listing = tmp_path / "mac_code.list"
    listing.write_text("00AABB\tOtherVendor\n")
    assert MacAddr("02:00:00:00:00:01").vendor(str(listing)) == "not-found"


def test_mac_vendor_missing_file(tmp_path):
    with pytest.raises(PgenError) as info:
        MacAddr().vendor(str(tmp_path / "absent.list"))
    assert info.value.code == ErrorCode.FOPEN


def test_mac_from_unknown_device_raises():
    with pytest.raises(PgenError):
        MacAddr.from_device("nosuchdev0")