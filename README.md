# pgen

pgen is a small library for raw network packet I/O. It sends and captures
frames on a network interface through raw sockets, writes and reads packets
in the classic pcap file format, and provides IPv4 and MAC address types,
Internet checksums and hex dumps.

Raw sockets and interface queries work on Linux only and need root
privileges or `CAP_NET_RAW`; on other systems they raise `PgenError` with
`ErrorCode.NOSUPPORT`. Reading and writing pcap files works anywhere.

## Installation

```
pip install .
```

## Addresses (`pgen.address`)

```python
from pgen.address import IPAddr, MacAddr

ip = IPAddr("192.168.0.1")
previous = ip.increment()   # returns the old value
print(previous, ip)         # 192.168.0.1 192.168.0.2
print(ip.get_octet(3))      # 2
ip.set_octet(0, 10)
print(int(ip), bytes(ip))

mac = MacAddr("02:00:00:00:00:01")
print(MacAddr.broadcast())  # ff:ff:ff:ff:ff:ff
print(MacAddr.from_bytes(b"\x02\x00\x00\x00\x00\x02"))
```

`IPAddr` accepts a dotted string, an integer, four bytes or another
`IPAddr`; `MacAddr` accepts a colon-separated string, six bytes, another
`MacAddr`, or an integer that fills every octet. Both compare octet by
octet, and `clear()` resets them to zero.

`IPAddr.from_device(ifname)`, `IPAddr.mask_from_device(ifname)` and
`MacAddr.from_device(ifname)` read the addresses of a local interface.
`MacAddr.vendor(path)` looks up the first three octets in a vendor list
file (lines of six hex digits, a tab and a name) and returns the name or
`"not-found"`.

## Pcap files (`pgen.handle`, `pgen.pcapfile`)

```python
from pgen.handle import Handle, Mode

with Handle.open_offline("out.pcap", Mode.WRITE) as handle:
    handle.send(b"\xff" * 14)

def show(packet: bytes) -> bool:
    print(len(packet))
    return True  # keep reading

with Handle.open_offline("out.pcap", Mode.READ) as handle:
    count = handle.sniff(show)
```

`sniff` hands each packet to the callback until it returns false or the
file runs out, and returns the number of packets handed over. A handle
opened for reading cannot send, and one opened for writing cannot sniff;
either raises `PgenError`.

For lower-level access, `pgen.pcapfile` provides `FileHeader` and
`RecordHeader` (with `pack()` and `unpack()`), `write_packet(fp, data,
timestamp=None)` and `read_packet(fp)`.

## Live interfaces

```python
from pgen.handle import Handle, send_l2, send_l3

with Handle.open("eth0") as handle:   # promiscuous link-layer socket
    handle.sniff(lambda packet: print(len(packet)) or True)

send_l2("eth0", frame_bytes)                    # a complete Ethernet frame
send_l3("eth0", ip_packet_bytes, "192.0.2.1")   # a complete IPv4 packet
```

`pgen.netutil` holds the building blocks: `open_raw_socket`,
`send_to_netif`, `recv_from_netif`, `get_ip_by_dev`, `get_mask_by_dev`,
`get_mac_by_dev`, and `port_to_service(port, ServiceProtocol.TCP)`, which
returns a service name or `"not-found"`.

## Building packets (`pgen.packet`)

`Packet` is an abstract base class. A subclass implements `compile()`,
which fills `self.data` from its fields and then calls
`compile_add_data()` to append any data set with `add_data()`:

```python
from pgen.packet import Packet

class Raw(Packet):
    def __init__(self, payload: bytes):
        super().__init__()
        self.payload = payload

    def compile(self) -> None:
        self.data = bytearray(self.payload)
        self.compile_add_data()

packet = Raw(b"\x01\x02")
packet.add_data(b"tail")
print(packet.length(), packet.to_bytes())
packet.hex()
```

`send_handle(handle)` compiles the packet and writes it to a `Handle`.

## Checksums and dumps

```python
from pgen.handle import checksum, checksum_tcp
from pgen.debug import hexdump, format_hexdump

print(hex(checksum(b"\x45\x00\x00\x1c")))
hexdump(b"hello, world")
```

`checksum_tcp(ip_packet)` computes the TCP checksum over the pseudo-header
and segment of an IPv4 packet. `checksum_udp` checks the packet's length
and always returns 0, the value that marks a UDP checksum as unused.
`debug_print(flag, text)` writes text only when the flag is set.

## Errors

Failures are raised as `pgen.errors.PgenError`. Its `code` is an
`ErrorCode` naming the step that failed (opening a socket, binding,
reading a file and so on) and its `errnum` holds the system error number.
`format_error` and `strerror` build the same messages.

## What pgen does not do

- It has no ready-made protocol classes: there are no Ethernet, ARP, IP,
  ICMP, TCP, UDP, DNS or DHCP packet types to fill in field by field.
  Packets are built as bytes or through your own `Packet` subclasses.
- It has no command-line tool; it is used as a library.
- It does not capture through BSD packet filter devices; live capture and
  sending work only on Linux.