"""Raw packet I/O on interfaces and pcap files, addresses, checksums and hex dumps."""

__version__ = "0.1.0"