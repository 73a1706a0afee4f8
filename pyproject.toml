[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pgen"
version = "0.1.0"
description = "Raw packet I/O on Linux interfaces and pcap files, with address types, checksums and hex dumps"
requires-python = ">=3.10"
dependencies = []
keywords = ["packet", "pcap", "raw socket", "ethernet", "checksum", "hexdump"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pgen"]

[tool.pytest.ini_options]
addopts = "-ra"
