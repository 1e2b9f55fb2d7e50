"""Address-carrying DHCPv6 options: DNS, DHCP 4o6 servers, client link-layer address, status code, NII."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

from .options import Option, OptionCode, Reader

IPv6Like = Union[str, bytes, ipaddress.IPv4Address, ipaddress.IPv6Address]

_IPV6_LEN = 16

_HW_TYPE_NAMES = {
    1: "Ethernet",
    2: "Experimental Ethernet",
    6: "IEEE 802",
    7: "ARCNET",
    15: "Frame Relay",
    16: "ATM",
    18: "Fibre Channel",
    20: "Serial Line",
    32: "InfiniBand",
}

_STATUS_NAMES = {
    0: "Success",
    1: "UnspecFail",
    2: "NoAddrsAvail",
    3: "NoBinding",
    4: "NotOnLink",
    5: "UseMulticast",
    6: "NoPrefixAvail",
    7: "UnknownQueryType",
    8: "MalformedQuery",
    9: "NotConfigured",
    10: "NotAllowed",
    11: "QueryTerminated",
    12: "DataMissing",
    13: "CatchUpComplete",
    14: "NotSupported",
    15: "TLSConnectionRefused",
    16: "AddressInUse",
    17: "ConfigurationConflict",
    18: "MissingBindingInformation",
    19: "OutdatedBindingInformation",
    20: "ServerShuttingDown",
    21: "DNSUpdateNotSupported",
    22: "ExcessiveTimeSkew",
}


def _hw_type_name(value: int) -> str:
    return _HW_TYPE_NAMES.get(value, f"unknown ({value})")


def _status_name(value: int) -> str:
    return _STATUS_NAMES.get(value, "unknown")


def _to_address(value: IPv6Like) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return ipaddress.ip_address(bytes(value))
    return ipaddress.ip_address(value)


def _to16(addr: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bytes:
    if isinstance(addr, ipaddress.IPv4Address):
        return b"\x00" * 10 + b"\xff\xff" + addr.packed
    return addr.packed


def _format_address(addr: ipaddress.IPv4Address | ipaddress.IPv6Address) -> str:
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return str(addr.ipv4_mapped)
    return str(addr)


def _format_addresses(addrs) -> str:
    return "[" + " ".join(_format_address(a) for a in addrs) + "]"


def _read_ipv6_list(data: bytes) -> list[ipaddress.IPv6Address]:
    reader = Reader(data)
    addrs = []
    while reader.has(_IPV6_LEN):
        addrs.append(ipaddress.IPv6Address(reader.read_bytes(_IPV6_LEN)))
    reader.finish()
    return addrs


@dataclass
class OptDNS(Option):
    """DNS recursive name server option (RFC 3646)."""

    name_servers: list = field(default_factory=list)
    code = OptionCode.DNS_RECURSIVE_NAME_SERVER

    def __post_init__(self) -> None:
        self.name_servers = [_to_address(a) for a in self.name_servers]

    def to_bytes(self) -> bytes:
        return b"".join(_to16(a) for a in self.name_servers)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptDNS":
        return cls(_read_ipv6_list(data))

    def __str__(self) -> str:
        return f"DNS: {_format_addresses(self.name_servers)}"


@dataclass
class OptDHCP4oDHCP6Server(Option):
    """DHCP 4o6 server address option (RFC 7341)."""

    dhcp4o_dhcp6_servers: list = field(default_factory=list)
    code = OptionCode.DHCP4O_DHCP6_SERVER

    def __post_init__(self) -> None:
        self.dhcp4o_dhcp6_servers = [_to_address(a) for a in self.dhcp4o_dhcp6_servers]

    def to_bytes(self) -> bytes:
        return b"".join(_to16(a) for a in self.dhcp4o_dhcp6_servers)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptDHCP4oDHCP6Server":
        return cls(_read_ipv6_list(data))

    def __str__(self) -> str:
        return f"OptDHCP4oDHCP6Server{{4o6-servers={_format_addresses(self.dhcp4o_dhcp6_servers)}}}"


@dataclass
class OptClientLinkLayerAddress(Option):
    """Client link-layer address option (RFC 6939)."""

    link_layer_type: int = 0
    link_layer_address: bytes = b""
    code = OptionCode.CLIENT_LINK_LAYER_ADDR

    def to_bytes(self) -> bytes:
        return struct.pack(">H", self.link_layer_type) + bytes(self.link_layer_address)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptClientLinkLayerAddress":
        reader = Reader(data)
        hw_type = reader.read16()
        address = reader.read_all()
        reader.finish()
        return cls(hw_type, address)

    def __str__(self) -> str:
        mac = ":".join(f"{b:02x}" for b in self.link_layer_address)
        return (
            f"ClientLinkLayerAddress: Type={_hw_type_name(self.link_layer_type)} "
            f"LinkLayerAddress={mac}"
        )


@dataclass
class OptStatusCode(Option):
    """Status code option (RFC 3315)."""

    status_code: int = 0
    status_message: str = ""
    code = OptionCode.STATUS_CODE

    def to_bytes(self) -> bytes:
        return struct.pack(">H", self.status_code) + self.status_message.encode(
            "utf-8", "surrogateescape"
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptStatusCode":
        reader = Reader(data)
        status = reader.read16()
        message = reader.read_all().decode("utf-8", "surrogateescape")
        reader.finish()
        return cls(status, message)

    def __str__(self) -> str:
        return (
            f"StatusCode: Code: {_status_name(self.status_code)} ({self.status_code}); "
            f"Message: {self.status_message}"
        )


class NetworkInterfaceType(IntEnum):
    """NIC type as defined by RFC 4578 Section 2.2."""

    LANDESK_NOPXE = 0
    PXE_GEN_I = 1
    PXE_GEN_II = 2
    UNDI_NOEFI = 3
    UNDI_EFI_GEN_I = 4
    UNDI_EFI_GEN_II = 5

    def __str__(self) -> str:
        return _NII_NAMES[self]


_NII_NAMES = {
    NetworkInterfaceType.LANDESK_NOPXE: "LANDesk service agent boot ROMs. No PXE",
    NetworkInterfaceType.PXE_GEN_I: "First gen. PXE boot ROMs",
    NetworkInterfaceType.PXE_GEN_II: "Second gen. PXE boot ROMs",
    NetworkInterfaceType.UNDI_NOEFI: "UNDI 32/64 bit. UEFI drivers, no UEFI runtime",
    NetworkInterfaceType.UNDI_EFI_GEN_I: "UNDI 32/64 bit. UEFI runtime 1st gen",
    NetworkInterfaceType.UNDI_EFI_GEN_II: "UNDI 32/64 bit. UEFI runtime 2nd gen",
}


def _nii_name(value: int) -> str:
    try:
        return str(NetworkInterfaceType(value))
    except ValueError:
        return f"NetworkInterfaceType({int(value)}, unknown)"


@dataclass
class OptNetworkInterfaceID(Option):
    """Client network interface identifier option (RFC 4578, RFC 5970)."""

    typ: int = 0
    major: int = 0
    minor: int = 0
    code = OptionCode.NII

    def to_bytes(self) -> bytes:
        return bytes([int(self.typ), self.major, self.minor])

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptNetworkInterfaceID":
        reader = Reader(data)
        typ = reader.read8()
        major = reader.read8()
        minor = reader.read8()
        reader.finish()
        return cls(typ, major, minor)

    def __str__(self) -> str:
        return f"NetworkInterfaceID: {_nii_name(self.typ)} (Revision {self.major}.{self.minor})"