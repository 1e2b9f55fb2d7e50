"""4RD options: the container option and its mapping and non-mapping rules (RFC 7600)."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field

from .options import Option, OptionCode, Options, ParseError, Reader

_WKP_AUTHORIZED_MASK = 1 << 7
_HUB_AND_SPOKE_MASK = 1 << 7
_TRAFFIC_CLASS_MASK = 1 << 0

_IPV4_LEN = 4
_IPV6_LEN = 16


def _go_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class Opt4RD(Option):
    """4RD option: a container for 4RD rule options."""

    options: Options = field(default_factory=Options)
    code = OptionCode.FOUR_RD

    def __post_init__(self) -> None:
        if not isinstance(self.options, Options):
            self.options = Options(self.options)

    def to_bytes(self) -> bytes:
        return self.options.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Opt4RD":
        return cls(Options.from_bytes(data))

    def __str__(self) -> str:
        return f"Opt4RD{{{self.options}}}"


@dataclass
class Opt4RDMapRule(Option):
    """4RD mapping rule option (RFC 7600 Section 4.9).

    Both prefixes keep their full address alongside the prefix length.
    """

    prefix4: ipaddress.IPv4Interface | str | None = None
    prefix6: ipaddress.IPv6Interface | str | None = None
    ea_bits_length: int = 0
    wkp_authorized: bool = False
    code = OptionCode.FOUR_RD_MAP_RULE

    def __post_init__(self) -> None:
        if self.prefix4 is not None and not isinstance(self.prefix4, ipaddress.IPv4Interface):
            self.prefix4 = ipaddress.IPv4Interface(self.prefix4)
        if self.prefix6 is not None and not isinstance(self.prefix6, ipaddress.IPv6Interface):
            self.prefix6 = ipaddress.IPv6Interface(self.prefix6)

    def to_bytes(self) -> bytes:
        p4_len = 0 if self.prefix4 is None else self.prefix4.network.prefixlen
        p6_len = 0 if self.prefix6 is None else self.prefix6.network.prefixlen
        flags = _WKP_AUTHORIZED_MASK if self.wkp_authorized else 0
        ip4 = bytes(_IPV4_LEN) if self.prefix4 is None else self.prefix4.ip.packed
        ip6 = bytes(_IPV6_LEN) if self.prefix6 is None else self.prefix6.ip.packed
        return bytes([p4_len, p6_len, self.ea_bits_length, flags]) + ip4 + ip6

    @classmethod
    def from_bytes(cls, data: bytes) -> "Opt4RDMapRule":
        reader = Reader(data)
        p4_len = reader.read8()
        p6_len = reader.read8()
        ea_bits = reader.read8()
        wkp = bool(reader.read8() & _WKP_AUTHORIZED_MASK)
        ip4 = ipaddress.IPv4Address(reader.read_bytes(_IPV4_LEN))
        ip6 = ipaddress.IPv6Address(reader.read_bytes(_IPV6_LEN))
        reader.finish()
        if p4_len > 32:
            raise ParseError(f"invalid IPv4 prefix length {p4_len}")
        if p6_len > 128:
            raise ParseError(f"invalid IPv6 prefix length {p6_len}")
        return cls(
            ipaddress.IPv4Interface((ip4, p4_len)),
            ipaddress.IPv6Interface((ip6, p6_len)),
            ea_bits,
            wkp,
        )

    def __str__(self) -> str:
        p4 = "<nil>" if self.prefix4 is None else str(self.prefix4)
        p6 = "<nil>" if self.prefix6 is None else str(self.prefix6)
        return (
            f"Opt4RDMapRule{{Prefix4={p4}, Prefix6={p6}, EA-Bits={self.ea_bits_length}, "
            f"WKPAuthorized={_go_bool(self.wkp_authorized)}}}"
        )


@dataclass
class Opt4RDNonMapRule(Option):
    """4RD parameters other than mapping rules."""

    hub_and_spoke: bool = False
    traffic_class: int | None = None
    domain_pmtu: int = 0
    code = OptionCode.FOUR_RD_NON_MAP_RULE

    def to_bytes(self) -> bytes:
        flags = 0
        traffic_class = 0
        if self.hub_and_spoke:
            flags |= _HUB_AND_SPOKE_MASK
        if self.traffic_class is not None:
            flags |= _TRAFFIC_CLASS_MASK
            traffic_class = self.traffic_class
        return bytes([flags, traffic_class]) + self.domain_pmtu.to_bytes(2, "big")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Opt4RDNonMapRule":
        reader = Reader(data)
        flags = reader.read8()
        traffic_class = reader.read8()
        pmtu = reader.read16()
        reader.finish()
        return cls(
            bool(flags & _HUB_AND_SPOKE_MASK),
            traffic_class if flags & _TRAFFIC_CLASS_MASK else None,
            pmtu,
        )

    def __str__(self) -> str:
        t_class = "false" if self.traffic_class is None else str(self.traffic_class)
        return (
            f"Opt4RDNonMapRule{{HubAndSpoke={_go_bool(self.hub_and_spoke)}, "
            f"TrafficClass={t_class}, DomainPMTU={self.domain_pmtu}}}"
        )