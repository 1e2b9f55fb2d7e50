"""Identity association options: IA_NA, IA_TA, IA_PD, their addresses and prefixes, and the information refresh time."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Union

from .addresses import OptStatusCode
from .options import Option, OptionCode, Options, ParseError, Reader, format_duration

_IPV6_LEN = 16
_ZERO_ADDR = b"\x00" * _IPV6_LEN

AddressLike = Union[str, bytes, ipaddress.IPv4Address, ipaddress.IPv6Address, None]


def _seconds(value: timedelta) -> int:
    """Round a duration to whole seconds, half away from zero, as an unsigned 32-bit value."""
    micros = value // timedelta(microseconds=1)
    seconds, rest = divmod(abs(micros), 1_000_000)
    if rest * 2 >= 1_000_000:
        seconds += 1
    if micros < 0:
        seconds = -seconds
    return seconds & 0xFFFFFFFF


def _pack_duration(value: timedelta) -> bytes:
    return struct.pack(">I", _seconds(value))


def _read_duration(reader: Reader) -> timedelta:
    return timedelta(seconds=reader.read32())


def _to_ipv6(value: AddressLike) -> ipaddress.IPv6Address | None:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = ipaddress.ip_address(bytes(value))
    elif isinstance(value, str):
        value = ipaddress.ip_address(value)
    if isinstance(value, ipaddress.IPv4Address):
        return ipaddress.IPv6Address(b"\x00" * 10 + b"\xff\xff" + value.packed)
    return value


def _packed(addr: ipaddress.IPv6Address | None) -> bytes:
    return _ZERO_ADDR if addr is None else addr.packed


def _format_ip(addr: ipaddress.IPv6Address | None) -> str:
    if addr is None:
        return "<nil>"
    if addr.ipv4_mapped is not None:
        return str(addr.ipv4_mapped)
    return str(addr)


def _iaid(value) -> bytes:
    raw = bytes(value)
    if len(raw) != 4:
        raise ValueError(f"IAID must be 4 bytes, got {len(raw)}")
    return raw


def _format_iaid(iaid: bytes) -> str:
    return "[" + " ".join(map(str, iaid)) + "]"


def _status_of(options: Options) -> OptStatusCode | None:
    opt = options.get_one(OptionCode.STATUS_CODE)
    return opt if isinstance(opt, OptStatusCode) else None


class AddressOptions(Options):
    """Options valid inside an IA address option (RFC 8415 Appendix C)."""

    def status(self) -> OptStatusCode | None:
        """The status code carried with the address, if any."""
        return _status_of(self)

    def __str__(self) -> str:
        return "{" + super().__str__() + "}"


class IdentityOptions(Options):
    """Options valid inside IA_NA and IA_TA options (RFC 3315 Appendix B)."""

    def addresses(self) -> list["OptIAAddress"]:
        """All addresses assigned to the identity."""
        return [opt for opt in self.get(OptionCode.IA_ADDR) if isinstance(opt, OptIAAddress)]

    def one_address(self) -> "OptIAAddress | None":
        """The first address assigned to the identity, if any."""
        addrs = self.addresses()
        return addrs[0] if addrs else None

    def status(self) -> OptStatusCode | None:
        """The status code carried with the identity, if any."""
        return _status_of(self)

    def __str__(self) -> str:
        return "{" + super().__str__() + "}"


class PrefixOptions(Options):
    """Options valid inside an IA prefix option."""

    def status(self) -> OptStatusCode | None:
        """The status code carried with the prefix, if any."""
        return _status_of(self)

    def __str__(self) -> str:
        return "{" + super().__str__() + "}"


class PDOptions(Options):
    """Options valid inside an IA_PD option (RFC 3633)."""

    def prefixes(self) -> list["OptIAPrefix"]:
        """The prefixes delegated with this option."""
        return [opt for opt in self.get(OptionCode.IA_PREFIX) if isinstance(opt, OptIAPrefix)]

    def status(self) -> OptStatusCode | None:
        """The status code carried with the delegation, if any."""
        return _status_of(self)

    def __str__(self) -> str:
        return "{" + super().__str__() + "}"


@dataclass
class OptIAAddress(Option):
    """IA address option."""

    ipv6_addr: AddressLike = None
    preferred_lifetime: timedelta = timedelta(0)
    valid_lifetime: timedelta = timedelta(0)
    options: AddressOptions = field(default_factory=AddressOptions)
    code = OptionCode.IA_ADDR

    def __post_init__(self) -> None:
        self.ipv6_addr = _to_ipv6(self.ipv6_addr)
        if not isinstance(self.options, AddressOptions):
            self.options = AddressOptions(self.options)

    def to_bytes(self) -> bytes:
        return (
            _packed(self.ipv6_addr)
            + _pack_duration(self.preferred_lifetime)
            + _pack_duration(self.valid_lifetime)
            + self.options.to_bytes()
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptIAAddress":
        reader = Reader(data)
        addr = ipaddress.IPv6Address(reader.read_bytes(_IPV6_LEN))
        preferred = _read_duration(reader)
        valid = _read_duration(reader)
        options = AddressOptions.from_bytes(reader.read_all())
        reader.finish()
        return cls(addr, preferred, valid, options)

    def __str__(self) -> str:
        return (
            f"IAAddress: IP={_format_ip(self.ipv6_addr)} "
            f"PreferredLifetime={format_duration(self.preferred_lifetime)} "
            f"ValidLifetime={format_duration(self.valid_lifetime)} "
            f"Options={self.options}"
        )


@dataclass
class OptIAPrefix(Option):
    """IA prefix option (RFC 3633 Section 10); the prefix keeps its full address."""

    preferred_lifetime: timedelta = timedelta(0)
    valid_lifetime: timedelta = timedelta(0)
    prefix: ipaddress.IPv6Interface | str | None = None
    options: PrefixOptions = field(default_factory=PrefixOptions)
    code = OptionCode.IA_PREFIX

    def __post_init__(self) -> None:
        if self.prefix is not None and not isinstance(self.prefix, ipaddress.IPv6Interface):
            self.prefix = ipaddress.IPv6Interface(self.prefix)
        if not isinstance(self.options, PrefixOptions):
            self.options = PrefixOptions(self.options)

    def to_bytes(self) -> bytes:
        head = _pack_duration(self.preferred_lifetime) + _pack_duration(self.valid_lifetime)
        if self.prefix is None:
            head += bytes([0]) + _ZERO_ADDR
        else:
            head += bytes([self.prefix.network.prefixlen]) + self.prefix.ip.packed
        return head + self.options.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptIAPrefix":
        reader = Reader(data)
        preferred = _read_duration(reader)
        valid = _read_duration(reader)
        length = reader.read8()
        ip = ipaddress.IPv6Address(reader.read_bytes(_IPV6_LEN))
        if length > 128:
            raise ParseError(f"invalid IPv6 prefix length {length}")
        prefix = None if length == 0 else ipaddress.IPv6Interface((ip, length))
        options = PrefixOptions.from_bytes(reader.read_all())
        reader.finish()
        return cls(preferred, valid, prefix, options)

    def __str__(self) -> str:
        prefix = "<nil>" if self.prefix is None else str(self.prefix)
        return (
            f"IAPrefix: {{PreferredLifetime={format_duration(self.preferred_lifetime)}, "
            f"ValidLifetime={format_duration(self.valid_lifetime)}, "
            f"Prefix={prefix}, Options={self.options}}}"
        )


@dataclass
class OptIAPD(Option):
    """Identity association for prefix delegation (RFC 3633 Section 9)."""

    iaid: bytes = b"\x00\x00\x00\x00"
    t1: timedelta = timedelta(0)
    t2: timedelta = timedelta(0)
    options: PDOptions = field(default_factory=PDOptions)
    code = OptionCode.IAPD

    def __post_init__(self) -> None:
        self.iaid = _iaid(self.iaid)
        if not isinstance(self.options, PDOptions):
            self.options = PDOptions(self.options)

    def to_bytes(self) -> bytes:
        return (
            self.iaid
            + _pack_duration(self.t1)
            + _pack_duration(self.t2)
            + self.options.to_bytes()
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptIAPD":
        reader = Reader(data)
        iaid = reader.read_bytes(4)
        t1 = _read_duration(reader)
        t2 = _read_duration(reader)
        options = PDOptions.from_bytes(reader.read_all())
        reader.finish()
        return cls(iaid, t1, t2, options)

    def __str__(self) -> str:
        return (
            f"IAPD: {{IAID={_format_iaid(self.iaid)}, t1={format_duration(self.t1)}, "
            f"t2={format_duration(self.t2)}, Options=[{self.options}]}}"
        )


@dataclass
class OptIANA(Option):
    """Identity association for non-temporary addresses."""

    iaid: bytes = b"\x00\x00\x00\x00"
    t1: timedelta = timedelta(0)
    t2: timedelta = timedelta(0)
    options: IdentityOptions = field(default_factory=IdentityOptions)
    code = OptionCode.IANA

    def __post_init__(self) -> None:
        self.iaid = _iaid(self.iaid)
        if not isinstance(self.options, IdentityOptions):
            self.options = IdentityOptions(self.options)

    def to_bytes(self) -> bytes:
        return (
            self.iaid
            + _pack_duration(self.t1)
            + _pack_duration(self.t2)
            + self.options.to_bytes()
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptIANA":
        reader = Reader(data)
        iaid = reader.read_bytes(4)
        t1 = _read_duration(reader)
        t2 = _read_duration(reader)
        options = IdentityOptions.from_bytes(reader.read_all())
        reader.finish()
        return cls(iaid, t1, t2, options)

    def __str__(self) -> str:
        return (
            f"IANA: {{IAID={_format_iaid(self.iaid)}, t1={format_duration(self.t1)}, "
            f"t2={format_duration(self.t2)}, options={self.options}}}"
        )


@dataclass
class OptIATA(Option):
    """Identity association for temporary addresses (RFC 8415)."""

    iaid: bytes = b"\x00\x00\x00\x00"
    options: IdentityOptions = field(default_factory=IdentityOptions)
    code = OptionCode.IATA

    def __post_init__(self) -> None:
        self.iaid = _iaid(self.iaid)
        if not isinstance(self.options, IdentityOptions):
            self.options = IdentityOptions(self.options)

    def to_bytes(self) -> bytes:
        return self.iaid + self.options.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptIATA":
        reader = Reader(data)
        iaid = reader.read_bytes(4)
        options = IdentityOptions.from_bytes(reader.read_all())
        reader.finish()
        return cls(iaid, options)

    def __str__(self) -> str:
        return f"IATA: {{IAID={_format_iaid(self.iaid)}, options={self.options}}}"


@dataclass
class OptInformationRefreshTime(Option):
    """Information refresh time option (RFC 8415 Section 21.23)."""

    information_refresh_time: timedelta = timedelta(0)
    code = OptionCode.INFORMATION_REFRESH_TIME

    def to_bytes(self) -> bytes:
        return _pack_duration(self.information_refresh_time)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptInformationRefreshTime":
        reader = Reader(data)
        value = _read_duration(reader)
        reader.finish()
        return cls(value)

    def __str__(self) -> str:
        return f"InformationRefreshTime: {format_duration(self.information_refresh_time)}"