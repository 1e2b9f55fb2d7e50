"""Option codes, the big-endian reader and option collections shared by all DHCPv6 options."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import timedelta
from enum import IntEnum
from typing import Callable, Iterable


class ParseError(ValueError):
    """Raised when bytes do not hold a valid serialized option."""


class OptionCode(IntEnum):
    """Known DHCPv6 option codes."""

    CLIENT_ID = 1
    SERVER_ID = 2
    IANA = 3
    IATA = 4
    IA_ADDR = 5
    ORO = 6
    PREFERENCE = 7
    ELAPSED_TIME = 8
    RELAY_MSG = 9
    AUTH = 11
    UNICAST = 12
    STATUS_CODE = 13
    RAPID_COMMIT = 14
    USER_CLASS = 15
    VENDOR_CLASS = 16
    VENDOR_OPTS = 17
    INTERFACE_ID = 18
    RECONF_MESSAGE = 19
    RECONF_ACCEPT = 20
    SIP_SERVERS_DOMAIN_NAME_LIST = 21
    SIP_SERVERS_IPV6_ADDRESS_LIST = 22
    DNS_RECURSIVE_NAME_SERVER = 23
    DOMAIN_SEARCH_LIST = 24
    IAPD = 25
    IA_PREFIX = 26
    INFORMATION_REFRESH_TIME = 32
    REMOTE_ID = 37
    FQDN = 39
    NTP_SERVER = 56
    BOOTFILE_URL = 59
    BOOTFILE_PARAM = 60
    CLIENT_ARCH_TYPE = 61
    NII = 62
    CLIENT_LINK_LAYER_ADDR = 79
    DHCPV4_MSG = 87
    DHCP4O_DHCP6_SERVER = 88
    FOUR_RD = 97
    FOUR_RD_MAP_RULE = 98
    FOUR_RD_NON_MAP_RULE = 99
    RELAY_PORT = 135


_CODE_NAMES = {
    OptionCode.CLIENT_ID: "Client Identifier",
    OptionCode.SERVER_ID: "Server Identifier",
    OptionCode.IANA: "IA_NA",
    OptionCode.IATA: "IA_TA",
    OptionCode.IA_ADDR: "IA IA Address",
    OptionCode.ORO: "Option Request",
    OptionCode.PREFERENCE: "Preference",
    OptionCode.ELAPSED_TIME: "Elapsed Time",
    OptionCode.RELAY_MSG: "Relay Message",
    OptionCode.AUTH: "Authentication",
    OptionCode.UNICAST: "Server Unicast",
    OptionCode.STATUS_CODE: "Status Code",
    OptionCode.RAPID_COMMIT: "Rapid Commit",
    OptionCode.USER_CLASS: "User Class",
    OptionCode.VENDOR_CLASS: "Vendor Class",
    OptionCode.VENDOR_OPTS: "Vendor-specific Information",
    OptionCode.INTERFACE_ID: "Interface-Id",
    OptionCode.RECONF_MESSAGE: "Reconfigure Message",
    OptionCode.RECONF_ACCEPT: "Reconfigure Accept",
    OptionCode.SIP_SERVERS_DOMAIN_NAME_LIST: "SIP Servers Domain Name List",
    OptionCode.SIP_SERVERS_IPV6_ADDRESS_LIST: "SIP Servers IPv6 Address List",
    OptionCode.DNS_RECURSIVE_NAME_SERVER: "DNS Recursive Name Server",
    OptionCode.DOMAIN_SEARCH_LIST: "Domain Search List",
    OptionCode.IAPD: "IA_PD",
    OptionCode.IA_PREFIX: "IA_Prefix",
    OptionCode.INFORMATION_REFRESH_TIME: "Information Refresh Time",
    OptionCode.REMOTE_ID: "Relay Agent Remote-ID",
    OptionCode.FQDN: "FQDN",
    OptionCode.NTP_SERVER: "NTP Server",
    OptionCode.BOOTFILE_URL: "Boot File URL",
    OptionCode.BOOTFILE_PARAM: "Boot File Parameters",
    OptionCode.CLIENT_ARCH_TYPE: "Client System Architecture Type",
    OptionCode.NII: "Client Network Interface Identifier",
    OptionCode.CLIENT_LINK_LAYER_ADDR: "Client Link-Layer Address",
    OptionCode.DHCPV4_MSG: "DHCPv4 Message",
    OptionCode.DHCP4O_DHCP6_SERVER: "DHCP 4o6 Server Address",
    OptionCode.FOUR_RD: "4RD",
    OptionCode.FOUR_RD_MAP_RULE: "4RD Map Rule",
    OptionCode.FOUR_RD_NON_MAP_RULE: "4RD Non-Map Rule",
    OptionCode.RELAY_PORT: "Relay Source Port",
}


def option_code_name(code: int) -> str:
    """Return the human-readable name of an option code."""
    try:
        return _CODE_NAMES[OptionCode(code)]
    except (ValueError, KeyError):
        return f"unknown ({int(code)})"


def _fraction(value: int, scale: int) -> str:
    whole, rest = divmod(value, scale)
    if not rest:
        return str(whole)
    digits = str(rest).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(value: timedelta) -> str:
    """Format a duration the compact way: 100ms, 50s, 1m10s, 1h0m0s."""
    ns = (value // timedelta(microseconds=1)) * 1000
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns == 0:
        return "0s"
    if ns < 1_000_000_000:
        if ns < 1_000:
            return f"{sign}{ns}ns"
        if ns < 1_000_000:
            return f"{sign}{_fraction(ns, 1_000)}µs"
        return f"{sign}{_fraction(ns, 1_000_000)}ms"
    total_seconds, frac = divmod(ns, 1_000_000_000)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    text = _fraction(seconds * 1_000_000_000 + frac, 1_000_000_000) + "s"
    if hours:
        text = f"{hours}h{minutes}m{text}"
    elif minutes:
        text = f"{minutes}m{text}"
    return sign + text


class Reader:
    """Sequential big-endian reader over a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def has(self, n: int) -> bool:
        """Whether at least n bytes are left."""
        return self.remaining >= n

    def _take(self, n: int) -> bytes:
        if n < 0 or n > self.remaining:
            raise ParseError(f"buffer too short: need {n} bytes, have {self.remaining}")
        chunk = self._data[self._pos : self._pos + n]
        self._pos += n
        return chunk

    def read8(self) -> int:
        return self._take(1)[0]

    def read16(self) -> int:
        return int.from_bytes(self._take(2), "big")

    def read32(self) -> int:
        return int.from_bytes(self._take(4), "big")

    def read_bytes(self, n: int) -> bytes:
        return self._take(n)

    def read_all(self) -> bytes:
        return self._take(self.remaining)

    def finish(self) -> None:
        """Raise if any bytes were left unread."""
        if self.remaining:
            raise ParseError(f"{self.remaining} unparsed bytes left in buffer")


class Option(ABC):
    """Base of every DHCPv6 option; each has a ``code`` and a byte serialization."""

    code: int

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Serialize the option payload, without code and length."""


OptionParser = Callable[[int, bytes], Option]


@dataclass
class OptionGeneric(Option):
    """An option kept as its raw code and payload."""

    code: int
    data: bytes = b""

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    def __str__(self) -> str:
        return f"{option_code_name(self.code)} -> [{' '.join(map(str, self.data))}]"


class Options(list):
    """An ordered collection of options."""

    def get(self, code: int) -> list[Option]:
        return [opt for opt in self if opt.code == code]

    def get_one(self, code: int) -> Option | None:
        return next((opt for opt in self if opt.code == code), None)

    def add(self, option: Option) -> None:
        self.append(option)

    def delete(self, code: int) -> None:
        self[:] = [opt for opt in self if opt.code != code]

    def update(self, option: Option) -> None:
        """Replace the first option with the same code, or append it."""
        for idx, opt in enumerate(self):
            if opt.code == option.code:
                self[idx] = option
                return
        self.append(option)

    def to_bytes(self) -> bytes:
        parts = []
        for opt in self:
            value = opt.to_bytes()
            parts.append(struct.pack(">HH", opt.code, len(value)))
            parts.append(value)
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, data: bytes, parser: OptionParser | None = None) -> "Options":
        """Parse a sequence of code/length/value options."""
        if parser is None:
            from .parsing import parse_option

            parser = parse_option
        opts = cls()
        if not data:
            return opts
        reader = Reader(data)
        while reader.has(4):
            code = reader.read16()
            length = reader.read16()
            opts.append(parser(code, reader.read_bytes(length)))
        reader.finish()
        return opts

    def __str__(self) -> str:
        return "[" + " ".join(str(opt) for opt in self) + "]"


class OptionCodes(list):
    """A list of option codes without duplicates added."""

    def add(self, code: int) -> None:
        if code not in self:
            self.append(code)

    def to_bytes(self) -> bytes:
        return b"".join(struct.pack(">H", code) for code in self)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptionCodes":
        codes = cls()
        reader = Reader(data)
        while reader.has(2):
            codes.add(reader.read16())
        reader.finish()
        return codes

    def __str__(self) -> str:
        return ", ".join(option_code_name(code) for code in self)


@dataclass
class OptRequestedOption(Option):
    """The Option Request option (RFC 3315 Section 22.7)."""

    option_codes: Iterable[int] = field(default_factory=OptionCodes)
    code = OptionCode.ORO

    def __post_init__(self) -> None:
        if not isinstance(self.option_codes, OptionCodes):
            self.option_codes = OptionCodes(self.option_codes)

    def to_bytes(self) -> bytes:
        return self.option_codes.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptRequestedOption":
        return cls(OptionCodes.from_bytes(data))

    def __str__(self) -> str:
        return f"RequestedOptions: {self.option_codes}"