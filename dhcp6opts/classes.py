"""User class, vendor class and vendor-specific information options."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .options import Option, OptionCode, OptionGeneric, Options, ParseError, Reader


def _text(data: bytes) -> str:
    return bytes(data).decode("utf-8", "surrogateescape")


def _pack_classes(items) -> bytes:
    return b"".join(struct.pack(">H", len(item)) + bytes(item) for item in items)


@dataclass
class OptUserClass(Option):
    """User class option (RFC 3315)."""

    user_classes: list[bytes] = field(default_factory=list)
    code = OptionCode.USER_CLASS

    def to_bytes(self) -> bytes:
        return _pack_classes(self.user_classes)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptUserClass":
        if not data:
            raise ParseError("user class option must not be empty")
        reader = Reader(data)
        classes = []
        while reader.has(2):
            length = reader.read16()
            classes.append(reader.read_bytes(length))
        reader.finish()
        return cls(classes)

    def __str__(self) -> str:
        return "OptUserClass{userclass=[" + ", ".join(map(_text, self.user_classes)) + "]}"


@dataclass
class OptVendorClass(Option):
    """Vendor class option (RFC 3315)."""

    enterprise_number: int = 0
    data: list[bytes] = field(default_factory=list)
    code = OptionCode.VENDOR_CLASS

    def to_bytes(self) -> bytes:
        return struct.pack(">I", self.enterprise_number) + _pack_classes(self.data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptVendorClass":
        reader = Reader(data)
        number = reader.read32()
        items = []
        while reader.has(2):
            length = reader.read16()
            items.append(reader.read_bytes(length))
        if not items:
            raise ParseError("at least one vendor class data is required")
        reader.finish()
        return cls(number, items)

    def __str__(self) -> str:
        return (
            f"OptVendorClass{{enterprisenum={self.enterprise_number}, "
            f"data=[{', '.join(map(_text, self.data))}]}}"
        )


def _vendor_parse_option(code: int, data: bytes) -> Option:
    # Vendor sub-option codes overlap with standard codes, so keep them raw.
    return OptionGeneric(code, bytes(data))


@dataclass
class OptVendorOpts(Option):
    """Vendor-specific information option (RFC 3315 Section 22.17)."""

    enterprise_number: int = 0
    vendor_opts: Options = field(default_factory=Options)
    code = OptionCode.VENDOR_OPTS

    def __post_init__(self) -> None:
        if not isinstance(self.vendor_opts, Options):
            self.vendor_opts = Options(self.vendor_opts)

    def to_bytes(self) -> bytes:
        return struct.pack(">I", self.enterprise_number) + self.vendor_opts.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptVendorOpts":
        reader = Reader(data)
        number = reader.read32()
        opts = Options.from_bytes(reader.read_all(), _vendor_parse_option)
        reader.finish()
        return cls(number, opts)

    def __str__(self) -> str:
        return f"OptVendorOpts{{enterprisenum={self.enterprise_number}, vendorOpts={self.vendor_opts}}}"