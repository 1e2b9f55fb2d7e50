"""Simple DHCPv6 options: boot file URL and parameters, elapsed time, interface id, relay port, remote id."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from datetime import timedelta

from .options import Option, OptionCode, Reader, format_duration


def _encode(text: str) -> bytes:
    return text.encode("utf-8", "surrogateescape")


def _decode(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


def _byte_list(data: bytes) -> str:
    return "[" + " ".join(map(str, data)) + "]"


@dataclass
class OptBootFileURL(Option):
    """Boot file URL option (RFC 5970)."""

    url: str = ""
    code = OptionCode.BOOTFILE_URL

    def to_bytes(self) -> bytes:
        return _encode(self.url)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptBootFileURL":
        return cls(_decode(bytes(data)))

    def __str__(self) -> str:
        return f"BootFileURL: {self.url}"


@dataclass
class OptBootFileParam(Option):
    """Boot file parameters option (RFC 5970 Section 3.2)."""

    params: list[str] = field(default_factory=list)
    code = OptionCode.BOOTFILE_PARAM

    def to_bytes(self) -> bytes:
        parts = []
        for param in self.params:
            raw = _encode(param)
            if len(raw) >= 1 << 16:
                continue
            parts.append(struct.pack(">H", len(raw)))
            parts.append(raw)
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptBootFileParam":
        reader = Reader(data)
        params = []
        while reader.has(2):
            length = reader.read16()
            params.append(_decode(reader.read_bytes(length)))
        reader.finish()
        return cls(params)

    def __str__(self) -> str:
        return "BootFileParam: [" + " ".join(self.params) + "]"


@dataclass
class OptElapsedTime(Option):
    """Elapsed time option (RFC 3315 Section 22.9), in hundredths of a second."""

    elapsed_time: timedelta = timedelta(0)
    code = OptionCode.ELAPSED_TIME

    def to_bytes(self) -> bytes:
        micros = self.elapsed_time // timedelta(microseconds=1)
        hundredths, rest = divmod(abs(micros), 10_000)
        if rest * 2 >= 10_000:
            hundredths += 1
        if micros < 0:
            hundredths = -hundredths
        return struct.pack(">H", hundredths & 0xFFFF)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptElapsedTime":
        reader = Reader(data)
        value = reader.read16()
        reader.finish()
        return cls(timedelta(milliseconds=value * 10))

    def __str__(self) -> str:
        return f"ElapsedTime: {format_duration(self.elapsed_time)}"


@dataclass
class OptInterfaceID(Option):
    """Interface id option (RFC 3315 Section 22.18)."""

    id: bytes = b""
    code = OptionCode.INTERFACE_ID

    def to_bytes(self) -> bytes:
        return bytes(self.id)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptInterfaceID":
        return cls(bytes(data))

    def __str__(self) -> str:
        return f"InterfaceID: {_byte_list(self.id)}"


@dataclass
class OptRelayPort(Option):
    """Relay source port option (RFC 8357)."""

    downstream_source_port: int = 0
    code = OptionCode.RELAY_PORT

    def to_bytes(self) -> bytes:
        return struct.pack(">H", self.downstream_source_port)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptRelayPort":
        reader = Reader(data)
        port = reader.read16()
        reader.finish()
        return cls(port)

    def __str__(self) -> str:
        return f"RelayPort: {self.downstream_source_port}"


@dataclass
class OptRemoteID(Option):
    """Relay agent remote id option (RFC 4649)."""

    enterprise_number: int = 0
    remote_id: bytes = b""
    code = OptionCode.REMOTE_ID

    def to_bytes(self) -> bytes:
        return struct.pack(">I", self.enterprise_number) + bytes(self.remote_id)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OptRemoteID":
        reader = Reader(data)
        number = reader.read32()
        remote_id = reader.read_all()
        reader.finish()
        return cls(number, remote_id)

    def __str__(self) -> str:
        return (
            f"RemoteID: EnterpriseNumber {self.enterprise_number} "
            f"RemoteID {_byte_list(self.remote_id)}"
        )