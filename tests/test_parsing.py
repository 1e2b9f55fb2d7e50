import ipaddress
from datetime import timedelta

import pytest

from dhcp6opts.addresses import (
    OptClientLinkLayerAddress,
    OptDHCP4oDHCP6Server,
    OptDNS,
    OptNetworkInterfaceID,
    OptStatusCode,
)
from dhcp6opts.basic import (
    OptBootFileParam,
    OptBootFileURL,
    OptElapsedTime,
    OptInterfaceID,
    OptRelayPort,
    OptRemoteID,
)
from dhcp6opts.classes import OptUserClass, OptVendorClass, OptVendorOpts
from dhcp6opts.fourrd import Opt4RD, Opt4RDMapRule, Opt4RDNonMapRule
from dhcp6opts.ia import (
    OptIAAddress,
    OptIANA,
    OptIAPD,
    OptIAPrefix,
    OptIATA,
    OptInformationRefreshTime,
)
from dhcp6opts.options import (
    OptionCode,
    OptionGeneric,
    Options,
    OptRequestedOption,
    ParseError,
)
from dhcp6opts.parsing import parse_option

_ADDR = OptIAAddress(
    "2001:db8::5", timedelta(seconds=3600), timedelta(seconds=5200)
)
_PREFIX = OptIAPrefix(
    timedelta(seconds=3600), timedelta(seconds=5200), "2001:db8::/48"
)

SAMPLES = [
    OptRequestedOption([1, 2]),
    OptBootFileURL("http://example.com/boot"),
    OptBootFileParam(["root=/dev/sda1", "", "rw"]),
    OptElapsedTime(timedelta(milliseconds=100)),
    OptInterfaceID(b"eth0"),
    OptRelayPort(547),
    OptRemoteID(1234, b"remote"),
    OptDNS(["2001:db8::1", "2001:db8::2"]),
    OptDHCP4oDHCP6Server(["2001:db8::3"]),
    OptClientLinkLayerAddress(1, bytes([0x00, 0x11, 0x22, 0x33, 0x44, 0x55])),
    OptStatusCode(5, "use multicast"),
    OptNetworkInterfaceID(1, 3, 20),
    OptUserClass([b"linuxboot", b"test"]),
    OptVendorClass(42, [b"HTTPClient"]),
    OptVendorOpts(42, [OptionGeneric(1, b"vendor data")]),
    _ADDR,
    _PREFIX,
    OptIANA(b"\x01\x02\x03\x04", timedelta(seconds=1), timedelta(seconds=2), [_ADDR]),
    OptIATA(b"\x01\x02\x03\x04", [_ADDR]),
    OptIAPD(b"\x01\x02\x03\x04", timedelta(seconds=1), timedelta(seconds=2), [_PREFIX]),
    OptInformationRefreshTime(timedelta(hours=1)),
    Opt4RDNonMapRule(True, 0xAA, 1492),
    Opt4RDMapRule("100.64.0.238/24", "2001:db8::1234:5678:0:aabb/80", 32, True),
    Opt4RD([Opt4RDNonMapRule(False, None, 9000)]),
]


@pytest.mark.parametrize("opt", SAMPLES, ids=lambda o: type(o).__name__)
def test_round_trip_through_parse_option(opt):
    parsed = parse_option(opt.code, opt.to_bytes())
    assert type(parsed) is type(opt)
    assert parsed == opt
    assert parsed.to_bytes() == opt.to_bytes()


def test_elapsed_time_value():
    parsed = parse_option(OptionCode.ELAPSED_TIME, b"\x00\x01")
    assert isinstance(parsed, OptElapsedTime)
    assert parsed.elapsed_time == timedelta(milliseconds=10)


def test_unknown_code_is_generic():
    parsed = parse_option(65000, b"abc")
    assert parsed == OptionGeneric(65000, b"abc")
    assert parsed.to_bytes() == b"abc"


def test_malformed_payload_raises():
    with pytest.raises(ParseError):
        parse_option(OptionCode.ELAPSED_TIME, b"\xaa")
    with pytest.raises(ParseError):
        parse_option(OptionCode.USER_CLASS, b"")


def test_options_from_bytes_uses_parse_option():
    opts = Options(
        [
            OptElapsedTime(timedelta(milliseconds=10)),
            OptDNS([ipaddress.IPv6Address("2001:db8::1")]),
            OptionGeneric(65000, b"x"),
        ]
    )
    parsed = Options.from_bytes(opts.to_bytes())
    assert parsed == opts
    assert isinstance(parsed[1], OptDNS)


def test_options_wire_format():
    data = Options([OptElapsedTime(timedelta(milliseconds=10))]).to_bytes()
    assert data == bytes([0, 8, 0, 2, 0x00, 0x01])
    parsed = Options.from_bytes(data)
    assert parsed.get_one(OptionCode.ELAPSED_TIME) == OptElapsedTime(
        timedelta(milliseconds=10)
    )