import ipaddress

import pytest

from dhcp6opts.fourrd import Opt4RD, Opt4RDMapRule, Opt4RDNonMapRule
from dhcp6opts.options import OptionCode, ParseError


def test_non_map_rule_parse():
    data = bytearray([0x81, 0xAA, 0x05, 0xD4])
    opt = Opt4RDNonMapRule.from_bytes(bytes(data))
    assert opt.hub_and_spoke is True
    assert opt.traffic_class == 0xAA
    assert opt.domain_pmtu == 1492

    data[0] = 0x80
    opt = Opt4RDNonMapRule.from_bytes(bytes(data))
    assert opt.hub_and_spoke is True
    assert opt.traffic_class is None
    assert opt.domain_pmtu == 1492


def test_non_map_rule_to_bytes():
    opt = Opt4RDNonMapRule(hub_and_spoke=True, traffic_class=0xAA, domain_pmtu=1492)
    assert opt.to_bytes() == bytes([0x81, 0xAA, 0x05, 0xD4])
    opt.traffic_class = None
    assert opt.to_bytes() == bytes([0x80, 0x00, 0x05, 0xD4])


def test_non_map_rule_string():
    opt = Opt4RDNonMapRule(hub_and_spoke=True, traffic_class=120, domain_pmtu=9000)
    text = str(opt)
    assert "HubAndSpoke=true" in text
    assert "TrafficClass=120" in text
    assert "DomainPMTU=9000" in text


def test_non_map_rule_truncated():
    with pytest.raises(ParseError):
        Opt4RDNonMapRule.from_bytes(bytes([0x81, 0xAA, 0x05]))


def test_map_rule_parse():
    ip6 = ipaddress.IPv6Address("2001:db8::1234:5678:0:aabb")
    ip4 = ipaddress.IPv4Address("100.64.0.234")
    data = bytes([10, 64, 32, 0x80]) + ip4.packed + ip6.packed
    opt = Opt4RDMapRule.from_bytes(data)
    assert opt.prefix6 == ipaddress.IPv6Interface("2001:db8::1234:5678:0:aabb/64")
    assert opt.prefix4 == ipaddress.IPv4Interface("100.64.0.234/10")
    assert opt.ea_bits_length == 32
    assert opt.wkp_authorized is True


def test_map_rule_to_bytes():
    opt = Opt4RDMapRule(
        prefix4="100.64.0.238/24",
        prefix6="2001:db8::1234:5678:0:aabb/80",
        ea_bits_length=32,
        wkp_authorized=True,
    )
    expected = (
        bytes([24, 80, 32, 0x80])
        + ipaddress.IPv4Address("100.64.0.238").packed
        + ipaddress.IPv6Address("2001:db8::1234:5678:0:aabb").packed
    )
    assert opt.to_bytes() == expected


def test_map_rule_string():
    opt = Opt4RDMapRule(
        prefix4="100.64.0.238/24",
        prefix6="2001:db8::1234:5678:0:aabb/80",
        ea_bits_length=32,
        wkp_authorized=True,
    )
    text = str(opt)
    assert "WKPAuthorized=true" in text
    assert "Prefix6=2001:db8::1234:5678:0:aabb/80" in text
    assert "Prefix4=100.64.0.238/24" in text
    assert "EA-Bits=32" in text


def test_map_rule_truncated():
    with pytest.raises(ParseError):
        Opt4RDMapRule.from_bytes(bytes([24, 80, 32, 0x80, 100, 64, 0]))


def test_round_trip():
    opt = Opt4RD(
        [
            Opt4RDMapRule(
                prefix4="100.64.0.238/24",
                prefix6="2001:db8::1234:5678:0:aabb/80",
                ea_bits_length=32,
                wkp_authorized=True,
            ),
            Opt4RDNonMapRule(hub_and_spoke=True, traffic_class=0xAA, domain_pmtu=9000),
        ]
    )
    parsed = Opt4RD.from_bytes(opt.to_bytes())
    assert parsed == opt
    assert isinstance(parsed.options[0], Opt4RDMapRule)
    assert isinstance(parsed.options[1], Opt4RDNonMapRule)


def test_container_code_and_string():
    opt = Opt4RD([Opt4RDNonMapRule(domain_pmtu=9000)])
    assert opt.code == OptionCode.FOUR_RD
    assert str(opt).startswith("Opt4RD{")
    assert "DomainPMTU=9000" in str(opt)