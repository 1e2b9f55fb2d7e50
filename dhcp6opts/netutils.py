"""Interface address lookup and MAC extraction from EUI-64 IPv6 addresses."""

from __future__ import annotations

import ipaddress
import socket
from typing import Callable, Union

import psutil

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _interface_addresses(ifname: str) -> list[IPAddress]:
    try:
        entries = psutil.net_if_addrs()[ifname]
    except KeyError:
        raise OSError(f"no such network interface {ifname}") from None
    addrs: list[IPAddress] = []
    for entry in entries:
        if entry.family not in (socket.AF_INET, socket.AF_INET6):
            continue
        try:
            addrs.append(ipaddress.ip_address(entry.address.split("%", 1)[0]))
        except ValueError:
            continue
    return addrs


def _is_ipv6(ip: IPAddress) -> bool:
    return isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is None


def get_matching_addr(ifname: str, matches: Callable[[IPAddress], bool]) -> IPAddress:
    """Return the first address of the interface accepted by ``matches``.

    Raises ``OSError`` for an unknown interface and ``LookupError`` when
    no address matches.
    """
    for ip in _interface_addresses(ifname):
        if matches(ip):
            return ip
    raise LookupError(f"no matching address found for interface {ifname}")


def get_link_local_addr(ifname: str) -> IPAddress:
    """Return a link-local IPv6 address of the interface."""
    return get_matching_addr(ifname, lambda ip: _is_ipv6(ip) and ip.is_link_local)


def _is_global_unicast(ip: IPAddress) -> bool:
    return not (ip.is_unspecified or ip.is_loopback or ip.is_multicast or ip.is_link_local)


def get_global_addr(ifname: str) -> IPAddress:
    """Return a global unicast IPv6 address of the interface."""
    return get_matching_addr(ifname, lambda ip: _is_ipv6(ip) and _is_global_unicast(ip))


def _to16(ip) -> bytes:
    if isinstance(ip, (bytes, bytearray)):
        raw = bytes(ip)
        if len(raw) == 16:
            return raw
        if len(raw) == 4:
            return bytes(10) + b"\xff\xff" + raw
        raise ValueError("IP address shorter than 16 bytes")
    if isinstance(ip, str):
        ip = ipaddress.ip_address(ip)
    if isinstance(ip, ipaddress.IPv4Address):
        return bytes(10) + b"\xff\xff" + ip.packed
    return ip.packed


def mac_from_eui64(ip) -> bytes:
    """Extract the MAC address embedded in an EUI-64 IPv6 address.

    Only EUI-48 derived addresses (``ff:fe`` in the middle) qualify;
    others raise ``ValueError``.
    """
    raw = _to16(ip)
    if raw[11] != 0xFF or raw[12] != 0xFE:
        raise ValueError("IP address is not an EUI48 address")
    mac = bytearray(raw[8:11] + raw[13:16])
    mac[0] ^= 0x02
    return bytes(mac)