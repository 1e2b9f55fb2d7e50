# dhcp6opts

A library for reading and writing DHCPv6 options in their wire format.

Each option is a Python dataclass. It has a `code` and a `to_bytes()` method
that returns the option's value bytes, without the code and length header. A
`from_bytes()` class method rebuilds the object from those bytes. When the
data is malformed, truncated or carries trailing bytes, `ParseError` (a
subclass of `ValueError`) is raised.

## Installation

```
pip install dhcp6opts
```

## Modules and options

- `dhcp6opts.options`: `OptionCode`, `option_code_name`, `format_duration`,
  the big-endian `Reader`, `ParseError`, the `Option` base class, `Options`,
  `OptionGeneric`, `OptionCodes` and `OptRequestedOption`
- `dhcp6opts.basic`: `OptBootFileURL`, `OptBootFileParam`, `OptElapsedTime`,
  `OptInterfaceID`, `OptRelayPort`, `OptRemoteID`
- `dhcp6opts.addresses`: `OptDNS`, `OptDHCP4oDHCP6Server`,
  `OptClientLinkLayerAddress`, `OptStatusCode`, `NetworkInterfaceType`,
  `OptNetworkInterfaceID`
- `dhcp6opts.classes`: `OptUserClass`, `OptVendorClass`, `OptVendorOpts`
- `dhcp6opts.ia`: `OptIANA`, `OptIATA`, `OptIAAddress`, `OptIAPD`,
  `OptIAPrefix`, `OptInformationRefreshTime`, and the option collections
  `IdentityOptions`, `AddressOptions`, `PrefixOptions`, `PDOptions`
- `dhcp6opts.fourrd`: `Opt4RD`, `Opt4RDMapRule`, `Opt4RDNonMapRule`
- `dhcp6opts.parsing`: `parse_option(code, data)`, which picks the right
  type for a code
- `dhcp6opts.netutils`: interface address lookup and EUI-64 MAC extraction

## Usage

Decode one option from its code and value bytes:

```python
from dhcp6opts.options import OptionCode
from dhcp6opts.parsing import parse_option

opt = parse_option(OptionCode.ELAPSED_TIME, b"\x00\x0a")
print(opt)             # ElapsedTime: 100ms
print(opt.to_bytes())  # b'\x00\n'
```

Decode a whole run of options and look some of them up. Without a parser
argument, `Options.from_bytes` uses `parse_option`:

```python
from dhcp6opts.options import Options, OptionCode

opts = Options.from_bytes(raw_bytes)
status = opts.get_one(OptionCode.STATUS_CODE)
opts.delete(OptionCode.IA_ADDR)
wire = opts.to_bytes()
```

Build an identity association with one address in it:

```python
import ipaddress
from datetime import timedelta
from dhcp6opts.ia import OptIANA, OptIAAddress

addr = OptIAAddress(
    ipv6_addr=ipaddress.IPv6Address("2001:db8::1"),
    preferred_lifetime=timedelta(hours=1),
    valid_lifetime=timedelta(hours=2),
)
iana = OptIANA(iaid=b"\x01\x02\x03\x04")
iana.options.add(addr)
print(iana.options.one_address())
```

Lifetimes and T1/T2 are `timedelta` values written as whole seconds; the
elapsed time is written in hundredths of a second.

## Interface addresses

`dhcp6opts.netutils` reads local interface addresses through `psutil`:

- `get_link_local_addr(ifname)` returns a link-local IPv6 address.
- `get_global_addr(ifname)` returns a global unicast IPv6 address.
- `get_matching_addr(ifname, matches)` returns the first address for which
  `matches` is true.
- `mac_from_eui64(ip)` recovers the 6-byte MAC address from an EUI-64 based
  IPv6 address.

An unknown interface raises `OSError`; when no address matches,
`LookupError` is raised. `mac_from_eui64` raises `ValueError` for an address
that does not embed a MAC address.

## What this package does not do

It handles options only. It does not build or parse whole DHCPv6 messages or
relay messages, and it has no client or server. Options whose payloads hold
DUIDs, domain names or embedded messages (client and server identifiers,
FQDN, domain search list, NTP server, client architecture type, relay
message, DHCPv4 message) have no dedicated type: `parse_option` keeps them as
`OptionGeneric` with their raw bytes.

## Running the tests

```
pip install -e ".[test]"
pytest
```