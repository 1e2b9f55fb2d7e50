"""Dispatch of option codes to the option types that parse them."""

from __future__ import annotations

from typing import Callable

from .addresses import (
    OptClientLinkLayerAddress,
    OptDHCP4oDHCP6Server,
    OptDNS,
    OptNetworkInterfaceID,
    OptStatusCode,
)
from .basic import (
    OptBootFileParam,
    OptBootFileURL,
    OptElapsedTime,
    OptInterfaceID,
    OptRelayPort,
    OptRemoteID,
)
from .classes import OptUserClass, OptVendorClass, OptVendorOpts
from .fourrd import Opt4RD, Opt4RDMapRule, Opt4RDNonMapRule
from .ia import (
    OptIAAddress,
    OptIANA,
    OptIAPD,
    OptIAPrefix,
    OptIATA,
    OptInformationRefreshTime,
)
from .options import Option, OptionCode, OptionGeneric, OptRequestedOption

_PARSERS: dict[int, Callable[[bytes], Option]] = {
    OptionCode.IANA: OptIANA.from_bytes,
    OptionCode.IATA: OptIATA.from_bytes,
    OptionCode.IA_ADDR: OptIAAddress.from_bytes,
    OptionCode.ORO: OptRequestedOption.from_bytes,
    OptionCode.ELAPSED_TIME: OptElapsedTime.from_bytes,
    OptionCode.STATUS_CODE: OptStatusCode.from_bytes,
    OptionCode.USER_CLASS: OptUserClass.from_bytes,
    OptionCode.VENDOR_CLASS: OptVendorClass.from_bytes,
    OptionCode.VENDOR_OPTS: OptVendorOpts.from_bytes,
    OptionCode.INTERFACE_ID: OptInterfaceID.from_bytes,
    OptionCode.DNS_RECURSIVE_NAME_SERVER: OptDNS.from_bytes,
    OptionCode.IAPD: OptIAPD.from_bytes,
    OptionCode.IA_PREFIX: OptIAPrefix.from_bytes,
    OptionCode.INFORMATION_REFRESH_TIME: OptInformationRefreshTime.from_bytes,
    OptionCode.REMOTE_ID: OptRemoteID.from_bytes,
    OptionCode.BOOTFILE_URL: OptBootFileURL.from_bytes,
    OptionCode.BOOTFILE_PARAM: OptBootFileParam.from_bytes,
    OptionCode.NII: OptNetworkInterfaceID.from_bytes,
    OptionCode.CLIENT_LINK_LAYER_ADDR: OptClientLinkLayerAddress.from_bytes,
    OptionCode.DHCP4O_DHCP6_SERVER: OptDHCP4oDHCP6Server.from_bytes,
    OptionCode.FOUR_RD: Opt4RD.from_bytes,
    OptionCode.FOUR_RD_MAP_RULE: Opt4RDMapRule.from_bytes,
    OptionCode.FOUR_RD_NON_MAP_RULE: Opt4RDNonMapRule.from_bytes,
    OptionCode.RELAY_PORT: OptRelayPort.from_bytes,
}


def parse_option(code: int, data: bytes) -> Option:
    """Parse an option payload according to its code.

    Codes without a dedicated type are kept as an ``OptionGeneric``.
    Raises ``ParseError`` when the payload is malformed.
    """
    parser = _PARSERS.get(code)
    if parser is None:
        return OptionGeneric(code, bytes(data))
    return parser(bytes(data))