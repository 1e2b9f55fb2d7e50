from datetime import timedelta

import pytest

from dhcp6opts.basic import (
    OptBootFileParam,
    OptBootFileURL,
    OptElapsedTime,
    OptInterfaceID,
    OptRelayPort,
    OptRemoteID,
)
from dhcp6opts.options import OptionCode, ParseError

BOOTFILE_PARAMS_COMPILED = b"\x00\x0eroot=/dev/sda1\x00\x00\x00\x02rw"
BOOTFILE_PARAMS = [
    "initrd=http://myserver.example.com/initrd.xz",
    "",
    "root=/dev/sda1",
    "rw",
    "netconsole=..:\x00:.something\x00here.::..",
    "\x00" * ((1 << 16) - 1),
]


def test_bootfile_url_from_bytes():
    expected = "https://boot.example.com"
    opt = OptBootFileURL.from_bytes(expected.encode())
    assert opt.url == expected
    assert "https://boot.example.com" in str(opt)


def test_bootfile_url_to_bytes():
    opt = OptBootFileURL("https://boot.example.com")
    assert opt.to_bytes() == b"https://boot.example.com"
    assert opt.code == OptionCode.BOOTFILE_URL


def test_bootfile_param_parse_compiled():
    opt = OptBootFileParam.from_bytes(BOOTFILE_PARAMS_COMPILED)
    assert opt.params == ["root=/dev/sda1", "", "rw"]
    assert opt.to_bytes() == BOOTFILE_PARAMS_COMPILED


def test_bootfile_param_round_trip():
    data = OptBootFileParam(BOOTFILE_PARAMS).to_bytes()
    opt = OptBootFileParam.from_bytes(data)
    assert opt.params == BOOTFILE_PARAMS
    assert opt.to_bytes() == data


def test_bootfile_param_longest_allowed():
    opt = OptBootFileParam(["\x00" * 0xFFFF])
    assert opt.to_bytes() == b"\xff\xff" + b"\x00" * 0xFFFF


def test_bootfile_param_too_long_is_skipped():
    opt = OptBootFileParam(["a" * (1 << 16), "rw"])
    assert opt.to_bytes() == b"\x00\x02rw"


def test_bootfile_param_truncated():
    with pytest.raises(ParseError):
        OptBootFileParam.from_bytes(b"\x00\x05ab")


def test_bootfile_param_string():
    assert str(OptBootFileParam(["a", "b"])) == "BootFileParam: [a b]"


def test_elapsed_time_from_bytes():
    opt = OptElapsedTime.from_bytes(bytes([0xAA, 0xBB]))
    assert opt.elapsed_time == timedelta(milliseconds=0xAABB * 10)


def test_elapsed_time_to_bytes():
    assert OptElapsedTime(timedelta(0)).to_bytes() == bytes([0, 0])
    assert OptElapsedTime(timedelta(milliseconds=10)).to_bytes() == bytes([0, 1])
    assert OptElapsedTime(timedelta(milliseconds=15)).to_bytes() == bytes([0, 2])


def test_elapsed_time_string():
    assert str(OptElapsedTime(timedelta(milliseconds=100))) == "ElapsedTime: 100ms"


@pytest.mark.parametrize("data", [bytes([0xAA]), bytes([0xAA, 0xBB, 0xCC])])
def test_elapsed_time_invalid(data):
    with pytest.raises(ParseError):
        OptElapsedTime.from_bytes(data)


def test_interface_id_from_bytes():
    expected = b"DSLAM01 eth2/1/01/21"
    assert OptInterfaceID.from_bytes(expected).id == expected


def test_interface_id_to_bytes_and_string():
    want = b"DSLAM01 eth2/1/01/21"
    opt = OptInterfaceID(want)
    assert opt.to_bytes() == want
    assert "68 83 76 65 77 48 49 32 101 116 104 50 47 49 47 48 49 47 50 49" in str(opt)


def test_relay_port_parse():
    assert OptRelayPort.from_bytes(bytes([0x12, 0x32])) == OptRelayPort(0x1232)


def test_relay_port_to_bytes():
    assert OptRelayPort(0x3845).to_bytes() == bytes([0x38, 0x45])


def test_remote_id_parse():
    remote_id = b"DSLAM01 eth2/1/01/21"
    opt = OptRemoteID.from_bytes(bytes([0xAA, 0xBB, 0xCC, 0xDD]) + remote_id)
    assert opt.enterprise_number == 0xAABBCCDD
    assert opt.remote_id == remote_id


def test_remote_id_to_bytes():
    remote_id = b"DSLAM01 eth2/1/01/21"
    assert OptRemoteID(remote_id=remote_id).to_bytes() == bytes(4) + remote_id


def test_remote_id_too_short():
    with pytest.raises(ParseError):
        OptRemoteID.from_bytes(bytes([0xAA, 0xBB, 0xCC]))


def test_remote_id_string():
    opt = OptRemoteID.from_bytes(bytes([0xAA, 0xBB, 0xCC, 0xDD]) + b"Test1234")
    text = str(opt)
    assert "EnterpriseNumber 2864434397" in text
    assert "RemoteID [84 101 115 116 49 50 51 52]" in text