import ipaddress
import struct

import pytest

from be20kit.packet import (
    DLT_EN10MB,
    EtherType,
    FrameTooShort,
    NO_VLAN,
    OnesComplementSum,
    PacketInfo,
    nshort,
)

DHOST = bytes([0x02, 0, 0, 0, 0, 0x01])
SHOST = bytes([0x02, 0, 0, 0, 0, 0x02])


def ip4_header(proto=6, src="10.0.0.1", dst="10.0.0.2"):
    return struct.pack(
        "!BBHHHBBH4s4s",
        0x45, 0, 40, 1, 0, 64, proto, 0,
        ipaddress.IPv4Address(src).packed,
        ipaddress.IPv4Address(dst).packed,
    )


def ip6_header(nxt=6, plen=20, src="2001:db8::1", dst="2001:db8::2"):
    return (
        struct.pack("!IHBB", 0x60000000, plen, nxt, 64)
        + ipaddress.IPv6Address(src).packed
        + ipaddress.IPv6Address(dst).packed
    )


def tcp_header(sport, dport):
    return struct.pack("!HHIIBBHHH", sport, dport, 0, 0, 0x50, 0x02, 1024, 0, 0)


def ether(ethertype, payload):
    return DHOST + SHOST + struct.pack("!H", ethertype) + payload


def test_nshort():
    assert nshort(b"\x12\x34\x56", 0) == 0x1234
    assert nshort(b"\x12\x34\x56", 1) == 0x3456


@pytest.mark.parametrize(
    "raw, member",
    [(0x0800, EtherType.IP), (0x8100, EtherType.VLAN), (0x86DD, EtherType.IPV6)],
)
def test_ether_type_read_from_frame(raw, member):
    frame = DHOST + SHOST + struct.pack("!H", raw) + bytes(40)
    pi = PacketInfo(DLT_EN10MB, frame)
    assert pi.ether_type() == raw
    assert pi.ether_type() == member


def test_ip4_tcp_packet():
    ip = ip4_header() + tcp_header(1234, 80)
    frame = ether(EtherType.IP, ip)
    pi = PacketInfo(DLT_EN10MB, frame, len(frame), 0.0, ip)
    assert pi.ether_type() == EtherType.IP
    assert pi.vlan() == NO_VLAN
    assert pi.get_ether_dhost() == DHOST
    assert pi.get_ether_shost() == SHOST
    assert pi.ip_version() == 4
    assert pi.is_ip4() and not pi.is_ip6()
    assert pi.is_ip4_tcp()
    assert pi.get_ip4_proto() == 6
    assert pi.get_ip4_src() == ipaddress.IPv4Address("10.0.0.1")
    assert pi.get_ip4_dst() == ipaddress.IPv4Address("10.0.0.2")
    assert pi.get_ip4_tcp_sport() == 1234
    assert pi.get_ip4_tcp_dport() == 80


def test_ip4_udp_is_not_tcp():
    ip = ip4_header(proto=17) + bytes(20)
    pi = PacketInfo(DLT_EN10MB, ether(EtherType.IP, ip), ip_data=ip)
    assert pi.is_ip4()
    assert pi.is_ip4_tcp() is False


def test_ip6_tcp_packet():
    ip = ip6_header(plen=20) + tcp_header(443, 5555)
    frame = ether(EtherType.IPV6, ip)
    pi = PacketInfo(DLT_EN10MB, frame, len(frame), None, ip)
    assert pi.ether_type() == EtherType.IPV6
    assert pi.is_ip6() and not pi.is_ip4()
    assert pi.is_ip6_tcp()
    assert pi.get_ip6_nxt_hdr() == 6
    assert pi.get_ip6_plen() == 20
    assert pi.get_ip6_src() == ipaddress.IPv6Address("2001:db8::1")
    assert pi.get_ip6_dst() == ipaddress.IPv6Address("2001:db8::2")
    assert pi.get_ip6_tcp_sport() == 443
    assert pi.get_ip6_tcp_dport() == 5555


def test_vlan_tag():
    frame = ether(EtherType.VLAN, struct.pack("!HH", 42, EtherType.IP) + ip4_header())
    pi = PacketInfo(DLT_EN10MB, frame)
    assert pi.ether_type() == EtherType.VLAN
    assert pi.vlan() == 42


def test_non_ethernet_dlt_has_no_ethertype():
    ip = ip4_header()
    pi = PacketInfo(101, ip)
    assert pi.ether_type() == 0
    assert pi.vlan() == NO_VLAN
    assert pi.ip_version() == 4
    assert pi.ip_data == ip


def test_short_frame_errors():
    pi = PacketInfo(DLT_EN10MB, b"\x45\x00\x00", ip_data=b"\x45\x00\x00")
    assert pi.ip_version() == 0
    assert pi.is_ip4_tcp() is False
    assert pi.is_ip6_tcp() is False
    with pytest.raises(FrameTooShort):
        pi.get_ether_dhost()
    with pytest.raises(FrameTooShort):
        pi.get_ip4_src()
    with pytest.raises(FrameTooShort):
        pi.get_ip6_plen()
    with pytest.raises(FrameTooShort):
        pi.get_ip4_tcp_sport()


def test_ip4_header_without_tcp_is_too_short_for_ports():
    ip = ip4_header()
    pi = PacketInfo(DLT_EN10MB, ether(EtherType.IP, ip), ip_data=ip)
    assert pi.get_ip4_proto() == 6
    with pytest.raises(FrameTooShort):
        pi.get_ip4_tcp_dport()
    with pytest.raises(FrameTooShort):
        pi.get_ip6_src()


def test_checksum_of_ip4_header():
    header = bytes.fromhex("450000730000400040110000c0a80001c0a800c7")
    acc = OnesComplementSum()
    for (word,) in struct.iter_unpack("!H", header):
        acc.add(word)
    assert acc.chksum() == 0xB861


def test_checksum_verifies_to_zero():
    words = [0x1234, 0xFFFF, 0xABCD, 0x0001, 0x8000]
    acc = OnesComplementSum()
    for w in words:
        acc.add(w)
    check = acc.chksum()
    verify = OnesComplementSum()
    for w in words + [check]:
        verify.add(w)
    assert verify.chksum() == 0


def test_empty_checksum():
    assert OnesComplementSum().chksum() == 0xFFFF