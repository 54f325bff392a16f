"""Decoding of captured Ethernet, IPv4, IPv6 and TCP packets."""

from __future__ import annotations

import ipaddress
from enum import IntEnum
from typing import Any, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]

# Data link types as used by libpcap.
DLT_EN10MB = 1
DLT_IEEE802 = 6

# Ethernet framing sizes.
ETH_ALEN = 6
ETH_HLEN = 14
ETH_ZLEN = 60
ETH_DATA_LEN = 1500
ETH_FRAME_LEN = 1514

ETHER_ADDR_LEN = ETH_ALEN
ETHER_TYPE_LEN = 2
ETHER_CRC_LEN = 4
ETHER_HDR_LEN = ETH_HLEN
ETHER_MIN_LEN = ETH_ZLEN + ETHER_CRC_LEN
ETHER_MAX_LEN = ETH_FRAME_LEN + ETHER_CRC_LEN
ETHERTYPE_TRAIL = 0x1000
ETHERTYPE_NTRAILER = 16
ETHERMTU = ETH_DATA_LEN
ETHERMIN = ETHER_MIN_LEN - ETHER_HDR_LEN - ETHER_CRC_LEN

IPPROTO_TCP = 6

# IPv4 fragment flags.
IP_RF = 0x8000
IP_DF = 0x4000
IP_MF = 0x2000
IP_OFFMASK = 0x1FFF

# TCP flags.
TH_FIN = 0x01
TH_SYN = 0x02
TH_RST = 0x04
TH_PUSH = 0x08
TH_ACK = 0x10
TH_URG = 0x20

# Structure sizes on the wire.
ETHER_ADDR_SIZE = 6
ETHER_HEADER_SIZE = 14
IP4_HEADER_SIZE = 20
IP6_HEADER_SIZE = 40
TCP_HEADER_SIZE = 20

NO_VLAN = -1


class EtherType(IntEnum):
    """Ethernet protocol identifiers."""

    PUP = 0x0200
    SPRITE = 0x0500
    IP = 0x0800
    ARP = 0x0806
    REVARP = 0x8035
    AT = 0x809B
    AARP = 0x80F3
    VLAN = 0x8100
    IPX = 0x8137
    IPV6 = 0x86DD
    LOOPBACK = 0x9000


class FrameTooShort(ValueError):
    """Raised when a frame is too short to hold the requested structure."""

    def __init__(self) -> None:
        super().__init__("frame too short to contain requisite network structures")


def nshort(buf: BytesLike, pos: int) -> int:
    """Return the network byte order 16-bit value at offset pos."""
    return (buf[pos] << 8) | buf[pos + 1]


class PacketInfo:
    """A captured packet: the original link-layer frame plus where its IP data begins."""

    # IPv4 header offsets
    IP4_PROTO_OFF = 9
    IP4_SRC_OFF = 12
    IP4_DST_OFF = 16
    # IPv6 header offsets
    IP6_PLEN_OFF = 4
    IP6_NXT_HDR_OFF = 6
    IP6_SRC_OFF = 8
    IP6_DST_OFF = 24
    # TCP header offsets
    TCP_SPORT_OFF = 0
    TCP_DPORT_OFF = 2

    def __init__(
        self,
        dlt: int,
        pcap_data: BytesLike,
        caplen: Optional[int] = None,
        ts: Any = None,
        ip_data: Optional[BytesLike] = None,
    ) -> None:
        self.pcap_dlt = dlt
        self.pcap_data = bytes(pcap_data)
        self.caplen = len(self.pcap_data) if caplen is None else caplen
        self.ts = ts
        if ip_data is None:
            self.ip_data = self.pcap_data[: self.caplen]
        else:
            self.ip_data = bytes(ip_data)

    @property
    def ip_datalen(self) -> int:
        return len(self.ip_data)

    def _require_ip(self, size: int) -> None:
        if self.ip_datalen < size:
            raise FrameTooShort()

    def ip_version(self) -> int:
        """Return 4, 6, or 0 if the data is neither."""
        if self.ip_datalen >= IP4_HEADER_SIZE:
            version = self.ip_data[0] >> 4
            if version in (4, 6):
                return version
        return 0

    def ether_type(self) -> int:
        """Return the Ethernet type field, or 0 if the link layer is not Ethernet."""
        if self.pcap_dlt in (DLT_IEEE802, DLT_EN10MB):
            return nshort(self.pcap_data, 2 * ETH_ALEN)
        return 0

    def vlan(self) -> int:
        """Return the 802.1Q tag word, or NO_VLAN if the frame is not tagged."""
        if self.ether_type() == EtherType.VLAN:
            return nshort(self.pcap_data, ETHER_HEADER_SIZE)
        return NO_VLAN

    def get_ether_dhost(self) -> bytes:
        if self.caplen < ETHER_ADDR_SIZE:
            raise FrameTooShort()
        return self.pcap_data[0:ETH_ALEN]

    def get_ether_shost(self) -> bytes:
        if self.caplen < ETHER_ADDR_SIZE:
            raise FrameTooShort()
        return self.pcap_data[ETH_ALEN : 2 * ETH_ALEN]

    def is_ip4(self) -> bool:
        return self.ip_version() == 4

    def is_ip6(self) -> bool:
        return self.ip_version() == 6

    def is_ip4_tcp(self) -> bool:
        if self.ip_datalen < IP4_HEADER_SIZE + TCP_HEADER_SIZE:
            return False
        return self.ip_data[self.IP4_PROTO_OFF] == IPPROTO_TCP

    def is_ip6_tcp(self) -> bool:
        if self.ip_datalen < IP6_HEADER_SIZE + TCP_HEADER_SIZE:
            return False
        return self.ip_data[self.IP6_NXT_HDR_OFF] == IPPROTO_TCP

    def get_ip4_src(self) -> ipaddress.IPv4Address:
        self._require_ip(IP4_HEADER_SIZE)
        return ipaddress.IPv4Address(self.ip_data[self.IP4_SRC_OFF : self.IP4_SRC_OFF + 4])

    def get_ip4_dst(self) -> ipaddress.IPv4Address:
        self._require_ip(IP4_HEADER_SIZE)
        return ipaddress.IPv4Address(self.ip_data[self.IP4_DST_OFF : self.IP4_DST_OFF + 4])

    def get_ip4_proto(self) -> int:
        self._require_ip(IP4_HEADER_SIZE)
        return self.ip_data[self.IP4_PROTO_OFF]

    def get_ip6_nxt_hdr(self) -> int:
        self._require_ip(IP6_HEADER_SIZE)
        return self.ip_data[self.IP6_NXT_HDR_OFF]

    def get_ip6_plen(self) -> int:
        self._require_ip(IP6_HEADER_SIZE)
        return nshort(self.ip_data, self.IP6_PLEN_OFF)

    def get_ip6_src(self) -> ipaddress.IPv6Address:
        self._require_ip(IP6_HEADER_SIZE)
        return ipaddress.IPv6Address(self.ip_data[self.IP6_SRC_OFF : self.IP6_SRC_OFF + 16])

    def get_ip6_dst(self) -> ipaddress.IPv6Address:
        self._require_ip(IP6_HEADER_SIZE)
        return ipaddress.IPv6Address(self.ip_data[self.IP6_DST_OFF : self.IP6_DST_OFF + 16])

    def get_ip4_tcp_sport(self) -> int:
        self._require_ip(IP4_HEADER_SIZE + TCP_HEADER_SIZE)
        return nshort(self.ip_data, IP4_HEADER_SIZE + self.TCP_SPORT_OFF)

    def get_ip4_tcp_dport(self) -> int:
        self._require_ip(IP4_HEADER_SIZE + TCP_HEADER_SIZE)
        return nshort(self.ip_data, IP4_HEADER_SIZE + self.TCP_DPORT_OFF)

    def get_ip6_tcp_sport(self) -> int:
        self._require_ip(IP6_HEADER_SIZE + TCP_HEADER_SIZE)
        return nshort(self.ip_data, IP6_HEADER_SIZE + self.TCP_SPORT_OFF)

    def get_ip6_tcp_dport(self) -> int:
        self._require_ip(IP6_HEADER_SIZE + TCP_HEADER_SIZE)
        return nshort(self.ip_data, IP6_HEADER_SIZE + self.TCP_DPORT_OFF)


class OnesComplementSum:
    """Accumulates 16-bit words into an Internet (ones' complement) checksum."""

    def __init__(self) -> None:
        self._sum = 0

    def add(self, val: int) -> None:
        self._sum = (self._sum + (val & 0xFFFF)) & 0xFFFFFFFF
        if self._sum & 0x80000000:
            self._sum = (self._sum & 0xFFFF) + (self._sum >> 16)

    def chksum(self) -> int:
        while self._sum >> 16:
            self._sum = (self._sum & 0xFFFF) + (self._sum >> 16)
        return ~self._sum & 0xFFFF