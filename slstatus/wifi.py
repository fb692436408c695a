"""Wireless ESSID and signal strength over nl80211 generic netlink."""

from __future__ import annotations

import socket
import struct
import sys
from typing import Optional

from .util import warn

AF_NETLINK = getattr(socket, "AF_NETLINK", 16)
NETLINK_GENERIC = 16

NLM_F_REQUEST = 0x1
NLM_F_DUMP = 0x300
NLMSG_ERROR = 0x2
NLMSG_DONE = 0x3

GENL_ID_CTRL = 0x10
CTRL_CMD_GETFAMILY = 3
CTRL_ATTR_FAMILY_ID = 1
CTRL_ATTR_FAMILY_NAME = 2

NL80211_CMD_GET_STATION = 17
NL80211_CMD_GET_INTERFACE = 5
NL80211_ATTR_IFINDEX = 3
NL80211_ATTR_STA_INFO = 21
NL80211_ATTR_SSID = 52
NL80211_STA_INFO_SIGNAL_AVG = 13

NLMSG_HDRLEN = 16
GENL_HDRLEN = 4
NLA_HDRLEN = 4
RESPONSE_SIZE = 4096

_NLMSGHDR = struct.Struct("=IHHII")
_GENLHDR = struct.Struct("=BBH")
_NLATTR = struct.Struct("=HH")
_FAMILY = b"nl80211\0"


def _align(length: int) -> int:
    return (length + 3) & ~3


def _attr(attr_type: int, payload: bytes) -> bytes:
    raw = _NLATTR.pack(NLA_HDRLEN + len(payload), attr_type) + payload
    return raw.ljust(_align(len(raw)), b"\0")


def find_attr(attr: int, data: bytes) -> Optional[bytes]:
    """Return the payload of the first netlink attribute of type ``attr``."""
    offset = 0
    while offset + NLA_HDRLEN <= len(data):
        length, kind = _NLATTR.unpack_from(data, offset)
        if kind == attr:
            return bytes(data[offset + NLA_HDRLEN : offset + length])
        if length < NLA_HDRLEN:
            break
        offset += _align(length)
    return None


def rssi_to_perc(rssi: int) -> int:
    """Map a signal level in dBm to a percentage."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def signal_icon(perc: int) -> str:
    """Pick a signal-strength icon for a percentage."""
    if perc >= 80:
        return "󰤨"
    if perc >= 60:
        return "󰤥"
    if perc >= 40:
        return "󰤢"
    if perc >= 20:
        return "󰤟"
    return "󰤭"


class Nl80211:
    """A generic netlink connection that queries the nl80211 family."""

    def __init__(self) -> None:
        self._sock: Optional[socket.socket] = None
        self._seq = 1
        self._family = 0
        self._ifname: Optional[str] = None
        self._ifindex = -1

    def __enter__(self) -> "Nl80211":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the netlink socket."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def _message(self, msg_type: int, flags: int, cmd: int, attrs: bytes) -> bytes:
        body = _GENLHDR.pack(cmd, 1, 0) + attrs
        header = _NLMSGHDR.pack(NLMSG_HDRLEN + len(body), msg_type, flags, self._seq, 0)
        self._seq += 1
        return header + body

    def _socket(self) -> socket.socket:
        if self._sock is None:
            self._sock = socket.socket(AF_NETLINK, socket.SOCK_RAW, NETLINK_GENERIC)
        return self._sock

    def _send(self, message: bytes) -> bool:
        try:
            sent = self._socket().send(message)
        except OSError as exc:
            warn("send 'AF_NETLINK'", exc)
            return False
        if sent != len(message):
            warn("send 'AF_NETLINK': short write")
            return False
        return True

    def _recv(self) -> Optional[bytes]:
        try:
            return self._socket().recv(RESPONSE_SIZE)
        except OSError as exc:
            warn("recv 'AF_NETLINK'", exc)
            return None

    def family_id(self) -> int:
        """Return the nl80211 family id, or 0 if it cannot be found."""
        if self._family:
            return self._family
        try:
            self._socket()
        except OSError as exc:
            warn("socket 'AF_NETLINK'", exc)
            return 0
        request = self._message(
            GENL_ID_CTRL, NLM_F_REQUEST, CTRL_CMD_GETFAMILY,
            _attr(CTRL_ATTR_FAMILY_NAME, _FAMILY),
        )
        if not self._send(request):
            return 0
        reply = self._recv()
        if reply is None or len(reply) <= len(request):
            return 0
        payload = find_attr(CTRL_ATTR_FAMILY_ID, reply[len(request):])
        if payload is not None and len(payload) == 2:
            self._family = struct.unpack("=H", payload)[0]
        return self._family

    def ifindex(self, interface: str) -> int:
        """Return the index of ``interface``, or -1 if it does not exist."""
        if interface != self._ifname:
            try:
                index = socket.if_nametoindex(interface)
            except OSError as exc:
                warn("ioctl 'SIOCGIFINDEX'", exc)
                return -1
            self._ifname, self._ifindex = interface, index
        return self._ifindex

    def essid(self, interface: str) -> Optional[str]:
        """Return the SSID ``interface`` is connected to."""
        family = self.family_id()
        index = self.ifindex(interface)
        if not family:
            print("nl80211 family not found", file=sys.stderr)
            return None
        if index < 0:
            print(f"interface {interface} not found", file=sys.stderr)
            return None
        request = self._message(
            family, NLM_F_REQUEST, NL80211_CMD_GET_INTERFACE,
            _attr(NL80211_ATTR_IFINDEX, struct.pack("=I", index)),
        )
        if not self._send(request):
            return None
        reply = self._recv()
        if reply is None or len(reply) <= NLMSG_HDRLEN + GENL_HDRLEN:
            return None
        ssid = find_attr(NL80211_ATTR_SSID, reply[NLMSG_HDRLEN + GENL_HDRLEN:])
        if ssid is None:
            return None
        return ssid.split(b"\0", 1)[0].decode("utf-8", errors="replace")

    def signal_percent(self, interface: str) -> Optional[int]:
        """Return the average signal of the station ``interface`` is associated to."""
        family = self.family_id()
        index = self.ifindex(interface)
        if index < 0 or not family:
            return None
        request = self._message(
            family, NLM_F_REQUEST | NLM_F_DUMP, NL80211_CMD_GET_STATION,
            _attr(NL80211_ATTR_IFINDEX, struct.pack("=i", index)),
        )
        if not self._send(request):
            return None

        perc: Optional[int] = None
        while True:
            try:
                reply = self._socket().recv(RESPONSE_SIZE)
            except OSError:
                return None
            if len(reply) < NLMSG_HDRLEN:
                return None
            offset = 0
            while len(reply) - offset >= NLMSG_HDRLEN:
                length, kind = _NLMSGHDR.unpack_from(reply, offset)[:2]
                end = offset + length
                if length > NLMSG_HDRLEN + GENL_HDRLEN:
                    info = find_attr(
                        NL80211_ATTR_STA_INFO,
                        reply[offset + NLMSG_HDRLEN + GENL_HDRLEN : end],
                    )
                    if info is not None:
                        signal = find_attr(NL80211_STA_INFO_SIGNAL_AVG, info)
                        if signal is not None and len(signal) == 1:
                            perc = rssi_to_perc(struct.unpack("=b", signal)[0])
                if kind in (NLMSG_DONE, NLMSG_ERROR):
                    return perc
                if length < NLMSG_HDRLEN:
                    return None
                offset = end


_nl80211 = Nl80211()


def wifi_essid(interface: str) -> Optional[str]:
    """Return the SSID of the network ``interface`` is connected to."""
    return _nl80211.essid(interface)


def wifi_perc(interface: str) -> Optional[str]:
    """Return an icon for the signal strength on ``interface``."""
    perc = _nl80211.signal_percent(interface)
    return None if perc is None else signal_icon(perc)