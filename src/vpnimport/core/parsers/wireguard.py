from __future__ import annotations

import logging
import re
from typing import Optional

from ...constants import (
    WIREGUARD_DEFAULT_PORT,
    WIREGUARD_KEYWORDS,
    WIREGUARD_PLACEHOLDER_PRIVATE_KEY,
    WIREGUARD_PLACEHOLDER_PUBLIC_KEY,
    WIREGUARD_PRIVATE_KEY_RE,
)
from ...exceptions import ParserError
from ...models import ConnectionProfile, ProtocolKind
from .common import BaseDetector, BaseExtractor

logger = logging.getLogger(__name__)

# A section runs until the next "[Header]" line or the end of the text.
# Header lines may end in CRLF.
_SECTION_END = r"(?=^[ \t]*\[[^\]\r\n]*\][ \t]*\r?$|\Z)"


def _section_re(header: str) -> "re.Pattern[str]":
    return re.compile(
        r"^[ \t]*\[" + header + r"\][ \t]*\r?$(.*?)" + _SECTION_END,
        re.MULTILINE | re.DOTALL,
    )


_INTERFACE_RE = _section_re("Interface")
_PEER_RE = _section_re("Peer")


class WireGuardDetector(BaseDetector):
    """Recognises WireGuard ``wg-quick`` configuration files."""

    kind = ProtocolKind.WIREGUARD

    def detect(self) -> bool:
        content = self.config_text

        has_interface = "[Interface]" in content
        has_peer = "[Peer]" in content
        if not has_interface or not has_peer:
            logger.debug(
                "[WireGuard] missing required sections (Interface: %s, Peer: %s)",
                has_interface,
                has_peer,
            )
            return False

        has_private_key = bool(WIREGUARD_PRIVATE_KEY_RE.search(content))
        has_endpoint = "Endpoint" in content
        matches = self.count_keywords(content, WIREGUARD_KEYWORDS)

        lower = content.lower()
        has_openvpn = (
            ("client" in lower and "remote " in lower)
            or "<ca>" in content
            or "dev tun" in lower
        )
        has_ikev2 = (
            "conn " in lower and "keyexchange=ikev2" in lower
        ) or "config setup" in lower
        if has_openvpn or has_ikev2:
            logger.debug("[WireGuard] other protocol patterns present, not WireGuard")
            return False

        valid = has_private_key and has_endpoint and matches >= 4
        logger.debug(
            "[WireGuard] verdict: %s (PrivateKey: %s, Endpoint: %s, key matches: %d)",
            "VALID" if valid else "INVALID",
            has_private_key,
            has_endpoint,
            matches,
        )
        return valid


class WireGuardExtractor(BaseExtractor):
    """
    Extracts a connection profile from a WireGuard configuration file.

    Only the first ``[Peer]`` section is considered.
    """

    kind = ProtocolKind.WIREGUARD
    default_port = WIREGUARD_DEFAULT_PORT

    @staticmethod
    def section(content: str, pattern: "re.Pattern[str]") -> Optional[str]:
        match = pattern.search(content)
        return match.group(1) if match else None

    def value(self, section: str, key: str) -> str:
        """Return the value of ``key`` without a trailing ``# comment``."""
        value = self.extract_value(section, key, to_end_of_line=True)
        return value.split("#", 1)[0].strip()

    def profile_name(self, server: str) -> str:
        name = self.comment_name(self.config_text)
        if name:
            return name
        if server:
            return f"WireGuard - {server}"
        return "WireGuard Profile"

    def parse(self) -> ConnectionProfile:
        """
        Parse the WireGuard configuration.

        Returns:
            The normalized connection profile.
        Raises:
            ParserError: If a section, the endpoint or real key material is missing.
        """
        interface = self.section(self.config_text, _INTERFACE_RE)
        peer = self.section(self.config_text, _PEER_RE)
        if interface is None or peer is None:
            raise ParserError(
                "Missing required [Interface] or [Peer] sections in WireGuard configuration"
            )

        endpoint = self.value(peer, "Endpoint")
        if not endpoint:
            raise ParserError("Missing required 'Endpoint' in [Peer] section")
        server, port = self.split_endpoint(endpoint, self.default_port)
        if not server:
            raise ParserError("Invalid endpoint format in WireGuard configuration")

        private_key = self.value(interface, "PrivateKey")
        if not private_key or WIREGUARD_PLACEHOLDER_PRIVATE_KEY in private_key:
            raise ParserError("Missing or placeholder 'PrivateKey' in [Interface] section")

        public_key = self.value(peer, "PublicKey")
        if not public_key or WIREGUARD_PLACEHOLDER_PUBLIC_KEY in public_key:
            raise ParserError("Missing or placeholder 'PublicKey' in [Peer] section")

        preshared_key = self.value(peer, "PresharedKey")
        allowed_ips = self.value(peer, "AllowedIPs")

        wireguard_data = {
            "private_key_present": True,
            "public_key_present": True,
            "preshared_key_present": bool(preshared_key),
            "interface_address": self.value(interface, "Address") or "10.0.0.2/24",
            "listen_port": self.value(interface, "ListenPort") or "51820",
            "allowed_ips": allowed_ips or "0.0.0.0/0, ::/0",
            "persistent_keepalive": self.value(peer, "PersistentKeepalive") or "25",
            "dns_servers": self.value(interface, "DNS") or "1.1.1.1, 8.8.8.8",
            "mtu": self.value(interface, "MTU") or "1420",
            "tunnel_all_traffic": "0.0.0.0/0" in allowed_ips,
        }

        auth_method = "Public/Private Key"
        if preshared_key:
            auth_method = "Public/Private Key + Pre-shared Key"

        return ConnectionProfile(
            name=self.profile_name(server),
            server=server,
            protocol="WireGuard",
            port=port,
            auth_method=auth_method,
            encryption="ChaCha20Poly1305",
            compression=False,
            protocol_specific=wireguard_data,
        )
