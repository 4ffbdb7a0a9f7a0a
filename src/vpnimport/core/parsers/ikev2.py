from __future__ import annotations

import logging
import re

from ...constants import IKEV2_CONN_RE, IKEV2_DEFAULT_PORT, IKEV2_KEYWORDS
from ...exceptions import ParserError
from ...models import ConnectionProfile, ProtocolKind
from .common import BaseDetector, BaseExtractor

logger = logging.getLogger(__name__)

_CONN_NAME_RE = re.compile(r"^[ \t]*conn[ \t]+(\S+)", re.MULTILINE)
_COMMENT_LINE_RE = re.compile(r"^[ \t]*#.*$", re.MULTILINE)
_INLINE_PORT_RE = re.compile(r":(\d+)")


class Ikev2Detector(BaseDetector):
    """Recognises strongSwan/Libreswan ``ipsec.conf`` style IKEv2 configurations."""

    kind = ProtocolKind.IKEV2

    def detect(self) -> bool:
        lower = self.config_text.lower()

        if not IKEV2_CONN_RE.search(lower):
            logger.debug("[IKEv2] no 'conn <name>' section found")
            return False

        has_config_setup = "config setup" in lower
        has_ikev2_exchange = "keyexchange=ikev2" in lower
        matches = self.count_keywords(lower, IKEV2_KEYWORDS)

        has_openvpn = (
            ("client" in lower and "remote " in lower)
            or "<ca>" in lower
            or "dev tun" in lower
        )
        has_wireguard = (
            "[interface]" in lower and "[peer]" in lower
        ) or "privatekey" in lower
        if has_openvpn or has_wireguard:
            logger.debug("[IKEv2] other protocol patterns present, not IKEv2")
            return False

        valid = has_ikev2_exchange or matches >= 4 or (has_config_setup and matches >= 2)
        logger.debug(
            "[IKEv2] verdict: %s (config setup: %s, ikev2 exchange: %s, keyword matches: %d)",
            "VALID" if valid else "INVALID",
            has_config_setup,
            has_ikev2_exchange,
            matches,
        )
        return valid


class Ikev2Extractor(BaseExtractor):
    """
    Extracts a connection profile from an IKEv2/IPsec configuration.
    """

    kind = ProtocolKind.IKEV2
    default_port = IKEV2_DEFAULT_PORT

    def __init__(self, config_text: str):
        super().__init__(config_text)
        # Commented-out settings must not shadow live ones
        self.settings_text = _COMMENT_LINE_RE.sub("", config_text)

    def value(self, key: str, to_end_of_line: bool = False) -> str:
        return self.extract_value(
            self.settings_text, key, to_end_of_line=to_end_of_line, ignore_case=True
        )

    def profile_name(self) -> str:
        """Return the first usable connection name, else a short comment line."""
        for match in _CONN_NAME_RE.finditer(self.settings_text):
            conn_name = match.group(1)
            if conn_name != "%default":
                return conn_name
        return self.comment_name(self.config_text)

    def server(self) -> str:
        for key in ("right", "rightid", "server"):
            server = self.value(key)
            if server:
                return server
        return ""

    def port(self) -> int:
        explicit = self.value("port")
        if explicit.isdigit():
            return self.coerce_port(explicit, self.default_port)
        for match in _INLINE_PORT_RE.finditer(self.settings_text):
            candidate = int(match.group(1))
            if 1 <= candidate <= 65535:
                return candidate
        return self.default_port

    def username(self) -> str:
        for key in ("leftid", "username", "xauth_username"):
            username = self.value(key)
            if username:
                return username
        return ""

    def auth_method(self) -> str:
        left_auth = self.value("leftauth").lower()
        right_auth = self.value("rightauth").lower()
        auth_by = self.value("authby").lower()

        if left_auth == "psk" or right_auth == "psk" or auth_by == "secret":
            return "PSK"
        if "cert" in left_auth or "cert" in right_auth:
            return "Certificate"
        if left_auth == "eap" or right_auth == "eap":
            return "EAP"
        return "PSK"

    @staticmethod
    def encryption(ike_params: str) -> str:
        ike_params = ike_params.lower()
        if "aes128" in ike_params:
            return "AES-128"
        if "aes256" in ike_params:
            return "AES-256"
        if "3des" in ike_params:
            return "3DES"
        return "AES-256"

    def parse(self) -> ConnectionProfile:
        """
        Parse the IKEv2 configuration.

        Returns:
            The normalized connection profile.
        Raises:
            ParserError: If no server address can be resolved.
        """
        server = self.server()
        if not server:
            raise ParserError("Missing or invalid server address in IKEv2 configuration")
        port = self.port()
        name = self.profile_name() or f"IKEv2 ({server})"
        auth_method = self.auth_method()
        ike_params = self.value("ike")
        esp_params = self.value("esp")
        rekey = self.value("rekey").lower() == "yes"
        reauth = self.value("reauth").lower() == "yes"

        ikev2_data = {
            "ike_parameters": ike_params or "aes256-sha256-modp2048",
            "esp_parameters": esp_params or "aes256-sha256",
            "connection_type": self.value("type") or "tunnel",
            "auto_setting": self.value("auto") or "add",
            "left_id": self.value("leftid"),
            "right_id": self.value("rightid"),
            "left_source_ip": self.value("leftsourceip"),
            "right_subnet": self.value("rightsubnet"),
            "fragmentation": self.value("fragmentation").lower() == "yes",
            "force_encaps": self.value("forceencaps").lower() == "yes",
            "rekey": rekey,
            "reauth": reauth,
            "close_action": self.value("closeaction"),
            "charon_debug": self.value("charondebug", to_end_of_line=True),
            "has_certificates": auth_method == "Certificate",
            "supports_mobility": rekey and reauth,
        }

        return ConnectionProfile(
            name=name,
            server=server,
            protocol="IKEv2/IPSec",
            port=port,
            username=self.username(),
            auth_method=auth_method,
            encryption=self.encryption(ike_params),
            compression=False,
            protocol_specific=ikev2_data,
        )
