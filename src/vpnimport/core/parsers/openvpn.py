from __future__ import annotations

import logging
import re
from typing import Dict, Tuple

from ...constants import (
    OPENVPN_DEFAULT_PORT,
    OPENVPN_EMBEDDED_BLOCKS,
    OPENVPN_KEY_MATERIAL_BLOCKS,
    OPENVPN_KEYWORDS,
    OPENVPN_REMOTE_RE,
)
from ...exceptions import ParserError
from ...models import ConnectionProfile, ProtocolKind
from .common import BaseDetector, BaseExtractor

logger = logging.getLogger(__name__)

_INLINE_BLOCK_OPEN_RE = re.compile(r"^<([A-Za-z0-9-]+)>$")
_INLINE_BLOCK_CLOSE_RE = re.compile(r"^</[A-Za-z0-9-]+>$")
_PROFILE_COMMENT_RE = re.compile(r"^#\s*Profile\s*:\s*(.*)$", re.IGNORECASE)


class OpenVpnDetector(BaseDetector):
    """Recognises OpenVPN client and server configuration files."""

    kind = ProtocolKind.OPENVPN

    def detect(self) -> bool:
        content = self.config_text
        lower = content.lower()

        has_remote = bool(OPENVPN_REMOTE_RE.search(lower))
        has_client = "client" in lower
        has_server = "server " in lower
        if not has_remote or not (has_client or has_server):
            logger.debug(
                "[OpenVPN] missing essential directives (remote: %s, client: %s, server: %s)",
                has_remote,
                has_client,
                has_server,
            )
            return False

        matches = self.count_keywords(lower, OPENVPN_KEYWORDS)
        has_embedded = any(block in content for block in OPENVPN_EMBEDDED_BLOCKS)

        has_wireguard = "[interface]" in lower and "[peer]" in lower
        has_ikev2 = "keyexchange=ikev2" in lower or (
            "conn " in lower and "config setup" in lower
        )
        if has_wireguard or has_ikev2:
            logger.debug("[OpenVPN] other protocol patterns present, not OpenVPN")
            return False

        valid = matches >= 3 or has_embedded
        logger.debug(
            "[OpenVPN] verdict: %s (directive matches: %d, embedded blocks: %s)",
            "VALID" if valid else "INVALID",
            matches,
            has_embedded,
        )
        return valid


class OpenVpnExtractor(BaseExtractor):
    """
    Extracts a connection profile from an OpenVPN configuration file.
    """

    kind = ProtocolKind.OPENVPN
    default_port = OPENVPN_DEFAULT_PORT

    def _parse_directives(self) -> Tuple[Dict[str, str], int, str]:
        """
        Split the file into ``directive -> value`` pairs.

        The first occurrence of a directive wins. Lines inside key material
        blocks such as ``<ca>...</ca>`` are skipped. Directives inside
        ``<connection>`` blocks are read like top-level ones.

        Returns:
            The directive map, the number of ``remote`` lines and the name
            from a ``# Profile:`` comment (empty if there is none).
        """
        directives: Dict[str, str] = {}
        remote_count = 0
        profile_name = ""
        inline_block = None

        for raw_line in self.config_text.splitlines():
            line = raw_line.strip()
            if not line:
                continue
            if inline_block is not None:
                if line.lower() == f"</{inline_block}>":
                    inline_block = None
                continue
            block_match = _INLINE_BLOCK_OPEN_RE.match(line)
            if block_match:
                tag = block_match.group(1).lower()
                if tag in OPENVPN_KEY_MATERIAL_BLOCKS:
                    inline_block = tag
                continue
            if _INLINE_BLOCK_CLOSE_RE.match(line):
                continue
            if line.startswith("#"):
                profile_match = _PROFILE_COMMENT_RE.match(line)
                if profile_match and not profile_name:
                    profile_name = self.sanitize_str(profile_match.group(1))
                continue
            if line.startswith(";"):
                continue

            parts = line.split(None, 1)
            directive = parts[0].lower()
            value = parts[1].strip() if len(parts) > 1 else ""
            if directive == "remote":
                remote_count += 1
            directives.setdefault(directive, value)

        return directives, remote_count, profile_name

    def parse(self) -> ConnectionProfile:
        """
        Parse the OpenVPN configuration.

        Returns:
            The normalized connection profile.
        Raises:
            ParserError: If the ``remote`` directive is missing or invalid.
        """
        content = self.config_text
        directives, remote_count, profile_name = self._parse_directives()

        if "remote" not in directives:
            raise ParserError("Missing required 'remote' directive in OpenVPN configuration")

        remote_tokens = directives["remote"].split()
        if not remote_tokens:
            raise ParserError("Invalid or missing server address in 'remote' directive")
        server = remote_tokens[0]
        port = self.default_port
        if len(remote_tokens) > 1:
            port = self.coerce_port(remote_tokens[1], self.default_port)

        # remote may carry the transport as its third token
        proto = directives.get("proto", "")
        if not proto and len(remote_tokens) > 2:
            proto = remote_tokens[2]
        proto = proto.lower()
        protocol = "OpenVPN"
        if "udp" in proto:
            protocol = "OpenVPN (UDP)"
        elif "tcp" in proto:
            protocol = "OpenVPN (TCP)"

        # Credentials live in a separate file or are prompted for
        auth_method = "Certificate"
        if "auth-user-pass" in directives:
            auth_method = "Username/Password"

        cipher = directives.get("cipher") or "AES-256-CBC"
        auth_algorithm = directives.get("auth") or "SHA1"
        device_type = "tap" if "tap" in directives.get("dev", "").lower() else "tun"

        comp_lzo = directives.get("comp-lzo")
        compression = "compress" in directives or (
            comp_lzo is not None and comp_lzo.lower() != "no"
        )

        has_ca_cert = "<ca>" in content
        has_client_cert = "<cert>" in content
        has_private_key = "<key>" in content

        openvpn_data = {
            "device_type": device_type,
            "tls_auth": "tls-auth" in directives or "<tls-auth>" in content,
            "tls_crypt": "tls-crypt" in directives or "<tls-crypt>" in content,
            "tls_client": "tls-client" in directives,
            "remote_cert_tls": "remote-cert-tls" in directives,
            "auth_algorithm": auth_algorithm,
            "has_ca_cert": has_ca_cert,
            "has_client_cert": has_client_cert,
            "has_private_key": has_private_key,
            "verify_x509_name": "verify-x509-name" in directives,
            "persist_key": "persist-key" in directives,
            "persist_tun": "persist-tun" in directives,
            "nobind": "nobind" in directives,
            "tls_version_min": directives.get("tls-version-min", ""),
            "tls_cipher": directives.get("tls-cipher", ""),
            "has_embedded_certs": has_ca_cert or has_client_cert or has_private_key,
            "remote_count": remote_count,
        }

        return ConnectionProfile(
            name=profile_name or f"OpenVPN ({server})",
            server=server,
            protocol=protocol,
            port=port,
            auth_method=auth_method,
            encryption=cipher,
            compression=compression,
            protocol_specific=openvpn_data,
        )
