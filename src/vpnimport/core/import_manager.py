# VPNImport
# Copyright (C) 2025 Amirreza "Farnam" Taheri
# This program comes with ABSOLUTELY NO WARRANTY; for details type `show w`.
# This is free software, and you are welcome to redistribute it
# under certain conditions; type `show c` for details.
# For more information, see <https://amirrezafarnamtaheri.github.io/configStream/>.

from __future__ import annotations

import logging
from typing import Mapping, Optional, Type

from ..models import (
    ImportErrorKind,
    ImportFailure,
    ImportResult,
    ProtocolKind,
)
from .classifier import classify
from .parsers.common import BaseExtractor
from .parsers.ikev2 import Ikev2Extractor
from .parsers.openvpn import OpenVpnExtractor
from .parsers.wireguard import WireGuardExtractor

logger = logging.getLogger(__name__)


class ImportManager:
    """
    Turns raw VPN configuration text into a connection profile.

    This class acts as a facade: it classifies the text, delegates to the
    extractor registered for the detected protocol and converts every failure
    into an `ImportResult` carrying an `ImportFailure`.
    """

    def __init__(self, extractors: Optional[Mapping[ProtocolKind, Type[BaseExtractor]]] = None):
        """Initialize the manager and map protocols to extractor classes."""
        if extractors is None:
            extractors = {
                ProtocolKind.OPENVPN: OpenVpnExtractor,
                ProtocolKind.IKEV2: Ikev2Extractor,
                ProtocolKind.WIREGUARD: WireGuardExtractor,
            }
        self.extractors: Mapping[ProtocolKind, Type[BaseExtractor]] = dict(extractors)

    @staticmethod
    def _failure(
        kind: ImportErrorKind, message: str, protocol: Optional[ProtocolKind] = None
    ) -> ImportResult:
        protocol_name = protocol.value if protocol is not None else None
        return ImportResult(
            error=ImportFailure(kind=kind, message=message, protocol=protocol_name),
            protocol_detected=protocol_name or ProtocolKind.UNKNOWN.value,
        )

    def import_config(self, config_text: str) -> ImportResult:
        """
        Import a single VPN configuration.

        Args:
            config_text: The raw configuration file content.

        Returns:
            An `ImportResult` holding either the profile or the failure.
        """
        if not config_text or not config_text.strip():
            return self._failure(
                ImportErrorKind.EMPTY_CONTENT, "Empty configuration content"
            )

        logger.debug("Importing VPN configuration, length: %d", len(config_text))
        protocol = classify(config_text)
        if protocol is ProtocolKind.UNKNOWN:
            return self._failure(
                ImportErrorKind.PROTOCOL_IDENTIFICATION_FAILED,
                "Unable to identify VPN protocol from configuration content",
                ProtocolKind.UNKNOWN,
            )

        extractor = self.extractors.get(protocol)
        if extractor is None:
            logger.warning("No extractor registered for protocol %s", protocol.value)
            return self._failure(
                ImportErrorKind.UNSUPPORTED_PROTOCOL,
                f"Unsupported VPN protocol: {protocol.value}",
                protocol,
            )

        result = extractor(config_text).extract()
        if not result.success:
            return self._failure(
                ImportErrorKind.PARSING_FAILED,
                f"Failed to parse {protocol.value} configuration: {result.error}",
                protocol,
            )

        if result.profile is None or not result.profile.server:
            return self._failure(
                ImportErrorKind.MISSING_PROFILE_DATA,
                f"Parser failed to extract profile data from {protocol.value} configuration",
                protocol,
            )

        logger.info(
            "Imported %s profile for server: %s", protocol.value, result.profile.server
        )
        return ImportResult(profile=result.profile, protocol_detected=protocol.value)


def import_config(config_text: str) -> ImportResult:
    """Import ``config_text`` with the default set of extractors."""
    return ImportManager().import_config(config_text)
