from __future__ import annotations

import logging
from typing import Dict, List, Tuple, Type

from ..models import DetectionOutcome, ProtocolKind
from .parsers.common import BaseDetector
from .parsers.ikev2 import Ikev2Detector
from .parsers.openvpn import OpenVpnDetector
from .parsers.wireguard import WireGuardDetector

logger = logging.getLogger(__name__)

# WireGuard first: its section markers are the least likely to collide
DETECTORS: Tuple[Type[BaseDetector], ...] = (
    WireGuardDetector,
    Ikev2Detector,
    OpenVpnDetector,
)


def detect_all(config_text: str) -> List[DetectionOutcome]:
    """Run every detector against ``config_text`` and return their verdicts."""
    return [detector(config_text).outcome() for detector in DETECTORS]


def classify(config_text: str) -> ProtocolKind:
    """
    Identify the VPN dialect of ``config_text``.

    All detectors run unconditionally. A text matched by more than one
    detector is ambiguous and is rejected rather than resolved by priority.

    Returns:
        The single matching protocol, or ``ProtocolKind.UNKNOWN``.
    """
    logger.debug("Starting protocol identification")
    matched = [outcome.kind for outcome in detect_all(config_text) if outcome.matched]

    if len(matched) > 1:
        logger.info(
            "Multiple protocols detected (%s), rejecting ambiguous configuration",
            ", ".join(kind.value for kind in matched),
        )
        return ProtocolKind.UNKNOWN
    if not matched:
        logger.info("No known VPN protocol patterns detected")
        return ProtocolKind.UNKNOWN

    logger.debug("Protocol identified: %s", matched[0].value)
    return matched[0]


def detect_protocol(config_text: str) -> Dict[str, object]:
    """Summarize the classification in the shape used by the web service."""
    kind = classify(config_text)
    identified = kind is not ProtocolKind.UNKNOWN
    return {
        "success": identified,
        "protocol": kind.value,
        "confidence": "high" if identified else "none",
    }
