# VPNImport
# Copyright (C) 2025 Amirreza "Farnam" Taheri
# This program comes with ABSOLUTELY NO WARRANTY; for details type `show w`.
# This is free software, and you are welcome to redistribute it
# under certain conditions; type `show c` for details.
# For more information, see <https://amirrezafarnamtaheri.github.io/configStream/>.

"""Protocol-specific detectors and extractors for VPN configuration files.

This package contains one module per supported dialect (OpenVPN, IKEv2 and
WireGuard). Each module provides a detector, which decides whether a raw
configuration text looks like its dialect, and an extractor, which turns a
matching text into a normalized `ConnectionProfile`.

Detectors and extractors are constructed around a single input text and keep
no state beyond it, so they can be used from any number of threads at once.
"""
from __future__ import annotations

from .ikev2 import Ikev2Detector, Ikev2Extractor
from .openvpn import OpenVpnDetector, OpenVpnExtractor
from .wireguard import WireGuardDetector, WireGuardExtractor

__all__ = [
    "Ikev2Detector",
    "Ikev2Extractor",
    "OpenVpnDetector",
    "OpenVpnExtractor",
    "WireGuardDetector",
    "WireGuardExtractor",
]
