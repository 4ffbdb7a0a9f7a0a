"""
VPNImport - VPN Configuration Import Engine

This package identifies the dialect of an uploaded VPN client configuration
(OpenVPN, IKEv2/IPsec or WireGuard) and extracts a normalized connection
profile from it.
"""

__version__ = "1.0.0"
__author__ = "Amirreza 'Farnam' Taheri"

# Import key components to be available at the package level
from .core import ImportManager, classify, detect_protocol, import_config
from .models import (
    ConnectionProfile,
    ImportErrorKind,
    ImportFailure,
    ImportResult,
    ProtocolKind,
)

# Define the public API of the package
__all__ = [
    "ConnectionProfile",
    "ImportErrorKind",
    "ImportFailure",
    "ImportManager",
    "ImportResult",
    "ProtocolKind",
    "classify",
    "detect_protocol",
    "import_config",
    "__version__",
    "__author__",
]
