"""Protocol classification and profile extraction engine."""
from __future__ import annotations

from .classifier import classify, detect_all, detect_protocol
from .import_manager import ImportManager, import_config

__all__ = [
    "ImportManager",
    "classify",
    "detect_all",
    "detect_protocol",
    "import_config",
]
