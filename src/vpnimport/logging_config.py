from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional


class SensitiveDataFilter(logging.Filter):
    """Filter to mask key material and credentials in logs"""

    PATTERNS = {
        "wireguard_key": r"((?:Private|Preshared)Key\s*=\s*)\S+",
        "credential": r"((?:password|secret|psk|token)\s*[=:]\s*)\S+",
        "pem_block": r"-----BEGIN [A-Z0-9 ]+-----.*?-----END [A-Z0-9 ]+-----",
        "email": r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}",
        "ip": r"\b(?:\d{1,3}\.){3}\d{1,3}\b",
    }

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()

        # Mask private and pre-shared keys
        message = re.sub(self.PATTERNS["wireguard_key"], r"\1[MASKED_KEY]", message)

        # Mask passwords and secrets
        message = re.sub(
            self.PATTERNS["credential"], r"\1[MASKED_CREDENTIAL]", message, flags=re.IGNORECASE
        )

        # Mask embedded certificates and keys
        message = re.sub(self.PATTERNS["pem_block"], "[MASKED_PEM]", message, flags=re.DOTALL)

        # Mask emails
        message = re.sub(self.PATTERNS["email"], "[MASKED_EMAIL]", message)

        # Keep IPs for debugging but could mask if needed
        # message = re.sub(self.PATTERNS['ip'], '[MASKED_IP]', message)

        record.msg = message
        record.args = ()
        return True


def setup_logging(
    log_level: str = "INFO", mask_sensitive: bool = True, log_file: Optional[Path] = None
):
    """Setup logging with optional sensitive data filtering"""

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    sensitive_filter = SensitiveDataFilter() if mask_sensitive else None

    # Add new handlers
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        # Root filters never see records propagated from module loggers
        if sensitive_filter is not None:
            handler.addFilter(sensitive_filter)
        root_logger.addHandler(handler)

    # Add filter if requested
    if sensitive_filter is not None:
        # Avoid adding filter if it already exists
        if not any(isinstance(f, SensitiveDataFilter) for f in root_logger.filters):
            root_logger.addFilter(sensitive_filter)
