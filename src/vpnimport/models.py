"""Data types shared by the detectors, extractors and the import manager."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ProtocolKind(str, Enum):
    """The VPN dialects the engine can recognise."""

    OPENVPN = "OpenVPN"
    IKEV2 = "IKEv2"
    WIREGUARD = "WireGuard"
    UNKNOWN = "Unknown"


class ImportErrorKind(str, Enum):
    """Reasons an import can fail."""

    EMPTY_CONTENT = "EMPTY_CONTENT"
    PROTOCOL_IDENTIFICATION_FAILED = "PROTOCOL_IDENTIFICATION_FAILED"
    UNSUPPORTED_PROTOCOL = "UNSUPPORTED_PROTOCOL"
    PARSING_FAILED = "PARSING_FAILED"
    MISSING_PROFILE_DATA = "MISSING_PROFILE_DATA"


@dataclass(frozen=True)
class DetectionOutcome:
    """Verdict of a single detector for one input."""

    kind: ProtocolKind
    matched: bool


@dataclass
class ConnectionProfile:
    """Normalized connection settings extracted from a VPN configuration."""

    name: str
    server: str
    protocol: str
    port: int
    auth_method: str
    encryption: str
    username: str = ""
    password: str = ""
    compression: bool = False
    protocol_specific: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ImportFailure:
    """
    Describes why an import did not produce a profile.

    Attributes:
        kind: The failure category.
        message: A human readable explanation.
        protocol: The protocol the classifier settled on, if any.
    """

    kind: ImportErrorKind
    message: str
    protocol: Optional[str] = None


@dataclass(frozen=True)
class ExtractResult:
    """
    Outcome of a single extractor run: a profile or an error message.

    A successful result without a profile is representable on purpose; the
    import manager reports it as missing profile data.
    """

    profile: Optional[ConnectionProfile] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if self.profile is not None and self.error is not None:
            raise ValueError("ExtractResult cannot carry both a profile and an error")

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, profile: Optional[ConnectionProfile]) -> "ExtractResult":
        return cls(profile=profile)

    @classmethod
    def failed(cls, message: str) -> "ExtractResult":
        return cls(error=message)


@dataclass(frozen=True)
class ImportResult:
    """
    Outcome of importing one configuration text.

    Exactly one of ``profile`` and ``error`` is set. ``protocol_detected``
    carries the classifier's verdict whenever one was reached.
    """

    profile: Optional[ConnectionProfile] = None
    error: Optional[ImportFailure] = None
    protocol_detected: str = ProtocolKind.UNKNOWN.value

    def __post_init__(self) -> None:
        if (self.profile is None) == (self.error is None):
            raise ValueError("ImportResult needs exactly one of profile or error")

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Render the result in the response shape used by the web service."""
        if self.error is not None:
            data: Dict[str, Any] = {
                "success": False,
                "error": self.error.message,
                "error_type": self.error.kind.value,
            }
            if self.error.protocol is not None:
                data["protocol_detected"] = self.error.protocol
            return data
        return {
            "success": True,
            "protocol_detected": self.protocol_detected,
            "parser_used": self.protocol_detected,
            "profile_data": self.profile.to_dict(),
        }
