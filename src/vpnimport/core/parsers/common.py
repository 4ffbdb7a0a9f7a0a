from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Tuple

from ...constants import MAX_PROFILE_NAME_LENGTH
from ...exceptions import ParserError
from ...models import ConnectionProfile, DetectionOutcome, ExtractResult, ProtocolKind

logger = logging.getLogger(__name__)

_COMMENT_LINE_RE = re.compile(r"^[ \t]*#+[ \t]*([^#\r\n]*)", re.MULTILINE)


class BaseDetector(ABC):
    """
    Abstract base class for protocol detectors.

    A detector is built around one input text and answers a single question:
    does the text look like this detector's dialect? Detection never raises.
    """

    kind: ProtocolKind = ProtocolKind.UNKNOWN

    def __init__(self, config_text: str):
        self.config_text = config_text

    @abstractmethod
    def detect(self) -> bool:
        """Return True if the text matches this detector's dialect."""
        raise NotImplementedError

    def outcome(self) -> DetectionOutcome:
        return DetectionOutcome(kind=self.kind, matched=self.detect())

    def count_keywords(self, haystack: str, keywords: Iterable[str]) -> int:
        """Count how many of ``keywords`` occur in ``haystack``."""
        matches = 0
        for keyword in keywords:
            if keyword in haystack:
                matches += 1
                logger.debug("[%s] found keyword: %r", self.kind.value, keyword)
        return matches


class BaseExtractor(ABC):
    """Abstract base class for protocol extractors."""

    kind: ProtocolKind = ProtocolKind.UNKNOWN
    default_port: int = 0

    def __init__(self, config_text: str):
        self.config_text = config_text

    @abstractmethod
    def parse(self) -> Optional[ConnectionProfile]:
        """
        Build the connection profile for the configuration text.

        Raises:
            ParserError: If a mandatory field is missing or invalid.
        """
        raise NotImplementedError

    def extract(self) -> ExtractResult:
        """
        Run the extractor and wrap its outcome.

        Parser errors are turned into a failed result so that callers only
        ever deal with values.
        """
        try:
            profile = self.parse()
        except ParserError as exc:
            logger.debug("[%s] extraction failed: %s", self.kind.value, exc)
            return ExtractResult.failed(str(exc))
        if profile is not None:
            logger.debug(
                "[%s] extracted profile for server: %s", self.kind.value, profile.server
            )
        return ExtractResult.ok(profile)

    @staticmethod
    def sanitize_str(value: Any) -> Any:
        """Strip whitespace and remove newlines from string values."""
        if isinstance(value, str):
            return value.strip().replace("\n", "").replace("\r", "")
        return value

    @staticmethod
    def strip_quotes(value: str) -> str:
        """Remove one pair of matching surrounding quotes."""
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            return value[1:-1]
        return value

    @staticmethod
    def extract_value(
        section: str, key: str, to_end_of_line: bool = False, ignore_case: bool = False
    ) -> str:
        """
        Return the value of the first ``key = value`` assignment in ``section``.

        The value is a run of non-whitespace characters, or the rest of the
        line when ``to_end_of_line`` is set. Missing keys yield an empty string.
        """
        value_re = r"([^\r\n]+)" if to_end_of_line else r"(\S+)"
        pattern = r"(?<![\w-])" + re.escape(key) + r"[ \t]*=[ \t]*" + value_re
        match = re.search(pattern, section, re.IGNORECASE if ignore_case else 0)
        if not match:
            return ""
        return BaseExtractor.strip_quotes(match.group(1).strip())

    @staticmethod
    def coerce_port(value: str, default: int) -> int:
        """
        Convert ``value`` to a port number.

        Empty or non-numeric values fall back to ``default``.

        Raises:
            ParserError: If the value is numeric but not a valid port.
        """
        value = value.strip()
        if not value.isdigit():
            return default
        port = int(value)
        if not 1 <= port <= 65535:
            raise ParserError(f"Port out of range: {port}")
        return port

    @staticmethod
    def split_endpoint(endpoint: str, default_port: int) -> Tuple[str, int]:
        """
        Split ``host:port`` or ``[ipv6]:port`` into its host and port.

        Raises:
            ParserError: If a bracketed IPv6 host is not terminated.
        """
        endpoint = endpoint.strip()
        if endpoint.startswith("["):
            close = endpoint.find("]")
            if close == -1:
                raise ParserError(f"Unterminated IPv6 address in endpoint: {endpoint}")
            host = endpoint[1:close]
            rest = endpoint[close + 1:]
            port_str = rest[1:] if rest.startswith(":") else ""
        elif ":" in endpoint:
            host, port_str = endpoint.rsplit(":", 1)
        else:
            host, port_str = endpoint, ""
        return host.strip(), BaseExtractor.coerce_port(port_str, default_port)

    @staticmethod
    def comment_name(content: str) -> str:
        """Return the first comment line short enough to serve as a profile name."""
        for match in _COMMENT_LINE_RE.finditer(content):
            comment = match.group(1).strip()
            if comment and len(comment) < MAX_PROFILE_NAME_LENGTH:
                return comment
        return ""
