# VPNImport
# Copyright (C) 2025 Amirreza "Farnam" Taheri
# This program comes with ABSOLUTELY NO WARRANTY; for details type `show w`.
# This is free software, and you are welcome to redistribute it
# under certain conditions; type `show c` for details.
# For more information, see <https://amirrezafarnamtaheri.github.io/configStream/>.

"""Custom exception types for the VPNImport application."""


class VpnImportError(Exception):
    """Base exception class for all application-specific errors."""

    pass


class ParserError(VpnImportError):
    """Raised when an extractor cannot assemble a valid connection profile."""

    pass


class ConfigError(VpnImportError):
    """Raised for configuration-related errors."""

    pass
