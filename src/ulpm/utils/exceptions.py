"""Custom exceptions for ulpm.

This module defines a hierarchy of exceptions for different error types:
- UlpmError: Base exception for all ulpm errors
- ManifestError: Manifest read/validation errors
- ConfigurationError: Configuration related errors
- LicenseDownloadError: License text download errors (with optional status code)
- CommandError: Package manager command errors
"""

from typing import Optional


class UlpmError(Exception):
    """Base exception for all ulpm errors.

    All ulpm-specific exceptions inherit from this class, allowing
    the CLI to report every expected failure with a single except clause.
    """

    pass


class ManifestError(UlpmError):
    """Manifest related errors.

    Raised when the project manifest cannot be used, such as:
    - Unparseable JSON
    - Missing or non-string fields
    - Language, package manager or license outside the catalog
    """

    pass


class ConfigurationError(UlpmError):
    """Configuration related errors.

    Raised when configuration is invalid or refers to unknown entries,
    such as an unsupported package manager name.
    """

    pass


class LicenseDownloadError(UlpmError):
    """License text download errors.

    Attributes:
        status_code: Optional HTTP status code of the failed response
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CommandError(UlpmError):
    """Package manager command errors.

    Attributes:
        returncode: Exit status of the failed process, if it ran at all
    """

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode
