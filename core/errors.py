"""Scan failure taxonomy.

A scan either returns a full report or raises :class:`ScanError`; partial reports
are never produced. Remediation hints shown to users depend on the category alone.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(str, Enum):
    NETWORK = "network"
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    SERVER_ERROR = "server_error"
    TIMEOUT = "timeout"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


# HTTP status of the main page -> (category, message)
STATUS_ERRORS = {
    404: (ErrorCategory.NOT_FOUND, "Website not found. Please check the domain name."),
    403: (ErrorCategory.ACCESS_DENIED, "Access denied. The website may be blocking our scanner."),
    500: (ErrorCategory.SERVER_ERROR, "The website server encountered an error."),
    502: (ErrorCategory.SERVER_ERROR, "Bad gateway. The website may be temporarily unavailable."),
    503: (ErrorCategory.SERVER_ERROR, "Service unavailable. The website may be down for maintenance."),
    504: (ErrorCategory.TIMEOUT, "Gateway timeout. The website is not responding."),
}

# Response status used when the error is served over HTTP
CATEGORY_HTTP_STATUS = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.NETWORK: 503,
    ErrorCategory.UNKNOWN: 500,
}

SUGGESTIONS: Dict[ErrorCategory, List[str]] = {
    ErrorCategory.NETWORK: [
        "Check your internet connection",
        "Try again in a few moments",
        "Disable any VPN or proxy temporarily",
    ],
    ErrorCategory.NOT_FOUND: [
        "Verify the domain name is correct",
        "Make sure the website is online",
        'Try with or without "www" prefix',
    ],
    ErrorCategory.ACCESS_DENIED: [
        "The website may be blocking automated requests",
        "Try again later",
        "Some websites restrict access to scanners",
    ],
    ErrorCategory.SERVER_ERROR: [
        "Our scanning service encountered an issue",
        "Please try again in a few minutes",
        "Contact support if the problem persists",
    ],
    ErrorCategory.TIMEOUT: [
        "The website is taking too long to respond",
        "Try again with a faster website",
        "Some websites may be slow or overloaded",
    ],
}

DEFAULT_SUGGESTIONS = [
    "Please try again",
    "Contact support if the problem continues",
]

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred while scanning the website"
EMPTY_CONTENT_MESSAGE = "Website returned empty content"
INVALID_DOMAIN_MESSAGE = "Invalid domain format. Please enter a valid domain name (e.g., example.com)"


class ScanError(Exception):
    """A scan that could not produce a report."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        domain: Optional[str] = None,
        http_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.domain = domain
        self.http_status = http_status or CATEGORY_HTTP_STATUS.get(category, 500)
        self.timestamp = datetime.now(timezone.utc).isoformat()

    @classmethod
    def from_status(cls, status_code: int, reason: str, domain: Optional[str] = None) -> "ScanError":
        """Error for a non-2xx main page response."""
        if status_code in STATUS_ERRORS:
            category, message = STATUS_ERRORS[status_code]
        else:
            category = ErrorCategory.SERVER_ERROR if 500 <= status_code < 600 else ErrorCategory.UNKNOWN
            message = f"HTTP {status_code}: {reason}"
        return cls(message, category=category, domain=domain, http_status=status_code)

    @property
    def suggestions(self) -> List[str]:
        return suggestions_for(self.category)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "category": self.category.value,
            "domain": self.domain,
            "timestamp": self.timestamp,
            "success": False,
        }

    def __repr__(self) -> str:
        return f"ScanError({self.message!r}, category={self.category.value!r}, http_status={self.http_status})"


def suggestions_for(category: ErrorCategory) -> List[str]:
    return list(SUGGESTIONS.get(category, DEFAULT_SUGGESTIONS))
