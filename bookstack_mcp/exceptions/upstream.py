"""Exceptions raised by the BookStack API client."""

from typing import Any, Dict, Optional

from .base import BookStackMcpError


class BookStackApiError(BookStackMcpError):
    """Raised when the BookStack API answers with a non-success status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        merged = {"status_code": status_code}
        merged.update(details or {})
        super().__init__(code="UPSTREAM_ERROR", message=message, details=merged)
        self.status_code = status_code
