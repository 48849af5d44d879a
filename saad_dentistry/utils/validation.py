"""
Validation utilities for identifiers.
"""

import re
import secrets
from typing import Optional

from ..core.exceptions import InvalidRequest

_OBJECT_ID_RE = re.compile(r"^[0-9a-f]{24}$")


class ValidationUtils:
    """Validation helpers for request identifiers."""

    @staticmethod
    def is_valid_id(value: Optional[str]) -> bool:
        """
        Check whether a value has the shape of a record identifier.

        Identifiers are 24 lower-case hex characters, the same shape as a
        MongoDB ObjectId.
        """
        return isinstance(value, str) and bool(_OBJECT_ID_RE.match(value))

    @staticmethod
    def require_id(value: Optional[str], field: str) -> str:
        """
        Return ``value`` unchanged if it is a valid identifier.

        Raises:
            InvalidRequest: if the value is missing or malformed
        """
        if not value:
            raise InvalidRequest(f"{field} is required")
        if not ValidationUtils.is_valid_id(value):
            raise InvalidRequest(f"Invalid {field}: {value!r}")
        return value

    @staticmethod
    def require_text(value: Optional[str], field: str) -> str:
        """Return stripped ``value``, rejecting blanks."""
        if not value or not value.strip():
            raise InvalidRequest(f"{field} is required")
        return value.strip()

    @staticmethod
    def new_id() -> str:
        """Generate a fresh identifier."""
        return secrets.token_hex(12)
