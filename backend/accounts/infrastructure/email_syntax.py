"""Email Syntax Validation — format-only check via email-validator.

Invariants:
    - Never performs DNS or deliverability lookups
    - is_valid never raises for string input

Design Decisions:
    - email-validator over a hand-written regex: same library pydantic's EmailStr uses
"""

import logging

from email_validator import EmailNotValidError, validate_email

logger = logging.getLogger(__name__)


class EmailSyntaxValidator:
    """Checks that an address is syntactically valid."""

    def is_valid(self, email: str) -> bool:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            logger.debug(f"Rejected email syntax: {e}")
            return False
        return True
