import logging
from typing import List, Optional


logger = logging.getLogger(__name__)

REQUIRED_CONTACT_FIELDS = ("name", "email", "message")


class ContactValidationError(ValueError):
    def __init__(self, missing: List[str]):
        super().__init__(f"Missing required contact fields: {', '.join(missing)}")
        self.missing = missing


def missing_contact_fields(name: Optional[str], email: Optional[str], message: Optional[str]) -> List[str]:
    values = {"name": name, "email": email, "message": message}
    # Only absent or empty values count; whitespace is left to the backend
    return [field for field in REQUIRED_CONTACT_FIELDS if not values[field]]


def validate_contact_fields(name: Optional[str], email: Optional[str], message: Optional[str]) -> None:
    missing = missing_contact_fields(name, email, message)
    if missing:
        logger.info(f"Contact form rejected, missing fields: {missing}")
        raise ContactValidationError(missing)
