# utils/sanitization.py
from typing import Optional
import hashlib
import re

CONTROL_CHARS = r"[\x00-\x08\x0b-\x0c\x0e-\x1f\x7f-\x9f]"


def clean_text(value: Optional[str]) -> str:
    if value is None:
        return ""

    text = re.sub(CONTROL_CHARS, "", str(value))
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def slugify(value: Optional[str]) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (value or "").lower()).strip("-")


def hash_email(email: str) -> str:
    """SHA-256 of the normalized email, for logs."""
    return hashlib.sha256(email.lower().strip().encode("utf-8")).hexdigest()


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
