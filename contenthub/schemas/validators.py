# contenthub/schemas/validators.py
from typing import Optional


def require_text(value: Optional[str]) -> str:
    """Reject missing or whitespace-only text; return it trimmed"""
    if value is None or not value.strip():
        raise ValueError("must not be blank")
    return value.strip()
