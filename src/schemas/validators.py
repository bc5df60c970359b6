"""
Shared validation functions for Pydantic schemas.

Length limits come from Settings so they can be tuned per deployment.
"""
from core.config import get_settings


def reject_null(value: object, field: str) -> object:
    """
    Reject an explicit null for a field that is optional only in PATCH bodies.

    Omitting the field leaves it unchanged; sending null would clear a
    required column, which is never allowed.
    """
    if value is None:
        raise ValueError(f"{field} cannot be null")
    return value


def validate_title_length(title: str | None) -> str | None:
    """Validate that title doesn't exceed maximum length."""
    settings = get_settings()
    if title is not None and len(title) > settings.max_title_length:
        raise ValueError(
            f"Title exceeds maximum length of {settings.max_title_length:,} characters "
            f"(got {len(title):,} characters).",
        )
    return title


def validate_description_length(description: str | None) -> str | None:
    """Validate that description doesn't exceed maximum length."""
    settings = get_settings()
    if description is not None and len(description) > settings.max_description_length:
        max_len = settings.max_description_length
        raise ValueError(
            f"Description exceeds maximum length of {max_len:,} characters "
            f"(got {len(description):,} characters).",
        )
    return description


def validate_link_length(link: str | None) -> str | None:
    """Validate that link doesn't exceed maximum length."""
    settings = get_settings()
    if link is not None and len(link) > settings.max_link_length:
        raise ValueError(
            f"Link exceeds maximum length of {settings.max_link_length:,} characters "
            f"(got {len(link):,} characters).",
        )
    return link
