"""Validation utilities for shortlink."""

from urllib.parse import urlparse
from typing import Tuple

# Matches the slug column width in the durable store
SLUG_MAX_LENGTH = 50
URL_MAX_LENGTH = 2048


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a target URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "URL is required"

    if len(url) > URL_MAX_LENGTH:
        return False, f"URL is too long (max {URL_MAX_LENGTH} characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    # Check if scheme is http or https
    if result.scheme not in ["http", "https"]:
        return False, "URL must use http or https protocol"

    # Check if netloc (domain) exists
    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def is_valid_slug(slug: str) -> Tuple[bool, str]:
    """Validate a caller-supplied slug.

    Caller slugs aren't limited to the generator alphabet. They only have to
    fit the durable key column and be addressable as a single path segment.

    Args:
        slug: The slug to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not slug or not isinstance(slug, str):
        return False, "Slug is required"

    if len(slug) > SLUG_MAX_LENGTH:
        return False, f"Slug must be at most {SLUG_MAX_LENGTH} characters"

    if "/" in slug or slug != slug.strip():
        return False, "Slug can't contain slashes or surrounding whitespace"

    return True, ""
