"""Hashing utilities for citeparse."""

import hashlib

__all__ = ["format_sha256", "calculate_string_sha256", "reference_id"]


def format_sha256(hex_digest: str) -> str:
    """Format SHA256 hash with standard prefix."""
    return f"sha256:{hex_digest}"


def calculate_string_sha256(text: str) -> str:
    """Calculate SHA256 hash of a UTF-8 string.

    Returns
    -------
    str
        SHA256 hash with "sha256:" prefix.
    """
    return format_sha256(hashlib.sha256(text.encode("utf-8")).hexdigest())


def reference_id(reference: str) -> str:
    """Stable short identifier of a reference string for audit events.

    Examples
    --------
        >>> reference_id("Doe, J. Title. 2001.")[:4]
        'ref:'
    """
    return "ref:" + hashlib.sha256(reference.strip().encode("utf-8")).hexdigest()[:16]
