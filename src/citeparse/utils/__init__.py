"""Common utility functions for citeparse.

Timestamps and hashing shared by the audit logger and the CLI.
"""

from citeparse.utils.hashing import calculate_string_sha256, format_sha256, reference_id
from citeparse.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_string_sha256",
    "format_sha256",
    "reference_id",
]
