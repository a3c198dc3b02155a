"""Audit logging subsystem for citeparse.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: run identifier factory
"""

from citeparse.audit.helpers import generate_run_id, get_package_version
from citeparse.audit.logger import AuditLogger
from citeparse.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
    "get_package_version",
]
