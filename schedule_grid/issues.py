"""
Data-quality ledger for one layout computation.

Bad records are skipped, not raised. This log remembers what was skipped
or tolerated and why, so the caller can surface it.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from models import DataIssue

logger = logging.getLogger(__name__)

MALFORMED_INTERVAL = "MalformedInterval"
SHIFT_OVERLAP = "ShiftOverlap"
DOUBLE_BOOKING = "DoubleBooking"
UNKNOWN_RESOURCE = "UnknownResource"


class IssueLog:
    """Collects DataIssues. A fresh instance is used per grid computation."""

    def __init__(self):
        self.issues: List[DataIssue] = []

    def record(self, issue_type: str, reason: str, record_id: str, resource_id: Optional[str] = None) -> DataIssue:
        issue = DataIssue(
            issue_type=issue_type,
            reason=reason,
            record_id=record_id,
            resource_id=resource_id
        )
        logger.warning(f"{issue_type}: {reason} (record {record_id})")
        self.issues.append(issue)
        return issue

    def counts(self) -> Dict[str, int]:
        summary: Dict[str, int] = defaultdict(int)
        for issue in self.issues:
            summary[issue.issue_type] += 1
        return dict(summary)

    def __len__(self) -> int:
        return len(self.issues)
