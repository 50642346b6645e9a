"""
Admin-side search, status filter and counts over a complaint list.
"""

from typing import Iterable, List, Optional

from safety_hub.models.complaint import Complaint, ComplaintStats, ComplaintStatus

STATUS_FILTER_ALL = "all"


def matches_search(complaint: Complaint, search_term: str) -> bool:
    """Case-insensitive substring match on text OR email OR location."""
    term = search_term.lower()
    return (
        term in complaint.complaint.lower()
        or term in complaint.user_email.lower()
        or term in complaint.location.lower()
    )


def filter_complaints(
    complaints: Iterable[Complaint],
    search_term: Optional[str] = None,
    status_filter: Optional[str] = STATUS_FILTER_ALL,
) -> List[Complaint]:
    """
    Apply the search term and the status filter, keeping list order.

    An empty search term and the "all" status filter disable their step.
    """
    filtered = list(complaints)

    if search_term:
        filtered = [c for c in filtered if matches_search(c, search_term)]

    if status_filter and status_filter != STATUS_FILTER_ALL:
        filtered = [c for c in filtered if c.status.value == status_filter]

    return filtered


def complaint_stats(complaints: Iterable[Complaint]) -> ComplaintStats:
    stats = ComplaintStats()
    for complaint in complaints:
        stats.total += 1
        if complaint.status == ComplaintStatus.SUBMITTED:
            stats.submitted += 1
        elif complaint.status == ComplaintStatus.IN_PROGRESS:
            stats.in_progress += 1
        elif complaint.status == ComplaintStatus.RESOLVED:
            stats.resolved += 1
        elif complaint.status == ComplaintStatus.CLOSED:
            stats.closed += 1
    return stats
