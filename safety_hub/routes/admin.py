"""
Admin endpoints - complaint review and status moderation.

SCOPE OF ADMIN:
- List every complaint, newest first
- Search by text, email or location; filter by status
- Move a complaint to any other status

NOT in scope:
- Editing complaint content
- Deleting complaints
- Contacting the complainant
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from safety_hub.models.base import Notification
from safety_hub.models.complaint import (
    ComplaintListResponse,
    ComplaintStats,
    StatusUpdateRequest,
    StatusUpdateResponse,
)
from safety_hub.routes.deps import current_admin_dashboard
from safety_hub.services.dashboard_service import AdminDashboard
from safety_hub.services.status_workflow import StatusWorkflowEngine

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/complaints", response_model=ComplaintListResponse)
async def get_complaints(
    search: Optional[str] = Query(None, max_length=200, description="Matches complaint text, email or location"),
    status: Optional[str] = Query(None, description="submitted, in-progress, resolved, closed or all"),
    refresh: bool = Query(False, description="Re-fetch all complaints from the store"),
    dashboard: AdminDashboard = Depends(current_admin_dashboard),
):
    """
    Filtered complaint list.

    Search term and status filter are remembered between calls, like the
    inputs on the admin page; omit a parameter to keep its current value.
    """
    if refresh:
        dashboard.load()
    dashboard.set_filters(search_term=search, status_filter=status)

    return ComplaintListResponse(
        complaints=dashboard.filtered,
        total=len(dashboard.complaints),
        search=dashboard.search_term,
        status_filter=dashboard.status_filter,
    )


@router.get("/stats", response_model=ComplaintStats)
async def get_stats(dashboard: AdminDashboard = Depends(current_admin_dashboard)):
    return dashboard.stats


@router.patch("/complaints/{complaint_id}/status", response_model=StatusUpdateResponse)
async def change_status(
    complaint_id: str,
    request: StatusUpdateRequest,
    dashboard: AdminDashboard = Depends(current_admin_dashboard),
):
    """
    Change a complaint's status.

    Any status can move to any other; repeating the current status is a
    no-op that still succeeds.
    """
    complaint = dashboard.update_status(complaint_id, request.status)
    return StatusUpdateResponse(
        notification=Notification.success("Complaint status updated successfully"),
        complaint=complaint,
        available_transitions=StatusWorkflowEngine.get_allowed_transitions(complaint.status),
    )
