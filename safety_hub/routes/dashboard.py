"""
User dashboard endpoints - complaints, evidence, location, SOS, tips.

All endpoints require a signed-in user.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, File, UploadFile, status
import logging

from safety_hub.models.base import Notification
from safety_hub.models.complaint import (
    LOCATION_UNAVAILABLE,
    Complaint,
    ComplaintCreate,
    ComplaintFiledResponse,
)
from safety_hub.models.dashboard import (
    DashboardResponse,
    DevicePosition,
    EmergencyAlertResponse,
    EvidenceUploadResponse,
    LocationResponse,
    SafetyTipResponse,
)
from safety_hub.routes.deps import current_user_dashboard
from safety_hub.services import safety_tips
from safety_hub.services.alert_service import trigger_emergency_alert
from safety_hub.services.contacts_service import TrustedContactList, get_contact_list
from safety_hub.services.dashboard_service import UserDashboard
from safety_hub.services.evidence_service import EvidenceFile, EvidenceUploader, get_evidence_uploader

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def _tip(dashboard: UserDashboard) -> SafetyTipResponse:
    return SafetyTipResponse(
        index=dashboard.tip_index,
        total=len(safety_tips.SAFETY_TIPS),
        tip=dashboard.tip,
    )


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    dashboard: UserDashboard = Depends(current_user_dashboard),
    contacts: TrustedContactList = Depends(get_contact_list),
):
    """Everything the dashboard page renders on mount."""
    return DashboardResponse(
        email=dashboard.identity.email,
        location=dashboard.location,
        uploading=dashboard.uploading,
        evidence_files=dashboard.evidence_files,
        complaints=dashboard.complaints,
        trusted_contacts=contacts.contacts,
        tip=_tip(dashboard),
    )


@router.get("/complaints", response_model=List[Complaint])
async def get_my_complaints(dashboard: UserDashboard = Depends(current_user_dashboard)):
    return dashboard.refresh_complaints()


@router.post("/complaints", response_model=ComplaintFiledResponse, status_code=status.HTTP_201_CREATED)
async def submit_complaint(
    request: ComplaintCreate,
    dashboard: UserDashboard = Depends(current_user_dashboard),
):
    """
    File a complaint with the current location and all evidence uploaded
    so far. Clears the pending evidence and returns the refreshed list.
    """
    complaint = dashboard.file_complaint(request.complaint)
    logger.info(f"Complaint {complaint.id} filed by {dashboard.identity.uid}")
    return ComplaintFiledResponse(
        notification=Notification.success("Your complaint has been filed successfully."),
        complaint=complaint,
        complaints=dashboard.complaints,
    )


@router.post("/evidence", response_model=EvidenceUploadResponse)
async def upload_evidence(
    files: List[UploadFile] = File(..., description="Images, video or audio"),
    dashboard: UserDashboard = Depends(current_user_dashboard),
    uploader: EvidenceUploader = Depends(get_evidence_uploader),
):
    """
    Upload a batch of evidence files concurrently.

    Files that uploaded are kept even when others in the batch failed.
    """
    batch = [
        # At most one byte past the cap, enough for the uploader to reject it
        EvidenceFile(
            filename=f.filename or "evidence",
            data=await f.read(uploader.max_bytes + 1),
            content_type=f.content_type,
        )
        for f in files
    ]
    result = await dashboard.upload_evidence(uploader, batch)

    if result.failed:
        notification = Notification.error("Failed to upload files. Please try again.")
    else:
        notification = Notification.success(f"{len(batch)} file(s) uploaded successfully.")

    return EvidenceUploadResponse(
        success=not result.failed,
        notification=notification,
        uploaded=result.urls,
        failed=len(result.failures),
        evidence_files=dashboard.evidence_files,
    )


@router.delete("/evidence", response_model=EvidenceUploadResponse)
async def discard_evidence(dashboard: UserDashboard = Depends(current_user_dashboard)):
    dashboard.discard_evidence()
    return EvidenceUploadResponse(evidence_files=dashboard.evidence_files)


@router.post("/location", response_model=LocationResponse)
async def update_location(
    position: Optional[DevicePosition] = Body(None),
    dashboard: UserDashboard = Depends(current_user_dashboard),
):
    """
    Record the browser's one-shot geolocation result. Send no body when
    the device has no geolocation support.
    """
    location = dashboard.set_location(position)
    return LocationResponse(location=location, available=location != LOCATION_UNAVAILABLE)


@router.post("/emergency", response_model=EmergencyAlertResponse)
async def emergency_alert(
    dashboard: UserDashboard = Depends(current_user_dashboard),
    contacts: TrustedContactList = Depends(get_contact_list),
):
    """SOS button. Simulated: nothing is dispatched."""
    alert = trigger_emergency_alert(dashboard.identity, dashboard.location, contacts.contacts)
    return EmergencyAlertResponse(
        notification=alert.notification,
        dispatched=alert.dispatched,
        location=alert.location,
        trusted_contacts=alert.trusted_contacts,
    )


@router.get("/tips", response_model=SafetyTipResponse)
async def get_tip(dashboard: UserDashboard = Depends(current_user_dashboard)):
    return _tip(dashboard)


@router.post("/tips/next", response_model=SafetyTipResponse)
async def next_tip(dashboard: UserDashboard = Depends(current_user_dashboard)):
    dashboard.next_tip()
    return _tip(dashboard)


@router.post("/tips/prev", response_model=SafetyTipResponse)
async def prev_tip(dashboard: UserDashboard = Depends(current_user_dashboard)):
    dashboard.prev_tip()
    return _tip(dashboard)
