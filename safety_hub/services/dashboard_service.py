"""
Dashboard service - view state behind the user and admin dashboards.

A UserDashboard exists per signed-in uid and holds what the page would:
the captured location, evidence URLs waiting to be attached, the user's
own complaints and the safety-tip position. The AdminDashboard holds the
full complaint list plus the current search term and status filter.
"""

from typing import Dict, List, Optional
import logging

from safety_hub.core.exceptions import NotFoundError, StoreError, ValidationError
from safety_hub.models.complaint import LOCATION_UNAVAILABLE, Complaint, ComplaintStats, ComplaintStatus
from safety_hub.models.dashboard import DevicePosition
from safety_hub.models.user import Identity
from safety_hub.services import safety_tips
from safety_hub.services.complaint_filter import STATUS_FILTER_ALL, complaint_stats, filter_complaints
from safety_hub.services.complaint_service import ComplaintRepository, file_complaint
from safety_hub.services.evidence_service import EvidenceFile, EvidenceUploader, UploadBatchResult
from safety_hub.services.location_service import capture_location

logger = logging.getLogger(__name__)


class UserDashboard:
    """
    Authenticated user view: complaint filing, evidence, location, tips.
    """

    def __init__(self, identity: Identity, repository: ComplaintRepository):
        self.identity = identity
        self.repository = repository
        self.location = LOCATION_UNAVAILABLE
        self.evidence_files: List[str] = []
        self.uploading = False
        self.complaints: List[Complaint] = []
        self.tip_index = 0
        self.mounted = False

    def mount(self) -> None:
        """
        Load the user's complaints. A failed fetch leaves the list empty so
        the rest of the dashboard (SOS, location, tips) stays usable.
        """
        self.mounted = True
        self._refresh_keeping_previous()

    def refresh_complaints(self) -> List[Complaint]:
        self.complaints = self.repository.list_for_user(self.identity.uid)
        return self.complaints

    def _refresh_keeping_previous(self) -> None:
        try:
            self.refresh_complaints()
        except StoreError as e:
            logger.error(f"Complaint list refresh for {self.identity.uid} failed: {e.message}")

    def set_location(self, position: Optional[DevicePosition]) -> str:
        self.location = capture_location(position)
        return self.location

    def file_complaint(self, text: str) -> Complaint:
        """
        File a complaint with the current location and pending evidence.

        Local state only changes once the store accepted the complaint. The
        listing refresh afterwards cannot fail the filing.
        """
        complaint = file_complaint(
            self.repository,
            self.identity,
            text,
            self.location,
            self.evidence_files,
        )
        self.evidence_files = []
        self._refresh_keeping_previous()
        return complaint

    async def upload_evidence(self, uploader: EvidenceUploader, files: List[EvidenceFile]) -> UploadBatchResult:
        self.uploading = True
        try:
            result = await uploader.upload_batch(self.identity.uid, files)
        finally:
            self.uploading = False
        self.evidence_files = [*self.evidence_files, *result.urls]
        return result

    def discard_evidence(self) -> None:
        self.evidence_files = []

    @property
    def tip(self) -> str:
        return safety_tips.tip_at(self.tip_index)

    def next_tip(self) -> str:
        self.tip_index = safety_tips.next_index(self.tip_index)
        return self.tip

    def prev_tip(self) -> str:
        self.tip_index = safety_tips.prev_index(self.tip_index)
        return self.tip


class AdminDashboard:
    """
    Admin view: every complaint, searchable and filterable, with status
    changes applied to the store and then to the one local record.
    """

    def __init__(self, repository: ComplaintRepository):
        self.repository = repository
        self.complaints: List[Complaint] = []
        self.search_term = ""
        self.status_filter = STATUS_FILTER_ALL
        self.loaded = False

    def load(self) -> List[Complaint]:
        self.complaints = self.repository.list_all()
        self.loaded = True
        return self.complaints

    def set_filters(self, search_term: Optional[str] = None, status_filter: Optional[str] = None) -> None:
        if search_term is not None:
            self.search_term = search_term
        if status_filter is not None:
            if status_filter != STATUS_FILTER_ALL and status_filter not in {s.value for s in ComplaintStatus}:
                raise ValidationError(f"Unknown status filter: {status_filter}")
            self.status_filter = status_filter

    @property
    def filtered(self) -> List[Complaint]:
        return filter_complaints(self.complaints, self.search_term, self.status_filter)

    @property
    def stats(self) -> ComplaintStats:
        return complaint_stats(self.complaints)

    def update_status(self, complaint_id: str, status: ComplaintStatus) -> Complaint:
        """
        Write the new status, then patch only that record locally.
        """
        current = next((c for c in self.complaints if c.id == complaint_id), None)

        self.repository.update_status(complaint_id, status)

        if current is None:
            # Filed after the list was loaded
            self.load()
            current = next((c for c in self.complaints if c.id == complaint_id), None)
            if current is None:
                raise NotFoundError(f"Complaint {complaint_id} not found")
            return current

        updated = current.model_copy(update={"status": status})
        self.complaints = [updated if c.id == complaint_id else c for c in self.complaints]
        logger.info(f"Admin set complaint {complaint_id}: {current.status.value} -> {status.value}")
        return updated


# Per-session view state
_user_dashboards: Dict[str, UserDashboard] = {}
_admin_dashboard: Optional[AdminDashboard] = None


def get_user_dashboard(identity: Identity, repository: ComplaintRepository) -> UserDashboard:
    dashboard = _user_dashboards.get(identity.uid)
    if dashboard is None:
        dashboard = UserDashboard(identity, repository)
        _user_dashboards[identity.uid] = dashboard
    return dashboard


def drop_user_dashboard(uid: str) -> None:
    _user_dashboards.pop(uid, None)


def get_admin_dashboard(repository: ComplaintRepository) -> AdminDashboard:
    global _admin_dashboard
    if _admin_dashboard is None:
        _admin_dashboard = AdminDashboard(repository)
    return _admin_dashboard


def drop_admin_dashboard() -> None:
    global _admin_dashboard
    _admin_dashboard = None
