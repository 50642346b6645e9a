"""
Complaint service - Firestore CRUD for the `complaints` collection.

Used by both dashboards: users create and list their own complaints,
admins list everything and change status. Complaints are never deleted.
"""

from datetime import datetime, timezone
from typing import List, Optional
import logging

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions

from safety_hub.config.firebase import get_db
from safety_hub.core.exceptions import NotFoundError, StoreError, ValidationError
from safety_hub.models.complaint import LOCATION_UNAVAILABLE, Complaint, ComplaintStatus
from safety_hub.models.user import Identity
from safety_hub.utils.firestore_helpers import snapshot_to_dict, to_datetime, where_filter

logger = logging.getLogger(__name__)

COMPLAINTS_COLLECTION = "complaints"


def _to_complaint(doc) -> Complaint:
    data = snapshot_to_dict(doc)
    if "timestamp" in data and data["timestamp"] is not None:
        data["timestamp"] = to_datetime(data["timestamp"])
    return Complaint.model_validate(data)


class ComplaintRepository:
    """
    Service for complaint records in Firestore.
    """

    def __init__(self, db):
        self.db = db

    @property
    def collection(self):
        return self.db.collection(COMPLAINTS_COLLECTION)

    def create(self, complaint: Complaint) -> str:
        """
        Store a new complaint.

        Returns:
            The generated document ID
        """
        try:
            _, doc_ref = self.collection.add(complaint.to_document())
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Failed to save complaint to Firestore: {e}", exc_info=True)
            raise StoreError("Failed to file complaint. Please try again.") from e

        logger.info(f"Complaint saved to Firestore: {doc_ref.id}")
        return doc_ref.id

    def list_for_user(self, user_id: str) -> List[Complaint]:
        """Complaints filed by one user, in store order."""
        try:
            query = where_filter(self.collection, "userId", "==", user_id)
            return [_to_complaint(doc) for doc in query.stream()]
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Error fetching complaints for {user_id}: {e}")
            raise StoreError("Failed to fetch your complaints.") from e

    def list_all(self) -> List[Complaint]:
        """All complaints, newest first."""
        try:
            query = self.collection.order_by("timestamp", direction=firestore.Query.DESCENDING)
            complaints = [_to_complaint(doc) for doc in query.stream()]
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Error fetching complaints: {e}")
            raise StoreError("Failed to fetch complaints") from e

        logger.info(f"Retrieved {len(complaints)} complaints")
        return complaints

    def update_status(self, complaint_id: str, status: ComplaintStatus) -> None:
        """
        Set a complaint's status. Writing the same status twice is harmless.

        Raises:
            NotFoundError: If no complaint has this id
        """
        try:
            self.collection.document(complaint_id).update({"status": status.value})
        except google_exceptions.NotFound as e:
            raise NotFoundError(f"Complaint {complaint_id} not found") from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Failed to update complaint {complaint_id}: {e}")
            raise StoreError("Failed to update complaint status") from e

        logger.info(f"Complaint {complaint_id} status set to {status.value}")


def file_complaint(
    repository: ComplaintRepository,
    identity: Identity,
    text: str,
    location: Optional[str],
    evidence_files: List[str],
) -> Complaint:
    """
    Validate and store a complaint for the signed-in user.

    Empty or whitespace-only text is rejected before the store is touched.
    """
    if not text or not text.strip():
        raise ValidationError("Please describe the incident in detail.")

    complaint = Complaint(
        user_id=identity.uid,
        user_email=identity.email,
        complaint=text,
        location=location or LOCATION_UNAVAILABLE,
        evidence_files=list(evidence_files),
        timestamp=datetime.now(timezone.utc),
        status=ComplaintStatus.SUBMITTED,
    )
    complaint.id = repository.create(complaint)
    return complaint


# Global service instance (singleton pattern)
_complaint_repository: Optional[ComplaintRepository] = None


def get_complaint_repository() -> ComplaintRepository:
    global _complaint_repository
    if _complaint_repository is None:
        _complaint_repository = ComplaintRepository(get_db())
    return _complaint_repository
