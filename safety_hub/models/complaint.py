"""
Pydantic models for complaints.

Stored documents keep the camelCase field names of the `complaints`
collection; Python code uses the snake_case attribute names.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from safety_hub.models.base import BaseResponse

LOCATION_UNAVAILABLE = "Location not available"


class ComplaintStatus(str, Enum):
    """
    Complaint lifecycle states.

    Admins may move a complaint between any two states; there is no
    enforced ordering.
    """
    SUBMITTED = "submitted"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Complaint(BaseModel):
    """A filed incident complaint."""
    id: Optional[str] = Field(None, description="Firestore document ID (assigned on creation)")
    user_id: str = Field(..., alias="userId", description="Submitting user's uid")
    user_email: str = Field("", alias="userEmail", description="Submitting user's email")
    complaint: str = Field(..., description="Free text describing the incident")
    location: str = Field(LOCATION_UNAVAILABLE, description="'lat, lon' or the unavailable sentinel")
    evidence_files: List[str] = Field(default_factory=list, alias="evidenceFiles", description="Evidence URLs")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: ComplaintStatus = ComplaintStatus.SUBMITTED

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "k2J9x8",
                "userId": "uid-123",
                "userEmail": "asha@example.com",
                "complaint": "Followed from the bus stop to my street.",
                "location": "19.0760, 72.8777",
                "evidenceFiles": ["https://firebasestorage.googleapis.com/v0/b/demo/o/evidence%2Fuid-123%2F1_photo.jpg?alt=media&token=abc"],
                "timestamp": "2024-01-15T10:30:00Z",
                "status": "submitted",
            }
        }

    def to_document(self) -> Dict:
        """Document body for Firestore (the id lives in the document path)."""
        data = self.model_dump(by_alias=True, exclude={"id"})
        data["status"] = self.status.value
        return data


class ComplaintCreate(BaseModel):
    """Incoming complaint text; location and evidence come from view state."""
    complaint: str = Field(..., max_length=5000, description="What happened")


class StatusUpdateRequest(BaseModel):
    status: ComplaintStatus = Field(..., description="Target status")


class ComplaintListResponse(BaseModel):
    complaints: List[Complaint]
    total: int = Field(..., description="Number of complaints before filtering")
    search: str = ""
    status_filter: str = "all"


class ComplaintFiledResponse(BaseResponse):
    complaint: Complaint
    complaints: List[Complaint] = Field(default_factory=list, description="Refreshed own complaints")


class StatusUpdateResponse(BaseResponse):
    complaint: Complaint
    available_transitions: List[ComplaintStatus]


class ComplaintStats(BaseModel):
    total: int = 0
    submitted: int = 0
    in_progress: int = 0
    resolved: int = 0
    closed: int = 0
