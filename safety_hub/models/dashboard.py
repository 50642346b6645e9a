"""
Models for the user dashboard: location, evidence, contacts, alert, tips.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from safety_hub.models.base import BaseResponse
from safety_hub.models.complaint import Complaint


class DevicePosition(BaseModel):
    """
    One-shot geolocation result reported by the browser.
    Omit the coordinates (or send an error) when the device could not
    provide a position.
    """
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    error: Optional[str] = Field(None, description="Geolocation error message, if any")


class LocationResponse(BaseModel):
    location: str
    available: bool


class EvidenceUploadResponse(BaseResponse):
    uploaded: List[str] = Field(default_factory=list, description="URLs uploaded in this batch")
    failed: int = 0
    evidence_files: List[str] = Field(default_factory=list, description="All URLs pending attachment")


class ContactCreate(BaseModel):
    contact: str = Field(..., max_length=64, description="Phone number")


class ContactsResponse(BaseResponse):
    contacts: List[str] = Field(default_factory=list)


class EmergencyAlertResponse(BaseResponse):
    dispatched: bool = Field(False, description="Whether anything was actually sent")
    location: str
    trusted_contacts: int = 0


class SafetyTipResponse(BaseModel):
    index: int
    total: int
    tip: str


class DashboardResponse(BaseModel):
    email: str
    location: str
    uploading: bool = False
    evidence_files: List[str] = Field(default_factory=list)
    complaints: List[Complaint] = Field(default_factory=list)
    trusted_contacts: List[str] = Field(default_factory=list)
    tip: SafetyTipResponse
