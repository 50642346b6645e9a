"""
Pydantic base models shared by all API responses.

Notifications are the transient messages the browser shows as toasts;
every mutating endpoint returns one.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """Transient, user-visible message."""
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @classmethod
    def success(cls, description: str, title: str = "Success") -> "Notification":
        return cls(title=title, description=description)

    @classmethod
    def error(cls, description: str, title: str = "Error") -> "Notification":
        return cls(title=title, description=description, variant=NotificationVariant.DESTRUCTIVE)


class BaseResponse(BaseModel):
    """
    Base response model for API responses.
    All mutating endpoints extend this for consistency.
    """
    success: bool = True
    notification: Optional[Notification] = Field(None, description="Message to show the user")
