"""
User models for authentication and session resolution.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from safety_hub.models.base import BaseResponse


class Identity(BaseModel):
    """
    Authenticated user as returned by the auth provider.
    Tokens are kept server-side and never echoed to the browser.
    """
    uid: str = Field(..., description="Auth provider user id")
    email: str = Field("", description="Account email")
    id_token: Optional[str] = Field(None, exclude=True)
    refresh_token: Optional[str] = Field(None, exclude=True)


class Credentials(BaseModel):
    """Email/password pair submitted by an auth form."""
    email: str = Field("", max_length=254)
    password: str = Field("", max_length=128)


class AuthMode(str, Enum):
    LOGIN = "login"
    SIGNUP = "signup"
    ADMIN = "admin"


class View(str, Enum):
    """What the browser should render."""
    ADMIN = "admin"
    DASHBOARD = "dashboard"
    LOGIN = "login"
    SIGNUP = "signup"
    ADMIN_LOGIN = "admin-login"


class SessionResponse(BaseModel):
    view: View
    is_admin: bool = False
    identity: Optional[Identity] = None


class AuthResponse(BaseResponse):
    """Authentication response."""
    session: SessionResponse
