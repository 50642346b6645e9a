"""
Authentication endpoints - email/password users and the admin login.
"""

from fastapi import APIRouter, Depends, Query
import logging

from safety_hub.models.base import Notification
from safety_hub.models.user import AuthMode, AuthResponse, Credentials, SessionResponse
from safety_hub.services.dashboard_service import drop_admin_dashboard, drop_user_dashboard
from safety_hub.services.session_store import SessionStore, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/session", response_model=SessionResponse)
async def get_session(
    mode: AuthMode = Query(AuthMode.LOGIN, description="Auth form to show when nobody is signed in"),
    session: SessionStore = Depends(get_session_store),
):
    """
    Resolve which view to render.

    Admin flag first, then a signed-in user, then the requested auth form.
    """
    return session.describe(mode)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: Credentials, session: SessionStore = Depends(get_session_store)):
    session.login(credentials.email, credentials.password)
    return AuthResponse(
        notification=Notification.success("Logged in successfully."),
        session=session.describe(),
    )


@router.post("/signup", response_model=AuthResponse)
async def signup(credentials: Credentials, session: SessionStore = Depends(get_session_store)):
    session.signup(credentials.email, credentials.password)
    return AuthResponse(
        notification=Notification.success("Account created successfully."),
        session=session.describe(),
    )


@router.post("/logout", response_model=AuthResponse)
async def logout(session: SessionStore = Depends(get_session_store)):
    if session.identity is not None:
        drop_user_dashboard(session.identity.uid)
    session.logout()
    return AuthResponse(
        notification=Notification.success("Logged out successfully."),
        session=session.describe(),
    )


@router.post("/admin/login", response_model=AuthResponse)
async def admin_login(credentials: Credentials, session: SessionStore = Depends(get_session_store)):
    session.admin_login(credentials.email, credentials.password)
    return AuthResponse(
        notification=Notification.success("Admin logged in successfully"),
        session=session.describe(),
    )


@router.post("/admin/logout", response_model=AuthResponse)
async def admin_logout(session: SessionStore = Depends(get_session_store)):
    session.admin_logout()
    drop_admin_dashboard()
    return AuthResponse(
        notification=Notification.success("Admin logged out successfully"),
        session=session.describe(),
    )
