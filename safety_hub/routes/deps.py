"""
Shared route dependencies: session gates and dashboard lookup.
"""

from fastapi import Depends

from safety_hub.core.exceptions import NotAuthenticatedError, NotAuthorizedError
from safety_hub.models.user import Identity
from safety_hub.services.complaint_service import ComplaintRepository, get_complaint_repository
from safety_hub.services.dashboard_service import (
    AdminDashboard,
    UserDashboard,
    get_admin_dashboard,
    get_user_dashboard,
)
from safety_hub.services.session_store import SessionStore, get_session_store


def require_identity(session: SessionStore = Depends(get_session_store)) -> Identity:
    if session.identity is None:
        raise NotAuthenticatedError("Please log in to continue.")
    return session.identity


def require_admin(session: SessionStore = Depends(get_session_store)) -> SessionStore:
    if not session.is_admin:
        raise NotAuthorizedError("Administrative access only")
    return session


def current_user_dashboard(
    identity: Identity = Depends(require_identity),
    repository: ComplaintRepository = Depends(get_complaint_repository),
) -> UserDashboard:
    dashboard = get_user_dashboard(identity, repository)
    if not dashboard.mounted:
        dashboard.mount()
    return dashboard


def current_admin_dashboard(
    _: SessionStore = Depends(require_admin),
    repository: ComplaintRepository = Depends(get_complaint_repository),
) -> AdminDashboard:
    dashboard = get_admin_dashboard(repository)
    if not dashboard.loaded:
        dashboard.load()
    return dashboard
