"""
Session Store - current identity, admin flag and view resolution.

Both values survive restarts through the LocalStore: the admin flag as
"true" under `isAdmin`, the identity as a refresh token under `authUser`
that is exchanged with the auth provider on load.
"""

import json
import logging
from typing import Optional

from safety_hub.core.exceptions import AuthError, ValidationError
from safety_hub.models.user import AuthMode, Identity, SessionResponse, View
from safety_hub.services.admin_auth import AdminAuthorizer, get_admin_authorizer
from safety_hub.services.auth_service import FirebaseAuthProvider, get_auth_provider
from safety_hub.services.local_store import (
    ADMIN_FLAG_KEY,
    AUTH_USER_KEY,
    LocalStore,
    get_local_store,
)

logger = logging.getLogger(__name__)

AUTH_FORMS = {
    AuthMode.LOGIN: View.LOGIN,
    AuthMode.SIGNUP: View.SIGNUP,
    AuthMode.ADMIN: View.ADMIN_LOGIN,
}


def _require_fields(email: str, password: str) -> None:
    if not email.strip() or not password:
        raise ValidationError("Please fill in all fields")


class SessionStore:
    """
    Holds who is signed in and whether the admin view is unlocked.

    The admin flag is independent of the identity: it can be set without
    any backend authentication and, when set, takes precedence.
    """

    def __init__(
        self,
        local_store: LocalStore,
        auth_provider: FirebaseAuthProvider,
        admin_authorizer: AdminAuthorizer,
    ):
        self.local_store = local_store
        self.auth_provider = auth_provider
        self.admin_authorizer = admin_authorizer
        self.identity: Optional[Identity] = None
        self.is_admin = False

    def load(self) -> None:
        """Restore the admin flag and, if possible, the signed-in user."""
        self.is_admin = self.local_store.get(ADMIN_FLAG_KEY) == "true"
        self.identity = None

        raw = self.local_store.get(AUTH_USER_KEY)
        if not raw:
            return

        try:
            stored = json.loads(raw)
            refresh_token = stored["refresh_token"]
        except (ValueError, KeyError, TypeError):
            logger.warning("Stored auth session is malformed, discarding it")
            self.local_store.remove(AUTH_USER_KEY)
            return

        try:
            self.identity = self.auth_provider.refresh(refresh_token, email=stored.get("email", ""))
        except AuthError as e:
            logger.warning(f"Could not restore auth session: {e.message}")
            self.local_store.remove(AUTH_USER_KEY)
            return

        self._persist_identity()
        logger.info(f"Auth session restored for {self.identity.uid}")

    def _persist_identity(self) -> None:
        if self.identity and self.identity.refresh_token:
            self.local_store.set(AUTH_USER_KEY, json.dumps({
                "uid": self.identity.uid,
                "email": self.identity.email,
                "refresh_token": self.identity.refresh_token,
            }))

    def resolve_view(self, auth_mode: AuthMode = AuthMode.LOGIN) -> View:
        if self.is_admin:
            return View.ADMIN
        if self.identity is not None:
            return View.DASHBOARD
        return AUTH_FORMS.get(auth_mode, View.LOGIN)

    def describe(self, auth_mode: AuthMode = AuthMode.LOGIN) -> SessionResponse:
        return SessionResponse(
            view=self.resolve_view(auth_mode),
            is_admin=self.is_admin,
            identity=self.identity,
        )

    def login(self, email: str, password: str) -> Identity:
        _require_fields(email, password)
        self.identity = self.auth_provider.sign_in(email.strip(), password)
        self._persist_identity()
        logger.info(f"User logged in: {self.identity.uid}")
        return self.identity

    def signup(self, email: str, password: str) -> Identity:
        _require_fields(email, password)
        self.identity = self.auth_provider.sign_up(email.strip(), password)
        self._persist_identity()
        logger.info(f"User signed up: {self.identity.uid}")
        return self.identity

    def logout(self) -> None:
        self.auth_provider.sign_out(self.identity)
        self.identity = None
        self.local_store.remove(AUTH_USER_KEY)

    def admin_login(self, email: str, password: str) -> None:
        _require_fields(email, password)
        if not self.admin_authorizer.authorize(email, password):
            raise AuthError("Invalid admin credentials")
        self.is_admin = True
        self.local_store.set(ADMIN_FLAG_KEY, "true")
        logger.info("Admin logged in")

    def admin_logout(self) -> None:
        self.is_admin = False
        self.local_store.remove(ADMIN_FLAG_KEY)
        logger.info("Admin logged out")


# Global service instance (singleton pattern)
_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """
    Get or create the SessionStore singleton, restoring persisted state on
    first use.
    """
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(
            local_store=get_local_store(),
            auth_provider=get_auth_provider(),
            admin_authorizer=get_admin_authorizer(),
        )
        _session_store.load()
    return _session_store
