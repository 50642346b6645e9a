"""
Admin authorization.

The admin role is not tied to any Firebase account: a submitted
email/password pair is checked against a fixed allow-list. Views and
routes only ever call `authorize()`, so a real credential check can
replace StaticAdminAuthorizer without touching them.
"""

import hmac
import logging
from typing import Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

# Predefined admin credentials
ADMIN_CREDENTIALS: Tuple[Tuple[str, str], ...] = (
    ("admin1@safety.com", "admin123"),
    ("admin2@safety.com", "admin456"),
)


class AdminAuthorizer:
    """Decides whether a credential pair grants admin access."""

    def authorize(self, email: str, password: str) -> bool:
        raise NotImplementedError


class StaticAdminAuthorizer(AdminAuthorizer):
    def __init__(self, credentials: Iterable[Tuple[str, str]] = ADMIN_CREDENTIALS):
        self.credentials = tuple(credentials)

    def authorize(self, email: str, password: str) -> bool:
        matched = any(
            hmac.compare_digest(email, admin_email) and hmac.compare_digest(password, admin_password)
            for admin_email, admin_password in self.credentials
        )
        if not matched:
            logger.warning(f"Rejected admin login for {email!r}")
        return matched


_admin_authorizer: Optional[AdminAuthorizer] = None


def get_admin_authorizer() -> AdminAuthorizer:
    global _admin_authorizer
    if _admin_authorizer is None:
        _admin_authorizer = StaticAdminAuthorizer()
    return _admin_authorizer
