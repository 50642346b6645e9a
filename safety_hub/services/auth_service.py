"""
Auth Service - Firebase Authentication over the Identity Toolkit REST API.

Email/password accounts only. Sign-out is local: the session held by this
service is dropped, the account itself is untouched.
"""

import logging
from typing import Dict, Optional

import requests

from safety_hub.core.exceptions import AuthError
from safety_hub.core.settings import settings
from safety_hub.models.user import Identity

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1/accounts"
SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"

# Firebase error codes -> messages shown to the user
AUTH_ERROR_MESSAGES: Dict[str, str] = {
    "EMAIL_EXISTS": "An account with this email already exists.",
    "EMAIL_NOT_FOUND": "No account found with this email.",
    "INVALID_PASSWORD": "Incorrect password.",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password.",
    "INVALID_EMAIL": "Please enter a valid email address.",
    "USER_DISABLED": "This account has been disabled.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later.",
    "TOKEN_EXPIRED": "Your session has expired. Please log in again.",
    "INVALID_REFRESH_TOKEN": "Your session has expired. Please log in again.",
    "MISSING_PASSWORD": "Please enter a password.",
}


def _error_message(resp: requests.Response) -> str:
    try:
        code = resp.json().get("error", {}).get("message", "")
    except ValueError:
        code = ""
    # WEAK_PASSWORD arrives as "WEAK_PASSWORD : Password should be at least 6 characters"
    key = code.split(":")[0].strip()
    if key == "WEAK_PASSWORD":
        return "Password should be at least 6 characters."
    return AUTH_ERROR_MESSAGES.get(key, f"Authentication failed ({key or resp.status_code}).")


class FirebaseAuthProvider:
    """
    Thin client for the Firebase Auth REST endpoints.
    """

    def __init__(self, api_key: str, timeout: float = 10.0):
        self.api_key = api_key
        self.timeout = timeout

    def _post(self, url: str, **kwargs) -> Dict:
        if not self.api_key:
            raise AuthError("Authentication is not configured (FIREBASE_API_KEY missing).")
        try:
            resp = requests.post(url, params={"key": self.api_key}, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Auth provider unreachable: {e}")
            raise AuthError("Could not reach the authentication service. Please try again.")

        if resp.status_code != 200:
            message = _error_message(resp)
            logger.warning(f"Auth provider rejected request ({resp.status_code}): {message}")
            raise AuthError(message)
        return resp.json()

    def _account_request(self, action: str, email: str, password: str) -> Identity:
        payload = {
            "email": email,
            "password": password,
            "returnSecureToken": True,
        }
        data = self._post(f"{IDENTITY_TOOLKIT_URL}:{action}", json=payload)
        return Identity(
            uid=data["localId"],
            email=data.get("email", email),
            id_token=data.get("idToken"),
            refresh_token=data.get("refreshToken"),
        )

    def sign_in(self, email: str, password: str) -> Identity:
        return self._account_request("signInWithPassword", email, password)

    def sign_up(self, email: str, password: str) -> Identity:
        return self._account_request("signUp", email, password)

    def refresh(self, refresh_token: str, email: str = "") -> Identity:
        """Exchange a stored refresh token for a fresh session."""
        data = self._post(
            SECURE_TOKEN_URL,
            data={"grant_type": "refresh_token", "refresh_token": refresh_token},
        )
        return Identity(
            uid=data["user_id"],
            email=email,
            id_token=data.get("id_token"),
            refresh_token=data.get("refresh_token", refresh_token),
        )

    def sign_out(self, identity: Optional[Identity]) -> None:
        if identity:
            logger.info(f"User signed out: {identity.uid}")


# Global service instance (singleton pattern)
_auth_provider: Optional[FirebaseAuthProvider] = None


def get_auth_provider() -> FirebaseAuthProvider:
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = FirebaseAuthProvider(
            api_key=settings.FIREBASE_API_KEY,
            timeout=settings.AUTH_TIMEOUT_SECONDS,
        )
    return _auth_provider
