"""Firebase identity provider: Admin SDK plus Identity Toolkit REST calls."""

import json
import os
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import firebase_admin
import httpx
from firebase_admin import auth, credentials
from structlog import get_logger

from app.core.exceptions import IdentityProviderError, UnauthorizedException

logger = get_logger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"

# Identity Toolkit error strings -> provider-neutral codes
_REST_ERROR_CODES = {
    "EMAIL_EXISTS": "email-already-in-use",
    "WEAK_PASSWORD": "weak-password",
    "INVALID_EMAIL": "invalid-email",
    "MISSING_PASSWORD": "missing-password",
    "USER_NOT_FOUND": "user-not-found",
    "INVALID_ID_TOKEN": "invalid-id-token",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "too-many-requests",
}


@dataclass(frozen=True)
class IdentityAccount:
    """Handle to an account held by the identity provider."""

    uid: str
    email: str
    id_token: str | None = None
    created_at: datetime | None = None


def _error_code_from_response(response: httpx.Response) -> str:
    """Map an Identity Toolkit error body to a provider-neutral code."""
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return "internal-error"
    # e.g. "WEAK_PASSWORD : Password should be at least 6 characters"
    key = str(message).split(":", 1)[0].strip()
    return _REST_ERROR_CODES.get(key, "internal-error")


class FirebaseIdentityProvider:
    """
    Identity provider adapter backed by Firebase Authentication.

    One instance is built at process start and shared by every request. The
    Admin SDK app is created by ``initialize()`` at most once, even when
    several callers race on first use.
    """

    def __init__(
        self,
        api_key: str = "",
        firebase_config_json: str | None = None,
        firebase_credentials_path: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.firebase_config_json = firebase_config_json
        self.firebase_credentials_path = firebase_credentials_path
        self._transport = transport
        self._app: firebase_admin.App | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Any) -> "FirebaseIdentityProvider":
        """Build from application settings."""
        return cls(
            api_key=settings.firebase_web_api_key,
            firebase_config_json=settings.firebase_config_json,
            firebase_credentials_path=settings.firebase_credentials_path,
        )

    @property
    def initialized(self) -> bool:
        return self._app is not None

    def initialize(self) -> firebase_admin.App:
        """
        Initialize the Firebase Admin app once.

        Looks for credentials in order:
        1. FIREBASE_CONFIG_JSON service account blob
        2. FIREBASE_CREDENTIALS_PATH service account file
        3. Default application credentials

        Returns:
            The Firebase app instance
        """
        if self._app is not None:
            return self._app

        with self._lock:
            if self._app is not None:
                return self._app

            cred = None
            if self.firebase_config_json:
                try:
                    cred = credentials.Certificate(json.loads(self.firebase_config_json))
                    logger.info("Initializing Firebase with JSON string from environment")
                except ValueError as e:
                    logger.error("FIREBASE_CONFIG_JSON is not valid JSON", error=str(e))
            elif self.firebase_credentials_path and os.path.exists(
                self.firebase_credentials_path
            ):
                logger.info("Initializing Firebase with JSON file", path=self.firebase_credentials_path)
                cred = credentials.Certificate(self.firebase_credentials_path)

            if cred:
                self._app = firebase_admin.initialize_app(cred)
            else:
                self._app = firebase_admin.initialize_app()
                logger.info("Firebase initialized with default credentials")

            return self._app

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST to an Identity Toolkit endpoint, raising IdentityProviderError on failure."""
        async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
            try:
                response = await client.post(
                    f"{IDENTITY_TOOLKIT_URL}/{endpoint}",
                    params={"key": self.api_key},
                    json=payload,
                )
            except httpx.HTTPError as e:
                raise IdentityProviderError("network-request-failed", str(e)) from e

        if response.status_code != 200:
            code = _error_code_from_response(response)
            raise IdentityProviderError(code, response.text)

        return response.json()

    async def create_account(self, email: str, password: str) -> IdentityAccount:
        """
        Create an email/password account.

        The provider enforces email uniqueness and password strength.

        Raises:
            IdentityProviderError: ``email-already-in-use``, ``weak-password``, ...
        """
        data = await self._post(
            "accounts:signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        logger.info("identity_account_created", uid=data["localId"])
        return IdentityAccount(
            uid=data["localId"],
            email=data.get("email", email),
            id_token=data.get("idToken"),
        )

    async def send_email_verification(
        self,
        account: IdentityAccount,
        continue_url: str,
        handle_code_in_app: bool = True,
    ) -> None:
        """Ask the provider to send the account its verification email."""
        if not account.id_token:
            raise IdentityProviderError("invalid-id-token", "Account handle has no session token")

        await self._post(
            "accounts:sendOobCode",
            {
                "requestType": "VERIFY_EMAIL",
                "idToken": account.id_token,
                "continueUrl": continue_url,
                "canHandleCodeInApp": handle_code_in_app,
            },
        )
        logger.info("verification_email_sent", uid=account.uid)

    async def delete_account(self, uid: str) -> None:
        """Delete an account with admin privileges."""
        app = self.initialize()
        auth.delete_user(uid, app=app)
        logger.info("identity_account_deleted", uid=uid)

    async def verify_session(self, id_token: str) -> dict:
        """
        Verify a Firebase ID token (current-session lookup).

        Returns:
            Decoded token containing user information

        Raises:
            UnauthorizedException: If token is invalid or expired
        """
        app = self.initialize()
        try:
            decoded_token = auth.verify_id_token(id_token, app=app, clock_skew_seconds=10)
        except auth.InvalidIdTokenError as e:
            logger.warning("Invalid or expired Firebase ID token", error=str(e))
            raise UnauthorizedException("Invalid or expired session") from e
        except Exception as e:
            logger.error("Firebase token verification failed", error=str(e))
            raise UnauthorizedException("Session verification failed") from e

        return decoded_token

    def iter_accounts(self) -> Iterator[IdentityAccount]:
        """Iterate over every account known to the provider."""
        app = self.initialize()
        for record in auth.list_users(app=app).iterate_all():
            # creation_timestamp is milliseconds since the epoch
            created_ms = record.user_metadata.creation_timestamp if record.user_metadata else None
            yield IdentityAccount(
                uid=record.uid,
                email=record.email or "",
                created_at=(
                    datetime.fromtimestamp(created_ms / 1000, tz=timezone.utc)
                    if created_ms
                    else None
                ),
            )
