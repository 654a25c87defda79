"""Account sign-up and center registration."""

from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.config import settings
from app.core.exceptions import AppException, IdentityProviderError, UnauthorizedException
from app.core.firebase import FirebaseIdentityProvider, IdentityAccount
from app.core.redis_client import CacheManager
from app.schemas.admin import CenterSummary
from app.schemas.centers import CenterRegistrationRequest
from app.schemas.results import ActionResult
from app.schemas.users import (
    ResendVerificationRequest,
    SignupRequest,
    UserCreate,
    UserProfile,
    VerificationSyncRequest,
)
from app.services.center_service import CenterService
from app.services.user_service import UserService

logger = get_logger(__name__)

SIGNUP_FAILED_MESSAGE = "An unexpected error occurred during signup."
CENTER_REGISTRATION_FAILED_MESSAGE = "An unexpected error occurred during center registration."
RESEND_NO_SESSION_MESSAGE = "Could not send verification email. Please try logging in again."
RESEND_FAILED_MESSAGE = "Could not resend verification email."

# Provider error codes with a dedicated user-facing message
PROVIDER_ERROR_MESSAGES = {
    "email-already-in-use": ("A user with this email already exists.", 409),
    "weak-password": ("The password is too weak. Please choose a stronger password.", 400),
}


def provider_error_result(error: IdentityProviderError, fallback: str) -> ActionResult:
    """Translate a provider error code to a user-facing failure."""
    message, status_code = PROVIDER_ERROR_MESSAGES.get(error.code, (fallback, 500))
    return ActionResult.fail(message, status_code=status_code)


class RegistrationService:
    """
    Two-phase account creation: provider account first, local record second.

    The phases are not transactional. If the local write fails after the
    provider account exists, the account is left orphaned and reported by
    ``scripts/reconcile_accounts.py``.
    """

    def __init__(
        self,
        db: AsyncSession,
        identity_provider: FirebaseIdentityProvider,
        cache_manager: CacheManager | None = None,
    ):
        self.db = db
        self.identity_provider = identity_provider
        self.users = UserService(cache_manager)
        self.centers = CenterService(cache_manager)

    async def _send_verification_best_effort(self, account: IdentityAccount) -> bool:
        """Dispatch the verification email; failures are logged, never raised."""
        try:
            await self.identity_provider.send_email_verification(
                account,
                continue_url=settings.verification_redirect_url,
                handle_code_in_app=True,
            )
            return True
        except Exception as e:
            logger.warning("verification_email_failed", uid=account.uid, error=str(e))
            return False

    async def signup(self, data: Any) -> ActionResult:
        """Create a citizen account and its local profile."""
        try:
            request = SignupRequest.model_validate(data)
        except ValidationError:
            return ActionResult.invalid_input()

        try:
            account = await self.identity_provider.create_account(request.email, request.password)
        except IdentityProviderError as e:
            logger.warning("signup_rejected_by_provider", code=e.code, error=e.message)
            return provider_error_result(e, SIGNUP_FAILED_MESSAGE)
        except Exception:
            logger.exception("signup_provider_call_failed")
            return ActionResult.fail(SIGNUP_FAILED_MESSAGE)

        await self._send_verification_best_effort(account)

        try:
            user = await self.users.create_user(
                self.db,
                UserCreate(
                    firebase_uid=account.uid,
                    # Keep the provider's normalized address
                    email=account.email,
                    first_name=request.first_name,
                    last_name=request.last_name,
                    email_verified=False,
                ),
            )
        except Exception:
            logger.exception("orphaned_identity_account", uid=account.uid, email=account.email)
            return ActionResult.fail(SIGNUP_FAILED_MESSAGE)

        logger.info("user_signed_up", uid=account.uid)
        profile = UserProfile.model_validate(user)
        return ActionResult.ok(
            status_code=201, user=profile.model_dump(mode="json", by_alias=True)
        )

    async def resend_verification_email(self, data: Any) -> ActionResult:
        """Send the verification email again to the signed-in account."""
        try:
            request = ResendVerificationRequest.model_validate(data)
        except ValidationError:
            return ActionResult.invalid_input()

        try:
            session = await self.identity_provider.verify_session(request.id_token)
        except UnauthorizedException:
            return ActionResult.fail(RESEND_NO_SESSION_MESSAGE, status_code=401)
        except Exception:
            logger.exception("resend_verification_session_failed")
            return ActionResult.fail(RESEND_FAILED_MESSAGE)

        if (session.get("email") or "").lower() != request.email.lower():
            return ActionResult.fail(RESEND_NO_SESSION_MESSAGE, status_code=401)

        try:
            await self.identity_provider.send_email_verification(
                IdentityAccount(uid=session["uid"], email=request.email, id_token=request.id_token),
                continue_url=settings.verification_redirect_url,
                handle_code_in_app=True,
            )
        except Exception:
            logger.exception("resend_verification_failed", uid=session.get("uid"))
            return ActionResult.fail(RESEND_FAILED_MESSAGE)

        return ActionResult.ok()

    async def sync_email_verification(self, data: Any) -> ActionResult:
        """Copy the provider's ``email_verified`` claim onto the local user."""
        try:
            request = VerificationSyncRequest.model_validate(data)
        except ValidationError:
            return ActionResult.invalid_input()

        try:
            session = await self.identity_provider.verify_session(request.id_token)
            if not session.get("email_verified"):
                return ActionResult.ok(emailVerified=False)

            user = await self.users.mark_email_verified(self.db, session["uid"])
            if not user:
                return ActionResult.fail("User not found.", status_code=404)

            logger.info("email_verified", uid=session["uid"])
            return ActionResult.ok(emailVerified=True)
        except AppException as e:
            return ActionResult.from_exception(e)
        except Exception:
            logger.exception("email_verification_sync_failed")
            return ActionResult.fail("Could not update email verification status.")

    async def register_center(self, data: Any) -> ActionResult:
        """Register a center awaiting approval, optionally with its own account."""
        try:
            request = CenterRegistrationRequest.model_validate(data)
        except ValidationError:
            return ActionResult.invalid_input()

        try:
            if await self.centers.get_center_by_email(self.db, request.email):
                return ActionResult.fail(
                    "A center with this email is already registered.", status_code=409
                )

            uid = None
            if request.password:
                try:
                    account = await self.identity_provider.create_account(
                        request.email, request.password
                    )
                except IdentityProviderError as e:
                    logger.warning("center_signup_rejected_by_provider", code=e.code)
                    return provider_error_result(e, CENTER_REGISTRATION_FAILED_MESSAGE)
                uid = account.uid
                await self._send_verification_best_effort(account)

            try:
                center = await self.centers.create_center(self.db, request, uid=uid)
            except Exception:
                if uid:
                    logger.exception("orphaned_identity_account", uid=uid, email=request.email)
                raise

            logger.info("center_registered", center_id=str(center["id"]), uid=uid)
            return ActionResult.ok(
                status_code=201, center=CenterSummary.from_row(center).model_dump(mode="json")
            )
        except AppException as e:
            return ActionResult.from_exception(e)
        except Exception:
            logger.exception("center_registration_failed")
            return ActionResult.fail(CENTER_REGISTRATION_FAILED_MESSAGE)
