"""Validation, rate limiting and sanitization in front of the two write paths.

Every gate operation runs the same linear pipeline:

    validate -> rate-check -> sanitize -> insert -> report

and stops at the first failing step. Failures never propagate to the caller;
they come back as a ``GateResult`` whose ``error`` is a short message the page
can show next to the form.
"""

import hashlib
import logging
from dataclasses import dataclass

from craft_caravan.errors import (
    DuplicateSubscriptionError,
    ErrorKind,
    GateError,
    InvalidSubmissionError,
    RateLimitedError,
    RecordStoreError,
)
from craft_caravan.services.rate_limiter import RateLimiter
from craft_caravan.services.record_store import RecordStore
from craft_caravan.services.validators import is_valid_email, missing_fields, normalize_email
from craft_caravan.utils.text import sanitize_html

logger = logging.getLogger(__name__)

CLAIMS_TABLE = "claims"
NEWSLETTER_TABLE = "newsletter"

MISSING_FIELDS_MESSAGE = "All fields are required"
INVALID_EMAIL_MESSAGE = "Invalid email address"
RATE_LIMITED_MESSAGE = "Too many requests. Please wait a moment."
ALREADY_SUBSCRIBED_MESSAGE = "This email is already subscribed"
CLAIM_FAILED_MESSAGE = "Failed to submit. Please try again."
SUBSCRIBE_FAILED_MESSAGE = "Failed to subscribe. Please try again."

MAX_MESSAGE_LENGTH = 2000
MAX_SOURCE_LENGTH = 100


@dataclass(frozen=True)
class SubmissionPolicy:
    max_attempts: int = 3
    window_ms: int = 60000


@dataclass(frozen=True)
class GateResult:
    data: dict | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: GateError) -> "GateResult":
        return cls(data=None, error=error.message, error_kind=error.kind)


class SubmissionGate:
    def __init__(
        self,
        store: RecordStore,
        limiter: RateLimiter,
        policy: SubmissionPolicy | None = None,
    ):
        self.store = store
        self.limiter = limiter
        self.policy = policy or SubmissionPolicy()

    # ------------------------------------------------------------------
    # Write paths
    # ------------------------------------------------------------------

    async def submit_claim(
        self,
        item_id: str | None,
        name: str | None,
        email: str | None,
        country: str | None,
        message: str | None = None,
    ) -> GateResult:
        """Record a visitor's interest in an item.

        ``message`` is optional; every other field is required.
        """
        try:
            if missing_fields(item_id=item_id, name=name, email=email, country=country):
                raise InvalidSubmissionError(MISSING_FIELDS_MESSAGE)
            email = email.strip()
            self._check_email(email)
            self._check_length("Message", message, MAX_MESSAGE_LENGTH)
            self._check_rate(email)

            record = {
                "item_id": str(item_id).strip(),
                "customer_name": sanitize_html(name.strip()),
                "customer_email": sanitize_html(email),
                "shipping_country": sanitize_html(country.strip()),
                "message": sanitize_html(message.strip()) if message and message.strip() else None,
            }

            try:
                inserted = await self.store.insert(CLAIMS_TABLE, record)
            except RecordStoreError as e:
                logger.error(
                    "Claim insert failed for item %s: %s (code=%s, details=%s)",
                    record["item_id"],
                    e.message,
                    e.code,
                    e.details,
                )
                return GateResult(
                    error=CLAIM_FAILED_MESSAGE,
                    error_kind=ErrorKind.STORE,
                )
        except GateError as e:
            return GateResult.failure(e)

        logger.info("Claim recorded for item %s", record["item_id"])
        return GateResult(data=inserted)

    async def subscribe_newsletter(
        self,
        email: str | None,
        interests: list[str] | None = None,
        source: str | None = None,
    ) -> GateResult:
        """Add an email to the newsletter list.

        Interests and source are optional. A uniqueness violation on the email
        is reported as "already subscribed" rather than a generic failure.
        """
        try:
            email = email.strip() if isinstance(email, str) else email
            self._check_email(email)
            self._check_length("Source", source, MAX_SOURCE_LENGTH)
            self._check_rate(email)

            record = {
                "email": sanitize_html(email.lower()),
                "interests": [sanitize_html(tag) for tag in interests or [] if tag],
                "source": sanitize_html(source) if source else None,
            }

            try:
                inserted = await self.store.insert(NEWSLETTER_TABLE, record)
            except RecordStoreError as e:
                if e.is_unique_violation:
                    raise DuplicateSubscriptionError(ALREADY_SUBSCRIBED_MESSAGE) from e
                logger.error(
                    "Newsletter insert failed: %s (code=%s, details=%s)",
                    e.message,
                    e.code,
                    e.details,
                )
                return GateResult(
                    error=SUBSCRIBE_FAILED_MESSAGE,
                    error_kind=ErrorKind.STORE,
                )
        except GateError as e:
            return GateResult.failure(e)

        logger.info("Newsletter subscription recorded (source=%s)", record["source"])
        return GateResult(data=inserted)

    # ------------------------------------------------------------------
    # Gates
    # ------------------------------------------------------------------

    @staticmethod
    def _check_email(email: str | None) -> None:
        if not is_valid_email(email):
            raise InvalidSubmissionError(INVALID_EMAIL_MESSAGE)

    @staticmethod
    def _check_length(label: str, value: str | None, limit: int) -> None:
        if value and len(value.strip()) > limit:
            raise InvalidSubmissionError(f"{label} must be at most {limit} characters")

    def _check_rate(self, email: str) -> None:
        key = normalize_email(email)
        allowed = self.limiter.can_submit(
            key,
            max_attempts=self.policy.max_attempts,
            window_ms=self.policy.window_ms,
        )
        if not allowed:
            logger.warning("Submission rate limited for key %s", _hash_key(key))
            raise RateLimitedError(RATE_LIMITED_MESSAGE)


def _hash_key(key: str) -> str:
    """Hash the limiter key so emails never land in logs."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]
