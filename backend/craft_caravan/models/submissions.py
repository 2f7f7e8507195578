from typing import Any

from pydantic import BaseModel

from craft_caravan.errors import ErrorKind


class ClaimRequest(BaseModel):
    """Claim form fields as typed by the visitor.

    Fields are loosely typed on purpose; the submission gate owns validation so
    the page gets the same messages it always showed.
    """

    item_id: str | None = None
    name: str | None = None
    email: str | None = None
    country: str | None = None
    message: str | None = None


class NewsletterRequest(BaseModel):
    email: str | None = None
    interests: list[str] = []
    source: str | None = None


class SubmissionResponse(BaseModel):
    data: dict[str, Any] | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
