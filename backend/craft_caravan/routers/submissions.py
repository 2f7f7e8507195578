from fastapi import APIRouter, Depends, Response

from craft_caravan.dependencies import get_submission_gate
from craft_caravan.errors import ErrorKind
from craft_caravan.models.submissions import (
    ClaimRequest,
    NewsletterRequest,
    SubmissionResponse,
)
from craft_caravan.services.submission_gate import GateResult, SubmissionGate

router = APIRouter(prefix="/v1/api", tags=["submissions"])

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.DUPLICATE: 409,
    ErrorKind.STORE: 502,
}


def _respond(result: GateResult, response: Response) -> SubmissionResponse:
    response.status_code = 201 if result.ok else STATUS_BY_KIND[result.error_kind]
    return SubmissionResponse(
        data=result.data,
        error=result.error,
        error_kind=result.error_kind,
    )


@router.post("/claims", response_model=SubmissionResponse, status_code=201)
async def submit_claim(
    request: ClaimRequest,
    response: Response,
    gate: SubmissionGate = Depends(get_submission_gate),
):
    """Register interest in an item. The page shows ``error`` verbatim."""
    result = await gate.submit_claim(
        request.item_id,
        request.name,
        request.email,
        request.country,
        request.message,
    )
    return _respond(result, response)


@router.post("/newsletter", response_model=SubmissionResponse, status_code=201)
async def subscribe_newsletter(
    request: NewsletterRequest,
    response: Response,
    gate: SubmissionGate = Depends(get_submission_gate),
):
    result = await gate.subscribe_newsletter(
        request.email,
        request.interests,
        request.source,
    )
    return _respond(result, response)
