"""Translate service outcomes into HTTP errors."""

from fastapi import HTTPException, status

from backend.app.services.outcome import CONFLICT, FORBIDDEN, INVALID, NOT_FOUND, Outcome

STATUS_BY_CODE = {
    INVALID: status.HTTP_400_BAD_REQUEST,
    FORBIDDEN: status.HTTP_403_FORBIDDEN,
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CONFLICT: status.HTTP_409_CONFLICT,
}


def ensure_ok(outcome: Outcome) -> Outcome:
    if not outcome.ok:
        raise HTTPException(
            status_code=STATUS_BY_CODE.get(outcome.code, status.HTTP_400_BAD_REQUEST),
            detail=outcome.message,
        )
    return outcome
