"""Public feedback submission."""

from fastapi import APIRouter, status
from pydantic import Field

from sportsync.api.schemas import FeedbackResponse
from sportsync.auth import VALIDATION_RESPONSE, OptionalUser
from sportsync.core.context import Context
from sportsync.schemas import EMAIL_PATTERN, CamelModel, FeedbackCreate

router = APIRouter()


class FeedbackRequest(CamelModel):
    """Feedback form."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    category: str = Field(..., min_length=1, max_length=50)
    message: str = Field(..., min_length=1, max_length=5000)
    subscribe_to_newsletter: bool = False


@router.post(
    "",
    response_model=FeedbackResponse,
    status_code=status.HTTP_201_CREATED,
    responses=VALIDATION_RESPONSE,
)
async def submit_feedback(
    body: FeedbackRequest,
    user: OptionalUser,
    context: Context,
) -> FeedbackResponse:
    """Submit feedback; attributed to the caller when logged in."""
    feedback = await context.storage.submit_feedback(
        FeedbackCreate(user_id=user.id if user else None, **body.model_dump())
    )
    return FeedbackResponse(feedback=feedback)
