"""Public match endpoints."""

from fastapi import APIRouter, Query

from sportsync.api.schemas import MatchListResponse, MatchResponse
from sportsync.auth import NOT_FOUND_RESPONSE
from sportsync.core.context import Context
from sportsync.core.exceptions import NotFoundError
from sportsync.schemas import MatchStatus, SportType

router = APIRouter()


@router.get("", response_model=MatchListResponse, operation_id="getMatches")
async def list_matches(
    context: Context,
    sport_type: SportType | None = Query(None, alias="sportType", description="football or cricket"),
    status: MatchStatus | None = Query(None, description="upcoming, live or completed"),
) -> MatchListResponse:
    """List matches, latest kick-off first. Filters combine with AND."""
    matches = await context.storage.get_matches(sport_type=sport_type, status=status)
    return MatchListResponse(matches=matches)


@router.get(
    "/{match_id}",
    response_model=MatchResponse,
    responses=NOT_FOUND_RESPONSE,
    operation_id="getMatch",
)
async def get_match(match_id: int, context: Context) -> MatchResponse:
    """Get a single match."""
    match = await context.storage.get_match(match_id)
    if match is None:
        raise NotFoundError("Match not found")
    return MatchResponse(match=match)
