"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from clip_feed.core.errors import AuthRequired
from clip_feed.core.security import decode_voter_id
from clip_feed.db.session import get_db
from clip_feed.services.feed import FeedQueryPlanner, get_feed_planner
from clip_feed.services.ledger import VoteLedger, get_vote_ledger

# HTTP Bearer scheme for JWT authentication; missing headers are reported as 401 below.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_voter(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Return the opaque voter id of the authenticated caller.

    Raises:
        HTTPException: 401 when the bearer token is missing or invalid.
    """
    try:
        if credentials is None:
            raise AuthRequired("Not authenticated")
        return decode_voter_id(credentials.credentials)
    except AuthRequired as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
            headers={"WWW-Authenticate": "Bearer"},
        ) from err


def get_vote_ledger_dep() -> VoteLedger:
    """Return the vote ledger."""
    return get_vote_ledger()


def get_feed_planner_dep() -> FeedQueryPlanner:
    """Return the feed query planner."""
    return get_feed_planner()


# Type aliases for common dependencies
CurrentVoterDep = Annotated[str, Depends(get_current_voter)]
LedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger_dep)]
FeedPlannerDep = Annotated[FeedQueryPlanner, Depends(get_feed_planner_dep)]
