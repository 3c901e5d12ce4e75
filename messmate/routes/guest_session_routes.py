from fastapi import APIRouter, status

from messmate.schemas.ledger_schemas import GuestSessionResponse, LedgerResponse
from messmate.services.guest_sessions import guest_sessions

router = APIRouter()


@router.post("", response_model=GuestSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_guest_session():
    """
    Start a guest session.

    - Returns a session id to send as the X-Guest-Session header
    - The ledger is seeded with sample data and lives in memory only
    - Nothing is ever written to the database
    """
    session_id, repository = await guest_sessions.start()
    return GuestSessionResponse(
        session_id=session_id, ledger=LedgerResponse.model_validate(repository)
    )


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_guest_session(session_id: str):
    """End a guest session and discard its ledger"""
    guest_sessions.end(session_id)
    return None
