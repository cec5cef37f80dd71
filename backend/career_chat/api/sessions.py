"""
Chat session API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, status

from career_chat.api.deps import CurrentIdentity, SessionServiceDep
from career_chat.models.chat import CreateSessionRequest, SuccessResponse
from career_chat.models.chat_session import ChatSession

router = APIRouter()


@router.get("", response_model=list[ChatSession])
async def list_sessions(
    identity: CurrentIdentity,
    session_service: SessionServiceDep,
):
    """List the caller's sessions, newest first (empty for guests)."""
    return await session_service.list_sessions(identity)


@router.post("", response_model=ChatSession, status_code=status.HTTP_201_CREATED)
async def create_session(
    identity: CurrentIdentity,
    session_service: SessionServiceDep,
    request: Optional[CreateSessionRequest] = None,
):
    """
    Create a session.

    Guests receive an anonymous session id to keep client-side.
    """
    title = request.title if request else None
    return await session_service.create_session(identity, title)


@router.delete("/{session_id}", response_model=SuccessResponse)
async def delete_session(
    session_id: str,
    identity: CurrentIdentity,
    session_service: SessionServiceDep,
):
    """Delete a session and its messages."""
    await session_service.delete_session(identity, session_id)
    return SuccessResponse()
