"""
Chat API endpoints.

Sending messages, reading history, and guest quota status.
"""

from fastapi import APIRouter

from career_chat.api.deps import ChatServiceDep, ClientIP, CurrentIdentity
from career_chat.models.chat import (
    ChatAnalytics,
    RateLimitStatus,
    SendMessageRequest,
    SendMessageResponse,
    SuccessResponse,
)
from career_chat.models.chat_session import ChatMessage

router = APIRouter()


@router.post("/messages", response_model=SendMessageResponse)
async def send_message(
    request: SendMessageRequest,
    identity: CurrentIdentity,
    client_ip: ClientIP,
    chat_service: ChatServiceDep,
):
    """
    Send a message and get the assistant's reply.

    Guests (anonymous sessions) are rate limited per IP; their messages are
    returned for the client to keep and are not stored server-side.
    """
    return await chat_service.send_message(
        identity,
        client_ip,
        session_id=request.session_id,
        content=request.content,
    )


@router.get("/messages/{session_id}", response_model=list[ChatMessage])
async def get_messages(
    session_id: str,
    identity: CurrentIdentity,
    chat_service: ChatServiceDep,
):
    """Get messages for a session, oldest first."""
    return await chat_service.get_messages(identity, session_id)


@router.get("/rate-limit", response_model=RateLimitStatus)
async def get_rate_limit_status(
    identity: CurrentIdentity,
    client_ip: ClientIP,
    chat_service: ChatServiceDep,
):
    """Remaining guest messages; -1 for signed-in users."""
    return await chat_service.get_rate_limit_status(identity, client_ip)


@router.post("/rate-limit/reset", response_model=SuccessResponse)
async def reset_rate_limit(
    client_ip: ClientIP,
    chat_service: ChatServiceDep,
):
    """Reset the caller's guest quota (development only)."""
    await chat_service.reset_rate_limit(client_ip)
    return SuccessResponse()


@router.get("/analytics", response_model=ChatAnalytics)
async def get_analytics(chat_service: ChatServiceDep):
    """Message and response-type statistics."""
    return await chat_service.get_analytics()
