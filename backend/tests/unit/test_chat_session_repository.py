"""
Unit tests for Chat Session Repository.
"""

import pytest
from sqlalchemy import func, select

from career_chat.core.exceptions import NotFoundError
from career_chat.infrastructure.local.database import ChatMessageORM
from career_chat.models.enums import MessageRole, ResponseKind


async def _add_turn(repo, user_id, session_id, text, title=None, kind=ResponseKind.AI, category="custom"):
    return await repo.add_exchange(
        user_id,
        session_id,
        user_content=text,
        assistant_content=f"reply to {text}",
        response_type=kind,
        category=category,
        first_exchange_title=title,
    )


@pytest.mark.asyncio
async def test_create_session_defaults(chat_repo, test_user_id):
    """Test creating a session with the default title."""
    session = await chat_repo.create_session(test_user_id)

    assert session.id
    assert session.title == "New Chat"
    assert session.message_count == 0
    assert session.user_id == test_user_id


@pytest.mark.asyncio
async def test_get_session_is_owner_scoped(chat_repo, test_user_id):
    """Test that another user cannot see a session."""
    session = await chat_repo.create_session(test_user_id, "Mine")

    assert (await chat_repo.get_session(test_user_id, session.id)).title == "Mine"
    assert await chat_repo.get_session("someone_else", session.id) is None


@pytest.mark.asyncio
async def test_list_sessions_newest_first_with_counts(chat_repo, test_user_id):
    """Test listing sessions ordered by creation with message counts."""
    first = await chat_repo.create_session(test_user_id, "First")
    second = await chat_repo.create_session(test_user_id, "Second")
    await chat_repo.create_session("other_user", "Not mine")
    await _add_turn(chat_repo, test_user_id, first.id, "hello")

    sessions = await chat_repo.list_sessions(test_user_id)

    assert [s.id for s in sessions] == [second.id, first.id]
    counts = {s.id: s.message_count for s in sessions}
    assert counts == {first.id: 2, second.id: 0}


@pytest.mark.asyncio
async def test_add_exchange_persists_both_messages(chat_repo, test_user_id):
    """Test that a turn stores the user and assistant messages together."""
    session = await chat_repo.create_session(test_user_id)

    user_message, ai_message = await _add_turn(
        chat_repo,
        test_user_id,
        session.id,
        "resume tips",
        kind=ResponseKind.COMMON,
        category="resume",
    )

    assert user_message.role == MessageRole.USER
    assert user_message.response_type is None
    assert ai_message.role == MessageRole.ASSISTANT
    assert ai_message.response_type == ResponseKind.COMMON
    assert ai_message.category == "resume"
    assert int(ai_message.id) > int(user_message.id)

    messages = await chat_repo.list_messages(test_user_id, session.id)
    assert [m.content for m in messages] == ["resume tips", "reply to resume tips"]


@pytest.mark.asyncio
async def test_add_exchange_titles_only_first_turn(chat_repo, test_user_id):
    """Test that only the first exchange renames the session."""
    session = await chat_repo.create_session(test_user_id)

    await _add_turn(chat_repo, test_user_id, session.id, "one", title="First Title")
    await _add_turn(chat_repo, test_user_id, session.id, "two", title="Second Title")

    stored = await chat_repo.get_session(test_user_id, session.id)
    assert stored.title == "First Title"
    assert stored.message_count == 4


@pytest.mark.asyncio
async def test_add_exchange_foreign_session_writes_nothing(chat_repo, session_factory, test_user_id):
    """Test that a turn on someone else's session is rejected without writes."""
    session = await chat_repo.create_session("owner")

    with pytest.raises(NotFoundError):
        await _add_turn(chat_repo, test_user_id, session.id, "hi")

    async with session_factory() as db:
        assert await db.scalar(select(func.count(ChatMessageORM.id))) == 0


@pytest.mark.asyncio
async def test_recent_messages_returns_last_in_order(chat_repo, test_user_id):
    """Test that history is the newest messages, oldest first."""
    session = await chat_repo.create_session(test_user_id)
    for text in ("a", "b", "c"):
        await _add_turn(chat_repo, test_user_id, session.id, text)

    recent = await chat_repo.recent_messages(test_user_id, session.id, limit=3)

    assert [m.content for m in recent] == ["reply to b", "c", "reply to c"]


@pytest.mark.asyncio
async def test_delete_session_removes_messages(chat_repo, session_factory, test_user_id):
    """Test deleting a session also deletes its messages."""
    session = await chat_repo.create_session(test_user_id)
    await _add_turn(chat_repo, test_user_id, session.id, "hello")

    assert await chat_repo.delete_session(test_user_id, session.id) is True
    assert await chat_repo.get_session(test_user_id, session.id) is None
    async with session_factory() as db:
        assert await db.scalar(select(func.count(ChatMessageORM.id))) == 0


@pytest.mark.asyncio
async def test_delete_session_missing_or_foreign(chat_repo, test_user_id):
    """Test deleting an unknown or foreign session reports False."""
    session = await chat_repo.create_session("owner")

    assert await chat_repo.delete_session(test_user_id, session.id) is False
    assert await chat_repo.delete_session(test_user_id, "does-not-exist") is False
    assert await chat_repo.get_session("owner", session.id) is not None


@pytest.mark.asyncio
async def test_message_stats(chat_repo, test_user_id):
    """Test analytics aggregation over assistant messages."""
    session = await chat_repo.create_session(test_user_id)
    await _add_turn(chat_repo, test_user_id, session.id, "a", kind=ResponseKind.AI, category="custom")
    await _add_turn(chat_repo, test_user_id, session.id, "b", kind=ResponseKind.COMMON, category="resume")
    await _add_turn(chat_repo, test_user_id, session.id, "c", kind=ResponseKind.REDIRECT, category=None)

    stats = await chat_repo.message_stats()

    assert stats["total"] == 6
    assert stats["anonymous"] == 0
    assert stats["response_types"] == {"ai": 1, "common": 1, "redirect": 1}
    assert stats["categories"] == {"custom": 1, "resume": 1}
