"""Unit tests for crud/events.py"""

import asyncio

import pytest

from sitecms.crud.events import ChangeAction, ChangeEvent, ChangeFeed


def _event(table="content_sections", action=ChangeAction.update):
    return ChangeEvent(table, action)


def test_publish_without_subscribers():
    """Publishing with nobody listening delivers to no one."""
    assert ChangeFeed().publish(_event()) == 0


@pytest.mark.asyncio
async def test_subscribe_receives_matching_table():
    """Subscribers see events for their tables and not others."""
    feed = ChangeFeed()
    async with feed.subscribe("content_sections") as sub:
        assert feed.publish(_event("blogs")) == 0
        assert feed.publish(_event("content_sections", ChangeAction.insert)) == 1
        event = await asyncio.wait_for(sub.__anext__(), timeout=1)
    assert event.action == ChangeAction.insert


@pytest.mark.asyncio
async def test_subscribe_all_tables():
    """A subscription without tables receives everything."""
    feed = ChangeFeed()
    async with feed.subscribe() as sub:
        assert feed.publish(_event("blogs")) == 1


@pytest.mark.asyncio
async def test_subscription_removed_on_exit():
    """Leaving the context releases the subscription."""
    feed = ChangeFeed()
    async with feed.subscribe("blogs"):
        assert feed.subscriber_count == 1
    assert feed.subscriber_count == 0


@pytest.mark.asyncio
async def test_close_ends_stream():
    """close() ends every open stream after queued events are drained."""
    feed = ChangeFeed()
    received = []
    async with feed.subscribe("blogs") as sub:
        feed.publish(_event("blogs"))
        feed.close()
        async for event in sub:
            received.append(event)
    assert len(received) == 1
    assert feed.publish(_event("blogs")) == 0


@pytest.mark.asyncio
async def test_subscribe_after_close_is_finite():
    """Subscribing to a closed feed yields an already-ended stream."""
    feed = ChangeFeed()
    feed.close()
    async with feed.subscribe() as sub:
        assert [e async for e in sub] == []


def test_reopen_accepts_publishes():
    """A reopened feed delivers again."""
    feed = ChangeFeed()
    feed.close()
    feed.reopen()
    assert feed.closed is False
