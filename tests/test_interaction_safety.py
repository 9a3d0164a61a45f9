from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from utils.interaction_safety import safe_defer, safe_followup


class _StubFollowup:
    def __init__(self, error=None):
        self.last_kwargs = None
        self.error = error

    async def send(self, **kwargs):
        if self.error:
            raise self.error
        self.last_kwargs = kwargs
        return "ok"


class _StubResponse:
    def __init__(self, done=False, error=None):
        self.done = done
        self.error = error
        self.deferred_with = None

    def is_done(self):
        return self.done

    async def defer(self, ephemeral=False):
        if self.error:
            raise self.error
        self.deferred_with = {"ephemeral": ephemeral}


class _StubInteraction:
    def __init__(self, response=None, followup=None):
        self.id = 123
        self.followup = followup or _StubFollowup()
        self.response = response or _StubResponse()


def _http_error(status, cls=discord.HTTPException):
    return cls(SimpleNamespace(status=status, reason="err"), "boom")


@pytest.mark.asyncio
async def test_safe_followup_passes_kwargs():
    interaction = _StubInteraction()

    result = await safe_followup(interaction, content="hi", ephemeral=True)

    assert result == "ok"
    assert interaction.followup.last_kwargs == {"content": "hi", "ephemeral": True}


@pytest.mark.asyncio
async def test_safe_followup_swallows_http_errors():
    interaction = _StubInteraction(followup=_StubFollowup(error=_http_error(500)))

    assert await safe_followup(interaction, content="hi") is None


@pytest.mark.asyncio
async def test_safe_defer_defers_once():
    interaction = _StubInteraction()

    assert await safe_defer(interaction, ephemeral=True) is True
    assert interaction.response.deferred_with == {"ephemeral": True}


@pytest.mark.asyncio
async def test_safe_defer_already_acknowledged():
    response = _StubResponse(done=True)
    response.defer = AsyncMock()
    interaction = _StubInteraction(response=response)

    assert await safe_defer(interaction) is True
    response.defer.assert_not_called()


@pytest.mark.asyncio
async def test_safe_defer_expired_token():
    interaction = _StubInteraction(response=_StubResponse(error=_http_error(404, discord.NotFound)))

    assert await safe_defer(interaction) is False


@pytest.mark.asyncio
async def test_safe_defer_http_error():
    response = MagicMock()
    response.is_done.return_value = False
    response.defer = AsyncMock(side_effect=_http_error(503))
    interaction = _StubInteraction(response=response)

    assert await safe_defer(interaction) is False
