"""Tests for the auto role and guild allow-list listeners."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from cogs.membership import Membership

from conftest import AUTO_ROLE_ID, GUILD_ID, make_http_exception


@pytest.fixture
def cog(bot: MagicMock) -> Membership:
    return Membership(bot)


def _guild(guild_id: int) -> MagicMock:
    guild = MagicMock()
    guild.id = guild_id
    guild.name = f'Guild {guild_id}'
    guild.leave = AsyncMock()
    return guild


@pytest.mark.asyncio
async def test_auto_role_on_join(cog: Membership):
    member = MagicMock()
    member.add_roles = AsyncMock()

    await cog.on_member_join(member)

    member.add_roles.assert_awaited_once()
    (role,), kwargs = member.add_roles.await_args
    assert isinstance(role, discord.Object)
    assert role.id == AUTO_ROLE_ID
    assert kwargs == {'reason': 'Auto role'}


@pytest.mark.asyncio
async def test_auto_role_failure_is_absorbed(cog: Membership):
    member = MagicMock()
    member.add_roles = AsyncMock(side_effect=make_http_exception(discord.Forbidden, status=403))

    await cog.on_member_join(member)

    member.add_roles.assert_awaited_once()


@pytest.mark.asyncio
async def test_allowed_guild_is_kept(cog: Membership):
    guild = _guild(GUILD_ID)

    await cog.guild_allow_list_listener(guild)

    guild.leave.assert_not_awaited()


@pytest.mark.asyncio
async def test_unauthorized_guild_is_left(cog: Membership):
    guild = _guild(GUILD_ID + 1)

    await cog.guild_allow_list_listener(guild)

    guild.leave.assert_awaited_once()


@pytest.mark.asyncio
async def test_leave_failure_is_absorbed(cog: Membership):
    guild = _guild(GUILD_ID + 1)
    guild.leave.side_effect = make_http_exception()

    await cog.guild_allow_list_listener(guild)

    guild.leave.assert_awaited_once()
