"""Tests for posting a reaction role message and publishing its binding."""

from __future__ import annotations

import pathlib
from unittest.mock import MagicMock

import discord
import pytest

from cogs.reactions import (
    BindingPersistFailed,
    BindingState,
    MessagePostFailed,
    ReactionAttachFailed,
    ReactionRoleBinding,
    ReactionRoleCreator,
    ReactionRoleStore,
)
from utils.errors import BadArgument

from conftest import CHANNEL_ID, MESSAGE_ID, ROLE_ID, make_http_exception

OLD_BINDING = ReactionRoleBinding(channel_id=1, message_id=2, role_id=3, emoji='🍌')


@pytest.fixture
def state() -> BindingState:
    return BindingState(OLD_BINDING)


@pytest.fixture
def creator(store: ReactionRoleStore, state: BindingState) -> ReactionRoleCreator:
    return ReactionRoleCreator(store=store, state=state)


@pytest.mark.asyncio
async def test_create_posts_reacts_saves_and_publishes(
    creator: ReactionRoleCreator,
    state: BindingState,
    store: ReactionRoleStore,
    channel: MagicMock,
    posted_message: MagicMock,
    role: MagicMock,
):
    binding = await creator.create(
        channel=channel, role=role, emoji='✅', content='React to get the Helper role!'
    )

    assert binding == ReactionRoleBinding(channel_id=CHANNEL_ID, message_id=MESSAGE_ID, role_id=ROLE_ID, emoji='✅')
    channel.send.assert_awaited_once_with('React to get the Helper role!')
    posted_message.add_reaction.assert_awaited_once()
    (reaction,), _ = posted_message.add_reaction.await_args
    assert str(reaction) == '✅'

    assert store.load() == binding
    assert await state.get() == binding


@pytest.mark.asyncio
async def test_create_with_custom_emoji(creator: ReactionRoleCreator, channel: MagicMock, posted_message: MagicMock, role):
    binding = await creator.create(channel=channel, role=role, emoji='<:banana:123456789012345678>', content='Hi')

    (reaction,), _ = posted_message.add_reaction.await_args
    assert isinstance(reaction, discord.PartialEmoji)
    assert reaction.id == 123456789012345678
    assert binding.emoji == '<:banana:123456789012345678>'


@pytest.mark.asyncio
@pytest.mark.parametrize(
    'kwargs',
    [
        {'emoji': '', 'content': 'Hi'},
        {'emoji': '   ', 'content': 'Hi'},
        {'emoji': None, 'content': 'Hi'},
        {'emoji': '✅', 'content': ''},
        {'emoji': '✅', 'content': None},
    ],
)
async def test_missing_arguments_are_usage_errors(
    creator: ReactionRoleCreator, state: BindingState, state_path: pathlib.Path, channel: MagicMock, role, kwargs
):
    with pytest.raises(BadArgument):
        await creator.create(channel=channel, role=role, **kwargs)

    channel.send.assert_not_awaited()
    assert not state_path.exists()
    assert await state.get() is OLD_BINDING


@pytest.mark.asyncio
async def test_missing_channel_or_role(creator: ReactionRoleCreator, channel: MagicMock, role):
    with pytest.raises(BadArgument):
        await creator.create(channel=None, role=role, emoji='✅', content='Hi')

    with pytest.raises(BadArgument):
        await creator.create(channel=channel, role=None, emoji='✅', content='Hi')

    channel.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_post_failure_changes_nothing(
    creator: ReactionRoleCreator, state: BindingState, state_path: pathlib.Path, channel: MagicMock, role
):
    channel.send.side_effect = make_http_exception(discord.Forbidden, status=403)

    with pytest.raises(MessagePostFailed) as excinfo:
        await creator.create(channel=channel, role=role, emoji='✅', content='Hi')

    assert isinstance(excinfo.value.__cause__, discord.Forbidden)
    assert not state_path.exists()
    assert await state.get() is OLD_BINDING


@pytest.mark.asyncio
async def test_reaction_failure_leaves_message_and_old_binding(
    creator: ReactionRoleCreator,
    state: BindingState,
    state_path: pathlib.Path,
    channel: MagicMock,
    posted_message: MagicMock,
    role,
):
    posted_message.add_reaction.side_effect = make_http_exception(status=400)

    with pytest.raises(ReactionAttachFailed) as excinfo:
        await creator.create(channel=channel, role=role, emoji='not-an-emoji', content='Hi')

    assert excinfo.value.message_id == MESSAGE_ID
    channel.send.assert_awaited_once()
    posted_message.delete.assert_not_called()
    assert not state_path.exists()
    assert await state.get() is OLD_BINDING


@pytest.mark.asyncio
async def test_persist_failure_does_not_publish(tmp_path: pathlib.Path, state: BindingState, channel: MagicMock, role):
    store = ReactionRoleStore(tmp_path / 'missing' / 'reaction_role.json')
    creator = ReactionRoleCreator(store=store, state=state)

    with pytest.raises(BindingPersistFailed) as excinfo:
        await creator.create(channel=channel, role=role, emoji='✅', content='Hi')

    assert isinstance(excinfo.value.__cause__, OSError)
    assert await state.get() is OLD_BINDING


@pytest.mark.asyncio
async def test_new_binding_replaces_old(
    creator: ReactionRoleCreator, state: BindingState, channel: MagicMock, posted_message: MagicMock, role
):
    first = await creator.create(channel=channel, role=role, emoji='✅', content='First')

    posted_message.id = MESSAGE_ID + 1
    second = await creator.create(channel=channel, role=role, emoji='🍌', content='Second')

    current = await state.get()
    assert current == second
    assert not current.matches(first.message_id, discord.PartialEmoji(name='✅'))
    assert current.matches(second.message_id, discord.PartialEmoji(name='🍌'))
