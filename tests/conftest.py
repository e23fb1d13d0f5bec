"""Shared fixtures: fake Discord collaborators and reaction role objects."""

from __future__ import annotations

import pathlib
import types
from typing import Any, Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from cogs.reactions import BindingState, ReactionRoleBinding, ReactionRoleStore
from utils.config import BotConfig

BOT_USER_ID = 1
CHANNEL_ID = 100
ROLE_ID = 200
USER_ID = 300
MESSAGE_ID = 555
GUILD_ID = 900
AUTO_ROLE_ID = 42


def make_http_exception(cls: type = discord.HTTPException, status: int = 500) -> discord.HTTPException:
    response = MagicMock(status=status, reason='Internal Server Error')
    return cls(response, 'boom')


def make_payload(
    *,
    message_id: int = MESSAGE_ID,
    emoji: Any = '✅',
    guild_id: Optional[int] = GUILD_ID,
    user_id: int = USER_ID,
    event_type: str = 'REACTION_ADD',
) -> Any:
    """Build something shaped like :class:`discord.RawReactionActionEvent`."""
    if isinstance(emoji, str):
        emoji = discord.PartialEmoji(name=emoji)

    return types.SimpleNamespace(
        message_id=message_id,
        channel_id=CHANNEL_ID,
        guild_id=guild_id,
        user_id=user_id,
        emoji=emoji,
        event_type=event_type,
    )


@pytest.fixture
def payload_factory() -> Callable[..., Any]:
    return make_payload


@pytest.fixture
def binding() -> ReactionRoleBinding:
    return ReactionRoleBinding(channel_id=CHANNEL_ID, message_id=MESSAGE_ID, role_id=ROLE_ID, emoji='✅')


@pytest.fixture
def state_path(tmp_path: pathlib.Path) -> pathlib.Path:
    return tmp_path / 'reaction_role.json'


@pytest.fixture
def store(state_path: pathlib.Path) -> ReactionRoleStore:
    return ReactionRoleStore(state_path)


@pytest.fixture
def config(state_path: pathlib.Path) -> BotConfig:
    return BotConfig(
        token='token',
        auto_role_id=AUTO_ROLE_ID,
        allowed_guild_ids=(GUILD_ID,),
        reaction_role_path=state_path,
    )


@pytest.fixture
def bot(config: BotConfig, store: ReactionRoleStore) -> MagicMock:
    """A stand in for :class:`BananaBot` with a real store and state and a mocked HTTP client."""
    fake = MagicMock()
    fake.config = config
    fake.user = types.SimpleNamespace(id=BOT_USER_ID)
    fake.reaction_role_store = store
    fake.reaction_role_state = BindingState(store.load())
    fake.http.add_role = AsyncMock()
    fake.http.remove_role = AsyncMock()
    return fake


@pytest.fixture
def posted_message() -> MagicMock:
    message = MagicMock()
    message.id = MESSAGE_ID
    message.add_reaction = AsyncMock()
    return message


@pytest.fixture
def channel(posted_message: MagicMock) -> MagicMock:
    channel = MagicMock()
    channel.id = CHANNEL_ID
    channel.mention = f'<#{CHANNEL_ID}>'
    channel.send = AsyncMock(return_value=posted_message)
    return channel


@pytest.fixture
def role() -> MagicMock:
    role = MagicMock()
    role.id = ROLE_ID
    role.mention = f'<@&{ROLE_ID}>'
    return role


@pytest.fixture
def interaction() -> MagicMock:
    interaction = MagicMock()
    interaction.user.id = USER_ID
    interaction.guild_id = GUILD_ID
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.response.defer = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction
