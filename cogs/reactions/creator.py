"""
Contributor-Only License v1.0

This file is licensed under the Contributor-Only License. Usage is restricted to
non-commercial purposes. Distribution, sublicensing, and sharing of this file
are prohibited except by the original owner.

Modifications are allowed solely for contributing purposes and must not
misrepresent the original material. This license does not grant any
patent rights or trademark rights.

Full license terms are available in the LICENSE file at the root of the repository.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional, Tuple

import discord

from utils.errors import BadArgument

from .binding import ReactionEmoji, ReactionRoleBinding
from .errors import BindingPersistFailed, MessagePostFailed, ReactionAttachFailed

if TYPE_CHECKING:
    from .state import BindingState
    from .store import ReactionRoleStore

__all__: Tuple[str, ...] = ('ReactionRoleCreator',)

_log = logging.getLogger(__name__)


class ReactionRoleCreator:
    """Creates reaction role posts.

    Parameters
    ----------
    store: :class:`ReactionRoleStore`
        Where new bindings are persisted.
    state: :class:`BindingState`
        Where new bindings are published once persisted.
    """

    __slots__: Tuple[str, ...] = ('store', 'state')

    def __init__(self, *, store: ReactionRoleStore, state: BindingState) -> None:
        self.store: ReactionRoleStore = store
        self.state: BindingState = state

    async def create(
        self,
        *,
        channel: Optional[discord.abc.Messageable],
        role: Optional[discord.Role],
        emoji: Optional[str],
        content: Optional[str],
    ) -> ReactionRoleBinding:
        """|coro|

        Post a reaction role message and make it the active binding, replacing
        any previous one.

        The steps run in order and stop at the first failure. A failure after the
        message was posted leaves the message in place without an active binding.

        Parameters
        ----------
        channel: :class:`discord.abc.Messageable`
            The channel to post in.
        role: :class:`discord.Role`
            The role members receive by reacting.
        emoji: :class:`str`
            The reaction marker.
        content: :class:`str`
            The message body.

        Returns
        -------
        :class:`ReactionRoleBinding`
            The new, persisted and active binding.

        Raises
        ------
        BadArgument
            A required argument was missing. Nothing was done.
        MessagePostFailed
            The message could not be posted. Nothing was done.
        ReactionAttachFailed
            The message was posted but the reaction could not be added.
        BindingPersistFailed
            The binding could not be saved, the previous binding stays active.
        """
        if channel is None:
            raise BadArgument('You need to provide a channel to post the reaction role in.')
        if role is None:
            raise BadArgument('You need to provide the role to give out.')

        emoji = (emoji or '').strip()
        if not emoji:
            raise BadArgument('You need to provide the emoji members react with.')
        if not content or not content.strip():
            raise BadArgument('You need to provide the message to post.')

        channel_id: int = channel.id  # type: ignore

        try:
            message = await channel.send(content)
        except discord.HTTPException as exc:
            _log.warning('Failed to post reaction role message in channel %s.', channel_id, exc_info=exc)
            raise MessagePostFailed(channel_id=channel_id) from exc

        marker = ReactionEmoji.parse(emoji)
        try:
            await message.add_reaction(marker.to_partial_emoji())
        except discord.HTTPException as exc:
            _log.warning('Failed to react to reaction role message %s with %r.', message.id, emoji, exc_info=exc)
            raise ReactionAttachFailed(emoji=emoji, message_id=message.id) from exc

        binding = ReactionRoleBinding(channel_id=channel_id, message_id=message.id, role_id=role.id, emoji=emoji)

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.store.save, binding)
        except OSError as exc:
            _log.warning('Failed to save reaction role binding for message %s.', message.id, exc_info=exc)
            raise BindingPersistFailed(message_id=message.id) from exc

        await self.state.replace(binding)

        _log.info(
            'Created reaction role: channel %s, message %s, role %s, emoji %r.',
            channel_id,
            message.id,
            role.id,
            emoji,
        )
        return binding
