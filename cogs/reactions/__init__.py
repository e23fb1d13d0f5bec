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

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from utils.cog import BaseCog

from .binding import *
from .creator import *
from .errors import *
from .matcher import *
from .state import *
from .store import *

if TYPE_CHECKING:
    from bot import BananaBot

_log = logging.getLogger(__name__)

ROLE_CHANGE_REASON = 'Reaction roles'


class ReactionRoles(BaseCog):
    """Create a reaction role post and hand out its role to members who react to it."""

    def __init__(self, bot: BananaBot) -> None:
        super().__init__(bot)
        self.creator: ReactionRoleCreator = ReactionRoleCreator(
            store=bot.reaction_role_store, state=bot.reaction_role_state
        )

    @app_commands.command(name='create-reaction-role', description='Post a message members can react to for a role.')
    @app_commands.describe(
        channel='The channel to post the message in.',
        role='The role members get when they react.',
        emoji='The emoji members react with.',
        message='The message to post.',
    )
    @app_commands.guild_only()
    @app_commands.default_permissions(manage_roles=True)
    async def create_reaction_role(
        self,
        interaction: discord.Interaction[BananaBot],
        channel: discord.TextChannel,
        role: discord.Role,
        emoji: str,
        message: str,
    ) -> None:
        """|coro|

        Post a reaction role message. This replaces the current reaction role, reactions
        on the previous message stop handing out roles.

        Parameters
        ----------
        channel: :class:`discord.TextChannel`
            The channel to post the message in.
        role: :class:`discord.Role`
            The role members get when they react.
        emoji: :class:`str`
            The emoji members react with.
        message: :class:`str`
            The message to post.
        """
        await interaction.response.defer(ephemeral=True, thinking=True)

        binding = await self.creator.create(channel=channel, role=role, emoji=emoji, content=message)

        await interaction.followup.send(
            f'I\'ve posted your reaction role in {channel.mention}. '
            f'Members who react with {binding.emoji} will get the {role.mention} role, '
            'and lose it when they remove their reaction.',
            ephemeral=True,
        )

    @commands.Cog.listener('on_raw_reaction_add')
    @commands.Cog.listener('on_raw_reaction_remove')
    async def reaction_event_listener(self, payload: discord.RawReactionActionEvent) -> None:
        """|coro|

        A multiple event handler dedicated to adding and removing the bound role
        when members react to the reaction role message.

        Parameters
        ----------
        payload: :class:`RawReactionActionEvent`
            The raw payload given to the client from a reaction
            being added or removed.
        """
        if self.bot.user and payload.user_id == self.bot.user.id:
            # The marker reaction we add ourselves
            return

        binding = await self.bot.reaction_role_state.get()
        intent = resolve_role_intent(binding, payload)
        if intent is None:
            _log.debug(
                'Ignoring %s on message %s with %s.',
                payload.event_type,
                payload.message_id,
                payload.emoji,
            )
            return

        await self.apply_role_intent(intent)

    async def apply_role_intent(self, intent: RoleIntent) -> None:
        """|coro|

        Grant or revoke the bound role. Failures are logged, the member gets no feedback.

        Parameters
        ----------
        intent: :class:`RoleIntent`
            The role change to perform.
        """
        if intent.action is RoleAction.grant:
            meth = self.bot.http.add_role
        else:
            meth = self.bot.http.remove_role

        try:
            await meth(intent.guild_id, intent.user_id, intent.role_id, reason=ROLE_CHANGE_REASON)
        except discord.HTTPException as exc:
            _log.warning(
                'Failed to %s role %s for user %s in guild %s.',
                intent.action.value,
                intent.role_id,
                intent.user_id,
                intent.guild_id,
                exc_info=exc,
            )
            return

        _log.debug(
            'Performed %s of role %s for user %s in guild %s.',
            intent.action.value,
            intent.role_id,
            intent.user_id,
            intent.guild_id,
        )


async def setup(bot: BananaBot) -> None:
    await bot.add_cog(ReactionRoles(bot))
