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
from discord.ext import commands

from utils.cog import BaseCog

if TYPE_CHECKING:
    from bot import BananaBot

_log = logging.getLogger(__name__)


class Membership(BaseCog):
    """Gives new members the auto role and keeps the bot out of guilds it
    is not allowed in.
    """

    @commands.Cog.listener()
    async def on_member_join(self, member: discord.Member) -> None:
        role = discord.Object(id=self.config.auto_role_id)

        try:
            await member.add_roles(role, reason='Auto role')
        except discord.HTTPException as exc:
            _log.warning('Failed to assign the auto role to %s (%s).', member, member.id, exc_info=exc)
            return

        _log.debug('Assigned the auto role to %s (%s).', member, member.id)

    @commands.Cog.listener('on_guild_join')
    @commands.Cog.listener('on_guild_available')
    async def guild_allow_list_listener(self, guild: discord.Guild) -> None:
        """|coro|

        Called for every guild the bot is added to and every guild it sees
        when connecting. Leaves any guild that isn't allowed.

        Parameters
        ----------
        guild: :class:`discord.Guild`
            The guild.
        """
        if self.config.is_allowed_guild(guild.id):
            return

        _log.info('Leaving unauthorized guild %s (%s).', guild.name, guild.id)
        try:
            await guild.leave()
        except discord.HTTPException as exc:
            _log.warning('Failed to leave guild %s.', guild.id, exc_info=exc)


async def setup(bot: BananaBot) -> None:
    await bot.add_cog(Membership(bot))
