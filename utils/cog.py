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
from typing import TYPE_CHECKING, Tuple

from discord.ext import commands

if TYPE_CHECKING:
    from bot import BananaBot
    from utils.config import BotConfig

__all__: Tuple[str, ...] = ('BaseCog',)

_log = logging.getLogger(__name__)


class BaseCog(commands.Cog):
    """The cog every extension of the bot inherits from, instead of directly
    inheriting :class:`commands.Cog`. Cogs without their own state don't need
    an :meth:`__init__`.

    Parameters
    ----------
    bot: :class:`BananaBot`
        The bot instance.

    Attributes
    ----------
    bot: :class:`BananaBot`
        The bot instance.
    """

    def __init__(self, bot: BananaBot) -> None:
        self.bot: BananaBot = bot

    @property
    def config(self) -> BotConfig:
        """:class:`BotConfig`: The process configuration."""
        return self.bot.config

    async def cog_load(self) -> None:
        _log.debug('Loaded cog %s.', self.qualified_name)
