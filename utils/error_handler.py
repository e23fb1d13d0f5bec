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
import sys
import types
from typing import TYPE_CHECKING, Any, Optional, Tuple

import discord
from discord import app_commands
from discord.ext import commands

from .errors import *

if TYPE_CHECKING:
    from bot import BananaBot

__all__: Tuple[str, ...] = ('ErrorHandler',)


_log = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'Oh no! Something went wrong! The error has been logged, my apologies!'


def _format_permissions(permissions: Any) -> str:
    return ', '.join(p.replace('_', ' ').title() for p in permissions)


class ErrorHandler:
    """The base error handler for the client. This is a class that listens
    for any exceptions that are raised in the bot and handles them.

    Errors that are meant for the user, :class:`ApplicationCommandException` and
    failed checks, are sent back ephemerally. Everything else is logged.

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
        self.inject()

    def inject(self) -> None:
        """A helper method to inject the error handler into the bot."""
        self.bot.tree.on_error = self.handle_tree_on_error
        self.bot.on_error = self.handle_on_error

    def eject(self) -> None:
        """A helper method to eject the error handler from the bot."""
        self.bot.tree.on_error = types.MethodType(app_commands.CommandTree.on_error, self.bot.tree)  # type: ignore
        self.bot.on_error = types.MethodType(commands.Bot.on_error, self.bot)  # type: ignore

    async def log_error(
        self,
        exception: BaseException,
        *,
        target: Optional[discord.Interaction[BananaBot]] = None,
        event_name: Optional[str] = None,
    ) -> None:
        """|coro|

        A coroutine used to log an error. This will alert the user of the unknown error
        when there is one to alert.

        Parameters
        ----------
        exception: :class:`BaseException`
            The exception to log.
        target: Optional[:class:`discord.Interaction`]
            The interaction that raised the error, if any.
        event_name: Optional[:class:`str`]
            The name of the event that raised the error.
        """
        if target is not None:
            command = target.command and target.command.qualified_name
            _log.error(
                'Unhandled error in command %s (user %s, guild %s).',
                command,
                target.user.id,
                target.guild_id,
                exc_info=exception,
            )

            if not target.response.is_done():
                await target.response.defer(ephemeral=True)

            await target.followup.send(GENERIC_ERROR_MESSAGE, ephemeral=True)
            return

        _log.error('Unhandled error in event %s.', event_name or 'unknown', exc_info=exception)

    async def _attempt_handle_known_error(self, interaction: discord.Interaction[BananaBot], error: Exception) -> None:
        # We need to try and defer the given interaction if it has not been done yet.
        if not interaction.response.is_done():
            await interaction.response.defer(ephemeral=True)

        async def sender(content: str) -> None:
            await interaction.followup.send(content, ephemeral=True)

        while hasattr(error, 'original'):
            error = getattr(error, 'original')

        if isinstance(error, ApplicationCommandException):
            _log.info('Reporting to user %s: %s', interaction.user.id, error)
            return await sender(str(error))

        if isinstance(error, app_commands.TransformerError):
            await sender(f'Failed to convert `{error.value}` to a {error.type.name.title()}!')
            return await self.log_error(error, target=None, event_name='transformer')

        if isinstance(error, app_commands.CheckFailure):
            if isinstance(error, app_commands.NoPrivateMessage):
                return await sender(str(error))
            if isinstance(error, (app_commands.MissingPermissions, app_commands.BotMissingPermissions)):
                fmt = 'I\'m' if isinstance(error, app_commands.BotMissingPermissions) else 'You are'
                return await sender(
                    f'{fmt} missing the following permissions to run this command: '
                    f'{_format_permissions(error.missing_permissions)}'
                )

            return await sender(f'Ope! {error}')

        if isinstance(error, app_commands.CommandSignatureMismatch):
            return await sender('Oh shoot! There\'s a mismatch in my commands, please try again in a moment.')

        await self.log_error(error, target=interaction)

    async def handle_tree_on_error(self, interaction: discord.Interaction[BananaBot], error: Exception) -> None:
        await self._attempt_handle_known_error(interaction, error=error)

    async def handle_on_error(self, event_method: str, *args: Any, **kwargs: Any) -> None:
        """|coro|

        A method called whenever there's an exception raised while processing an event.

        Parameters
        ----------
        event_method: :class:`str`
            The name of the event that raised the error.
        *args: Any
            The positional arguments that were passed to the event.
        **kwargs: Any
            The keyword arguments that were passed to the event.
        """
        _, error, _ = sys.exc_info()
        if not error:
            raise RuntimeError('No error was passed to the error handler.')

        await self.log_error(error, event_name=event_method)


async def setup(bot: BananaBot) -> None:
    bot.error_handler = ErrorHandler(bot)


async def teardown(bot: BananaBot) -> None:
    if bot.error_handler:
        bot.error_handler.eject()
