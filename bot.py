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
import time
from typing import TYPE_CHECKING, Any, Callable, Coroutine, Optional, ParamSpec, Tuple, TypeAlias, TypeVar

import discord
from discord.ext import commands
from typing_extensions import Concatenate

from cogs.reactions import BindingState, ReactionRoleStore
from utils import RUNNING_DEVELOPMENT, BotConfig, ErrorHandler, parse_initial_extensions

T = TypeVar("T")
P = ParamSpec("P")
DecoFunc: TypeAlias = Callable[Concatenate["BananaBot", P], Coroutine[Any, Any, T]]

_log = logging.getLogger(__name__)
if RUNNING_DEVELOPMENT:
    _log.setLevel(logging.DEBUG)

initial_extensions: Tuple[str, ...] = (
    "utils.error_handler",
    "cogs.membership",
    "cogs.reactions",
)


def wrap_extension(coro: DecoFunc[P, T]) -> DecoFunc[P, T]:
    """A method to wrap an extension coroutine in the Bot class. This will handle all
    logging and error handling.

    Parameters
    ----------
    coro: DecoFunc[P, T]
        The coroutine to wrap.

    Returns
    -------
    DecoFunc[P, T]
        A wrapped function that logs and handles errors.
    """

    async def wrapped(self: BananaBot, *args: P.args, **kwargs: P.kwargs) -> T:
        ext_name, *_ = args

        start = time.time()
        try:
            result = await coro(self, *args, **kwargs)
        except commands.ExtensionFailed as exc:
            raise exc.original from exc

        _log.info('Loaded the "%s" extension in %s seconds', ext_name, time.time() - start)
        return result

    return wrapped


class BananaBot(commands.Bot):
    """The bot instance. Holds the process configuration and the reaction role
    binding shared between all extensions / cogs.

    Parameters
    ----------
    config: :class:`BotConfig`
        The process configuration.

    Attributes
    ----------
    config: :class:`BotConfig`
        The process configuration.
    reaction_role_store: :class:`ReactionRoleStore`
        Persists the reaction role binding.
    reaction_role_state: :class:`BindingState`
        The reaction role binding currently in effect, seeded from the store.
    """

    if TYPE_CHECKING:
        user: discord.ClientUser  # This isn't accessed before the client has been logged in so it's OK to overwrite it.
        error_handler: ErrorHandler

    def __init__(self, *, config: BotConfig) -> None:
        self.config: BotConfig = config
        self.reaction_role_store: ReactionRoleStore = ReactionRoleStore(config.reaction_role_path)
        self.reaction_role_state: BindingState = BindingState(self.reaction_role_store.load())

        intents = discord.Intents.default()
        intents.members = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            help_command=None,
            description="Hands out roles to new members and reaction role takers",
            intents=intents,
            allowed_mentions=discord.AllowedMentions.none(),
        )

    # Events
    async def on_ready(self) -> None:
        """|coro|

        Called when the client has hit READY. Please note this can be called more than once during the clients
        uptime.
        """
        _log.info("Logged in as %s", self.user.name)
        _log.info("Connected to %s servers total.", len(self.guilds))

    # Helper utilities
    def create_task(self, coro: Coroutine[Any, Any, T], *, name: Optional[str] = None) -> asyncio.Task[T]:
        """Create a task from a coroutine object.

        Parameters
        ----------
        coro: :class:`~asyncio.Coroutine`
            The coroutine to create the task from.
        name: Optional[:class:`str`]
            The name of the task.

        Returns
        -------
        :class:`~asyncio.Task`
            The task that was created.
        """
        return self.loop.create_task(coro, name=name)

    @wrap_extension
    async def load_extension(self, name: str, /, *, package: Optional[str] = None) -> None:
        return await super().load_extension(name, package=package)

    async def sync_allowed_guilds(self) -> None:
        """|coro|

        Register the application commands in every allowed guild. A guild that fails
        to sync is logged and skipped.
        """
        for guild_id in self.config.allowed_guild_ids:
            guild = discord.Object(id=guild_id)
            self.tree.copy_global_to(guild=guild)

            try:
                synced = await self.tree.sync(guild=guild)
            except discord.HTTPException as exc:
                _log.warning("Failed to sync commands to guild %s.", guild_id, exc_info=exc)
                continue

            _log.info("Synced %s commands to guild %s.", len(synced), guild_id)

    # Hooks
    async def setup_hook(self) -> None:
        extensions_to_load = parse_initial_extensions(initial_extensions)

        # The error handler goes first so it is injected before any cog runs
        for ext in extensions_to_load:
            await self.load_extension(ext)

        await self.sync_allowed_guilds()
