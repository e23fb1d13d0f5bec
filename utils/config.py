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

import dataclasses
import os
import pathlib
from typing import Mapping, Optional, Tuple, Type

from typing_extensions import Self

from .errors import ConfigurationError

__all__: Tuple[str, ...] = ('BotConfig', 'DEFAULT_REACTION_ROLE_PATH', 'parse_snowflake')

TOKEN_KEY = 'BANANABOT_DISCORD_TOKEN'
AUTO_ROLE_KEY = 'BANANABOT_AUTO_ROLE_ID'
ALLOWED_GUILDS_KEY = 'BANANABOT_ALLOWED_GUILD_IDS'
REACTION_ROLE_PATH_KEY = 'BANANABOT_REACTION_ROLE_PATH'

DEFAULT_REACTION_ROLE_PATH: pathlib.Path = pathlib.Path('reaction_role.json')

_SNOWFLAKE_LIMIT = 1 << 64


def parse_snowflake(key: str, value: str) -> int:
    """Parse a Discord ID from the environment.

    Parameters
    ----------
    key: :class:`str`
        The environment variable the value came from, used in the error message.
    value: :class:`str`
        The raw value.

    Returns
    -------
    :class:`int`
        The parsed ID.

    Raises
    ------
    ConfigurationError
        The value is not an unsigned 64 bit integer.
    """
    value = value.strip()
    if not value.isdecimal() or not value.isascii():
        raise ConfigurationError(key, f'must be a numeric ID, got {value!r}')

    snowflake = int(value)
    if snowflake >= _SNOWFLAKE_LIMIT:
        raise ConfigurationError(key, f'is out of range for a Discord ID: {value}')

    return snowflake


def _require(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key)
    if value is None or not value.strip():
        raise ConfigurationError(key, 'is required but was not set')

    return value


@dataclasses.dataclass(frozen=True)
class BotConfig:
    """The process configuration. Loaded once at startup and never mutated.

    Attributes
    ----------
    token: :class:`str`
        The Discord bot token.
    auto_role_id: :class:`int`
        The role given to every member that joins an allowed guild.
    allowed_guild_ids: Tuple[:class:`int`, ...]
        The guilds the bot is allowed to stay in.
    reaction_role_path: :class:`pathlib.Path`
        Where the reaction role binding is persisted.
    """

    token: str
    auto_role_id: int
    allowed_guild_ids: Tuple[int, ...]
    reaction_role_path: pathlib.Path = DEFAULT_REACTION_ROLE_PATH

    def is_allowed_guild(self, guild_id: int, /) -> bool:
        return guild_id in self.allowed_guild_ids

    @classmethod
    def from_environ(cls: Type[Self], environ: Optional[Mapping[str, str]] = None) -> Self:
        """Build the configuration from environment variables.

        Parameters
        ----------
        environ: Optional[Mapping[:class:`str`, :class:`str`]]
            The mapping to read from. Defaults to :data:`os.environ`.

        Raises
        ------
        ConfigurationError
            A required variable is missing or malformed.
        """
        if environ is None:
            environ = os.environ

        token = _require(environ, TOKEN_KEY).strip()
        auto_role_id = parse_snowflake(AUTO_ROLE_KEY, _require(environ, AUTO_ROLE_KEY))
        allowed_guild_ids = tuple(
            parse_snowflake(ALLOWED_GUILDS_KEY, entry) for entry in _require(environ, ALLOWED_GUILDS_KEY).split(',')
        )

        path = environ.get(REACTION_ROLE_PATH_KEY, '').strip()
        reaction_role_path = pathlib.Path(path) if path else DEFAULT_REACTION_ROLE_PATH

        return cls(
            token=token,
            auto_role_id=auto_role_id,
            allowed_guild_ids=allowed_guild_ids,
            reaction_role_path=reaction_role_path,
        )
