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

from typing import Any, Tuple

from discord import app_commands

__all__: Tuple[str, ...] = (
    'ApplicationCommandException',
    'BadArgument',
    'ConfigurationError',
)


class ApplicationCommandException(app_commands.AppCommandError):
    """A custom exception raised when an operation fails in an application command's
    callback. The message of this exception is safe to show to the invoking user.

    This inherits :class:`discord.app_commands.AppCommandError`.
    """

    __slots__: Tuple[str, ...] = ()

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)


class BadArgument(ApplicationCommandException):
    """An exception raised when a command argument is missing or invalid.

    This inherits :class:`ApplicationCommandException`.
    """


class ConfigurationError(Exception):
    """An exception raised when the process configuration is missing
    or malformed. The bot refuses to start when this is raised.

    Parameters
    ----------
    key: :class:`str`
        The environment variable that failed validation.
    reason: :class:`str`
        Why the value was rejected.

    Attributes
    ----------
    key: :class:`str`
        The environment variable that failed validation.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f'{key} {reason}')
        self.key: str = key
