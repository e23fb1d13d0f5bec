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
import functools
import logging
import signal

import discord
import dotenv

# Loaded before our own modules, they read the environment at import time
dotenv.load_dotenv()

from bot import BananaBot  # noqa: E402
from utils import RUNNING_DEVELOPMENT, BotConfig, ConfigurationError  # noqa: E402

_log = logging.getLogger(__name__)


def _request_shutdown(bot: BananaBot, signum: signal.Signals) -> None:
    _log.info('Received %s, shutting down...', signum.name)
    bot.create_task(bot.close(), name='shutdown')


def install_shutdown_handlers(bot: BananaBot) -> None:
    """Close the bot cleanly on SIGINT or SIGTERM. In flight event handlers are not awaited."""
    loop = asyncio.get_running_loop()

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, functools.partial(_request_shutdown, bot, signum))
        except NotImplementedError:
            # Windows event loops, Ctrl+C still raises KeyboardInterrupt there
            _log.debug('Signal handlers are not supported on this platform.')
            return


async def main() -> None:
    discord.utils.setup_logging(level=logging.DEBUG if RUNNING_DEVELOPMENT else logging.INFO)

    try:
        config = BotConfig.from_environ()
    except ConfigurationError as exc:
        _log.critical('Refusing to start: %s', exc)
        raise SystemExit(1) from exc

    bot = BananaBot(config=config)

    async with bot:
        install_shutdown_handlers(bot)

        try:
            await bot.start(config.token)
        except discord.LoginFailure as exc:
            _log.critical('Failed to log in, check BANANABOT_DISCORD_TOKEN.', exc_info=exc)
            raise SystemExit(1) from exc
        except Exception as exc:
            _log.critical('Failed to start client.', exc_info=exc)
            raise SystemExit(1) from exc


if __name__ == '__main__':
    asyncio.run(main())
