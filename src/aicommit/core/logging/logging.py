# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Logging configuration for the ai-commit CLI application.

Console output goes through a rich Console; a debug level log file is kept
per command run under the platform log directory.
"""

from datetime import datetime
from pathlib import Path

from loguru import logger
from rich.console import Console

from aicommit.constants import APP_NAME, LOG_DIR

console = Console()


def _console_sink(message) -> None:
    text = message.record["message"].rstrip("\n")
    console.print(text, markup=False, highlight=False)


def setup_logger(command_name: str | None, debug: bool = False, silent: bool = False) -> Path:
    """
    Set up logging for a command run.

    Args:
        command_name: Name of the command being executed
        debug: Show debug messages on the console
        silent: Only show warnings and errors on the console

    Returns:
        Path to the log file
    """
    # Clear existing sinks so we don't double-log across runs
    logger.remove()

    if debug:
        console_level = "DEBUG"
    elif silent:
        console_level = "WARNING"
    else:
        console_level = "INFO"

    logger.add(_console_sink, level=console_level, format="{message}", catch=True)

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    logfile = LOG_DIR / f"{command_name or APP_NAME}_{timestamp}.log"

    logger.add(
        logfile,
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="14 days",
        catch=True,
        backtrace=True,
        diagnose=False,
    )

    logger.bind(command=command_name, log_level=console_level).debug(
        "Logger initialized"
    )
    logger.debug(f"Log File Created At: {logfile}")

    return logfile
