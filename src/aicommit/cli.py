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

import sys
from pathlib import Path

import typer
from colorama import init
from dotenv import load_dotenv
from loguru import logger

from aicommit.commands import commit, split
from aicommit.constants import (
    APP_NAME,
    ENV_APP_PREFIX,
    GLOBAL_CONFIG_FILE,
    LOCAL_CONFIG_FILE,
    PROG_NAME,
)
from aicommit.context import GlobalConfig, GlobalContext
from aicommit.core.config.config_loader import ConfigLoader
from aicommit.core.exceptions import handle_aicommit_exception
from aicommit.core.logging.logging import setup_logger
from aicommit.core.ui.theme import set_theme
from aicommit.core.validation import validate_git_repository
from aicommit.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# Initialize colorama (colored output in terminal)
init(autoreset=True)

# main cli app
app = typer.Typer(
    help=f"{APP_NAME}: AI written commit messages, one hunk at a time if you like",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# Main cli commands
app.command(name="commit")(commit.main)
app.command(name="split")(split.main)


def load_global_config(custom_config_path: str | None, **input_args):
    # input args are the "runtime overrides" for configs
    config_args = {}

    for key, item in input_args.items():
        if item is not None:
            config_args[key] = item

    return ConfigLoader.get_full_config(
        GlobalConfig,
        config_args,
        LOCAL_CONFIG_FILE,
        ENV_APP_PREFIX,
        GLOBAL_CONFIG_FILE,
        custom_config_path=Path(custom_config_path)
        if custom_config_path is not None
        else None,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        is_eager=True,
        help=f"Show log path (where logs for {PROG_NAME} live) and exit",
    ),
    repo_path: str = typer.Option(
        ".",
        "--repo",
        help="Path to the git repository to operate on.",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    model: str | None = typer.Option(
        None, "--model", help=GlobalConfig.descriptions["model"]
    ),
    api_key: str | None = typer.Option(
        None, "--api-key", help=GlobalConfig.descriptions["api_key"]
    ),
    temperature: float | None = typer.Option(
        None, "--temperature", help=GlobalConfig.descriptions["temperature"]
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help=GlobalConfig.descriptions["timeout"]
    ),
    language: str | None = typer.Option(
        None, "--language", help=GlobalConfig.descriptions["language"]
    ),
    verbose: bool | None = typer.Option(
        None, "--verbose", "-v", help=GlobalConfig.descriptions["verbose"]
    ),
    silent: bool | None = typer.Option(
        None, "--silent", "-s", help=GlobalConfig.descriptions["silent"]
    ),
    auto_accept: bool | None = typer.Option(
        None, "--auto-accept", "-y", help=GlobalConfig.descriptions["auto_accept"]
    ),
) -> None:
    """
    Global setup callback. Initialize global context/config used by commands
    """
    with handle_aicommit_exception(exit_on_fail=True):
        # conditions to not create global context
        if ctx.invoked_subcommand is None:
            print(ctx.get_help())
            raise typer.Exit()

        # skip --help in subcommands
        if any(arg in ctx.help_option_names for arg in sys.argv):
            return

        config, used_config_sources, used_default = load_global_config(
            custom_config,
            model=model,
            api_key=api_key,
            temperature=temperature,
            timeout=timeout,
            language=language,
            verbose=verbose,
            silent=silent,
            auto_accept=auto_accept,
        )

        setup_logger(ctx.invoked_subcommand, debug=config.verbose, silent=config.silent)
        set_theme(config.theme)

        logger.debug(f"Used {used_config_sources} to build global context.")
        if used_default:
            logger.debug("Some settings fell back to their defaults")

        global_context = GlobalContext.from_global_config(config, Path(repo_path))
        # fail immediately if we arent in a valid git repo as we expect one
        validate_git_repository(global_context.git_commands, repo_path)

        setup_signal_handlers()

        ctx.obj = global_context


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=PROG_NAME)


if __name__ == "__main__":
    run_app()
