# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import importlib.metadata
import sys

import click
from loguru import logger

from equipreport.cmd.cli import (
    StoreHandle,
    handle_add_hardware,
    handle_add_software,
    handle_dump,
    handle_export,
    handle_find,
    handle_list,
    handle_range,
    handle_severities,
)
from equipreport.cmd.config import config
from equipreport.cmd.menu import menu


@click.group()
@click.version_option(
    importlib.metadata.version("equipreport"),
    "--version",
    "-v",
    message="%(version)s",
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
        case_sensitive=False,
    ),
    default="WARNING",
)
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Report storage file (default: storage.data_file setting or the user data directory)",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for generated report files (default: export.output_dir setting or ./reports)",
)
@click.pass_context
def main(ctx, log_level="WARNING", data_file=None, output_dir=None):
    # Can't change the logging level; need to remove and add a new logger with the desired log level
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper())
    ctx.obj = StoreHandle(data_file=data_file, output_dir=output_dir)


main.add_command(menu)
main.add_command(handle_add_hardware)
main.add_command(handle_add_software)
main.add_command(handle_list)
main.add_command(handle_severities)
main.add_command(handle_range)
main.add_command(handle_find)
main.add_command(handle_export)
main.add_command(handle_dump)
main.add_command(config)


if __name__ == "__main__":
    main()
