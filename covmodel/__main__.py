# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of covmodel 1.1+main, a coverage tree model for
# code coverage and mutation testing reports.
#
# _____________________________________________________________________________
#
# Copyright (c) 2022-2026 the covmodel authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************

import logging
import os
import sys

from argparse import ArgumentError, ArgumentParser, Namespace
from typing import Any, Optional
import traceback

from .configuration import (
    argument_parser_setup,
    config_entries_from_dict,
    merge_options_and_set_defaults,
    parse_config_into_dict,
)
from .data_model.metric import BRANCH, LINE, MUTATION
from .data_model.node import Node
from .logging import (
    configure_logging,
    update_logging,
)
from .version import __version__

# formats
from . import formats as covmodel_formats

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

LOGGER = logging.getLogger("covmodel")


EXIT_SUCCESS = 0
EXIT_CMDLINE_ERROR = 1
EXIT_LINE_NOK = 2
EXIT_BRANCH_NOK = 4
EXIT_MUTATION_NOK = 8
EXIT_READ_ERROR = 64
EXIT_WRITE_ERROR = 128


def get_exit_code(
    tree: Node,
    threshold_line: float,
    threshold_branch: float,
    threshold_mutation: float,
) -> int:
    """Fail depending on the coverage result."""
    exit_code = EXIT_SUCCESS

    if threshold_line > 0.0:
        # If there are no lines, mark as uncovered
        # (indicates no data at all, likely an error).
        percent_lines = float(tree.get_coverage(LINE).percentage_or(0) * 100)
        if percent_lines < threshold_line:
            LOGGER.error(
                f"failed minimum line coverage (got {percent_lines:.2f}%, minimum {threshold_line}%)"
            )
            exit_code |= EXIT_LINE_NOK

    if threshold_branch > 0.0:
        # Allow data with no branches.
        percent_branches = float(tree.get_coverage(BRANCH).percentage_or(1) * 100)
        if percent_branches < threshold_branch:
            LOGGER.error(
                f"failed minimum branch coverage (got {percent_branches:.2f}%, minimum {threshold_branch}%)"
            )
            exit_code |= EXIT_BRANCH_NOK

    if threshold_mutation > 0.0:
        # Allow data with no mutations.
        percent_mutations = float(tree.get_coverage(MUTATION).percentage_or(1) * 100)
        if percent_mutations < threshold_mutation:
            LOGGER.error(
                f"failed minimum mutation coverage (got {percent_mutations:.2f}%, minimum {threshold_mutation}%)"
            )
            exit_code |= EXIT_MUTATION_NOK

    return exit_code


def create_argument_parser() -> ArgumentParser:
    """Create the argument parser."""

    parser = ArgumentParser(add_help=False, exit_on_error=False)
    parser.usage = "covmodel [options] [reports...]"
    parser.description = (
        "Read code coverage and mutation testing reports into a coverage tree "
        "and summarize it in a text report."
    )

    options = parser.add_argument_group("Options")
    options.add_argument(
        "-h", "--help", help="Show this help message, then exit.", action="help"
    )
    options.add_argument(
        "--version",
        help="Print the version number, then exit.",
        action="store_true",
        dest="version",
        default=False,
    )

    argument_parser_setup(parser, options)

    return parser


COPYRIGHT = "Copyright (c) 2022-2026 the covmodel authors\n"


def find_config_name(root: str, filename: str) -> Optional[str]:
    """Find the configuration to use."""
    if root:
        filename = os.path.join(root, filename)

    if os.path.isfile(filename):
        return filename

    return None


def load_config(partial_options: Namespace) -> dict[str, Any]:
    """Load a config file if configured or found by default names"""
    filename = getattr(partial_options, "config", None)
    if filename is not None:
        with open(filename, "rb") as buf:
            data = tomllib.load(buf)
        return parse_config_into_dict(config_entries_from_dict(data, filename))

    root = getattr(partial_options, "root", "")
    if filename := find_config_name(root, "covmodel.toml"):
        with open(filename, "rb") as buf:
            data = tomllib.load(buf)
        return parse_config_into_dict(config_entries_from_dict(data, filename))

    if filename := find_config_name(root, "pyproject.toml"):
        with open(filename, "rb") as buf:
            data = tomllib.load(buf)
        if (covmodel_section := data.get("tool", {}).get("covmodel")) is not None:
            return parse_config_into_dict(
                config_entries_from_dict(covmodel_section, filename)
            )

    return {}


def main(args: Optional[list[str]] = None) -> int:  # pylint: disable=too-many-return-statements
    """The main entry point of covmodel."""
    configure_logging()
    try:
        parser = create_argument_parser()
        cli_options = parser.parse_args(args=args)
    except SystemExit as e:
        if e.code != 0:
            raise AssertionError("Sanity check failed, exitcode must be 0.") from e
        return EXIT_SUCCESS
    except ArgumentError as e:
        sys.stderr.write(f"covmodel: error: {e}\n")
        return EXIT_CMDLINE_ERROR

    if cli_options.version:
        sys.stdout.write(f"covmodel {__version__}\n\n{COPYRIGHT}")
        return EXIT_SUCCESS

    # load the config
    try:
        cfg_options = load_config(cli_options)
    except (OSError, ValueError) as e:
        LOGGER.error(f"Error while loading the configuration: {e}")
        return EXIT_CMDLINE_ERROR
    options = merge_options_and_set_defaults([cfg_options, cli_options.__dict__])

    # Reconfigure the logging.
    update_logging(options)

    if not options.reports:
        LOGGER.error("no report given, please provide at least one report file.")
        return EXIT_CMDLINE_ERROR

    try:
        covmodel_formats.validate_options(options)
    except RuntimeError as exc:
        LOGGER.error(str(exc))
        return EXIT_CMDLINE_ERROR

    LOGGER.info("Reading coverage data...")
    try:
        tree = covmodel_formats.read_reports(options)
    except Exception:  # pylint: disable=broad-exception-caught
        LOGGER.error(f"Error occurred while reading reports:\n{traceback.format_exc()}")
        return EXIT_READ_ERROR

    LOGGER.info("Writing coverage report...")
    try:
        covmodel_formats.write_reports(tree, options)
    except Exception:  # pylint: disable=broad-exception-caught
        LOGGER.error(
            f"Error occurred while printing reports:\n{traceback.format_exc()}"
        )
        return EXIT_WRITE_ERROR

    return get_exit_code(
        tree,
        options.fail_under_line,
        options.fail_under_branch,
        options.fail_under_mutation,
    )


if __name__ == "__main__":
    sys.exit(main())
