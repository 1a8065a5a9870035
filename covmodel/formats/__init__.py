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
from typing import Optional

from lxml import etree  # nosec # We only read the root tag of files given by the user

from ..data_model.node import Node
from ..options import CovmodelConfigOption, Options, OutputOrDefault

# the handler
from .base import BaseHandler
from .cobertura import CoberturaHandler
from .jacoco import JaCoCoHandler
from .pitest import PitestHandler
from .txt import TxtHandler

LOGGER = logging.getLogger("covmodel")

READERS: dict[str, type[BaseHandler]] = {
    "cobertura": CoberturaHandler,
    "jacoco": JaCoCoHandler,
    "pitest": PitestHandler,
}

# Root elements of the supported report formats
ROOT_TAGS = {
    "coverage": "cobertura",
    "report": "jacoco",
    "mutations": "pitest",
}


def get_options() -> list[CovmodelConfigOption]:
    """Get the list of all options from the format handlers."""
    return [
        o
        for o in [
            *CoberturaHandler.get_options(),
            *JaCoCoHandler.get_options(),
            *PitestHandler.get_options(),
            *TxtHandler.get_options(),
        ]
        if isinstance(o, CovmodelConfigOption)
    ]


def validate_options(options: Options) -> None:
    """Validate the command line options of the format handlers."""
    for handler in [*READERS.values(), TxtHandler]:
        handler(options).validate_options()


def detect_format(filename: str) -> str:
    """Get the name of the reader for the file from its root element."""
    try:
        for _, element in etree.iterparse(filename, events=("start",)):  # nosec # We parse the file given by the user
            tag = etree.QName(element).localname
            break
        else:
            tag = None
    except (OSError, etree.XMLSyntaxError) as e:
        raise RuntimeError(f"Can't detect the format of {filename!r}.\n{e}") from None

    if (format_name := ROOT_TAGS.get(tag)) is None:
        raise RuntimeError(
            f"Unknown root element <{tag}> in {filename!r}, "
            f"expected one of {', '.join(f'<{t}>' for t in ROOT_TAGS)}."
        )
    return format_name


def read_reports(options: Options) -> Node:
    """Read all reports and combine them into a single tree."""
    if not options.reports:
        raise RuntimeError("No report given, nothing to do.")

    tree: Optional[Node] = None
    for filename in options.reports:
        format_name = options.input_format
        if format_name == "auto":
            format_name = detect_format(filename)
        LOGGER.info(f"Reading {format_name} report {filename}")
        report = READERS[format_name](options).read_report(filename)
        tree = report if tree is None else tree.combine_with(report)

    if tree is None:  # pragma: no cover
        raise AssertionError("Sanity check failed, no tree was read.")
    if options.split_packages:
        LOGGER.debug("Splitting the packages.")
        tree.split_packages()
    return tree


def write_reports(tree: Node, options: Options) -> None:
    """Write the reports to the given locations."""
    default_output = OutputOrDefault(None) if options.output is None else options.output
    output = OutputOrDefault.choose([options.txt], default=default_output)
    if output is None:  # pragma: no cover
        raise AssertionError("Sanity check failed, no output defined.")

    writer_errors = []
    try:
        TxtHandler(options).write_report(tree, output.abspath)
    except (OSError, RuntimeError) as e:
        writer_errors.append(str(e))

    if options.txt_summary:
        try:
            TxtHandler(options).write_summary_report(tree, "-")
        except RuntimeError as e:
            writer_errors.append(str(e))

    if writer_errors:
        raise RuntimeError(
            "Error(s) while writing the reports:\n" + "\n".join(writer_errors)
        )
