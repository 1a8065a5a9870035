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

from typing import Union

from ...data_model.node import Node
from ...formats.base import BaseHandler
from ...options import CovmodelConfigOption, OutputOrDefault


class TxtHandler(BaseHandler):
    """Class to handle text format."""

    @classmethod
    def get_options(cls) -> list[Union[CovmodelConfigOption, str]]:
        return [
            CovmodelConfigOption(
                "txt_metric",
                ["--txt-metric"],
                config="txt-metric",
                group="output_options",
                help="The metric reported for every node. Default is '{default!s}'.",
                choices=("line", "branch", "instruction", "mutation"),
                default="line",
            ),
            CovmodelConfigOption(
                "txt",
                ["--txt"],
                group="output_options",
                metavar="OUTPUT",
                help="Generate a text report. OUTPUT is optional and defaults to --output.",
                nargs="?",
                type=OutputOrDefault,
                default=None,
                const=OutputOrDefault(None),
            ),
            CovmodelConfigOption(
                "txt_summary",
                ["-s", "--txt-summary", "--print-summary"],
                group="output_options",
                help=(
                    "Print a small report to stdout "
                    "with the coverage of every metric of the tree, "
                    "the complexity and the mutation results. "
                    "This is in addition to other reports."
                ),
                action="store_true",
            ),
        ]

    def write_report(self, tree: Node, output_file: str) -> None:
        from .write import write_report  # pylint: disable=import-outside-toplevel # Lazy loading is intended here

        write_report(tree, output_file, self.options)

    def write_summary_report(self, tree: Node, output_file: str) -> None:
        from .write import write_summary_report  # pylint: disable=import-outside-toplevel # Lazy loading is intended here

        write_summary_report(tree, output_file, self.options)
