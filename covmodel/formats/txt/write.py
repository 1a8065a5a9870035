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

from typing import Iterable, Iterator, TextIO

from ...data_model.coverage import Coverage
from ...data_model.metric import Metric, value_of
from ...data_model.node import FileNode, Node
from ...options import Options
from ...utils import open_text_for_writing

# Widths of the various columns
COL_NODE_WIDTH = 46
COL_TOTAL_COUNT_WIDTH = 8
COL_COVERED_COUNT_WIDTH = 8
COL_PERCENTAGE_WIDTH = 9  # including "%" percentage sign
UN_COVERED_SEPARATOR = "   "
LINE_WIDTH = 88
INDENT = "  "

TITLES = {
    "line": ("Lines", "Exec"),
    "branch": ("Branches", "Taken"),
    "instruction": ("Instr.", "Exec"),
    "mutation": ("Mutants", "Killed"),
}


def write_report(tree: Node, output_file: str, options: Options) -> None:
    """Produce the text report with one row per node of the tree."""
    metric = _get_metric(options)
    locale = options.locale or "en"

    with open_text_for_writing(output_file, "coverage.txt") as fh:
        # Header
        fh.write("-" * LINE_WIDTH + "\n")
        fh.write("Coverage Tree Report".center(LINE_WIDTH).rstrip() + "\n")
        fh.write(f"{tree.metric}: {tree.name}\n")
        fh.write("-" * LINE_WIDTH + "\n")

        title_total, title_covered = TITLES[options.txt_metric]
        fh.write(
            "Node".ljust(COL_NODE_WIDTH)
            + title_total.rjust(COL_TOTAL_COUNT_WIDTH)
            + title_covered.rjust(COL_COVERED_COUNT_WIDTH)
            + "Cover".rjust(COL_PERCENTAGE_WIDTH)
            + UN_COVERED_SEPARATOR
            + "Missing"
            + "\n"
        )
        fh.write("-" * LINE_WIDTH + "\n")

        # Data
        for depth, node in _walk(tree):
            if node is tree:
                continue
            fh.write(
                _format_line(
                    INDENT * (depth - 1) + str(node),
                    node.get_coverage(metric),
                    _uncovered_lines_str(node, options.txt_metric),
                    locale,
                )
                + "\n"
            )

        # Footer
        fh.write("-" * LINE_WIDTH + "\n")
        fh.write(_format_line("TOTAL", tree.get_coverage(metric), "", locale) + "\n")
        fh.write("-" * LINE_WIDTH + "\n")


def write_summary_report(tree: Node, output_file: str, options: Options) -> None:
    """Print a small report to the standard output.
    Output the percentage, covered and total items of every metric.
    """
    locale = options.locale or "en"

    with open_text_for_writing(output_file, "coverage.txt") as fh:
        _write_summary(fh, tree, locale)


def _write_summary(fh: TextIO, tree: Node, locale: str) -> None:
    for metric, coverage in tree.get_coverage_metrics_distribution().items():
        percentage = coverage.format_covered_percentage(locale)
        fh.write(
            f"{metric}: {percentage} ({coverage.covered} out of {coverage.total})\n"
        )

    distribution = tree.get_metrics_distribution()
    for metric, value in distribution.items():
        if metric.is_scalar:
            fh.write(f"{metric}: {value}\n")

    mutations = tree.get_mutation_result()
    if mutations.total:
        fh.write(
            f"Mutations: {mutations.killed} killed, {mutations.survived} survived\n"
        )


def _get_metric(options: Options) -> Metric:
    metric = value_of(str(options.txt_metric).upper())
    if metric is None:  # pragma: no cover
        raise AssertionError(
            f"Sanity check failed, unknown metric {options.txt_metric!r}."
        )
    return metric


def _walk(node: Node, depth: int = 0) -> Iterator[tuple[int, Node]]:
    yield depth, node
    for child in node.children:
        yield from _walk(child, depth + 1)


def _format_line(
    name: str, coverage: Coverage, uncovered_lines: str, locale: str
) -> str:
    name = name.ljust(COL_NODE_WIDTH)
    if len(name) > COL_NODE_WIDTH:
        name = name + "\n" + " " * COL_NODE_WIDTH

    line = (
        name
        + str(coverage.total).rjust(COL_TOTAL_COUNT_WIDTH)
        + str(coverage.covered).rjust(COL_COVERED_COUNT_WIDTH)
        + coverage.format_covered_percentage(locale).rjust(COL_PERCENTAGE_WIDTH)
    )

    if uncovered_lines:
        line += UN_COVERED_SEPARATOR + uncovered_lines

    return line


def _uncovered_lines_str(node: Node, txt_metric: str) -> str:
    if not isinstance(node, FileNode):
        return ""

    if txt_metric == "branch":
        # Don't do any aggregation on branch results.
        return ",".join(
            str(lineno)
            for lineno in node.lines
            if node.get_line_branches(lineno).missed > 0
        )

    return ",".join(
        _format_range(first, last)
        for first, last in _find_consecutive_ranges(node.missed_lines)
    )


def _find_consecutive_ranges(items: Iterable[int]) -> Iterator[tuple[int, int]]:
    """Group sorted line numbers into ranges.

    >>> list(_find_consecutive_ranges([1, 2, 3, 7, 9, 10]))
    [(1, 3), (7, 7), (9, 10)]
    """
    first = last = None
    for item in items:
        if first is None or last is None:
            first = last = item
        elif item == last + 1:
            last = item
        else:
            yield first, last
            first = last = item

    if first is not None and last is not None:
        yield first, last


def _format_range(first: int, last: int) -> str:
    if first == last:
        return str(first)
    return f"{first}-{last}"
