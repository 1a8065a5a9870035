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
import re
from typing import Optional

from lxml import etree  # nosec # We only read files given by the user

from ...data_model.coverage import Coverage
from ...data_model.metric import BRANCH, CLASS, COMPLEXITY, FILE, LINE, METHOD, PACKAGE
from ...data_model.node import FileNode, Node, new_root
from ...options import Options
from ...utils import base_name, force_unix_separator, normalize_package_name

LOGGER = logging.getLogger("covmodel")

# The covered and total branches of a line, e.g. "50% (1/2)"
REGEX_CONDITION_COVERAGE = re.compile(r"\((\d+)/(\d+)\)")


def read_report(filename: str, options: Options) -> Node:  # pylint: disable=unused-argument
    """Read a Cobertura XML report into a coverage tree."""
    LOGGER.debug(f"Processing Cobertura file: {filename}")

    try:
        root: etree._Element = etree.parse(filename).getroot()  # nosec # We parse the file given by the user
    except (OSError, etree.XMLSyntaxError) as e:
        raise RuntimeError(f"Bad Cobertura report {filename!r}.\n{e}") from None
    if root.tag != "coverage":
        raise RuntimeError(
            f"Bad Cobertura report {filename!r}, expected root element <coverage> "
            f"but got <{root.tag}>."
        )

    module = new_root(base_name(filename))
    for source in root.iterfind("./sources/source"):
        if source.text and source.text.strip():
            module.add_source(force_unix_separator(source.text.strip()))

    for xml_package in root.iterfind("./packages/package"):
        package = module.find_or_create_child(
            PACKAGE, normalize_package_name(xml_package.get("name", ""))
        )
        for xml_class in xml_package.iterfind("./classes/class"):
            _read_class(filename, package, xml_class)

    return module


def _read_class(filename: str, package: Node, xml_class: etree._Element) -> None:
    if (source_file := xml_class.get("filename")) is None:
        LOGGER.warning(
            f"Missing filename attribute in class element at {filename}:{xml_class.sourceline}"
        )
        return

    file_node = package.find_or_create_child(FILE, base_name(source_file))
    file_node.add_source(force_unix_separator(source_file))
    class_node = file_node.find_or_create_child(CLASS, xml_class.get("name", ""))

    for xml_method in xml_class.iterfind("./methods/method"):
        _read_method(filename, class_node, xml_method)

    if not isinstance(file_node, FileNode):  # pragma: no cover
        raise AssertionError("Sanity check failed, a file must be a FileNode.")
    for xml_line in xml_class.iterfind("./lines/line"):
        number, hits, branch = _read_line(filename, xml_line)
        file_node.add_line_coverage(number, Coverage.of_items(hits > 0), branch)


def _read_method(filename: str, class_node: Node, xml_method: etree._Element) -> None:
    lines = [
        _read_line(filename, xml_line)
        for xml_line in xml_method.iterfind("./lines/line")
    ]
    method = class_node.create_child(
        METHOD,
        xml_method.get("name", "") + xml_method.get("signature", ""),
        line_number=lines[0][0] if lines else 0,
    )

    line_coverage = Coverage.NO_COVERAGE
    branch_coverage = Coverage.NO_COVERAGE
    for _, hits, branch in lines:
        line_coverage += Coverage.of_items(hits > 0)
        if branch is not None:
            branch_coverage += branch
    if line_coverage.is_set:
        method.attach_leaf(LINE, line_coverage)
    if branch_coverage.is_set:
        method.attach_leaf(BRANCH, branch_coverage)

    if (complexity := xml_method.get("complexity")) is not None:
        try:
            method.attach_leaf(COMPLEXITY, int(float(complexity)))
        except ValueError:
            LOGGER.warning(
                f"Ignoring invalid complexity {complexity!r} at {filename}:{xml_method.sourceline}"
            )


def _read_line(
    filename: str, xml_line: etree._Element
) -> tuple[int, int, Optional[Coverage]]:
    try:
        number = int(xml_line.get("number", ""))
        hits = int(xml_line.get("hits", ""))
    except ValueError:
        raise RuntimeError(
            f"Bad Cobertura report {filename!r}.\n"
            "'number' and 'hits' attributes are required and must be integers: "
            f"{etree.tostring(xml_line).decode().strip()}"
        ) from None

    branch = None
    if xml_line.get("branch") == "true":
        condition_coverage = xml_line.get("condition-coverage", "")
        if (match := REGEX_CONDITION_COVERAGE.search(condition_coverage)) is None:
            LOGGER.warning(
                f"Invalid branch information for line {number} at {filename}:{xml_line.sourceline}"
            )
        else:
            covered, total = int(match.group(1)), int(match.group(2))
            branch = Coverage(covered, max(total - covered, 0))

    return number, hits, branch
