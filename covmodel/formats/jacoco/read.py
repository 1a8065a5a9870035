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

from lxml import etree  # nosec # We only read files given by the user

from ...data_model.coverage import Coverage
from ...data_model.metric import (
    BRANCH,
    CLASS,
    COMPLEXITY,
    FILE,
    INSTRUCTION,
    LINE,
    METHOD,
    PACKAGE,
)
from ...data_model.node import FileNode, Node, new_root
from ...options import Options
from ...utils import base_name, normalize_package_name

LOGGER = logging.getLogger("covmodel")

# JaCoCo counters stored as coverage leaves
COVERAGE_COUNTERS = {
    "INSTRUCTION": INSTRUCTION,
    "LINE": LINE,
    "BRANCH": BRANCH,
}


def read_report(filename: str, options: Options) -> Node:  # pylint: disable=unused-argument
    """Read a JaCoCo XML report into a coverage tree.

    Only the counters of the methods are stored, the counters of classes,
    packages and of the report are aggregates of them.
    """
    LOGGER.debug(f"Processing JaCoCo file: {filename}")

    try:
        root: etree._Element = etree.parse(filename).getroot()  # nosec # We parse the file given by the user
    except (OSError, etree.XMLSyntaxError) as e:
        raise RuntimeError(f"Bad JaCoCo report {filename!r}.\n{e}") from None
    if root.tag != "report":
        raise RuntimeError(
            f"Bad JaCoCo report {filename!r}, expected root element <report> "
            f"but got <{root.tag}>."
        )

    module = new_root(f"{root.get('name', '-')}: {base_name(filename)}")
    for xml_package in root.iterfind("./package"):
        package_path = xml_package.get("name", "")
        package = module.find_or_create_child(
            PACKAGE, normalize_package_name(package_path)
        )
        for xml_class in xml_package.iterfind("./class"):
            _read_class(filename, package, package_path, xml_class)
        for xml_source_file in xml_package.iterfind("./sourcefile"):
            _read_source_file(filename, package, xml_source_file)

    return module


def _read_class(
    filename: str, package: Node, package_path: str, xml_class: etree._Element
) -> None:
    if (source_file := xml_class.get("sourcefilename")) is None:
        LOGGER.warning(
            f"Missing sourcefilename attribute in class element at {filename}:{xml_class.sourceline}"
        )
        return

    file_node = package.find_or_create_child(FILE, source_file)
    file_node.add_source(
        f"{package_path}/{source_file}" if package_path else source_file
    )
    class_node = file_node.find_or_create_child(
        CLASS, normalize_package_name(xml_class.get("name", ""))
    )

    for xml_method in xml_class.iterfind("./method"):
        method = class_node.create_child(
            METHOD,
            xml_method.get("name", "") + xml_method.get("desc", ""),
            line_number=_get_int(filename, xml_method, "line", default=0),
        )
        for xml_counter in xml_method.iterfind("./counter"):
            _read_counter(filename, method, xml_counter)


def _read_counter(filename: str, method: Node, xml_counter: etree._Element) -> None:
    counter_type = xml_counter.get("type")
    covered = _get_int(filename, xml_counter, "covered")
    missed = _get_int(filename, xml_counter, "missed")

    if (metric := COVERAGE_COUNTERS.get(counter_type)) is not None:
        coverage = Coverage(covered, missed)
        if coverage.is_set:
            method.attach_leaf(metric, coverage)
    elif counter_type == "COMPLEXITY":
        method.attach_leaf(COMPLEXITY, covered + missed)
    else:
        LOGGER.debug(f"Ignoring counter {counter_type} of {method}.")


def _read_source_file(
    filename: str, package: Node, xml_source_file: etree._Element
) -> None:
    name = xml_source_file.get("name", "")
    file_node = package.find(FILE, name)
    if not isinstance(file_node, FileNode):
        LOGGER.debug(f"Skipping source file {name!r} without classes in {filename}.")
        return

    for xml_line in xml_source_file.iterfind("./line"):
        branch = Coverage(
            _get_int(filename, xml_line, "cb"), _get_int(filename, xml_line, "mb")
        )
        file_node.add_line_coverage(
            _get_int(filename, xml_line, "nr"),
            Coverage(
                _get_int(filename, xml_line, "ci"), _get_int(filename, xml_line, "mi")
            ),
            branch if branch.is_set else None,
        )


def _get_int(
    filename: str,
    element: etree._Element,
    attribute: str,
    default: Optional[int] = None,
) -> int:
    value = element.get(attribute)
    if value is None and default is not None:
        return default
    try:
        return int(value or "")
    except ValueError:
        raise RuntimeError(
            f"Bad JaCoCo report {filename!r}.\n"
            f"'{attribute}' attribute is required and must be an integer: "
            f"{etree.tostring(element).decode().strip()}"
        ) from None
