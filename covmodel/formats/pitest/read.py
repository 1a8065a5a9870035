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

from lxml import etree  # nosec # We only read files given by the user

from ...data_model.leaf import Mutation, MutationStatus, Mutator
from ...data_model.metric import CLASS, FILE, METHOD, PACKAGE
from ...data_model.node import Node, new_root
from ...options import Options
from ...utils import base_name

LOGGER = logging.getLogger("covmodel")


def read_report(filename: str, options: Options) -> Node:  # pylint: disable=unused-argument
    """Read a PIT mutations report into a coverage tree.

    The structure of the tree is derived from the mutated classes, there
    are no nodes for code without mutations.
    """
    LOGGER.debug(f"Processing PIT file: {filename}")

    try:
        root: etree._Element = etree.parse(filename).getroot()  # nosec # We parse the file given by the user
    except (OSError, etree.XMLSyntaxError) as e:
        raise RuntimeError(f"Bad PIT report {filename!r}.\n{e}") from None
    if root.tag != "mutations":
        raise RuntimeError(
            f"Bad PIT report {filename!r}, expected root element <mutations> "
            f"but got <{root.tag}>."
        )

    module = new_root(base_name(filename))
    for xml_mutation in root.iterfind("./mutation"):
        _read_mutation(filename, module, xml_mutation)

    return module


def _get_text(xml_mutation: etree._Element, tag: str) -> str:
    element = xml_mutation.find(tag)
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def _read_mutation(filename: str, module: Node, xml_mutation: etree._Element) -> None:
    class_name = _get_text(xml_mutation, "mutatedClass")
    if not class_name:
        LOGGER.warning(
            f"Skipping mutation without mutatedClass at {filename}:{xml_mutation.sourceline}"
        )
        return

    try:
        line_number = int(_get_text(xml_mutation, "lineNumber") or "0")
        status = MutationStatus.from_report(xml_mutation.get("status", ""))
    except ValueError:
        raise RuntimeError(
            f"Bad PIT report {filename!r}.\n"
            "Invalid status or line number: "
            f"{etree.tostring(xml_mutation).decode().strip()}"
        ) from None

    package_name, _, _ = class_name.rpartition(".")
    source_file = _get_text(xml_mutation, "sourceFile") or f"{class_name}.java"
    method_name = _get_text(xml_mutation, "mutatedMethod") + _get_text(
        xml_mutation, "methodDescription"
    )

    package = module.find_or_create_child(PACKAGE, package_name or "-")
    file_node = package.find_or_create_child(FILE, source_file)
    if package_name:
        file_node.add_source(f"{package_name.replace('.', '/')}/{source_file}")
    else:
        file_node.add_source(source_file)
    method = file_node.find_or_create_child(CLASS, class_name).find_or_create_child(
        METHOD, method_name, line_number=line_number
    )

    method.add_mutation(
        Mutation(
            detected=xml_mutation.get("detected") == "true",
            status=status,
            mutator=Mutator.from_class_name(_get_text(xml_mutation, "mutator")),
            line_number=line_number,
            killing_test=_get_text(xml_mutation, "killingTest") or None,
            description=_get_text(xml_mutation, "description"),
        )
    )
