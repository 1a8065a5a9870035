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

import os

import pytest

from covmodel.data_model.coverage import Coverage
from covmodel.data_model.metric import (
    BRANCH,
    CLASS,
    COMPLEXITY,
    FILE,
    INSTRUCTION,
    LINE,
    METHOD,
    MODULE,
    PACKAGE,
)
from covmodel.data_model.node import FileNode, Node
from covmodel.formats.jacoco import JaCoCoHandler
from covmodel.options import Options


def read(filename: str) -> Node:
    return JaCoCoHandler(Options()).read_report(filename)


def test_structure(jacoco_report) -> None:
    tree = read(jacoco_report)
    assert tree.name == "Java coding style: jacoco-fixture.xml"
    assert [p.name for p in tree.get_all(PACKAGE)] == ["edu.hm.hafner.util"]
    assert [f.name for f in tree.get_all(FILE)] == ["Ensure.java", "PathUtil.java"]
    assert [c.name for c in tree.get_all(CLASS)] == [
        "edu.hm.hafner.util.Ensure",
        "edu.hm.hafner.util.PathUtil",
    ]
    assert [m.name for m in tree.get_all(METHOD)] == [
        "that(Z)V",
        "isTrue(ZLjava/lang/String;)V",
        "isFalse(ZLjava/lang/String;)V",
        "makeUnixPath(Ljava/lang/String;)Ljava/lang/String;",
        "getAbsolutePath(Ljava/lang/String;)Ljava/lang/String;",
    ]
    assert [m.line_number for m in tree.get_all(METHOD)] == [12, 20, 30, 10, 20]
    assert tree.get_metrics() == [
        MODULE,
        PACKAGE,
        FILE,
        CLASS,
        METHOD,
        LINE,
        INSTRUCTION,
        BRANCH,
        COMPLEXITY,
    ]


def test_coverage(jacoco_report) -> None:
    tree = read(jacoco_report)
    assert tree.get_metrics_distribution() == {
        MODULE: Coverage(1, 0),
        PACKAGE: Coverage(1, 0),
        FILE: Coverage(2, 0),
        CLASS: Coverage(2, 0),
        METHOD: Coverage(4, 1),
        LINE: Coverage(8, 6),
        INSTRUCTION: Coverage(25, 16),
        BRANCH: Coverage(4, 4),
        COMPLEXITY: 9,
    }
    assert tree.print_coverage_for(INSTRUCTION) == "60.98%"
    assert tree.print_coverage_for(BRANCH, "de") == "50,00%"


def test_methods(jacoco_report) -> None:
    tree = read(jacoco_report)
    is_true = tree.find(METHOD, "isTrue(ZLjava/lang/String;)V")
    assert is_true.get_leaf(INSTRUCTION).value == Coverage(10, 2)
    assert is_true.get_leaf(LINE).value == Coverage(3, 1)
    assert is_true.get_leaf(BRANCH).value == Coverage(3, 1)
    assert is_true.get_leaf(COMPLEXITY).value == 3

    that = tree.find(METHOD, "that(Z)V")
    assert that.get_leaf(BRANCH) is None
    assert that.get_complexity() == 1


def test_file_lines(jacoco_report) -> None:
    tree = read(jacoco_report)
    ensure = tree.find(FILE, "edu/hm/hafner/util/Ensure.java")
    assert isinstance(ensure, FileNode)
    assert ensure.sources == ["edu/hm/hafner/util/Ensure.java"]
    assert ensure.lines == [12, 13, 20, 21, 22, 23, 30, 31, 32]
    assert ensure.covered_instructions_count == 15
    assert ensure.missed_instructions_count == 10
    assert ensure.covered_branches_count == 3
    assert ensure.missed_branches_count == 3
    assert ensure.missed_lines == [23, 30, 31, 32]
    assert ensure.partially_covered_lines == [20]
    assert ensure.get_line_branches(21) == Coverage.NO_COVERAGE

    path_util = tree.find(FILE, "PathUtil.java")
    assert path_util.missed_lines == [22, 23]
    assert path_util.get_line_instructions(20) == Coverage(3, 0)


def test_source_file_without_classes(jacoco_report) -> None:
    tree = read(jacoco_report)
    assert tree.find(FILE, "package-info.java") is None


def test_split_packages_keeps_other_metrics(jacoco_report) -> None:
    tree = read(jacoco_report)
    before = tree.get_coverage_metrics_distribution()
    complexity = tree.get_complexity()
    assert before[PACKAGE] == Coverage(1, 0)

    tree.split_packages()

    after = tree.get_coverage_metrics_distribution()
    assert after[PACKAGE] == Coverage(4, 0)
    assert after.keys() == before.keys()
    for metric in (FILE, CLASS, METHOD, LINE, BRANCH, INSTRUCTION):
        assert after[metric] == before[metric]
    assert tree.get_complexity() == complexity


def test_split_packages(jacoco_report) -> None:
    tree = read(jacoco_report)
    tree.split_packages()
    assert tree.get_coverage(PACKAGE) == Coverage(4, 0)
    util = tree.find(PACKAGE, "util")
    assert util.parent_name == "edu.hm.hafner"
    assert tree.find(FILE, "edu/hm/hafner/util/PathUtil.java") is not None


def test_combine_with_itself(jacoco_report) -> None:
    tree = read(jacoco_report)
    assert tree.combine_with(read(jacoco_report)) == tree


@pytest.mark.parametrize(
    "content,message",
    [
        ("<report", "Bad JaCoCo report"),
        ("<coverage/>", "expected root element <report>"),
        (
            '<report name="r"><package name="p"><class name="p/A" sourcefilename="A.java">'
            '<method name="m" desc="()V" line="1"><counter type="LINE" covered="one" missed="0"/>'
            "</method></class></package></report>",
            "'covered' attribute is required",
        ),
        (
            '<report name="r"><package name="p"><class name="p/A" sourcefilename="A.java"/>'
            '<sourcefile name="A.java"><line mi="0" ci="1" mb="0" cb="0"/></sourcefile>'
            "</package></report>",
            "'nr' attribute is required",
        ),
    ],
)
def test_invalid_report(tmp_path, content, message) -> None:
    filename = os.path.join(str(tmp_path), "jacoco.xml")
    with open(filename, "w", encoding="utf-8") as fh:
        fh.write(content)
    with pytest.raises(RuntimeError, match=message):
        read(filename)
