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

from fractions import Fraction
import gc

import pytest

from covmodel.data_model.coverage import Coverage, MutationResult
from covmodel.data_model.leaf import ComplexityLeaf, Mutation, MutationStatus, Mutator
from covmodel.data_model.metric import (
    BRANCH,
    CLASS,
    COMPLEXITY,
    CONTAINER,
    FILE,
    INSTRUCTION,
    LINE,
    METHOD,
    MODULE,
    MUTATION,
    PACKAGE,
)
from covmodel.data_model.node import (
    ContainerNode,
    FileNode,
    MethodNode,
    ModuleNode,
    Node,
    PackageNode,
    create_node,
    new_root,
)
from covmodel.exceptions import (
    InvalidHierarchyError,
    LeafMetricMismatchError,
    UnsupportedQueryError,
)


def create_tree() -> Node:
    r"""Two packages, three files and five methods.

    edu.hm.hafner.util/Ensure.java: that (2/0), isTrue (3/1)
    edu.hm.hafner.util/PathUtil.java: getPath (0/4)
    edu.hm.hafner.coverage/Node.java: getName (1/0), split (4/2)
    """
    root = new_root("coverage.xml")
    util = root.create_child(PACKAGE, "edu.hm.hafner.util")
    ensure = util.create_child(FILE, "Ensure.java").create_child(CLASS, "Ensure")
    _method(ensure, "that", 10, Coverage(2, 0), Coverage(1, 1), 1)
    _method(ensure, "isTrue", 20, Coverage(3, 1), Coverage(2, 0), 2)
    path_util = util.create_child(FILE, "PathUtil.java").create_child(
        CLASS, "PathUtil"
    )
    _method(path_util, "getPath", 10, Coverage(0, 4), None, 1)
    coverage = root.create_child(PACKAGE, "edu.hm.hafner.coverage")
    node = coverage.create_child(FILE, "Node.java").create_child(CLASS, "Node")
    _method(node, "getName", 30, Coverage(1, 0), None, 1)
    _method(node, "split", 40, Coverage(4, 2), Coverage(3, 3), 4)
    return root


def _method(parent, name, line, lines, branches, complexity) -> Node:
    method = parent.create_child(METHOD, name, line_number=line)
    method.attach_leaf(LINE, lines)
    if branches is not None:
        method.attach_leaf(BRANCH, branches)
    method.attach_leaf(COMPLEXITY, complexity)
    return method


def names(nodes) -> list:
    return [node.name for node in nodes]


# --------------------------------------------------------------------------
# Hierarchy
# --------------------------------------------------------------------------


def test_node_types() -> None:
    assert isinstance(new_root("x"), ModuleNode)
    assert isinstance(new_root("x", CONTAINER), ContainerNode)
    assert isinstance(create_node(PACKAGE, "p"), PackageNode)
    assert isinstance(create_node(FILE, "f"), FileNode)
    method = create_node(METHOD, "m", line_number=5)
    assert isinstance(method, MethodNode)
    assert method.line_number == 5
    assert str(method) == "[Method] m (5)"
    assert str(create_node(PACKAGE, "p")) == "[Package] p"


@pytest.mark.parametrize(
    "parent,child",
    [
        (MODULE, MODULE),
        (MODULE, CONTAINER),
        (FILE, PACKAGE),
        (METHOD, CLASS),
        (CLASS, FILE),
        (METHOD, METHOD),
    ],
)
def test_invalid_hierarchy(parent, child) -> None:
    node = create_node(parent, "parent")
    with pytest.raises(InvalidHierarchyError):
        node.create_child(child, "child")


@pytest.mark.parametrize(
    "parent,child",
    [
        (CONTAINER, MODULE),
        (MODULE, PACKAGE),
        (MODULE, FILE),
        (PACKAGE, PACKAGE),
        (PACKAGE, CLASS),
        (FILE, METHOD),
    ],
)
def test_valid_hierarchy(parent, child) -> None:
    node = create_node(parent, "parent")
    created = node.create_child(child, "child")
    assert created.parent is node
    assert created.metric is child
    assert node.children == [created]


@pytest.mark.parametrize("metric", [LINE, BRANCH, COMPLEXITY, MUTATION])
def test_value_metric_nodes(metric) -> None:
    with pytest.raises(InvalidHierarchyError):
        create_node(metric, "value")
    with pytest.raises(InvalidHierarchyError):
        new_root("root").create_child(metric, "value")


def test_structural_leaf() -> None:
    with pytest.raises(InvalidHierarchyError):
        new_root("root").attach_leaf(FILE, Coverage(1, 0))


def test_parent() -> None:
    root = new_root("root")
    package = root.create_child(PACKAGE, "edu")
    assert root.is_root
    assert not root.has_parent
    assert root.parent is None
    with pytest.raises(LookupError):
        root.get_parent()
    assert package.has_parent
    assert not package.is_root
    assert package.get_parent() is root
    assert root.parent_name == "^"
    assert package.parent_name == "root"


def test_parent_is_not_kept_alive() -> None:
    package = new_root("root").create_child(PACKAGE, "edu")
    gc.collect()
    assert package.parent is None


def test_add_child() -> None:
    root = new_root("root")
    package = create_node(PACKAGE, "edu")
    assert root.add_child(package) is package
    assert package.parent is root
    with pytest.raises(InvalidHierarchyError):
        new_root("other").add_child(package)


def test_children_are_a_copy() -> None:
    root = new_root("root")
    root.create_child(PACKAGE, "edu")
    root.children.clear()
    assert len(root.children) == 1


def test_find_or_create_child() -> None:
    root = new_root("root")
    package = root.find_or_create_child(PACKAGE, "edu")
    assert root.find_or_create_child(PACKAGE, "edu") is package
    assert root.find_or_create_child(PACKAGE, "com") is not package
    assert names(root.children) == ["edu", "com"]


def test_attach_leaf_sums_up() -> None:
    root = new_root("root")
    root.attach_leaf(LINE, Coverage(3, 1))
    root.attach_leaf(LINE, Coverage(1, 0))
    root.attach_leaf(COMPLEXITY, 2)
    root.add_leaf(ComplexityLeaf(3))
    assert root.get_leaf(LINE).value == Coverage(4, 1)
    assert root.get_leaf("COMPLEXITY").value == 5
    assert root.get_leaf(BRANCH) is None
    assert len(root.leaves) == 2
    with pytest.raises(LeafMetricMismatchError):
        root.attach_leaf(LINE, 5)


def test_sources() -> None:
    root = new_root("root")
    root.add_source("src/main/java")
    root.add_source("src/main/java")
    root.add_source("src/test/java")
    assert root.sources == ["src/main/java", "src/test/java"]


# --------------------------------------------------------------------------
# Aggregation
# --------------------------------------------------------------------------


def test_get_all() -> None:
    root = create_tree()
    assert names(root.get_all(MODULE)) == ["coverage.xml"]
    assert names(root.get_all(PACKAGE)) == [
        "edu.hm.hafner.util",
        "edu.hm.hafner.coverage",
    ]
    assert names(root.get_all(FILE)) == ["Ensure.java", "PathUtil.java", "Node.java"]
    assert names(root.get_all(CLASS)) == ["Ensure", "PathUtil", "Node"]
    assert names(root.get_all(METHOD)) == [
        "that",
        "isTrue",
        "getPath",
        "getName",
        "split",
    ]
    assert root.get_all(CONTAINER) == []
    assert names(root.get_all("Method")) == names(root.get_all(METHOD))


def test_get_all_children_before_parents() -> None:
    root = new_root("root")
    outer = root.create_child(PACKAGE, "outer")
    inner = outer.create_child(PACKAGE, "inner")
    assert root.get_all(PACKAGE) == [inner, outer]


@pytest.mark.parametrize("metric", [LINE, BRANCH, COMPLEXITY, None, "LOC"])
def test_get_all_value_metrics(metric) -> None:
    with pytest.raises(UnsupportedQueryError):
        create_tree().get_all(metric)


def test_get_coverage() -> None:
    root = create_tree()
    assert root.get_coverage(LINE) == Coverage(10, 7)
    assert root.get_coverage(BRANCH) == Coverage(6, 4)
    assert root.get_coverage(COMPLEXITY) == Coverage(9, 0)
    assert root.get_coverage(INSTRUCTION) == Coverage.NO_COVERAGE
    assert root.get_coverage("Line") == Coverage(10, 7)

    assert root.get_coverage(MODULE) == Coverage(1, 0)
    assert root.get_coverage(PACKAGE) == Coverage(2, 0)
    assert root.get_coverage(FILE) == Coverage(2, 1)
    assert root.get_coverage(CLASS) == Coverage(2, 1)
    assert root.get_coverage(METHOD) == Coverage(4, 1)


def test_get_coverage_unknown_metric() -> None:
    root = create_tree()
    assert root.get_coverage(None) == Coverage.NO_COVERAGE
    assert root.get_coverage("LOC") == Coverage.NO_COVERAGE
    assert root.get_coverage(CONTAINER) == Coverage.NO_COVERAGE


def test_get_coverage_of_subtree() -> None:
    root = create_tree()
    util = root.find(PACKAGE, "edu.hm.hafner.util")
    assert util.get_coverage(LINE) == Coverage(5, 5)
    assert util.get_coverage(FILE) == Coverage(1, 1)
    assert util.get_complexity() == 4
    assert util.print_coverage_for(LINE) == "50.00%"


def test_structural_coverage_falls_back_to_instructions_and_mutations() -> None:
    root = new_root("root")
    jacoco = root.create_child(PACKAGE, "jacoco")
    jacoco.attach_leaf(INSTRUCTION, Coverage(3, 0))
    pit = root.create_child(PACKAGE, "pit")
    pit.add_mutation(Mutation(True, MutationStatus.KILLED, Mutator.MATH, 1))
    nothing = root.create_child(PACKAGE, "nothing")
    nothing.attach_leaf(BRANCH, Coverage(2, 0))
    assert root.get_coverage(PACKAGE) == Coverage(2, 1)

    # lines take precedence over killed mutations
    lines = root.create_child(PACKAGE, "lines")
    lines.attach_leaf(LINE, Coverage(0, 2))
    lines.add_mutation(Mutation(True, MutationStatus.KILLED, Mutator.MATH, 1))
    assert root.get_coverage(PACKAGE) == Coverage(2, 2)


def test_aggregation_does_not_depend_on_the_order() -> None:
    first = new_root("root")
    second = new_root("root")
    values = [Coverage(1, 2), Coverage(0, 5), Coverage(7, 1), Coverage(3, 3)]
    for index, value in enumerate(values):
        first.create_child(PACKAGE, str(index)).attach_leaf(LINE, value)
    for index, value in reversed(list(enumerate(values))):
        second.create_child(PACKAGE, str(index)).attach_leaf(LINE, value)
    assert first.get_coverage(LINE) == second.get_coverage(LINE) == Coverage(11, 11)


def test_get_metrics() -> None:
    assert create_tree().get_metrics() == [
        MODULE,
        PACKAGE,
        FILE,
        CLASS,
        METHOD,
        LINE,
        BRANCH,
        COMPLEXITY,
    ]


def test_get_metrics_distribution() -> None:
    distribution = create_tree().get_metrics_distribution()
    assert distribution == {
        MODULE: Coverage(1, 0),
        PACKAGE: Coverage(2, 0),
        FILE: Coverage(2, 1),
        CLASS: Coverage(2, 1),
        METHOD: Coverage(4, 1),
        LINE: Coverage(10, 7),
        BRANCH: Coverage(6, 4),
        COMPLEXITY: 9,
    }
    assert list(distribution) == create_tree().get_metrics()


def test_get_coverage_metrics_distribution() -> None:
    root = create_tree()
    distribution = root.get_coverage_metrics_distribution()
    assert COMPLEXITY not in distribution
    assert distribution[LINE] == Coverage(10, 7)
    percentages = root.get_coverage_metrics_percentages()
    assert percentages[LINE] == Fraction(10, 17)
    assert percentages[BRANCH] == Fraction(3, 5)
    assert percentages[METHOD] == Fraction(4, 5)


def test_print_coverage_for() -> None:
    root = create_tree()
    assert root.print_coverage_for(BRANCH) == "60.00%"
    assert root.print_coverage_for(BRANCH, "de_DE") == "60,00%"
    assert root.print_coverage_for(INSTRUCTION) == "-"
    assert root.print_coverage_for(None) == "-"
    with pytest.raises(UnsupportedQueryError):
        root.print_coverage_for(COMPLEXITY)


def test_mutations() -> None:
    root = new_root("mutations.xml")
    method = (
        root.create_child(PACKAGE, "edu.hm.hafner")
        .create_child(FILE, "Ensure.java")
        .create_child(CLASS, "Ensure")
        .create_child(METHOD, "that", line_number=3)
    )
    killed = Mutation(True, MutationStatus.KILLED, Mutator.MATH, 3)
    survived = Mutation(False, MutationStatus.SURVIVED, Mutator.INCREMENTS, 4)
    uncovered = Mutation(False, MutationStatus.NO_COVERAGE, Mutator.INCREMENTS, 5)
    for mutation in (killed, survived, uncovered):
        method.add_mutation(mutation)

    assert method.mutations == [killed, survived, uncovered]
    assert root.get_all_mutations() == [killed, survived, uncovered]
    assert root.get_mutation_result() == MutationResult(killed=1, survived=2)
    assert root.get_coverage(MUTATION) == Coverage(1, 2)
    assert root.get_coverage(METHOD) == Coverage(1, 0)
    assert root.print_coverage_for("MUTATION") == "33.33%"


def test_compute_delta() -> None:
    root = create_tree()
    reference = new_root("coverage.xml")
    reference.create_child(PACKAGE, "p").attach_leaf(LINE, Coverage(1, 1))
    reference.attach_leaf(INSTRUCTION, Coverage(1, 3))

    delta = root.compute_delta(reference)
    assert delta[LINE] == Fraction(10, 17) - Fraction(1, 2)
    assert delta[BRANCH] == Fraction(3, 5)
    assert delta[INSTRUCTION] == Fraction(-1, 4)
    assert delta[MODULE] == 0
    assert COMPLEXITY not in delta
    assert root.compute_delta(root)[LINE] == 0


# --------------------------------------------------------------------------
# Find and path
# --------------------------------------------------------------------------


def test_find() -> None:
    root = create_tree()
    assert root.find(MODULE, "coverage.xml") is root
    file = root.find(FILE, "Ensure.java")
    assert file is not None
    assert file.name == "Ensure.java"
    assert root.find(FILE, "edu/hm/hafner/util/Ensure.java") is file
    assert root.find("File", "Ensure.java") is file
    assert root.find(CLASS, "Ensure.java") is None
    assert root.find(FILE, "Missing.java") is None
    assert root.find(None, "Ensure.java") is None
    assert root.find("LOC", "Ensure.java") is None


def test_matches() -> None:
    root = create_tree()
    file = root.find(FILE, "Node.java")
    assert file.matches(FILE, "Node.java")
    assert file.matches(FILE, "edu/hm/hafner/coverage/Node.java")
    assert not file.matches(CLASS, "Node.java")
    assert not file.matches(FILE, "edu/hm/hafner/Node.java")


def test_path() -> None:
    root = create_tree()
    assert root.path == ""
    assert root.find(PACKAGE, "edu.hm.hafner.util").path == "edu/hm/hafner/util"
    assert (
        root.find(FILE, "PathUtil.java").path == "edu/hm/hafner/util/PathUtil.java"
    )
    assert root.find(METHOD, "split").path == "edu/hm/hafner/coverage/Node.java"


def test_path_of_default_package() -> None:
    root = new_root("root")
    file = root.create_child(PACKAGE, "-").create_child(FILE, "Main.java")
    assert file.path == "Main.java"


def test_parent_name() -> None:
    root = create_tree()
    method = root.find(METHOD, "isTrue")
    assert method.parent_name == "Ensure"
    assert root.find(FILE, "Ensure.java").parent_name == "edu.hm.hafner.util"
    assert root.find(PACKAGE, "edu.hm.hafner.util").parent_name == "coverage.xml"


# --------------------------------------------------------------------------
# Package split
# --------------------------------------------------------------------------


def test_split_packages() -> None:
    root = create_tree()
    ensure = root.find(FILE, "Ensure.java")
    before = root.get_coverage(LINE)

    root.split_packages()

    assert names(root.children) == ["edu"]
    edu = root.children[0]
    assert names(edu.children) == ["hm"]
    hafner = edu.children[0].children[0]
    assert hafner.name == "hafner"
    assert names(hafner.children) == ["util", "coverage"]
    assert names(root.get_all(PACKAGE)) == [
        "util",
        "coverage",
        "hafner",
        "hm",
        "edu",
    ]
    assert root.find(FILE, "edu/hm/hafner/util/Ensure.java") is ensure
    assert ensure.parent_name == "edu.hm.hafner.util"
    assert ensure.parent.parent is hafner
    assert root.get_coverage(LINE) == before
    assert root.get_coverage(PACKAGE) == Coverage(5, 0)


def test_split_packages_keeps_other_metrics() -> None:
    root = create_tree()
    before = root.get_metrics_distribution()
    assert before[PACKAGE] == Coverage(2, 0)

    root.split_packages()

    after = root.get_metrics_distribution()
    assert after[PACKAGE] == Coverage(5, 0)
    del before[PACKAGE], after[PACKAGE]
    assert after == before


def test_split_packages_is_idempotent() -> None:
    root = create_tree()
    root.split_packages()
    once = root.copy_tree()
    root.split_packages()
    assert root == once


def test_split_merges_with_existing_package() -> None:
    root = new_root("root")
    root.create_child(PACKAGE, "edu").create_child(FILE, "A.java")
    root.create_child(PACKAGE, "edu.hm").create_child(FILE, "B.java")
    root.create_child(PACKAGE, "edu").create_child(FILE, "C.java")

    root.split_packages()

    assert names(root.children) == ["edu"]
    edu = root.children[0]
    assert names(edu.children) == ["A.java", "hm", "C.java"]
    assert names(edu.children[1].children) == ["B.java"]


def test_split_keeps_other_children() -> None:
    root = new_root("root")
    root.create_child(FILE, "Main.java")
    root.create_child(PACKAGE, "a.b")
    root.split_packages()
    assert names(root.children) == ["Main.java", "a"]


def test_split_moves_leaves_and_sources() -> None:
    root = new_root("root")
    package = root.create_child(PACKAGE, "edu.hm")
    package.attach_leaf(LINE, Coverage(2, 1))
    package.add_source("edu/hm")
    root.split_packages()
    hm = root.find(PACKAGE, "hm")
    assert hm.get_leaf(LINE).value == Coverage(2, 1)
    assert hm.sources == ["edu/hm"]
    assert root.find(PACKAGE, "edu").leaves == []


@pytest.mark.parametrize(
    "name,expected",
    [
        ("edu", ["edu"]),
        ("edu.", ["edu"]),
        ("edu..hm", ["hm", "", "edu"]),
        (".edu", ["edu", ""]),
        ("", [""]),
        ("-", ["-"]),
    ],
)
def test_split_segments(name, expected) -> None:
    root = new_root("root")
    root.create_child(PACKAGE, name)
    root.split_packages()
    assert names(root.get_all(PACKAGE)) == expected


def test_split_single_package() -> None:
    root = new_root("root")
    first = root.create_child(PACKAGE, "a.b")
    root.create_child(PACKAGE, "c.d")
    first.split_packages()
    assert names(root.children) == ["a", "c.d"]
    assert names(root.get_all(PACKAGE)) == ["b", "a", "c.d"]


def test_split_single_package_into_later_sibling() -> None:
    root = new_root("root")
    first = root.create_child(PACKAGE, "a.b")
    first.create_child(FILE, "B.java")
    flat = root.create_child(PACKAGE, "a")
    flat.create_child(FILE, "A.java")

    first.split_packages()

    assert names(root.children) == ["a"]
    assert root.children[0] is flat
    assert names(flat.children) == ["A.java", "b"]
    assert root.find(FILE, "a/b/B.java").parent.parent is flat


def test_split_below_package_does_nothing() -> None:
    root = create_tree()
    copy = root.copy_tree()
    root.find(FILE, "Ensure.java").split_packages()
    root.find(METHOD, "that").split_packages()
    assert root == copy

    detached = create_node(PACKAGE, "a.b")
    detached.split_packages()
    assert detached.name == "a.b"


# --------------------------------------------------------------------------
# Copy and merge
# --------------------------------------------------------------------------


def test_copy_tree() -> None:
    root = create_tree()
    copy = root.copy_tree()
    assert copy == root
    assert copy is not root
    assert copy.find(FILE, "Ensure.java") is not root.find(FILE, "Ensure.java")
    assert copy.find(FILE, "Ensure.java").parent is copy.find(
        PACKAGE, "edu.hm.hafner.util"
    )

    copy.find(METHOD, "that").attach_leaf(LINE, Coverage(1, 0))
    assert copy != root
    assert root.get_coverage(LINE) == Coverage(10, 7)


def test_copy_of_subtree_has_no_parent() -> None:
    root = create_tree()
    copy = root.find(PACKAGE, "edu.hm.hafner.util").copy_tree()
    assert copy.is_root
    assert copy.get_coverage(LINE) == Coverage(5, 5)


def test_copy_empty() -> None:
    method = create_node(METHOD, "m", line_number=7)
    method.attach_leaf(LINE, Coverage(1, 0))
    copy = method.copy_empty()
    assert isinstance(copy, MethodNode)
    assert copy.line_number == 7
    assert copy.leaves == []


def test_equality() -> None:
    assert create_tree() == create_tree()
    assert create_tree() != new_root("coverage.xml")
    assert create_node(METHOD, "m", line_number=1) != create_node(
        METHOD, "m", line_number=2
    )
    assert create_tree() != "coverage.xml"
    with pytest.raises(TypeError):
        hash(create_tree())


def test_equality_ignores_the_parent() -> None:
    root = create_tree()
    file = root.find(FILE, "Ensure.java")
    assert file.copy_tree() == file


def test_combine_same_tree() -> None:
    root = create_tree()
    combined = root.combine_with(create_tree())
    assert combined == root
    assert combined is not root


def test_combine_takes_maximum_of_covered_items() -> None:
    first = new_root("report")
    first.create_child(PACKAGE, "p").attach_leaf(LINE, Coverage(2, 3))
    second = new_root("report")
    second.create_child(PACKAGE, "p").attach_leaf(LINE, Coverage(4, 1))
    second.create_child(PACKAGE, "q").attach_leaf(LINE, Coverage(1, 1))

    combined = first.combine_with(second)
    assert names(combined.children) == ["p", "q"]
    assert combined.find(PACKAGE, "p").get_leaf(LINE).value == Coverage(4, 1)
    assert combined.get_coverage(LINE) == Coverage(5, 2)
    # The inputs are unchanged.
    assert first.get_coverage(LINE) == Coverage(2, 3)
    assert len(second.children) == 2


def test_combine_inconsistent_totals() -> None:
    first = new_root("report")
    first.attach_leaf(LINE, Coverage(2, 3))
    second = new_root("report")
    second.attach_leaf(LINE, Coverage(2, 4))
    with pytest.raises(AssertionError, match="number of items must be equal"):
        first.combine_with(second)


def test_combine_different_metrics() -> None:
    with pytest.raises(AssertionError):
        create_node(PACKAGE, "p").combine_with(create_node(FILE, "p"))


def test_combine_different_names() -> None:
    first = new_root("cobertura.xml")
    second = new_root("jacoco.xml")
    combined = first.combine_with(second)
    assert combined.metric is CONTAINER
    assert combined.name == "Combined Report"
    assert names(combined.children) == ["cobertura.xml", "jacoco.xml"]

    third = new_root("jacoco.xml")
    third.attach_leaf(COMPLEXITY, 3)
    again = combined.combine_with(third)
    assert names(again.children) == ["cobertura.xml", "jacoco.xml"]
    assert again.get_complexity() == 3


def test_combine_file_lines() -> None:
    first = create_node(FILE, "Ensure.java")
    first.add_line_coverage(1, Coverage(0, 1))
    first.add_line_coverage(2, Coverage(1, 0), Coverage(1, 1))
    second = create_node(FILE, "Ensure.java")
    second.add_line_coverage(1, Coverage(1, 0))
    second.add_line_coverage(3, Coverage(0, 1))

    combined = first.combine_with(second)
    assert combined.lines == [1, 2, 3]
    assert combined.covered_lines == [1, 2]
    assert combined.missed_lines == [3]
    assert combined.get_line_branches(2) == Coverage(1, 1)


# --------------------------------------------------------------------------
# Files
# --------------------------------------------------------------------------


def test_file_lines() -> None:
    file = create_node(FILE, "Ensure.java")
    file.add_line_coverage(20, Coverage(4, 0), Coverage(3, 1))
    file.add_line_coverage(21, Coverage(3, 0))
    file.add_line_coverage(23, Coverage(0, 2))
    file.add_line_coverage(30, Coverage(0, 4), Coverage(0, 2))
    file.add_line_coverage(21, Coverage(1, 0))

    assert file.lines == [20, 21, 23, 30]
    assert file.covered_lines == [20, 21]
    assert file.missed_lines == [23, 30]
    assert file.partially_covered_lines == [20]
    assert file.get_line_instructions(21) == Coverage(4, 0)
    assert file.get_line_instructions(99) == Coverage.NO_COVERAGE
    assert file.covered_instructions_count == 8
    assert file.missed_instructions_count == 6
    assert file.covered_branches_count == 3
    assert file.missed_branches_count == 3
