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

"""
The coverage tree.

Nodes are created top-down by the report readers: a module contains
packages, a package contains files, a file contains classes and a class
contains methods. Measured values are attached as leaves
(see :mod:`covmodel.data_model.leaf`) and aggregated on demand, nothing
is cached in the inner nodes.

>>> root = new_root("report.xml")
>>> method = (
...     root.create_child(PACKAGE, "edu.hm.hafner.util")
...     .create_child(FILE, "Ensure.java")
...     .create_child(CLASS, "Ensure")
...     .create_child(METHOD, "that", line_number=12)
... )
>>> method.attach_leaf(LINE, Coverage(3, 1))
>>> method.attach_leaf(LINE, Coverage(1, 0))
>>> root.get_coverage(LINE)
Coverage(covered=4, missed=1)
>>> root.print_coverage_for(LINE, "de")
'80,00%'
>>> root.split_packages()
>>> [str(node) for node in root.get_all(PACKAGE)]
['[Package] util', '[Package] hafner', '[Package] hm', '[Package] edu']
>>> root.find(FILE, "edu/hm/hafner/util/Ensure.java").parent_name
'edu.hm.hafner.util'
"""

from __future__ import annotations
from fractions import Fraction
import logging
from typing import Any, Callable, Iterator, Optional, Union
import weakref

from ..exceptions import (
    CoverageMergeError,
    InvalidHierarchyError,
    UnsupportedQueryError,
)
from .coverage import DEFAULT_LOCALE, Coverage, MutationResult
from .leaf import Leaf, Mutation, create_leaf
from .metric import (
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
    Metric,
    value_of,
)

LOGGER = logging.getLogger("covmodel")

ROOT = "^"
DEFAULT_PACKAGE = "-"
COMBINED_REPORT = "Combined Report"

# Metrics used to decide if a structural node counts as covered. Mutations
# are the last resort for trees read from mutation reports only, which have
# neither lines nor instructions.
PRIMARY_METRICS = (LINE, INSTRUCTION, MUTATION)

MetricOrName = Union[Metric, str, None]


def _resolve_metric(metric: MetricOrName) -> Optional[Metric]:
    if metric is None or isinstance(metric, Metric):
        return metric
    return value_of(metric)


class Node:
    """A structural node of the coverage tree."""

    __slots__ = (
        "_metric",
        "_name",
        "_parent",
        "_children",
        "_leaves",
        "_sources",
        "_mutations",
        "__weakref__",
    )

    def __init__(self, metric: Metric, name: str) -> None:
        if not metric.is_structural:
            raise InvalidHierarchyError(
                f"Value metric {metric} can't be used for a node, use a leaf instead."
            )
        self._metric = metric
        self._name = name
        self._parent: Optional[weakref.ref[Node]] = None
        self._children: list[Node] = []
        self._leaves: dict[Metric, Leaf] = {}
        self._sources: list[str] = []
        self._mutations: list[Mutation] = []

    @property
    def metric(self) -> Metric:
        """The structural level of this node."""
        return self._metric

    @property
    def name(self) -> str:
        """The name of this node."""
        return self._name

    @property
    def parent(self) -> Optional[Node]:
        """The parent node, None for the root."""
        if self._parent is None:
            return None
        return self._parent()

    def get_parent(self) -> Node:
        """Get the parent node, raise a LookupError for the root."""
        if (parent := self.parent) is None:
            raise LookupError(f"Node {self} is the root of the tree.")
        return parent

    @property
    def has_parent(self) -> bool:
        """Return True if the node is attached to a parent."""
        return self.parent is not None

    @property
    def is_root(self) -> bool:
        """Return True if the node has no parent."""
        return self.parent is None

    @property
    def children(self) -> list[Node]:
        """A copy of the list of children."""
        return list(self._children)

    @property
    def leaves(self) -> list[Leaf]:
        """The leaves of this node, not of the subtree."""
        return list(self._leaves.values())

    def get_leaf(self, metric: MetricOrName) -> Optional[Leaf]:
        """Get the leaf of this node for the metric, None if there is none."""
        return self._leaves.get(_resolve_metric(metric))

    @property
    def sources(self) -> list[str]:
        """The source files registered for this node."""
        return list(self._sources)

    @property
    def mutations(self) -> list[Mutation]:
        """The mutations registered for this node, not of the subtree."""
        return list(self._mutations)

    # --------------------------------------------------------------------
    # Construction
    # --------------------------------------------------------------------

    def _check_child_metric(self, metric: Metric) -> None:
        if not metric.is_structural:
            raise InvalidHierarchyError(
                f"Value metric {metric} can't be used for a node, use a leaf instead."
            )
        # Nested packages are the result of splitting a package name.
        if metric == PACKAGE and self.metric == PACKAGE:
            return
        if not metric.is_finer_than(self.metric):
            raise InvalidHierarchyError(
                f"A node of metric {metric} can't be a child of {self}."
            )

    def create_child(self, metric: Metric, name: str, **kwargs: Any) -> Node:
        """Create a new node and append it to the children."""
        self._check_child_metric(metric)
        child = create_node(metric, name, **kwargs)
        self._append(child)
        return child

    def add_child(self, child: Node) -> Node:
        """Append an existing node without a parent to the children."""
        self._check_child_metric(child.metric)
        if child.has_parent:
            raise InvalidHierarchyError(
                f"Node {child} is already a child of {child.parent}."
            )
        self._append(child)
        return child

    def _append(self, child: Node) -> None:
        child._parent = weakref.ref(self)
        self._children.append(child)

    def find_or_create_child(self, metric: Metric, name: str, **kwargs: Any) -> Node:
        """Get the direct child with the metric and name or create it."""
        for child in self._children:
            if child.metric == metric and child.name == name:
                return child
        return self.create_child(metric, name, **kwargs)

    def attach_leaf(self, metric: Metric, value: Union[Coverage, int]) -> None:
        """Store the value, an existing value of the metric is summed up."""
        self.add_leaf(create_leaf(metric, value))

    def add_leaf(self, leaf: Leaf) -> None:
        """Store the leaf, an existing leaf of the same metric is summed up."""
        if (existing := self._leaves.get(leaf.metric)) is not None:
            leaf = existing.combine(leaf)
        self._leaves[leaf.metric] = leaf

    def add_source(self, path: str) -> None:
        """Register the path of a source file."""
        if path not in self._sources:
            self._sources.append(path)

    def add_mutation(self, mutation: Mutation) -> None:
        """Register a mutation, detected mutations count as covered."""
        self._mutations.append(mutation)
        self.attach_leaf(MUTATION, Coverage.of_items(mutation.is_killed))

    # --------------------------------------------------------------------
    # Queries
    # --------------------------------------------------------------------

    def _local_path(self) -> Optional[str]:
        return None

    @property
    def path(self) -> str:
        """The slash separated path of the packages and the file of this node.

        Only packages and files contribute to the path, the default
        package contributes nothing.
        """
        parts = []
        node: Optional[Node] = self
        while node is not None:
            if local_path := node._local_path():
                parts.append(local_path)
            node = node.parent
        return "/".join(reversed(parts))

    @property
    def parent_name(self) -> str:
        """The dotted names of the ancestors with the metric of the parent."""
        if (parent := self.parent) is None:
            return ROOT
        names = []
        node: Optional[Node] = parent
        while node is not None and node.metric == parent.metric:
            names.append(node.name)
            node = node.parent
        return ".".join(reversed(names))

    def iter_tree(self) -> Iterator[Node]:
        """Iterate depth-first over the subtree, self first."""
        yield self
        for child in self._children:
            yield from child.iter_tree()

    def get_all(self, metric: MetricOrName) -> list[Node]:
        """Get all nodes of the structural metric, children before self."""
        resolved = _resolve_metric(metric)
        if resolved is None or not resolved.is_structural:
            raise UnsupportedQueryError(
                f"Only structural metrics can be collected, got {metric}."
            )
        return self._collect(resolved)

    def _collect(self, metric: Metric) -> list[Node]:
        nodes = []
        for child in self._children:
            nodes.extend(child._collect(metric))
        if self.metric == metric:
            nodes.append(self)
        return nodes

    def matches(self, metric: MetricOrName, name: str) -> bool:
        """Check if the node has the metric and the name or path."""
        return self.metric == _resolve_metric(metric) and (
            self.name == name or self.path == name
        )

    def find(self, metric: MetricOrName, name: str) -> Optional[Node]:
        """Find the first node with the metric and name (or path), self first."""
        resolved = _resolve_metric(metric)
        if resolved is None:
            return None
        for node in self.iter_tree():
            if node.matches(resolved, name):
                return node
        return None

    def get_metrics(self) -> list[Metric]:
        """Get all metrics of the subtree, structural metrics first."""
        metrics = set()
        for node in self.iter_tree():
            metrics.add(node.metric)
            metrics.update(node._leaves)
        return sorted(metrics)

    def _sum_leaves(self, metric: Metric) -> Coverage:
        total = Coverage.NO_COVERAGE
        for node in self.iter_tree():
            if (leaf := node._leaves.get(metric)) is not None:
                total += leaf.coverage()
        return total

    def _primary_coverage(self) -> Coverage:
        for metric in PRIMARY_METRICS:
            if (coverage := self._sum_leaves(metric)).is_set:
                return coverage
        return Coverage.NO_COVERAGE

    def get_coverage(self, metric: MetricOrName) -> Coverage:
        """Get the aggregated coverage of the metric in the subtree.

        For a structural metric every node of that metric counts as one
        covered item if its primary coverage has at least one covered item,
        otherwise as one missed item. The primary coverage is the line
        coverage, or the instruction coverage if there are no lines. A
        subtree without both falls back to its killed mutations.
        """
        resolved = _resolve_metric(metric)
        if resolved is None:
            return Coverage.NO_COVERAGE
        if resolved.is_structural:
            total = Coverage.NO_COVERAGE
            for node in self._collect(resolved):
                total += Coverage.of_items(node._primary_coverage().covered > 0)
            return total
        return self._sum_leaves(resolved)

    def get_metrics_distribution(self) -> dict[Metric, Union[Coverage, int]]:
        """Get the values of all metrics, scalar metrics are plain integers."""
        distribution: dict[Metric, Union[Coverage, int]] = {}
        for metric in self.get_metrics():
            if metric.is_scalar:
                distribution[metric] = self._sum_leaves(metric).covered
            else:
                distribution[metric] = self.get_coverage(metric)
        return distribution

    def get_coverage_metrics_distribution(self) -> dict[Metric, Coverage]:
        """Get the coverage of all metrics besides the scalar ones."""
        return {
            metric: self.get_coverage(metric)
            for metric in self.get_metrics()
            if not metric.is_scalar
        }

    def get_coverage_metrics_percentages(self) -> dict[Metric, Optional[Fraction]]:
        """Get the covered ratio of all metrics besides the scalar ones."""
        return {
            metric: coverage.percentage
            for metric, coverage in self.get_coverage_metrics_distribution().items()
        }

    def get_complexity(self) -> int:
        """Get the sum of the cyclomatic complexity of the subtree."""
        return self._sum_leaves(COMPLEXITY).covered

    def get_mutation_result(self) -> MutationResult:
        """Get the killed and survived mutations of the subtree."""
        coverage = self._sum_leaves(MUTATION)
        return MutationResult(coverage.covered, coverage.missed)

    def get_all_mutations(self) -> list[Mutation]:
        """Get the mutations of the subtree in depth-first order."""
        return [mutation for node in self.iter_tree() for mutation in node._mutations]

    def print_coverage_for(
        self, metric: MetricOrName, locale: str = DEFAULT_LOCALE
    ) -> str:
        """Format the covered percentage of the metric."""
        resolved = _resolve_metric(metric)
        if resolved is not None and resolved.is_scalar:
            raise UnsupportedQueryError(
                f"Metric {resolved} has no percentage, it is a scalar value."
            )
        return self.get_coverage(resolved).format_covered_percentage(locale)

    def compute_delta(self, reference: Node) -> dict[Metric, Fraction]:
        """Get the difference of the covered ratios against a reference tree.

        A metric that is not set on one side counts as zero coverage.
        """
        metrics = set(self.get_metrics()) | set(reference.get_metrics())
        return {
            metric: self.get_coverage(metric).percentage_or(Fraction(0))
            - reference.get_coverage(metric).percentage_or(Fraction(0))
            for metric in sorted(metrics)
            if not metric.is_scalar
        }

    # --------------------------------------------------------------------
    # Copy and merge
    # --------------------------------------------------------------------

    def copy_empty(self) -> Node:
        """Create a node with the same identity but no children and values."""
        return create_node(self.metric, self.name)

    def _copy_node(self) -> Node:
        copy = self.copy_empty()
        copy._leaves = dict(self._leaves)
        copy._sources = list(self._sources)
        copy._mutations = list(self._mutations)
        return copy

    def copy_tree(self) -> Node:
        """Create a deep copy of the subtree, the copy has no parent."""
        copy = self._copy_node()
        for child in self._children:
            copy._append(child.copy_tree())
        return copy

    def combine_with(self, other: Node) -> Node:
        """Merge two trees into a new tree, both inputs are unchanged.

        Trees with the same name are merged node by node, trees with
        different names are collected below a container node.
        """
        if self.metric == CONTAINER or other.metric == CONTAINER:
            if self.metric == CONTAINER:
                combined = self.copy_tree()
            else:
                combined = ContainerNode(other.name)
                combined._merge_child(self)
            for child in other.children if other.metric == CONTAINER else [other]:
                combined._merge_child(child)
            return combined

        if self.metric != other.metric:
            raise CoverageMergeError(
                f"Can't merge nodes of different metrics: {self} and {other}."
            )
        if self.name == other.name:
            LOGGER.debug(f"Merging {other} into {self}.")
            combined = self.copy_tree()
            combined._merge(other)
            return combined

        LOGGER.debug(f"Combining {self} and {other} into a container.")
        combined = ContainerNode(COMBINED_REPORT)
        combined._append(self.copy_tree())
        combined._append(other.copy_tree())
        return combined

    def _merge_key(self) -> tuple[Any, ...]:
        return (self.metric, self.name)

    def _merge_child(self, other: Node) -> None:
        for child in self._children:
            if child._merge_key() == other._merge_key():
                child._merge(other)
                return
        self._append(other.copy_tree())

    def _merge(self, other: Node) -> None:
        for metric, leaf in other._leaves.items():
            if (existing := self._leaves.get(metric)) is None:
                self._leaves[metric] = leaf
            else:
                self._leaves[metric] = self._merge_leaf(existing, leaf)
        for source in other._sources:
            self.add_source(source)
        for mutation in other._mutations:
            if mutation not in self._mutations:
                self._mutations.append(mutation)
        for child in other._children:
            self._merge_child(child)

    def _merge_leaf(self, leaf: Leaf, other: Leaf) -> Leaf:
        if leaf.metric.is_scalar:
            return create_leaf(leaf.metric, max(leaf.value, other.value))
        return create_leaf(leaf.metric, self._merge_coverage(leaf.value, other.value))

    def _merge_coverage(self, coverage: Coverage, other: Coverage) -> Coverage:
        if coverage.total != other.total:
            raise CoverageMergeError(
                f"{self}: The number of items must be equal, "
                f"got {coverage.total} and {other.total}."
            )
        covered = max(coverage.covered, other.covered)
        return Coverage(covered, coverage.total - covered)

    # --------------------------------------------------------------------
    # Package split
    # --------------------------------------------------------------------

    def split_packages(self) -> None:
        """Split dotted package names into a chain of nested packages.

        A module (or container) splits all its packages, a package
        splits itself, all other nodes are left unchanged.
        """
        if self.metric in (MODULE, CONTAINER):
            if any(child.metric == PACKAGE for child in self._children):
                self._children = self._split_children(
                    lambda child: child.metric == PACKAGE
                )
        elif self.metric == PACKAGE and (parent := self.parent) is not None:
            parent._children = parent._split_children(lambda child: child is self)

    def _split_children(self, selected: Callable[[Node], bool]) -> list[Node]:
        children: list[Node] = []
        for index, child in enumerate(self._children):
            if selected(child):
                pending = [
                    node for node in self._children[index + 1 :] if not selected(node)
                ]
                child._split_into(self, children, children + pending)
            else:
                children.append(child)
        return children

    def _split_into(
        self, parent: Node, siblings: list[Node], candidates: list[Node]
    ) -> None:
        # candidates are the packages of the parent that stay in place,
        # a segment with the same name is moved into them
        segments = self.name.split(".")
        while len(segments) > 1 and not segments[-1]:
            segments.pop()

        def find_package(nodes: list[Node], name: str) -> Optional[Node]:
            for node in nodes:
                if node.metric == PACKAGE and node.name == name:
                    return node
            return None

        if segments == [self.name] and find_package(candidates, self.name) is None:
            siblings.append(self)
            return

        LOGGER.debug(f"Splitting package {self.name!r} into {len(segments)} packages.")
        current: Node = parent
        lookup, nodes = candidates, siblings
        for segment in segments:
            package = find_package(lookup, segment)
            if package is None:
                package = PackageNode(segment)
                package._parent = weakref.ref(current)
                nodes.append(package)
            current = package
            lookup = nodes = package._children

        for leaf in self._leaves.values():
            current.add_leaf(leaf)
        for source in self._sources:
            current.add_source(source)
        current._mutations.extend(self._mutations)
        for child in self._children:
            current._append(child)
        self._children = []
        self._parent = None

    # --------------------------------------------------------------------
    # Comparison
    # --------------------------------------------------------------------

    def _equality_key(self) -> tuple[Any, ...]:
        return (
            type(self),
            self.metric,
            self.name,
            self._sources,
            self._leaves,
            self._mutations,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self._equality_key() == other._equality_key()
            and self._children == other._children
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"[{self.metric}] {self.name}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class ContainerNode(Node):
    """A container of several modules."""

    __slots__ = ()

    def __init__(self, name: str) -> None:
        super().__init__(CONTAINER, name)


class ModuleNode(Node):
    """The root of a single coverage report."""

    __slots__ = ()

    def __init__(self, name: str) -> None:
        super().__init__(MODULE, name)


class PackageNode(Node):
    """A package, the name may be dotted like ``edu.hm.hafner``."""

    __slots__ = ()

    def __init__(self, name: str) -> None:
        super().__init__(PACKAGE, name)

    def _local_path(self) -> Optional[str]:
        if self.name == DEFAULT_PACKAGE:
            return None
        return self.name.replace(".", "/")


class FileNode(Node):
    """A source file with per-line coverage details."""

    __slots__ = ("_instructions", "_branches")

    def __init__(self, name: str) -> None:
        super().__init__(FILE, name)
        self._instructions: dict[int, Coverage] = {}
        self._branches: dict[int, Coverage] = {}

    def _local_path(self) -> Optional[str]:
        return self.name

    def add_line_coverage(
        self,
        line: int,
        instruction: Optional[Coverage] = None,
        branch: Optional[Coverage] = None,
    ) -> None:
        """Add the instruction and branch coverage of a line, values are summed up."""
        if instruction is not None:
            self._instructions[line] = (
                self._instructions.get(line, Coverage.NO_COVERAGE) + instruction
            )
        if branch is not None:
            self._branches[line] = (
                self._branches.get(line, Coverage.NO_COVERAGE) + branch
            )

    @property
    def lines(self) -> list[int]:
        """All lines with coverage details."""
        return sorted(set(self._instructions) | set(self._branches))

    def get_line_instructions(self, line: int) -> Coverage:
        return self._instructions.get(line, Coverage.NO_COVERAGE)

    def get_line_branches(self, line: int) -> Coverage:
        return self._branches.get(line, Coverage.NO_COVERAGE)

    @property
    def covered_lines(self) -> list[int]:
        return sorted(n for n, c in self._instructions.items() if c.covered > 0)

    @property
    def missed_lines(self) -> list[int]:
        return sorted(
            n for n, c in self._instructions.items() if c.is_set and c.covered == 0
        )

    @property
    def partially_covered_lines(self) -> list[int]:
        """Lines with covered and missed branches."""
        return sorted(
            n for n, c in self._branches.items() if c.covered > 0 and c.missed > 0
        )

    @property
    def missed_instructions_count(self) -> int:
        return sum(c.missed for c in self._instructions.values())

    @property
    def covered_instructions_count(self) -> int:
        return sum(c.covered for c in self._instructions.values())

    @property
    def missed_branches_count(self) -> int:
        return sum(c.missed for c in self._branches.values())

    @property
    def covered_branches_count(self) -> int:
        return sum(c.covered for c in self._branches.values())

    def _copy_node(self) -> Node:
        copy = super()._copy_node()
        assert isinstance(copy, FileNode)
        copy._instructions = dict(self._instructions)
        copy._branches = dict(self._branches)
        return copy

    def _merge(self, other: Node) -> None:
        assert isinstance(other, FileNode)
        for own, others in (
            (self._instructions, other._instructions),
            (self._branches, other._branches),
        ):
            for line, coverage in others.items():
                if line in own:
                    own[line] = self._merge_coverage(own[line], coverage)
                else:
                    own[line] = coverage
        super()._merge(other)

    def _equality_key(self) -> tuple[Any, ...]:
        return super()._equality_key() + (self._instructions, self._branches)


class ClassNode(Node):
    """A class of a source file."""

    __slots__ = ()

    def __init__(self, name: str) -> None:
        super().__init__(CLASS, name)


class MethodNode(Node):
    """A method of a class, the name usually contains the signature."""

    __slots__ = ("line_number",)

    def __init__(self, name: str, line_number: int = 0) -> None:
        super().__init__(METHOD, name)
        self.line_number = line_number

    def copy_empty(self) -> Node:
        return MethodNode(self.name, self.line_number)

    def _merge_key(self) -> tuple[Any, ...]:
        return super()._merge_key() + (self.line_number,)

    def _equality_key(self) -> tuple[Any, ...]:
        return super()._equality_key() + (self.line_number,)

    def __str__(self) -> str:
        return f"{super().__str__()} ({self.line_number})"


NODE_TYPES: dict[Metric, type[Node]] = {
    CONTAINER: ContainerNode,
    MODULE: ModuleNode,
    PACKAGE: PackageNode,
    FILE: FileNode,
    CLASS: ClassNode,
    METHOD: MethodNode,
}


def create_node(metric: Metric, name: str, **kwargs: Any) -> Node:
    """Create a node of the class registered for the structural metric."""
    if not metric.is_structural:
        raise InvalidHierarchyError(
            f"Value metric {metric} can't be used for a node, use a leaf instead."
        )
    if (node_type := NODE_TYPES.get(metric)) is None:
        return Node(metric, name, **kwargs)
    return node_type(name, **kwargs)  # type: ignore[call-arg]


def new_root(name: str, metric: Metric = MODULE) -> Node:
    """Create the root of a new tree."""
    return create_node(metric, name)
