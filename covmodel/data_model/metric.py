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
The metrics known to the coverage tree.

A metric is either *structural*, i.e. a containment level of the tree
(module, package, file, class, method), or a *value* metric that is only
ever stored as a leaf of a node. Value metrics are split into ratio
metrics, measured as a covered/missed pair, and scalar metrics like the
cyclomatic complexity.

The registry is ordered: structural metrics sort by their rank, value
metrics follow in registration order.

>>> value_of("LINE") is LINE
True
>>> value_of("Line") is LINE
True
>>> value_of("not-a-real-metric") is None
True
>>> sorted([LINE, FILE, MODULE, BRANCH, METHOD])
[<Metric MODULE>, <Metric FILE>, <Metric METHOD>, <Metric LINE>, <Metric BRANCH>]
"""

from __future__ import annotations
import functools
import logging
from typing import Iterator, Optional

from ..exceptions import UnsupportedQueryError

LOGGER = logging.getLogger("covmodel")

STRUCTURAL = "structural"
RATIO = "ratio"
SCALAR = "scalar"


@functools.total_ordering
class Metric:
    """Descriptor of a single metric, use the registry to create instances."""

    __slots__ = ("key", "name", "kind", "rank", "ordinal")

    def __init__(
        self, key: str, name: str, kind: str, rank: Optional[int], ordinal: int
    ) -> None:
        self.key = key
        self.name = name
        self.kind = kind
        self.rank = rank
        self.ordinal = ordinal

    @staticmethod
    def value_of(name: str) -> Optional[Metric]:
        """Get the registered metric with the given key or display name."""
        return METRICS.value_of(name)

    @property
    def is_structural(self) -> bool:
        """Return True if nodes of the tree are created for this metric."""
        return self.kind == STRUCTURAL

    @property
    def is_leaf(self) -> bool:
        """Return True if this metric is only stored as leaf value."""
        return self.kind != STRUCTURAL

    @property
    def is_ratio(self) -> bool:
        """Return True if the values are covered/missed pairs."""
        return self.kind == RATIO

    @property
    def is_scalar(self) -> bool:
        """Return True if the values are plain integers."""
        return self.kind == SCALAR

    @property
    def structural_rank(self) -> int:
        """Get the containment rank, lower numbers are coarser levels.

        >>> MODULE.structural_rank < PACKAGE.structural_rank < FILE.structural_rank
        True
        >>> LINE.structural_rank
        Traceback (most recent call last):
          ...
        covmodel.exceptions.UnsupportedQueryError: Leaves like 'Line' have no structural rank.
        """
        if self.rank is None:
            raise UnsupportedQueryError(
                f"Leaves like '{self.name}' have no structural rank."
            )
        return self.rank

    def is_finer_than(self, other: Metric) -> bool:
        """Check if this structural metric may be nested below the other one."""
        return self.structural_rank > other.structural_rank

    @property
    def _sort_key(self) -> tuple[int, int]:
        if self.rank is not None:
            return (0, self.rank)
        return (1, self.ordinal)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Metric):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: Metric) -> bool:
        if not isinstance(other, Metric):
            return NotImplemented
        return self._sort_key < other._sort_key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<Metric {self.key}>"


class MetricRegistry:
    """Ordered mapping of the canonical metric keys to the metric descriptors."""

    def __init__(self) -> None:
        self._metrics = dict[str, Metric]()

    def register(
        self, key: str, name: str, kind: str, rank: Optional[int] = None
    ) -> Metric:
        """Register a new metric, registering an identical metric again is allowed.

        >>> registry = MetricRegistry()
        >>> registry.register("LOC", "Lines of Code", SCALAR)
        <Metric LOC>
        >>> registry.register("LOC", "Lines of Code", SCALAR) is registry.value_of("LOC")
        True
        >>> registry.register("LOC", "Lines", RATIO)
        Traceback (most recent call last):
          ...
        ValueError: Metric 'LOC' is already registered with a different definition.
        """
        if kind not in (STRUCTURAL, RATIO, SCALAR):
            raise ValueError(f"Unknown metric kind {kind!r}.")
        if (kind == STRUCTURAL) != (rank is not None):
            raise ValueError(
                f"Metric {key!r}: a rank is required for structural metrics only."
            )

        if (existing := self._metrics.get(key)) is not None:
            if (existing.name, existing.kind, existing.rank) != (name, kind, rank):
                raise ValueError(
                    f"Metric {key!r} is already registered with a different definition."
                )
            return existing

        metric = Metric(key, name, kind, rank, len(self._metrics))
        self._metrics[key] = metric
        LOGGER.debug(f"Registered {kind} metric {key}.")
        return metric

    def value_of(self, name: str) -> Optional[Metric]:
        """Get the metric by key or by display name, None if unknown."""
        if (metric := self._metrics.get(name)) is not None:
            return metric
        for metric in self._metrics.values():
            if metric.name == name:
                return metric
        return None

    def structural(self) -> list[Metric]:
        """Get the structural metrics ordered by rank."""
        return sorted(m for m in self._metrics.values() if m.is_structural)

    def values(self) -> list[Metric]:
        """Get the value metrics in registration order."""
        return sorted(m for m in self._metrics.values() if m.is_leaf)

    def __contains__(self, metric: object) -> bool:
        return isinstance(metric, Metric) and self._metrics.get(metric.key) is metric

    def __iter__(self) -> Iterator[Metric]:
        return iter(sorted(self._metrics.values()))

    def __len__(self) -> int:
        return len(self._metrics)


METRICS = MetricRegistry()

CONTAINER = METRICS.register("CONTAINER", "Container", STRUCTURAL, rank=0)
MODULE = METRICS.register("MODULE", "Module", STRUCTURAL, rank=1)
PACKAGE = METRICS.register("PACKAGE", "Package", STRUCTURAL, rank=2)
FILE = METRICS.register("FILE", "File", STRUCTURAL, rank=3)
CLASS = METRICS.register("CLASS", "Class", STRUCTURAL, rank=4)
METHOD = METRICS.register("METHOD", "Method", STRUCTURAL, rank=5)

LINE = METRICS.register("LINE", "Line", RATIO)
INSTRUCTION = METRICS.register("INSTRUCTION", "Instruction", RATIO)
BRANCH = METRICS.register("BRANCH", "Branch", RATIO)
COMPLEXITY = METRICS.register("COMPLEXITY", "Complexity", SCALAR)

# Metrics of the mutation testing tools
MUTATION = METRICS.register("MUTATION", "Mutation", RATIO)


def value_of(name: str) -> Optional[Metric]:
    """Get the registered metric with the given key or display name."""
    return METRICS.value_of(name)


def structural_rank(metric: Metric) -> int:
    """Get the rank of a structural metric."""
    return metric.structural_rank
