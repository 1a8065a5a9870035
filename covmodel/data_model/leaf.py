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
Leaves of the coverage tree.

A leaf stores the value of a single value metric (see
:mod:`covmodel.data_model.metric`) for a node. Ratio metrics are stored as
:class:`CoverageLeaf` with a :class:`~covmodel.data_model.coverage.Coverage`
value, scalar metrics like the cyclomatic complexity as :class:`ScalarLeaf`.
"""

from __future__ import annotations
from dataclasses import dataclass
import enum
from typing import Optional, Union

from ..exceptions import InvalidHierarchyError, LeafMetricMismatchError
from .coverage import Coverage
from .metric import COMPLEXITY, Metric


class Leaf:
    """Base class of all leaves, a pair of metric and value."""

    __slots__ = ("__metric", "__value")

    def __init__(self, metric: Metric, value: Union[Coverage, int]) -> None:
        if metric.is_structural:
            raise InvalidHierarchyError(
                f"Structural metric {metric} can't be used for a leaf."
            )
        self.__metric = metric
        self.__value = value

    @property
    def metric(self) -> Metric:
        """The metric of the leaf."""
        return self.__metric

    @property
    def value(self) -> Union[Coverage, int]:
        """The value of the leaf."""
        return self.__value

    @property
    def is_set(self) -> bool:
        """Return True if the leaf contains a value."""
        raise NotImplementedError()

    def coverage(self) -> Coverage:
        """Get the value as coverage."""
        raise NotImplementedError()

    def combine(self, other: Leaf) -> Leaf:
        """Add the values of two leaves with the same metric.

        The result is created by :func:`create_leaf`, so leaves of the
        same metric combine whatever leaf class holds them.
        """
        if not isinstance(other, Leaf) or self.metric != other.metric:
            raise LeafMetricMismatchError(
                f"Can't combine leaf {self} with leaf {other}."
            )
        return create_leaf(self.metric, self.value + other.value)

    def __add__(self, other: Leaf) -> Leaf:
        if not isinstance(other, Leaf):
            return NotImplemented
        return self.combine(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Leaf):
            return NotImplemented
        return self.metric == other.metric and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.metric, self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.metric!r}, {self.value!r})"

    def __str__(self) -> str:
        return f"{self.metric}: {self.value}"


class CoverageLeaf(Leaf):
    """Leaf of a ratio metric like lines or branches.

    >>> from covmodel.data_model.metric import LINE
    >>> str(CoverageLeaf(LINE, Coverage(1, 2)) + CoverageLeaf(LINE, Coverage(3, 0)))
    'Line: 66.67% (4/6)'
    """

    __slots__ = ()

    def __init__(self, metric: Metric, value: Coverage) -> None:
        if not metric.is_structural and not metric.is_ratio:
            raise LeafMetricMismatchError(
                f"Metric {metric} is no ratio metric, a coverage leaf needs one."
            )
        if not isinstance(value, Coverage):
            raise LeafMetricMismatchError(
                f"Value {value!r} of metric {metric} must be a Coverage."
            )
        super().__init__(metric, value)

    @property
    def is_set(self) -> bool:
        return self.value.is_set

    def coverage(self) -> Coverage:
        return self.value


class ScalarLeaf(Leaf):
    """Leaf of a scalar metric, the value is a non-negative integer."""

    __slots__ = ()

    def __init__(self, metric: Metric, value: int) -> None:
        if not metric.is_structural and not metric.is_scalar:
            raise LeafMetricMismatchError(
                f"Metric {metric} is no scalar metric, a scalar leaf needs one."
            )
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise LeafMetricMismatchError(
                f"Value {value!r} of metric {metric} must be a non-negative integer."
            )
        super().__init__(metric, value)

    @property
    def is_set(self) -> bool:
        return self.value > 0

    def coverage(self) -> Coverage:
        return Coverage(self.value, 0)


class ComplexityLeaf(ScalarLeaf):
    """The cyclomatic complexity of a node.

    >>> ComplexityLeaf(3) + ComplexityLeaf(4)
    ComplexityLeaf(<Metric COMPLEXITY>, 7)
    """

    __slots__ = ()

    def __init__(self, value: int, metric: Optional[Metric] = None) -> None:
        super().__init__(COMPLEXITY if metric is None else metric, value)


def create_leaf(metric: Metric, value: Union[Coverage, int]) -> Leaf:
    """Create the leaf variant matching the kind of the metric.

    >>> from covmodel.data_model.metric import BRANCH, COMPLEXITY
    >>> create_leaf(COMPLEXITY, 2)
    ComplexityLeaf(<Metric COMPLEXITY>, 2)
    >>> create_leaf(BRANCH, 2)
    Traceback (most recent call last):
      ...
    covmodel.exceptions.LeafMetricMismatchError: Value 2 of metric Branch must be a Coverage.
    """
    if metric.is_structural:
        raise InvalidHierarchyError(
            f"Structural metric {metric} can't be used for a leaf."
        )
    if metric.is_scalar:
        if metric == COMPLEXITY:
            if isinstance(value, bool) or not isinstance(value, int):
                raise LeafMetricMismatchError(
                    f"Value {value!r} of metric {metric} must be a non-negative integer."
                )
            return ComplexityLeaf(value)
        return ScalarLeaf(metric, value)
    return CoverageLeaf(metric, value)


class MutationStatus(enum.Enum):
    """Outcome of a single mutation."""

    KILLED = "KILLED"
    SURVIVED = "SURVIVED"
    NO_COVERAGE = "NO_COVERAGE"
    NON_VIABLE = "NON_VIABLE"
    TIMED_OUT = "TIMED_OUT"
    MEMORY_ERROR = "MEMORY_ERROR"
    RUN_ERROR = "RUN_ERROR"

    @staticmethod
    def from_report(status: str) -> MutationStatus:
        """Parse the status attribute of a PIT report."""
        return MutationStatus(status.strip().upper())


_GREGOR_MUTATORS = "org.pitest.mutationtest.engine.gregor.mutators."


class Mutator(enum.Enum):
    """The mutation operator that created a mutation."""

    CONDITIONALS_BOUNDARY = "ConditionalsBoundaryMutator"
    CONSTRUCTOR_CALLS = "ConstructorCallMutator"
    INCREMENTS = "IncrementsMutator"
    INVERT_NEGS = "InvertNegsMutator"
    MATH = "MathMutator"
    NEGATE_CONDITIONALS = "NegateConditionalsMutator"
    NON_VOID_METHOD_CALLS = "NonVoidMethodCallMutator"
    RETURN_VALS = "ReturnValsMutator"
    VOID_METHOD_CALLS = "VoidMethodCallMutator"
    FALSE_RETURNS = "returns.BooleanFalseReturnValsMutator"
    TRUE_RETURNS = "returns.BooleanTrueReturnValsMutator"
    EMPTY_RETURNS = "returns.EmptyObjectReturnValsMutator"
    NULL_RETURNS = "returns.NullReturnValsMutator"
    PRIMITIVE_RETURNS = "returns.PrimitiveReturnsMutator"
    NOT_SPECIFIED = ""

    @staticmethod
    def from_class_name(class_name: str) -> Mutator:
        """Map the fully qualified class name of a PIT mutator.

        >>> Mutator.from_class_name(
        ...     "org.pitest.mutationtest.engine.gregor.mutators.MathMutator"
        ... )
        <Mutator.MATH: 'MathMutator'>
        >>> Mutator.from_class_name("my.own.Mutator")
        <Mutator.NOT_SPECIFIED: ''>
        """
        class_name = class_name.strip()
        if class_name.startswith(_GREGOR_MUTATORS):
            short_name = class_name[len(_GREGOR_MUTATORS) :]
            for mutator in Mutator:
                if mutator.value and mutator.value == short_name:
                    return mutator
        return Mutator.NOT_SPECIFIED


@dataclass(frozen=True)
class Mutation:
    """A single mutation of a method."""

    detected: bool
    status: MutationStatus
    mutator: Mutator
    line_number: int
    killing_test: Optional[str] = None
    description: str = ""

    @property
    def is_killed(self) -> bool:
        """A mutation is killed if the tests detected it."""
        return self.detected

    @property
    def is_covered(self) -> bool:
        """Return True if the mutated code was executed by a test."""
        return self.status != MutationStatus.NO_COVERAGE
