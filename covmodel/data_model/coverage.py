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
Exact coverage values.

A :class:`Coverage` is a pair of covered and missed items. Adding two
coverage values adds the components, so aggregating over a tree of any
depth is exact and does not depend on the order of the additions.
Percentages are computed as :class:`fractions.Fraction`, floating point
numbers are only created when a percentage is rendered for humans.
"""

from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
import math
import re
from typing import ClassVar, Optional, TypeVar, Union

from ..exceptions import CoverageDataError

_T = TypeVar("_T")

NO_COVERAGE_AVAILABLE = "-"
DEFAULT_LOCALE = "en"

# Languages printing a decimal comma, all others use a decimal point.
COMMA_DECIMAL_LANGUAGES = frozenset(
    [
        "bg", "cs", "da", "de", "el", "es", "et", "fi", "fr", "hr", "hu", "id",
        "it", "lt", "lv", "nb", "nl", "nn", "no", "pl", "pt", "ro", "ru", "sk",
        "sl", "sr", "sv", "tr", "uk", "vi",
    ]
)  # fmt: skip

REGEX_LOCALE_SEPARATOR = re.compile(r"[-_.@]")


def decimal_separator(locale: str) -> str:
    """Get the decimal separator of a locale like ``de`` or ``de_DE.UTF-8``.

    >>> decimal_separator("en_US")
    '.'
    >>> decimal_separator("de-DE")
    ','
    >>> decimal_separator("")
    '.'
    """
    language = REGEX_LOCALE_SEPARATOR.split(locale, maxsplit=1)[0].lower()
    return "," if language in COMMA_DECIMAL_LANGUAGES else "."


def format_percentage(value: Fraction, locale: str = DEFAULT_LOCALE) -> str:
    """Render a ratio as percentage with two decimals, rounding half up.

    >>> format_percentage(Fraction(61, 80))
    '76.25%'
    >>> format_percentage(Fraction(61, 80), "de")
    '76,25%'
    >>> format_percentage(Fraction(2, 3))
    '66.67%'
    >>> format_percentage(Fraction(1, 1))
    '100.00%'
    """
    hundredths = math.floor(value * 10000 + Fraction(1, 2))
    integer_part, decimals = divmod(hundredths, 100)
    return f"{integer_part}{decimal_separator(locale)}{decimals:02d}%"


@dataclass(frozen=True)
class Coverage:
    """The number of covered and missed items of a ratio metric.

    >>> Coverage(61, 19) + Coverage(2, 1)
    Coverage(covered=63, missed=20)
    >>> Coverage(61, 19).percentage
    Fraction(61, 80)
    >>> Coverage(0, 0).percentage is None
    True
    >>> Coverage(-1, 0)
    Traceback (most recent call last):
      ...
    covmodel.exceptions.CoverageDataError: Coverage counts must be non-negative integers, got covered=-1 and missed=0.
    """

    covered: int
    """How many items were covered."""

    missed: int
    """How many items were not covered."""

    NO_COVERAGE: ClassVar[Coverage]

    def __post_init__(self) -> None:
        if not (
            isinstance(self.covered, int)
            and isinstance(self.missed, int)
            and not isinstance(self.covered, bool)
            and not isinstance(self.missed, bool)
            and self.covered >= 0
            and self.missed >= 0
        ):
            raise CoverageDataError(
                "Coverage counts must be non-negative integers, "
                f"got covered={self.covered} and missed={self.missed}."
            )

    @staticmethod
    def of_items(covered: bool) -> Coverage:
        """Coverage of a single item, e.g. a line or a structural node."""
        return Coverage(1, 0) if covered else Coverage(0, 1)

    @property
    def total(self) -> int:
        """Get the number of all items."""
        return self.covered + self.missed

    @property
    def is_set(self) -> bool:
        """Return True if there is at least one item."""
        return self.total > 0

    @property
    def percentage(self) -> Optional[Fraction]:
        """Ratio of covered items, equivalent to ``self.percentage_or(None)``."""
        return self.percentage_or(None)

    def percentage_or(self, default: _T) -> Union[Fraction, _T]:
        """Ratio of covered items or the default if there are no items."""
        if not self.is_set:
            return default
        return Fraction(self.covered, self.total)

    @property
    def missed_percentage(self) -> Optional[Fraction]:
        """Ratio of missed items, None if there are no items."""
        if not self.is_set:
            return None
        return Fraction(self.missed, self.total)

    def format_covered_percentage(self, locale: str = DEFAULT_LOCALE) -> str:
        """Format the covered ratio as percentage, ``-`` if not set.

        >>> Coverage(0, 0).format_covered_percentage()
        '-'
        """
        if (percentage := self.percentage) is None:
            return NO_COVERAGE_AVAILABLE
        return format_percentage(percentage, locale)

    def format_missed_percentage(self, locale: str = DEFAULT_LOCALE) -> str:
        """Format the missed ratio as percentage, ``-`` if not set."""
        if (percentage := self.missed_percentage) is None:
            return NO_COVERAGE_AVAILABLE
        return format_percentage(percentage, locale)

    def __add__(self, other: Coverage) -> Coverage:
        if not isinstance(other, Coverage):
            return NotImplemented
        return Coverage(self.covered + other.covered, self.missed + other.missed)

    def __str__(self) -> str:
        if not self.is_set:
            return NO_COVERAGE_AVAILABLE
        return f"{self.format_covered_percentage()} ({self.covered}/{self.total})"


Coverage.NO_COVERAGE = Coverage(0, 0)


def percentage(coverage: Coverage) -> Optional[Fraction]:
    """Get the exact covered ratio, None if the coverage is not set."""
    return coverage.percentage


@dataclass(frozen=True)
class MutationResult:
    """Aggregated result of a mutation testing run.

    >>> MutationResult(2, 1) + MutationResult(1, 0)
    MutationResult(killed=3, survived=1)
    """

    killed: int = 0
    survived: int = 0

    @property
    def total(self) -> int:
        """Get the number of all mutations."""
        return self.killed + self.survived

    def as_coverage(self) -> Coverage:
        """Killed mutations count as covered ones."""
        return Coverage(self.killed, self.survived)

    def __add__(self, other: MutationResult) -> MutationResult:
        if not isinstance(other, MutationResult):
            return NotImplemented
        return MutationResult(
            self.killed + other.killed, self.survived + other.survived
        )
