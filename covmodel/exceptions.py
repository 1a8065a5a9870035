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

"""Exceptions used in covmodel."""


class InvalidHierarchyError(AssertionError):
    """Raised when a node is attached at a level its parent does not allow."""


class UnsupportedQueryError(AssertionError):
    """Raised when a tree query is asked for a metric it cannot answer."""


class LeafMetricMismatchError(AssertionError):
    """Raised when two leaves of different metrics are combined."""


class CoverageDataError(AssertionError):
    """Exception for invalid coverage values."""


class CoverageMergeError(AssertionError):
    """Exception for tree merge errors."""
