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

from .version import __version__
from .data_model import (
    Coverage,
    Metric,
    Node,
    new_root,
    value_of,
)

__all__ = ["__version__", "Coverage", "Metric", "Node", "new_root", "value_of"]
