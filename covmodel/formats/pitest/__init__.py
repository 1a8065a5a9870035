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

from typing import Union

from ...data_model.node import Node
from ...formats.base import BaseHandler
from ...options import CovmodelConfigOption


class PitestHandler(BaseHandler):
    """Class to handle PIT mutation testing format."""

    @classmethod
    def get_options(cls) -> list[Union[CovmodelConfigOption, str]]:
        return []

    def read_report(self, filename: str) -> Node:
        from .read import read_report  # pylint: disable=import-outside-toplevel # Lazy loading is intended here

        return read_report(filename, self.options)
