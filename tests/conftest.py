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

DATA_DIRECTORY = os.path.join(os.path.dirname(__file__), "data")


@pytest.fixture
def data_dir() -> str:
    """The directory of the report fixtures."""
    return DATA_DIRECTORY


@pytest.fixture
def cobertura_report() -> str:
    return os.path.join(DATA_DIRECTORY, "cobertura.xml")


@pytest.fixture
def jacoco_report() -> str:
    return os.path.join(DATA_DIRECTORY, "jacoco-fixture.xml")


@pytest.fixture
def pitest_report() -> str:
    return os.path.join(DATA_DIRECTORY, "mutations.xml")


@pytest.fixture(autouse=True)
def no_ci_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run without the log prefixes of CI systems."""
    for variable in ("TF_BUILD", "GITHUB_ACTIONS", "FORCE_COLOR"):
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
