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
import nox


DEFAULT_TEST_DIRECTORIES = ["tests"]
DEFAULT_LINT_ARGUMENTS = ["noxfile.py", "setup.py", "covmodel"] + DEFAULT_TEST_DIRECTORIES

CI_RUN = "GITHUB_ACTION" in os.environ

nox.options.sessions = ["qa"]


@nox.session
def qa(session: nox.Session) -> None:
    """Run the quality tests."""
    for session_id in ["lint", "tests"]:
        session.log(f"Notify session {session_id}")
        session.notify(session_id, [])


@nox.session(python=False)
def lint(session: nox.Session) -> None:
    """Run the linters."""
    session.notify("ruff_check")
    session.notify("ruff_format")
    session.notify("pylint")
    session.notify("mypy")


@nox.session
def ruff_check(session: nox.Session) -> None:
    """Run ruff check command."""
    session.install("ruff")
    session.run("ruff", "check", *(session.posargs or ["."]))


@nox.session
def ruff_format(session: nox.Session) -> None:
    """Run ruff format command."""
    session.install("ruff")
    session.run("ruff", "format", *(session.posargs or ["--diff", "."]))


@nox.session
def pylint(session: nox.Session) -> None:
    """Run pylint command."""
    session.install("pylint", "nox", "pytest")
    session.install("-e", ".")
    session.run("pylint", *(session.posargs or DEFAULT_LINT_ARGUMENTS))


@nox.session
def mypy(session: nox.Session) -> None:
    """Run mypy command."""
    session.install("mypy", "lxml-stubs", "nox", "pytest")
    session.install("-e", ".")
    session.run("mypy", *(session.posargs or ["."]))


@nox.session
def tests(session: nox.Session) -> None:
    """Run the tests."""
    use_coverage = os.environ.get("USE_COVERAGE") == "true"
    requirements = ["pytest"]
    if use_coverage:
        requirements += ["coverage", "pytest-cov"]
    session.install(*requirements)
    session.install("-e", ".")

    args = ["-m", "pytest"]
    if use_coverage:
        args += ["--cov=covmodel", "--cov-branch"]
    args += session.posargs
    if "--" not in args:
        args += ["--"] + DEFAULT_TEST_DIRECTORIES

    try:
        session.run("python", *args)
    finally:
        if use_coverage:
            session.run("coverage", "xml")
            if not CI_RUN:
                session.run("coverage", "html")


@nox.session
def build_wheel(session: nox.Session) -> None:
    """Build a wheel."""
    session.install("build", "twine")
    session.run("python", "-m", "build")
    session.run("twine", "check", "dist/*")
