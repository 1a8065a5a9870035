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

from contextlib import contextmanager
import os
import sys
from typing import Any, Iterator, Optional


def force_unix_separator(path: str) -> str:
    r"""Get the filename with / independent of the OS.

    >>> force_unix_separator("edu\\hm\\hafner\\util\\Ensure.java")
    'edu/hm/hafner/util/Ensure.java'
    """
    return path.replace("\\", "/")


def base_name(path: str) -> str:
    """Get the last part of a path with Unix or Windows separators.

    >>> base_name("edu/hm/hafner/util/Ensure.java")
    'Ensure.java'
    >>> base_name("Ensure.java")
    'Ensure.java'
    """
    return force_unix_separator(path).rsplit("/", 1)[-1]


@contextmanager
def open_text_for_writing(
    filename: Optional[str], default_filename: Optional[str] = None, **kwargs: Any
) -> Iterator[Any]:
    """Context manager to open and close a file for text writing.

    Stdout is used if `filename` is None or '-'.
    """
    if filename is not None and filename.endswith(os.sep):
        if default_filename is None:
            raise AssertionError(
                "If filename is a directory a default filename is mandatory."
            )
        filename += default_filename

    if filename is None or filename == "-":
        yield sys.stdout
    else:
        with open(filename, "w", encoding="utf-8", **kwargs) as fh_out:
            yield fh_out


def normalize_package_name(name: str) -> str:
    r"""Use dots as separators of package names.

    >>> normalize_package_name("edu/hm/hafner\\util")
    'edu.hm.hafner.util'
    """
    return name.replace("/", ".").replace("\\", ".")
