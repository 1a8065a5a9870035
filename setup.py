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
Script to generate the installer for covmodel.
"""

import os
import time

from runpy import run_path
from setuptools import setup, find_packages


version = run_path("./covmodel/version.py")["__version__"]
if version.endswith("+main"):
    # Add a default if environment is not set
    os.environ["TIMESTAMP"] = os.environ.get("TIMESTAMP", str(int(time.time())))
    # ...and use this timestamp.
    version = version.replace("+main", f".dev{os.environ['TIMESTAMP']}+main")
# read the contents of your README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.rst"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="covmodel",
    version=version,
    description="A coverage tree model for code coverage and mutation testing reports.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="BSD-3-Clause",
    platforms=["any"],
    python_requires=">=3.9",
    packages=find_packages(include=["covmodel*"]),
    install_requires=[
        "lxml",
        "colorlog",
        "tomli >= 1.1.0 ; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "covmodel=covmodel.__main__:main",
        ],
    },
)
