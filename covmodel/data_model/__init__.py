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

from .coverage import Coverage, MutationResult
from .leaf import (
    ComplexityLeaf,
    CoverageLeaf,
    Leaf,
    Mutation,
    MutationStatus,
    Mutator,
    ScalarLeaf,
    create_leaf,
)
from .metric import (
    BRANCH,
    CLASS,
    COMPLEXITY,
    CONTAINER,
    FILE,
    INSTRUCTION,
    LINE,
    METHOD,
    METRICS,
    MODULE,
    MUTATION,
    PACKAGE,
    Metric,
    MetricRegistry,
    value_of,
)
from .node import (
    ClassNode,
    ContainerNode,
    FileNode,
    MethodNode,
    ModuleNode,
    Node,
    PackageNode,
    create_node,
    new_root,
)

__all__ = [
    "BRANCH",
    "CLASS",
    "COMPLEXITY",
    "CONTAINER",
    "FILE",
    "INSTRUCTION",
    "LINE",
    "METHOD",
    "METRICS",
    "MODULE",
    "MUTATION",
    "PACKAGE",
    "ClassNode",
    "ComplexityLeaf",
    "ContainerNode",
    "Coverage",
    "CoverageLeaf",
    "FileNode",
    "Leaf",
    "MethodNode",
    "Metric",
    "MetricRegistry",
    "ModuleNode",
    "Mutation",
    "MutationResult",
    "MutationStatus",
    "Mutator",
    "Node",
    "PackageNode",
    "ScalarLeaf",
    "create_leaf",
    "create_node",
    "new_root",
    "value_of",
]
