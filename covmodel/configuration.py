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

from __future__ import annotations
from argparse import ArgumentParser, ArgumentTypeError, SUPPRESS, _ArgumentGroup
from dataclasses import dataclass
import logging
import os
from typing import Any, Callable, Iterable, Optional

from . import formats
from .options import (
    CovmodelConfigOption,
    Options,
    OutputOrDefault,
    check_input_file,
    check_percentage,
    relative_path,
)

LOGGER = logging.getLogger("covmodel")


def argument_parser_setup(
    parser: ArgumentParser, default_group: _ArgumentGroup
) -> None:
    r"""Add all options and groups to the given argparse parser."""

    groups = {}
    for group_def in COVMODEL_CONFIG_OPTION_GROUPS:
        groups[group_def["key"]] = parser.add_argument_group(
            group_def["name"],
            description=group_def["description"],
        )

    for opt in COVMODEL_CONFIG_OPTIONS:
        group = default_group if opt.group is None else groups[opt.group]

        kwargs: dict[str, Any] = {
            "action": opt.action,
            "default": SUPPRESS,  # default will be assigned manually
            "help": opt.help,
        }
        if opt.action != "append" or opt.const is not None:
            kwargs["const"] = opt.const
        if opt.metavar is not None:
            kwargs["metavar"] = opt.metavar

        # To avoid store_const problems, optionally set choices, nargs, type:
        if opt.choices is not None:
            kwargs["choices"] = opt.choices
        if opt.nargs is not None:
            kwargs["nargs"] = opt.nargs
        if opt.type is not None:
            kwargs["type"] = opt.type

        if opt.flags:
            kwargs["dest"] = opt.name
            group.add_argument(*opt.flags, **kwargs)
        elif opt.positional:
            group.add_argument(opt.name, **kwargs)
        else:
            raise AssertionError("Oops, sanity check failed: Unexpected option.")


def parse_config_into_dict(
    config_entry_source: Iterable[ConfigEntry],
    all_options: Optional[Iterable[CovmodelConfigOption]] = None,
) -> dict[str, Any]:
    """Convert the config entries into a partial namespace."""
    cfg_dict: dict[str, Any] = {}

    if all_options is None:
        all_options = COVMODEL_CONFIG_OPTIONS

    options_lookup = {}
    for option in all_options:
        for config_key in option.config_keys or []:
            options_lookup[config_key] = option

    for cfg_entry in config_entry_source:
        if (option := options_lookup.get(cfg_entry.key)) is None:
            raise cfg_entry.error("unknown config option")

        value = _get_value_from_config_entry(cfg_entry, option)
        _assign_value_to_dict(cfg_dict, value, option, is_single_value=True)

    return cfg_dict


def _get_value_from_config_entry(
    cfg_entry: ConfigEntry,
    option: CovmodelConfigOption,
) -> Any:
    # store_const options are switched on and off with a boolean
    if option.action == "store_const":
        return option.const if cfg_entry.value_as_bool else option.default

    value: Any = cfg_entry.value
    if option.type is not None:
        if cfg_entry.filename is None:
            raise AssertionError(
                "Conversion function must derive base directory from filename"
            )
        converter = _get_converter_function(
            option.type, basedir=os.path.dirname(cfg_entry.filename)
        )
        try:
            value = converter(str(value))
        except (ValueError, ArgumentTypeError) as err:
            raise cfg_entry.error(str(err)) from None

    if option.choices is not None and value not in option.choices:
        raise cfg_entry.error(  # pylint: disable=raising-format-tuple
            "must be one of ({}) but got {!r}",
            ", ".join(repr(choice) for choice in option.choices),
            value,
        )

    return value


def _get_converter_function(
    option_type: Callable[..., Any],
    *,
    basedir: str,
) -> Callable[[str], Any]:
    """
    Obtain a converter function that corresponds to `option.type`.

    Paths in a configuration file are relative to the directory of the file.
    """

    if option_type is check_input_file:
        return lambda value: check_input_file(value, basedir)

    if option_type is relative_path:
        return lambda value: relative_path(value, basedir)

    if option_type is OutputOrDefault:
        return lambda value: OutputOrDefault(value, basedir)

    return option_type


def _assign_value_to_dict(
    namespace: dict[str, Any],
    value: Any,
    option: CovmodelConfigOption,
    is_single_value: bool,
) -> None:
    if option.action == "append" or option.nargs in ("*", "+"):
        append_target = namespace.setdefault(option.name, [])
        if is_single_value:
            append_target.append(value)
        else:
            append_target.extend(value)
        return

    if option.action in ("store", "store_const"):
        namespace[option.name] = value
        return

    raise AssertionError(f"Unexpected action for {option.name}: {option.action!r}")


def merge_options_and_set_defaults(
    partial_namespaces: list[dict[str, Any]],
    all_options: Optional[list[CovmodelConfigOption]] = None,
) -> Options:
    """Merge the partial namespaces, later ones win, and fill in the defaults.

    >>> options = merge_options_and_set_defaults(
    ...     [{"locale": "de", "txt_metric": "branch"}, {"txt_metric": "mutation"}]
    ... )
    >>> options.locale, options.txt_metric, options.split_packages
    ('de', 'mutation', False)
    """
    if not partial_namespaces:
        raise AssertionError("At least one namespace required")

    if all_options is None:
        all_options = COVMODEL_CONFIG_OPTIONS

    target: dict[str, Any] = {}
    for namespace in partial_namespaces:
        for option in all_options:
            if option.name in namespace:
                # Lists given on the command line replace the ones from the config.
                target.pop(option.name, None)
                _assign_value_to_dict(
                    target, namespace[option.name], option, is_single_value=False
                )

    for option in all_options:
        target.setdefault(option.name, option.default)

    return Options(**target)


COVMODEL_CONFIG_OPTION_GROUPS = [
    {
        "key": "input_options",
        "name": "Input Options",
        "description": (
            "Reports of Cobertura, JaCoCo and PIT are supported. "
            "Several reports are combined into a single coverage tree."
        ),
    },
    {
        "key": "output_options",
        "name": "Output Options",
        "description": "Covmodel prints a text report by default.",
    },
]


# Style guide for option descriptions:
# - Prefer complete sentences.
# - Phrase first sentence as a command:
#   “Print report”, not “Prints report”.

COVMODEL_CONFIG_OPTIONS = [
    CovmodelConfigOption(
        "verbose",
        ["-v", "--verbose"],
        help="Print progress messages. Please include this output in bug reports.",
        action="store_true",
    ),
    CovmodelConfigOption(
        "no_color",
        ["--no-color"],
        help=(
            "Turn off colored logging."
            " Is also set if environment variable NO_COLOR is present."
            " Ignored if --force-color is used."
        ),
        action="store_true",
    ),
    CovmodelConfigOption(
        "force_color",
        ["--force-color"],
        help=(
            "Force colored logging, this is the default for a terminal."
            " Is also set if environment variable FORCE_COLOR is present."
            " Has precedence over --no-color."
        ),
        action="store_true",
    ),
    CovmodelConfigOption(
        "root",
        ["-r", "--root"],
        help=(
            "The directory searched for covmodel.toml and pyproject.toml. "
            "Defaults to '{default!s}', the current directory."
        ),
        default=".",
        type=relative_path,
    ),
    CovmodelConfigOption(
        "config",
        ["--config"],
        config=False,
        help=(
            "Load that TOML configuration file. "
            "Defaults to covmodel.toml or the [tool.covmodel] section "
            "of pyproject.toml in the --root directory."
        ),
        type=relative_path,
    ),
    CovmodelConfigOption(
        "fail_under_line",
        ["--fail-under-line"],
        type=check_percentage,
        metavar="MIN",
        help=(
            "Exit with a status of 2 "
            "if the total line coverage is less than MIN. "
            "Can be ORed with exit status of '--fail-under-branch' "
            "and '--fail-under-mutation' option."
        ),
        default=0.0,
    ),
    CovmodelConfigOption(
        "fail_under_branch",
        ["--fail-under-branch"],
        type=check_percentage,
        metavar="MIN",
        help=(
            "Exit with a status of 4 "
            "if the total branch coverage is less than MIN. "
            "Can be ORed with exit status of '--fail-under-line' "
            "and '--fail-under-mutation' option."
        ),
        default=0.0,
    ),
    CovmodelConfigOption(
        "fail_under_mutation",
        ["--fail-under-mutation"],
        type=check_percentage,
        metavar="MIN",
        help=(
            "Exit with a status of 8 "
            "if the ratio of killed mutations is less than MIN. "
            "Can be ORed with exit status of '--fail-under-line' "
            "and '--fail-under-branch' option."
        ),
        default=0.0,
    ),
    CovmodelConfigOption(
        "input_format",
        ["--format"],
        config="format",
        group="input_options",
        help=(
            "The format of the reports. "
            "Default is '{default!s}', detecting the format of every file "
            "from its root element."
        ),
        choices=("auto", *formats.READERS),
        default="auto",
    ),
    CovmodelConfigOption(
        "split_packages",
        ["--split-packages"],
        group="input_options",
        help=(
            "Split dotted package names like 'edu.hm.hafner' "
            "into a hierarchy of nested packages."
        ),
        action="store_true",
    ),
    CovmodelConfigOption(
        "output",
        ["-o", "--output"],
        group="output_options",
        help=(
            "Print output to this filename. Defaults to stdout. "
            "Individual output formats can override this."
        ),
        type=OutputOrDefault,
        default=None,
    ),
    CovmodelConfigOption(
        "locale",
        ["--locale"],
        group="output_options",
        help=(
            "The locale used to format percentages, e.g. 'de_DE' "
            "prints a decimal comma. Default is '{default!s}'."
        ),
        default="en",
    ),
    *formats.get_options(),
    CovmodelConfigOption(
        "reports",
        config="report",
        positional=True,
        nargs="*",
        help="The coverage or mutation reports to read.",
        type=check_input_file,
    ),
]


def config_entries_from_dict(
    config: dict[str, Any],
    filename: str,
) -> Iterable[ConfigEntry]:
    r"""
    Generate config entries from a dictionary

    Yields: ConfigEntry

    >>> cfg = {
    ...     'report': ['cobertura.xml', 'jacoco.xml'],
    ...     'locale': '',
    ...     'split-packages': True,
    ... }
    >>> for entry in config_entries_from_dict(cfg, 'covmodel.toml'):
    ...     print(entry)
    covmodel.toml: report = cobertura.xml
    covmodel.toml: report = jacoco.xml
    covmodel.toml: locale = # empty
    covmodel.toml: split-packages = True
    """

    for key, value in config.items():
        if isinstance(value, list):
            for inner_value in value:
                yield ConfigEntry(key, inner_value, filename=filename)
        else:
            yield ConfigEntry(key, value, filename=filename)


@dataclass
class ConfigEntry:
    """A "key = value" config file entry."""

    key: str
    """The key. There might be other entries with the same key."""

    value: Any
    """The value as read from the TOML file."""

    filename: Optional[str] = None
    """Path of the config file, for error messages."""

    def __str__(self) -> str:
        filename = self.filename or "<config>"
        value = self.value if self.value != "" else "# empty"
        return f"{filename}: {self.key} = {value}"

    @property
    def value_as_bool(self) -> bool:
        r"""
        The value converted to a boolean.

        >>> ConfigEntry("k", True).value_as_bool
        True

        >>> ConfigEntry("k", "no").value_as_bool
        False

        >>> ConfigEntry("k", "foo").value_as_bool
        Traceback (most recent call last):
        ValueError: <config>: k: boolean option must be true/false or "yes"/"no"
        """
        if isinstance(self.value, bool):
            return self.value
        if self.value == "yes":
            return True
        if self.value == "no":
            return False
        raise self.error('boolean option must be true/false or "yes"/"no"')

    def error(self, pattern: str, *args: Any, **kwargs: Any) -> ValueError:
        r"""
        Format but NOT RAISE a ValueError.

        >>> entry = ConfigEntry('locale', 42, filename='covmodel.toml')
        >>> raise entry.error("expected text but got {value!r}")
        Traceback (most recent call last):
        ValueError: covmodel.toml: locale: expected text but got 42
        """
        filename = self.filename or "<config>"
        kwargs.update(key=self.key, value=self.value)
        message = pattern.format(*args, **kwargs)
        return ValueError(": ".join([filename, self.key, message]))
