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
from argparse import ArgumentTypeError
import logging
import os
from typing import Any, Callable, Optional, Union

LOGGER = logging.getLogger("covmodel")


def check_percentage(value: str) -> float:
    r"""
    Check that the percentage is within a reasonable range and if so return it.

    >>> check_percentage("80%")
    80.0
    >>> check_percentage("180")
    Traceback (most recent call last):
      ...
    argparse.ArgumentTypeError: 180 not in range [0.0, 100.0]
    """

    # a trailing percent sign is allowed, useful for config files
    if value.endswith("%"):
        value = value[:-1]

    try:
        percentage = float(value)
        if not (0.0 <= percentage <= 100.0):
            raise ValueError()
    except ValueError:
        raise ArgumentTypeError(f"{value} not in range [0.0, 100.0]") from None
    return percentage


def check_input_file(value: str, basedir: Optional[str] = None) -> str:
    r"""
    Check that the report file is present. Return the full path.
    """
    if basedir is None:
        basedir = os.getcwd()

    if not os.path.isabs(value):
        value = os.path.join(basedir, value)
    value = os.path.normpath(value)

    if not os.path.isfile(value):
        raise ArgumentTypeError(f"Should be a file that already exists: {value!r}")

    return os.path.abspath(value)


def relative_path(value: str, basedir: Optional[str] = None) -> str:
    r"""
    Make a path relative to the current directory, a relative value is
    resolved against the base directory first.
    """
    if not value:
        raise ArgumentTypeError("Should not be set to an empty string.")

    if basedir is None:
        basedir = os.getcwd()

    if not os.path.isabs(value):
        value = os.path.join(basedir, value)
    return os.path.relpath(os.path.normpath(value), os.getcwd())


class OutputOrDefault:
    """An output path that may be empty.

    - ``None``: the option is not set
    - ``OutputOrDefault(None)`` or ``OutputOrDefault("-")``: use stdout
    - ``OutputOrDefault(path)``: use that path
    """

    def __init__(self, value: Optional[str], basedir: Optional[str] = None) -> None:
        self.value = value
        if value in (None, "-"):
            self.abspath = "-"
        else:
            value = os.path.normpath(str(value).replace("\\", os.sep))
            if not os.path.isabs(value):
                value = os.path.join(os.getcwd() if basedir is None else basedir, value)
            if os.path.isdir(value):
                raise ArgumentTypeError(
                    f"Output file {self.value!r} is an existing directory."
                )
            self.abspath = value

    @property
    def is_stdout(self) -> bool:
        """Return True if the output goes to stdout."""
        return self.abspath == "-"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value!r})"

    @classmethod
    def choose(
        cls,
        choices: list[Optional[OutputOrDefault]],
        default: Optional[OutputOrDefault] = None,
    ) -> Optional[OutputOrDefault]:
        """Select the first choice that contains a value.

        >>> OutputOrDefault.choose([None, OutputOrDefault("x.txt")])
        OutputOrDefault('x.txt')
        >>> OutputOrDefault.choose(
        ...     [None, OutputOrDefault(None)],
        ...     default=OutputOrDefault("default.txt"))
        OutputOrDefault('default.txt')
        """
        for choice in choices:
            if choice is None:
                continue
            if not isinstance(choice, OutputOrDefault):
                raise TypeError(f"expected OutputOrDefault instance, got: {choice}")
            if choice.value is not None:
                return choice
        return default


class Options:
    """Wrapper for holding the configuration."""

    def __init__(self, **kwargs: Any) -> None:
        self.__dict__.update(kwargs)

    def get(self, name: str) -> Any:
        """Function to get an option by name."""
        return self.__dict__.get(name)


class CovmodelConfigOption:
    # pylint: disable=too-many-instance-attributes
    # pylint: disable=too-few-public-methods
    # pylint: disable=redefined-builtin
    r"""
    A single setting of covmodel, usable from the command line and from
    configuration files.

    Arguments:
        name (str):
            Destination (options object field),
            must be valid Python identifier.
        flags (list of str, optional):
            Any command line flags.

    Keyword Arguments:
        action (str, optional):
            One of ``store`` (default), ``store_const``, ``store_true``,
            ``store_false`` or ``append``, like in *argparse*.
        choices (list, optional):
            Value must be one of these after conversion.
        config (str or bool, optional):
            Configuration file key.
            If absent, the first ``--flag`` is used without the leading dashes.
            If explicitly set to False,
            the option cannot be set from a config file.
        const (any, optional):
            Assigned by the "store_const" action.
        default (any, optional):
            Default value if the option is not found, defaults to None.
        group (str, optional):
            Name of the option group in COVMODEL_CONFIG_OPTION_GROUPS.
        help (str):
            Help message, named curly-brace placeholders are filled
            in from the option attributes.
        metavar (str, optional):
            Name of the value in help messages.
        nargs (int or '+', '*', '?', optional):
            How often the option may occur.
        positional (bool, optional):
            Whether this is a positional option, defaults to False.
        type (function, optional):
            Check and convert the option value, may throw exceptions.
    """

    def __init__(
        self,
        name: str,
        flags: Optional[list[str]] = None,
        *,
        help: str,
        action: str = "store",
        choices: Optional[Union[tuple[str, ...], list[str]]] = None,
        const: Any = None,
        config: Union[str, bool] = True,
        default: Any = None,
        group: Optional[str] = None,
        metavar: Optional[str] = None,
        nargs: Union[int, str, None] = None,
        positional: bool = False,
        type: Optional[Callable[..., Any]] = None,
    ) -> None:
        if flags is None:
            flags = []

        if flags and positional:
            raise AssertionError("Option cannot have flags and be positional")

        config_keys = _derive_configuration_key(config, flags=flags)

        if not (flags or positional or config_keys):
            raise AssertionError(
                "Option must be named, positional, or config argument."
            )

        if not help:
            raise AssertionError("help required")
        if (flags or positional) and config_keys:
            help += f" Config key(s): {', '.join(config_keys)}."

        # store_true and store_false are mapped to store_const with a
        # boolean constant so that config files can use the same logic.
        if action in ("store_true", "store_false"):
            if const is not None or default is not None:
                raise AssertionError(f"action={action} conflicts with const or default")
            const = action == "store_true"
            default = not const
            action = "store_const"

        if action not in ("store", "store_const", "append"):
            raise AssertionError(f"Unknown action {action!r}")

        self.name = name
        self.flags = flags
        self.action = action
        self.choices = choices
        self.config_keys = config_keys
        self.const = const
        self.default = default
        self.group = group
        self.metavar = metavar
        self.nargs = nargs
        self.positional = positional
        self.type = type
        self.help = help.format(**self.__dict__)

    def __repr__(self) -> str:
        r"""String representation of instance.

        >>> CovmodelConfigOption('foo', ['-f', '--foo'], help="foo text.")
        CovmodelConfigOption('foo', [-f, --foo], ..., help='foo text. Config key(s): foo.', ...)
        """
        flags = ", ".join(self.flags)
        kwargs = ", ".join(
            f"{k}={v!r}"
            for k, v in sorted(self.__dict__.items())
            if k not in ("name", "flags")
        )
        return f"CovmodelConfigOption({self.name!r}, [{flags}], {kwargs})"


def _derive_configuration_key(
    config: Union[str, bool],
    *,
    flags: list[str],
) -> Optional[list[str]]:
    if config is True:
        config_keys = [flag.lstrip("-") for flag in flags if flag.startswith("--")]
        if not config_keys:
            raise AssertionError(f"Could not autogenerate config key from {flags!r}.")
        return config_keys
    if config is False:
        return None
    if isinstance(config, str):
        return [config]

    raise AssertionError(
        f"Sanity check failed, unexpected config entry type {config!r}"
    )
