"""
Config files are INI files. Keys before the first section header are
top-level option names, keys inside a section are addressed as
``section.key``::

    # mdf2peak_config.ini
    compress = yes
    channels = CAN1, CAN2

    [peak]
    version = 2.1

declares ``compress``, ``channels`` and ``peak.version``.
"""

import configparser
import logging
from pathlib import Path
from typing import Any, Final, Iterator, List, Tuple

from .option_schema import (
    OptionDescriptor,
    OptionKind,
    OptionMap,
    OptionSchema,
    OptionSource,
)

CONFIG_ENCODING: Final = "utf-8"

_TOP_LEVEL_SECTION: Final = "__top_level__"

logger = logging.getLogger(__name__)


class ConfigFileError(ValueError):
    """Raised when a config file cannot be read or holds an invalid value."""


def config_file_path(program_name: str) -> Path:
    """
    Location of the config file of ``program_name``, relative to the current
    working directory.
    """
    return (Path.cwd() / f"{program_name}_config.ini").resolve()


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _convert(
    parser: configparser.ConfigParser, section: str, key: str, option: OptionDescriptor
) -> Any:
    if option.kind is OptionKind.SWITCH:
        return parser.getboolean(section, key)
    if option.kind is OptionKind.INTEGER:
        return parser.getint(section, key)
    raw = parser.get(section, key)
    if option.kind is OptionKind.STRING_LIST:
        return _split_list(raw)
    return raw


def _iter_entries(
    parser: configparser.ConfigParser,
) -> Iterator[Tuple[str, str, str]]:
    for section in parser.sections():
        prefix = "" if section == _TOP_LEVEL_SECTION else f"{section}."
        for key in parser.options(section):
            yield section, key, prefix + key


def read_config_file(path: Path, schema: OptionSchema, option_map: OptionMap) -> int:
    """
    Store every value of ``path`` declared in ``schema`` into ``option_map``.
    Values already given on the command line are kept. Unknown keys are
    ignored.

    Returns
    -------
    int
        The number of values taken from the file.

    Raises
    ------
    ConfigFileError
        If the file is malformed or a value does not match the kind of its
        option.
    """
    parser = configparser.ConfigParser(interpolation=None, default_section="")
    parser.optionxform = str  # type: ignore[assignment,method-assign]

    try:
        with open(path, encoding=CONFIG_ENCODING) as f:
            parser.read_string(f"[{_TOP_LEVEL_SECTION}]\n{f.read()}", source=str(path))
    except (OSError, configparser.Error) as e:
        raise ConfigFileError(f"Could not read '{path}': {e}") from e

    taken = 0
    for section, key, name in _iter_entries(parser):
        if name not in schema:
            logger.debug(f"Ignoring unknown key '{name}' in '{path}'")
            continue
        try:
            value = _convert(parser, section, key, schema[name])
        except ValueError as e:
            msg = f"Invalid value for '{name}' in '{path}': {e}"
            raise ConfigFileError(msg) from e
        if option_map.store(name, value, OptionSource.CONFIG_FILE):
            taken += 1
        else:
            logger.debug(f"Keeping command-line value of '{name}'")
    return taken
