import enum
import itertools
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set


class OptionSchemaError(ValueError):
    """
    Raised when options are declared inconsistently, e.g. a converter
    reusing a name reserved by the driver.
    """


class OptionKind(enum.Enum):
    SWITCH = "switch"
    STRING = "string"
    INTEGER = "integer"
    STRING_LIST = "string-list"


class OptionScope(enum.Flag):
    COMMAND_LINE = 1
    CONFIG_FILE = 2
    BOTH = 3


class OptionSource(enum.IntEnum):
    """
    Where a value in an :class:`OptionMap` came from. Higher ranks win.
    """

    DEFAULT = 0
    CONFIG_FILE = 1
    COMMANDLINE = 2


@dataclass(frozen=True)
class OptionDescriptor:
    name: str
    kind: OptionKind
    help: str = ""
    short: Optional[str] = None
    default: Any = None
    scope: OptionScope = OptionScope.COMMAND_LINE

    @property
    def flags(self) -> List[str]:
        """
        Command-line spellings of the option, short form first.
        """
        long_flag = f"--{self.name}"
        return [f"-{self.short}", long_flag] if self.short else [long_flag]


class OptionSchema:
    """
    Ordered collection of option descriptors for one scope.

    Options are declared with a ``"long,s"`` spec, e.g. ``"output-directory,O"``
    for ``--output-directory`` and ``-O``, or ``"verbose"`` for a long-only
    option. ``add`` returns the schema so declarations can be chained.
    """

    def __init__(self, scope: OptionScope) -> None:
        self.scope = scope
        self._options: Dict[str, OptionDescriptor] = {}
        self._reserved: Set[str] = set()
        self._reserved_shorts: Set[str] = set()

    def reserve(self, names: Iterable[str], shorts: Iterable[str] = ()) -> None:
        """
        Reject any later declaration using one of ``names`` or ``shorts``.
        """
        self._reserved.update(names)
        self._reserved_shorts.update(shorts)

    def add(
        self,
        spec: str,
        kind: OptionKind,
        help: str = "",
        default: Any = None,
    ) -> "OptionSchema":
        name, _, short = spec.partition(",")
        if not name:
            raise OptionSchemaError(f"Option spec {spec!r} has no long name")
        if short and len(short) != 1:
            raise OptionSchemaError(
                f"Short name of '{name}' must be a single character, got '{short}'"
            )
        if name in self._reserved:
            raise OptionSchemaError(f"Option '{name}' is reserved by the driver")
        if short in self._reserved_shorts:
            raise OptionSchemaError(
                f"Short option '-{short}' is reserved by the driver"
            )
        if name in self._options:
            raise OptionSchemaError(f"Option '{name}' is already declared")
        if short and any(o.short == short for o in self._options.values()):
            raise OptionSchemaError(f"Short option '-{short}' is already declared")
        if kind is OptionKind.SWITCH and default is None:
            default = False

        self._options[name] = OptionDescriptor(
            name=name,
            kind=kind,
            help=help,
            short=short or None,
            default=default,
            scope=self.scope,
        )
        return self

    def __iter__(self) -> Iterator[OptionDescriptor]:
        return iter(self._options.values())

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, name: object) -> bool:
        return name in self._options

    def __getitem__(self, name: str) -> OptionDescriptor:
        return self._options[name]


class OptionSchemaBuilder:
    """
    Holds the command-line and config-file schemas. The driver seeds the
    command-line schema and calls :meth:`reserve_declared` before handing both
    schemas to the converter, so a converter cannot reuse a driver option
    name in either scope.
    """

    def __init__(self, positional: str = "input-files") -> None:
        self.command_line = OptionSchema(OptionScope.COMMAND_LINE)
        self.config_file = OptionSchema(OptionScope.CONFIG_FILE)
        self.positional = positional

    def reserve_declared(self) -> None:
        names = [o.name for o in self.command_line]
        if self.positional not in names:
            names.append(self.positional)
        shorts = [o.short for o in self.command_line if o.short]
        self.command_line.reserve(names, shorts)
        self.config_file.reserve(names, shorts)

    def all_options(self) -> List[OptionDescriptor]:
        """
        Union of both scopes in declaration order, command line first. A name
        declared in both scopes appears once with scope ``BOTH``. Two names
        sharing a short option across the scopes are rejected.
        """
        merged: Dict[str, OptionDescriptor] = {o.name: o for o in self.command_line}
        for option in self.config_file:
            existing = merged.get(option.name)
            if existing is None:
                merged[option.name] = option
                continue
            if existing.kind is not option.kind:
                raise OptionSchemaError(
                    f"Option '{option.name}' is declared as {existing.kind.value} "
                    f"on the command line and {option.kind.value} in the config file"
                )
            merged[option.name] = replace(existing, scope=OptionScope.BOTH)

        owners: Dict[str, str] = {}
        for option in itertools.chain(self.command_line, self.config_file):
            if not option.short:
                continue
            owner = owners.setdefault(option.short, option.name)
            if owner != option.name:
                raise OptionSchemaError(
                    f"Short option '-{option.short}' is declared for both "
                    f"'{owner}' and '{option.name}'"
                )
        return list(merged.values())


@dataclass(frozen=True)
class _StoredValue:
    value: Any
    source: OptionSource


class OptionMap(Mapping[str, Any]):
    """
    Merged option values from every parsing pass.
    """

    def __init__(self) -> None:
        self._values: Dict[str, _StoredValue] = {}

    def store(self, name: str, value: Any, source: OptionSource) -> bool:
        """
        Store ``value`` unless a value from an equal or higher ranked source is
        already present. Returns whether the value was taken.
        """
        existing = self._values.get(name)
        if existing is not None and existing.source >= source:
            return False
        self._values[name] = _StoredValue(value, source)
        return True

    def source(self, name: str) -> OptionSource:
        return self._values[name].source

    def defaulted(self, name: str) -> bool:
        return self._values[name].source is OptionSource.DEFAULT

    def __getitem__(self, name: str) -> Any:
        return self._values[name].value

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
