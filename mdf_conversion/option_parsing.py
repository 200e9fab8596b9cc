import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

import click
from click.core import ParameterSource

from .option_schema import (
    OptionDescriptor,
    OptionKind,
    OptionMap,
    OptionSchemaBuilder,
    OptionSource,
)

logger = logging.getLogger(__name__)

_POSITIONAL_PARAM = "positional_tokens"
_END_OF_OPTIONS = "--"

_CLICK_TYPES = {
    OptionKind.STRING: click.STRING,
    OptionKind.INTEGER: click.INT,
}


@dataclass
class CommandLineResult:
    """
    What the command-line pass produced besides the stored option values.
    """

    unrecognized: List[str] = field(default_factory=list)
    given_arguments: int = 0


def param_name(option: OptionDescriptor) -> str:
    """
    Python identifier click stores the value of ``option`` under.
    """
    return "opt_" + re.sub(r"\W", "_", option.name)


def to_click_option(option: OptionDescriptor) -> click.Option:
    decls = [param_name(option), *option.flags]
    if option.kind is OptionKind.SWITCH:
        return click.Option(decls, is_flag=True, default=bool(option.default))
    if option.kind is OptionKind.STRING_LIST:
        default = tuple(option.default) if option.default else None
        return click.Option(decls, type=click.STRING, multiple=True, default=default)
    return click.Option(decls, type=_CLICK_TYPES[option.kind], default=option.default)


def build_command(
    program_name: str, options: Sequence[OptionDescriptor]
) -> click.Command:
    """
    Translate the union schema into a click command that keeps unknown
    tokens instead of rejecting them. Positional tokens, unknown options
    included, are collected in order by a single unbounded argument.
    """
    params: List[click.Parameter] = [to_click_option(o) for o in options]
    params.append(click.Argument([_POSITIONAL_PARAM], nargs=-1))
    return click.Command(
        program_name,
        params=params,
        context_settings={
            "ignore_unknown_options": True,
            "allow_extra_args": True,
            "help_option_names": [],
        },
        add_help_option=False,
    )


def _looks_like_option(token: str) -> bool:
    return token.startswith("-") and len(token) > 1


def _normalize(option: OptionDescriptor, value: Any) -> Any:
    if option.kind is OptionKind.STRING_LIST:
        return list(value)
    return value


def parse_command_line(
    program_name: str,
    builder: OptionSchemaBuilder,
    args: Sequence[str],
    option_map: OptionMap,
) -> CommandLineResult:
    """
    Parse ``args`` against every known option and store the values, explicit
    and defaulted, into ``option_map``.

    Click errors (``click.UsageError`` and subclasses) propagate to the
    caller.
    """
    options = builder.all_options()
    command = build_command(program_name, options)
    result = CommandLineResult(given_arguments=len(args))

    # Everything after a literal "--" is an input file, even if it starts
    # with "-".
    args = list(args)
    literal: List[str] = []
    if _END_OF_OPTIONS in args:
        split = args.index(_END_OF_OPTIONS)
        args, literal = args[:split], args[split + 1 :]

    with command.make_context(program_name, args) as ctx:
        params: Dict[str, Any] = dict(ctx.params)
        sources = {name: ctx.get_parameter_source(name) for name in params}
        leftovers: Tuple[str, ...] = params.pop(_POSITIONAL_PARAM, ())

    positional: List[str] = []
    for token in leftovers:
        if _looks_like_option(token):
            result.unrecognized.append(token)
        else:
            positional.append(token)
    positional.extend(literal)

    for option in options:
        name = param_name(option)
        value = params.get(name)
        source = (
            OptionSource.COMMANDLINE
            if sources.get(name) is ParameterSource.COMMANDLINE
            else OptionSource.DEFAULT
        )
        if option.name == builder.positional and positional:
            # Positional tokens extend explicit values and replace defaults.
            explicit = value if source is OptionSource.COMMANDLINE else None
            value = tuple(explicit or ()) + tuple(positional)
            source = OptionSource.COMMANDLINE
        if value is None or value == ():
            continue
        option_map.store(option.name, _normalize(option, value), source)

    logger.debug(
        "Parsed %d command-line argument(s), %d unrecognized",
        result.given_arguments,
        len(result.unrecognized),
    )
    return result


def is_missing_argument(error: click.UsageError) -> bool:
    """
    Whether ``error`` reports an option given without its value.
    """
    return isinstance(error, click.BadOptionUsage) and "requires" in error.message
