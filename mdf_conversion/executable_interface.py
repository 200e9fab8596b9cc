import logging
from importlib import metadata
from pathlib import Path
from typing import Final, List, Optional, Sequence

import click

from ._version import __version__
from .common_options import CommonOptions, DisplayTimeFormat, ParseOptionStatus
from .config_file import ConfigFileError, config_file_path, read_config_file
from .converters.base_converter import BaseConverter
from .io_resolver import (
    OutputFolderError,
    collect_directory_inputs,
    make_absolute,
    resolve_output_folder,
)
from .logs import DEFAULT_VERBOSITY, configure_logging, set_verbosity
from .option_parsing import is_missing_argument, parse_command_line
from .option_schema import OptionKind, OptionMap, OptionSchemaBuilder, OptionSchemaError
from .progress import ProgressReporter

logger = logging.getLogger(__name__)

MDF_LIBRARY: Final = "asammdf"

_HELP_PREAMBLE: Final = (
    'Short options start with a single "-", while long options start with "--".',
    'A value enclosed in "[]" signifies it is optional.',
    "Some options only exists in the long form, while others exist in both forms.",
    "Not all options require arguments (arg).",
)

_METAVARS: Final = {
    OptionKind.STRING: "TEXT",
    OptionKind.INTEGER: "INTEGER",
    OptionKind.STRING_LIST: "TEXT ...",
}


def mdf_library_version() -> str:
    try:
        return metadata.version(MDF_LIBRARY)
    except metadata.PackageNotFoundError:
        return "not installed"


class PassThroughCommand(click.Command):
    """
    Command handing its raw arguments to the callback as ``args``, without
    interpreting any of them.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        ctx.params["args"] = tuple(args)
        return []


class ExecutableInterface:
    """
    Command-line front end shared by the conversion tools. Parses the
    command line and the optional config file, applies the common options,
    then hands every input file to the converter.

    Parameters
    ----------
    converter : BaseConverter
        The conversion tool driven by this interface.

    Examples
    --------
    A tool module typically ends with::

        if __name__ == "__main__":
            ExecutableInterface(PeakConverter()).run()
    """

    def __init__(self, converter: BaseConverter) -> None:
        self.converter = converter
        self._reset()

    def _reset(self) -> None:
        self.common_options = CommonOptions()
        self.progress = ProgressReporter(self.common_options)
        self.schemas = OptionSchemaBuilder()
        self.option_map = OptionMap()
        self.input_files: List[Path] = []
        self.unrecognized_options: List[str] = []

    def main(self, args: Sequence[str]) -> int:
        """
        Run the tool on ``args`` (without the program name).

        Returns
        -------
        int
            ``0`` on success, ``1`` for unrecognized options, ``2`` if some
            input files did not exist and ``-1`` on any fatal error.
        """
        configure_logging()
        self._reset()
        program_name = self.converter.program_name

        self.converter.register_progress_callback(self.update_progress)

        # Driver options first, so converters cannot shadow them.
        self.configure_parser()
        self.converter.configure_parser(self.schemas.command_line)
        self.converter.configure_file_parser(self.schemas.config_file)

        try:
            result = parse_command_line(
                program_name, self.schemas, args, self.option_map
            )
        except click.UsageError as e:
            if is_missing_argument(e):
                option_name = getattr(e, "option_name", "")
                msg = f"Missing argument for option '{option_name}'"
                logger.error(msg)
                click.echo(msg)
                return -1
            logger.critical(
                f"Error occurred during initial input argument parsing: {e}"
            )
            raise
        except OptionSchemaError as e:
            logger.debug(f"Inconsistent option declarations: {e}")
            raise
        except Exception as e:
            logger.critical(
                f"Error occurred during initial input argument parsing: {e}"
            )
            return -1

        no_config_file_found = False
        if self.converter.uses_config_file():
            config_path = config_file_path(program_name)
            if config_path.exists():
                try:
                    read_config_file(
                        config_path, self.schemas.config_file, self.option_map
                    )
                except ConfigFileError as e:
                    logger.critical(f"Error during parsing of configuration file: {e}")
                    return -1
            else:
                # Reported once the verbosity is known.
                no_config_file_found = True

        status = ParseOptionStatus.NO_ERROR
        if not args:
            status |= ParseOptionStatus.DISPLAY_HELP

        self.unrecognized_options = list(result.unrecognized)

        try:
            status |= self.parse_options(self.option_map)
        except Exception as e:
            logger.critical(
                f"Error occurred during general input argument parsing: {e}"
            )
            return -1

        self.converter.set_common_options(self.common_options)
        try:
            status |= self.converter.parse_options(self.option_map)
        except Exception as e:
            logger.critical(
                f"Error occurred during specialized input argument parsing: {e}"
            )
            return -1

        if self.unrecognized_options:
            status |= ParseOptionStatus.UNRECOGNIZED_OPTION

        if no_config_file_found:
            logger.info("No configuration file found, skipping.")

        if ParseOptionStatus.UNRECOGNIZED_OPTION in status:
            self.display_unrecognized_options(self.unrecognized_options)
            return 1
        if ParseOptionStatus.DISPLAY_HELP in status:
            self.display_help()
            return 0
        if ParseOptionStatus.DISPLAY_VERSION in status:
            self.display_version()
            return 0
        if ParseOptionStatus.NO_INPUT_FILES in status:
            return 0

        return self.convert_inputs()

    def configure_parser(self) -> None:
        schema = self.schemas.command_line
        schema.add("help,h", OptionKind.SWITCH, "Print this help message.")
        schema.add("version,v", OptionKind.SWITCH, "Print version information.")
        schema.add(
            "verbose",
            OptionKind.INTEGER,
            "Set verbosity of output (0-5).",
            default=DEFAULT_VERBOSITY,
        )
        schema.add(
            "input-directory,I",
            OptionKind.STRING,
            "Input directory to convert files from.",
        )
        schema.add(
            "output-directory,O",
            OptionKind.STRING,
            "Output directory to place converted files into.",
        )
        schema.add(
            "non-interactive",
            OptionKind.SWITCH,
            "Run in non-interactive mode, with no progress output.",
        )
        schema.add(
            "timezone,t",
            OptionKind.STRING,
            "Display times in UTC (u), logger localtime (l, default) or PC local "
            "time (p).",
            default=DisplayTimeFormat.LOGGER_LOCAL_TIME.value,
        )
        schema.add(
            f"{self.schemas.positional},i",
            OptionKind.STRING_LIST,
            "List of files to convert, ignored if input-directory is specified. "
            "All unknown arguments will be interpreted as input files.",
        )
        self.schemas.reserve_declared()

    def parse_options(self, options: OptionMap) -> ParseOptionStatus:
        """
        Apply the driver's own options: help/version requests, verbosity,
        common options and the list of input files.
        """
        self.input_files = []

        if options["help"]:
            return ParseOptionStatus.DISPLAY_HELP
        if options["version"]:
            return ParseOptionStatus.DISPLAY_VERSION

        verbose = options["verbose"]
        if set_verbosity(verbose) is None:
            self.unrecognized_options.append(f"--verbose {verbose}")
            return ParseOptionStatus.UNRECOGNIZED_OPTION

        self.common_options.non_interactive = options["non-interactive"]
        self.common_options.display_time_format = DisplayTimeFormat.from_option(
            options.get("timezone", DisplayTimeFormat.LOGGER_LOCAL_TIME.value)
        )

        # An input directory replaces any files given on the command line.
        if "input-directory" in options:
            input_directory = make_absolute(options["input-directory"])
            if not input_directory.exists():
                self._report_input_directory("does not exist", input_directory)
            elif not input_directory.is_dir():
                self._report_input_directory("is not a directory", input_directory)
            else:
                self.input_files = collect_directory_inputs(input_directory)
                logger.debug(
                    f"Found {len(self.input_files)} file(s) in {input_directory}"
                )
        elif self.schemas.positional in options:
            self.input_files = [
                make_absolute(f) for f in options[self.schemas.positional]
            ]
        else:
            return ParseOptionStatus.NO_INPUT_FILES

        return ParseOptionStatus.NO_ERROR

    def _report_input_directory(self, problem: str, input_directory: Path) -> None:
        msg = f'Input directory {problem}: "{input_directory}"'
        logger.error(msg)
        click.echo(msg)

    def convert_inputs(self) -> int:
        """
        Convert every input file in order. Missing files are skipped and
        reported through the return code; any other failure stops the run.
        """
        return_code = 0
        output_directory: Optional[str] = self.option_map.get("output-directory")

        for input_file in self.input_files:
            input_file = make_absolute(input_file)

            if not input_file.exists():
                logger.error(f'File does not exist: "{input_file}"')
                return_code = 2
                continue

            try:
                output_folder = resolve_output_folder(input_file, output_directory)
            except OutputFolderError as e:
                logger.critical(f"{e}")
                return -1

            logger.info(f'Converting "{input_file}" into "{output_folder}"')
            if not self.converter.convert(input_file, output_folder):
                logger.critical(f'Error during conversion of "{input_file}".')
                return -1

        return return_code

    def update_progress(self, current: int, total: int) -> None:
        self.progress.update_progress(current, total)

    def format_help(self) -> str:
        program_name = self.converter.program_name
        formatter = click.HelpFormatter()
        formatter.write("Usage:\n")
        formatter.write(
            f"{program_name} [-short-option value --long-option value] "
            "[-i] file_a [file_b ...]:\n"
        )
        formatter.write_paragraph()
        for line in _HELP_PREAMBLE:
            formatter.write(f"{line}\n")
        formatter.write_paragraph()

        rows = []
        for option in self.schemas.command_line:
            label = ", ".join(option.flags)
            metavar = _METAVARS.get(option.kind)
            if metavar:
                label = f"{label} {metavar}"
            help_text = option.help
            if option.kind is not OptionKind.SWITCH and option.default is not None:
                help_text = f"{help_text}  [default: {option.default}]"
            rows.append((label, help_text))

        with formatter.section("Allowed options"):
            formatter.write_dl(rows)
        return formatter.getvalue()

    def display_help(self) -> None:
        click.echo(self.format_help(), nl=False)

    def display_unrecognized_options(self, unrecognized_options: List[str]) -> None:
        if len(unrecognized_options) == 1:
            click.echo("Unrecognized option:")
        else:
            click.echo("Unrecognized options:")
        for option in unrecognized_options:
            click.echo(option)
        click.echo()
        self.display_help()

    def display_version(self) -> None:
        program_name = self.converter.program_name
        click.echo(f"Version of {program_name}: {self.converter.get_version()}")
        click.echo(f"Version of converter base: {__version__}")
        click.echo(f"Version of MDF library: {mdf_library_version()}")

    def command(self) -> click.Command:
        """
        The tool as a click command whose exit code is the one returned by
        :meth:`main`. Arguments are passed through untouched, ``--`` included.
        """

        @click.command(
            self.converter.program_name,
            cls=PassThroughCommand,
            context_settings={"help_option_names": []},
        )
        @click.pass_context
        def main(ctx: click.Context, args: Sequence[str]) -> None:
            ctx.exit(self.main(args))

        return main

    def run(self, args: Optional[Sequence[str]] = None) -> None:
        """
        Console entry point; exits the process with the tool's return code.
        """
        self.command().main(args=args, prog_name=self.converter.program_name)
