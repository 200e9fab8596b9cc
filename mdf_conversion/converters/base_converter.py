import abc
from pathlib import Path
from typing import Callable, ClassVar, Optional

from ..common_options import CommonOptions, ParseOptionStatus
from ..option_schema import OptionMap, OptionSchema

ProgressCallback = Callable[[int, int], None]


class BaseConverter(abc.ABC):
    """
    Abstract base class defining the interface a conversion tool plugs into
    :class:`~mdf_conversion.executable_interface.ExecutableInterface`.

    Subclasses set :attr:`program_name` and implement :meth:`get_version` and
    :meth:`convert`. The remaining hooks default to a converter without
    options of its own.
    """

    program_name: ClassVar[str] = ""
    """Short name used in the help text and to locate the config file."""

    def __init__(self) -> None:
        if not self.program_name:
            raise TypeError(f"{type(self).__name__} must set program_name")
        self.common_options: Optional[CommonOptions] = None
        self._progress_callback: Optional[ProgressCallback] = None

    @abc.abstractmethod
    def get_version(self) -> str:
        """
        Version string of the converter.
        """

    def uses_config_file(self) -> bool:
        """
        Whether ``<program_name>_config.ini`` is read from the working
        directory.
        """
        return False

    def configure_parser(self, schema: OptionSchema) -> None:
        """
        Add converter specific command-line options to ``schema``.
        """

    def configure_file_parser(self, schema: OptionSchema) -> None:
        """
        Add options that may be set in the config file to ``schema``.
        """

    def set_common_options(self, common_options: CommonOptions) -> None:
        self.common_options = common_options

    def parse_options(self, options: OptionMap) -> ParseOptionStatus:
        """
        Read converter specific values from the merged ``options``.
        """
        return ParseOptionStatus.NO_ERROR

    def register_progress_callback(self, callback: ProgressCallback) -> None:
        self._progress_callback = callback

    def report_progress(self, current: int, total: int) -> None:
        """
        Forward progress on the current file to the registered callback.
        """
        if self._progress_callback is not None:
            self._progress_callback(current, total)

    @abc.abstractmethod
    def convert(self, input_file: Path, output_folder: Path) -> bool:
        """
        Convert ``input_file`` into one or more files under ``output_folder``.

        Returns
        -------
        bool
            ``False`` if the conversion failed, which aborts the run.
        """
