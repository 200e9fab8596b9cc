import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import pytest

from mdf_conversion import (
    BaseConverter,
    DisplayTimeFormat,
    OptionKind,
    OptionMap,
    OptionSchema,
    ParseOptionStatus,
)


class RecordingConverter(BaseConverter):
    """
    Converter that writes nothing and remembers how it was driven.
    """

    program_name = "mdf2test"

    def __init__(
        self, result: bool = True, config_file: bool = False, steps: int = 0
    ) -> None:
        super().__init__()
        self.result = result
        self.config_file = config_file
        self.steps = steps
        self.calls: List[Tuple[Path, Path]] = []
        self.time_formats: List[DisplayTimeFormat] = []
        self.channel: Optional[str] = None
        self.compression: Optional[int] = None

    def get_version(self) -> str:
        return "0.0.1"

    def uses_config_file(self) -> bool:
        return self.config_file

    def configure_parser(self, schema: OptionSchema) -> None:
        schema.add("channel,c", OptionKind.STRING, "Channel to export.")

    def configure_file_parser(self, schema: OptionSchema) -> None:
        schema.add("channel", OptionKind.STRING, "Channel to export.")
        schema.add("compression", OptionKind.INTEGER, "Compression level.", default=0)

    def parse_options(self, options: OptionMap) -> ParseOptionStatus:
        self.channel = options.get("channel")
        self.compression = options.get("compression")
        return ParseOptionStatus.NO_ERROR

    def convert(self, input_file: Path, output_folder: Path) -> bool:
        assert self.common_options is not None
        self.calls.append((input_file, output_folder))
        self.time_formats.append(self.common_options.display_time_format)
        for step in range(1, self.steps + 1):
            self.report_progress(step, self.steps)
        return self.result


@pytest.fixture
def converter() -> RecordingConverter:
    return RecordingConverter()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return Path.cwd()


@pytest.fixture(autouse=True)
def restore_root_log_level() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
