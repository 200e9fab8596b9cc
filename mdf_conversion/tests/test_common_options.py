import pytest

from mdf_conversion.common_options import (
    CommonOptions,
    DisplayTimeFormat,
    ParseOptionStatus,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("u", DisplayTimeFormat.UTC),
        ("universal", DisplayTimeFormat.UTC),
        ("p", DisplayTimeFormat.PC_LOCAL_TIME),
        ("l", DisplayTimeFormat.LOGGER_LOCAL_TIME),
        ("U", DisplayTimeFormat.LOGGER_LOCAL_TIME),
        ("", DisplayTimeFormat.LOGGER_LOCAL_TIME),
    ],
)
def test_time_format_from_first_character(
    value: str, expected: DisplayTimeFormat
) -> None:
    assert DisplayTimeFormat.from_option(value) is expected


def test_common_option_defaults() -> None:
    options = CommonOptions()
    assert options.non_interactive is False
    assert options.display_time_format is DisplayTimeFormat.LOGGER_LOCAL_TIME


def test_status_flags_accumulate() -> None:
    # Act
    status = ParseOptionStatus.NO_ERROR
    status |= ParseOptionStatus.DISPLAY_VERSION
    status |= ParseOptionStatus.NO_INPUT_FILES

    # Assert
    assert ParseOptionStatus.DISPLAY_VERSION in status
    assert ParseOptionStatus.NO_INPUT_FILES in status
    assert ParseOptionStatus.DISPLAY_HELP not in status
    assert ParseOptionStatus.UNRECOGNIZED_OPTION not in status
