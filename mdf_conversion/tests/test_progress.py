import pytest

from mdf_conversion.common_options import CommonOptions
from mdf_conversion.progress import BAR_WIDTH, ProgressReporter, render_progress_bar


@pytest.mark.parametrize(
    "current, total, bar",
    [
        (0, 4, ">" + " " * 79),
        (1, 4, "=" * 19 + ">" + " " * 60),
        (2, 4, "=" * 39 + ">" + " " * 40),
        (1, 3, "=" * 25 + ">" + " " * 54),
    ],
)
def test_render_incomplete(current: int, total: int, bar: str) -> None:
    # Act
    line = render_progress_bar(current, total)

    # Assert
    assert line == f"\r{bar} {current} / {total}"


def test_render_complete() -> None:
    assert render_progress_bar(4, 4) == "\r" + "=" * BAR_WIDTH + " 4 / 4\n"


@pytest.mark.parametrize("total", [1, 7, 80, 1000])
def test_only_the_final_render_ends_the_line(total: int) -> None:
    # Act
    lines = [render_progress_bar(current, total) for current in range(total + 1)]

    # Assert
    assert all(not line.endswith("\n") for line in lines[:-1])
    assert lines[-1].endswith("\n")
    assert all(line.startswith("\r") for line in lines)
    assert {line.index(f" {i} / {total}") for i, line in enumerate(lines)} == {
        BAR_WIDTH + 1
    }


def test_reporter_writes_to_stdout(capsys: pytest.CaptureFixture) -> None:
    # Arrange
    reporter = ProgressReporter(CommonOptions())

    # Act
    reporter.update_progress(1, 2)
    reporter.update_progress(2, 2)

    # Assert
    out = capsys.readouterr().out
    assert out == render_progress_bar(1, 2) + render_progress_bar(2, 2)


def test_reporter_is_silent_when_non_interactive(
    capsys: pytest.CaptureFixture,
) -> None:
    # Arrange
    reporter = ProgressReporter(CommonOptions(non_interactive=True))

    # Act
    reporter.update_progress(1, 2)
    reporter.update_progress(2, 2)

    # Assert
    assert capsys.readouterr().out == ""
