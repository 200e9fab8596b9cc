from typing import IO, Final, Optional

import click

from .common_options import CommonOptions

BAR_WIDTH: Final = 80


def render_progress_bar(current: int, total: int, width: int = BAR_WIDTH) -> str:
    """
    Render one progress line, e.g. ``\\r=====>      3 / 8``. The bar always
    spans ``width`` columns; a completed bar has no ``>`` tip and ends the
    line.
    """
    fill = int(current / total * width)
    if current == total:
        bar = "=" * width
    else:
        bar = "=" * max(fill - 1, 0) + ">"
    line = f"\r{bar.ljust(width)} {current} / {total}"
    if current == total:
        line += "\n"
    return line


class ProgressReporter:
    """
    Draws the progress of the file being converted on the current terminal
    line. Silent in non-interactive mode.
    """

    def __init__(
        self, common_options: CommonOptions, file: Optional[IO[str]] = None
    ) -> None:
        self.common_options = common_options
        self.file = file

    def update_progress(self, current: int, total: int) -> None:
        if self.common_options.non_interactive:
            return
        click.echo(render_progress_bar(current, total), file=self.file, nl=False)
