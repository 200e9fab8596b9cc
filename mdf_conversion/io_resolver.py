import logging
from pathlib import Path
from typing import Final, List, Optional, Union

logger = logging.getLogger(__name__)

MDF_EXTENSION: Final = ".mf4"

PathLike = Union[str, Path]


def weakly_canonical(path: PathLike) -> Path:
    """
    Absolute, normalized form of ``path``. Components that do not exist are
    allowed; existing ones have their symlinks resolved.
    """
    return Path(path).resolve(strict=False)


def make_absolute(path: PathLike) -> Path:
    path = Path(path)
    return path if path.is_absolute() else weakly_canonical(path)


def collect_directory_inputs(directory: Path) -> List[Path]:
    """
    Regular files directly inside ``directory`` whose extension is exactly
    ``.mf4``, in directory iteration order.
    """
    return [
        entry
        for entry in directory.iterdir()
        if entry.is_file() and entry.suffix == MDF_EXTENSION
    ]


class OutputFolderError(OSError):
    """Raised when the requested output folder cannot be created."""


def resolve_output_folder(input_file: Path, output_directory: Optional[str]) -> Path:
    """
    Folder the converted files of ``input_file`` are written to: the
    requested output directory, created when missing, or the folder of the
    input file.

    Raises
    ------
    OutputFolderError
        If the output directory cannot be created.
    """
    if output_directory is None:
        return input_file.parent

    output_folder = make_absolute(output_directory)
    if not output_folder.exists():
        logger.info(f'Output folder does not exist. Creating "{output_folder}"')
        try:
            output_folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputFolderError(
                f'Could not create output folder "{output_folder}": {e}'
            ) from e
    return output_folder
