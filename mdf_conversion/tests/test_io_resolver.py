from pathlib import Path

import pytest

from mdf_conversion.io_resolver import (
    OutputFolderError,
    collect_directory_inputs,
    make_absolute,
    resolve_output_folder,
)


def test_make_absolute_tolerates_missing_components(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    # Arrange
    monkeypatch.chdir(tmp_path)

    # Act
    path = make_absolute("missing/../also-missing/file.mf4")

    # Assert
    assert path == Path.cwd() / "also-missing" / "file.mf4"


def test_collect_directory_inputs_is_not_recursive(tmp_path: Path) -> None:
    # Arrange
    (tmp_path / "a.mf4").write_bytes(b"")
    (tmp_path / "b.mf4.bak").write_bytes(b"")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.mf4").write_bytes(b"")

    # Act
    inputs = collect_directory_inputs(tmp_path)

    # Assert
    assert inputs == [tmp_path / "a.mf4"]


def test_output_folder_defaults_to_input_folder(tmp_path: Path) -> None:
    assert resolve_output_folder(tmp_path / "a.mf4", None) == tmp_path


def test_output_folder_is_created(tmp_path: Path) -> None:
    # Arrange
    requested = tmp_path / "x" / "y"

    # Act
    folder = resolve_output_folder(tmp_path / "a.mf4", str(requested))

    # Assert
    assert folder == requested
    assert folder.is_dir()


def test_output_folder_creation_failure(tmp_path: Path) -> None:
    # Arrange
    (tmp_path / "blocker").write_bytes(b"")

    # Act / Assert
    with pytest.raises(OutputFolderError):
        resolve_output_folder(tmp_path / "a.mf4", str(tmp_path / "blocker" / "out"))
