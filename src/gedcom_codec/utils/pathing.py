# src/gedcom_codec/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union

# <root>/src/gedcom_codec/utils/pathing.py -> parents[3] is <root>
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """Directory holding config/, logs/ and mock_files/."""
    return _PROJECT_ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    """
    Anchor a relative path at the project root; absolute paths pass through.

    Examples:
        resolve_project_path("config/gedcom_codec.yml")
        resolve_project_path("/var/log/gedcom")
    """
    path = Path(relative)
    if path.is_absolute():
        return path
    return project_root() / path


def mock_file_path(filename: Union[str, Path]) -> Path:
    """Path of a GEDCOM fixture in mock_files/."""
    return resolve_project_path(Path("mock_files") / filename)
