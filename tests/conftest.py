import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def sample_path() -> Path:
    from gedcom_codec.utils import mock_file_path

    return mock_file_path("sample.ged")


@pytest.fixture
def sample(sample_path):
    from gedcom_codec.loader import load_file

    return load_file(sample_path)
