"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add gts_validator/ to Python path so `from gtsval.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "gts_validator"))

import pytest

os.environ["GTS_VALIDATOR_DEV_MODE"] = "true"

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR
