# tests/conftest.py
from pathlib import Path
import textwrap

import pytest

from VerifierComponents.Analyser import verify_lines


REPO_ROOT = Path(__file__).resolve().parents[1]


def source_lines(text: str) -> list[str]:
    """Dedent a triple-quoted program and drop the leading newline."""
    return textwrap.dedent(text).lstrip("\n").splitlines()


@pytest.fixture
def verify():
    """Run the whole two-pass analysis on a triple-quoted program."""
    def _verify(text: str):
        return verify_lines(source_lines(text))
    return _verify


@pytest.fixture(scope="session")
def examples_dir() -> Path:
    return REPO_ROOT / "examples"
