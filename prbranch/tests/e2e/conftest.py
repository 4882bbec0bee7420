"""Configuration for pytest."""

import shutil
import logging
from pathlib import Path

import pytest

from prbranch.tests.e2e.test_helpers import RepoContext, create_repo_context

logger = logging.getLogger(__name__)

@pytest.fixture
def repo_ctx(tmp_path: Path) -> RepoContext:
    """Fresh repository with a bare origin, on branch 'feature' off 'main'."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    return create_repo_context(str(tmp_path))
