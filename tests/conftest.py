"""
Configuration file for pytest.

This file adds the project's root directory to the Python path so that
pytest can find the 'docpipe' package without needing to install it, and
provides fixtures shared by the test modules.
"""

import sys
from pathlib import Path

import pytest

# Add the project root directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from docpipe.core.context import ExecutionContext  # noqa: E402
from docpipe.core.metadata import Metadata  # noqa: E402


@pytest.fixture
def context():
    """Provides a top-level execution context with a little global metadata."""
    return ExecutionContext(
        settings={"output_path": "out"},
        global_metadata=Metadata({"site": "test"}),
        pipeline_name="test",
    )
