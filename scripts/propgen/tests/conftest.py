"""
pytest configuration for property generator tests.

Adds the scripts/ directory to sys.path so that
'from propgen.engine.xxx import ...' works without installing the package.
"""

import sys
from pathlib import Path

import pytest

# Ensure scripts/ is on the path (propgen package lives at scripts/propgen/)
scripts_dir = Path(__file__).parent.parent.parent
if str(scripts_dir) not in sys.path:
    sys.path.insert(0, str(scripts_dir))

from propgen.engine.models import PropertyRecord  # noqa: E402


@pytest.fixture
def make_record():
    """Build a PropertyRecord from keyword fields; record name defaults to Name."""

    def _make(record_name: str | None = None, **fields) -> PropertyRecord:
        return PropertyRecord(record_name or fields.get("Name", "Unnamed"), fields)

    return _make
