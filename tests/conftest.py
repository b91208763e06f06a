import os
import sys
import pytest

# Ensure project root is on sys.path for imports like `core.*`
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Configure pytest-asyncio
pytest_plugins = ('pytest_asyncio',)

from core.context import ScanContext
from core.document import Document


@pytest.fixture
def make_context():
    """Factory building a ScanContext around an HTML snippet."""
    def _make(html: str, base_url: str = "https://example.com", url: str = None) -> ScanContext:
        return ScanContext(
            domain="example.com",
            url=url or f"{base_url}/",
            base_url=base_url,
            document=Document(html),
            html=html,
        )
    return _make
