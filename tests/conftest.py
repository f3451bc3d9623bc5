#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from reprfmt import config, registry
from reprfmt.formatter import Formatter

# Fixtures -------------------------------------------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def default_options():
    """Restore module-wide default options after each test."""
    yield config.get_options()
    config.reset()


@pytest.fixture
def clean_registry():
    """Restore registered representers after the test."""
    saved = dict(registry._REGISTRY)
    yield registry
    registry._REGISTRY.clear()
    registry._REGISTRY.update(saved)


@pytest.fixture
def render():
    """Run a callback against a fresh Formatter and return its output."""

    def _render(callback, **options) -> str:
        fmt = Formatter(**options)
        callback(fmt)
        return fmt.to_string()

    return _render
