"""Configures pytest further: opt-out of slow tests, opt-in to extreme ones, shared keys."""
import pytest

from bigrsa import rsa

# marker -> (command line option, skip when the option is set)
SKIP_MARKERS = {
    "slow": ("--skip-slow", True),
    "extreme": ("--run-extreme", False),
}


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip 512-bit and larger runs")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run 1024/2048-bit generation tests")


def pytest_collection_modifyitems(config, items):
    skips = {
        marker: pytest.mark.skip(reason=f"{marker} test: toggled by {option}")
        for marker, (option, skip_when_set) in SKIP_MARKERS.items()
        if config.getoption(option) == skip_when_set
    }
    for item in items:
        for marker, skip in skips.items():
            if marker in item.keywords:
                item.add_marker(skip)


@pytest.fixture(scope="session")
def small_pair() -> rsa.KeyPair:
    """One 64-bit key pair for the whole session."""
    return rsa.generate_key_pair(64)
