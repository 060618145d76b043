"""
Shared test fixtures and utilities for the actionrunner test suite.
"""

import pytest

from actionrunner.core.platform import Platform


@pytest.fixture
def posix_platform():
    """POSIX platform with a fixed home directory."""
    return Platform.posix(home="/home/dev")


@pytest.fixture
def windows_platform():
    """Windows platform with a fixed home directory, usable on any host."""
    return Platform.windows(home="C:\\Users\\dev")


@pytest.fixture
def long_classpath():
    """Classpath whose joined length exceeds the POSIX threshold."""
    return [f"/repo/lib/artifact-{i:05d}/artifact-{i:05d}-1.0.0.jar" for i in range(800)]
