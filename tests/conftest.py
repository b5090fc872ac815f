"""Global test configuration for native-properties tests."""

from pathlib import Path

import pytest

from native_properties.configuration import ENVIRONMENT_VARIABLES
from native_properties.logging import ENVIRONMENT_VARIABLE

FIXTURES_DIR = Path(__file__).parent / "fixtures"
CPUINFO_DIR = FIXTURES_DIR / "cpuinfo"
SYSCTL_DIR = FIXTURES_DIR / "sysctl"


@pytest.fixture(autouse=True)
def isolated_probe_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Stop GP_* variables of the developer's shell leaking into tests.

    Logging uses the test profile, which propagates to the root logger so
    that caplog keeps working after a CLI command configured logging.
    """
    for variable in ENVIRONMENT_VARIABLES.values():
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.setenv(ENVIRONMENT_VARIABLE, "test")


@pytest.fixture
def cpuinfo_fixture():
    """Return the path of a cpuinfo fixture by name."""

    def _path(name: str) -> Path:
        path = CPUINFO_DIR / f"{name}.cpuinfo"
        assert path.exists(), f"Missing fixture {path}"
        return path

    return _path


@pytest.fixture
def sysctl_fixture():
    """Return the contents of a Darwin sysctl fixture by name."""

    def _read(name: str) -> str:
        return (SYSCTL_DIR / f"{name}.sysctl").read_text(encoding="utf-8").strip()

    return _read
