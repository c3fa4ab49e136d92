"""Default marks and CLI fixtures for tests under `tests/functional/`."""

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from stagehand.bootstrap import AppContainer
from stagehand.config import Settings
from stagehand.entrypoints.cli.main import stagehand
from tests.helpers.fakes import FakeDatabaseAdmin, FakeReadinessProbe, FakeReplacer

# pylint: disable=unused-argument, redefined-outer-name

FUNCTIONAL_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "functional"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add default `functional` marks to items in `tests/functional/`."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if FUNCTIONAL_ROOT in path.parents:
            if not any(marker.name == MARKER_NAME for marker in item.iter_markers()):
                item.add_marker(pytest.mark.functional)


# --- CLI fixtures ---


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings whose directories all live under ``tmp_path``."""
    return Settings(
        app_dir=tmp_path / "app",
        initdb_dir=tmp_path / "initdb",
        cache_dir=tmp_path / "cache",
    )


@pytest.fixture
def make_container(settings: Settings) -> Callable[..., AppContainer]:
    """Factory fixture: an `AppContainer` wired to fakes.

    Example:
        container = make_container(probe=FakeReadinessProbe([True]))
    """

    def _make(
        *,
        probe: FakeReadinessProbe | None = None,
        admin: FakeDatabaseAdmin | None = None,
        replacer: FakeReplacer | None = None,
        **overrides,
    ) -> AppContainer:
        checker = probe or FakeReadinessProbe([True])
        db_admin = admin or FakeDatabaseAdmin()
        return AppContainer(
            settings=replace(settings, **overrides),
            readiness_probe_factory=lambda _probe: checker,
            database_admin_factory=lambda: db_admin,
            replacer=replacer or FakeReplacer(),
        )

    return _make


@pytest.fixture
def invoke() -> Callable[..., Result]:
    """Run ``stagehand`` with the flight recorder off and ``obj`` injected."""
    runner = CliRunner()

    def _invoke(args: list[str], container: AppContainer | None = None) -> Result:
        return runner.invoke(stagehand, ["--no-flight-recorder", *args], obj=container)

    return _invoke
