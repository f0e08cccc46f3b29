"""
Pytest configuration and fixtures for RevueCrafters API testing
Live checks share one authenticated session and one scenario state per run
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from revue_suite.config import SuiteConfig, configure_logging, get_config
from revue_suite.core.data_factory import DataFactory
from revue_suite.core.scenario import RevueScenario, ScenarioState
from revue_suite.core.session import AuthenticatedSession, SessionBootstrapError, bootstrap_session

SETUP_FAILED_RETURNCODE = 3


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run checks against the deployed RevueCrafters API"
    )
    parser.addoption(
        "--smoke-only",
        action="store_true",
        default=False,
        help="Run only smoke tests"
    )


def live_enabled(config) -> bool:
    return config.getoption("--live") or os.getenv("REVUE_LIVE_TESTS") == "1"


def pytest_configure(config):
    configure_logging(SuiteConfig().log_level)
    if os.getenv("CI"):
        config.option.tb = "short"


def pytest_collection_modifyitems(config, items):
    """Add markers based on location and test names"""
    for item in items:
        if item.path.parent.name == "unit":
            item.add_marker(pytest.mark.unit)
        elif item.path.parent.name == "suites":
            item.add_marker(pytest.mark.live)

        if any(name in item.name.lower() for name in ["scenario", "auth", "create_revue"]):
            item.add_marker(pytest.mark.smoke)
        if any(name in item.name.lower() for name in ["create", "list", "edit", "delete", "scenario"]):
            item.add_marker(pytest.mark.crud)
        item.add_marker(pytest.mark.regression)


def pytest_runtest_setup(item):
    if item.get_closest_marker("live") and not live_enabled(item.config):
        pytest.skip("Live API checks disabled (use --live or REVUE_LIVE_TESTS=1)")

    if item.config.getoption("--smoke-only") and not item.get_closest_marker("smoke"):
        pytest.skip("Skipping non-smoke test")


def pytest_runtest_logstart(nodeid, location):
    """Log test start for better CI visibility"""
    if os.getenv("CI"):
        print(f"\n🧪 Starting: {nodeid}")


def pytest_runtest_logfinish(nodeid, location):
    if os.getenv("CI"):
        print(f"✅ Completed: {nodeid}")


# === LIVE SESSION ===

@pytest.fixture(scope="session")
def suite_config() -> SuiteConfig:
    try:
        return get_config()
    except ValueError as e:
        pytest.exit(f"❌ {e}", returncode=SETUP_FAILED_RETURNCODE)


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def authenticated_session(suite_config) -> AsyncGenerator[AuthenticatedSession, None]:
    """One authenticated client for the whole run; closed once at the end"""
    print(f"\n🚀 Authenticating against {suite_config.api_base_url}...")
    try:
        session = await bootstrap_session(suite_config)
    except SessionBootstrapError as e:
        pytest.exit(f"❌ {e}", returncode=SETUP_FAILED_RETURNCODE)
    print(f"✅ Authenticated as {session.credentials.email}")

    yield session

    await session.close()
    print("\n🧹 Session closed")


@pytest.fixture(scope="session")
def scenario_state() -> ScenarioState:
    return ScenarioState()


@pytest.fixture(scope="session")
def data_factory(suite_config) -> DataFactory:
    return DataFactory(suite_config)


@pytest.fixture(scope="session")
def scenario(authenticated_session, scenario_state, data_factory) -> RevueScenario:
    return RevueScenario(authenticated_session.client, scenario_state, data_factory)
