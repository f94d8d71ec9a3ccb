"""
Pytest configuration and fixtures for fanlog tests
Provides shared test fixtures and utilities for all test types
"""

import io
import logging
import sys
import tempfile
import shutil
from pathlib import Path
import pytest

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))


# ============================================================================
# ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep user config out of tests and reset process-wide state afterwards"""
    monkeypatch.delenv("FANLOG_CONFIG", raising=False)
    yield

    from fanlog.log import facade as facade_module
    from fanlog.log.attributes import uninstall_global_attributes

    facade_module.shutdown_logging()
    uninstall_global_attributes(force=True)
    channel = logging.getLogger("fanlog.records")
    for handler in list(channel.handlers):
        channel.removeHandler(handler)
        handler.close()


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_dir = tempfile.mkdtemp(prefix="fanlog_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def temp_db_path(temp_dir):
    """Create a temporary database path"""
    db_path = temp_dir / "test.db"
    yield str(db_path)


@pytest.fixture
def temp_log_dir(temp_dir):
    """Create a temporary log directory"""
    log_dir = temp_dir / "logs"
    log_dir.mkdir(exist_ok=True)
    yield log_dir


@pytest.fixture
def temp_config_file(temp_dir, temp_log_dir, temp_db_path):
    """Create a temporary config file pointing at the temp directories"""
    config_path = temp_dir / "test_config.yaml"
    config_content = f"""
logging:
  log_dir: "{temp_log_dir}"
  rotation_size: 2048
  process_name: "fanlog-tests"

database:
  path: "{temp_db_path}"
  timeout: 5.0
  pragmas:
    foreign_keys: "ON"
"""
    config_path.write_text(config_content)
    yield str(config_path)


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================


@pytest.fixture
def make_config(temp_dir, temp_log_dir):
    """Build a Config from logging overrides on top of the temp log dir"""
    from fanlog.core.config import Config

    counter = {"n": 0}

    def _make(**logging_overrides):
        counter["n"] += 1
        lines = ["logging:", f'  log_dir: "{logging_overrides.pop("log_dir", temp_log_dir)}"']
        for key, value in logging_overrides.items():
            if value is None:
                value = "null"
            elif isinstance(value, str):
                value = f'"{value}"'
            lines.append(f"  {key}: {value}")
        config_path = temp_dir / f"config_{counter['n']}.yaml"
        config_path.write_text("\n".join(lines) + "\n")
        return Config(config_path=str(config_path))

    yield _make


@pytest.fixture
def test_config(temp_config_file):
    """Config loaded from the temp config file"""
    from fanlog.core.config import Config

    yield Config(config_path=temp_config_file)


# ============================================================================
# LOG FACADE FIXTURES
# ============================================================================


@pytest.fixture
def console_stream():
    """In-memory console stream"""
    stream = io.StringIO()
    yield stream


@pytest.fixture
def facade(test_config, console_stream):
    """An initialized LogFacade writing to the temp log dir and console_stream"""
    from fanlog.log.facade import LogFacade

    log_facade = LogFacade(test_config, stream=console_stream)
    log_facade.initialize()
    yield log_facade
    log_facade.shutdown()


def read_log_lines(log_dir):
    """All lines of all log files in a directory, oldest file first"""
    lines = []
    for path in sorted(Path(log_dir).glob("log_*")):
        lines.extend(path.read_text(encoding="utf-8").splitlines())
    return lines


@pytest.fixture
def log_lines():
    """Expose read_log_lines to tests"""
    return read_log_lines


# ============================================================================
# STORAGE FIXTURES
# ============================================================================


@pytest.fixture
def helper():
    """A fresh, unconfigured SQLiteHelper"""
    from fanlog.storage.sqlite_helper import SQLiteHelper

    sqlite_helper = SQLiteHelper(timeout=5.0)
    yield sqlite_helper
    sqlite_helper.disconnect()


@pytest.fixture
def connected_helper(helper, temp_db_path):
    """A SQLiteHelper connected to a temp database"""
    helper.set_path(temp_db_path)
    helper.connect()
    yield helper


# ============================================================================
# TEST MARKERS
# ============================================================================


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test component interactions"
    )
    config.addinivalue_line("markers", "slow: Tests that take a long time to run")
