"""
Tests for configure_logging().

Validates:
    - The three log files and their level routing
    - Repeated calls replace handlers instead of stacking them
    - clear=True truncates existing files
    - Kernel errors and warnings reach the files
"""

import logging
import warnings

import pytest

from pyalgebra import Matrix, invert
from pyalgebra.core.exceptions import NonSquareError, SingularMatrixWarning
from pyalgebra.core.log import (
    ERROR_FILE,
    EVENT_FILE,
    PACKAGE_LOGGER,
    WARNING_FILE,
    configure_logging,
)


def _installed_handlers():
    return [
        h for h in logging.getLogger(PACKAGE_LOGGER).handlers
        if getattr(h, '_pyalgebra_handler', False)
    ]


@pytest.fixture
def log_dir(tmp_path):
    """Configure logging into a temp dir and undo it afterwards."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level = package_logger.level
    directory = configure_logging(tmp_path / "logs", level=logging.DEBUG, clear=True)
    yield directory
    for handler in _installed_handlers():
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(level)


def _read(directory, name):
    return (directory / name).read_text()


class TestFiles:
    """Records are routed to files by level."""

    def test_files_created(self, log_dir):
        for name in (ERROR_FILE, WARNING_FILE, EVENT_FILE):
            assert (log_dir / name).exists()

    def test_error_routing(self, log_dir):
        logging.getLogger("pyalgebra.test").error("hard failure")
        assert "hard failure" in _read(log_dir, ERROR_FILE)
        assert "hard failure" not in _read(log_dir, WARNING_FILE)
        assert "hard failure" in _read(log_dir, EVENT_FILE)

    def test_warning_routing(self, log_dir):
        logging.getLogger("pyalgebra.test").warning("soft failure")
        assert "soft failure" not in _read(log_dir, ERROR_FILE)
        assert "soft failure" in _read(log_dir, WARNING_FILE)

    def test_debug_only_in_events(self, log_dir):
        logging.getLogger("pyalgebra.test").debug("trace")
        assert "trace" in _read(log_dir, EVENT_FILE)
        assert "trace" not in _read(log_dir, WARNING_FILE)

    def test_format_has_level_and_name(self, log_dir):
        logging.getLogger("pyalgebra.test").error("formatted")
        assert "[ERROR] pyalgebra.test: formatted" in _read(log_dir, ERROR_FILE)


class TestReconfigure:
    """configure_logging() is idempotent with respect to handlers."""

    def test_no_duplicate_handlers(self, log_dir):
        configure_logging(log_dir, level=logging.DEBUG)
        assert len(_installed_handlers()) == 3

    def test_clear_truncates(self, log_dir):
        logging.getLogger("pyalgebra.test").error("old entry")
        configure_logging(log_dir, level=logging.DEBUG, clear=True)
        assert "old entry" not in _read(log_dir, ERROR_FILE)

    def test_default_directory(self, log_dir, monkeypatch, tmp_path):
        monkeypatch.setattr("tempfile.gettempdir", lambda: str(tmp_path))
        directory = configure_logging(level=logging.DEBUG)
        assert directory == tmp_path / "pyalgebra"


class TestKernelLogging:
    """Kernel operations log their failures."""

    def test_error_logged_before_raise(self, log_dir):
        with pytest.raises(NonSquareError):
            invert(Matrix(2, 3))
        assert "NonSquareError" in _read(log_dir, ERROR_FILE)

    def test_singular_warning_logged(self, log_dir):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", SingularMatrixWarning)
            invert(Matrix.parse("[1 2;2 4]"))
        assert "singular" in _read(log_dir, WARNING_FILE)
