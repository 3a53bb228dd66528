"""Basic package tests for Towerforge."""

import logging


def test_package_imports():
    """Test that the package can be imported."""
    import towerforge
    assert towerforge.__version__ == "0.1.0"


def test_core_imports():
    """Test that core subpackage can be imported."""
    import towerforge.core


def test_generation_imports():
    """Test that generation subpackage can be imported."""
    import towerforge.generation
    import towerforge.generation.wfc


def test_logging_config_imports():
    """Test that logging_config can be imported."""
    from towerforge.logging_config import setup_logging, get_logger


def test_logging_setup(temp_data_dir):
    """Test that logging can be set up."""
    from towerforge.logging_config import setup_logging

    log_path = setup_logging(temp_data_dir)
    assert log_path.exists()
    assert log_path.name == "towerforge.log"


def test_get_logger():
    """Test logger creation."""
    from towerforge.logging_config import get_logger

    logger = get_logger("test_module")
    assert logger.name == "towerforge.test_module"

    # Already prefixed should stay as-is
    logger2 = get_logger("towerforge.something")
    assert logger2.name == "towerforge.something"


def test_contradiction_logged_as_warning(caplog):
    from towerforge.logging_config import get_logger, log_contradiction

    logger = get_logger("test_module")
    with caplog.at_level(logging.WARNING, logger="towerforge"):
        log_contradiction(logger, 3, "propagation", (1, 0, 1), "no compatible tile")

    assert "STEP 00003 | CONTRADICTION | propagation | (1, 0, 1)" in caplog.text


def test_run_writes_to_log_file(temp_data_dir):
    from towerforge.generation import generate_tower
    from towerforge.logging_config import setup_logging

    log_path = setup_logging(temp_data_dir)
    generate_tower(height=3, seed=1)
    for handler in logging.getLogger("towerforge").handlers:
        handler.flush()

    text = log_path.read_text(encoding="utf-8")
    assert "RUN | START" in text
    assert "COLLAPSE" in text


def test_logging_setup_replaces_handlers(temp_data_dir):
    from towerforge.logging_config import setup_logging

    setup_logging(temp_data_dir / "first")
    log_path = setup_logging(temp_data_dir / "second")

    handlers = logging.getLogger("towerforge").handlers
    assert len(handlers) == 2
    assert any(getattr(h, "baseFilename", None) == str(log_path.absolute()) for h in handlers)
