import logging

from utils.logger import setup_logger


def test_setup_logger_writes_file_and_console(tmp_path):
    logger = setup_logger("Inventory Test", log_dir=str(tmp_path))

    logger.info("stock loaded")
    for handler in logger.handlers:
        handler.flush()

    log_file = tmp_path / "inventory_test.log"
    assert log_file.exists()
    assert "Inventory Test - INFO - stock loaded" in log_file.read_text()
    assert len(logger.handlers) == 2


def test_setup_logger_does_not_duplicate_handlers(tmp_path):
    setup_logger("inventory_pipeline.test", log_dir=str(tmp_path))
    logger = setup_logger("inventory_pipeline.test", log_dir=str(tmp_path))

    assert len(logger.handlers) == 2
    assert (tmp_path / "inventory_pipeline_test.log").exists()


def test_setup_logger_console_only():
    logger = setup_logger("console_only", log_dir=None, level=logging.DEBUG)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.level == logging.DEBUG
