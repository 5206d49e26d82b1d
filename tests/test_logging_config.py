import logging

from kiosk.logging_config import configure_logging


def test_records_go_to_log_file(tmp_path):
    log_path = tmp_path / "logs" / "kiosk.log"
    configure_logging(str(log_path), level="DEBUG")
    logging.getLogger("kiosk.cart").debug("cart_add item=americano quantity=1")
    for handler in logging.getLogger("kiosk").handlers:
        handler.flush()
    assert "cart_add item=americano" in log_path.read_text(encoding="utf-8")


def test_reconfigure_replaces_handlers(tmp_path):
    configure_logging(str(tmp_path / "a.log"))
    configure_logging(str(tmp_path / "b.log"))
    assert len(logging.getLogger("kiosk").handlers) == 1


def test_unknown_level_falls_back_to_info(tmp_path):
    log_path = tmp_path / "kiosk.log"
    configure_logging(str(log_path), level="VERBOSE")
    logger = logging.getLogger("kiosk")
    assert logger.level == logging.INFO
    for handler in logger.handlers:
        handler.flush()
    assert "log_level_invalid value='VERBOSE'" in log_path.read_text(encoding="utf-8")
