"""
Unit tests for the structured logging setup.
"""

import json
import logging

import pytest

from storefront_service.app.utils.logging import setup_storefront_logging


@pytest.fixture
def service_logger(tmp_path):
    """Top-level logger with file logging into a temp directory"""
    logger = setup_storefront_logging(
        "storefront_logcheck", enable_file_logging=True, log_dir=str(tmp_path)
    )
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


class TestStorefrontLogging:
    def test_component_error_reaches_error_file(self, service_logger, tmp_path):
        component = setup_storefront_logging("storefront_logcheck.error_handler")

        component.error("Unhandled exception occurred", extra={"path": "/api/cart"})
        _flush(service_logger)

        lines = (tmp_path / "storefront_logcheck_errors.log").read_text().splitlines()
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["logger"] == "storefront_logcheck.error_handler"
        assert entry["level"] == "ERROR"
        assert entry["path"] == "/api/cart"

    def test_component_info_reaches_main_file_only(self, service_logger, tmp_path):
        component = setup_storefront_logging("storefront_logcheck.cart")

        component.info("Cart rebuilt")
        _flush(service_logger)

        assert "Cart rebuilt" in (tmp_path / "storefront_logcheck.log").read_text()
        assert (tmp_path / "storefront_logcheck_errors.log").read_text() == ""

    def test_component_logger_has_no_handlers_of_its_own(self, service_logger):
        component = setup_storefront_logging("storefront_logcheck.orders")

        assert component.handlers == []
        assert component.propagate is True
        assert service_logger.propagate is False

    def test_component_setup_configures_missing_service_logger(self):
        component = setup_storefront_logging("storefront_standalone.kafka")
        service = logging.getLogger("storefront_standalone")
        try:
            assert component.handlers == []
            assert len(service.handlers) == 1
        finally:
            service.handlers.clear()
