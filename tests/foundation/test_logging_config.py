import io
import logging

from sortga.foundation.logging import DEFAULT_FORMAT, configure_sortga_logging


def test_configure_attaches_single_handler_when_unconfigured(monkeypatch):
    monkeypatch.setattr(logging.getLogger(), "handlers", [])
    logger = logging.getLogger("sortga")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", True)
    monkeypatch.setattr(logger, "level", logging.NOTSET)

    configure_sortga_logging(level=logging.DEBUG)
    configure_sortga_logging(level=logging.DEBUG)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_configure_leaves_user_logging_alone(monkeypatch):
    monkeypatch.setattr(logging.getLogger(), "handlers", [logging.NullHandler()])
    logger = logging.getLogger("sortga")
    monkeypatch.setattr(logger, "handlers", [])

    assert configure_sortga_logging() is None

    assert logger.handlers == []


def test_configure_formats_run_messages_on_the_given_stream(monkeypatch):
    monkeypatch.setattr(logging.getLogger(), "handlers", [])
    logger = logging.getLogger("sortga")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", True)
    monkeypatch.setattr(logger, "level", logging.NOTSET)
    stream = io.StringIO()

    handler = configure_sortga_logging(stream=stream)
    logging.getLogger("sortga.engine.run_loop").info("Sorted individual found at generation %d", 7)

    assert handler is logger.handlers[0]
    assert handler.formatter._fmt == DEFAULT_FORMAT
    assert stream.getvalue() == "[sortga] INFO sortga.engine.run_loop: Sorted individual found at generation 7\n"


def test_configure_accepts_a_custom_format(monkeypatch):
    monkeypatch.setattr(logging.getLogger(), "handlers", [])
    logger = logging.getLogger("sortga")
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", True)
    monkeypatch.setattr(logger, "level", logging.NOTSET)
    stream = io.StringIO()

    configure_sortga_logging(level=logging.WARNING, fmt="%(levelname)s|%(message)s", stream=stream)
    logging.getLogger("sortga.cli").info("hidden")
    logging.getLogger("sortga.cli").warning("shown")

    assert stream.getvalue() == "WARNING|shown\n"
