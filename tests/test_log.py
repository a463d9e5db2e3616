import logging

from ndtensor import Tensor, configure, get_configuration, setup_logging


def test_package_logger_has_null_handler():
    handlers = logging.getLogger("ndtensor").handlers
    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_interning_and_dispatch_are_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="ndtensor"):
        Tensor.product(Tensor(17, 19), Tensor(19, 23))
    messages = " ".join(record.getMessage() for record in caplog.records)
    assert "Interned shape (17, 19)" in messages
    assert "Contracting (17, 19) with (19, 23) over 1 axes" in messages


def test_configure_swaps_backends():
    previous = get_configuration()
    try:
        configure(use_numba=False, backend="numpy")
        assert get_configuration() == {"use_numba": False, "backend": "numpy"}
        configure(backend="python")
        assert get_configuration() == {"use_numba": False, "backend": "python"}
    finally:
        configure(**previous)
    assert get_configuration() == previous


def test_setup_logging_configures_stdout(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    setup_logging(logging.DEBUG)
    assert len(calls) == 1
    assert calls[0]["level"] == logging.DEBUG
    assert "%(levelname)s" in calls[0]["format"]
    assert isinstance(calls[0]["handlers"][0], logging.StreamHandler)
