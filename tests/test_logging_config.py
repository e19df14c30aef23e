import logging

from svgtextbox_toolkit.logging_config import setup_logging


def test_setup_logging_from_config(tmp_path, monkeypatch):
    monkeypatch.setenv("SVGTEXTBOX_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("SVGTEXTBOX_DEBUG_MODULES", raising=False)

    setup_logging()

    assert (tmp_path / "logs").is_dir()
    package_logger = logging.getLogger("svgtextbox_toolkit")
    assert package_logger.level == logging.DEBUG
    assert {type(h).__name__ for h in package_logger.handlers} == {"StreamHandler", "RotatingFileHandler"}


def test_debug_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SVGTEXTBOX_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("SVGTEXTBOX_DEBUG_MODULES", "demo.one, demo.two")

    setup_logging()

    for name in ("demo.one", "demo.two"):
        logger = logging.getLogger(name)
        assert logger.level == logging.DEBUG
        assert any(h.level <= logging.DEBUG for h in logger.handlers)
