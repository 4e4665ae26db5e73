import logging

from contact_keeper_api.app.core.logging_config import setup_logging


def test_file_handler_and_single_configuration(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    logfile = tmp_path / "logs" / "api.log"

    setup_logging("debug", str(logfile))
    installed = list(root.handlers)
    setup_logging("info", str(tmp_path / "other.log"))
    try:
        assert root.handlers == installed
        assert root.level == logging.DEBUG
        logging.getLogger("contact_keeper_api.test").info("hello from the api")
        for handler in installed:
            handler.flush()
        assert "hello from the api" in logfile.read_text(encoding="utf-8")
        assert not (tmp_path / "other.log").exists()
    finally:
        for handler in installed:
            handler.close()
