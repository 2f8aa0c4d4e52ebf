from __future__ import annotations

import logging
from pathlib import Path

import pytest

from devwisdom import __version__
from devwisdom.__main__ import build_parser, build_server
from devwisdom.logging_setup import configure_logging


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])

    assert args.no_consultation_log is False
    assert isinstance(args.log_dir, Path)


def test_parser_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_build_server_with_log(tmp_path: Path) -> None:
    server = build_server(tmp_path / "logs")
    try:
        assert server.consultation_log is not None
        assert (tmp_path / "logs" / "consultations.jsonl").exists()
        assert "stoic" in server.provider.list_source_ids()
    finally:
        server.consultation_log.close()


def test_build_server_without_log() -> None:
    assert build_server(None).consultation_log is None


def test_build_server_survives_unusable_log_dir(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="devwisdom"):
        server = build_server(blocker / "logs")

    assert server.consultation_log is None
    assert "Consultation logging disabled" in caplog.text


def test_configure_logging_is_idempotent(tmp_path: Path) -> None:
    log_path = tmp_path / "app" / "devwisdom.log"
    logger = logging.getLogger("devwisdom")
    before = list(logger.handlers)
    try:
        configure_logging(level="info", log_path=log_path)
        configure_logging(level="debug", log_path=log_path)

        ours = [h for h in logger.handlers if h not in before]
        assert len(ours) == 2
        assert logger.level == logging.DEBUG
        assert log_path.parent.is_dir()
    finally:
        for handler in list(logger.handlers):
            if handler not in before:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(logging.NOTSET)
