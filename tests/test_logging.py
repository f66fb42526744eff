from __future__ import annotations

import logging

import pytest

from creative_studio import utils


@pytest.mark.parametrize(
    "raw, expected",
    [("debug", logging.DEBUG), (" Warning ", logging.WARNING), ("30", 30), ("verbose", None), ("", None)],
)
def test_resolve_log_level(raw: str, expected) -> None:  # noqa: ANN001
    assert utils.resolve_log_level(raw) == expected


def test_unknown_log_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger("creative_studio")
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    logger = utils.get_logger("logging_test")

    assert logger.name == "creative_studio.logging_test"
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
