from __future__ import annotations

import json
import logging

from familyGraph.utils.log_json import JsonLogger


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def _logger(name: str) -> tuple[logging.Logger, _ListHandler]:
    logger = logging.getLogger(name)
    handler = _ListHandler()
    logger.handlers = [handler]
    return logger, handler


def test_emits_one_json_object_per_event() -> None:
    logger, handler = _logger("tests.familygraph.json")
    log = JsonLogger("pipeline", logger=logger)
    entry = log.info("graph.parsed", path="family.ttl", triples=17, skipped=None)
    assert entry is not None
    payload = json.loads(handler.messages[-1])
    assert payload["event"] == "graph.parsed"
    assert payload["service"] == "pipeline"
    assert payload["level"] == "INFO"
    assert payload["details"] == {"path": "family.ttl", "triples": 17}


def test_respects_level() -> None:
    logger, handler = _logger("tests.familygraph.quiet")
    log = JsonLogger("pipeline", logger=logger, level=logging.WARNING)
    assert log.info("graph.parsed") is None
    assert handler.messages == []
    log.error("graph.failed", reason="boom")
    assert json.loads(handler.messages[-1])["level"] == "ERROR"


def test_truncates_large_details() -> None:
    logger, handler = _logger("tests.familygraph.big")
    log = JsonLogger("pipeline", logger=logger, max_details_bytes=32)
    log.warning("graph.big", blob="x" * 200)
    details = json.loads(handler.messages[-1])["details"]
    assert details["note"] == "truncated"
