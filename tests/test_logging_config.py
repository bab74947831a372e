import json
import logging

from roleta.infrastructure.logging_config import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.makeLogRecord({
        "name": "roleta.test",
        "levelno": logging.INFO,
        "levelname": "INFO",
        "msg": "Lead %s distribuído",
        "args": (7,),
    })
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_message_and_extras():
    output = json.loads(JSONFormatter().format(_record(lead_id=7, corretor_id=3)))

    assert output["message"] == "Lead 7 distribuído"
    assert output["level"] == "INFO"
    assert output["logger"] == "roleta.test"
    assert output["lead_id"] == 7
    assert output["corretor_id"] == 3
    assert "args" not in output


def test_json_formatter_serializes_unknown_types_as_text():
    output = json.loads(JSONFormatter().format(_record(escopo={"dia": object()})))

    assert isinstance(output["escopo"], str)
