import json
import logging

from craft_price_advisor.logging_config import StructuredFormatter, set_trace_id, setup_logging, trace_id_var


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("craft_price_advisor.test", logging.INFO, __file__, 10, "hello %s", ("maker",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extra_fields():
    payload = json.loads(StructuredFormatter().format(make_record(model="gemini-2.5-flash", output_length=42)))

    assert payload["message"] == "hello maker"
    assert payload["severity"] == "INFO"
    assert payload["timestamp"].endswith("Z")
    assert payload["model"] == "gemini-2.5-flash"
    assert payload["output_length"] == 42
    assert "args" not in payload


def test_formatter_includes_trace_id():
    token = trace_id_var.set(None)
    try:
        set_trace_id("abc123")
        payload = json.loads(StructuredFormatter().format(make_record()))
    finally:
        trace_id_var.reset(token)

    assert payload["logging.googleapis.com/trace"] == "abc123"


def test_dev_setup_writes_structured_logs_to_stdout():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(environment="dev", project_id="craft-project")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        assert logging.getLogger("google_genai").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
