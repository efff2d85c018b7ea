import pytest

from richtext_engine.document import BlockDocument
from richtext_engine.runtime import telemetry


def test_env_helpers_read_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RICHTEXT_ENGINE_DEBOUNCE_MS", "120")
    monkeypatch.setenv("RICHTEXT_ENGINE_LOG_JSON", "yes")
    monkeypatch.setenv("RICHTEXT_ENGINE_MAX_HISTORY", "lots")

    assert telemetry.env_int("DEBOUNCE_MS", 300) == 120
    assert telemetry.env_int("MAX_HISTORY", 100) == 100
    assert telemetry.env_flag("LOG_JSON", False) is True
    assert telemetry.env_flag("MISSING", True) is True


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")


def test_quiet_preset_still_runs_spans_and_events() -> None:
    telemetry.configure(preset="quiet")
    try:
        with telemetry.span("tests::span", component=True, metadata={"k": 1}) as handle:
            handle.add_metadata("extra", (1, 2))
            telemetry.record_event("tests.event", level="debug", data={"n": 2})
        assert handle.metadata == {"k": "1", "extra": "(1, 2)"}
    finally:
        telemetry.configure()


def test_span_reraises_errors() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("tests::failing"):
            raise KeyError("boom")


def test_describe_document_summarises_blocks() -> None:
    doc = BlockDocument.from_text("a\nb")

    assert telemetry.describe_document(doc) == {"version": 1, "blocks": 2, "segments": 0}
