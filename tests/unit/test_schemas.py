"""Tests for schema validation of parsed references and audit events."""

import json
from pathlib import Path

import jsonschema
import pytest
from click.testing import CliRunner

from citeparse import parse_file, write_jsonl
from citeparse.audit import AuditLogger
from citeparse.cli.main import cli

_SCHEMAS_DIR = Path(__file__).parent.parent.parent / "schemas"
_FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture(scope="module")
def reference_schema() -> dict:
    """Load parsed reference JSON schema."""
    with (_SCHEMAS_DIR / "reference.schema.json").open(encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(scope="module")
def event_schema() -> dict:
    """Load log event JSON schema."""
    with (_SCHEMAS_DIR / "log_event.schema.json").open(encoding="utf-8") as f:
        return json.load(f)


@pytest.mark.unit
def test_schemas_are_valid(reference_schema: dict, event_schema: dict) -> None:
    """Test both schemas are valid draft 2020-12 documents."""
    jsonschema.Draft202012Validator.check_schema(reference_schema)
    jsonschema.Draft202012Validator.check_schema(event_schema)


@pytest.mark.unit
def test_written_references_validate(tmp_path: Path, reference_schema: dict) -> None:
    """Test every JSONL line written for the sample bibliography validates."""
    output = tmp_path / "refs.jsonl"
    write_jsonl(parse_file(_FIXTURES_DIR / "references.txt"), output)

    with output.open(encoding="utf-8") as f:
        lines = [json.loads(line) for line in f]

    assert len(lines) == 5
    for line in lines:
        jsonschema.validate(instance=line, schema=reference_schema)


@pytest.mark.unit
def test_schema_rejects_missing_required(reference_schema: dict) -> None:
    """Test a record without pages is invalid."""
    record = {
        "title": ["A Void"],
        "type": "book",
        "location": [""],
        "publisher": [""],
        "date": [""],
    }

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=record, schema=reference_schema)


@pytest.mark.unit
def test_generated_events_validate(tmp_path: Path, event_schema: dict) -> None:
    """Test programmatically generated events validate against schema."""
    log_path = tmp_path / "events.jsonl"
    with AuditLogger(run_id="run-1", log_path=log_path) as audit:
        audit.run_started(["citeparse", "parse"], {"workers": None})
        audit.set_stage("parse")
        audit.reference_parsed("ref:0123456789abcdef", 0, ["title", "type"])
        audit.set_stage(None)
        audit.run_finished("success", 0.25, references_processed=1)

    with log_path.open(encoding="utf-8") as f:
        events = [json.loads(line) for line in f]

    assert [event["event"] for event in events] == [
        "run_started",
        "reference_parsed",
        "run_finished",
    ]
    for event in events:
        jsonschema.validate(instance=event, schema=event_schema)


@pytest.mark.integration
def test_cli_audit_log_validates(tmp_path: Path, event_schema: dict) -> None:
    """Test the audit trail written by the CLI validates."""
    log_path = tmp_path / "audit.jsonl"
    result = CliRunner().invoke(
        cli,
        [
            "parse",
            "-i",
            str(_FIXTURES_DIR / "references.txt"),
            "-o",
            str(tmp_path / "out.jsonl"),
            "--audit-log",
            str(log_path),
        ],
    )

    assert result.exit_code == 0
    with log_path.open(encoding="utf-8") as f:
        events = [json.loads(line) for line in f]

    assert events[0]["event"] == "run_started"
    assert events[-1]["event"] == "run_finished"
    assert sum(1 for event in events if event["event"] == "reference_parsed") == 5
    for event in events:
        jsonschema.validate(instance=event, schema=event_schema)
