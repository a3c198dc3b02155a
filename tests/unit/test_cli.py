"""Tests for CLI module."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from citeparse.cli.main import cli

PEREC = "Perec, Georges. A Void. London: The Harvill Press, 1995. p.108."
FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


@pytest.fixture
def references_file() -> Path:
    """Path to the sample bibliography."""
    return FIXTURES_DIR / "references.txt"


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "citeparse" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "parse" in result.output
    assert "label" in result.output
    assert "gazetteer" in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_parse_help(runner: CliRunner) -> None:
    """Test parse command help."""
    result = runner.invoke(cli, ["parse", "--help"])

    assert result.exit_code == 0
    assert "Parse REFERENCE" in result.output


@pytest.mark.unit
def test_parse_single_reference(runner: CliRunner) -> None:
    """Test a single argument prints one JSON object."""
    result = runner.invoke(cli, ["parse", PEREC])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["title"] == ["A Void"]
    assert payload["author"] == [{"family": "Perec", "given": "Georges"}]
    assert payload["type"] == "book"


@pytest.mark.unit
def test_parse_multiline_argument(runner: CliRunner) -> None:
    """Test a multi-line argument prints a JSON array."""
    result = runner.invoke(cli, ["parse", f"{PEREC}\nplain text"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [item["title"] for item in payload] == [["A Void"], ["plain text"]]


@pytest.mark.unit
def test_parse_input_file_prints_array(runner: CliRunner, references_file: Path) -> None:
    """Test --input always prints an array."""
    result = runner.invoke(cli, ["parse", "-i", str(references_file), "--workers", "2"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert len(payload) == 5
    assert payload[3]["collection-title"] == ["Lecture Notes in Computer Science"]


@pytest.mark.unit
def test_parse_output_file(runner: CliRunner, references_file: Path, tmp_path: Path) -> None:
    """Test -o writes JSONL and reports the count."""
    output = tmp_path / "out" / "refs.jsonl"

    result = runner.invoke(cli, ["parse", "-i", str(references_file), "-o", str(output)])

    assert result.exit_code == 0
    assert "Successfully wrote 5 references" in result.output
    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 5
    assert json.loads(lines[0])["location"] == ["London"]


@pytest.mark.unit
def test_parse_verbose(runner: CliRunner) -> None:
    """Test --verbose reports the reference count."""
    result = runner.invoke(cli, ["parse", PEREC, "-v"])

    assert result.exit_code == 0
    assert "Parsing 1 references" in result.output


@pytest.mark.unit
def test_parse_audit_log(runner: CliRunner, tmp_path: Path) -> None:
    """Test --audit-log records the run and one event per reference."""
    log_path = tmp_path / "audit.jsonl"

    result = runner.invoke(cli, ["parse", PEREC, "--audit-log", str(log_path)])

    assert result.exit_code == 0
    events = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [event["event"] for event in events] == [
        "run_started",
        "reference_parsed",
        "run_finished",
    ]
    assert events[0]["data"]["parameters"]["input_digest"].startswith("sha256:")
    assert events[1]["stage"] == "parse"
    assert events[1]["rid"].startswith("ref:")
    assert "title" in events[1]["data"]["fields"]
    assert events[2]["data"]["status"] == "success"
    assert events[2]["data"]["references_processed"] == 1


@pytest.mark.unit
def test_parse_requires_input(runner: CliRunner) -> None:
    """Test parse without a reference or --input is a usage error."""
    result = runner.invoke(cli, ["parse"])

    assert result.exit_code == 2
    assert "Missing REFERENCE" in result.output


@pytest.mark.unit
def test_parse_rejects_both_inputs(runner: CliRunner, references_file: Path) -> None:
    """Test giving both a reference and --input is a usage error."""
    result = runner.invoke(cli, ["parse", PEREC, "-i", str(references_file)])

    assert result.exit_code == 2
    assert "not both" in result.output


@pytest.mark.unit
def test_parse_rejects_zero_workers(runner: CliRunner) -> None:
    """Test --workers must be positive."""
    result = runner.invoke(cli, ["parse", PEREC, "--workers", "0"])

    assert result.exit_code == 2


@pytest.mark.unit
def test_parse_bad_seed_fails(runner: CliRunner, tmp_path: Path) -> None:
    """Test an invalid seed file exits with status 1 and logs the failure."""
    seed = tmp_path / "bad.tsv"
    seed.write_text("Paris\tcity\n", encoding="utf-8")
    log_path = tmp_path / "audit.jsonl"

    result = runner.invoke(
        cli, ["parse", PEREC, "--seed", str(seed), "--audit-log", str(log_path)]
    )

    assert result.exit_code == 1
    assert "Error: Unknown category" in result.output
    events = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert events[-1]["event"] == "run_finished"
    assert events[-1]["data"]["status"] == "failed"
    assert events[-1]["level"] == "ERROR"


@pytest.mark.unit
def test_parse_with_sqlite_gazetteer(runner: CliRunner, tmp_path: Path) -> None:
    """Test --gazetteer-db seeds and consults an SQLite gazetteer."""
    seed = tmp_path / "journals.json"
    seed.write_text(json.dumps({"journal": ["Nature"]}), encoding="utf-8")

    result = runner.invoke(
        cli,
        [
            "parse",
            "Doe, J. Nature. 2020.",
            "--gazetteer-db",
            str(tmp_path / "terms.db"),
            "--seed",
            str(seed),
            "--no-default-seed",
        ],
    )

    assert result.exit_code == 0
    assert json.loads(result.output)["type"] == "article"


# ---------------------------------------------------------------------------
# label command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_label_tsv(runner: CliRunner) -> None:
    """Test TSV output has one token per line."""
    result = runner.invoke(cli, ["label", PEREC])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "Perec,\tauthor"
    assert lines[-1] == "p.108.\tpages"
    assert len(lines) == len(PEREC.split())


@pytest.mark.unit
def test_label_separates_references(runner: CliRunner) -> None:
    """Test a blank line separates references in TSV output."""
    result = runner.invoke(cli, ["label", f"{PEREC}\nplain text"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[len(PEREC.split())] == ""
    assert len(lines) == len(PEREC.split()) + 3


@pytest.mark.unit
def test_label_json(runner: CliRunner, references_file: Path) -> None:
    """Test --json prints token lists per reference."""
    result = runner.invoke(cli, ["label", "-i", str(references_file), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert len(payload) == 5
    assert payload[0][0] == {"token": "Perec,", "label": "author"}


# ---------------------------------------------------------------------------
# gazetteer import command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_gazetteer_import(runner: CliRunner, tmp_path: Path) -> None:
    """Test seeds are imported into an SQLite database."""
    from citeparse.gazetteer import Category, SqliteGazetteer

    json_seed = tmp_path / "seed.json"
    json_seed.write_text(json.dumps({"journal": ["Nature", "Cell"]}), encoding="utf-8")
    tsv_seed = tmp_path / "seed.tsv"
    tsv_seed.write_text("Paris\tplace\n", encoding="utf-8")
    database = tmp_path / "terms.db"

    result = runner.invoke(cli, ["gazetteer", "import", str(database), str(json_seed), str(tsv_seed)])

    assert result.exit_code == 0
    assert "Imported 3 terms" in result.output
    store = SqliteGazetteer(database)
    try:
        assert store.lookup("nature") == frozenset({Category.JOURNAL})
        assert store.lookup("Paris") == frozenset({Category.PLACE})
    finally:
        store.close()


@pytest.mark.unit
def test_gazetteer_import_bad_seed(runner: CliRunner, tmp_path: Path) -> None:
    """Test a malformed seed exits with status 1."""
    seed = tmp_path / "bad.json"
    seed.write_text("{not json", encoding="utf-8")

    result = runner.invoke(cli, ["gazetteer", "import", str(tmp_path / "terms.db"), str(seed)])

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


@pytest.mark.unit
def test_gazetteer_import_requires_seed(runner: CliRunner, tmp_path: Path) -> None:
    """Test at least one seed file is required."""
    result = runner.invoke(cli, ["gazetteer", "import", str(tmp_path / "terms.db")])

    assert result.exit_code == 2
