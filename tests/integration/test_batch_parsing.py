"""Integration tests for end-to-end batch parsing.

Runs a whole bibliography through the file API, the thread pool, an
SQLite gazetteer, and JSONL export.
"""

import json
from pathlib import Path

import pytest

from citeparse import GazetteerConfig, Parser, ParserConfig, parse_file, write_jsonl
from citeparse.gazetteer import Category, SqliteGazetteer

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.mark.integration
def test_bibliography_to_jsonl(tmp_path: Path) -> None:
    """Test parsing a bibliography file and exporting it."""
    refs = parse_file(FIXTURES_DIR / "references.txt", config=ParserConfig(max_workers=3))
    output = tmp_path / "refs.jsonl"

    count = write_jsonl(refs, output)

    assert count == 5
    with output.open(encoding="utf-8") as f:
        records = [json.loads(line) for line in f]

    perec, derrida, doe, complex_ref, plain = records
    assert perec["publisher"] == ["The Harvill Press"]
    assert derrida["date-circa"] == "true"
    assert doe["issue"] == ["3"]
    assert complex_ref["doi"] == ["doi:10.1000/test"]
    assert plain["date"] == [""]
    for record in records:
        assert {"title", "type", "location", "publisher", "date", "pages"} <= set(record)


@pytest.mark.integration
def test_batch_matches_sequential_parse() -> None:
    """Test thread-pool parsing is deterministic and order-preserving."""
    lines = (FIXTURES_DIR / "references.txt").read_text(encoding="utf-8").splitlines()
    refs = [line for line in lines if line.strip()] * 20
    parser = Parser(ParserConfig(max_workers=8))

    assert parser.parse_batch(refs) == parser.parse(refs)


@pytest.mark.integration
def test_sqlite_gazetteer_shared_across_workers(tmp_path: Path) -> None:
    """Test one SQLite gazetteer serves a multi-threaded batch."""
    database = tmp_path / "terms.db"
    store = SqliteGazetteer(database)
    store.import_terms(Category.JOURNAL, ["Nature"])
    store.close()

    config = ParserConfig(
        gazetteer=GazetteerConfig(backend="sqlite", path=database, use_default_seed=False),
        max_workers=4,
    )
    parser = Parser(config)
    refs = ["Doe, J. Nature. 2020.", "Perec, Georges. A Void. London: The Harvill Press, 1995."] * 10

    results = parser.parse_batch(refs)

    assert [ref["type"] for ref in results] == ["article", "book"] * 10


@pytest.mark.integration
def test_normalization_hook_over_batch() -> None:
    """Test hooks run for every record of a batch."""

    def strip_trailing_dots(fields):
        fields["title"] = [title.rstrip(".") for title in fields["title"]]
        fields["pages"] = [pages.replace("-", "–") for pages in fields["pages"]]

    parser = Parser(ParserConfig(hooks=[strip_trailing_dots], max_workers=2))

    results = parser.parse_batch(["Doe, J. (2001). Title. Journal of Things, 42(3), 12-34."] * 3)

    assert [ref["pages"] for ref in results] == [["12–34"]] * 3
