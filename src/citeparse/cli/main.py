"""Command-line interface for citeparse.

Provides CLI commands for parsing and labelling citation strings and for
seeding an SQLite gazetteer.
"""

import importlib.metadata
import json
import sys
import time
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("citeparse")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


def _read_input(reference: str | None, input_path: str | None) -> tuple[list[str], bool]:
    """Return the references to process and whether they came from a file."""
    from citeparse.api import read_references
    from citeparse.extract import split_references

    if input_path is not None:
        if reference is not None:
            raise click.UsageError("Give either a REFERENCE argument or --input, not both")
        return read_references(input_path), True
    if reference is None:
        raise click.UsageError("Missing REFERENCE argument or --input FILE")
    return split_references(reference), False


def _build_config(
    gazetteer_db: str | None,
    seeds: tuple[str, ...],
    no_default_seed: bool,
    workers: int | None,
):
    from citeparse.engine import GazetteerConfig, ParserConfig

    gazetteer = GazetteerConfig(
        backend="sqlite" if gazetteer_db else "memory",
        path=Path(gazetteer_db) if gazetteer_db else None,
        seed_files=tuple(Path(s) for s in seeds),
        use_default_seed=not no_default_seed,
    )
    return ParserConfig(gazetteer=gazetteer, max_workers=workers)


@click.group()
@click.version_option(version=__version__, prog_name="citeparse")
def cli() -> None:
    """Rule-driven parsing of free-text bibliographic references.

    Use 'citeparse COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("reference", required=False)
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Text file with one reference per line",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Output JSONL file path (default: pretty JSON on stdout)",
)
@click.option(
    "--gazetteer-db",
    type=click.Path(dir_okay=False),
    help="SQLite gazetteer database (default: in-memory gazetteer)",
)
@click.option(
    "--seed",
    "seeds",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON or TSV seed file imported into the gazetteer (repeatable)",
)
@click.option(
    "--no-default-seed",
    is_flag=True,
    help="Do not import the seed bundled with citeparse",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Thread-pool size for batch parsing",
)
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    help="Append a JSONL audit trail of the run to this file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def parse(
    reference: str | None,
    input_path: str | None,
    output: str | None,
    gazetteer_db: str | None,
    seeds: tuple[str, ...],
    no_default_seed: bool,
    workers: int | None,
    audit_log: str | None,
    verbose: bool,
) -> None:
    """Parse REFERENCE (or every line of --input) into field maps.

    Without --output the result is printed as JSON: one object for a single
    reference, an array otherwise.

    Examples
    --------
        citeparse parse "Perec, Georges. A Void. London: The Harvill Press, 1995."
        citeparse parse -i bibliography.txt -o references.jsonl --workers 4
        citeparse parse -i refs.txt --gazetteer-db terms.db --audit-log run.jsonl
    """
    from citeparse.api import write_jsonl
    from citeparse.audit import AuditLogger, generate_run_id, get_package_version
    from citeparse.models import SCHEMA_VERSION
    from citeparse.parser import Parser
    from citeparse.utils import calculate_string_sha256, reference_id

    audit = None
    start = time.perf_counter()
    try:
        references, from_file = _read_input(reference, input_path)
        config = _build_config(gazetteer_db, seeds, no_default_seed, workers)

        if audit_log:
            audit = AuditLogger(generate_run_id(), Path(audit_log))
            audit.run_started(
                command=sys.argv,
                parameters={
                    "citeparse_version": get_package_version(),
                    "schema_version": SCHEMA_VERSION,
                    "config": config.to_dict(),
                    "input": input_path,
                    "input_digest": calculate_string_sha256("\n".join(references)),
                },
            )
            audit.set_stage("parse")

        if verbose:
            click.echo(f"Parsing {len(references)} references", err=True)

        parser = Parser(config)
        records = parser.parse_batch(references)

        if audit is not None:
            for idx, (text, record) in enumerate(zip(references, records)):
                audit.reference_parsed(reference_id(text), idx, list(record))

        if output:
            count = write_jsonl(records, output)
            if verbose:
                click.echo(f"Writing to: {output}", err=True)
            click.secho(f"✓ Successfully wrote {count} references to {output}", fg="green")
        else:
            payload = (
                records[0].to_dict()
                if len(records) == 1 and not from_file
                else [record.to_dict() for record in records]
            )
            click.echo(json.dumps(payload, indent=2, ensure_ascii=False))

        if audit is not None:
            audit.set_stage(None)
            audit.run_finished("success", time.perf_counter() - start, len(records))

    except click.UsageError:
        raise
    except Exception as e:
        if audit is not None:
            audit.run_finished("failed", time.perf_counter() - start)
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    finally:
        if audit is not None:
            audit.close()


@cli.command()
@click.argument("reference", required=False)
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Text file with one reference per line",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print tagged tokens as JSON instead of TSV",
)
@click.option(
    "--gazetteer-db",
    type=click.Path(dir_okay=False),
    help="SQLite gazetteer database (default: in-memory gazetteer)",
)
@click.option(
    "--seed",
    "seeds",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON or TSV seed file imported into the gazetteer (repeatable)",
)
def label(
    reference: str | None,
    input_path: str | None,
    as_json: bool,
    gazetteer_db: str | None,
    seeds: tuple[str, ...],
) -> None:
    """Label every token of REFERENCE (or of every line of --input).

    TSV output prints one ``token<TAB>label`` line per token and a blank
    line between references.

    Examples
    --------
        citeparse label "Doe, J. (2001). Title. Journal of Things, 42(3), 12-34."
        citeparse label -i bibliography.txt --json
    """
    from citeparse.parser import Parser

    try:
        references, _ = _read_input(reference, input_path)
        parser = Parser(_build_config(gazetteer_db, seeds, False, None))
        labelled = parser.label("\n".join(references))

        if as_json:
            payload = [[tagged.to_dict() for tagged in tokens] for tokens in labelled]
            click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
            return

        for idx, tokens in enumerate(labelled):
            if idx:
                click.echo("")
            for tagged in tokens:
                click.echo(f"{tagged.token}\t{tagged.label}")

    except click.UsageError:
        raise
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@cli.group()
def gazetteer() -> None:
    """Manage SQLite gazetteer databases."""


@gazetteer.command("import")
@click.argument("database", type=click.Path(dir_okay=False))
@click.argument("seed_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def import_seeds(database: str, seed_files: tuple[str, ...]) -> None:
    """Import SEED_FILES (JSON or TSV) into the SQLite DATABASE.

    JSON seeds map category names to term lists; TSV seeds carry one
    ``term<TAB>category[,category]`` entry per line. Categories are
    place, name, publisher and journal.

    Examples
    --------
        citeparse gazetteer import terms.db places.json journals.tsv
    """
    from citeparse.gazetteer import SqliteGazetteer, iter_seed_entries

    try:
        store = SqliteGazetteer(Path(database))
        try:
            total = 0
            for seed in seed_files:
                count = store.import_entries(iter_seed_entries(Path(seed)))
                click.echo(f"{seed}: {count} terms", err=True)
                total += count
        finally:
            store.close()

        click.secho(f"✓ Imported {total} terms into {database}", fg="green")

    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
