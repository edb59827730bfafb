from __future__ import annotations

"""Top-level CLI for enriching family graphs."""

import json
import logging
from pathlib import Path

import click
import yaml

from familyGraph import __version__
from familyGraph.config import PipelineConfig, load_config
from familyGraph.errors import (
    AgeValueError,
    FormatError,
    GraphIOError,
    SeedFormatError,
    UnknownPersonError,
    UnresolvedPrefixError,
)
from familyGraph.kg.facts import FamilySeed
from familyGraph.pipeline import build_codec, resolve_seed, run_pipeline

EXIT_READ_ERROR = 3
EXIT_WRITE_ERROR = 4
EXIT_FORMAT_ERROR = 5
EXIT_AGE_ERROR = 6
EXIT_PREFIX_ERROR = 7


class PipelineFailure(click.ClickException):
    """Click error carrying a per-failure-kind exit code."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


_config_option = click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file (defaults to $FAMILYGRAPH_CONFIG).",
)
_seed_option = click.option(
    "--seed",
    "seed_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML seed records to add instead of the bundled Simpsons data.",
)


def _load(config_file: Path | None) -> PipelineConfig:
    try:
        config = load_config(config_file)
    except (ValueError, yaml.YAMLError) as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    return config


@click.group()
@click.version_option(__version__)
def cli() -> None:  # pragma: no cover - simple wrapper
    """familyGraph command line."""


@cli.command(name="run")
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@_config_option
@_seed_option
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail when the sim/fam prefixes are missing from the input graph.",
)
def run(
    input_file: Path,
    output_file: Path,
    config_file: Path | None,
    seed_file: Path | None,
    strict: bool,
) -> None:
    """Read INPUT_FILE, add family facts and age types, write OUTPUT_FILE."""

    config = _load(config_file)
    if seed_file is not None:
        config.seed_path = seed_file
    if strict:
        config.strict_prefixes = True

    try:
        result = run_pipeline(input_file, output_file, config)
    except GraphIOError as exc:
        code = EXIT_READ_ERROR if exc.mode == "reading" else EXIT_WRITE_ERROR
        raise PipelineFailure(str(exc), code)
    except FormatError as exc:
        raise PipelineFailure(str(exc), EXIT_FORMAT_ERROR)
    except AgeValueError as exc:
        raise PipelineFailure(str(exc), EXIT_AGE_ERROR)
    except UnresolvedPrefixError as exc:
        raise PipelineFailure(str(exc), EXIT_PREFIX_ERROR)
    except (SeedFormatError, UnknownPersonError) as exc:
        raise click.ClickException(str(exc))
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Cannot read seed file: {exc}")
    except OSError as exc:
        raise PipelineFailure(f"Cannot read seed file: {exc}", EXIT_READ_ERROR)
    click.echo(
        f"{result.parsed} triples read ({result.input_syntax}), "
        f"{result.built} added, {result.derived} derived, "
        f"{result.written} written ({result.output_syntax})"
    )


@cli.command(name="detect")
@click.argument("filename", type=str)
@_config_option
def detect(filename: str, config_file: Path | None) -> None:
    """Print the syntax tag used for FILENAME."""

    codec = build_codec(_load(config_file))
    click.echo(codec.detect_syntax(filename))


@cli.command(name="seed")
@_config_option
@_seed_option
def seed(config_file: Path | None, seed_file: Path | None) -> None:
    """Print the seed records that `run` would add, as JSON."""

    config = _load(config_file)
    try:
        records: FamilySeed = FamilySeed.load(seed_file) if seed_file else resolve_seed(config)
    except SeedFormatError as exc:
        raise click.ClickException(str(exc))
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Cannot read seed file: {exc}")
    except OSError as exc:
        raise PipelineFailure(f"Cannot read seed file: {exc}", EXIT_READ_ERROR)
    click.echo(json.dumps(records.to_dict(), indent=2))


def main() -> None:  # pragma: no cover - CLI entrypoint
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
