import logging
import os
import pathlib
import sys
from typing import Iterator

import click
from postats import pipeline
from postats.classes import CatalogFile
from postats.config import load_config, setup_logging
from postats.render import TableRenderer

logger = logging.getLogger(__name__)


def collect_paths(paths: tuple[str, ...], pattern: str) -> list[pathlib.Path]:
    files: list[pathlib.Path] = []
    for path in map(pathlib.Path, paths):
        if path.is_dir():
            files.extend(sorted(x for x in path.rglob(pattern) if x.is_file()))
        else:
            files.append(path)
    return files


def read_catalogs(
    files: list[pathlib.Path], failed: list[str]
) -> Iterator[CatalogFile]:
    for file in files:
        logger.debug(f"Reading {file}")
        try:
            contents = file.read_bytes()
        except OSError as ex:
            logger.error(f"{file}: {type(ex).__name__}: {ex}")
            failed.append(str(file))
            continue
        yield CatalogFile(str(file), contents)


@click.group()
@click.version_option()
def cli() -> None:
    pass


@cli.command("stats")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--config-folder", default="config", help="Configuration folder path.")
@click.option(
    "--expand/--compact", default=None, help="Separate rows and list flag counts."
)
@click.option("--color/--no-color", default=None, help="Colorize the table.")
@click.option("--pattern", default=None, help="Glob for catalogs inside folders.")
def stats(
    paths: tuple[str, ...],
    config_folder: str,
    expand: bool | None,
    color: bool | None,
    pattern: str | None,
) -> None:
    config = load_config(os.path.abspath(config_folder))
    setup_logging(config)

    options = config["stats"]
    renderer = TableRenderer(
        expand=options["expand"] if expand is None else expand,
        color=options["color"] if color is None else color,
    )
    files = collect_paths(paths, pattern or options["pattern"])
    logger.info(f"Found {len(files)} catalogs")

    failed: list[str] = []
    stats_pipeline = pipeline.StatsPipeline(renderer)
    for _ in stats_pipeline.process(read_catalogs(files, failed)):
        pass

    errors = len(stats_pipeline.errors) + len(failed)
    if errors:
        logger.error(f"{errors} catalogs could not be read")
        sys.exit(1)
