import logging
import os
import sys
from typing import Any

import yaml

import click
from tstranslate import checker, parser, writer
from tstranslate.classes import CatalogError, CheckError
from tstranslate.translator import Translator

logger = logging.getLogger(__name__)

DEFAULT_LOGGING = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    "datefmt": "%Y-%m-%d %H:%M:%S",
}


def load_config(config_folder: str) -> dict[str, Any]:
    config_file_path = os.path.abspath(f"{config_folder}/config.yml")

    config: dict[str, Any] = {}
    try:
        with open(config_file_path, "r") as file:
            config = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.error(f"File not found: {config_file_path}")
    except yaml.YAMLError as exc:
        logger.error(sys._getframe().f_code.co_name + " " + str(exc))
        sys.exit(1)
    return config


def setup_logging(config_folder: str) -> None:
    config = load_config(config_folder)
    logging_cfg = {**DEFAULT_LOGGING, **config.get("logging", {})}
    logging.basicConfig(
        level=logging.getLevelName(logging_cfg["level"]),
        format=logging_cfg["format"],
        datefmt=logging_cfg["datefmt"],
    )


def load_catalog(path: str):
    try:
        return parser.load(path)
    except CatalogError as ex:
        raise click.ClickException(str(ex))


config_folder_option = click.option(
    "--config-folder", default="config", help="Configuration folder path."
)


@click.group()
@click.version_option()
def cli() -> None:
    pass


@cli.command("check")
@config_folder_option
@click.option(
    "--translation-folder", required=True, help="Folder holding the .ts catalogs."
)
@click.option("--baseline", default="en", help="Language the others are compared to.")
@click.option("--report-folder", default=None, help="Write markdown reports here.")
@click.option("--fail-on-issues", is_flag=True, help="Exit with 1 when issues are found.")
def check(
    config_folder: str,
    translation_folder: str,
    baseline: str,
    report_folder: str | None,
    fail_on_issues: bool,
) -> None:
    setup_logging(config_folder)

    language_cfg_path = os.path.abspath(f"{config_folder}/languages.cfg")
    if not os.path.isfile(language_cfg_path):
        raise click.ClickException(f"File not found: {language_cfg_path}")

    try:
        reports = checker.run(
            language_cfg_path=language_cfg_path,
            translation_folder_path=os.path.abspath(translation_folder),
            baseline=baseline,
            report_folder_path=report_folder,
        )
    except CheckError as ex:
        raise click.ClickException(str(ex))

    if reports and fail_on_issues:
        sys.exit(1)


@cli.command("lookup")
@config_folder_option
@click.argument("catalog", type=click.Path(exists=True, dir_okay=False))
@click.option("--context", required=True, help="Context (class) name.")
@click.option("--source", required=True, help="Source text.")
@click.option("--comment", default="", help="Disambiguating comment.")
@click.option("-n", "count", type=int, default=None, help="Count for plural forms.")
def lookup(
    config_folder: str,
    catalog: str,
    context: str,
    source: str,
    comment: str,
    count: int | None,
) -> None:
    setup_logging(config_folder)
    translator = Translator(load_catalog(catalog))
    click.echo(translator.translate(context, source, comment, count))


@cli.command("stats")
@config_folder_option
@click.argument("catalogs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def stats(config_folder: str, catalogs: tuple[str, ...]) -> None:
    setup_logging(config_folder)
    for path in catalogs:
        result = checker.statistics(load_catalog(path))
        click.echo(
            f"{os.path.basename(path)}: {result.finished}/{result.total - result.obsolete} finished "
            f"({result.percent:.1f}%), {result.unfinished} unfinished, "
            f"{result.obsolete} obsolete, {result.numerus} numerus"
        )


@cli.command("normalize")
@config_folder_option
@click.argument("catalog", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", default=None, help="Write here instead of in place.")
def normalize(config_folder: str, catalog: str, output: str | None) -> None:
    setup_logging(config_folder)
    writer.dump(load_catalog(catalog), output or catalog)
    logger.info(f"Wrote {output or catalog}")
