from collections import Counter, defaultdict
import logging
import pathlib
import re
import vdf

from tstranslate.classes import (
    Catalog,
    CatalogFile,
    CheckError,
    Language,
    Report,
    Statistics,
)
from tstranslate.numerus import plural_rule
from tstranslate.parser import parse_catalogs

logger = logging.getLogger(__name__)

param_regex = re.compile(r"%L?([1-9][0-9]?)")


def placeholders(text: str) -> set[str]:
    return set(param_regex.findall(text))


def statistics(catalog: Catalog) -> Statistics:
    stats = Statistics()
    for _, message in catalog.messages():
        stats.total += 1
        if message.numerus:
            stats.numerus += 1
        if message.is_obsolete:
            stats.obsolete += 1
        elif message.is_finished:
            stats.finished += 1
        else:
            stats.unfinished += 1
    return stats


def load_languages(language_cfg_path: str) -> dict[str, Language]:
    languages_cfg = vdf.loads(pathlib.Path(language_cfg_path).read_text("utf-8"))
    if "Languages" not in languages_cfg:
        raise CheckError(f'{language_cfg_path} does not have a "Languages" section')
    return {
        langid: Language(langid, name, [])
        for langid, name in languages_cfg["Languages"].items()
    }


def is_plural_overlay(catalog: Catalog) -> bool:
    """True for source-language catalogs that only carry plural forms.

    lupdate writes the source language's catalog (``VirtualBox_en.ts``) with
    just the numerus messages, since every other string is already in the
    source text. Such a catalog is only a baseline for numerus messages.
    """
    current = [x for _, x in catalog.messages() if not x.is_obsolete]
    return bool(current) and all(x.numerus for x in current)


def check_file(langid: str, file: CatalogFile, baseline_file: CatalogFile) -> list[Report]:
    reports = []

    def file_warning(warning: str) -> None:
        reports.append(Report(langid, file.filename, file_warning=warning))

    def message_warning(context: str, source: str, warning: str) -> None:
        reports.append(
            Report(
                langid,
                file.filename,
                context=context,
                source=source,
                message_warning=warning,
            )
        )

    if file.catalog is None:
        file_warning(f"File can't be parsed: {file.error}")
        return reports

    catalog = file.catalog
    if not catalog.contexts:
        file_warning("File is empty")
        return reports

    if catalog.language and catalog.language != langid:
        file_warning(f'Declares language "{catalog.language}"')

    baseline = baseline_file.catalog
    if baseline is None:
        file_warning(f"Baseline file can't be parsed: {baseline_file.error}")

    baseline_keys: set[tuple[str, str, str]] = set()
    baseline_contexts: dict[tuple[str, str], str] = {}
    overlay = False
    if baseline is not None:
        overlay = is_plural_overlay(baseline)
        for context, message in baseline.messages():
            if message.is_obsolete:
                continue
            baseline_keys.add((context.name, *message.key))
            baseline_contexts.setdefault(message.key, context.name)

    rule = plural_rule(catalog.language or langid)
    seen: Counter[tuple[str, str, str]] = Counter()
    for context, message in catalog.messages():
        if message.is_obsolete:
            continue
        key = (context.name, *message.key)
        seen[key] += 1
        if seen[key] == 2:
            message_warning(context.name, message.source, "Duplicate message")

        compared = baseline is not None and (message.numerus or not overlay)
        if compared and key not in baseline_keys:
            # look for this message in a different baseline context
            warning = "Message doesn't exist in baseline"
            other = baseline_contexts.get(message.key)
            if other is not None:
                warning = f"Message exists in a different context in baseline: {other}"
            message_warning(context.name, message.source, warning)
            continue

        if message.is_unfinished:
            message_warning(context.name, message.source, "Translation unfinished")
            continue

        if not message.is_finished:
            message_warning(context.name, message.source, "Translation empty")
            continue

        if message.numerus and len(message.numerus_forms) != rule.count:
            message_warning(
                context.name,
                message.source,
                f"Has {len(message.numerus_forms)} plural forms, but {langid} needs {rule.count}",
            )

        expected = placeholders(message.source)
        texts = message.numerus_forms if message.numerus else [message.translation]
        for text in texts:
            found = placeholders(text)
            if found != expected:
                message_warning(
                    context.name,
                    message.source,
                    f"Uses placeholders {sorted(found)}, but source has {sorted(expected)}",
                )
                break

    # See if this language is missing anything the baseline has
    if baseline is not None:
        for context, message in baseline.messages():
            key = (context.name, *message.key)
            if not message.is_obsolete and key not in seen:
                seen[key] += 1
                message_warning(context.name, message.source, "Message missing")

    return reports


def render_report(problems: dict[str, list[Report]]) -> str:
    markdown = ""
    for filename, reports in problems.items():
        markdown += f"## {filename}\n"
        added_table = False
        for report in reports:
            if report.file_warning:
                markdown += f"**{report.file_warning}**\n"
            if report.message_warning:
                if not added_table:
                    markdown += "| Context | Source | Issue |\n| ------- | ------ | ----- |\n"
                    added_table = True
                source = report.source.replace("|", "\\|").replace("\n", " ")
                markdown += f"| `{report.context}` | `{source}` | {report.message_warning} |\n"
        markdown += "\n"
    return markdown


def run(
    *,
    language_cfg_path: str,
    translation_folder_path: str,
    baseline: str = "en",
    report_folder_path: str | None = None,
) -> dict[str, dict[str, list[Report]]]:
    # Parse the languages.cfg file to know which languages could be available
    logger.info("Parsing languages.cfg...")
    available_languages = load_languages(language_cfg_path)
    logger.info(f"Available languages: {len(available_languages)}")

    if baseline not in available_languages:
        raise CheckError(f'Baseline language "{baseline}" is not in languages.cfg')

    for langid, lang in available_languages.items():
        lang.files = parse_catalogs(translation_folder_path, langid)

    reports: dict[str, dict[str, list[Report]]] = defaultdict(lambda: defaultdict(list))

    # Compare the baseline catalogs with the other languages
    reference = available_languages[baseline]
    for langid, lang in available_languages.items():
        if langid == baseline:
            continue

        for file in lang.files:
            baseline_file = next(
                (x for x in reference.files if x.stem == file.stem), None
            )
            if baseline_file is None:
                reports[langid][file.filename].append(
                    Report(langid, file.filename, file_warning="File doesn't exist in baseline")
                )
                continue
            problems = check_file(langid, file, baseline_file)
            if problems:
                reports[langid][file.filename].extend(problems)

        for file in reference.files:
            if not any(x.stem == file.stem for x in lang.files):
                filename = f"{file.stem}_{langid}.ts"
                reports[langid][filename].append(
                    Report(langid, filename, file_warning="File missing")
                )

        if langid not in reports:
            logger.info(f"No issues found for {lang.name} ({langid})")
        else:
            count = sum(len(x) for x in reports[langid].values())
            logger.error(f"Found {count} issues for {lang.name} ({langid})")

    # Generate the markdown report of every language with issues
    for langid, lang in available_languages.items():
        if langid not in reports:
            continue

        print(f"Generating report for {lang.name} ({langid})...")
        for filename, problems in reports[langid].items():
            for report in problems:
                if report.file_warning:
                    print(f"  {report.file_warning} ({report.filename})")
                if report.message_warning:
                    print(
                        f'  {report.filename}: {report.context} "{report.source}" -> {report.message_warning}'
                    )

        if report_folder_path:
            folder = pathlib.Path(report_folder_path)
            folder.mkdir(parents=True, exist_ok=True)
            (folder / f"{langid}.md").write_text(
                render_report(reports[langid]), encoding="utf-8"
            )

    return {langid: dict(files) for langid, files in reports.items()}
