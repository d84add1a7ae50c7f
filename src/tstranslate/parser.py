import logging
import pathlib
import xml.etree.ElementTree as ElementTree

from tstranslate.classes import (
    Catalog,
    CatalogError,
    CatalogFile,
    Context,
    Location,
    Message,
)

logger = logging.getLogger(__name__)

OPTIONAL_TEXT_FIELDS = ("oldsource", "oldcomment", "extracomment", "translatorcomment")


def _byte(element: ElementTree.Element) -> str:
    # lupdate writes control characters as <byte value="x1"/>, decimal values are allowed too
    value = element.get("value", "")
    try:
        return chr(int(value[1:], 16) if value[:1] in ("x", "X") else int(value))
    except (ValueError, OverflowError):
        logger.warning(f"Ignoring invalid byte value \"{value}\"")
        return ""


def _text(element: ElementTree.Element | None) -> str:
    if element is None:
        return ""
    parts = [element.text or ""]
    for child in element:
        parts.append(_byte(child) if child.tag == "byte" else _text(child))
        parts.append(child.tail or "")
    return "".join(parts)


def _parse_message(element: ElementTree.Element) -> Message:
    message = Message(
        source=_text(element.find("source")),
        comment=_text(element.find("comment")),
        numerus=element.get("numerus") == "yes",
    )
    for name in OPTIONAL_TEXT_FIELDS:
        child = element.find(name)
        if child is not None:
            setattr(message, name, _text(child))

    for location in element.iter("location"):
        line = location.get("line")
        try:
            line_nr = int(line) if line is not None else None
        except ValueError:
            line_nr = None
        message.locations.append(Location(location.get("filename", ""), line_nr))

    translation = element.find("translation")
    if translation is None:
        return message

    message.type = translation.get("type")
    if message.numerus:
        message.numerus_forms = [_text(x) for x in translation.iter("numerusform")]
        message.translation = message.numerus_forms[0] if message.numerus_forms else ""
    else:
        message.translation = _text(translation)
    return message


def loads(data: str | bytes) -> Catalog:
    """Parse a Qt Linguist TS document into a Catalog."""
    try:
        root = ElementTree.fromstring(data)
    except ElementTree.ParseError as ex:
        raise CatalogError(f"Malformed TS document: {ex}") from ex

    if root.tag != "TS":
        raise CatalogError(f'Expected a "TS" root element, got "{root.tag}"')

    catalog = Catalog(
        version=root.get("version", "2.0"),
        language=root.get("language"),
        sourcelanguage=root.get("sourcelanguage"),
    )
    for element in root.iter("context"):
        name = element.find("name")
        comment = element.find("comment")
        context = Context(
            _text(name), comment=_text(comment) if comment is not None else None
        )
        context.messages = [_parse_message(x) for x in element.iter("message")]
        catalog.contexts.append(context)
    return catalog


def load(path: str | pathlib.Path) -> Catalog:
    path = pathlib.Path(path)
    logger.debug(f"Parsing {path}")
    try:
        data = path.read_bytes()
    except OSError as ex:
        raise CatalogError(f"Cannot read {path}: {ex}") from ex
    return loads(data)


def parse_catalogs(path: str | pathlib.Path, langid: str) -> list[CatalogFile]:
    suffix = f"_{langid}.ts"
    units = []
    for file in sorted(pathlib.Path(path).glob(f"*{suffix}")):
        if not file.is_file():
            continue

        stem = file.name[: -len(suffix)]
        try:
            catalog = load(file)
        except CatalogError as ex:
            logger.error(f"Error parsing {file.name}: {ex}")
            units.append(CatalogFile(file.name, stem, None, str(ex)))
            continue

        units.append(CatalogFile(file.name, stem, catalog))
    return units
