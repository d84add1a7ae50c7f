import logging
import pathlib

from tstranslate.classes import Catalog, Context, Message

logger = logging.getLogger(__name__)

_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}


def protect(text: str) -> str:
    """Escape text the way lupdate does.

    Control characters are not allowed in XML 1.0, so they are written as
    lupdate's ``<byte value="xN"/>`` elements. Carriage returns use a
    character reference so they survive line-ending normalization.
    """
    out = []
    for char in text:
        if char in _ENTITIES:
            out.append(_ENTITIES[char])
        elif char == "\r":
            out.append("&#xd;")
        elif ord(char) < 0x20 and char not in "\n\t":
            out.append(f'<byte value="x{ord(char):x}"/>')
        else:
            out.append(char)
    return "".join(out)


def _protect_attribute(text: str) -> str:
    # whitespace is normalized inside attribute values, control characters are dropped
    out = []
    for char in text:
        if char in _ENTITIES:
            out.append(_ENTITIES[char])
        elif char in "\n\t\r":
            out.append(f"&#x{ord(char):x};")
        elif ord(char) >= 0x20:
            out.append(char)
    return "".join(out)


def _attributes(**attrs: str | None) -> str:
    return "".join(
        f' {k}="{_protect_attribute(v)}"' for k, v in attrs.items() if v is not None
    )


def _write_message(lines: list[str], message: Message) -> None:
    numerus = "yes" if message.numerus else None
    lines.append(f"    <message{_attributes(numerus=numerus)}>")
    for location in message.locations:
        line = str(location.line) if location.line is not None else None
        lines.append(
            f"        <location{_attributes(filename=location.filename, line=line)}/>"
        )
    lines.append(f"        <source>{protect(message.source)}</source>")
    if message.oldsource is not None:
        lines.append(f"        <oldsource>{protect(message.oldsource)}</oldsource>")
    if message.comment:
        lines.append(f"        <comment>{protect(message.comment)}</comment>")
    for name in ("oldcomment", "extracomment", "translatorcomment"):
        value = getattr(message, name)
        if value is not None:
            lines.append(f"        <{name}>{protect(value)}</{name}>")

    attrs = _attributes(type=message.type)
    if message.numerus:
        lines.append(f"        <translation{attrs}>")
        for form in message.numerus_forms:
            lines.append(f"            <numerusform>{protect(form)}</numerusform>")
        lines.append("        </translation>")
    else:
        lines.append(
            f"        <translation{attrs}>{protect(message.translation)}</translation>"
        )
    lines.append("    </message>")


def _write_context(lines: list[str], context: Context) -> None:
    lines.append("<context>")
    lines.append(f"    <name>{protect(context.name)}</name>")
    if context.comment is not None:
        lines.append(f"    <comment>{protect(context.comment)}</comment>")
    for message in context.messages:
        _write_message(lines, message)
    lines.append("</context>")


def dumps(catalog: Catalog) -> str:
    lines = [
        '<?xml version="1.0" encoding="utf-8"?>',
        "<!DOCTYPE TS>",
        "<TS"
        + _attributes(
            version=catalog.version,
            language=catalog.language,
            sourcelanguage=catalog.sourcelanguage,
        )
        + ">",
    ]
    for context in catalog.contexts:
        _write_context(lines, context)
    lines.append("</TS>")
    return "\n".join(lines) + "\n"


def dump(catalog: Catalog, path: str | pathlib.Path) -> None:
    path = pathlib.Path(path)
    logger.debug(f"Writing {path}")
    path.write_text(dumps(catalog), encoding="utf-8")
