import logging

from tstranslate.classes import Catalog, Message
from tstranslate.numerus import plural_rule

logger = logging.getLogger(__name__)


class Translator:
    """Resolve strings against a catalog, falling back to the source text.

    Obsolete and vanished messages are never served. Unfinished or empty
    translations resolve to the source text. A comment that matches nothing
    is retried without the comment.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.rule = plural_rule(catalog.language)
        self._index: dict[tuple[str, str, str], Message] = {}
        for context, message in catalog.messages():
            if message.is_obsolete:
                continue
            key = (context.name, message.source, message.comment)
            if key in self._index:
                logger.debug(f"Duplicate message {key}, keeping the first one")
                continue
            self._index[key] = message

    def __len__(self) -> int:
        return len(self._index)

    def lookup(self, context: str, source: str, comment: str = "") -> Message | None:
        message = self._index.get((context, source, comment))
        if message is None and comment:
            message = self._index.get((context, source, ""))
        return message

    def translate(
        self, context: str, source: str, comment: str = "", n: int | None = None
    ) -> str:
        text = self._resolve(self.lookup(context, source, comment), n) or source
        if n is not None:
            text = text.replace("%n", str(n))
        return text

    def _resolve(self, message: Message | None, n: int | None) -> str:
        if message is None or message.is_unfinished:
            return ""
        if message.numerus:
            index = self.rule.index(n) if n is not None else 0
            if index < len(message.numerus_forms):
                return message.numerus_forms[index]
            return ""
        return message.translation
