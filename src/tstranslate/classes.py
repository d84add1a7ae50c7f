from dataclasses import dataclass, field
from typing import Iterator

UNFINISHED = "unfinished"
OBSOLETE = "obsolete"
VANISHED = "vanished"


class CatalogError(Exception):
    pass


class CheckError(Exception):
    pass


@dataclass
class Location:
    filename: str
    line: int | None = None


@dataclass
class Message:
    source: str
    comment: str = ""
    translation: str = ""
    type: str | None = None
    numerus: bool = False
    numerus_forms: list[str] = field(default_factory=list)
    locations: list[Location] = field(default_factory=list)
    oldsource: str | None = None
    oldcomment: str | None = None
    extracomment: str | None = None
    translatorcomment: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.comment)

    @property
    def is_obsolete(self) -> bool:
        return self.type in (OBSOLETE, VANISHED)

    @property
    def is_unfinished(self) -> bool:
        return self.type == UNFINISHED

    @property
    def is_finished(self) -> bool:
        if self.type is not None:
            return False
        if self.numerus:
            return bool(self.numerus_forms) and all(self.numerus_forms)
        return bool(self.translation)


@dataclass
class Context:
    name: str
    messages: list[Message] = field(default_factory=list)
    comment: str | None = None


@dataclass
class Catalog:
    contexts: list[Context] = field(default_factory=list)
    version: str = "2.0"
    language: str | None = None
    sourcelanguage: str | None = None

    def context(self, name: str) -> Context | None:
        return next((x for x in self.contexts if x.name == name), None)

    def messages(self) -> Iterator[tuple[Context, Message]]:
        for context in self.contexts:
            for message in context.messages:
                yield context, message


@dataclass
class CatalogFile:
    filename: str
    stem: str
    catalog: Catalog | None
    error: str | None = None


@dataclass
class Language:
    langid: str
    name: str
    files: list[CatalogFile]


@dataclass
class Report:
    langid: str
    filename: str
    file_warning: str = ""
    context: str = ""
    source: str = ""
    message_warning: str = ""


@dataclass
class Statistics:
    total: int = 0
    finished: int = 0
    unfinished: int = 0
    obsolete: int = 0
    numerus: int = 0

    @property
    def percent(self) -> float:
        current = self.total - self.obsolete
        if current <= 0:
            return 100.0
        return 100.0 * self.finished / current
