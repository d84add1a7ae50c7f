import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PluralRule:
    count: int
    select: Callable[[int], int]

    def index(self, n: int) -> int:
        return self.select(abs(n))


def _slavic_east(n: int) -> int:
    if n % 10 == 1 and n % 100 != 11:
        return 0
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return 1
    return 2


def _polish(n: int) -> int:
    if n == 1:
        return 0
    if 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14:
        return 1
    return 2


def _lithuanian(n: int) -> int:
    if n % 10 == 1 and n % 100 != 11:
        return 0
    if n % 10 >= 2 and not 10 <= n % 100 < 20:
        return 1
    return 2


def _romanian(n: int) -> int:
    if n == 1:
        return 0
    if n == 0 or 1 <= n % 100 <= 19:
        return 1
    return 2


def _slovenian(n: int) -> int:
    if n % 100 == 1:
        return 0
    if n % 100 == 2:
        return 1
    if n % 100 in (3, 4):
        return 2
    return 3


def _arabic(n: int) -> int:
    if n == 0:
        return 0
    if n == 1:
        return 1
    if n == 2:
        return 2
    if 3 <= n % 100 <= 10:
        return 3
    if n % 100 >= 11:
        return 4
    return 5


SINGLE = PluralRule(1, lambda n: 0)
NOT_ONE = PluralRule(2, lambda n: 0 if n == 1 else 1)
GREATER_THAN_ONE = PluralRule(2, lambda n: 0 if n <= 1 else 1)
SLAVIC_EAST = PluralRule(3, _slavic_east)
SLAVIC_WEST = PluralRule(3, lambda n: 0 if n == 1 else 1 if 2 <= n <= 4 else 2)
POLISH = PluralRule(3, _polish)
LITHUANIAN = PluralRule(3, _lithuanian)
ROMANIAN = PluralRule(3, _romanian)
SLOVENIAN = PluralRule(4, _slovenian)
ARABIC = PluralRule(6, _arabic)

RULES: dict[str, PluralRule] = {
    **dict.fromkeys(
        ["id", "ja", "ko", "zh", "th", "vi", "tr", "ms", "ka", "lo", "km", "fa"],
        SINGLE,
    ),
    **dict.fromkeys(
        [
            "en", "de", "nl", "it", "es", "pt", "sv", "da", "nb", "nn", "no",
            "fi", "el", "hu", "bg", "ca", "eu", "gl", "et", "eo", "he", "hi",
        ],
        NOT_ONE,
    ),
    **dict.fromkeys(["fr", "pt_BR", "oc"], GREATER_THAN_ONE),
    **dict.fromkeys(["ru", "uk", "be", "sr", "hr", "bs"], SLAVIC_EAST),
    **dict.fromkeys(["cs", "sk"], SLAVIC_WEST),
    "pl": POLISH,
    "lt": LITHUANIAN,
    "ro": ROMANIAN,
    "sl": SLOVENIAN,
    "ar": ARABIC,
}


def plural_rule(language: str | None) -> PluralRule:
    """Return the plural rule for a language tag such as ``id``, ``pt_BR`` or ``pt-BR``."""
    if not language:
        return NOT_ONE
    parts = language.replace("-", "_").split("_")
    base = parts[0].lower()
    if len(parts) > 1 and f"{base}_{parts[1].upper()}" in RULES:
        return RULES[f"{base}_{parts[1].upper()}"]
    if base in RULES:
        return RULES[base]
    logger.debug(f"No plural rule for {language}, using the English one")
    return NOT_ONE
