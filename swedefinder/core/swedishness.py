"""Heuristic scoring of how likely a business is Swedish-run or Swedish-themed.

Scoring is a static weighted table applied to free text:

* every keyword found anywhere in the name, description or reviews adds 25,
  with no cap per keyword category;
* a Swedish letter (å, ä, ö) in the business name adds 15, counted once;
* a Swedish domain in the website adds 30, counted once.

The total is clamped to 0..100 and anything at 25 or above counts as Swedish.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

KEYWORD_WEIGHT = 25
CHARACTER_WEIGHT = 15
DOMAIN_WEIGHT = 30
SWEDISH_THRESHOLD = 25
MAX_CONFIDENCE = 100

_KEYWORDS = (
    # ethnonyms
    "svensk",
    "svenska",
    "sweden",
    "swedish",
    "scandinavian",
    "skandinavisk",
    "nordic",
    "nordisk",
    # cities
    "stockholm",
    "göteborg",
    "gothenburg",
    "malmö",
    "malmo",
    "uppsala",
    "västerås",
    "örebro",
    "linköping",
    "helsingborg",
    "norrköping",
    "jönköping",
    "lund",
    "umeå",
    "gävle",
    "borås",
    "eskilstuna",
    "södertälje",
    "karlstad",
    "täby",
    "växjö",
    "halmstad",
    "sundsvall",
    "luleå",
    "trollhättan",
    "östersund",
    "borlänge",
    "falun",
    "kalmar",
    "skövde",
    "kristianstad",
    "karlskrona",
    "skellefteå",
    "uddevalla",
    "varberg",
    "örnsköldsvik",
    "nyköping",
    "motala",
    # business and brand terms
    "fika",
    "smörgås",
    "köttbullar",
    "meatballs",
    "ikea",
    "volvo",
    "husqvarna",
    "ericsson",
    "h&m",
    # food
    "knäckebröd",
    "kanelbulle",
    "semla",
    "prinsesstårta",
    "sill",
    "gravlax",
    "kroppkakor",
    "raggmunk",
    "pyttipanna",
    "tunnbröd",
    "surströmming",
    "janssons frestelse",
)

KEYWORD_WEIGHTS: Tuple[Tuple[str, int], ...] = tuple((term, KEYWORD_WEIGHT) for term in _KEYWORDS)
SWEDISH_CHARACTERS: Tuple[str, ...] = ("å", "ä", "ö", "Å", "Ä", "Ö")
SWEDISH_DOMAINS: Tuple[str, ...] = (".se", "www.se")

_SEARCH_TERMS: Tuple[str, ...] = (
    "svensk",
    "svenska",
    "swedish",
    "scandinavian",
    "nordic",
    "sweden",
    "stockholm",
    "göteborg",
)


class SignalKind(str, enum.Enum):
    KEYWORD = "keyword"
    CHARACTER = "character"
    DOMAIN = "domain"


@dataclass(frozen=True)
class SwedishSignal:
    """One heuristic that fired, kept so the UI can explain a score."""

    kind: SignalKind
    text: str

    def __str__(self) -> str:
        if self.kind is SignalKind.KEYWORD:
            return f'Keyword: "{self.text}"'
        if self.kind is SignalKind.CHARACTER:
            return f'Swedish character: "{self.text}"'
        return "Swedish domain (.se)"


@dataclass(frozen=True)
class SwedishnessResult:
    is_swedish: bool
    confidence: int
    indicators: Tuple[SwedishSignal, ...] = ()

    def labels(self) -> list:
        return [str(signal) for signal in self.indicators]


def analyze(
    name: str,
    description: Optional[str] = None,
    website: Optional[str] = None,
    review_texts: Iterable[str] = (),
) -> SwedishnessResult:
    """Score a business from its name, description, website and review texts."""
    name = name or ""
    text = " ".join([name, description or "", *(t or "" for t in review_texts or ())]).lower()

    indicators = []
    score = 0

    for term, weight in KEYWORD_WEIGHTS:
        if term.lower() in text:
            indicators.append(SwedishSignal(SignalKind.KEYWORD, term))
            score += weight

    # case-sensitive on the raw name, one hit at most
    for char in SWEDISH_CHARACTERS:
        if char in name:
            indicators.append(SwedishSignal(SignalKind.CHARACTER, char))
            score += CHARACTER_WEIGHT
            break

    if website:
        lowered = website.lower()
        for domain in SWEDISH_DOMAINS:
            if domain in lowered:
                indicators.append(SwedishSignal(SignalKind.DOMAIN, domain))
                score += DOMAIN_WEIGHT
                break

    confidence = max(0, min(MAX_CONFIDENCE, score))
    return SwedishnessResult(
        is_swedish=confidence >= SWEDISH_THRESHOLD,
        confidence=confidence,
        indicators=tuple(indicators),
    )


def swedish_search_terms() -> Tuple[str, ...]:
    """Keywords sent upstream as separate searches before local filtering."""
    return _SEARCH_TERMS
