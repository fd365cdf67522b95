"""Ingredient name to purchase-unit matching with layered strategies."""

import re
from dataclasses import dataclass

from rapidfuzz import fuzz, process

from dietplanner.logging_config import get_logger
from dietplanner.matching.reference import DEFAULT_REFERENCE, ConversionEntry, ReferenceData

logger = get_logger(__name__)


# Spanish articles and prepositions dropped from names before matching
FILLER_WORDS = frozenset({"de", "del", "la", "el", "los", "las", "en", "con", "sin"})

# Cooking methods and states appended to ingredient names
COOKING_SUFFIXES = (
    " a la plancha",
    " a la parrilla",
    " asado",
    " congelados",
)

# Parenthetical qualifiers, e.g. "(light)", "(cocido)", "(bajo en grasa)"
QUALIFIER_PATTERN = re.compile(r"\([^)]*\)")


@dataclass
class MatchResult:
    """Result of resolving an ingredient name to a conversion entry."""

    ingredient_name: str
    normalized_name: str
    matched_key: str
    entry: ConversionEntry
    match_type: str  # "exact", "substring", "multi_word", "synonym", "fuzzy"
    confidence_score: float


class IngredientNameMatcher:
    """
    Resolves recipe ingredient names against the conversion table.

    Strategies run from strictest to most permissive and the first hit wins:
    1. Exact key
    2. Key contained in the name
    3. Every word of the key contained in some word of the name
    4. Synonym contained in the name, mapped to its table key
    5. Fuzzy token match (only when a threshold is configured)
    """

    EXACT_MATCH_SCORE = 1.0
    SYNONYM_MATCH_SCORE = 0.95
    SUBSTRING_MATCH_SCORE = 0.9
    MULTI_WORD_MATCH_SCORE = 0.8

    def __init__(
        self,
        reference: ReferenceData = DEFAULT_REFERENCE,
        fuzzy_threshold: float | None = None,
    ):
        self.reference = reference
        self.fuzzy_threshold = fuzzy_threshold

        # Normalized key -> original key, in table order
        self._keys: dict[str, str] = {}
        for key in reference.conversions:
            self._keys.setdefault(self.normalize(key), key)

        # Longest keys first so "tomate cherry" wins over "tomate" in the multi-word stage
        self._keys_by_length = sorted(self._keys, key=len, reverse=True)
        self._synonyms_by_length = sorted(reference.synonyms, key=len, reverse=True)

    @staticmethod
    def normalize(name: str) -> str:
        """
        Normalize an ingredient name for matching.

        - Lowercase and trim
        - Drop parenthetical qualifiers
        - Drop trailing cooking methods ("a la plancha", "asado", ...)
        - Drop articles and prepositions ("de", "la", "con", ...)
        """
        normalized = name.lower().strip()
        normalized = QUALIFIER_PATTERN.sub(" ", normalized)

        for suffix in COOKING_SUFFIXES:
            normalized = normalized.replace(suffix, " ")

        words = [word for word in normalized.split() if word not in FILLER_WORDS]
        return " ".join(words)

    def resolve(self, normalized_name: str) -> ConversionEntry | None:
        """Find the conversion entry for an already-normalized name."""
        result = self._match_normalized(normalized_name, normalized_name)
        return result.entry if result else None

    def match(self, ingredient_name: str) -> MatchResult | None:
        """Normalize a raw ingredient name and resolve it."""
        return self._match_normalized(ingredient_name, self.normalize(ingredient_name))

    def _result(self, name: str, normalized: str, key: str, match_type: str, score: float) -> MatchResult:
        original_key = self._keys[key]
        return MatchResult(
            ingredient_name=name,
            normalized_name=normalized,
            matched_key=original_key,
            entry=self.reference.conversions[original_key],
            match_type=match_type,
            confidence_score=score,
        )

    def _match_normalized(self, name: str, normalized: str) -> MatchResult | None:
        if not normalized:
            return None

        # 1. Exact
        if normalized in self._keys:
            return self._result(name, normalized, normalized, "exact", self.EXACT_MATCH_SCORE)

        # 2. Key contained in the name; longest key first, then the one nearest the start
        # ("caldo de pollo" is broth, not chicken)
        contained = [key for key in self._keys if key in normalized]
        if contained:
            key = min(contained, key=lambda k: (-len(k), normalized.find(k)))
            return self._result(name, normalized, key, "substring", self.SUBSTRING_MATCH_SCORE)

        # 3. Every key word inside some name word ("setas shiitake" ~ "setas frescas shiitake")
        name_words = normalized.split()
        for key in self._keys_by_length:
            if all(any(key_word in word for word in name_words) for key_word in key.split()):
                return self._result(name, normalized, key, "multi_word", self.MULTI_WORD_MATCH_SCORE)

        # 4. Synonyms
        for alias in self._synonyms_by_length:
            if alias not in normalized:
                continue
            canonical = self.normalize(self.reference.synonyms[alias])
            if canonical in self._keys:
                return self._result(name, normalized, canonical, "synonym", self.SYNONYM_MATCH_SCORE)

        # 5. Fuzzy
        if self.fuzzy_threshold is not None:
            best = process.extractOne(
                normalized,
                list(self._keys),
                scorer=fuzz.token_sort_ratio,
                score_cutoff=self.fuzzy_threshold,
            )
            if best:
                key, score, _ = best
                logger.debug(f"Fuzzy matched '{normalized}' to '{key}' ({score:.0f})")
                return self._result(name, normalized, key, "fuzzy", round(score / 100, 2))

        return None
