"""Question catalog: language-keyed question sets loaded once at startup."""

import json
from typing import Dict, List, Mapping, Sequence, Tuple

from wordwheel.models import Question

DEFAULT_LANGUAGE = 'en'


class CatalogError(ValueError):
    """Raised when a question file cannot be used to start the server."""


class Catalog:
    """Immutable mapping of language key -> ordered questions."""

    def __init__(self, sets: Mapping[str, Sequence[Question]], default_language: str = DEFAULT_LANGUAGE):
        if default_language not in sets:
            raise CatalogError(f"catalog is missing the fallback language '{default_language}'")
        for language, questions in sets.items():
            if not questions:
                raise CatalogError(f"language '{language}' has no questions")
        self._sets: Dict[str, Tuple[Question, ...]] = {k: tuple(v) for k, v in sets.items()}
        self.default_language = default_language

    def resolve(self, language) -> Tuple[str, Tuple[Question, ...]]:
        """Return ``(language, questions)``, falling back to the default key."""
        if isinstance(language, str) and language in self._sets:
            return language, self._sets[language]
        return self.default_language, self._sets[self.default_language]

    def languages(self) -> List[str]:
        return sorted(self._sets)

    def __contains__(self, language):
        return language in self._sets


def _parse_question(language: str, position: int, raw) -> Question:
    if not isinstance(raw, dict):
        raise CatalogError(f"{language}[{position}]: expected an object")
    values = []
    for key in ('letter', 'question', 'answer'):
        value = raw.get(key)
        if not isinstance(value, str) or not value.strip():
            raise CatalogError(f"{language}[{position}]: '{key}' must be a non-empty string")
        values.append(value)
    return Question(letter=values[0], prompt=values[1], expected_answer=values[2])


def parse_catalog(data, default_language: str = DEFAULT_LANGUAGE) -> Catalog:
    if not isinstance(data, dict):
        raise CatalogError('catalog must be a JSON object keyed by language')
    sets = {}
    for language, entries in data.items():
        if not isinstance(entries, list) or not entries:
            raise CatalogError(f"language '{language}' must map to a non-empty list")
        questions = [_parse_question(language, i, raw) for i, raw in enumerate(entries)]
        letters = [q.letter for q in questions]
        if len(set(letters)) != len(letters):
            raise CatalogError(f"language '{language}' repeats a letter")
        sets[language] = questions
    return Catalog(sets, default_language=default_language)


def load_catalog(path: str, default_language: str = DEFAULT_LANGUAGE) -> Catalog:
    """Load and validate the question file at ``path``.

    Any problem is reported as ``CatalogError``; callers at startup let it
    propagate so the server never runs without questions.
    """
    try:
        with open(path, encoding='utf-8') as fh:
            data = json.load(fh)
    except OSError as exc:
        raise CatalogError(f"cannot read question file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"question file {path} is not valid JSON: {exc}") from exc
    return parse_catalog(data, default_language=default_language)
