from __future__ import annotations

import json
import re
from pathlib import Path

from .provider import TaxonomyProvider

_WHITESPACE_PATTERN = re.compile(r"\s+")


class LocalTaxonomy(TaxonomyProvider):
    def __init__(self, synonyms_path: str | Path | None = None) -> None:
        path = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        self._synonyms = self._load_synonyms(path)
        aliases: dict[str, list[str]] = {}
        for surface, canonical_id in self._synonyms.items():
            aliases.setdefault(canonical_id, []).append(surface)
        self._aliases = {key: tuple(sorted(values)) for key, values in aliases.items()}

    @staticmethod
    def _load_synonyms(path: Path) -> dict[str, str]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        return {_normalize(str(key)): str(value) for key, value in raw.items()}

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        normalized = _normalize(raw)
        canonical_skill_id = self._synonyms.get(normalized)
        return normalized, canonical_skill_id

    def aliases_for(self, canonical_skill_id: str) -> tuple[str, ...]:
        return self._aliases.get(canonical_skill_id, ())


def _normalize(raw: str) -> str:
    return _WHITESPACE_PATTERN.sub(" ", raw.strip().lower())
