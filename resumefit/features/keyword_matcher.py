from __future__ import annotations

import logging
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Any, Iterable, Mapping

from resumefit.core.config.scoring import get_scoring_value
from resumefit.core.config.settings import settings
from resumefit.normalize.utils import (
    contains_phrase,
    content_stems,
    is_bullet_like,
    non_empty_lines,
    phrase_pattern,
    tokenize,
)
from resumefit.schemas.keywords import (
    KeywordMatchResult,
    KeywordRecord,
    KeywordSpec,
    MatchType,
    PlacementLocation,
)
from resumefit.schemas.resume import ResumeSections
from resumefit.semantic.embeddings import EmbeddingProvider, SimpleEmbeddingProvider
from resumefit.semantic.similarity import best_window_similarity
from resumefit.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

logger = logging.getLogger(__name__)

# Section scan order; also the order placements are reported in.
_SECTION_SCAN_ORDER: tuple[str, ...] = ("skills", "summary", "experience", "projects", "education", "certifications")
_SECTION_PLACEMENT: dict[str, PlacementLocation] = {
    "skills": "skills_section",
    "summary": "summary",
    "education": "education",
    "projects": "projects",
    "certifications": "certifications",
    "other": "other",
}


@dataclass(frozen=True)
class _SectionLines:
    name: str
    lines: tuple[str, ...]


@dataclass(frozen=True)
class _LineHit:
    section: str
    line: str
    matched_text: str


def _importance_weights() -> dict[str, float]:
    return {
        str(key): float(value)
        for key, value in (get_scoring_value("keywords.importance_weights", {}) or {}).items()
    }


def _stopwords() -> frozenset[str]:
    return frozenset(str(item) for item in (get_scoring_value("matching.stopwords", []) or []))


def _build_sections(resume_sections: ResumeSections, resume_text: str) -> list[_SectionLines]:
    sections = [
        _SectionLines(name=name, lines=tuple(non_empty_lines(resume_sections.get(name))))
        for name in _SECTION_SCAN_ORDER
        if resume_sections.has(name)
    ]
    if resume_text and resume_text.strip():
        # Full text last so that content outside the parsed sections still counts, placed as "other".
        sections.append(_SectionLines(name="other", lines=tuple(non_empty_lines(resume_text))))
    return sections


def _ngrams(tokens: list[str], size: int) -> Iterable[str]:
    for index in range(0, len(tokens) - size + 1):
        yield " ".join(tokens[index : index + size])


class KeywordMatcher:
    """Three-tier keyword matcher: exact/alias, then fuzzy (synonym table or edit distance), then semantic."""

    def __init__(
        self,
        taxonomy_provider: TaxonomyProvider | None = None,
        embedding_provider: EmbeddingProvider | None = None,
        *,
        semantic_enabled: bool | None = None,
    ) -> None:
        self.taxonomy = taxonomy_provider or get_default_taxonomy_provider()
        self.embedder = embedding_provider or SimpleEmbeddingProvider(settings.embedding_dimension)
        self.semantic_enabled = settings.semantic_matching_enabled if semantic_enabled is None else semantic_enabled
        self.fuzzy_ratio = float(get_scoring_value("matching.fuzzy_ratio", 0.86))
        self.fuzzy_min_length = int(get_scoring_value("matching.fuzzy_min_token_length", 4))
        self.semantic_threshold = float(get_scoring_value("matching.similarity_thresholds.semantic", 0.7))
        self.token_weight = float(get_scoring_value("matching.semantic_blend.token_recall", 0.6))
        self.embedding_weight = float(get_scoring_value("matching.semantic_blend.embedding", 0.4))
        self.stopwords = _stopwords()
        self.placement_weights = {
            str(key): float(value)
            for key, value in (get_scoring_value("keywords.placement_weights", {}) or {}).items()
        }

    def match(
        self,
        keywords: Iterable[KeywordSpec | Mapping[str, Any]],
        resume_sections: ResumeSections | Mapping[str, Any] | None,
        resume_text: str = "",
    ) -> KeywordMatchResult:
        specs = [item if isinstance(item, KeywordSpec) else KeywordSpec.model_validate(item) for item in keywords]
        if resume_sections is None:
            resume_sections = ResumeSections()
        elif not isinstance(resume_sections, ResumeSections):
            resume_sections = ResumeSections.model_validate(resume_sections)

        sections = _build_sections(resume_sections, resume_text or "")
        records = [self._match_one(spec, sections) for spec in specs]
        coverage = calculate_coverage(records)
        logger.debug(
            "keyword_match_complete keywords=%s matched=%s coverage=%.1f",
            len(records),
            sum(1 for record in records if record.found),
            coverage,
        )
        return KeywordMatchResult(records=tuple(records), coverage=coverage)

    def _match_one(self, spec: KeywordSpec, sections: list[_SectionLines]) -> KeywordRecord:
        for match_type, tier in (
            ("exact", self._exact_hits),
            ("fuzzy", self._fuzzy_hits),
            ("semantic", self._semantic_hits),
        ):
            hits = tier(spec, sections)
            if hits:
                return self._found_record(spec, match_type, hits)
        return KeywordRecord(**spec.model_dump(), found=False, match_type="none")

    def _found_record(self, spec: KeywordSpec, match_type: MatchType, hits: list[_LineHit]) -> KeywordRecord:
        named_hits = [hit for hit in hits if hit.section != "other"] or hits
        placement: list[str] = []
        for hit in named_hits:
            if hit.section not in placement:
                placement.append(hit.section)

        locations = [self._placement_location(hit) for hit in named_hits]
        best_placement = max(locations, key=lambda location: self.placement_weights.get(location, 0.0))
        return KeywordRecord(
            **spec.model_dump(),
            found=True,
            match_type=match_type,
            placement=tuple(placement),
            best_placement=best_placement,
            matched_text=named_hits[0].matched_text,
        )

    @staticmethod
    def _placement_location(hit: _LineHit) -> PlacementLocation:
        if hit.section == "experience":
            return "experience_bullet" if is_bullet_like(hit.line) else "experience_paragraph"
        return _SECTION_PLACEMENT.get(hit.section, "other")

    def _scan(self, sections: list[_SectionLines], line_matcher) -> list[_LineHit]:
        hits: list[_LineHit] = []
        named_hit = False
        for section in sections:
            if section.name == "other" and named_hit:
                break
            for line in section.lines:
                matched_text = line_matcher(line)
                if matched_text:
                    hits.append(_LineHit(section=section.name, line=line, matched_text=matched_text))
                    named_hit = named_hit or section.name != "other"
                    if section.name == "other":
                        return hits
        return hits

    def _exact_hits(self, spec: KeywordSpec, sections: list[_SectionLines]) -> list[_LineHit]:
        surfaces = [spec.keyword, *spec.aliases]

        def _line_matcher(line: str) -> str | None:
            for surface in surfaces:
                if contains_phrase(line, surface):
                    found = phrase_pattern(surface.lower()).search(line)
                    return found.group(0) if found else surface
            return None

        return self._scan(sections, _line_matcher)

    def _synonym_surfaces(self, spec: KeywordSpec) -> list[str]:
        canonical_ids: set[str] = set()
        for surface in (spec.keyword, *spec.aliases):
            _, canonical_id = self.taxonomy.normalize_skill(surface)
            if canonical_id:
                canonical_ids.add(canonical_id)
        explicit = {surface.lower() for surface in (spec.keyword, *spec.aliases)}
        surfaces: list[str] = []
        for canonical_id in sorted(canonical_ids):
            for alias in self.taxonomy.aliases_for(canonical_id):
                if alias not in explicit and alias not in surfaces:
                    surfaces.append(alias)
        return surfaces

    def _fuzzy_hits(self, spec: KeywordSpec, sections: list[_SectionLines]) -> list[_LineHit]:
        synonyms = self._synonym_surfaces(spec)
        keyword = " ".join(tokenize(spec.keyword))
        size = len(keyword.split())
        edit_distance_allowed = size > 0 and len(keyword.replace(" ", "")) >= self.fuzzy_min_length

        def _line_matcher(line: str) -> str | None:
            for synonym in synonyms:
                if contains_phrase(line, synonym):
                    return synonym
            if not edit_distance_allowed:
                return None
            for gram in _ngrams(tokenize(line), size):
                if gram == keyword:
                    continue
                if abs(len(gram) - len(keyword)) > max(2, len(keyword) // 4):
                    continue
                if SequenceMatcher(None, keyword, gram).ratio() >= self.fuzzy_ratio:
                    return gram
            return None

        return self._scan(sections, _line_matcher)

    def _semantic_hits(self, spec: KeywordSpec, sections: list[_SectionLines]) -> list[_LineHit]:
        if not self.semantic_enabled:
            return []
        query = content_stems(spec.keyword, self.stopwords)
        if len(set(query)) < 2:
            return []

        def _line_matcher(line: str) -> str | None:
            line_stems = content_stems(line, self.stopwords)
            similarity, window = best_window_similarity(
                query,
                line_stems,
                self.embedder,
                token_weight=self.token_weight,
                embedding_weight=self.embedding_weight,
            )
            if similarity >= self.semantic_threshold:
                return window
            return None

        return self._scan(sections, _line_matcher)


def calculate_coverage(records: Iterable[KeywordRecord]) -> float:
    weights = _importance_weights()
    total = 0.0
    matched = 0.0
    for record in records:
        weight = weights.get(record.importance, weights.get("medium", 0.6))
        total += weight
        if record.found:
            matched += weight
    if total <= 0:
        return 100.0
    return round(max(0.0, min(100.0, matched / total * 100.0)), 2)


def match_keywords(
    keywords: Iterable[KeywordSpec | Mapping[str, Any]],
    resume_sections: ResumeSections | Mapping[str, Any] | None,
    resume_text: str = "",
    *,
    taxonomy_provider: TaxonomyProvider | None = None,
    embedding_provider: EmbeddingProvider | None = None,
) -> KeywordMatchResult:
    matcher = KeywordMatcher(taxonomy_provider=taxonomy_provider, embedding_provider=embedding_provider)
    return matcher.match(keywords, resume_sections, resume_text)
