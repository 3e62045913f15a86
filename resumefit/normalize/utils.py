from __future__ import annotations

import re
from functools import lru_cache

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►▸-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_TOKEN_PATTERN = re.compile(r"[a-z0-9\+#]+(?:[\.\-/][a-z0-9\+#]+)*")
_WORD_PATTERN = re.compile(r"\S+")
_SECTION_RE = re.compile(
    r"^\s*(summary|professional summary|objective|profile|experience|work experience|professional experience|"
    r"employment history|skills|technical skills|education|projects|project experience|certifications)\s*:?\s*$",
    re.IGNORECASE,
)
_ACTION_RE = re.compile(r"^\s*[A-Z][a-z]*(?:ed|t)\s")
_SKILL_SPLIT_RE = re.compile(r"[,;•●○◦\n|]")
_SKILL_HEADER_RE = re.compile(
    r"^(?:(?:technical\s+)?skills?|(?:core\s+)?competenc(?:y|ies)|languages?|frameworks?|tools?|"
    r"technologies|databases?)\s*(?::\s*|$)",
    re.IGNORECASE,
)
_STEM_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("ations", "ate"),
    ("ation", "ate"),
    ("ments", ""),
    ("ment", ""),
    ("ings", ""),
    ("ing", ""),
    ("ies", "y"),
    ("ers", ""),
    ("er", ""),
    ("ed", ""),
    ("s", ""),
)


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def non_empty_lines(text: str | None) -> list[str]:
    if not text:
        return []
    return [normalize_line(line) for line in text.splitlines() if line.strip()]


def is_bullet_like(line: str) -> bool:
    return bool(_BULLET_PATTERN.match(line))


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line).strip()


def is_section_heading(line: str) -> bool:
    stripped = normalize_line(line)
    if not stripped:
        return False
    return bool(_SECTION_RE.match(stripped))


def count_words(text: str | None) -> int:
    if not text:
        return 0
    return len(_WORD_PATTERN.findall(text))


def tokenize(text: str) -> list[str]:
    return _TOKEN_PATTERN.findall(text.lower())


def stem(token: str) -> str:
    """Crude suffix stripping, enough to line up 'pipelines'/'pipeline' or 'deployed'/'deploy'."""
    if len(token) <= 4 or not token.isalpha():
        return token
    stemmed = token
    for suffix, replacement in _STEM_SUFFIXES:
        if suffix == "s" and token.endswith("ss"):
            continue
        if token.endswith(suffix) and len(token) - len(suffix) >= 3:
            stemmed = token[: -len(suffix)] + replacement
            break
    if len(stemmed) > 4 and stemmed.endswith("e"):
        stemmed = stemmed[:-1]
    return stemmed


def content_stems(text: str, stopwords: frozenset[str]) -> list[str]:
    return [stem(token) for token in tokenize(text) if token not in stopwords]


@lru_cache(maxsize=2048)
def phrase_pattern(phrase: str) -> re.Pattern[str]:
    """Case-insensitive pattern that matches a phrase only on word boundaries.

    Lookarounds are used instead of ``\\b`` so that terms ending in symbols
    (``c++``, ``c#``, ``node.js``) still match, while ``java`` does not match
    inside ``javascript``.
    """
    words = [re.escape(part) for part in phrase.strip().split()]
    body = r"[\s\-/]+".join(words)
    return re.compile(rf"(?<![A-Za-z0-9+#]){body}(?![A-Za-z0-9+#]|\.[A-Za-z0-9])", re.IGNORECASE)


def contains_phrase(text: str, phrase: str) -> bool:
    if not phrase.strip():
        return False
    return bool(phrase_pattern(phrase.lower()).search(text))


def extract_bullets(text: str | None) -> list[str]:
    """Return bullet-point statements from a section.

    Bullet-marked lines win. Sections written without markers fall back to
    accomplishment-style lines (capitalized past-tense verb, sentence length).
    """
    lines = non_empty_lines(text)
    bullets: list[str] = []
    seen: set[str] = set()
    for line in lines:
        if not is_bullet_like(line):
            continue
        body = strip_bullet_prefix(line)
        key = body.lower()
        if len(body) > 10 and key not in seen:
            seen.add(key)
            bullets.append(body)
    if bullets:
        return bullets

    for line in lines:
        key = line.lower()
        if len(line) > 30 and _ACTION_RE.match(line) and key not in seen:
            seen.add(key)
            bullets.append(line)
    return bullets


def extract_entries(text: str | None) -> list[str]:
    """Return list entries of a section: bullets when present, otherwise one entry per content line."""
    bullets = extract_bullets(text)
    if bullets:
        return bullets
    return [line for line in non_empty_lines(text) if not is_section_heading(line)]


def split_skill_items(text: str | None) -> list[str]:
    if not text:
        return []
    items: list[str] = []
    for raw in _SKILL_SPLIT_RE.split(text):
        item = _SKILL_HEADER_RE.sub("", strip_bullet_prefix(raw.strip())).strip()
        if len(item) < 2:
            continue
        items.append(item)
    return items
