from __future__ import annotations

from .embeddings import EmbeddingProvider, cosine_similarity


def token_recall(query: list[str], window: list[str]) -> float:
    """Share of distinct query tokens present in the window."""
    wanted = set(query)
    if not wanted:
        return 0.0
    return len(wanted & set(window)) / len(wanted)


def best_window_similarity(
    query_stems: list[str],
    line_stems: list[str],
    embedder: EmbeddingProvider,
    *,
    token_weight: float = 0.6,
    embedding_weight: float = 0.4,
) -> tuple[float, str]:
    """Score the closest window of a line against a multi-word query.

    Windows are one token wider than the query so that a single inserted word
    ("pipelines for data") still lines up. Returns the blended similarity and
    the winning window text.
    """
    if not query_stems or not line_stems:
        return 0.0, ""

    size = min(len(line_stems), len(query_stems) + 1)
    query_text = " ".join(query_stems)
    windows = [line_stems[start : start + size] for start in range(0, len(line_stems) - size + 1)]
    window_texts = [" ".join(window) for window in windows]
    vectors = embedder.embed([query_text, *window_texts])
    query_vector = vectors[0]

    best_score = 0.0
    best_text = ""
    for window, window_text, vector in zip(windows, window_texts, vectors[1:]):
        recall = token_recall(query_stems, window)
        if recall <= 0:
            continue
        similarity = (token_weight * recall) + (embedding_weight * cosine_similarity(query_vector, vector))
        if similarity > best_score:
            best_score = similarity
            best_text = window_text
    return min(1.0, best_score), best_text
