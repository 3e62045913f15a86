from __future__ import annotations

import hashlib
import math
from typing import Protocol

from resumefit.normalize.utils import tokenize


class EmbeddingProvider(Protocol):
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Return vector embeddings for input texts."""


class SimpleEmbeddingProvider(EmbeddingProvider):
    """Deterministic hashed bag-of-tokens embedding; no model download, identical output across runs."""

    def __init__(self, dimension: int = 64) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be greater than 0")
        self.dimension = dimension
        self._bucket_cache: dict[str, int] = {}

    def embed(self, texts: list[str]) -> list[list[float]]:
        return [self._embed_single(text) for text in texts]

    def _bucket(self, token: str) -> int:
        index = self._bucket_cache.get(token)
        if index is None:
            digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
            index = int(digest[:8], 16) % self.dimension
            self._bucket_cache[token] = index
        return index

    def _embed_single(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for token in tokenize(text):
            vector[self._bucket(token)] += 1.0

        norm = math.sqrt(sum(value * value for value in vector))
        if norm <= 0:
            return vector
        return [value / norm for value in vector]


def cosine_similarity(left: list[float], right: list[float]) -> float:
    if len(left) != len(right):
        return 0.0
    dot = sum(a * b for a, b in zip(left, right))
    left_norm = math.sqrt(sum(a * a for a in left))
    right_norm = math.sqrt(sum(b * b for b in right))
    if left_norm <= 0 or right_norm <= 0:
        return 0.0
    return dot / (left_norm * right_norm)
