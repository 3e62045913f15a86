from .embeddings import EmbeddingProvider, SimpleEmbeddingProvider, cosine_similarity
from .similarity import best_window_similarity, token_recall

__all__ = [
    "EmbeddingProvider",
    "SimpleEmbeddingProvider",
    "cosine_similarity",
    "best_window_similarity",
    "token_recall",
]
