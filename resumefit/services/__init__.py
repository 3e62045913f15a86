from .scoring_service import score

__all__ = ["score"]
