from .trimmed_lasso import TrimmedLasso

__all__ = ["TrimmedLasso"]
