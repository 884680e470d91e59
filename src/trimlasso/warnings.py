class BigMBindingWarning(UserWarning):
    """Warning raised if the big-M bound is binding but the solution is returned anyway."""


class MaxIterationsWarning(UserWarning):
    """Warning raised if a heuristic stops on its iteration budget."""
