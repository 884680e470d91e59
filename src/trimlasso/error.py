class ConfigurationError(ValueError):
    """Exception raised for inconsistent or invalid solver inputs."""

    def __init__(self, message="The solver configuration is invalid."):
        self.message = message
        super().__init__(self.message)


class ExtremePointError(AssertionError):
    """Exception raised if no extreme point with exactly k active entries was found."""

    def __init__(self, message="Extreme point not found."):
        self.message = message
        super().__init__(self.message)


class SolverError(RuntimeError):
    """Exception raised if a solver backend fails to return an optimal solution."""

    def __init__(self, message="The solver backend failed.", status=None):
        self.message = message
        self.status = status
        super().__init__(self.message)


class UnsupportedCapabilityError(SolverError):
    """Exception raised if a model needs a capability the backend does not offer."""


class BigMBindingError(SolverError):
    """Exception raised if the big-M bound is binding at the optimum."""

    def __init__(
        self,
        message=(
            "The big-M constraint is binding. Increase big-M and resolve. "
            "Otherwise, re-use the same big-M and set `throw_on_binding=False`."
        ),
        beta=None,
    ):
        self.beta = beta
        super().__init__(message, status="binding")
