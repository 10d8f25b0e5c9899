class RingError(Exception):
    """Base class for errors raised by a consistent hashing ring."""


class InvalidWeightError(RingError, ValueError):
    def __init__(self, target, weight, reason: str = ""):
        self.target = target
        self.weight = weight
        message = f"Invalid weight {weight!r} for target {target!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidTargetError(RingError, TypeError):
    """Targets in one ring must be mutually orderable."""


class InvalidPointError(RingError, ValueError):
    pass


class EmptyRingError(RingError, LookupError):
    def __init__(self, message: str = "No targets configured"):
        super().__init__(message)


class RingInvariantError(RingError, RuntimeError):
    """The ring has active targets but no points; a rebuild was skipped."""
