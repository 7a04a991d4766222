"""lebesgue.errors

The errors raised when a caller violates the precondition of a volume,
scaling or cover query. Arithmetic on ``ENNReal`` never raises.
"""


class VolumeError(Exception):
    """Base class of all precondition violations."""


class SingularMatrix(VolumeError):
    def __init__(self, determinant: float) -> None:
        super().__init__(f"matrix is singular (determinant {determinant!r})")
        self.determinant = determinant


class Unrepresentable(VolumeError):
    """An infinite value was coerced to a finite number."""


class NotMeasurable(VolumeError):
    def __init__(self, obj: object, reason: str = "") -> None:
        msg = f"{obj!r} is not measurable"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.obj = obj


class DomainMismatch(VolumeError):
    def __init__(self, expected: tuple, actual: tuple) -> None:
        super().__init__(f"axis mismatch: expected {expected!r}, got {actual!r}")
        self.expected = expected
        self.actual = actual


class NotAlmostEverywhere(VolumeError):
    """An exceptional set handed to an a.e. witness has positive volume."""

    def __init__(self, exceptional: object) -> None:
        super().__init__(f"exceptional set {exceptional!s} is not null")
        self.exceptional = exceptional
