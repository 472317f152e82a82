class InvalidArgumentError(ValueError):
    """Raised when a caller passes arguments outside an operation's contract."""


class ArithmeticDegenerateError(InvalidArgumentError, ArithmeticError):
    """Raised when the arguments would lead to a division by zero (e.g. a zero-width domain)."""
