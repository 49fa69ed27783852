
class InvalidArgument(ValueError):
    """Raised when an argument violates a precondition (sample count, step size, point count)."""


class UnsupportedValueType(TypeError):
    """Raised when point values have no distance/displacement primitive."""

    def __init__(self, value, operation: str):
        self.value = value
        self.operation = operation
        super().__init__(
            f"data values type '{type(value).__name__}' isn't supported in '{operation}'"
        )
