"""Exception hierarchy for the health scoring engine."""


class HealthCalculatorError(Exception):
    """Base class for every error raised by the engine."""


class ValidationError(HealthCalculatorError):
    """
    An input field failed type, range or format checking.

    Attributes:
        field: Dotted field name (or column name for batch input)
        value: The value received
        expected: Description of the expected type or range
    """

    def __init__(self, field: str, value: object, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid {field}: expected {expected}, "
            f"got {type(value).__name__} ({value!r})"
        )


class CalculationError(HealthCalculatorError):
    """Unexpected failure while scoring or aggregating."""
