"""Domain error hierarchy."""


class CalorieTrackerError(Exception):
    """Base class for domain errors."""


class ValidationError(CalorieTrackerError):
    """Input is malformed or out of range."""


class EmptyCompositionError(ValidationError):
    """A food, meal or ad hoc combination has no component entries."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"A composition needs at least one {kind}")
        self.kind = kind


class UnitMismatchError(ValidationError):
    """A quantity unit cannot be converted to the component's reference unit."""

    def __init__(self, unit: str, reference_unit: str) -> None:
        super().__init__(
            f"Cannot convert '{unit}' to reference unit '{reference_unit}'"
        )
        self.unit = unit
        self.reference_unit = reference_unit


class NotFoundError(CalorieTrackerError):
    """A referenced entity does not exist."""


class SourceNotFoundError(NotFoundError):
    """A composition or logging source id does not resolve."""

    def __init__(self, kind: str, source_id: object) -> None:
        super().__init__(f"Unknown {kind}: {source_id}")
        self.kind = kind
        self.source_id = source_id


class ForbiddenError(CalorieTrackerError):
    """The operation is not allowed in the current state."""


class InvalidReferenceError(CalorieTrackerError):
    """A reference serving amount is zero, negative or not a number."""
