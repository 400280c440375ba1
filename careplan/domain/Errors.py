"""Error kinds raised by the care plan core.

All of them are raised before any state is touched, so a caller that
catches one can assume the plan is exactly as it was.
"""


class CarePlanError(ValueError):
    """Base class for every care plan failure."""


class NotFound(CarePlanError):
    """Catalog lookup miss (care level rank or service id)."""


class UnknownDefinition(CarePlanError):
    """An assignment references a service definition the catalog does not know."""

    def __init__(self, definition_id: str):
        super().__init__(f"Unknown service definition: '{definition_id}'")
        self.definition_id = definition_id


class WrongRecurrence(CarePlanError):
    """A service was placed in a slot that does not match its recurrence kind."""

    def __init__(self, definition_id: str, slot: str):
        super().__init__(f"Service '{definition_id}' cannot be assigned to slot '{slot}'")
        self.definition_id = definition_id
        self.slot = slot


class InvalidArgument(CarePlanError):
    """Negative numeric input or an unknown slot name."""
