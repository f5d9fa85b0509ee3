
class SlotSelectionError(ValueError):
    """Raised when a requested start time cannot be reserved."""

    kind = "slot_selection"


class SlotNotFound(SlotSelectionError):
    """Requested time is not part of the day's slot catalog."""

    kind = "slot_not_found"


class InsufficientTrailingCapacity(SlotSelectionError):
    """Appointment would run past closing time."""

    kind = "insufficient_trailing_capacity"


class SlotConflict(SlotSelectionError):
    """At least one slot of the requested run is already booked."""

    kind = "slot_conflict"


class DurationUnset(SlotSelectionError):
    """No service selected, so there is nothing to reserve."""

    kind = "duration_unset"


class UnknownServiceError(ValueError):
    """Raised when a service name is not in the catalog."""
    pass


class NonSelectableDateError(ValueError):
    """Raised for past or weekend dates."""
    pass


class BookingIncompleteError(ValueError):
    """Raised when confirming without a date, time or services."""
    pass


class InvalidSessionIdError(ValueError):
    """Raised for session ids that are not plain letters, digits, dashes or underscores."""
    pass


class BackendUpstreamError(RuntimeError):
    """Raised when the storage or identity backend fails (timeouts, network errors, 5xx)."""
    pass


class BackendContractError(RuntimeError):
    """Raised when the backend returns data that does not match the booking record shape."""
    pass
