class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class LocationUnavailableError(DomainError):
    """Raised when no location fix can be obtained (provider disabled, no fix, timeout)."""


class OutOfRangeError(DomainError):
    """Raised when the device is outside the office geofence."""

    def __init__(self, distance_m: float, radius_m: float):
        super().__init__(f"Device is {distance_m:.1f} m from the office (allowed {radius_m:.1f} m)")
        self.distance_m = distance_m
        self.radius_m = radius_m


class StoreError(DomainError):
    """Raised when the record store query or write fails."""


class SinkError(DomainError):
    """Raised when forwarding a record to the reporting sink fails."""


class DataIntegrityError(DomainError):
    """Raised when a device already has more records for a day than allowed."""

    def __init__(self, device_id: str, work_date, matches: int):
        super().__init__(f"{matches} records found for device {device_id} on {work_date}")
        self.device_id = device_id
        self.work_date = work_date
        self.matches = matches
