class BookingSourceError(RuntimeError):
    """Raised when the bookings/catalog API fails (timeouts, network errors, bad payloads)."""
    pass
