class TransitError(Exception):
    """Base class for errors raised by the booking, complaint and bus services."""


class NotFoundError(TransitError):
    pass


class InvalidPayloadError(TransitError):
    pass


class ConcurrentUpdateError(TransitError):
    pass


class StoreError(TransitError):
    """The key-value store failed to read or write."""
