class StoreError(Exception):
    """Base class for faults raised by the element store."""


class StoreInitError(StoreError):
    """Raised when the store file cannot be opened, created or prepared."""


class StoreWriteError(StoreError):
    """Raised when a record cannot be written to the current batch."""


class DuplicateIdentifierError(StoreWriteError):
    """Raised by a strict store when an hjid has already been written during
    this run."""


class StoreCommitError(StoreError):
    """Raised when the current batch cannot be committed."""


class StoreReadError(StoreError):
    """Raised when a read query against the store fails."""


class ElementNotFoundError(StoreError, KeyError):
    """Raised when no element exists with the requested hjid."""

    __str__ = Exception.__str__
