"""Error taxonomy shared by the library core and its adapters."""

from __future__ import annotations


class LibraryError(RuntimeError):
    """Base class for failures raised by the library core."""


class LocalStoreFault(LibraryError):
    """Raised when the local record store cannot complete an operation.

    The local store is authoritative, so this always propagates to the caller.
    """


class RemoteMirrorFault(LibraryError):
    """Raised when a mirror round trip fails (network, auth, payload)."""

    def __init__(self, message: str, *, operation: str, record_id: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.record_id = record_id


class CatalogFault(LibraryError):
    """Raised when a catalog search fails as a whole."""

    def __init__(self, message: str, *, query: str) -> None:
        super().__init__(message)
        self.query = query


class ValidationFault(LibraryError):
    """Raised when user-entered book data is incomplete or malformed."""

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message)
        self.field = field
