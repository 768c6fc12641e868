"""tvfs error types."""


class InvalidStateError(Exception):
    """Raised when an operation does not apply to a version's current state.

    Recoverable: the caller simply does not perform the action.
    """


class AlreadySealedError(InvalidStateError):
    """Raised when snapshotting a version that is already sealed."""

    def __init__(self, version_id: int) -> None:
        self.version_id = version_id
        super().__init__(f"Version {version_id} is already snapshotted")


class RootBoundaryError(InvalidStateError):
    """Raised when rolling back to the parent of the root version."""

    def __init__(self) -> None:
        super().__init__("Cannot rollback, already at root")


class EmptyHeapError(IndexError):
    """Raised on ``peek()`` / ``extract_top()`` of an empty heap.

    Callers are expected to check ``is_empty()`` first; hitting this
    means a broken invariant rather than a user error.
    """
