"""Per-file version tree: an arena of version nodes with one active node."""

import time
from dataclasses import dataclass, field
from typing import Callable, Iterator

from .errors import AlreadySealedError, RootBoundaryError
from .index.chained import DEFAULT_CAPACITY, ChainedIndex
from .timefmt import format_timestamp

ROOT_ID = 0
ROOT_MESSAGE = "Initial Snapshot"
DEFAULT_SEPARATOR = " "

Clock = Callable[[], float]


@dataclass
class VersionNode:
    """One version of a file.

    A node with snapshot metadata is *sealed* and is never edited in
    place again. Links to parent and children are version ids into the
    owning tree's arena.
    """

    version_id: int
    content: str
    created_at: float
    parent_id: int | None = None
    children: list[int] = field(default_factory=list)
    snapshot_at: float | None = None
    message: str | None = None

    @property
    def sealed(self) -> bool:
        return self.snapshot_at is not None

    def seal(self, message: str, when: float) -> None:
        self.message = message
        self.snapshot_at = when


@dataclass(frozen=True)
class HistoryEntry:
    """A sealed version on the path from the root to the active node."""

    version_id: int
    timestamp: float
    message: str

    @property
    def formatted_time(self) -> str:
        return format_timestamp(self.timestamp)

    def __str__(self) -> str:
        return (
            f"ID: {self.version_id}, Timestamp: {self.formatted_time}, "
            f"Message: {self.message}"
        )


class VersionTree:
    """The edit history of a single file.

    The tree starts with a sealed root (id 0, empty content). Edits go to
    the *active* node:

    - ``insert()`` / ``update()`` on a sealed node create a new unsealed
      child and make it active; on an unsealed node they edit in place.
    - ``snapshot()`` seals the active node.
    - ``rollback()`` moves the active pointer to the parent, or to any
      version by id.
    - ``history()`` lists the sealed versions from root to active.

    Nodes live in an arena indexed by version id and are never removed.
    """

    def __init__(
        self,
        filename: str,
        *,
        clock: Clock = time.time,
        separator: str = DEFAULT_SEPARATOR,
        index_capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self.filename = filename
        self._clock = clock
        self._separator = separator

        now = clock()
        root = VersionNode(version_id=ROOT_ID, content="", created_at=now)
        root.seal(ROOT_MESSAGE, now)

        self._nodes: list[VersionNode] = [root]
        self._index: ChainedIndex[int, int] = ChainedIndex(index_capacity)
        self._index.insert(ROOT_ID, 0)
        self._active = ROOT_ID
        self._last_modified = now

    # -- State --

    @property
    def root(self) -> VersionNode:
        return self._nodes[0]

    @property
    def active(self) -> VersionNode:
        return self._nodes[self._active]

    @property
    def active_id(self) -> int:
        return self._active

    @property
    def version_count(self) -> int:
        """Total versions ever created, root included."""
        return len(self._nodes)

    @property
    def last_modified(self) -> float:
        return self._last_modified

    def node(self, version_id: int) -> VersionNode | None:
        """Look up any version by id."""
        slot = self._index.find(version_id)
        if slot is None:
            return None
        return self._nodes[slot]

    def __len__(self) -> int:
        return len(self._nodes)

    # -- Edits --

    def insert(self, text: str) -> VersionNode:
        """Append ``text`` to the active content."""
        return self._write(self._join(self.active.content, text))

    def update(self, text: str) -> VersionNode:
        """Replace the active content with ``text``."""
        return self._write(text)

    def snapshot(self, message: str) -> VersionNode:
        """Seal the active version in place.

        Raises:
            AlreadySealedError: If the active version is already sealed.
        """
        node = self.active
        if node.sealed:
            raise AlreadySealedError(node.version_id)
        node.seal(message, self._clock())
        return node

    def rollback(self, version_id: int | None = None) -> bool:
        """Move the active pointer.

        With no ``version_id``, move to the parent of the active version.
        With one, jump to that version, which need not be an ancestor.

        Returns:
            True if the active version moved, False if ``version_id``
            does not exist.

        Raises:
            RootBoundaryError: If no id is given and the active version
                is the root.
        """
        if version_id is None:
            parent = self.active.parent_id
            if parent is None:
                raise RootBoundaryError()
            self._active = parent
            return True

        slot = self._index.find(version_id)
        if slot is None:
            return False
        self._active = self._nodes[slot].version_id
        return True

    # -- Reads --

    def read(self) -> str:
        return self.active.content

    def path(self) -> list[VersionNode]:
        """Nodes from the root down to the active version."""
        return list(reversed(list(self._ancestry())))

    def depth(self) -> int:
        """Number of parent hops from the active version to the root."""
        return sum(1 for _ in self._ancestry()) - 1

    def history(self) -> list[HistoryEntry]:
        """Sealed versions on the root-to-active path, oldest first."""
        return [
            HistoryEntry(
                version_id=node.version_id,
                timestamp=node.snapshot_at,
                message=node.message or "",
            )
            for node in self.path()
            if node.snapshot_at is not None
        ]

    # -- Internal --

    def _ancestry(self) -> Iterator[VersionNode]:
        current: int | None = self._active
        while current is not None:
            node = self._nodes[current]
            yield node
            current = node.parent_id

    def _join(self, base: str, text: str) -> str:
        if not base:
            return text
        return f"{base}{self._separator}{text}"

    def _write(self, content: str) -> VersionNode:
        now = self._clock()
        node = self.active
        if node.sealed:
            node = self._new_child(node, content, now)
            self._active = node.version_id
        else:
            node.content = content
        self._last_modified = now
        return node

    def _new_child(self, parent: VersionNode, content: str, now: float) -> VersionNode:
        child = VersionNode(
            version_id=len(self._nodes),
            content=content,
            created_at=now,
            parent_id=parent.version_id,
        )
        self._nodes.append(child)
        parent.children.append(child.version_id)
        self._index.insert(child.version_id, child.version_id)
        return child
