"""In-memory virtual file system.

The VirtualFileSystem is the single owner of all FileNodes in a project
session. Directories are implicit: a directory exists while at least one
file lives below it. Every public operation is atomic with respect to the
tree and leaves it untouched when it raises.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field, field_validator

from models import paths
from models.errors import (
    InvalidPathError,
    InvariantViolationError,
    LineOutOfRangeError,
    NoHistoryError,
    NoMatchError,
    NotFoundError,
    PathExistsError,
)
from models.file_node import FileNode, insert_after_line
from models.history import DEFAULT_HISTORY_LIMIT
from models.project import ProjectSnapshot

logger = logging.getLogger(__name__)


class FileSystemChange(BaseModel):
    """Notification sent to subscribers after a successful mutation.

    Args:
        operation: Store operation that ran (create, replace, insert, undo, rename, delete, load, clear).
        paths: Paths whose content or existence changed.
        revision: Tree revision after the change.
    """

    operation: str
    paths: list[str] = Field(default_factory=list)
    revision: int


FileSystemListener = Callable[[FileSystemChange], None]


def _find_shape_conflict(all_paths: set[str]) -> Optional[tuple[str, str]]:
    """Find a path that is both a file and the ancestor of another file.

    Returns:
        (ancestor_file, descendant_file) for the first conflict, or None.
    """
    for path in sorted(all_paths):
        for ancestor in paths.ancestors_of(path):
            if ancestor in all_paths:
                return ancestor, path
    return None


class VirtualFileSystem(BaseModel):
    """Tree of files addressed by canonical virtual paths.

    Attributes:
        nodes: Mapping of canonical path to FileNode.
        history_limit: Maximum undo depth kept per file.
        revision: Tree-wide counter, incremented by every mutation.
    """

    nodes: dict[str, FileNode] = Field(default_factory=dict)
    history_limit: int = Field(default=DEFAULT_HISTORY_LIMIT)
    revision: int = Field(default=0, ge=0)

    class Config:
        arbitrary_types_allowed = True

    def __init__(self, **data):
        """Initialize with private attributes."""
        super().__init__(**data)
        self._lock = threading.RLock()
        self._listeners: list[FileSystemListener] = []

    @field_validator("history_limit")
    @classmethod
    def validate_history_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("history_limit must be positive")
        return v

    # ===== Subscriptions =====

    def subscribe(self, listener: FileSystemListener) -> Callable[[], None]:
        """Register a listener for change notifications.

        Editor and preview components use this instead of polling the
        revision counter.

        Args:
            listener: Callable receiving a FileSystemChange after each mutation.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, operation: str, changed: list[str]) -> None:
        change = FileSystemChange(
            operation=operation, paths=changed, revision=self.revision
        )
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception as e:
                # A broken subscriber must not undo a committed change
                logger.error(
                    f"File system listener failed on {operation} {changed}: {e}",
                    exc_info=True,
                )

    def _bump(self) -> int:
        self.revision += 1
        return self.revision

    # ===== Queries =====

    def exists(self, path: str) -> bool:
        """True if a file exists at the canonical path."""
        return path in self.nodes

    def is_directory(self, path: str) -> bool:
        """True if at least one file lives below the canonical path."""
        if path == paths.ROOT:
            return True
        return any(paths.is_ancestor(path, p) for p in self.nodes)

    def list_files(self) -> set[str]:
        """Return the set of all file paths."""
        with self._lock:
            return set(self.nodes)

    def read_file(self, path: str) -> str:
        """Return the content of a file.

        Args:
            path: Raw or canonical path of the file.

        Raises:
            InvalidPathError: If the path is malformed.
            NotFoundError: If no file exists at the path.
        """
        return self.read(path)["content"]

    def list_directory(self, path: str = paths.ROOT) -> list[dict[str, Any]]:
        """List the immediate children of a directory.

        Args:
            path: Raw or canonical directory path ("/" for the root).

        Returns:
            Sorted list of {"name", "path", "type"} dicts, where type is
            "file" or "directory".

        Raises:
            NotFoundError: If the directory does not exist.
        """
        directory = paths.resolve_directory(path)
        with self._lock:
            if directory != paths.ROOT and not self.is_directory(directory):
                raise NotFoundError(directory)

            prefix = directory.rstrip(paths.SEPARATOR) + paths.SEPARATOR
            children: dict[str, str] = {}
            for file_path in self.nodes:
                if not file_path.startswith(prefix):
                    continue
                rest = file_path[len(prefix):]
                name, _, tail = rest.partition(paths.SEPARATOR)
                children[name] = "directory" if tail else "file"

            return [
                {"name": name, "path": prefix + name, "type": kind}
                for name, kind in sorted(children.items())
            ]

    # ===== Store Operations =====

    def create(self, path: str, content: str) -> dict[str, Any]:
        """Create a new file.

        Args:
            path: Raw or canonical path of the new file.
            content: Initial content.

        Returns:
            Dict with path and revision (always 0).

        Raises:
            InvalidPathError: If the path is malformed.
            PathExistsError: If a file or directory already occupies the path,
                or a parent path is a file.
        """
        target = paths.resolve(path)
        with self._lock:
            if target in self.nodes:
                raise PathExistsError(target)
            if self.is_directory(target):
                raise PathExistsError(target, "a directory exists at this path")
            for ancestor in paths.ancestors_of(target):
                if ancestor in self.nodes:
                    raise PathExistsError(ancestor, f"parent of {target} is a file")

            node = FileNode.new(target, content, history_limit=self.history_limit)
            self.nodes[target] = node
            self._bump()
            logger.debug(f"Created {target} ({len(content)} chars)")

        self._notify("create", [target])
        return {"path": target, "revision": node.revision}

    def read(self, path: str) -> dict[str, Any]:
        """Read a file's current content and revision.

        Raises:
            InvalidPathError: If the path is malformed.
            NotFoundError: If no file exists at the path.
        """
        target = paths.resolve(path)
        with self._lock:
            node = self._require(target)
            return {"path": target, "content": node.content, "revision": node.revision}

    def replace(self, path: str, match: str, replacement: str) -> dict[str, Any]:
        """Replace the single occurrence of `match` with `replacement`.

        An ambiguous match is rejected rather than resolved to the first hit,
        because the agent's view of the file may have drifted.

        Args:
            path: Raw or canonical path of the file.
            match: Text that must occur exactly once.
            replacement: Text to substitute.

        Returns:
            Dict with path and new revision.

        Raises:
            InvalidPathError: If the path is malformed.
            NotFoundError: If the file does not exist.
            NoMatchError: If match occurs zero or several times (or is empty).
        """
        target = paths.resolve(path)
        with self._lock:
            node = self._require(target)
            occurrences = node.content.count(match) if match else 0
            if occurrences != 1:
                raise NoMatchError(target, occurrences)

            node.apply_content(node.content.replace(match, replacement, 1), "replace")
            self._bump()
            logger.debug(f"Replaced text in {target}, now at revision {node.revision}")
            result = {"path": target, "revision": node.revision}

        self._notify("replace", [target])
        return result

    def insert(self, path: str, after_line: int, text: str) -> dict[str, Any]:
        """Insert `text` after line `after_line` (0 inserts at the top).

        Raises:
            InvalidPathError: If the path is malformed.
            NotFoundError: If the file does not exist.
            LineOutOfRangeError: If after_line is negative or past the last line.
        """
        target = paths.resolve(path)
        with self._lock:
            node = self._require(target)
            line_count = node.line_count
            if after_line < 0 or after_line > line_count:
                raise LineOutOfRangeError(target, after_line, line_count)

            node.apply_content(insert_after_line(node.content, after_line, text), "insert")
            self._bump()
            logger.debug(
                f"Inserted {len(text)} chars after line {after_line} of {target}"
            )
            result = {"path": target, "revision": node.revision, "line": after_line}

        self._notify("insert", [target])
        return result

    def undo(self, path: str) -> dict[str, Any]:
        """Restore the content a file had before its latest mutation.

        Raises:
            InvalidPathError: If the path is malformed.
            NotFoundError: If the file does not exist (deleted files keep no history).
            NoHistoryError: If the file has no snapshots left.
        """
        target = paths.resolve(path)
        with self._lock:
            node = self._require(target)
            if not node.history.can_undo:
                raise NoHistoryError(target)

            restored = node.restore_previous()
            self._bump()
            logger.debug(
                f"Undid {restored.operation} on {target}, "
                f"{node.history.depth} snapshots left"
            )
            result = {
                "path": target,
                "revision": node.revision,
                "undone_operation": restored.operation,
                "remaining_history": node.history.depth,
            }

        self._notify("undo", [target])
        return result

    def rename(self, old_path: str, new_path: str) -> dict[str, Any]:
        """Move a file, or a directory with everything below it.

        History and revision travel with each moved node.

        Args:
            old_path: Raw or canonical source path.
            new_path: Raw or canonical destination path.

        Returns:
            Dict with old_path, new_path and a moved list of [old, new] pairs.

        Raises:
            InvalidPathError: If either path is malformed, or a directory
                would be moved below itself.
            NotFoundError: If nothing exists at old_path.
            PathExistsError: If new_path is occupied or the move would put a
                file below another file.
        """
        source = paths.resolve(old_path)
        destination = paths.resolve(new_path)
        with self._lock:
            if source in self.nodes:
                moving = [source]
            elif self.is_directory(source):
                moving = sorted(p for p in self.nodes if paths.is_ancestor(source, p))
            else:
                raise NotFoundError(source)

            if destination in self.nodes or self.is_directory(destination):
                raise PathExistsError(destination)
            if paths.is_ancestor(source, destination):
                raise InvalidPathError(new_path, "cannot move a path below itself")

            moves = {p: paths.rebase(p, source, destination) for p in moving}
            remaining = set(self.nodes) - set(moves)
            conflict = _find_shape_conflict(remaining | set(moves.values()))
            if conflict is not None:
                raise PathExistsError(conflict[0], f"parent of {conflict[1]} is a file")

            for old, new in moves.items():
                node = self.nodes.pop(old)
                node.path = new
                self.nodes[new] = node
            self._bump()
            logger.debug(f"Renamed {source} -> {destination} ({len(moves)} files)")

        self._notify("rename", list(moves) + list(moves.values()))
        return {
            "old_path": source,
            "new_path": destination,
            "moved": [[old, new] for old, new in moves.items()],
        }

    def delete(self, path: str) -> dict[str, Any]:
        """Delete a file, or a directory with everything below it.

        Deletion is permanent: the history goes with the node.

        Raises:
            InvalidPathError: If the path is malformed.
            NotFoundError: If nothing exists at the path.
        """
        target = paths.resolve(path)
        with self._lock:
            if target in self.nodes:
                doomed = [target]
            elif self.is_directory(target):
                doomed = sorted(p for p in self.nodes if paths.is_ancestor(target, p))
            else:
                raise NotFoundError(target)

            for p in doomed:
                del self.nodes[p]
            self._bump()
            logger.debug(f"Deleted {target} ({len(doomed)} files)")

        self._notify("delete", doomed)
        return {"path": target, "deleted": doomed}

    def view(
        self, path: str, view_range: Optional[tuple[int, int]] = None
    ) -> dict[str, Any]:
        """Presentation-only read of a file or directory.

        Never touches history or revisions. For a file, an optional 1-based
        inclusive view_range selects lines (end -1 means end of file). For a
        directory, returns its listing.

        Raises:
            InvalidPathError: If the path is malformed.
            NotFoundError: If nothing exists at the path.
            LineOutOfRangeError: If view_range falls outside the file.
        """
        target = paths.resolve_directory(path)
        with self._lock:
            if target not in self.nodes:
                if self.is_directory(target):
                    return {
                        "path": target,
                        "type": "directory",
                        "entries": self.list_directory(target),
                    }
                raise NotFoundError(target)

            node = self.nodes[target]
            result = {
                "path": target,
                "type": "file",
                "content": node.content,
                "revision": node.revision,
                "line_count": node.line_count,
            }
            if view_range is None:
                return result

            start, end = view_range
            lines = node.content.splitlines(keepends=True)
            if start < 1 or start > len(lines):
                raise LineOutOfRangeError(target, start, len(lines))
            if end == -1:
                end = len(lines)
            if end < start or end > len(lines):
                raise LineOutOfRangeError(target, end, len(lines))

            selected = lines[start - 1 : end]
            result["content"] = "".join(selected)
            result["view_range"] = [start, end]
            result["lines"] = [
                [number, line.rstrip("\r\n")]
                for number, line in enumerate(selected, start=start)
            ]
            return result

    # ===== Snapshots =====

    def get_snapshot(self) -> ProjectSnapshot:
        """Return a consistent copy of the whole tree."""
        with self._lock:
            return ProjectSnapshot(
                files={p: n.content for p, n in self.nodes.items()},
                revisions={p: n.revision for p, n in self.nodes.items()},
                revision=self.revision,
                taken_at=datetime.now(timezone.utc),
            )

    def load_snapshot(self, files: dict[str, str]) -> int:
        """Replace the whole tree with the given path -> content mapping.

        Loaded files start at revision 0 with empty history.

        Returns:
            Number of files loaded.

        Raises:
            InvalidPathError: If any path is malformed.
            PathExistsError: If two paths resolve to the same file, or a file
                would sit below another file.
        """
        resolved: dict[str, str] = {}
        for raw, content in files.items():
            target = paths.resolve(raw)
            if target in resolved:
                raise PathExistsError(target, "duplicate path in snapshot")
            resolved[target] = content

        conflict = _find_shape_conflict(set(resolved))
        if conflict is not None:
            raise PathExistsError(conflict[0], f"parent of {conflict[1]} is a file")

        with self._lock:
            self.nodes = {
                p: FileNode.new(p, c, history_limit=self.history_limit)
                for p, c in resolved.items()
            }
            self._bump()

        self._notify("load", sorted(resolved))
        return len(resolved)

    def clear(self) -> int:
        """Remove every file. Returns the number of files removed."""
        with self._lock:
            removed = sorted(self.nodes)
            self.nodes.clear()
            self._bump()
        self._notify("clear", removed)
        return len(removed)

    def validate_state(self) -> list[str]:
        """Check tree invariants and return any violations.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors = []
        with self._lock:
            for key, node in self.nodes.items():
                if key != node.path:
                    errors.append(f"Node stored at {key} reports path {node.path}")
                try:
                    if paths.resolve(key) != key:
                        errors.append(f"Path {key} is not canonical")
                except InvalidPathError as e:
                    errors.append(str(e))
                if node.history.depth > self.history_limit:
                    errors.append(
                        f"History of {key} holds {node.history.depth} entries "
                        f"(limit {self.history_limit})"
                    )

            conflict = _find_shape_conflict(set(self.nodes))
            if conflict is not None:
                errors.append(f"File {conflict[0]} is also the parent of {conflict[1]}")
        return errors

    def assert_valid(self) -> None:
        """Raise InvariantViolationError if validate_state() finds problems."""
        errors = self.validate_state()
        if errors:
            raise InvariantViolationError("; ".join(errors))

    # ===== Helpers =====

    def _require(self, path: str) -> FileNode:
        node = self.nodes.get(path)
        if node is None:
            raise NotFoundError(path)
        return node

    @property
    def summary(self) -> str:
        """Brief human-readable summary of the tree."""
        return f"{len(self.nodes)} files at revision {self.revision}"
