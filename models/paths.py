"""Path resolution for the virtual file system.

Virtual paths are rooted at "/" and never touch the host file system. The
canonical form is "/seg/seg/..." with no empty, "." or ".." segments.
"""

from models.errors import InvalidPathError

ROOT = "/"
SEPARATOR = "/"


def _split_segments(raw_path: object) -> list[str]:
    if not isinstance(raw_path, str):
        raise InvalidPathError(raw_path, "path must be a string")

    segments = []
    for segment in raw_path.strip().split(SEPARATOR):
        # Redundant separators produce empty segments; collapse them
        if not segment:
            continue
        if segment in (".", ".."):
            raise InvalidPathError(raw_path, "'.' and '..' segments are not allowed")
        if segment != segment.strip():
            raise InvalidPathError(raw_path, "segments may not start or end with whitespace")
        segments.append(segment)
    return segments


def resolve(raw_path: object) -> str:
    """Normalize a raw path into a canonical VirtualPath.

    Leading and trailing slashes are normalized and redundant separators are
    collapsed, so "src//components/App.tsx/" resolves to
    "/src/components/App.tsx".

    Args:
        raw_path: The path as supplied by the agent.

    Returns:
        The canonical path string.

    Raises:
        InvalidPathError: If the path is not a string, is empty or the bare
            root, or contains parent/current directory segments.
    """
    segments = _split_segments(raw_path)
    if not segments:
        raise InvalidPathError(raw_path, "path must name a file below the root")
    return SEPARATOR + SEPARATOR.join(segments)


def resolve_directory(raw_path: object) -> str:
    """Like resolve(), but the bare root "/" is accepted.

    Only a path made of slashes names the root; an empty or blank string is
    still rejected.

    Args:
        raw_path: The directory path as supplied by the caller.

    Returns:
        The canonical directory path ("/" for the root).

    Raises:
        InvalidPathError: If the path is malformed.
    """
    if isinstance(raw_path, str) and not raw_path.strip():
        raise InvalidPathError(raw_path, "path must not be empty")
    segments = _split_segments(raw_path)
    return SEPARATOR + SEPARATOR.join(segments)


def basename(path: object) -> str:
    """Return the final "/"-delimited segment of a path.

    Unlike resolve(), this never raises: anything that is not a non-empty
    string yields "".
    """
    if not isinstance(path, str) or not path:
        return ""
    return path.split(SEPARATOR)[-1]


def parent_of(path: str) -> str:
    """Return the parent directory of a canonical path ("/" for top level)."""
    head = path.rsplit(SEPARATOR, 1)[0]
    return head or ROOT


def ancestors_of(path: str) -> list[str]:
    """Return every proper ancestor directory of a canonical path, excluding "/".

    Example: "/a/b/c.txt" -> ["/a", "/a/b"]
    """
    segments = path.strip(SEPARATOR).split(SEPARATOR)
    return [
        SEPARATOR + SEPARATOR.join(segments[:i]) for i in range(1, len(segments))
    ]


def is_ancestor(ancestor: str, path: str) -> bool:
    """Check whether `ancestor` is a proper ancestor directory of `path`."""
    if ancestor == ROOT:
        return path != ROOT
    return path.startswith(ancestor + SEPARATOR)


def rebase(path: str, old_prefix: str, new_prefix: str) -> str:
    """Move `path` from under `old_prefix` to under `new_prefix`.

    Args:
        path: A canonical path equal to or below old_prefix.
        old_prefix: The directory (or file) being moved.
        new_prefix: Its new location.

    Returns:
        The rebased canonical path.
    """
    if path == old_prefix:
        return new_prefix
    return new_prefix + path[len(old_prefix):]
