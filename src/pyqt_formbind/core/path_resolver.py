"""
Dotted path access into schema-less models.

Models are plain JSON-like values: dicts, lists, strings, numbers, booleans
and None. Paths are dot separated segment lists ("customer.address.city").

Reading is forgiving: any navigation problem yields the empty string.
Writing creates the first-level container when it is missing but expects
deeper intermediates of 3 and 4 segment paths to exist already. Paths with
more than four segments are not written.
"""

import logging
from typing import Any, Callable, List, Union

from .exceptions import PathNavigationError

logger = logging.getLogger(__name__)

MAX_PATH_DEPTH = 4
PATH_SEPARATOR = "."

PathLike = Union[str, Callable[[Any], Any]]


def split_path(path: str) -> List[str]:
    """Split a dotted path into its segments."""
    return path.split(PATH_SEPARATOR)


def strip_prefix(name: str, prefix: str) -> str:
    """
    Strip ``prefix.`` from a field name.

    Returns:
        The remaining path, or "" when the name does not start with the prefix
        or nothing remains after stripping.
    """
    if not name:
        return ""
    if not prefix:
        return name
    head = prefix + PATH_SEPARATOR
    if not name.startswith(head):
        return ""
    return name[len(head):]


def _child(container: Any, segment: str) -> Any:
    """Look up one segment; raises PathNavigationError if it cannot be followed."""
    if isinstance(container, dict):
        if segment not in container:
            raise PathNavigationError(segment)
        return container[segment]
    if isinstance(container, (list, tuple)) and segment.isdigit():
        index = int(segment)
        if index >= len(container):
            raise PathNavigationError(segment)
        return container[index]
    raise PathNavigationError(
        f"Cannot resolve '{segment}' on {type(container).__name__}"
    )


class PathResolver:
    """
    Static get/set helpers for dotted paths.

    Example:
        model = {"customer": {"name": " Ann "}}
        PathResolver.get(model, "customer.name")   # "Ann"
        PathResolver.get(model, "customer.zip")    # ""
        PathResolver.set(model, "total", 12)
    """

    @staticmethod
    def get(model: Any, path: PathLike) -> Any:
        """
        Read the value at ``path``.

        A callable path is applied to the model. A key that literally contains
        dots is preferred over dotted navigation. Missing values and None
        become "", string results are trimmed.
        """
        if callable(path):
            return path(model)
        if not model:
            return ""

        value = None
        if isinstance(model, dict):
            value = model.get(path)
        if not value:
            try:
                value = PathResolver.resolve(model, path)
            except PathNavigationError:
                value = None

        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @staticmethod
    def resolve(model: Any, path: str) -> Any:
        """
        Strictly navigate ``path`` (any depth).

        Raises:
            PathNavigationError: If a segment is missing or not navigable.
        """
        if not path:
            raise PathNavigationError("empty path")
        current = model
        for segment in split_path(path):
            if current is None:
                raise PathNavigationError(segment)
            current = _child(current, segment)
        return current

    @staticmethod
    def assign(model: Any, path: str, value: Any) -> None:
        """
        Strictly write ``value`` at ``path``.

        The first-level container is created when absent (or falsy). For 3 and
        4 segment paths the deeper intermediates must already exist.
        A failed write leaves the model unchanged.

        Raises:
            PathNavigationError: If an intermediate is missing, the model is
                not writable or the path is deeper than MAX_PATH_DEPTH.
        """
        if not isinstance(model, dict):
            raise PathNavigationError(f"Cannot write into {type(model).__name__}")
        parts = split_path(path)
        if len(parts) > MAX_PATH_DEPTH:
            raise PathNavigationError(f"Path '{path}' exceeds {MAX_PATH_DEPTH} segments")

        if len(parts) == 1:
            model[path] = value
            return

        head = model.get(parts[0])
        if not head:
            if len(parts) > 2:
                # a fresh first level cannot hold the deeper intermediates
                raise PathNavigationError(f"Missing intermediates for '{path}'")
            head = {}
            model[parts[0]] = head

        container = head
        for segment in parts[1:-1]:
            container = _child(container, segment)

        if isinstance(container, dict):
            container[parts[-1]] = value
        elif isinstance(container, list) and parts[-1].isdigit() and int(parts[-1]) < len(container):
            container[int(parts[-1])] = value
        else:
            raise PathNavigationError(
                f"Cannot write '{parts[-1]}' into {type(container).__name__}"
            )

    @staticmethod
    def set(model: Any, path: str, value: Any) -> bool:
        """
        Write ``value`` at ``path``, swallowing navigation failures.

        Returns:
            True if the value was written.
        """
        try:
            PathResolver.assign(model, path, value)
        except PathNavigationError as e:
            logger.debug(f"Skipped write of '{path}': {e}")
            return False
        return True
