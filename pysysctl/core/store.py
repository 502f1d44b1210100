"""The ordered key/value store produced by the parser.

`ConfigStore` keeps raw string values in insertion order. Writing an existing
key updates its value in place: the key keeps the position of its first
occurrence. The store can also be rendered as a nested hierarchy, splitting
keys on dots, and rebuilt from one.
"""
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .errors import HierarchyError

logger = logging.getLogger(__name__)

# Separator between the segments of a key path.
KEY_DELIMITER = "."


class ConfigStore:
    """An ordered, mutable mapping from string keys to raw string values."""

    def __init__(self) -> None:
        self._settings: Dict[str, str] = {}

    @classmethod
    def from_pairs(cls, pairs) -> "ConfigStore":
        """Builds a store from an iterable of (key, value) pairs."""
        store = cls()
        for key, value in pairs:
            store.set(key, value)
        return store

    @classmethod
    def from_hierarchy(cls, tree: Dict[str, Any]) -> "ConfigStore":
        """Builds a store from a nested hierarchy by flattening it."""
        return cls.from_pairs(flatten_hierarchy(tree))

    def load(self, text: str, comment_prefixes=None) -> None:
        """Parses `text` and merges the result into this store.

        The text is parsed into a separate store first, so a `ParseError`
        leaves this store untouched.

        Args:
            text (str): The configuration text to parse.
            comment_prefixes: Line prefixes that mark comments. Defaults to
                the parser's defaults.
        """
        from .parser import parse

        parsed = parse(text, comment_prefixes)
        for key, value in parsed.items():
            self.set(key, value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Returns the value stored for `key`, or `default` if it is absent."""
        return self._settings.get(key, default)

    def set(self, key: str, value: str) -> None:
        """Stores `value` under `key`, overwriting any previous value.

        Raises:
            ValueError: If `key` is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")
        self._settings[key] = value

    def keys(self) -> List[str]:
        return list(self._settings)

    def items(self) -> Iterator[Tuple[str, str]]:
        """Returns a fresh iterator over (key, value) pairs in insertion order."""
        return ((key, value) for key, value in self._settings.items())

    def to_dict(self) -> Dict[str, str]:
        return dict(self._settings)

    def to_hierarchy(self) -> Dict[str, Any]:
        """Converts the flat store into a nested mapping keyed by path segment.

        Returns:
            Dict[str, Any]: A tree whose leaves are the raw string values.

        Raises:
            HierarchyError: If one key is a strict prefix path of another, for
                example both `a` and `a.b` are present.
        """
        tree: Dict[str, Any] = {}
        # Maps each path occupied by a value or a mapping to the key that claimed it.
        owners: Dict[Tuple[str, ...], str] = {}

        for key, value in self._settings.items():
            segments = key.split(KEY_DELIMITER)
            node = tree
            for depth, segment in enumerate(segments[:-1]):
                child = node.get(segment)
                if child is None:
                    child = node[segment] = {}
                    owners[tuple(segments[:depth + 1])] = key
                elif not isinstance(child, dict):
                    raise HierarchyError(key, owners[tuple(segments[:depth + 1])])
                node = child

            leaf = segments[-1]
            if isinstance(node.get(leaf), dict):
                raise HierarchyError(key, owners[tuple(segments)])
            node[leaf] = value
            owners[tuple(segments)] = key

        logger.debug(f"Built hierarchy with {len(tree)} top-level node(s).")
        return tree

    def __len__(self) -> int:
        return len(self._settings)

    def __contains__(self, key: object) -> bool:
        return key in self._settings

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigStore):
            return NotImplemented
        return list(self._settings.items()) == list(other._settings.items())

    def __repr__(self) -> str:
        return f"ConfigStore({self._settings})"


def flatten_hierarchy(tree: Dict[str, Any], prefix: Optional[str] = None) -> List[Tuple[str, str]]:
    """Flattens a nested hierarchy back into dot-separated (key, value) pairs.

    Args:
        tree (Dict[str, Any]): A mapping as produced by
            `ConfigStore.to_hierarchy`.
        prefix (Optional[str]): The key path of `tree` itself, used during
            recursion.

    Returns:
        List[Tuple[str, str]]: The pairs in depth-first, insertion order.
    """
    pairs: List[Tuple[str, str]] = []
    for segment, node in tree.items():
        key = segment if prefix is None else f"{prefix}{KEY_DELIMITER}{segment}"
        if isinstance(node, dict):
            pairs.extend(flatten_hierarchy(node, key))
        else:
            pairs.append((key, node))
    return pairs
