"""Group documents across a content tree by metadata property values.

A :class:`Taxonomy` is built once per tree traversal and is read-only
afterwards, so a single instance can be shared by every page rendered for a
locale. Each configured grouping property contributes one key per value:
list-like values contribute every element, scalars contribute themselves.

Example
-------
>>> from pathlib import Path
>>> from folio_pages.resources import Directory, Document
>>> tree = Directory(Path("content"), files={
...     "a.md": Document(Path("content/a.md"), {"tags": ["x", "y"]}),
...     "b.md": Document(Path("content/b.md"), {"tags": "x"}),
... })
>>> taxonomy = Taxonomy.build(tree, ["tags"])
>>> [doc.name for doc in taxonomy["x"]]
['a.md', 'b.md']
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import logging
import types
import typing as typ

if typ.TYPE_CHECKING:
    from .resources import Directory, Document

logger = logging.getLogger(__name__)

MULTI_VALUED_TYPES = (list, tuple, set, frozenset)


def _default_sort_key(document: Document) -> str:
    return document.path.as_posix()


def _canonical_key(value: object) -> str:
    """Return the text form of a metadata value used as a group key."""
    match value:
        case bool():
            return "true" if value else "false"
        case dt.date():
            return value.isoformat()
        case _:
            return str(value)


class Taxonomy(cabc.Mapping[str, tuple["Document", ...]]):
    """Immutable mapping of group key to the documents filed under it."""

    def __init__(self, groups: cabc.Mapping[str, cabc.Sequence[Document]]) -> None:
        self._groups = types.MappingProxyType(
            {key: tuple(docs) for key, docs in groups.items()}
        )

    @classmethod
    def build(
        cls,
        root: Directory,
        grouping_properties: cabc.Iterable[str],
        sort_key: cabc.Callable[[Document], typ.Any] = _default_sort_key,
    ) -> Taxonomy:
        """Index every document under ``root`` by ``grouping_properties``.

        Parameters
        ----------
        root : Directory
            Tree to traverse; every document is visited exactly once.
        grouping_properties : Iterable[str]
            Metadata keys whose values become group keys.
        sort_key : Callable[[Document], Any], optional
            Key applied to order each group. Defaults to the document path.
            A two-argument comparator can be adapted with
            :func:`functools.cmp_to_key`.

        Returns
        -------
        Taxonomy
            Read-only index of group key to sorted documents.
        """
        properties = tuple(grouping_properties)
        groups: dict[str, list[Document]] = {}
        for document in root.iter_documents():
            for prop in properties:
                value = document.metadata.get(prop)
                if value is None:
                    continue
                values = value if isinstance(value, MULTI_VALUED_TYPES) else (value,)
                for item in values:
                    groups.setdefault(_canonical_key(item), []).append(document)
        for documents in groups.values():
            documents.sort(key=sort_key)
        logger.info("Indexed %d taxonomy groups under %s", len(groups), root.path)
        return cls(groups)

    def __getitem__(self, key: str) -> tuple[Document, ...]:
        return self._groups[key]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def get_group(self, key: str) -> tuple[Document, ...]:
        """Return the documents under ``key``, or an empty tuple."""
        return self._groups.get(key, ())


__all__ = ["Taxonomy"]
