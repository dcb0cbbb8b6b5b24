"""Read-only document tree consumed by the aggregation pipeline.

The tree is a strict hierarchy: a :class:`Directory` owns its child documents
and child directories, each keyed by file name. Documents carry the metadata
parsed from their YAML front matter together with the remaining body text.
Two synthetic kinds of document exist alongside the ones read from disk:

* *virtual* documents stand in for a page group and carry a path that has no
  backing file (see :func:`virtual_document`);
* *placeholder* documents represent the page that declared an aggregation
  directive and carry only path identity (see :func:`placeholder_document`).

Example
-------
>>> from pathlib import Path
>>> doc = Document(Path("content/chapter1.en.md"), {"title": "One"})
>>> doc.name_without_extensions
'chapter1'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A single content file (or a synthetic stand-in for one).

    Attributes
    ----------
    path : Path
        Location of the document. For virtual documents this is a synthetic
        path used only to derive output locations.
    metadata : Mapping[str, Any]
        Raw metadata map parsed from the front matter.
    body : str
        Document text following the front matter.
    origin : Path or None
        Path of the real document a virtual document stands in for.
    placeholder : bool
        ``True`` for the stand-in representing a directive's owner page.
    """

    path: Path
    metadata: typ.Mapping[str, typ.Any] = dc.field(default_factory=dict)
    body: str = ""
    origin: Path | None = None
    placeholder: bool = False

    @property
    def name(self) -> str:
        """Return the file name, extensions included."""
        return self.path.name

    @property
    def name_without_extensions(self) -> str:
        """Return the file name with every extension stripped."""
        return self.name.split(".", 1)[0]

    @property
    def is_virtual(self) -> bool:
        """Return whether the document has no backing file at its path."""
        return self.origin is not None or self.placeholder


@dc.dataclass(slots=True)
class Directory:
    """A directory listing of documents and nested directories."""

    path: Path
    files: dict[str, Document] = dc.field(default_factory=dict)
    directories: dict[str, Directory] = dc.field(default_factory=dict)

    @property
    def name(self) -> str:
        """Return the directory's display name."""
        return self.path.name

    def iter_documents(self) -> cabc.Iterator[Document]:
        """Yield every document in the subtree, files before subdirectories."""
        yield from self.files.values()
        for child in self.directories.values():
            yield from child.iter_documents()


def virtual_document(path: Path, source: Document) -> Document:
    """Return a copy of ``source`` relocated to the synthetic ``path``."""
    return dc.replace(source, path=path, origin=source.origin or source.path)


def placeholder_document(path: Path) -> Document:
    """Return a body-less stand-in for the page found at ``path``."""
    return Document(path=path, placeholder=True)


def parse_front_matter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Split ``text`` into its YAML front matter mapping and the body.

    Raises
    ------
    TypeError
        If the front matter is present but is not a mapping.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    loaded = loader.load(match.group(1)) or {}
    if not isinstance(loaded, dict):
        msg = "Front matter must be a YAML mapping."
        raise TypeError(msg)
    return dict(loaded), text[match.end() :]


def load_document(path: Path) -> Document:
    """Read ``path`` and return the parsed :class:`Document`."""
    text = path.read_text(encoding="utf-8")
    try:
        metadata, body = parse_front_matter(text)
    except TypeError as exc:
        msg = f"Invalid front matter in '{path}': {exc}"
        raise TypeError(msg) from exc
    return Document(path=path, metadata=metadata, body=body)


def load_directory(path: Path) -> Directory:
    """Recursively load the directory tree rooted at ``path``.

    Hidden entries (names starting with ``.``) are skipped.

    Raises
    ------
    FileNotFoundError
        If ``path`` is not an existing directory.
    """
    if not path.is_dir():
        msg = f"Content directory '{path}' not found."
        raise FileNotFoundError(msg)
    directory = Directory(path=path)
    for child in sorted(path.iterdir()):
        if child.name.startswith("."):
            continue
        if child.is_dir():
            directory.directories[child.name] = load_directory(child)
        elif child.is_file():
            directory.files[child.name] = load_document(child)
    logger.debug(
        "Loaded %s: %d documents, %d directories",
        path,
        len(directory.files),
        len(directory.directories),
    )
    return directory


def _locale_segment(name: str, locales: cabc.Set[str]) -> str | None:
    """Return the locale embedded as ``name.<locale>.ext``, if any."""
    parts = name.split(".")
    if len(parts) >= 3 and parts[-2] in locales:
        return parts[-2]
    return None


def localize(
    directory: Directory, locale: str, locales: cabc.Iterable[str]
) -> Directory:
    """Return the view of ``directory`` visible for ``locale``.

    Documents named ``name.<locale>.ext`` are kept only for their own locale
    and hide an unlocalized ``name.ext`` sibling. Unlocalized documents are
    shared by every locale.
    """
    known = frozenset(locales)
    localized_bases = {
        doc.name_without_extensions
        for name, doc in directory.files.items()
        if _locale_segment(name, known) == locale
    }
    files: dict[str, Document] = {}
    for name, doc in directory.files.items():
        segment = _locale_segment(name, known)
        if segment == locale or (
            segment is None and doc.name_without_extensions not in localized_bases
        ):
            files[name] = doc
    directories = {
        name: localize(child, locale, known)
        for name, child in directory.directories.items()
    }
    return Directory(path=directory.path, files=files, directories=directories)


__all__ = [
    "Directory",
    "Document",
    "load_directory",
    "load_document",
    "localize",
    "parse_front_matter",
    "placeholder_document",
    "virtual_document",
]
