"""Map document metadata to a public URL and an output path"""

import re
from pathlib import Path, PurePosixPath
from typing import Optional

from mdsite.core.models import Document, Route
from mdsite.core.utils.slug import slugify
from mdsite.errors import MissingField, RouteError


PERMALINK_FIELD = "permalink"
PLACEHOLDER_RE = re.compile(r':(slug|title|basename)\b')


def document_slug(document: Document) -> str:
    """Slug from the `slug` metadata field, else the slugified file stem."""
    return slugify(document.metadata.get("slug") or document.source.stem) or "index"


def _expand(permalink: str, document: Document) -> str:
    """Expand Jekyll-style :slug, :title and :basename placeholders."""
    values = {
        "slug": document_slug(document),
        "title": slugify(document.title),
        "basename": document.source.stem,
    }
    return PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], permalink)


def _default_url(document: Document, content_root: Optional[Path]) -> str:
    """/<source dirs relative to content_root>/<slug>/"""
    dirs: tuple = ()
    if content_root is not None:
        try:
            dirs = document.source.parent.resolve().relative_to(Path(content_root).resolve()).parts
        except ValueError:
            dirs = ()                   # source outside the content root: publish at top level
    parts = [slugify(d) for d in dirs]
    return "/" + "".join(f"{p}/" for p in parts if p) + f"{document_slug(document)}/"


def url_to_path(url: str, extension: str = ".html", index_name: str = "index") -> PurePosixPath:
    """Output path for a URL: '/x/' -> x/index.html, '/x' -> x.html, '/x.txt' -> x.txt."""
    parts = [p for p in url.split("/") if p]
    if any(p in (".", "..") for p in parts):
        raise RouteError(f"permalink '{url}' escapes the output directory")
    path = PurePosixPath(*parts) if parts else PurePosixPath()
    if url.endswith("/") or not parts:
        return path / f"{index_name}{extension}"
    if path.suffix:
        return path
    return path.with_name(path.name + extension)


def route(
    document: Document,
    default: bool = True,
    content_root: Optional[Path] = None,
    extension: str = ".html",
    ) -> Route:
    """Compute a document's Route from its permalink, or from its source path when default is enabled.

    Raises MissingField when there is no permalink and default is False.
    """
    permalink = document.metadata.get(PERMALINK_FIELD, "").strip()
    if permalink:
        url = _expand(permalink, document)
        if not url.startswith("/"):
            url = "/" + url
    elif default:
        url = _default_url(document, content_root)
    else:
        raise MissingField(PERMALINK_FIELD, document.source)

    try:
        path = url_to_path(url, extension)
    except RouteError as e:
        raise RouteError(str(e), document.source) from e
    return Route(url=url, path=path)
