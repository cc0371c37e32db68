"""Source discovery and front-matter loading"""

import datetime
import logging
import re
from pathlib import Path
from typing import Any

import yaml

from mdsite.core.models import Document
from mdsite.errors import LoadError, MetadataParseError, NotFound


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\n(.*?)^(?:---|\.\.\.)[ \t]*$\n?', re.DOTALL | re.MULTILINE)
OPEN_FENCE_RE = re.compile(r'\A---[ \t]*\n')
MD_EXTENSIONS = {'.md', '.markdown', '.mdx'}


def _normalize_value(key: str, value: Any, source: Path) -> str:
    """Flatten a YAML scalar (or list of scalars) into the string stored in Document.metadata."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float, datetime.date)):
        return str(value)
    if isinstance(value, list) and all(not isinstance(v, (list, dict)) for v in value):
        return ", ".join(_normalize_value(key, v, source) for v in value)
    raise MetadataParseError(f"front-matter field '{key}' must be a scalar or a list of scalars", source)


def split_frontmatter(text: str, source: Path) -> tuple[dict[str, str], str]:
    """Return (metadata, body) with the YAML header removed; empty metadata when there is none."""
    text = text.replace('\r\n', '\n')
    m = FRONTMATTER_RE.match(text)
    if m is None:
        if OPEN_FENCE_RE.match(text):
            raise MetadataParseError("front-matter block is not closed by '---'", source)
        return {}, text

    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise MetadataParseError(f"invalid YAML front-matter: {e}", source) from e
    if not isinstance(fm, dict):
        raise MetadataParseError(f"front-matter must be a mapping, got {type(fm).__name__}", source)

    metadata = {}
    for key, value in fm.items():
        if not isinstance(key, str):
            raise MetadataParseError(f"front-matter key {key!r} is not a string", source)
        metadata[key] = _normalize_value(key, value, source)
    return metadata, text[m.end():]


def load_document(source: Path) -> Document:
    """Read a source file into an immutable Document."""
    source = Path(source)
    if not source.is_file():
        raise NotFound("source does not exist or is not a file", source)
    try:
        with source.open(encoding='utf-8-sig') as fh:
            raw = fh.read()
    except FileNotFoundError as e:
        raise NotFound("source disappeared before it could be read", source) from e
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"cannot read source: {e}", source) from e

    metadata, body = split_frontmatter(raw, source)
    logger.debug("loaded %s (%d metadata fields)", source, len(metadata))
    return Document(source=source, metadata=metadata, body=body)


def discover_sources(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if it is a single markdown file."""
    path = Path(path)
    if not path.exists():
        raise NotFound("path does not exist", path)
    if path.is_file():
        return [path] if path.suffix.lower() in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in MD_EXTENSIONS)
