"""Write rendered documents and optional sidecar JSON to the output directory"""

import hashlib
import json
import logging
from pathlib import Path

from mdsite.core.models import Document, PublishResult, Route


logger = logging.getLogger(__name__)


def content_hash(content: str) -> str:
    """Hex SHA-256 of the UTF-8 encoded content, used to skip rewriting unchanged outputs."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def build_sidecar(document: Document, route: Route, content: str) -> dict:
    """Minimal sidecar JSON dict: source, url, metadata and content hash."""
    return {
        "source": document.source.as_posix(),
        "url": route.url,
        "metadata": dict(document.metadata),
        "hash": content_hash(content),
    }


def sidecar_path(path):
    """Sidecar location for an output path: foo.html -> foo.json, foo.json -> foo.meta.json."""
    side = path.with_suffix(".json")
    return path.with_suffix(".meta.json") if side == path else side


def _write_if_changed(path: Path, content: str) -> str:
    """Write content unless an identical file exists. Returns created | updated | unchanged."""
    if path.exists():
        if hashlib.sha256(path.read_bytes()).hexdigest() == content_hash(content):
            return "unchanged"
        status = "updated"
    else:
        status = "created"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    return status


def publish(
    document: Document,
    content: str,
    route: Route,
    output_dir: Path,
    sidecar: bool = False,
    ) -> PublishResult:
    """Write content at output_dir / route.path (and a .json sidecar when requested)."""
    out_path = Path(output_dir) / Path(*route.path.parts)
    status = _write_if_changed(out_path, content)
    if sidecar:
        _write_if_changed(sidecar_path(out_path), json.dumps(build_sidecar(document, route, content), indent=2) + "\n")
    logger.info("%s %s -> %s", status, document.source, out_path)
    return PublishResult(source=document.source, url=route.url, output=out_path, status=status)
