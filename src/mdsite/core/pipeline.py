"""Pipeline step functions: load, render, route and publish orchestration"""

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Optional

from mdsite.config import Settings
from mdsite.core.load import discover_sources, load_document
from mdsite.core.models import Document, PublishResult, Route
from mdsite.core.parse import parse
from mdsite.core.publish import publish, sidecar_path
from mdsite.core.render import render, render_page
from mdsite.core.route import route
from mdsite.errors import BodyParseError, DocumentError, RouteError


logger = logging.getLogger(__name__)

FORMAT_EXTENSIONS = {"html": ".html", "text": ".txt"}


@dataclass
class BuildReport:
    """Per-document outcomes of a build; failures never stop the remaining documents."""
    published: list[PublishResult] = field(default_factory=list)
    failed:    list[tuple[Path, DocumentError]] = field(default_factory=list)

    @property
    def counts(self) -> dict[str, int]:
        counts = {"created": 0, "updated": 0, "unchanged": 0, "failed": len(self.failed)}
        for result in self.published:
            counts[result.status] += 1
        return counts

    @property
    def ok(self) -> bool:
        return not self.failed


def render_document(document: Document, fmt: str = "html", wrap_page: bool = False) -> str:
    """Parse and render a document body; optionally wrap HTML output in a page."""
    body = render(parse(document.body), fmt)
    if wrap_page and fmt == "html":
        return render_page(document, body)
    return body


def prepare_document(
    source: Path,
    settings: Settings,
    content_root: Optional[Path] = None,
    ) -> tuple[Document, str, Route]:
    """Load, render and route one source without writing anything."""
    document = load_document(source)
    try:
        content = render_document(document, settings.output_format, settings.wrap_page)
    except BodyParseError as e:
        if e.source is not None:
            raise
        raise BodyParseError(str(e), source) from e
    target = route(
        document,
        default=settings.default_permalink,
        content_root=content_root,
        extension=FORMAT_EXTENSIONS[settings.output_format],
    )
    return document, content, target


def resolve_content_root(source: Path, settings: Settings, fallback: Optional[Path] = None) -> Optional[Path]:
    """Root that default URLs are derived from.

    settings.content_dir when it contains source, so a file routes the same
    whether it is built alone, with its directory, or with the whole tree.
    Otherwise fallback (the path the caller was given).
    """
    content_dir = Path(settings.content_dir)
    if content_dir.is_dir() and Path(source).resolve().is_relative_to(content_dir.resolve()):
        return content_dir
    return fallback


def run_build(path: Path, settings: Settings) -> BuildReport:
    """Render every markdown source under path into settings.output_dir.

    A DocumentError (load, parse or route failure, or an output path already
    claimed by an earlier document) is logged and recorded against that
    document only. UnknownNodeVariant is not caught: it aborts the build.
    """
    path = Path(path)
    fallback = path if path.is_dir() else path.parent
    output_dir = Path(settings.output_dir)
    report = BuildReport()
    claimed: dict[PurePosixPath, Path] = {}

    for source in discover_sources(path):
        try:
            content_root = resolve_content_root(source, settings, fallback)
            document, content, target = prepare_document(source, settings, content_root)
            wanted = [target.path]
            if settings.write_sidecar:
                wanted.append(sidecar_path(target.path))
            for out in wanted:
                if out in claimed:
                    raise RouteError(f"output {out} already claimed by {claimed[out]}", source)
            claimed.update((out, source) for out in wanted)
            report.published.append(
                publish(document, content, target, output_dir, sidecar=settings.write_sidecar)
            )
        except DocumentError as e:
            logger.error("skipping %s: %s", source, e)
            report.failed.append((source, e))
        except OSError as e:
            logger.error("cannot write output for %s: %s", source, e)
            report.failed.append((source, DocumentError(f"cannot write output: {e}", source)))

    logger.info("build finished: %s", report.counts)
    return report
