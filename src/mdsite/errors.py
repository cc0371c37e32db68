"""Exception hierarchy for the load -> parse -> render -> route pipeline"""

from pathlib import Path
from typing import Optional


class MdsiteError(Exception):
    """Base class for every error raised by mdsite."""


class DocumentError(MdsiteError):
    """An error confined to a single document; the build continues with the next one."""

    def __init__(self, message: str, source: Optional[Path] = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class LoadError(DocumentError):
    """The source could not be read."""


class NotFound(LoadError):
    """The source does not exist or is not a regular file."""


class MetadataParseError(LoadError):
    """The front-matter block is malformed."""


class BodyParseError(DocumentError):
    """A markup construct could not be converted into a node."""


class RouteError(DocumentError):
    """No valid output path can be computed for a document."""


class MissingField(RouteError):
    """A metadata field required by the router is absent."""

    def __init__(self, field: str, source: Optional[Path] = None):
        self.field = field
        super().__init__(f"missing required metadata field '{field}'", source)


class UnknownNodeVariant(MdsiteError):
    """The renderer was handed a node type it has no rule for. Aborts the build."""

    def __init__(self, node: object, fmt: str):
        self.node = node
        super().__init__(f"no '{fmt}' rule for node type {type(node).__name__}")
