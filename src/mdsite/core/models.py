"""Document and routing models shared by the pipeline stages"""

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A loaded source file: normalized front-matter plus the raw markup body."""
    model_config = ConfigDict(frozen=True)

    source:   Path
    metadata: dict[str, str] = Field(default_factory=dict)
    body:     str = ""

    @property
    def title(self) -> str:
        return self.metadata.get("title") or self.source.stem


class Route(BaseModel):
    """Where a document is published: its public URL and output path relative to output_dir."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url:  str
    path: PurePosixPath


class PublishResult(BaseModel):
    """Outcome of writing one document."""
    source: Path
    url:    str
    output: Path
    status: str                     # created | updated | unchanged
