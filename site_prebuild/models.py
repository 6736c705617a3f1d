"""Data models used throughout the build pipeline."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List


class AssetBuildError(RuntimeError):
    """A handler could not transform a single asset."""

    def __init__(self, kind: str, relative_path: str, message: str) -> None:
        super().__init__(f"{kind} error in {relative_path}: {message}")
        self.kind = kind
        self.relative_path = relative_path
        self.message = message


@dataclass
class FileResult:
    """Outcome of one handler invocation."""

    tag: str
    relative_path: str
    output_path: Path
    source_bytes: int
    output_bytes: int


@dataclass
class BuildSummary:
    """Aggregate statistics for a completed run."""

    results: List[FileResult] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def file_count(self) -> int:
        return len(self.results)

    @property
    def source_bytes(self) -> int:
        return sum(result.source_bytes for result in self.results)

    @property
    def output_bytes(self) -> int:
        return sum(result.output_bytes for result in self.results)

    @property
    def bytes_saved(self) -> int:
        return self.source_bytes - self.output_bytes

    @property
    def reduction_percent(self) -> float:
        total = self.source_bytes
        if not total:
            return 0.0
        return self.bytes_saved / total * 100

    def files_by_tag(self) -> Dict[str, int]:
        """Count processed files per handler tag."""
        return dict(Counter(result.tag for result in self.results))
