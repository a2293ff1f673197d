"""
Data holders shared by the mvn2src components.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


DEFAULT_SCOPE = "compile"


@dataclass(frozen=True)
class Dependency:
    """A Maven dependency coordinate as reported by ``dependency:tree``."""

    group_id: str
    artifact_id: str
    version: str
    scope: str = DEFAULT_SCOPE

    @property
    def key(self) -> str:
        """Identity of the dependency; the scope is not part of it."""
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @classmethod
    def of(cls, group_id: str, artifact_id: str, version: str) -> "Dependency":
        return cls(group_id, artifact_id, version, DEFAULT_SCOPE)


@dataclass(frozen=True)
class ArtifactLocation:
    """
    Where the binary and source jars of one dependency live in the local repository.

    Either path may be missing independently of the other.
    """

    binary_path: Optional[Path] = None
    source_path: Optional[Path] = None

    @classmethod
    def not_found(cls) -> "ArtifactLocation":
        return cls()

    @classmethod
    def binary_only(cls, binary_path: Path) -> "ArtifactLocation":
        return cls(binary_path=binary_path)

    @classmethod
    def source_only(cls, source_path: Path) -> "ArtifactLocation":
        return cls(source_path=source_path)

    @classmethod
    def both(cls, binary_path: Path, source_path: Path) -> "ArtifactLocation":
        return cls(binary_path=binary_path, source_path=source_path)

    def has_binary(self) -> bool:
        return self.binary_path is not None

    def has_source(self) -> bool:
        return self.source_path is not None


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one external command."""

    exit_code: int
    stdout: str
    stderr: str
    timed_out: bool = False

    def is_success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


@dataclass
class ExtractionStats:
    """
    Running counters for one extraction run.

    ``total`` is fixed when the run starts. Every processed dependency bumps
    exactly one of the four outcome counters.
    """

    total: int
    source_extracted: int = field(default=0)
    decompiled: int = field(default=0)
    skipped: int = field(default=0)
    failed: int = field(default=0)

    @property
    def processed(self) -> int:
        return self.source_extracted + self.decompiled + self.skipped + self.failed

    def increment_source_extracted(self):
        self.source_extracted += 1

    def increment_decompiled(self):
        self.decompiled += 1

    def increment_skipped(self):
        self.skipped += 1

    def increment_failed(self):
        self.failed += 1
