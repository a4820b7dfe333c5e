"""
Shelf, subject and note value objects.

These are plain locators derived from the filesystem on demand; nothing is
cached or persisted.
"""

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List, Tuple

from noteshelf.utils.text_processing import canonicalize

SUBJECT_METADATA_FILE = "info.toml"
NOTE_EXTENSION = ".tex"
MASTER_NOTE_FILE = "_master.tex"
DEFAULT_FILE_GLOBS = ["*.tex"]


@dataclass(frozen=True)
class Shelf:
    """Root directory holding every subject."""

    path: Path

    def document(self) -> dict:
        return {"path": self.path.as_posix()}


@dataclass(frozen=True)
class Subject:
    """
    A directory beneath the shelf, identified by its on-disk components.

    Attributes:
        shelf: Shelf the subject lives in
        components: Directory names from the shelf root down to the subject
    """

    shelf: Shelf
    components: Tuple[str, ...]

    @property
    def name(self) -> str:
        """Last path component; metadata may provide a display override."""
        return self.components[-1]

    @property
    def full_name(self) -> str:
        return "/".join(self.components)

    @property
    def path(self) -> Path:
        return self.shelf.path.joinpath(*self.components)

    @property
    def path_in_shelf(self) -> PurePosixPath:
        return PurePosixPath(*self.components)

    @property
    def metadata_path(self) -> Path:
        return self.path / SUBJECT_METADATA_FILE


@dataclass(frozen=True)
class Note:
    """
    A single document in a subject.

    Attributes:
        subject: Owning subject
        title: Display title (the file stem for notes found on disk)
        file: File name inside the subject directory
    """

    subject: Subject
    title: str
    file: str

    @classmethod
    def from_title(cls, subject: Subject, title: str) -> "Note":
        """Build the note a title maps to: kebab-case(title) + extension."""
        return cls(subject=subject, title=title, file=canonicalize(title) + NOTE_EXTENSION)

    @classmethod
    def master(cls, subject: Subject, title: str) -> "Note":
        return cls(subject=subject, title=title, file=MASTER_NOTE_FILE)

    @property
    def path(self) -> Path:
        return self.subject.path / self.file

    @property
    def path_in_shelf(self) -> PurePosixPath:
        return self.subject.path_in_shelf / self.file


@dataclass
class BatchReport:
    """
    Consolidated outcome of an operation over several targets.

    Attributes:
        operation: Human-readable operation name (e.g. "add notes")
        succeeded: Targets that completed
        failed: (target, error message) pairs for targets that did not
    """

    operation: str
    succeeded: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    def record_success(self, target: str) -> None:
        self.succeeded.append(target)

    def record_failure(self, target: str, error: Exception) -> None:
        self.failed.append((target, str(error)))

    @property
    def ok(self) -> bool:
        return not self.failed
