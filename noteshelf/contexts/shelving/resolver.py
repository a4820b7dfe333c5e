"""
Path Resolution

Matches user-supplied subject paths and note titles against the shelf by
canonical name. Every call walks the filesystem again: the shelf directory is
the only source of truth and nothing is cached.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from noteshelf.contexts.shelving.logger import _log_debug, _log_warning
from noteshelf.contexts.shelving.models import MASTER_NOTE_FILE, Note, Shelf, Subject
from noteshelf.exceptions import (
    InvalidNameError,
    NoteNotFoundError,
    SubjectNotFoundError,
)
from noteshelf.utils.paths import PARENT_DIR, normalize_components
from noteshelf.utils.text_processing import canonicalize, is_canonical


def split_subject_path(subject_path: str) -> List[str]:
    """
    Split a user-supplied subject path into components.

    Example:
        >>> split_subject_path("Year 1/Semester 1/Quantum Mechanics/../Calculus I")
        ['Year 1', 'Semester 1', 'Calculus I']

    Raises:
        InvalidNameError: If nothing is left after normalization
        SubjectNotFoundError: If the path climbs out of the shelf
    """
    components = normalize_components(subject_path)
    if not components:
        raise InvalidNameError(subject_path)
    if components[0] == PARENT_DIR:
        raise SubjectNotFoundError(components, PARENT_DIR, Path(PARENT_DIR))
    return components


def visible_children(directory: Path, want_dirs: bool) -> List[Path]:
    """
    List visible child directories (or files) of a directory, sorted by name.

    Hidden entries are those whose name (file stem for files) is not already
    in canonical form.
    """
    children = []
    if not directory.is_dir():
        return children
    for child in sorted(directory.iterdir(), key=lambda p: p.name):
        if want_dirs and child.is_dir() and is_canonical(child.name):
            children.append(child)
        elif not want_dirs and child.is_file() and is_canonical(child.stem):
            children.append(child)
    return children


def match_child(directory: Path, requested: str, want_dirs: bool) -> Optional[Path]:
    """Return the first visible child whose canonical name equals the requested one."""
    key = canonicalize(requested)
    if not key or not directory.is_dir():
        return None

    for child in visible_children(directory, want_dirs):
        name = child.name if want_dirs else child.stem
        if canonicalize(name) == key:
            return child
    return None


def resolve_subject(shelf: Shelf, components: Sequence[str]) -> Subject:
    """
    Resolve requested subject components to a subject directory.

    Each component is matched against the current directory's visible child
    directories by canonical name, then the walk descends. There is no
    partial match or fuzzy fallback.

    Args:
        shelf: Shelf to search
        components: Requested components, e.g. ["Year 1", "Calculus I"]

    Returns:
        Subject with the on-disk component names

    Raises:
        SubjectNotFoundError: At the first component with no match
    """
    if not components:
        raise InvalidNameError("")

    current = shelf.path
    matched: List[str] = []
    for component in components:
        child = match_child(current, component, want_dirs=True)
        if child is None:
            raise SubjectNotFoundError(components, component, current)
        matched.append(child.name)
        current = child

    _log_debug(f"Resolved subject '{'/'.join(components)}' to {current}")
    return Subject(shelf=shelf, components=tuple(matched))


def resolve_subject_path(shelf: Shelf, subject_path: str) -> Subject:
    """Resolve a slash-separated subject path such as ``"Year 1/Calculus I"``."""
    return resolve_subject(shelf, split_subject_path(subject_path))


def list_notes(subject: Subject, file_globs: Sequence[str]) -> List[Note]:
    """
    Find the visible notes of a subject that match any of the glob patterns.

    Only files directly inside the subject directory count. The master note
    is never part of the result.

    Args:
        subject: Resolved subject
        file_globs: Glob patterns relative to the subject directory (e.g. ["*.tex"])

    Returns:
        Notes sorted by file name, titled by their file stem
    """
    directory = subject.path
    found = {}
    for pattern in file_globs:
        if not pattern or Path(pattern).is_absolute():
            _log_warning(f"Ignoring unusable file pattern '{pattern}' for '{subject.full_name}'")
            continue
        for path in directory.glob(pattern):
            if path.parent != directory or not path.is_file():
                continue
            if path.name == MASTER_NOTE_FILE or not is_canonical(path.stem):
                continue
            found[path.name] = Note(subject=subject, title=path.stem, file=path.name)

    return [found[name] for name in sorted(found)]


def resolve_note(subject: Subject, title: str, file_globs: Sequence[str]) -> Note:
    """
    Resolve a requested note title to a note file of the subject.

    Only files selected by the glob filter are candidates, compared by stem.

    Raises:
        NoteNotFoundError: If no candidate matches
    """
    key = canonicalize(title)
    if key:
        for note in list_notes(subject, file_globs):
            if canonicalize(note.title) == key:
                return note
    raise NoteNotFoundError(title, subject.path)


def iter_subjects(shelf: Shelf, root: Optional[Subject] = None) -> Iterator[Subject]:
    """
    Walk every visible subject below the shelf (or below a subject), depth first.

    The starting subject itself is not yielded.
    """
    base = root.path if root is not None else shelf.path
    prefix = root.components if root is not None else ()

    for child in visible_children(base, want_dirs=True):
        subject = Subject(shelf=shelf, components=prefix + (child.name,))
        yield subject
        yield from iter_subjects(shelf, subject)
