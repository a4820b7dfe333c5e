"""
Shelf Writer

Creates subject directories, writes rendered note files and removes entries.
Lookups always go through the resolver first so that a missing target is
reported as a resolution error instead of silently succeeding.
"""

import shutil
from pathlib import Path
from typing import List, Sequence

from noteshelf.contexts.shelving.logger import _log_debug, _log_info
from noteshelf.contexts.shelving.models import Note, Shelf, Subject
from noteshelf.contexts.shelving.resolver import (
    match_child,
    resolve_note,
    resolve_subject_path,
    split_subject_path,
)
from noteshelf.exceptions import AlreadyExistsError, InvalidNameError, StorageError
from noteshelf.utils.text_processing import canonicalize


def add_subject(shelf: Shelf, subject_path: str) -> Subject:
    """
    Create a subject directory tree, reusing components that already exist.

    Existing components are matched by canonical name; missing ones are
    created under their canonical name, so ``"Year 1/Calculus I"`` becomes
    ``year-1/calculus-i``. Adding an existing subject is a no-op.

    Args:
        shelf: Shelf to create the subject in
        subject_path: Slash-separated subject path

    Returns:
        The (possibly pre-existing) subject

    Raises:
        InvalidNameError: If a component has no canonical form
        StorageError: If a directory cannot be created
    """
    components = split_subject_path(subject_path)

    current = shelf.path
    names: List[str] = []
    for component in components:
        child = match_child(current, component, want_dirs=True)
        if child is None:
            directory_name = canonicalize(component)
            if not directory_name:
                raise InvalidNameError(component)
            child = current / directory_name
            try:
                child.mkdir()
            except OSError as e:
                raise StorageError("Cannot create subject directory", child, e) from e
            _log_info(f"Created {child}")
        names.append(child.name)
        current = child

    return Subject(shelf=shelf, components=tuple(names))


def write_note(subject: Subject, note: Note, content: str, overwrite: bool = False) -> Path:
    """
    Write rendered note content into the subject directory.

    Args:
        subject: Subject owning the note (its directory must exist)
        note: Note whose file name is used
        content: Rendered text
        overwrite: Replace an existing file instead of failing

    Returns:
        Path of the written file

    Raises:
        AlreadyExistsError: If the file exists and overwrite is False
        StorageError: On permission or disk failures
    """
    path = subject.path / note.file
    mode = "w" if overwrite else "x"

    try:
        with open(path, mode, encoding="utf-8") as f:
            f.write(content)
    except FileExistsError as e:
        raise AlreadyExistsError(path) from e
    except OSError as e:
        raise StorageError("Cannot write note", path, e) from e

    _log_debug(f"Wrote {len(content)} characters to {path}")
    return path


def remove_path(path: Path) -> None:
    """
    Delete a file, or a directory together with everything below it.

    Raises:
        StorageError: If the path does not exist or cannot be removed
    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        raise StorageError("Cannot remove", path, e) from e

    _log_info(f"Removed {path}")


def remove_subject(shelf: Shelf, subject_path: str) -> Subject:
    """
    Resolve a subject and delete its directory tree.

    Raises:
        SubjectNotFoundError: If the subject does not resolve
        StorageError: If deletion fails
    """
    subject = resolve_subject_path(shelf, subject_path)
    remove_path(subject.path)
    return subject


def remove_note(subject: Subject, title: str, file_globs: Sequence[str]) -> Note:
    """
    Resolve a note in a subject and delete its file.

    Raises:
        NoteNotFoundError: If the note does not resolve
        StorageError: If deletion fails
    """
    note = resolve_note(subject, title, file_globs)
    remove_path(note.path)
    return note
