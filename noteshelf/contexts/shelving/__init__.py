"""
Shelving Context

Responsibilities:
- Canonical name matching of subjects and notes against the shelf
- Subject metadata (info.toml) loading and validation
- Creating subject directories, writing and removing note files

Owns: The shelf filesystem layout
Never: Renders templates or runs external commands
"""

from noteshelf.contexts.shelving.metadata import (
    SubjectMetadata,
    effective_file_globs,
    load_subject_metadata,
)
from noteshelf.contexts.shelving.models import (
    DEFAULT_FILE_GLOBS,
    MASTER_NOTE_FILE,
    BatchReport,
    Note,
    Shelf,
    Subject,
)
from noteshelf.contexts.shelving.resolver import (
    iter_subjects,
    list_notes,
    resolve_note,
    resolve_subject,
    resolve_subject_path,
    split_subject_path,
)
from noteshelf.contexts.shelving.writer import (
    add_subject,
    remove_note,
    remove_path,
    remove_subject,
    write_note,
)

__all__ = [
    # Value objects
    "Shelf",
    "Subject",
    "Note",
    "BatchReport",
    "DEFAULT_FILE_GLOBS",
    "MASTER_NOTE_FILE",
    # Metadata
    "SubjectMetadata",
    "load_subject_metadata",
    "effective_file_globs",
    # Resolution
    "split_subject_path",
    "resolve_subject",
    "resolve_subject_path",
    "resolve_note",
    "list_notes",
    "iter_subjects",
    # Writes
    "add_subject",
    "write_note",
    "remove_path",
    "remove_subject",
    "remove_note",
]
