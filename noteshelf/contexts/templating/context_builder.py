"""
Render Context Assembly

Builds the document a note or master template is rendered with. Layers are
merged in order, later ones winning on key collisions:

    {"profile": ...} -> {"shelf": ...} -> {"subject": ...} -> {"note": ...} | {"master": ...}

Custom keys from the profile and from the subject's info.toml pass through
untouched; only the reserved fields below are force-set by the builder.

Subject reserved fields:
    name, _full_name, _path, _path_in_shelf, path_in_shelf,
    _relpath_to_shelf, _relpath_from_shelf
Note reserved fields:
    title, file, path_in_shelf
"""

from typing import Any, Dict, Optional, Sequence

from noteshelf.contexts.shelving.metadata import SubjectMetadata, merge_documents
from noteshelf.contexts.shelving.models import Note, Shelf, Subject
from noteshelf.contexts.templating.profile import Profile
from noteshelf.utils.paths import CURRENT_DIR, relative_path_from
from noteshelf.utils.timestamp import Clock, relative_date


def subject_document(subject: Subject, metadata: Optional[SubjectMetadata] = None) -> Dict[str, Any]:
    """
    Build the subject layer: metadata keys plus the reserved fields.

    The display ``name`` is the metadata name when present, otherwise the last
    path component. Every other reserved field is derived from the filesystem
    and overwrites whatever the metadata says.
    """
    document = dict(metadata.document) if metadata is not None else {}
    path_in_shelf = subject.path_in_shelf.as_posix()

    document.update(
        {
            "name": metadata.name if metadata is not None and metadata.name else subject.name,
            "_full_name": subject.full_name,
            "_path": subject.path.as_posix(),
            "_path_in_shelf": path_in_shelf,
            "path_in_shelf": path_in_shelf,
            "_relpath_to_shelf": relative_path_from(CURRENT_DIR, path_in_shelf),
            "_relpath_from_shelf": relative_path_from(path_in_shelf, CURRENT_DIR),
        }
    )
    return document


def note_document(note: Note) -> Dict[str, Any]:
    return {
        "title": note.title,
        "file": note.file,
        "path_in_shelf": note.path_in_shelf.as_posix(),
    }


def _base_layers(
    profile: Profile,
    shelf: Shelf,
    subject: Subject,
    metadata: Optional[SubjectMetadata],
    clock: Clock,
) -> list:
    return [
        {"date": relative_date(clock)},
        {"profile": profile.document},
        {"shelf": shelf.document()},
        {"subject": subject_document(subject, metadata)},
    ]


def build_note_context(
    profile: Profile,
    shelf: Shelf,
    subject: Subject,
    note_title: str,
    clock: Clock,
    metadata: Optional[SubjectMetadata] = None,
) -> Dict[str, Any]:
    """
    Build the render context of a new note.

    Args:
        profile: Loaded profile
        shelf: Shelf the subject lives in
        subject: Resolved subject
        note_title: Title as typed by the user
        clock: Source of today's date
        metadata: Subject metadata (already layered over profile defaults)

    Returns:
        Merged context dict

    Example:
        >>> context = build_note_context(profile, shelf, subject, "Limits", clock)
        >>> context["note"]
        {'title': 'Limits', 'file': 'limits.tex', 'path_in_shelf': 'calculus/limits.tex'}
    """
    note = Note.from_title(subject, note_title)
    layers = _base_layers(profile, shelf, subject, metadata, clock)
    layers.append({"note": note_document(note)})
    return merge_documents(*layers)


def build_master_context(
    profile: Profile,
    shelf: Shelf,
    subject: Subject,
    notes: Sequence[Note],
    clock: Clock,
    metadata: Optional[SubjectMetadata] = None,
) -> Dict[str, Any]:
    """
    Build the render context of a subject's master note.

    The last layer embeds the filtered note list and a copy of the subject
    document under ``master``.
    """
    subject_layer = subject_document(subject, metadata)
    master_note = Note.master(subject, subject_layer["name"])

    layers = _base_layers(profile, shelf, subject, metadata, clock)
    layers.append(
        {
            "master": {
                "notes": [note_document(note) for note in notes],
                "subject": subject_layer,
                "file": master_note.file,
                "path_in_shelf": master_note.path_in_shelf.as_posix(),
            }
        }
    )
    return merge_documents(*layers)
