"""
Note Creation

Renders new notes for a subject and writes them to the shelf. Each title is
handled independently: a failure is recorded in the batch report and the
remaining titles are still processed.
"""

from typing import Optional, Sequence

from noteshelf.contexts.shelving.metadata import load_subject_metadata
from noteshelf.contexts.shelving.models import BatchReport, Note, Shelf
from noteshelf.contexts.shelving.resolver import resolve_subject_path
from noteshelf.contexts.shelving.writer import write_note
from noteshelf.contexts.templating.context_builder import build_note_context
from noteshelf.contexts.templating.defaults import NOTE_TEMPLATE_KEY
from noteshelf.contexts.templating.logger import _log_info
from noteshelf.contexts.templating.profile import Profile
from noteshelf.contexts.templating.registries import TemplateRegistry
from noteshelf.exceptions import InvalidNameError, NoteshelfError
from noteshelf.utils.text_processing import canonicalize
from noteshelf.utils.timestamp import Clock, system_clock


def create_notes(
    profile: Profile,
    shelf: Shelf,
    subject_path: str,
    titles: Sequence[str],
    template: Optional[str] = None,
    overwrite: bool = False,
    clock: Clock = system_clock,
    registry: Optional[TemplateRegistry] = None,
) -> BatchReport:
    """
    Render and write one note per title into an existing subject.

    Args:
        profile: Loaded profile
        shelf: Target shelf
        subject_path: Subject the notes belong to
        titles: Note titles as typed by the user
        template: Template key (falls back to ``_default`` when unknown)
        overwrite: Replace notes that already exist
        clock: Source of today's date
        registry: Template registry to reuse (built from the profile otherwise)

    Returns:
        BatchReport with one entry per title

    Raises:
        SubjectNotFoundError: If the subject does not resolve
        MetadataParseError: If the subject's info.toml is malformed
    """
    subject = resolve_subject_path(shelf, subject_path)
    metadata = load_subject_metadata(subject, profile.subject_defaults)
    registry = registry or TemplateRegistry(profile.templates, clock)
    template_key = template or NOTE_TEMPLATE_KEY

    report = BatchReport(operation=f"add notes to '{subject.full_name}'")
    for title in titles:
        try:
            if not canonicalize(title):
                raise InvalidNameError(title)
            note = Note.from_title(subject, title)
            context = build_note_context(profile, shelf, subject, title, clock, metadata)
            content = registry.render(template_key, context, NOTE_TEMPLATE_KEY, target=note.file)
            write_note(subject, note, content, overwrite=overwrite)
        except NoteshelfError as e:
            report.record_failure(title, e)
            continue

        _log_info(f"Created note '{title}' at {note.path}")
        report.record_success(title)

    return report
