"""
Master Notes

Every subject has one master note, ``_master.tex``, rendered from the
``master/_default`` template (or a named one) with the subject's filtered note
list. The file is regenerated from scratch each time and never tracked.
"""

from typing import List, Optional, Sequence, Tuple

from noteshelf.contexts.rendering.compiler import (
    DEFAULT_THREAD_COUNT,
    CompilationResult,
    build_job,
    choose_command,
    run_compile_jobs,
)
from noteshelf.contexts.shelving.metadata import (
    SubjectMetadata,
    effective_file_globs,
    load_subject_metadata,
)
from noteshelf.contexts.shelving.models import BatchReport, Note, Shelf, Subject
from noteshelf.contexts.shelving.resolver import list_notes, resolve_subject_path
from noteshelf.contexts.shelving.writer import write_note
from noteshelf.contexts.templating.context_builder import build_master_context
from noteshelf.contexts.templating.defaults import MASTER_TEMPLATE_KEY
from noteshelf.contexts.templating.logger import _log_info
from noteshelf.contexts.templating.profile import Profile
from noteshelf.contexts.templating.registries import TemplateRegistry
from noteshelf.exceptions import NoteshelfError
from noteshelf.utils.timestamp import Clock, system_clock

__all__ = [
    "effective_file_globs",
    "aggregate",
    "build_master_note",
    "generate_master_notes",
]


def aggregate(
    subject: Subject,
    metadata: Optional[SubjectMetadata] = None,
    files: Optional[Sequence[str]] = None,
) -> List[Note]:
    """
    Collect the notes a subject's master note includes.

    Args:
        subject: Resolved subject
        metadata: Subject metadata providing the default ``_files`` filter
        files: Explicit glob filter; overrides the metadata even when empty

    Returns:
        Notes sorted by file name, never including ``_master.tex``
    """
    return list_notes(subject, effective_file_globs(files, metadata))


def build_master_note(
    profile: Profile,
    shelf: Shelf,
    subject: Subject,
    registry: TemplateRegistry,
    clock: Clock = system_clock,
    files: Optional[Sequence[str]] = None,
    template: Optional[str] = None,
    metadata: Optional[SubjectMetadata] = None,
) -> Note:
    """
    Render and write a subject's master note, replacing any previous one.

    Args:
        profile: Loaded profile
        shelf: Shelf the subject lives in
        subject: Resolved subject
        registry: Template registry of the profile
        clock: Source of today's date
        files: Explicit glob filter for the included notes
        template: Template key (falls back to ``master/_default``)
        metadata: Subject metadata (loaded when not given)

    Returns:
        The written master Note

    Raises:
        MetadataParseError: If the subject's info.toml is malformed
        TemplateError: If rendering fails
        StorageError: If writing fails
    """
    if metadata is None:
        metadata = load_subject_metadata(subject, profile.subject_defaults)

    notes = aggregate(subject, metadata, files)
    context = build_master_context(profile, shelf, subject, notes, clock, metadata)
    master = Note.master(subject, context["subject"]["name"])

    content = registry.render(
        template or MASTER_TEMPLATE_KEY,
        context,
        fallback=MASTER_TEMPLATE_KEY,
        target=master.path_in_shelf.as_posix(),
    )
    write_note(subject, master, content, overwrite=True)

    _log_info(f"Wrote master note for '{subject.full_name}' with {len(notes)} note(s)")
    return master


def generate_master_notes(
    profile: Profile,
    shelf: Shelf,
    subject_paths: Sequence[str],
    files: Optional[Sequence[str]] = None,
    template: Optional[str] = None,
    command: Optional[str] = None,
    skip_compilation: bool = False,
    thread_count: int = DEFAULT_THREAD_COUNT,
    clock: Clock = system_clock,
    verbose: bool = False,
) -> Tuple[BatchReport, List[CompilationResult]]:
    """
    Regenerate the master notes of several subjects and compile them.

    Subjects that fail to resolve or render are recorded in the report and
    skipped; the rest are still written. Compilation runs once, in parallel,
    over every master note that was written.

    Args:
        profile: Loaded profile
        shelf: Target shelf
        subject_paths: Subjects as typed by the user
        files: Explicit glob filter applied to every subject
        template: Master template key
        command: Compile command override
        skip_compilation: Only write the master notes
        thread_count: Maximum number of concurrent compile processes
        clock: Source of today's date
        verbose: Log command output of successful compiles

    Returns:
        (report of written master notes, compilation results in subject order)
    """
    registry = TemplateRegistry(profile.templates, clock)
    report = BatchReport(operation="master notes")
    jobs = []

    for subject_path in subject_paths:
        try:
            subject = resolve_subject_path(shelf, subject_path)
            metadata = load_subject_metadata(subject, profile.subject_defaults)
            master = build_master_note(
                profile, shelf, subject, registry, clock, files, template, metadata
            )
        except NoteshelfError as e:
            report.record_failure(subject_path, e)
            continue

        report.record_success(subject_path)
        if not skip_compilation:
            jobs.append(build_job(master, choose_command(command, metadata.command, profile.command)))

    results = run_compile_jobs(jobs, thread_count=thread_count, verbose=verbose) if jobs else []
    return report, results
