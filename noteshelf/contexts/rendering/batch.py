"""
Compile Batches

Resolves the subjects and notes named on the command line and compiles them
in a single parallel run. Each subject contributes jobs with its own command
(explicit override > subject metadata > profile > ``pdflatex {{note}}``).
"""

from typing import List, Optional, Sequence, Tuple

from noteshelf.contexts.rendering.compiler import (
    DEFAULT_THREAD_COUNT,
    CompilationResult,
    CompileJob,
    build_job,
    choose_command,
    run_compile_jobs,
)
from noteshelf.contexts.rendering.logger import _log_warning
from noteshelf.contexts.shelving.metadata import effective_file_globs, load_subject_metadata
from noteshelf.contexts.shelving.models import BatchReport, Shelf
from noteshelf.contexts.shelving.resolver import list_notes, resolve_note, resolve_subject_path
from noteshelf.contexts.templating.profile import Profile
from noteshelf.exceptions import NoteshelfError


def compile_subjects(
    profile: Profile,
    shelf: Shelf,
    subject_paths: Sequence[str],
    files: Optional[Sequence[str]] = None,
    command: Optional[str] = None,
    thread_count: int = DEFAULT_THREAD_COUNT,
    verbose: bool = False,
) -> Tuple[BatchReport, List[CompilationResult]]:
    """
    Compile every note of the given subjects.

    Args:
        profile: Loaded profile
        shelf: Target shelf
        subject_paths: Subjects as typed by the user
        files: Glob filter overriding each subject's ``_files``
        command: Compile command override
        thread_count: Maximum number of concurrent processes
        verbose: Log command output of successful compiles

    Returns:
        (report of subject resolution, compilation results in subject then file order)
    """
    report = BatchReport(operation="resolve subjects")
    jobs: List[CompileJob] = []

    for subject_path in subject_paths:
        try:
            subject = resolve_subject_path(shelf, subject_path)
            metadata = load_subject_metadata(subject, profile.subject_defaults)
        except NoteshelfError as e:
            report.record_failure(subject_path, e)
            continue

        notes = list_notes(subject, effective_file_globs(files, metadata))
        if not notes:
            _log_warning(f"No notes to compile in '{subject.full_name}'")

        command_template = choose_command(command, metadata.command, profile.command)
        jobs.extend(build_job(note, command_template) for note in notes)
        report.record_success(subject_path)

    return report, run_compile_jobs(jobs, thread_count=thread_count, verbose=verbose)


def compile_subject_notes(
    profile: Profile,
    shelf: Shelf,
    subject_path: str,
    titles: Sequence[str],
    files: Optional[Sequence[str]] = None,
    command: Optional[str] = None,
    thread_count: int = DEFAULT_THREAD_COUNT,
    verbose: bool = False,
) -> Tuple[BatchReport, List[CompilationResult]]:
    """
    Compile specific notes of one subject.

    Titles are matched against the notes selected by ``files``, or by the
    subject's ``_files`` filter when ``files`` is None; titles that match
    nothing are recorded as failures.

    Raises:
        SubjectNotFoundError: If the subject does not resolve
        MetadataParseError: If the subject's info.toml is malformed
    """
    subject = resolve_subject_path(shelf, subject_path)
    metadata = load_subject_metadata(subject, profile.subject_defaults)
    file_globs = effective_file_globs(files, metadata)
    command_template = choose_command(command, metadata.command, profile.command)

    report = BatchReport(operation=f"resolve notes in '{subject.full_name}'")
    jobs: List[CompileJob] = []
    for title in titles:
        try:
            note = resolve_note(subject, title, file_globs)
        except NoteshelfError as e:
            report.record_failure(title, e)
            continue
        jobs.append(build_job(note, command_template))
        report.record_success(title)

    return report, run_compile_jobs(jobs, thread_count=thread_count, verbose=verbose)
