"""
Parallel Note Compilation

Runs the profile's (or subject's) compile command for each note on a fixed
size thread pool. Commands are rendered before any worker starts; workers only
spawn processes and never share mutable state. One failing note never aborts
the others, and results always come back in input order.
"""

import shlex
import subprocess
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence

from jinja2 import Environment, StrictUndefined, TemplateError as JinjaTemplateError

from noteshelf.contexts.rendering.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
    log_compilation_summary,
)
from noteshelf.contexts.shelving.models import Note
from noteshelf.exceptions import TemplateError

DEFAULT_THREAD_COUNT = 4
# {{note}} is replaced by the file name of the note being compiled
DEFAULT_COMMAND = "pdflatex {{note}}"

# Commands are plain one-line templates: {{note}} is the only variable
_COMMAND_ENV = Environment(undefined=StrictUndefined, autoescape=False)


@dataclass
class CompilationResult:
    """
    Result of compiling one note.

    Attributes:
        note: Note that was compiled
        command: Rendered command line (empty if rendering failed)
        success: Whether the command ran and exited with status 0
        returncode: Exit status, None if the process never ran
        stdout: Standard output of the command
        stderr: Standard error of the command
        reason: Why the job failed (None on success)
        elapsed: Wall time spent in the worker, in seconds
    """

    note: Note
    command: str
    success: bool
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    reason: Optional[str] = None
    elapsed: float = 0.0


@dataclass(frozen=True)
class CompileJob:
    """
    A note paired with its already rendered command.

    Attributes:
        note: Note to compile (the command runs in its subject directory)
        command: Command line, or None when rendering it failed
        error: Rendering failure message when command is None
    """

    note: Note
    command: Optional[str]
    error: Optional[str] = None


def choose_command(
    override: Optional[str] = None,
    subject_command: Optional[str] = None,
    profile_command: Optional[str] = None,
) -> str:
    """
    Pick the command template to compile a subject's notes with.

    Precedence: explicit override, then the subject's metadata, then the
    profile, then ``pdflatex {{note}}``.
    """
    for candidate in (override, subject_command, profile_command):
        if candidate:
            return candidate
    return DEFAULT_COMMAND


def render_command(command_template: str, file_name: str) -> str:
    """
    Render a compile command for one note file.

    Example:
        >>> render_command("latexmk -pdf {{note}}", "limits.tex")
        'latexmk -pdf limits.tex'

    Raises:
        TemplateError: If the command template is malformed or references
            anything but ``note``
    """
    try:
        return _COMMAND_ENV.from_string(command_template).render(note=file_name)
    except JinjaTemplateError as e:
        raise TemplateError(
            "Cannot render compile command",
            template_name="command",
            lineno=getattr(e, "lineno", None),
            original_error=e,
        ) from e


def build_job(note: Note, command_template: str) -> CompileJob:
    """Render the command for a note, capturing a rendering failure in the job."""
    try:
        return CompileJob(note=note, command=render_command(command_template, note.file))
    except TemplateError as e:
        return CompileJob(note=note, command=None, error=str(e))


def _failure(job: CompileJob, reason: str, start: float, **kwargs) -> CompilationResult:
    return CompilationResult(
        note=job.note,
        command=job.command or "",
        success=False,
        reason=reason,
        elapsed=time.time() - start,
        **kwargs,
    )


def _run_job(job: CompileJob) -> CompilationResult:
    """Run one compile job in the note's subject directory."""
    start = time.time()

    if job.command is None:
        return _failure(job, job.error or "Command could not be rendered", start)

    try:
        argv = shlex.split(job.command)
    except ValueError as e:
        return _failure(job, f"Cannot parse command: {e}", start)
    if not argv:
        return _failure(job, "Empty command", start)

    _log_debug(f"Running {argv} in {job.note.subject.path}")
    try:
        completed = subprocess.run(
            argv,
            cwd=job.note.subject.path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        return _failure(job, f"Cannot run '{argv[0]}': {e}", start)

    if completed.returncode != 0:
        return _failure(
            job,
            f"Command exited with status {completed.returncode}",
            start,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    return CompilationResult(
        note=job.note,
        command=job.command,
        success=True,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        elapsed=time.time() - start,
    )


def run_compile_jobs(
    jobs: Sequence[CompileJob],
    thread_count: int = DEFAULT_THREAD_COUNT,
    verbose: bool = False,
) -> List[CompilationResult]:
    """
    Run compile jobs on a pool of at most ``thread_count`` workers.

    Args:
        jobs: Jobs with pre-rendered commands
        thread_count: Maximum number of concurrent processes (>= 1)
        verbose: Log command output of successful jobs too

    Returns:
        One CompilationResult per job, in the order of ``jobs``

    Raises:
        ValueError: If thread_count is less than 1
    """
    if thread_count < 1:
        raise ValueError(f"thread_count must be at least 1, got {thread_count}")
    if not jobs:
        return []

    log_compilation_start(len(jobs), thread_count)
    results: List[Optional[CompilationResult]] = [None] * len(jobs)

    with ThreadPoolExecutor(max_workers=thread_count) as executor:
        futures = {executor.submit(_run_job, job): index for index, job in enumerate(jobs)}
        for future in as_completed(futures):
            result = future.result()
            results[futures[future]] = result
            log_compilation_result(result, verbose=verbose)

    log_compilation_summary(results)
    return results


def compile_notes(
    notes: Sequence[Note],
    command_template: str,
    thread_count: int = DEFAULT_THREAD_COUNT,
    verbose: bool = False,
) -> List[CompilationResult]:
    """
    Compile notes in parallel with one shared command template.

    Args:
        notes: Notes to compile
        command_template: Command with a ``{{note}}`` placeholder for the file name
        thread_count: Maximum number of concurrent processes (>= 1)
        verbose: Log command output of successful jobs too

    Returns:
        One CompilationResult per note, in input order

    Raises:
        ValueError: If thread_count is less than 1

    Example:
        results = compile_notes(notes, "pdflatex -interaction=nonstopmode {{note}}")
        failed = [r.note.title for r in results if not r.success]
    """
    if thread_count < 1:
        raise ValueError(f"thread_count must be at least 1, got {thread_count}")

    jobs = [build_job(note, command_template) for note in notes]
    return run_compile_jobs(jobs, thread_count=thread_count, verbose=verbose)
