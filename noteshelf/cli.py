"""
noteshelf command-line interface

Manages LaTeX notes kept in nested subject folders on a shelf directory.

Commands:
    init             - Create a profile with the default templates
    add subjects     - Create subject folders
    add notes        - Render new notes into a subject
    remove subjects  - Delete subject folders
    remove notes     - Delete note files
    compile subjects - Compile every note of some subjects
    compile notes    - Compile specific notes of a subject
    master           - Regenerate (and compile) master notes
    list             - Show the subjects and notes on the shelf

Examples:\n

    noteshelf add subjects "Year 1/Semester 1/Calculus I"

    noteshelf add notes "Year 1/Semester 1/Calculus I" "Limits" "Derivatives"

    noteshelf compile subjects "year-1/semester-1/calculus-i" --thread-count 8

    noteshelf master "Year 1/Semester 1/Calculus I" --files "*.tex" --skip-compilation
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from noteshelf import __version__
from noteshelf.contexts.rendering.batch import compile_subject_notes, compile_subjects
from noteshelf.contexts.rendering.compiler import DEFAULT_THREAD_COUNT, CompilationResult
from noteshelf.contexts.shelving.logger import log_batch_report
from noteshelf.contexts.shelving.metadata import effective_file_globs, load_subject_metadata
from noteshelf.contexts.shelving.models import BatchReport, Shelf
from noteshelf.contexts.shelving.resolver import (
    iter_subjects,
    list_notes,
    resolve_subject_path,
)
from noteshelf.contexts.shelving.writer import add_subject, remove_note, remove_subject
from noteshelf.contexts.templating.defaults import DEFAULT_PROFILE_NAME, PROFILE_METADATA_FILE
from noteshelf.contexts.templating.master import generate_master_notes
from noteshelf.contexts.templating.notes import create_notes
from noteshelf.contexts.templating.profile import Profile, init_profile, load_profile
from noteshelf.exceptions import NoteshelfError
from noteshelf.utils.logger import setup_logger

load_dotenv()

APP_NAME = "noteshelf"
LOGS_PATH = os.getenv("NOTESHELF_LOGS_PATH")

app = typer.Typer(
    help="Manage a shelf of LaTeX notes organized in nested subjects",
    add_completion=False,
    invoke_without_command=True,
)
add_app = typer.Typer(help="Add subjects or notes to the shelf", no_args_is_help=True)
remove_app = typer.Typer(help="Remove subjects or notes from the shelf", no_args_is_help=True)
compile_app = typer.Typer(help="Compile notes in parallel", no_args_is_help=True)

app.add_typer(add_app, name="add")
app.add_typer(remove_app, name="remove")
app.add_typer(compile_app, name="compile")


@dataclass
class Settings:
    """Resolved global options shared by every command."""

    profile_path: Path
    shelf: Shelf
    verbose: bool = False

    def load_profile(self) -> Profile:
        return load_profile(self.profile_path)

    def subject_defaults(self) -> Dict[str, Any]:
        """Profile-wide subject defaults, or none when no profile has been set up."""
        if not (self.profile_path / PROFILE_METADATA_FILE).exists():
            return {}
        return self.load_profile().subject_defaults


ThreadCountOption = Annotated[
    int,
    typer.Option(
        "--thread-count",
        "-t",
        min=1,
        envvar="NOTESHELF_THREAD_COUNT",
        help="Maximum number of compile commands running at once",
    ),
]
CommandOption = Annotated[
    Optional[str],
    typer.Option("--command", "-c", help="Compile command template, e.g. 'latexmk -pdf {{note}}'"),
]
FilesOption = Annotated[
    Optional[List[str]],
    typer.Option("--files", "-f", help="Glob filter for note files (repeatable)"),
]


def _fail(error: Exception) -> None:
    typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _print_report(report: BatchReport) -> None:
    log_batch_report(report)
    for target in report.succeeded:
        typer.secho(f"✓ {target}", fg=typer.colors.GREEN)
    for target, error in report.failed:
        typer.secho(f"✗ {target}: {error}", fg=typer.colors.RED, err=True)


def _print_results(results: Sequence[CompilationResult]) -> None:
    for result in results:
        target = result.note.path_in_shelf.as_posix()
        if result.success:
            typer.secho(f"✓ {target}", fg=typer.colors.GREEN)
        else:
            typer.secho(f"✗ {target}: {result.reason}", fg=typer.colors.RED, err=True)

    failed = sum(1 for result in results if not result.success)
    if results:
        colour = typer.colors.YELLOW if failed else typer.colors.GREEN
        typer.secho(
            f"{len(results) - failed}/{len(results)} compiled successfully", fg=colour, bold=True
        )


def _exit_on_failures(report: BatchReport) -> None:
    if not report.ok:
        raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    profile: Annotated[
        Optional[Path],
        typer.Option(
            "--profile",
            envvar="NOTESHELF_PROFILE",
            help="Profile directory (default: the user config directory)",
        ),
    ] = None,
    shelf: Annotated[
        Optional[Path],
        typer.Option(
            "--shelf",
            "-s",
            envvar="NOTESHELF_SHELF",
            help="Shelf directory (default: the current directory)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    profile_path = (profile or Path(typer.get_app_dir(APP_NAME))).expanduser()
    shelf_path = (shelf or Path.cwd()).expanduser().resolve()

    setup_logger(
        context_name=APP_NAME,
        log_dir=Path(LOGS_PATH).expanduser() if LOGS_PATH else None,
        verbose=verbose,
        extra_provenance={
            "Version": __version__,
            "Profile": profile_path,
            "Shelf": shelf_path,
        },
    )
    ctx.obj = Settings(profile_path=profile_path, shelf=Shelf(shelf_path), verbose=verbose)


@app.command("init")
def init_command(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Author name used by the templates"),
    ] = DEFAULT_PROFILE_NAME,
):
    """
    Create a profile with profile.toml and the default templates.

    Examples:\n

        $ noteshelf init --name "Jane Doe"

        $ noteshelf --profile ./my-profile init
    """
    settings: Settings = ctx.obj
    try:
        profile = init_profile(settings.profile_path, name)
    except NoteshelfError as e:
        _fail(e)

    typer.secho(f"✓ Profile '{profile.name}' created", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Location: {profile.path}")


@add_app.command("subjects")
def add_subjects_command(
    ctx: typer.Context,
    subjects: Annotated[
        List[str],
        typer.Argument(help="Subject paths, e.g. 'Year 1/Semester 1/Calculus I'"),
    ],
):
    """Create subject folders, including missing parents."""
    settings: Settings = ctx.obj
    report = BatchReport(operation="add subjects")

    for subject_path in subjects:
        try:
            subject = add_subject(settings.shelf, subject_path)
        except NoteshelfError as e:
            report.record_failure(subject_path, e)
            continue
        report.record_success(subject.full_name)

    _print_report(report)
    _exit_on_failures(report)


@add_app.command("notes")
def add_notes_command(
    ctx: typer.Context,
    subject: Annotated[str, typer.Argument(help="Subject the notes belong to")],
    notes: Annotated[List[str], typer.Argument(help="Titles of the new notes")],
    template: Annotated[
        Optional[str],
        typer.Option("--template", help="Profile template to render (default: _default)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite notes that already exist"),
    ] = False,
):
    """
    Render new notes from a profile template.

    Examples:\n

        $ noteshelf add notes "Calculus I" "Limits" "Taylor Series" --template lecture
    """
    settings: Settings = ctx.obj
    try:
        profile = settings.load_profile()
        report = create_notes(
            profile, settings.shelf, subject, notes, template=template, overwrite=force
        )
    except NoteshelfError as e:
        _fail(e)

    _print_report(report)
    _exit_on_failures(report)


@remove_app.command("subjects")
def remove_subjects_command(
    ctx: typer.Context,
    subjects: Annotated[List[str], typer.Argument(help="Subject paths to delete")],
):
    """Delete subject folders together with everything inside them."""
    settings: Settings = ctx.obj
    report = BatchReport(operation="remove subjects")

    for subject_path in subjects:
        try:
            removed = remove_subject(settings.shelf, subject_path)
        except NoteshelfError as e:
            report.record_failure(subject_path, e)
            continue
        report.record_success(removed.full_name)

    _print_report(report)
    _exit_on_failures(report)


@remove_app.command("notes")
def remove_notes_command(
    ctx: typer.Context,
    subject: Annotated[str, typer.Argument(help="Subject the notes belong to")],
    notes: Annotated[List[str], typer.Argument(help="Titles of the notes to delete")],
):
    """Delete note files from a subject."""
    settings: Settings = ctx.obj
    try:
        resolved = resolve_subject_path(settings.shelf, subject)
        metadata = load_subject_metadata(resolved, settings.subject_defaults())
    except NoteshelfError as e:
        _fail(e)

    file_globs = effective_file_globs(None, metadata)
    report = BatchReport(operation=f"remove notes from '{resolved.full_name}'")
    for title in notes:
        try:
            removed = remove_note(resolved, title, file_globs)
        except NoteshelfError as e:
            report.record_failure(title, e)
            continue
        report.record_success(removed.file)

    _print_report(report)
    _exit_on_failures(report)


@compile_app.command("subjects")
def compile_subjects_command(
    ctx: typer.Context,
    subjects: Annotated[List[str], typer.Argument(help="Subjects whose notes are compiled")],
    thread_count: ThreadCountOption = DEFAULT_THREAD_COUNT,
    files: FilesOption = None,
    command: CommandOption = None,
):
    """
    Compile every note of the given subjects.

    Compile failures are reported per note and do not stop the others.

    Examples:\n

        $ noteshelf compile subjects "Calculus I" "Linear Algebra" -t 8

        $ noteshelf compile subjects "Calculus I" --command "latexmk -pdf {{note}}"
    """
    settings: Settings = ctx.obj
    try:
        profile = settings.load_profile()
        report, results = compile_subjects(
            profile,
            settings.shelf,
            subjects,
            files=files or None,
            command=command,
            thread_count=thread_count,
            verbose=settings.verbose,
        )
    except NoteshelfError as e:
        _fail(e)

    if not report.ok:
        _print_report(report)
    _print_results(results)
    _exit_on_failures(report)


@compile_app.command("notes")
def compile_notes_command(
    ctx: typer.Context,
    subject: Annotated[str, typer.Argument(help="Subject the notes belong to")],
    notes: Annotated[List[str], typer.Argument(help="Titles of the notes to compile")],
    thread_count: ThreadCountOption = DEFAULT_THREAD_COUNT,
    files: FilesOption = None,
    command: CommandOption = None,
):
    """Compile specific notes of a subject."""
    settings: Settings = ctx.obj
    try:
        profile = settings.load_profile()
        report, results = compile_subject_notes(
            profile,
            settings.shelf,
            subject,
            notes,
            files=files or None,
            command=command,
            thread_count=thread_count,
            verbose=settings.verbose,
        )
    except NoteshelfError as e:
        _fail(e)

    if not report.ok:
        _print_report(report)
    _print_results(results)
    _exit_on_failures(report)


@app.command("master")
def master_command(
    ctx: typer.Context,
    subjects: Annotated[List[str], typer.Argument(help="Subjects to build master notes for")],
    skip_compilation: Annotated[
        bool,
        typer.Option("--skip-compilation", help="Only write _master.tex, do not compile"),
    ] = False,
    files: FilesOption = None,
    template: Annotated[
        Optional[str],
        typer.Option("--template", help="Master template (default: master/_default)"),
    ] = None,
    command: CommandOption = None,
    thread_count: ThreadCountOption = DEFAULT_THREAD_COUNT,
):
    """
    Regenerate the master note of each subject and compile it.

    Examples:\n

        $ noteshelf master "Calculus I" --files "lecture-*.tex"

        $ noteshelf master "Calculus I" "Linear Algebra" --skip-compilation
    """
    settings: Settings = ctx.obj
    try:
        profile = settings.load_profile()
        report, results = generate_master_notes(
            profile,
            settings.shelf,
            subjects,
            files=files or None,
            template=template,
            command=command,
            skip_compilation=skip_compilation,
            thread_count=thread_count,
            verbose=settings.verbose,
        )
    except NoteshelfError as e:
        _fail(e)

    _print_report(report)
    _print_results(results)
    _exit_on_failures(report)


@app.command("list")
def list_command(
    ctx: typer.Context,
    subject: Annotated[
        Optional[str],
        typer.Argument(help="Only list below this subject"),
    ] = None,
):
    """Show the subjects on the shelf and the notes inside each of them."""
    settings: Settings = ctx.obj
    try:
        defaults = settings.subject_defaults()
        root = resolve_subject_path(settings.shelf, subject) if subject else None
        subjects = ([root] if root is not None else []) + list(iter_subjects(settings.shelf, root))
        for entry in subjects:
            metadata = load_subject_metadata(entry, defaults)
            notes = list_notes(entry, effective_file_globs(None, metadata))
            typer.secho(entry.full_name, bold=True)
            for note in notes:
                typer.echo(f"  • {note.title}")
    except NoteshelfError as e:
        _fail(e)

    if not subjects:
        typer.echo(f"No subjects in {settings.shelf.path}")


if __name__ == "__main__":
    app()
