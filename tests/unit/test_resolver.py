"""Unit tests for subject and note resolution against the shelf."""

import pytest

from noteshelf.contexts.shelving.resolver import (
    iter_subjects,
    list_notes,
    resolve_note,
    resolve_subject,
    resolve_subject_path,
    split_subject_path,
)
from noteshelf.exceptions import InvalidNameError, NoteNotFoundError, SubjectNotFoundError


@pytest.mark.unit
@pytest.mark.parametrize(
    "requested",
    [
        "Year 1/Semester 1/Calculus I",
        "year-1/semester-1/calculus-i",
        "year-1/semester-1/Calculus I",
        "YEAR_1/semester 1/calculus_i/",
        "Year 1/Semester 1/Linear Algebra/../Calculus I",
    ],
)
def test_resolve_subject_by_canonical_name(shelf, calculus_dir, requested):
    subject = resolve_subject_path(shelf, requested)

    assert subject.path == calculus_dir
    assert subject.full_name == "year-1/semester-1/calculus-i"
    assert subject.name == "calculus-i"
    assert subject.path_in_shelf.as_posix() == "year-1/semester-1/calculus-i"


@pytest.mark.unit
def test_resolve_subject_reports_first_unmatched_component(shelf):
    with pytest.raises(SubjectNotFoundError) as exc_info:
        resolve_subject(shelf, ["Year 1", "Semester 2", "Calculus I"])

    assert exc_info.value.component == "Semester 2"
    assert exc_info.value.searched == shelf.path / "year-1"


@pytest.mark.unit
@pytest.mark.parametrize("hidden", ["_drafts", "My Notes", "my-notes"])
def test_hidden_directories_do_not_resolve(shelf, hidden):
    with pytest.raises(SubjectNotFoundError):
        resolve_subject_path(shelf, hidden)


@pytest.mark.unit
def test_split_subject_path():
    assert split_subject_path("Year 1/Semester 1/Quantum Mechanics/../Calculus I") == [
        "Year 1",
        "Semester 1",
        "Calculus I",
    ]


@pytest.mark.unit
def test_split_subject_path_rejects_empty_and_escaping_paths():
    with pytest.raises(InvalidNameError):
        split_subject_path("  /./ ")
    with pytest.raises(SubjectNotFoundError):
        split_subject_path("Year 1/../../outside")


@pytest.mark.unit
def test_list_notes_filters_hidden_and_sorts(shelf, calculus_dir):
    (calculus_dir / "_master.tex").write_text("master\n")
    subject = resolve_subject_path(shelf, "year-1/semester-1/calculus-i")

    notes = list_notes(subject, ["*.tex"])

    assert [note.file for note in notes] == ["derivatives.tex", "limits.tex"]
    assert [note.title for note in notes] == ["derivatives", "limits"]


@pytest.mark.unit
def test_list_notes_with_several_globs_has_no_duplicates(shelf, calculus_dir):
    (calculus_dir / "summary.ltx").write_text("summary\n")
    subject = resolve_subject_path(shelf, "year-1/semester-1/calculus-i")

    notes = list_notes(subject, ["*.tex", "l*.tex", "*.ltx"])

    assert [note.file for note in notes] == ["derivatives.tex", "limits.tex", "summary.ltx"]


@pytest.mark.unit
def test_list_notes_with_empty_filter_selects_nothing(shelf):
    subject = resolve_subject_path(shelf, "year-1/semester-1/calculus-i")
    assert list_notes(subject, []) == []


@pytest.mark.unit
def test_list_notes_ignores_nested_files(shelf, calculus_dir):
    (calculus_dir / "figures").mkdir()
    (calculus_dir / "figures" / "plot.tex").write_text("plot\n")
    subject = resolve_subject_path(shelf, "year-1/semester-1/calculus-i")

    notes = list_notes(subject, ["*.tex", "**/*.tex"])

    assert "plot.tex" not in [note.file for note in notes]


@pytest.mark.unit
@pytest.mark.parametrize("title", ["Limits", "limits", "LIMITS", " limits "])
def test_resolve_note(shelf, calculus_dir, title):
    subject = resolve_subject_path(shelf, "Year 1/Semester 1/Calculus I")

    note = resolve_note(subject, title, ["*.tex"])

    assert note.path == calculus_dir / "limits.tex"
    assert note.path_in_shelf.as_posix() == "year-1/semester-1/calculus-i/limits.tex"


@pytest.mark.unit
def test_resolve_note_respects_glob_filter(shelf):
    subject = resolve_subject_path(shelf, "Year 1/Semester 1/Calculus I")

    with pytest.raises(NoteNotFoundError):
        resolve_note(subject, "limits", ["d*.tex"])


@pytest.mark.unit
def test_resolve_note_never_matches_hidden_files(shelf):
    subject = resolve_subject_path(shelf, "Year 1/Semester 1/Calculus I")

    with pytest.raises(NoteNotFoundError):
        resolve_note(subject, "scratch", ["*.tex"])


@pytest.mark.unit
def test_iter_subjects_walks_visible_tree(shelf):
    names = [subject.full_name for subject in iter_subjects(shelf)]

    assert names == [
        "year-1",
        "year-1/semester-1",
        "year-1/semester-1/calculus-i",
        "year-1/semester-1/linear-algebra",
    ]


@pytest.mark.unit
def test_iter_subjects_below_a_subject(shelf):
    root = resolve_subject_path(shelf, "year-1")

    names = [subject.full_name for subject in iter_subjects(shelf, root)]

    assert names[0] == "year-1/semester-1"
    assert "year-1" not in names
