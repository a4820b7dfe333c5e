"""Shared fixtures: temporary shelves, profiles and a pinned clock."""

from datetime import date
from pathlib import Path

import pytest

from noteshelf.contexts.shelving.models import Shelf
from noteshelf.contexts.templating.profile import init_profile, load_profile
from noteshelf.utils.timestamp import fixed_clock

FIXED_DAY = date(2024, 1, 31)


@pytest.fixture
def clock():
    return fixed_clock(FIXED_DAY)


@pytest.fixture
def shelf(tmp_path) -> Shelf:
    """Shelf with a small nested subject tree and a few notes."""
    root = tmp_path / "shelf"
    calculus = root / "year-1" / "semester-1" / "calculus-i"
    calculus.mkdir(parents=True)
    (root / "year-1" / "semester-1" / "linear-algebra").mkdir()
    (root / "_drafts").mkdir()
    (root / "My Notes").mkdir()

    (calculus / "limits.tex").write_text("limits\n")
    (calculus / "derivatives.tex").write_text("derivatives\n")
    (calculus / "_scratch.tex").write_text("hidden\n")
    (calculus / "readme.md").write_text("not a note\n")

    return Shelf(root)


@pytest.fixture
def calculus_dir(shelf) -> Path:
    return shelf.path / "year-1" / "semester-1" / "calculus-i"


@pytest.fixture
def profile_dir(tmp_path) -> Path:
    """Profile directory created with the built-in templates."""
    path = tmp_path / "profile"
    init_profile(path, "Jane Doe")
    return path


@pytest.fixture
def profile(profile_dir):
    return load_profile(profile_dir)


@pytest.fixture
def write_profile(tmp_path):
    """Factory writing a profile.toml (and optional template files) by hand."""

    def _write(body: str, templates: dict = None, name: str = "custom-profile") -> Path:
        path = tmp_path / name
        path.mkdir(parents=True, exist_ok=True)
        (path / "profile.toml").write_text(body)
        for key, text in (templates or {}).items():
            template_file = path / "templates" / f"{key}.tex.jinja"
            template_file.parent.mkdir(parents=True, exist_ok=True)
            template_file.write_text(text)
        return path

    return _write
