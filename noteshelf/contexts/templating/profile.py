"""
Profile Loading

A profile is a directory holding ``profile.toml`` (name, version, optional
compile command, optional ``[subject]`` defaults and any extra keys) and a
``templates/`` directory of ``*.tex.jinja`` files.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from noteshelf.contexts.shelving.metadata import read_toml, to_plain, validate_subject_document
from noteshelf.contexts.templating.defaults import (
    BUILTIN_TEMPLATES,
    DEFAULT_PROFILE_VERSION,
    PROFILE_METADATA_FILE,
    PROFILE_TEMPLATES_DIR,
    TEMPLATE_SUFFIX,
)
from noteshelf.contexts.templating.logger import _log_debug, _log_info
from noteshelf.exceptions import MetadataParseError, ProfileError

REQUIRED_KEYS = ("name", "version")
SUBJECT_DEFAULTS_KEY = "subject"


@dataclass(frozen=True)
class Profile:
    """
    Root configuration loaded once per invocation.

    Attributes:
        path: Profile directory
        document: Full profile.toml content (extra keys preserved verbatim)
        templates: Template key -> raw template text, built-ins included
    """

    path: Path
    document: Dict[str, Any] = field(default_factory=dict)
    templates: Dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.document["name"]

    @property
    def version(self) -> str:
        return self.document["version"]

    @property
    def command(self) -> Optional[str]:
        return self.document.get("command")

    @property
    def subject_defaults(self) -> Dict[str, Any]:
        """The ``[subject]`` table every subject's metadata is layered over."""
        return self.document.get(SUBJECT_DEFAULTS_KEY, {})


def load_templates(templates_dir: Path) -> Dict[str, str]:
    """
    Collect the template store of a profile.

    Built-in templates come first and are replaced by files of the same key.
    The key is the path relative to the templates directory without the
    ``.tex.jinja`` suffix, always with forward slashes.

    Example:
        templates/master/_default.tex.jinja -> "master/_default"
    """
    templates = dict(BUILTIN_TEMPLATES)
    if not templates_dir.is_dir():
        return templates

    for template_file in sorted(templates_dir.rglob(f"*{TEMPLATE_SUFFIX}")):
        if not template_file.is_file():
            continue
        relative = template_file.relative_to(templates_dir).as_posix()
        key = relative[: -len(TEMPLATE_SUFFIX)]
        templates[key] = template_file.read_text(encoding="utf-8")
        _log_debug(f"Loaded template '{key}' from {template_file}")

    return templates


def load_profile(path: Path) -> Profile:
    """
    Load a profile directory.

    Args:
        path: Profile directory

    Returns:
        Immutable Profile

    Raises:
        ProfileError: If profile.toml is missing, malformed or lacks name/version
    """
    metadata_path = path / PROFILE_METADATA_FILE
    if not metadata_path.is_file():
        raise ProfileError(f"No {PROFILE_METADATA_FILE} found; run 'noteshelf init' first", path)

    try:
        document = to_plain(read_toml(metadata_path))
    except MetadataParseError as e:
        raise ProfileError(str(e), path) from e

    for key in REQUIRED_KEYS:
        if not isinstance(document.get(key), str):
            raise ProfileError(f"'{key}' is required and must be a string", path)

    if "command" in document and not isinstance(document["command"], str):
        raise ProfileError("'command' must be a string", path)

    subject_defaults = document.get(SUBJECT_DEFAULTS_KEY, {})
    if not isinstance(subject_defaults, dict):
        raise ProfileError(f"'{SUBJECT_DEFAULTS_KEY}' must be a table", path)
    try:
        validate_subject_document(subject_defaults, metadata_path)
    except MetadataParseError as e:
        raise ProfileError(str(e), path) from e

    try:
        templates = load_templates(path / PROFILE_TEMPLATES_DIR)
    except (OSError, UnicodeDecodeError) as e:
        raise ProfileError(f"Cannot read templates: {e}", path) from e

    _log_debug(f"Loaded profile '{document['name']}' with {len(templates)} templates")
    return Profile(path=path, document=document, templates=templates)


def init_profile(path: Path, name: str) -> Profile:
    """
    Create a new profile directory with the built-in templates written out.

    Args:
        path: Profile directory to create (parents are created as needed)
        name: Author name stored in profile.toml

    Returns:
        The freshly loaded profile

    Raises:
        ProfileError: If a profile already exists there or cannot be written
    """
    metadata_path = path / PROFILE_METADATA_FILE
    if metadata_path.exists():
        raise ProfileError("A profile already exists", path)

    templates_dir = path / PROFILE_TEMPLATES_DIR
    # json string literals are valid TOML basic strings
    lines = [
        f"name = {json.dumps(name)}",
        f"version = {json.dumps(DEFAULT_PROFILE_VERSION)}",
        "",
        "[subject]",
        '_files = ["*.tex"]',
        "",
    ]

    try:
        templates_dir.mkdir(parents=True, exist_ok=True)
        metadata_path.write_text("\n".join(lines), encoding="utf-8")
        for key, text in BUILTIN_TEMPLATES.items():
            template_file = templates_dir / f"{key}{TEMPLATE_SUFFIX}"
            if template_file.exists():
                continue
            template_file.parent.mkdir(parents=True, exist_ok=True)
            template_file.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ProfileError(f"Cannot create profile: {e}", path) from e

    _log_info(f"Created profile at {path}")
    return load_profile(path)
