"""
Metadata documents (TOML) and layered merging.

Subject metadata lives in ``info.toml`` inside the subject directory. Profile
wide subject defaults (the profile's ``[subject]`` table) sit underneath it:
keys in the subject's own file win.
"""

import re
import tomllib
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from omegaconf import OmegaConf

from noteshelf.contexts.shelving.logger import _log_debug
from noteshelf.contexts.shelving.models import DEFAULT_FILE_GLOBS, Subject
from noteshelf.exceptions import MetadataParseError

FILES_KEY = "_files"
STRING_KEYS = ("name", "command")

INTERPOLATION_START = "${"
ESCAPED_INTERPOLATION_START = "\\${"
# OmegaConf reads this exact string as a missing value
MISSING_VALUE = "???"
MISSING_VALUE_PATTERN = re.compile(r"\\*\?\?\?")


def read_toml(path: Path) -> Dict[str, Any]:
    """
    Parse a TOML file into a plain dict.

    Raises:
        MetadataParseError: If the file cannot be read, is not UTF-8 or is
            not valid TOML
    """
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError, OSError) as e:
        raise MetadataParseError(path, str(e)) from e


def to_plain(value: Any) -> Any:
    """Recursively convert TOML values into types OmegaConf accepts (dates become ISO strings)."""
    if isinstance(value, Mapping):
        return {str(key): to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


def _map_strings(value: Any, func) -> Any:
    if isinstance(value, dict):
        return {key: _map_strings(item, func) for key, item in value.items()}
    if isinstance(value, list):
        return [_map_strings(item, func) for item in value]
    if isinstance(value, str):
        return func(value)
    return value


def merge_documents(*documents: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge documents left to right; later documents win on key collisions.

    Nested mappings are merged key by key, sequences are replaced whole.
    ``${`` and the ``???`` missing marker are escaped on the way in and
    restored on the way out, so LaTeX such as ``${}^{14}C$`` is never read as
    an OmegaConf interpolation and a literal ``???`` still overrides.

    Example:
        >>> merge_documents({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}})
        {'a': {'x': 1, 'y': 3}}
    """
    layers = [OmegaConf.create(_map_strings(to_plain(document), _escape)) for document in documents]
    merged = OmegaConf.to_container(OmegaConf.merge(*layers), resolve=False)
    return _map_strings(merged, _unescape)


def _escape(value: str) -> str:
    value = value.replace(INTERPOLATION_START, ESCAPED_INTERPOLATION_START)
    if MISSING_VALUE_PATTERN.fullmatch(value):
        value = "\\" + value
    return value


def _unescape(value: str) -> str:
    if MISSING_VALUE_PATTERN.fullmatch(value) and value != MISSING_VALUE:
        value = value[1:]
    return value.replace(ESCAPED_INTERPOLATION_START, INTERPOLATION_START)


def validate_subject_document(document: Mapping[str, Any], path: Path) -> None:
    """
    Check the reserved keys of a subject metadata document.

    Raises:
        MetadataParseError: If ``name``/``command`` are not strings or
            ``_files`` is not a sequence of strings
    """
    for key in STRING_KEYS:
        if key in document and not isinstance(document[key], str):
            raise MetadataParseError(path, f"'{key}' must be a string")

    if FILES_KEY in document:
        files = document[FILES_KEY]
        if not isinstance(files, list) or not all(isinstance(item, str) for item in files):
            raise MetadataParseError(path, f"'{FILES_KEY}' must be a sequence of strings")


@dataclass
class SubjectMetadata:
    """
    Metadata of one subject after profile defaults were applied.

    Attributes:
        document: Every key from the profile defaults and the subject's info.toml
        source: The info.toml path (may not exist)
    """

    document: Dict[str, Any] = field(default_factory=dict)
    source: Optional[Path] = None

    @property
    def name(self) -> Optional[str]:
        return self.document.get("name")

    @property
    def command(self) -> Optional[str]:
        return self.document.get("command")

    @property
    def files(self) -> Optional[List[str]]:
        """Glob filter, or None when neither the subject nor the profile sets one."""
        return self.document.get(FILES_KEY)


def effective_file_globs(
    files: Optional[Sequence[str]], metadata: Optional[SubjectMetadata] = None
) -> List[str]:
    """
    Choose the note glob filter for a subject.

    An explicit ``files`` argument wins, even when empty; then the subject's
    ``_files`` (already layered over the profile default); then ``*.tex``.
    An empty filter selects no notes at all.
    """
    if files is not None:
        return list(files)
    if metadata is not None and metadata.files is not None:
        return list(metadata.files)
    return list(DEFAULT_FILE_GLOBS)


def load_subject_metadata(
    subject: Subject, defaults: Optional[Mapping[str, Any]] = None
) -> SubjectMetadata:
    """
    Load a subject's metadata layered over the profile's subject defaults.

    A missing info.toml is not an error: the subject then only carries the
    defaults.

    Args:
        subject: Resolved subject
        defaults: Profile-level subject defaults (already validated)

    Returns:
        SubjectMetadata with the merged document

    Raises:
        MetadataParseError: If info.toml exists but is malformed
    """
    metadata_path = subject.metadata_path
    layers = [defaults or {}]

    if metadata_path.is_file():
        document = read_toml(metadata_path)
        validate_subject_document(document, metadata_path)
        layers.append(document)
        _log_debug(f"Loaded metadata for '{subject.full_name}' from {metadata_path}")

    return SubjectMetadata(document=merge_documents(*layers), source=metadata_path)
