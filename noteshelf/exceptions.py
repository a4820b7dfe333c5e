"""Exceptions shared across the shelving, templating and rendering contexts."""

from pathlib import Path
from typing import Optional, Sequence


class NoteshelfError(Exception):
    """Base class for every error raised by noteshelf."""


class ProfileError(NoteshelfError):
    """
    Raised when the profile is missing, unreadable or incomplete.

    Fatal for the whole invocation: it is raised before anything on the shelf
    is touched.

    Attributes:
        path: Profile directory that failed to load
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path

        if path is not None:
            message = f"{message} (profile: {path})"
        super().__init__(message)


class MetadataParseError(NoteshelfError):
    """
    Raised when a metadata document exists but is not valid TOML of the expected shape.

    Attributes:
        path: Metadata file being read
        reason: What was wrong with it
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid metadata in {path}: {reason}")


class ResolutionError(NoteshelfError):
    """A requested subject or note could not be matched against the shelf."""


class SubjectNotFoundError(ResolutionError):
    """
    Raised at the first requested path component with no matching directory.

    Attributes:
        requested: The full requested subject path components
        component: The component that failed to match
        searched: Directory that was searched for the component
    """

    def __init__(self, requested: Sequence[str], component: str, searched: Path):
        self.requested = list(requested)
        self.component = component
        self.searched = searched
        super().__init__(
            f"Subject '{'/'.join(self.requested)}' not found: "
            f"no entry matching '{component}' in {searched}"
        )


class NoteNotFoundError(ResolutionError):
    """
    Raised when no note file in a subject matches the requested title.

    Attributes:
        title: Requested note title
        subject_path: Directory of the subject that was searched
    """

    def __init__(self, title: str, subject_path: Path):
        self.title = title
        self.subject_path = subject_path
        super().__init__(f"Note '{title}' not found in {subject_path}")


class InvalidNameError(ResolutionError):
    """Raised when a requested name has no canonical form (e.g. only punctuation)."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' cannot be used as a subject or note name")


class TemplateError(NoteshelfError):
    """
    Exception raised when template parsing or rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template in the profile store
        lineno: Template line where the failure happened, when known
        original_error: The underlying Jinja2 or Python error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        lineno: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.lineno = lineno
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if template_name:
            location = f"Template: {template_name}"
            if lineno is not None:
                location += f", line {lineno}"
            parts.append(location)

        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class StorageError(NoteshelfError):
    """
    Raised when a filesystem operation on the shelf fails.

    Attributes:
        path: Path being written or removed
        original_error: Underlying OSError, if any
    """

    def __init__(self, message: str, path: Path, original_error: Optional[Exception] = None):
        self.path = path
        self.original_error = original_error

        if original_error is not None:
            message = f"{message}: {original_error}"
        super().__init__(message)


class AlreadyExistsError(StorageError):
    """Raised when a note file exists and overwriting was not requested."""

    def __init__(self, path: Path):
        super().__init__(f"File already exists: {path}", path)
