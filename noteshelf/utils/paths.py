"""
Lexical path helpers.

Nothing here touches the filesystem: paths are treated as strings of
slash-separated components.
"""

from typing import List, Optional

CURRENT_DIR = "."
PARENT_DIR = ".."
ROOT_DIR = "/"


def path_components(path: str) -> List[str]:
    """
    Split a path into components.

    Repeated and trailing separators are collapsed, and ``.`` components are
    dropped except for a leading one on a relative path. An absolute path
    starts with the ``"/"`` root component.

    Example:
        >>> path_components("./notes//calculus/./limits/")
        ['.', 'notes', 'calculus', 'limits']
        >>> path_components("/dev/sda")
        ['/', 'dev', 'sda']
    """
    components = []
    if path.startswith(ROOT_DIR):
        components.append(ROOT_DIR)

    segments = [segment for segment in path.split("/") if segment]
    for index, segment in enumerate(segments):
        if segment == CURRENT_DIR and (index > 0 or components):
            continue
        components.append(segment)

    return components


def _join(components: List[str]) -> str:
    if components and components[0] == ROOT_DIR:
        return ROOT_DIR + "/".join(components[1:])
    return "/".join(components)


def relative_path_from(destination: str, base: str) -> Optional[str]:
    """
    Get the relative path from base to destination, like ``os.path.relpath``.

    Returns None when no lexical answer exists: a relative destination with an
    absolute base, or a base that climbs through ``..`` past the common prefix.
    An absolute destination with a relative base is returned unchanged.

    Example:
        >>> relative_path_from("university/year-1/semester-1", "university/year-2/semester-2")
        '../../year-1/semester-1'
        >>> relative_path_from(".", "university/year-1")
        '../../.'
    """
    destination_is_absolute = destination.startswith(ROOT_DIR)
    base_is_absolute = base.startswith(ROOT_DIR)

    if destination_is_absolute != base_is_absolute:
        return destination if destination_is_absolute else None

    destination_parts = iter(path_components(destination))
    base_parts = iter(path_components(base))
    result: List[str] = []

    while True:
        a = next(destination_parts, None)
        b = next(base_parts, None)

        if a is None and b is None:
            break
        if b is None:
            result.append(a)
            result.extend(destination_parts)
            break
        if a is None:
            result.append(PARENT_DIR)
        elif not result and a == b:
            continue
        elif b == CURRENT_DIR:
            result.append(a)
        elif b == PARENT_DIR:
            return None
        else:
            result.append(PARENT_DIR)
            result.extend(PARENT_DIR for _ in base_parts)
            result.append(a)
            result.extend(destination_parts)
            break

    return _join(result)


def normalize_components(path: str) -> List[str]:
    """
    Lexically normalize a relative path into its components.

    ``.`` components are removed and each ``..`` cancels the component before
    it. Leading ``..`` components that cannot be cancelled are kept.

    Example:
        >>> normalize_components("./Calculus/../Calculus I/../../p")
        ['..', 'p']
        >>> normalize_components("Year 1/Semester 1/Quantum Mechanics/..")
        ['Year 1', 'Semester 1']
    """
    normalized: List[str] = []
    for component in path.split("/"):
        component = component.strip()
        if not component or component == CURRENT_DIR:
            continue
        if component == PARENT_DIR:
            if normalized and normalized[-1] != PARENT_DIR:
                normalized.pop()
            else:
                normalized.append(component)
            continue
        normalized.append(component)

    return normalized
