"""
File Version Resolver

Assigns "major.minor" versions per filename within a project. A re-upload
of an existing name bumps the minor part of the highest existing version
(1.0 -> 1.1 -> 1.2 ...); major never auto-increments.

The resolver only computes values. The caller flips is_latest on the
same-named siblings and inserts the new record in one transaction.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

INITIAL_VERSION = "1.0"

_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)$")


@dataclass(frozen=True)
class VersionResolution:
    version: str
    previous_version_id: Optional[str] = None


def parse_version(version: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    Parse "major.minor" into an integer pair.

    Returns None for anything else ("1", "1.2.3", "v1.0", "a.b", None);
    such versions rank below every well-formed one.
    """
    if not isinstance(version, str):
        return None
    match = _VERSION_PATTERN.match(version.strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def _same_name(files: Iterable[Any], file_name: str) -> List[Any]:
    # Exact, case-sensitive match
    return [f for f in files if f.name == file_name]


def latest_file(files: Iterable[Any], file_name: str) -> Optional[Any]:
    """The sibling flagged is_latest, if any"""
    for f in _same_name(files, file_name):
        if f.is_latest:
            return f
    return None


def resolve_version(existing_files: Iterable[Any], new_file_name: str) -> VersionResolution:
    """
    Compute the version of a newly uploaded file.

    Args:
        existing_files: Files already attached to the project. Anything with
            ``id``, ``name``, ``version`` and ``is_latest`` attributes works.
        new_file_name: Name of the incoming file

    Returns:
        VersionResolution with the new version string and the id of the
        file it supersedes (None for a first upload or when no sibling is
        flagged latest)
    """
    files = list(existing_files)
    siblings = _same_name(files, new_file_name)
    if not siblings:
        return VersionResolution(INITIAL_VERSION, None)

    parsed = [v for v in (parse_version(f.version) for f in siblings) if v is not None]
    previous = latest_file(siblings, new_file_name)
    previous_id = previous.id if previous is not None else None

    if not parsed:
        # Every sibling carries a malformed version: restart the sequence
        return VersionResolution(INITIAL_VERSION, previous_id)

    major, minor = max(parsed)
    return VersionResolution(f"{major}.{minor + 1}", previous_id)


def version_history(files: Iterable[Any], file_name: str) -> List[Any]:
    """Same-named files, highest version first; malformed versions last"""
    def sort_key(f):
        parsed = parse_version(f.version)
        return (parsed is not None, parsed or (0, 0))

    return sorted(_same_name(files, file_name), key=sort_key, reverse=True)
