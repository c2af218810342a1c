"""Version parsing for the git binary reported by the server extension.

Git reports versions in several shapes depending on the platform, e.g.
``2.39.2``, ``2.39.2.windows.1`` or ``2.20.1 (Apple Git-117)``. Only the
leading numeric ``MAJOR[.MINOR[.PATCH]]`` run matters for compatibility, so
it is parsed once into a `ToolVersion` and every comparison goes through it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_VERSION_RE = re.compile(
    r"^\s*(?:git\s+version\s+)?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ToolVersion:
    raw: str
    major: int | None = None
    minor: int | None = None
    patch: int | None = None

    @property
    def is_parsed(self) -> bool:
        return self.major is not None

    def at_least_major(self, floor: int) -> bool:
        """Whether the major component reaches `floor`. Unparsed versions never do."""
        if self.major is None:
            return False
        return self.major >= floor

    def __str__(self) -> str:
        return self.raw


def _optional_int(value: str | None) -> int | None:
    return int(value) if value is not None else None


def parse_tool_version(raw: str) -> ToolVersion:
    match = _VERSION_RE.match(raw)
    if match is None:
        return ToolVersion(raw=raw)
    return ToolVersion(
        raw=raw,
        major=int(match.group("major")),
        minor=_optional_int(match.group("minor")),
        patch=_optional_int(match.group("patch")),
    )


def compare_versions(version: str, floor: int) -> bool:
    """Check whether `version` satisfies the major-version `floor`.

    The check is on the major component only; minor and patch are ignored.
    A version equal to the floor passes (``"2.22.0"`` against ``2``), one
    below it fails (``"1.8.7"``), and a version without a numeric major
    component fails.

    Examples:
        >>> compare_versions("2.22.0", 2)
        True
        >>> compare_versions("1.8.7", 2)
        False
        >>> compare_versions("unknown", 2)
        False
    """
    return parse_tool_version(version).at_least_major(floor)
