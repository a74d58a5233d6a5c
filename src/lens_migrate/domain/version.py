"""Semantic version value and ordering.

Settings markers are written by the host as semver strings (``8.0.0-beta2``)
while Python packaging metadata reports PEP 440 spellings (``8.0.0b2``).
Both are parsed into the same immutable ``SemVer`` value.
"""

import re
from dataclasses import dataclass
from functools import total_ordering

from packaging.version import InvalidVersion, Version

from lens_migrate.exceptions import ParseError

# Map PEP 440 prerelease labels back to the semver tags the host writes
_PEP440_PRERELEASE_MAP = {
    "a": "alpha",
    "b": "beta",
    "rc": "rc",
}

_SEMVER_RE = re.compile(
    r"""
    ^
    (?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)
    (?:-(?P<prerelease>[0-9A-Za-z.\-]*))?
    $
    """,
    re.VERBOSE,
)


@total_ordering
@dataclass(frozen=True)
class SemVer:
    """Immutable ``major.minor.patch[-prerelease]`` version."""

    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{name} must be an integer, got {value!r}"
                raise ParseError(msg, str(value))
            if value < 0:
                msg = f"{name} must be >= 0, got {value}"
                raise ParseError(msg, str(value))

    @classmethod
    def parse(cls, text: str) -> "SemVer":
        """Parse a version string.

        Accepts ``M.m.p``, ``M.m.p-tag`` and PEP 440 prerelease forms such
        as ``8.0.0rc1``. A leading ``v`` is ignored.

        Args:
            text: Version string to parse

        Returns:
            Parsed version

        Raises:
            ParseError: If the string is not a three-part version

        """
        if not isinstance(text, str):
            msg = f"expected a string, got {type(text).__name__}"
            raise ParseError(msg, repr(text))

        cleaned = text.strip()
        if cleaned[:1] in ("v", "V"):
            cleaned = cleaned[1:]

        match = _SEMVER_RE.match(cleaned)
        if match:
            return cls(
                int(match.group("major")),
                int(match.group("minor")),
                int(match.group("patch")),
                match.group("prerelease"),
            )

        return cls._parse_pep440(cleaned, text)

    @classmethod
    def _parse_pep440(cls, cleaned: str, original: str) -> "SemVer":
        try:
            parsed = Version(cleaned)
        except InvalidVersion as e:
            msg = "not a semantic version"
            raise ParseError(msg, original) from e

        if (
            len(parsed.release) != 3
            or parsed.epoch
            or parsed.post is not None
            or parsed.dev is not None
            or parsed.local is not None
        ):
            msg = "expected exactly major.minor.patch with optional prerelease"
            raise ParseError(msg, original)

        major, minor, patch = parsed.release
        prerelease = None
        if parsed.pre is not None:
            label, number = parsed.pre
            prerelease = f"{_PEP440_PRERELEASE_MAP[label]}{number}"
        return cls(major, minor, patch, prerelease)

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is None:
            return base
        return f"{base}-{self.prerelease}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return compare(self, other) < 0


def compare(a: SemVer, b: SemVer) -> int:
    """Compare two versions.

    Numeric on major, minor, patch; then a prerelease sorts before the
    release it precedes, and two prerelease tags compare lexically.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b

    """
    left = (a.major, a.minor, a.patch)
    right = (b.major, b.minor, b.patch)
    if left != right:
        return -1 if left < right else 1

    if a.prerelease == b.prerelease:
        return 0
    if a.prerelease is None:
        return 1
    if b.prerelease is None:
        return -1
    return -1 if a.prerelease < b.prerelease else 1


def compare_versions(version1: str, version2: str) -> int:
    """Parse and compare two version strings.

    Raises:
        ParseError: If either string is not a valid version

    """
    return compare(SemVer.parse(version1), SemVer.parse(version2))
