"""Version numbers of mods and plugins, parsed from free-form strings."""

from __future__ import annotations

import datetime
import enum
import re
from typing import Optional

__all__ = ["ReleaseType", "VersionScheme", "VersionInfo"]


class ReleaseType(enum.IntEnum):
    """Release stage of a version; later members sort higher."""

    PREALPHA = 0
    ALPHA = 1
    BETA = 2
    CANDIDATE = 3
    FINAL = 4


class VersionScheme(enum.IntEnum):
    """How a version string is to be interpreted."""

    DISCOVER = 0
    """Regular, unless the string carries a hint for one of the others."""
    REGULAR = 1
    DECIMALMARK = 2
    """The version is a decimal number, the dot being the decimal mark."""
    NUMBERSANDLETTERS = 3
    """Numbers mixed with letters (1.0.1a, 1.0.1c, ...)."""
    DATE = 4
    """A release date instead of a version number."""
    LITERAL = 5
    """The string is used as is."""


_NUMBERS = re.compile(r"^(\d+)(\.(\d+))?(\.(\d+))?(\.(\d+))?", re.ASCII)
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_LEADING_VERSION = re.compile(r"\d+(?:\.\d+)*", re.ASCII)

# searched in this order; "alpha" comes before "prealpha" on purpose
_RELEASE_WORDS = (
    ("alpha", ReleaseType.ALPHA),
    ("beta", ReleaseType.BETA),
    ("prealpha", ReleaseType.PREALPHA),
    ("rc", ReleaseType.CANDIDATE),
)

_CANONICAL_SUFFIX = {
    ReleaseType.PREALPHA: " pre-alpha",
    ReleaseType.ALPHA: "a",
    ReleaseType.BETA: "b",
    ReleaseType.CANDIDATE: "rc",
}

_DISPLAY_SUFFIX = {
    ReleaseType.PREALPHA: " pre-alpha",
    ReleaseType.ALPHA: "alpha",
    ReleaseType.BETA: "beta",
    ReleaseType.CANDIDATE: "rc",
}

_SCHEME_PREFIX = {
    "f": VersionScheme.DECIMALMARK,
    "n": VersionScheme.NUMBERSANDLETTERS,
    "d": VersionScheme.DATE,
}


def _as_int32(text: str) -> Optional[int]:
    if not _INTEGER.fullmatch(text):
        return None
    value = int(text)
    if not -(2**31) <= value < 2**31:
        return None
    return value


class VersionInfo:
    """A version of a mod or plugin, possibly parsed from a string."""

    __slots__ = (
        "_scheme",
        "_valid",
        "_release_type",
        "_major",
        "_minor",
        "_subminor",
        "_subsubminor",
        "_decimal_positions",
        "_rest",
    )

    def __init__(
        self,
        major: int,
        minor: int,
        subminor: int,
        subsubminor: int = 0,
        release_type: ReleaseType = ReleaseType.FINAL,
    ) -> None:
        self._scheme = VersionScheme.REGULAR
        self._valid = True
        self._release_type = ReleaseType(release_type)
        self._major = major
        self._minor = minor
        self._subminor = subminor
        self._subsubminor = subsubminor
        self._decimal_positions = 0
        self._rest = ""

    @classmethod
    def invalid(cls) -> "VersionInfo":
        """Return a version that is not valid."""
        version = cls(0, 0, 0)
        version._valid = False
        return version

    @classmethod
    def parse(
        cls,
        version_string: str,
        scheme: VersionScheme = VersionScheme.DISCOVER,
        manual_input: bool = False,
    ) -> "VersionInfo":
        """Parse a version string; an empty string gives an invalid version.

        When ``manual_input`` is true, scheme hint prefixes (f, n, d) are not
        interpreted.
        """
        version = cls.invalid()
        version._parse(version_string, VersionScheme(scheme), manual_input)
        return version

    def _parse(self, text: str, scheme: VersionScheme, manual_input: bool) -> None:
        self._valid = False
        if scheme in (VersionScheme.LITERAL, VersionScheme.DISCOVER):
            self._scheme = VersionScheme.REGULAR
        else:
            self._scheme = scheme
        self._release_type = ReleaseType.FINAL
        self._major = self._minor = self._subminor = self._subsubminor = 0
        self._rest = ""

        if not text:
            return

        if text.lower() == "final":
            self._major = 1
            self._valid = True
            return

        temp = text
        new_scheme = self._scheme
        if not manual_input and temp[:1] in _SCHEME_PREFIX:
            new_scheme = _SCHEME_PREFIX[temp[0]]
            temp = temp[1:]

        if scheme == VersionScheme.DISCOVER:
            self._scheme = new_scheme

        if temp[:1] in ("v", "V"):
            temp = temp[1:]

        match = _NUMBERS.match(temp)
        if match:
            minor_text = match.group(3) or ""
            subminor_text = match.group(5) or ""
            subsubminor_text = match.group(7) or ""
            self._major = int(match.group(1))
            self._minor = int(minor_text or 0)
            if subminor_text and self._scheme == VersionScheme.DECIMALMARK:
                # two dots rule out a decimal mark
                self._scheme = VersionScheme.REGULAR
            if self._scheme != VersionScheme.DECIMALMARK:
                self._subminor = int(subminor_text or 0)
                self._subsubminor = int(subsubminor_text or 0)
            if not subminor_text and len(minor_text) > 1 and minor_text.startswith("0"):
                self._scheme = VersionScheme.DECIMALMARK
                self._decimal_positions = len(minor_text)
            temp = temp[match.end():]
        else:
            self._scheme = VersionScheme.LITERAL

        if self._scheme == VersionScheme.REGULAR:
            temp = self._parse_release_type(temp)

        if self._scheme == VersionScheme.DATE and self._major < 1900:
            self._scheme = VersionScheme.REGULAR

        self._rest = temp.strip()
        self._valid = True

    def _parse_release_type(self, text: str) -> str:
        # a release word is often followed by a number ("beta4"); it has to go
        # before the rest is looked at, or "1.0.0rc1" would sort after "1.0.0"
        self._release_type = ReleaseType.FINAL
        offset = -1
        length = 0
        for word, release_type in _RELEASE_WORDS:
            found = re.search(re.escape(word), text, re.IGNORECASE)
            if found:
                self._release_type = release_type
                offset = found.start()
                length = len(word)
                break

        if offset == -1 and text and self._scheme == VersionScheme.REGULAR:
            # single letters only count right after the number
            if text[0] == "a":
                self._release_type = ReleaseType.ALPHA
                offset, length = 0, 1
            elif text[0] == "b":
                self._release_type = ReleaseType.BETA
                offset, length = 0, 1

        if offset != -1:
            text = text[:offset] + text[offset + length:]
        return text.strip()

    def clear(self) -> None:
        """Reset to an invalid version."""
        self._scheme = VersionScheme.REGULAR
        self._valid = False
        self._release_type = ReleaseType.FINAL
        self._major = self._minor = self._subminor = self._subsubminor = 0
        self._decimal_positions = 0
        self._rest = ""

    def _decimal_text(self) -> str:
        return f"{self._major}.{str(self._minor).rjust(self._decimal_positions, '0')}"

    def _four_parts(self) -> str:
        return f"{self._major}.{self._minor}.{self._subminor}.{self._subsubminor}"

    def canonical_string(self) -> str:
        """Return a string that parses back to this version."""
        if not self._valid:
            return ""
        if self._scheme == VersionScheme.REGULAR:
            result = self._four_parts()
        elif self._scheme == VersionScheme.DECIMALMARK:
            result = "f" + self._decimal_text()
        elif self._scheme == VersionScheme.NUMBERSANDLETTERS:
            result = "n" + self._four_parts()
        elif self._scheme == VersionScheme.DATE:
            result = "d" + self._four_parts()
        else:
            result = ""
        return result + _CANONICAL_SUFFIX.get(self._release_type, "") + self._rest

    def display_string(self, forced_version_segments: int = 2) -> str:
        """Return a string for display; the scheme is not recorded in it.

        For the regular scheme, at least ``forced_version_segments`` parts are
        shown (2, 3 or 4), more where the later parts are not zero.
        """
        if not self._valid:
            return ""
        if self._scheme == VersionScheme.REGULAR:
            if forced_version_segments >= 4 or self._subsubminor != 0:
                result = self._four_parts()
            elif forced_version_segments == 3 or self._subminor != 0:
                result = f"{self._major}.{self._minor}.{self._subminor}"
            else:
                result = f"{self._major}.{self._minor}"
        elif self._scheme == VersionScheme.DECIMALMARK:
            result = self._decimal_text()
        elif self._scheme == VersionScheme.NUMBERSANDLETTERS:
            result = self._four_parts()
        elif self._scheme == VersionScheme.DATE:
            # year, month and day are held in the first three fields
            try:
                day = datetime.date(self._major, self._minor, self._subminor)
            except ValueError:
                return ""
            return day.strftime("%x")
        else:
            result = ""
        return result + _DISPLAY_SUFFIX.get(self._release_type, "") + self._rest

    def is_valid(self) -> bool:
        """Whether the version was set up or parsed successfully."""
        return self._valid

    def scheme(self) -> VersionScheme:
        """The versioning scheme in effect."""
        return self._scheme

    def as_version_tuple(self) -> tuple[int, ...]:
        """The leading numeric parts of the display string, trailing zeros dropped."""
        match = _LEADING_VERSION.match(self.display_string())
        if not match:
            return ()
        parts = [int(part) for part in match.group().split(".")]
        while parts and parts[-1] == 0:
            parts.pop()
        return tuple(parts)

    def _less_than(self, other: "VersionInfo") -> bool:
        if not self._valid and other._valid:
            return True
        if not other._valid and self._valid:
            return False

        date = VersionScheme.DATE
        decimal = VersionScheme.DECIMALMARK
        if self._scheme == date and other._scheme != date:
            return True
        if self._scheme != date and other._scheme == date:
            return False
        if self._scheme == decimal or other._scheme == decimal:
            # a decimal scheme is certain, a regular one only likely
            left = float(self._decimal_text())
            right = float(other._decimal_text())
            if abs(left - right) > 0.001:
                return left < right
        else:
            mine = (self._major, self._minor, self._subminor, self._subsubminor)
            theirs = (other._major, other._minor, other._subminor, other._subsubminor)
            if mine != theirs:
                return mine < theirs

        if self._release_type != other._release_type:
            return self._release_type < other._release_type

        left_int = _as_int32(self._rest)
        right_int = _as_int32(other._rest)
        if left_int is not None and right_int is not None:
            return left_int < right_int
        return self._rest < other._rest

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self._less_than(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self._less_than(other) or not other._less_than(self)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return not (self._less_than(other) or not other._less_than(self))

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return other._less_than(self) or not self._less_than(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return not self._less_than(other) and not other._less_than(self)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.display_string()

    def __repr__(self) -> str:
        return f"VersionInfo.parse({self.canonical_string()!r})"