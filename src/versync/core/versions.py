"""Read, verify, rewrite and bump version numbers across a set of files."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from pathlib import Path

import semver

from versync.core.extract import locate
from versync.errors import InvalidVersionError, VerificationError
from versync.models import VerifyResult, VersionInfo, VersionMatch

logger = logging.getLogger(__name__)

PACKAGE_FILE = "package.json"
BUMP_KINDS = ("major", "minor", "patch")

_ENCODING = "utf-8"


def _read_text(filename: str) -> str:
    # newline="" keeps \r\n intact so rewritten files round-trip byte for byte
    with open(filename, encoding=_ENCODING, newline="") as f:
        return f.read()


def _write_text(filename: str, text: str) -> None:
    with open(filename, "w", encoding=_ENCODING, newline="") as f:
        f.write(text)


async def get_sources(extra_sources: Sequence[str] | None = None, package_file: str = PACKAGE_FILE) -> list[str]:
    """Return ``package.json``, ``extra_sources`` and the ``versionedSources`` of ``package.json``.

    Duplicates are removed; the first occurrence keeps its position.
    """
    sources = [package_file, *(extra_sources or [])]
    data = await asyncio.to_thread(_read_text, package_file)
    versioned = json.loads(data).get("versionedSources")
    if versioned is not None:
        if isinstance(versioned, str):
            versioned = [versioned]
        if not isinstance(versioned, list) or not all(isinstance(item, str) for item in versioned):
            raise ValueError("versionedSources must be an array or a string")
        sources.extend(versioned)

    return list(dict.fromkeys(sources))


async def get_version(filename: str) -> VersionInfo | None:
    data = await asyncio.to_thread(_read_text, filename)
    match = locate(filename, data)
    if match is None:
        return None
    return VersionInfo(version=match.value, line=match.line, source=filename)


async def get_valid_version(filename: str) -> VersionInfo:
    current = await get_version(filename)
    if current is None or not current.version:
        raise InvalidVersionError(f"Missing version number in {filename}.")
    if not semver.Version.is_valid(current.version):
        raise InvalidVersionError(f"Invalid semver number in {filename}. Found: {current.version}")
    return current


async def verify(filenames: Sequence[str]) -> VerifyResult:
    """Check that every file holds the same valid version.

    All files are read before any failure is reported.
    """
    if not filenames:
        raise ValueError("tried to call verify with an empty list")

    results = await asyncio.gather(*(get_valid_version(f) for f in filenames), return_exceptions=True)
    errors: dict[str, Exception] = {}
    versions: list[VersionInfo] = []
    for filename, result in zip(filenames, results, strict=True):
        if isinstance(result, Exception):
            errors[filename] = result
        elif isinstance(result, BaseException):
            raise result
        else:
            versions.append(result)
    if errors:
        raise VerificationError(errors)

    first = versions[0].version
    consistent = all(info.version == first for info in versions[1:])
    return VerifyResult(consistent=consistent, versions=versions)


def rewrite_version(text: str, match: VersionMatch, new_version: str) -> str:
    """Replace the matched version token, leaving every other character untouched."""
    end = match.offset + len(match.value)
    if text[match.offset : end] != match.value:
        raise ValueError(f"{match.value!r} is not at offset {match.offset} (line {match.line})")
    return text[: match.offset] + new_version + text[end:]


async def _set_file_version(filename: str, version: str) -> None:
    data = await asyncio.to_thread(_read_text, filename)
    current = locate(filename, data)
    if current is None:
        raise InvalidVersionError(f"Missing version number in {filename}.")
    await asyncio.to_thread(_write_text, filename, rewrite_version(data, current, version))
    logger.debug("Set version of %s to %s (line %d)", filename, version, current.line)


async def set_version(filenames: Sequence[str], version: str) -> None:
    await asyncio.gather(*(_set_file_version(f, version) for f in filenames))


def bump_version(version: str, bump: str) -> str:
    """Compute the version that follows ``version``.

    ``bump`` is either a valid semver greater than ``version``, or one of
    ``major``, ``minor`` and ``patch``.
    """
    if not semver.Version.is_valid(version):
        raise ValueError("The version number is not a valid semver number.")

    current = semver.Version.parse(version)
    if semver.Version.is_valid(bump) and semver.Version.parse(bump) > current:
        return bump
    if bump in BUMP_KINDS:
        return str(current.next_version(part=bump))
    raise ValueError(
        "Invalid bump specification, please use major, minor, patch, "
        "or specify a custom version that is higher than the current one."
    )
