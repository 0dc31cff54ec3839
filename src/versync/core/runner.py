from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import semver

from versync.core import versions
from versync.core.versions import PACKAGE_FILE
from versync.errors import InconsistentVersionsError
from versync.git import exec_git
from versync.models import VersionInfo

logger = logging.getLogger(__name__)

MessageListener = Callable[[str], None]

SYNC = "sync"


@dataclass
class RunnerOptions:
    """What a ``Runner`` should do.

    ``bump`` is a semver higher than the current version, one of ``major``,
    ``minor``, ``patch``, or ``sync`` to copy the version of ``package.json``
    into the other sources. ``tag`` commits the sources and creates a
    ``v<version>`` tag; it implies ``add``.
    """

    sources: Sequence[str] = ()
    bump: str | None = None
    add: bool = False
    tag: bool = False
    on_message: Sequence[MessageListener] = field(default_factory=list)


class Runner:
    """Orchestrates verification, bumping and git operations on a package.

    User-facing progress is sent to message listeners. Errors are raised.
    """

    def __init__(self, options: RunnerOptions | None = None) -> None:
        self._options = options or RunnerOptions()
        self._listeners: list[MessageListener] = list(self._options.on_message)
        self._sync = self._options.bump == SYNC
        self._cached_sources: list[str] | None = None
        self._cached_sources_to_modify: list[str] | None = None
        self._cached_current: VersionInfo | None = None

    def on_message(self, listener: MessageListener) -> None:
        self._listeners.append(listener)

    def _emit_message(self, message: str) -> None:
        for listener in self._listeners:
            listener(message)

    async def get_sources(self) -> list[str]:
        if self._cached_sources is None:
            self._cached_sources = await versions.get_sources(self._options.sources)
        return self._cached_sources

    async def get_sources_to_modify(self) -> list[str]:
        """Like ``get_sources``, minus ``package.json`` when syncing."""
        if self._cached_sources_to_modify is None:
            sources = await self.get_sources()
            if self._sync:
                sources = [s for s in sources if s != PACKAGE_FILE]
            self._cached_sources_to_modify = sources
        return self._cached_sources_to_modify

    async def get_current(self) -> VersionInfo:
        if self._cached_current is None:
            self._cached_current = await versions.get_valid_version(PACKAGE_FILE)
        return self._cached_current

    async def verify(self) -> str | None:
        """Check the sources agree and return their common version.

        Returns ``None`` when syncing and there is nothing besides ``package.json``.
        """
        sources = await self.get_sources_to_modify()
        if not sources:
            return None

        result = await versions.verify(sources)
        if not result.consistent:
            lines = [f"{info.source}:{info.line}: {info.version}" for info in result.versions]
            raise InconsistentVersionsError("Version numbers are inconsistent:\n" + "\n".join(lines))

        current = result.versions[0].version
        if self._sync:
            prefix = "Version number in files to be synced is"
        else:
            prefix = "Everything is in sync, the version number is"
        self._emit_message(f"{prefix} [bold green]{current}[/bold green].")
        return current

    async def set_version(self, version: str) -> None:
        sources = await self.get_sources_to_modify()
        await versions.set_version(sources, version)
        self._emit_message(
            f"Version number was updated to [bold green]{version}[/bold green] in [bold]{', '.join(sources)}[/bold]."
        )

    async def _add_sources(self) -> None:
        # one at a time, parallel adds fight over the index lock
        for source in await self.get_sources():
            await exec_git(["add", source])

    async def _commit_sources_and_create_tag(self, version: str) -> None:
        await self._add_sources()
        await exec_git(["commit", "-m", f"v{version}"])
        await exec_git(["tag", f"v{version}"])
        self._emit_message(f"Files have been committed and tag [bold green]v{version}[/bold green] was created.")

    async def run(self) -> None:
        bump, tag, add = self._options.bump, self._options.tag, self._options.add
        common, current_info = await asyncio.gather(self.verify(), self.get_current())
        current = current_info.version

        if not (bump or tag or add):
            return

        # syncing a package with no other source
        if common is None:
            logger.info("No sources besides %s, nothing to do", PACKAGE_FILE)
            return

        version = current
        if self._sync:
            if semver.Version.parse(current) < semver.Version.parse(common):
                raise InconsistentVersionsError(
                    f"Version in {PACKAGE_FILE} ({current}) is lower than the version found in other files ({common})"
                )
        elif bump:
            version = versions.bump_version(current, bump)

        if bump:
            await self.set_version(version)

        if tag:
            await self._commit_sources_and_create_tag(version)
        elif add:
            await self._add_sources()


async def run(options: RunnerOptions | None = None) -> None:
    await Runner(options).run()
