import asyncio
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from versync.errors import ExecutionError

logger = logging.getLogger(__name__)

# git exits with 128 when another process holds .git/index.lock, among other failures
_LOCK_RETURNCODE = 128
_DEFAULT_ATTEMPTS = 5
_RETRY_DELAY = 0.1


@dataclass(frozen=True)
class GitResult:
    stdout: str
    stderr: str


def _git_executable() -> str:
    return os.getenv("VERSYNC_GIT", "git")


async def _exec(command: str, args: Sequence[str], cwd: Path | None) -> GitResult:
    process = await asyncio.create_subprocess_exec(
        command,
        *args,
        cwd=str(cwd) if cwd is not None else None,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()
    out = stdout.decode("utf-8", errors="replace")
    err = stderr.decode("utf-8", errors="replace")
    if process.returncode != 0:
        raise ExecutionError(
            f"{command} {' '.join(args)} failed",
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=out,
            stderr=err,
        )
    return GitResult(stdout=out, stderr=err)


async def exec_git(
    args: Sequence[str],
    cwd: Path | None = None,
    attempts: int = _DEFAULT_ATTEMPTS,
    delay: float = _RETRY_DELAY,
) -> GitResult:
    """Run git, retrying exit code 128 up to ``attempts`` times in total."""
    git = _git_executable()
    remaining = attempts
    while True:
        try:
            return await _exec(git, args, cwd)
        except ExecutionError as err:
            remaining -= 1
            if err.returncode != _LOCK_RETURNCODE or remaining <= 0:
                raise
            logger.debug("git %s exited with 128, retrying (%d attempts left)", " ".join(args), remaining)
            await asyncio.sleep(delay)
