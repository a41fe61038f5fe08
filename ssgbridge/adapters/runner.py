"""External process execution with uniform result capture."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional, Sequence

from ssgbridge.adapters.schema import ProcessResult

logger = logging.getLogger(__name__)


class ProcessRunner:
    """
    Run one external command and capture its output.

    Every outcome is folded into a ``ProcessResult``: a process that ran
    reports its own exit code, a process that could not be started reports
    ``exit_code=None`` with a diagnostic in ``stderr``. Spawn failures are
    never raised.

    Cancelling the awaiting task kills the child before the cancellation
    propagates, so callers can bound latency with ``asyncio.wait_for``.
    """

    encoding = "utf-8"

    async def run(
        self,
        executable: str,
        args: Sequence[str] = (),
        cwd: Optional[str] = None,
        input: Optional[str] = None,
    ) -> ProcessResult:
        workdir = cwd or os.getcwd()
        argv = [executable, *args]
        logger.debug("spawn %s (cwd=%s)", argv, workdir)

        payload = None
        if input is not None:
            try:
                payload = input.encode(self.encoding)
            except UnicodeEncodeError as exc:
                return self._spawn_failure(executable, workdir, exc, "stdin is not encodable")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE if input is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=workdir,
            )
        except FileNotFoundError as exc:
            return self._spawn_failure(executable, workdir, exc, "command not found")
        except PermissionError as exc:
            return self._spawn_failure(executable, workdir, exc, "permission denied")
        except OSError as exc:
            return self._spawn_failure(executable, workdir, exc, "could not start process")

        try:
            stdout, stderr = await process.communicate(payload)
        except BaseException:
            # cancellation or a broken pipe; never leave the child running
            await self._terminate(process)
            raise

        exit_code = process.returncode
        logger.debug("%s exited with %s", executable, exit_code)
        return ProcessResult(
            success=exit_code == 0,
            stdout=self._decode(stdout),
            stderr=self._decode(stderr),
            exit_code=exit_code,
        )

    # ── Helpers ───────────────────────────────────────────────────────────

    def _decode(self, data: Optional[bytes]) -> str:
        if not data:
            return ""
        return data.decode(self.encoding, errors="replace")

    @staticmethod
    def _spawn_failure(executable: str, cwd: str, exc: Exception, reason: str) -> ProcessResult:
        logger.debug("failed to spawn %s in %s: %s", executable, cwd, exc)
        return ProcessResult(
            success=False,
            stdout="",
            stderr=f"{reason}: {executable} (cwd={cwd}): {exc}",
            exit_code=None,
        )

    @staticmethod
    async def _terminate(process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        logger.debug("killing pid %s", process.pid)
        try:
            process.kill()
        except ProcessLookupError:
            return  # already exited
        await process.wait()
