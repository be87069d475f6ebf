"""
Tests for the process runner using the current interpreter as a child.
"""

import asyncio
import os
import sys
from unittest.mock import AsyncMock, Mock, patch

import pytest

from polysandbox import ProcessResult, ProcessRunner


class TestProcessRunner:
    """Test ProcessRunner against real child processes."""

    @pytest.fixture
    def runner(self):
        return ProcessRunner()

    @pytest.mark.asyncio
    async def test_collects_streams_and_status(self, runner):
        script = "import sys; sys.stdout.write('out'); sys.stderr.write('err')"

        result = await runner.run([sys.executable, "-c", script])

        assert result == ProcessResult(returncode=0, stdout=b"out", stderr=b"err")
        assert result.success is True

    @pytest.mark.asyncio
    async def test_nonzero_exit_is_not_an_error(self, runner):
        result = await runner.run([sys.executable, "-c", "raise SystemExit(3)"])

        assert result.returncode == 3
        assert result.success is False

    @pytest.mark.asyncio
    async def test_spawn_failure_raises_os_error(self, runner):
        """Test that a missing binary surfaces as OSError."""
        with pytest.raises(OSError):
            await runner.run(["/nonexistent/engine-binary", "run"])

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, runner):
        """Test that a hung process is killed when the timeout elapses."""
        with pytest.raises(asyncio.TimeoutError):
            await runner.run([sys.executable, "-c", "import time; time.sleep(30)"], timeout=0.5)

    @pytest.mark.asyncio
    async def test_runner_is_reusable(self, runner):
        first = await runner.run([sys.executable, "-c", "print(1)"])
        second = await runner.run([sys.executable, "-c", "print(2)"])

        assert first.stdout.strip() == b"1"
        assert second.stdout.strip() == b"2"

    @pytest.mark.asyncio
    async def test_cancellation_kills_process(self, runner):
        """Test that cancelling the awaiting task kills and reaps the child."""
        spawned = []
        real_exec = asyncio.create_subprocess_exec

        async def spy(*args, **kwargs):
            proc = await real_exec(*args, **kwargs)
            spawned.append(proc)
            return proc

        with patch("polysandbox.runner.asyncio.create_subprocess_exec", side_effect=spy):
            task = asyncio.ensure_future(
                runner.run([sys.executable, "-c", "import time; time.sleep(30)"])
            )
            while not spawned:
                await asyncio.sleep(0.05)
            await asyncio.sleep(0.1)

            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        proc = spawned[0]
        assert proc.returncode is not None
        with pytest.raises(ProcessLookupError):
            os.kill(proc.pid, 0)

    @pytest.mark.asyncio
    async def test_kill_tolerates_exited_process(self):
        """Test that a child exiting just before the kill is not an error."""
        proc = Mock()
        proc.kill.side_effect = ProcessLookupError()
        proc.wait = AsyncMock(return_value=0)

        await ProcessRunner._kill(proc)

        proc.wait.assert_awaited_once()
