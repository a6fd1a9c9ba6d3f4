import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional
from vidscribe.core.config.settings import settings
from vidscribe.core.errors import ExtractionError, InitializationError
from ..domain.interfaces import ITranscodeEngine

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class FFmpegEngine(ITranscodeEngine):
    """
    Owned FFmpeg resource: UNINITIALIZED -> READY.

    Initialization is guarded by one lock so concurrent callers wait for the
    same load. Jobs are guarded by a second lock, so calls sharing this
    engine run one at a time. Parallel throughput needs one engine per caller.
    """

    def __init__(self, ffmpeg_binary: Optional[str] = None, ffprobe_binary: Optional[str] = None):
        self.ffmpeg_binary = ffmpeg_binary or settings.FFMPEG_BINARY
        self.ffprobe_binary = ffprobe_binary or settings.FFPROBE_BINARY
        self._state = EngineState.UNINITIALIZED
        self._init_lock = asyncio.Lock()
        self._job_lock = asyncio.Lock()
        self._process: Optional[asyncio.subprocess.Process] = None

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is EngineState.READY

    async def ensure_ready(self) -> None:
        if self.is_ready:
            return

        async with self._init_lock:
            if self.is_ready:
                return

            logger.info(f"Loading FFmpeg engine from {self.ffmpeg_binary}...")
            try:
                process = await asyncio.create_subprocess_exec(
                    self.ffmpeg_binary, "-version",
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE
                )
                stdout, stderr = await self._communicate(process)
            except OSError as e:
                self._state = EngineState.UNINITIALIZED
                logger.error(f"Failed to load FFmpeg: {e}")
                raise InitializationError(f"Failed to initialize FFmpeg engine: {e}") from e

            if process.returncode != 0:
                self._state = EngineState.UNINITIALIZED
                error_msg = stderr.decode(errors="replace").strip() if stderr else f"exit code {process.returncode}"
                logger.error(f"Failed to load FFmpeg: {error_msg}")
                raise InitializationError(f"Failed to initialize FFmpeg engine: {error_msg}")

            self._state = EngineState.READY
            version_line = stdout.decode(errors="replace").splitlines()[0] if stdout else "unknown version"
            logger.info(f"FFmpeg engine ready ({version_line})")

    async def run(self, args: List[str]) -> None:
        async with self._job_lock:
            cmd = [self.ffmpeg_binary, *args]
            logger.info(f"Executing FFmpeg: {' '.join(cmd)}")

            try:
                process = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE
                )
            except OSError as e:
                logger.error(f"FFmpeg could not start: {e}")
                raise ExtractionError(f"Transcode job could not start: {e}") from e

            self._process = process
            try:
                _, stderr = await self._communicate(process)
            except asyncio.CancelledError:
                logger.warning("FFmpeg job cancelled. Process killed.")
                raise
            finally:
                self._process = None

            if process.returncode != 0:
                error_msg = stderr.decode(errors="replace").strip() if stderr else f"exit code {process.returncode}"
                logger.error(f"FFmpeg failed: {error_msg}")
                raise ExtractionError(f"Transcode job failed: {error_msg}", stderr=error_msg)

    async def probe_duration(self, path: Path) -> float:
        cmd = [
            self.ffprobe_binary,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(path)
        ]
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
            stdout, _ = await self._communicate(process)
            if process.returncode != 0:
                raise ValueError(f"ffprobe exit code {process.returncode}")
            return float(stdout.decode().strip())
        except (OSError, ValueError) as e:
            # Duration is informational; a decode failure must not fail the job.
            logger.warning(f"Could not decode duration of {path.name}: {e}")
            return 0.0

    async def terminate(self) -> None:
        if self._process is not None:
            await self._kill(self._process)
            self._process = None
        if self._state is not EngineState.UNINITIALIZED:
            logger.info("FFmpeg engine terminated.")
        self._state = EngineState.UNINITIALIZED

    async def _communicate(self, process: asyncio.subprocess.Process):
        # A cancelled await must not leave the child running
        try:
            return await process.communicate()
        except asyncio.CancelledError:
            await self._kill(process)
            raise

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()
