from abc import ABC, abstractmethod
from pathlib import Path
from typing import List


class ITranscodeEngine(ABC):
    """
    Contract for the single shared transcoding engine.
    Abstracts away the underlying tool (FFmpeg) from the extraction logic.
    """

    @abstractmethod
    async def ensure_ready(self) -> None:
        """
        Loads the engine if needed. No-op once ready.

        Raises:
            InitializationError: If the engine cannot be loaded. The engine
                stays uninitialized so a later call may retry.
        """
        pass

    @abstractmethod
    async def run(self, args: List[str]) -> None:
        """
        Executes one transcode job.

        Raises:
            ExtractionError: If the job exits unsuccessfully.
        """
        pass

    @abstractmethod
    async def probe_duration(self, path: Path) -> float:
        """Returns the media duration in seconds, or 0.0 if it cannot be decoded."""
        pass

    @abstractmethod
    async def terminate(self) -> None:
        """Stops the engine. The next ensure_ready() reinitializes."""
        pass

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        pass
