import logging
import tempfile
from pathlib import Path
from typing import List, Optional
from vidscribe.core.errors import ExtractionError
from ..data.ffmpeg_engine import FFmpegEngine
from ..domain.interfaces import ITranscodeEngine
from ..domain.models import AudioArtifact, ExtractionOptions, MediaAsset

logger = logging.getLogger(__name__)


class AudioExtractor:
    """
    Facade for the Audio Extraction Feature.
    Writes input bytes into a temporary working directory, runs one transcode
    job on the shared engine and reads the output back.
    """

    def __init__(self, engine: Optional[ITranscodeEngine] = None):
        self.engine = engine or FFmpegEngine()

    async def extract_audio(self, asset: MediaAsset, options: Optional[ExtractionOptions] = None) -> AudioArtifact:
        """
        Extracts the audio track of a video (or audio) asset.

        Raises:
            InitializationError: If the engine cannot be loaded.
            ExtractionError: If the transcode job fails.
        """
        options = options or ExtractionOptions()
        logger.info(f"Extracting audio from asset {asset.id} ({asset.size} bytes) -> {options.format}")
        return await self._transcode(
            data=asset.data,
            input_name=f"input_video.{asset.container_format}",
            options=options,
            drop_video=True
        )

    async def convert_audio_format(
        self,
        audio_data: bytes,
        target_format: str,
        options: Optional[ExtractionOptions] = None
    ) -> AudioArtifact:
        """
        Re-encodes existing audio bytes into target_format.
        Sample rate, channels and quality come from options.
        """
        base = options or ExtractionOptions()
        options = ExtractionOptions(
            format=target_format,
            sample_rate=base.sample_rate,
            channels=base.channels,
            quality=base.quality
        )
        logger.info(f"Converting audio ({len(audio_data)} bytes) -> {target_format}")
        return await self._transcode(
            data=audio_data,
            input_name="input_audio",
            options=options,
            drop_video=False
        )

    async def cleanup(self) -> None:
        """Terminates the engine. The next operation reinitializes it."""
        await self.engine.terminate()

    async def _transcode(self, data: bytes, input_name: str, options: ExtractionOptions, drop_video: bool) -> AudioArtifact:
        await self.engine.ensure_ready()

        # The directory is removed on every exit path, including cancellation.
        with tempfile.TemporaryDirectory(prefix="vidscribe_") as tmp_dir:
            input_path = Path(tmp_dir) / input_name
            output_path = Path(tmp_dir) / f"output_audio.{options.format}"

            try:
                input_path.write_bytes(data)
            except OSError as e:
                logger.error(f"Could not stage input for transcoding: {e}")
                raise ExtractionError(f"Could not stage input: {e}") from e

            await self.engine.run(build_args(input_path, output_path, options, drop_video))

            try:
                audio_bytes = output_path.read_bytes()
            except OSError as e:
                logger.error(f"Transcode produced no readable output: {e}")
                raise ExtractionError(f"Could not read transcoded output: {e}") from e

            duration = await self.engine.probe_duration(output_path)

        return AudioArtifact(
            data=audio_bytes,
            format=options.format,
            sample_rate=options.sample_rate,
            channels=options.channels,
            duration=duration
        )


def build_args(input_path: Path, output_path: Path, options: ExtractionOptions, drop_video: bool = True) -> List[str]:
    """
    FFmpeg arguments for one job.
    -vn: Disable video (extraction only)
    -ar / -ac: Resample and remix
    -q:a (mp3) / -compression_level (flac): Quality, ignored for wav
    """
    args = ["-y", "-i", str(input_path)]
    if drop_video:
        args.append("-vn")
    args += [
        "-ar", str(options.sample_rate),
        "-ac", str(options.channels),
        "-f", options.format,
    ]

    if options.format == "mp3":
        args += ["-q:a", str(options.quality)]
    elif options.format == "flac":
        args += ["-compression_level", str(options.quality)]

    args.append(str(output_path))
    return args


async def run_extraction(video_path: str, options: Optional[ExtractionOptions] = None) -> AudioArtifact:
    """
    Standalone API: Extracts audio from a video file on disk.
    Uses the shared extractor instance.
    """
    asset = MediaAsset.from_path(Path(video_path))
    return await audio_extractor.extract_audio(asset, options)


# Singleton Instance for easy import
audio_extractor = AudioExtractor()
