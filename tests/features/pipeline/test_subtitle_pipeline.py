import asyncio
import pytest
from vidscribe.core.errors import AllEndpointsUnavailableError, DuplicateRecordError
from vidscribe.features.pipeline.service.api import SubtitlePipeline
from vidscribe.features.segmentation.domain.models import SegmentationConfig
from vidscribe.features.transcription_cache.data.repository import SqlRawTranscriptionRepo
from vidscribe.features.transcription_cache.service.api import TranscriptionCache
from vidscribe.features.translation.domain.models import TranslationResult


class FakeGateway:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    async def translate(self, text, source_lang="auto", target_lang="en"):
        self.calls.append((text, source_lang, target_lang))
        if self.fail:
            raise AllEndpointsUnavailableError(["https://a.example/translate"], 2)
        return TranslationResult(translated_text=f"[{target_lang}] {text}")


def payload(video_id="lecture-1"):
    return {
        "id": f"raw-{video_id}",
        "videoId": video_id,
        "language": "en",
        "assemblyData": {
            "words": [
                {"text": "Welcome", "start": 0, "end": 500, "confidence": 0.95},
                {"text": "everyone.", "start": 500, "end": 1100, "confidence": 0.9},
                {"text": "Let's", "start": 1500, "end": 1800, "confidence": 0.4},
                {"text": "begin!", "start": 1800, "end": 2300, "confidence": 0.85},
            ],
            "utterances": [],
        },
        "metadata": {},
    }


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def pipeline(session_factory, gateway):
    return SubtitlePipeline(
        cache=TranscriptionCache(SqlRawTranscriptionRepo(session_factory)),
        gateway=gateway
    )


def test_store_generate_translate(pipeline, gateway):
    async def scenario():
        await pipeline.store_transcription(payload())
        cues = await pipeline.generate_subtitles("lecture-1")
        translated = await pipeline.translate_cues(cues, "es")
        return cues, translated

    cues, translated = asyncio.run(scenario())

    assert [c.text for c in cues] == ["Welcome everyone.", "Let's begin!"]
    assert [c.text for c in translated] == ["[es] Welcome everyone.", "[es] Let's begin!"]
    assert all(c.language == "es" for c in translated)
    assert [(c.id, c.start_sec, c.end_sec) for c in translated] == [(c.id, c.start_sec, c.end_sec) for c in cues]
    # Originals untouched
    assert cues[0].language == "en"
    assert gateway.calls[0] == ("Welcome everyone.", "en", "es")


def test_generation_config_is_passed_through(pipeline):
    async def scenario():
        await pipeline.store_transcription(payload())
        return await pipeline.generate_subtitles("lecture-1", SegmentationConfig(min_confidence=0.5))

    cues = asyncio.run(scenario())
    assert [c.text for c in cues] == ["Welcome everyone.", "begin!"]


def test_same_language_skips_translation(pipeline, gateway):
    async def scenario():
        await pipeline.store_transcription(payload())
        cues = await pipeline.generate_subtitles("lecture-1")
        return cues, await pipeline.translate_cues(cues, "en")

    cues, translated = asyncio.run(scenario())

    assert translated == cues
    assert gateway.calls == []


def test_duplicate_store_is_rejected(pipeline):
    async def scenario():
        await pipeline.store_transcription(payload())
        await pipeline.store_transcription(payload())

    with pytest.raises(DuplicateRecordError):
        asyncio.run(scenario())


def test_unknown_video_has_no_cues(pipeline):
    assert asyncio.run(pipeline.generate_subtitles("never-transcribed")) == []


def test_translation_failure_propagates(session_factory):
    pipeline = SubtitlePipeline(
        cache=TranscriptionCache(SqlRawTranscriptionRepo(session_factory)),
        gateway=FakeGateway(fail=True)
    )

    async def scenario():
        await pipeline.store_transcription(payload())
        cues = await pipeline.generate_subtitles("lecture-1")
        await pipeline.translate_cues(cues, "fr")

    with pytest.raises(AllEndpointsUnavailableError):
        asyncio.run(scenario())
