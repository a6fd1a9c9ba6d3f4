import pytest
from vidscribe.features.segmentation.domain.models import SegmentationConfig, GenerationStats
from vidscribe.features.segmentation.service.engine import SegmentationEngine
from vidscribe.features.transcription_cache.domain.models import RawTranscriptionRecord, WordToken


def make_record(words, video_id="vid-1", language="en"):
    return RawTranscriptionRecord(
        id=f"raw-{video_id}",
        video_id=video_id,
        language=language,
        tokens=tuple(WordToken(text, start, end, conf) for text, start, end, conf in words),
        metadata={"averageConfidence": 0.9}
    )


SENTENCE = [("I", 0, 300, 0.9), ("am", 300, 600, 0.95), ("here.", 600, 1000, 0.99)]


def test_single_sentence_example():
    cues = SegmentationEngine().generate_from_raw_data(make_record(SENTENCE))

    assert len(cues) == 1
    cue = cues[0]
    assert cue.id == "vid-1_segment_0"
    assert cue.text == "I am here."
    assert cue.start_sec == 0.0
    assert cue.end_sec == 1.0
    assert cue.confidence == 0.9
    assert cue.language == "en"
    assert cue.video_id == "vid-1"


def test_generation_is_idempotent():
    record = make_record(SENTENCE + [("Yes!", 1200, 1500, 0.7), ("trailing", 1600, 1900, 0.8)])
    engine = SegmentationEngine()

    assert engine.generate_from_raw_data(record) == engine.generate_from_raw_data(record)


def test_confidence_filter_can_empty_the_stream():
    record = make_record([("low", 0, 100, 0.3), ("again.", 100, 200, 0.3)])
    engine = SegmentationEngine(SegmentationConfig(min_confidence=0.5))

    assert engine.generate_from_raw_data(record) == []


def test_low_confidence_words_are_dropped_before_segmenting():
    record = make_record([("keep", 0, 100, 0.9), ("noise.", 100, 200, 0.2), ("this.", 200, 300, 0.8)])
    cues = SegmentationEngine(SegmentationConfig(min_confidence=0.5)).generate_from_raw_data(record)

    # "noise." was the boundary; once dropped, both kept words form one cue
    assert [c.text for c in cues] == ["keep this."]
    assert cues[0].end_sec == 0.3


def test_stream_without_punctuation_closes_at_last_word():
    record = make_record([("no", 0, 100, 0.9), ("punctuation", 100, 500, 0.8), ("here", 500, 900, 0.85)])
    cues = SegmentationEngine().generate_from_raw_data(record)

    assert len(cues) == 1
    assert cues[0].text == "no punctuation here"
    assert cues[0].end_sec == 0.9
    assert cues[0].confidence == 0.8


def test_multiple_sentences_get_sequential_ids():
    record = make_record([
        ("Hello", 0, 400, 0.9), ("there.", 400, 800, 0.9),
        ("How", 1000, 1200, 0.6), ("are", 1200, 1400, 0.9), ("you?", 1400, 1800, 0.95),
        ("Great!", 2000, 2500, 0.99),
    ])
    cues = SegmentationEngine().generate_from_raw_data(record)

    assert [c.id for c in cues] == ["vid-1_segment_0", "vid-1_segment_1", "vid-1_segment_2"]
    assert [c.text for c in cues] == ["Hello there.", "How are you?", "Great!"]
    assert (cues[1].start_sec, cues[1].end_sec) == (1.0, 1.8)
    assert cues[1].confidence == 0.6


def test_custom_punctuation_and_whitespace():
    record = make_record([("一", 0, 100, 0.9), ("二。 ", 100, 200, 0.9), ("三", 200, 300, 0.9)], language="zh")
    cues = SegmentationEngine(SegmentationConfig(sentence_end_punctuation=["。"])).generate_from_raw_data(record)

    assert [c.text for c in cues] == ["一 二。", "三"]
    assert all(c.language == "zh" for c in cues)


def test_duration_and_disfluency_settings_do_not_change_boundaries():
    words = [("a", 0, 30000, 0.9), ("b", 30000, 90000, 0.9), ("c.", 90000, 95000, 0.9)]
    record = make_record(words)
    relaxed = SegmentationEngine().generate_from_raw_data(record)
    strict = SegmentationEngine(SegmentationConfig(
        min_segment_duration=100.0, max_segment_duration=1.0, keep_disfluencies=True
    )).generate_from_raw_data(record)

    assert relaxed == strict
    assert len(strict) == 1 and strict[0].duration == 95.0


def test_per_call_config_override():
    record = make_record([("one!", 0, 100, 0.9), ("two", 100, 200, 0.9)])
    engine = SegmentationEngine()

    assert len(engine.generate_from_raw_data(record)) == 2
    assert len(engine.generate_from_raw_data(record, SegmentationConfig(sentence_end_punctuation=("?",)))) == 1


def test_generation_stats():
    record = make_record([
        ("Hello", 0, 400, 0.8), ("there.", 400, 800, 1.0),
        ("How", 1000, 1200, 0.6), ("are", 1200, 1400, 0.9), ("you?", 1400, 1800, 0.95),
    ])
    stats = SegmentationEngine().get_generation_stats(record)

    assert stats.total_words == 5
    assert stats.total_segments == 2
    assert stats.average_segment_length == 2.5
    assert stats.average_confidence == pytest.approx(0.7)
    assert stats.total_duration == 1.8


def test_generation_stats_empty():
    assert SegmentationEngine().get_generation_stats(make_record([])) == GenerationStats()


def test_cue_consumer_shape():
    cue = SegmentationEngine().generate_from_raw_data(make_record(SENTENCE))[0]
    assert cue.to_dict() == {
        "id": "vid-1_segment_0",
        "text": "I am here.",
        "startSec": 0.0,
        "endSec": 1.0,
        "confidence": 0.9,
        "language": "en",
        "videoId": "vid-1",
    }


def test_invalid_confidence_threshold():
    with pytest.raises(ValueError):
        SegmentationConfig(min_confidence=1.5)


def test_fractional_token_times():
    cues = SegmentationEngine().generate_from_raw_data(make_record([("Hi.", 12.5, 400.75, 0.9)]))
    assert (cues[0].start_sec, cues[0].end_sec) == (0.0125, 0.40075)
