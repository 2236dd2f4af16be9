"""End-to-end tests for SwingAnalyzer."""

import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from swingcoach import (
    AnalysisParameters,
    GolfClub,
    InsufficientDataError,
    LowConfidenceError,
    SwingAnalyzer,
    SwingPhase,
)
from swingcoach.core.domain.analysis import LETTER_GRADES


@pytest.fixture
def analyzer():
    return SwingAnalyzer()


@pytest.fixture
def analysis(analyzer, swing_frames):
    return analyzer.analyze_frames(swing_frames)


def numeric_metrics(analysis):
    raw = analysis.metrics.raw
    values = [v for v in vars(raw).values() if isinstance(v, float)]
    values += [analysis.overall_score, analysis.metrics.confidence]
    return values


class TestPipeline:

    def test_phases_ordered_and_complete(self, analysis):
        assert [p.name for p in analysis.phases] == list(SwingPhase.ordered())
        assert analysis.phases[0].start_frame == 0
        for current, following in zip(analysis.phases, analysis.phases[1:]):
            assert current.start_frame < following.start_frame
            assert current.end_frame == following.start_frame

    def test_scores_are_bounded(self, analysis):
        assert 0.0 <= analysis.overall_score <= 100.0
        assert 0.0 <= analysis.metrics.confidence <= 1.0
        assert analysis.letter_grade in LETTER_GRADES
        for phase in analysis.phases:
            assert 0.0 <= phase.confidence <= 1.0

    def test_deterministic(self, analyzer, swing_frames):
        first = analyzer.analyze_frames(swing_frames)
        second = analyzer.analyze_frames(swing_frames)

        assert first.phases == second.phases
        assert first.metrics == second.metrics
        assert first.id != second.id

    def test_parallel_runs_share_one_analyzer(self, analyzer, swing_frames, short_swing_frames):
        expected = [analyzer.analyze_frames(f).metrics for f in (swing_frames, short_swing_frames)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(
                analyzer.analyze_frames, [swing_frames, short_swing_frames] * 2
            ))
        assert [r.metrics for r in results] == expected * 2

    def test_synthetic_swing_phases(self, analysis):
        assert abs(analysis.get_phase(SwingPhase.TOP).start_frame - 40) <= 2
        assert abs(analysis.get_phase(SwingPhase.IMPACT).start_frame - 75) <= 2

        expected_tempo = (40 - 10) / (75 - 40)
        assert abs(analysis.metrics.raw.tempo_ratio - expected_tempo) <= 0.2 * expected_tempo

    def test_result_metadata(self, analysis):
        assert analysis.frame_count == 90
        assert analysis.fps == pytest.approx(30.0)
        assert analysis.club == GolfClub.IRON_7
        assert analysis.parameters_version == "1.0"
        assert analysis.degraded_frame_count == 0
        assert analysis.corrected_phases == []
        assert analysis.key_frames[SwingPhase.IMPACT] == analysis.get_phase(SwingPhase.IMPACT).start_frame

    def test_explicit_fps_overrides_timestamps(self, analyzer, swing_frames):
        result = analyzer.analyze_frames(swing_frames, fps=60.0)
        assert result.fps == 60.0
        interval = result.get_phase(SwingPhase.BACKSWING)
        assert interval.duration_s == pytest.approx(interval.frame_count / 60.0)

    def test_explicit_fps_matches_timestamped_clip(self, analyzer, make_swing):
        timed = analyzer.analyze_frames(make_swing(fps=60.0))
        untimed = analyzer.analyze_frames(make_swing(fps=60.0, timestamps=False), fps=60.0)

        assert [p.start_frame for p in untimed.phases] == [p.start_frame for p in timed.phases]
        for a, b in zip(untimed.phases, timed.phases):
            assert a.confidence == pytest.approx(b.confidence)
            assert a.duration_s == pytest.approx(b.duration_s)
        assert untimed.metrics.raw.impact_velocity == pytest.approx(timed.metrics.raw.impact_velocity)
        assert untimed.overall_score == pytest.approx(timed.overall_score)

    def test_frames_without_timestamps(self, analyzer, make_swing):
        result = analyzer.analyze_frames(make_swing(timestamps=False))
        assert result.fps == 30.0


class TestInputLimits:

    def test_29_frames_is_rejected(self, analyzer, make_swing):
        with pytest.raises(InsufficientDataError):
            analyzer.analyze_frames(make_swing(total=29, address_end=3, top=13, impact=24))

    def test_30_frames_is_analyzed(self, analyzer, short_swing_frames):
        result = analyzer.analyze_frames(short_swing_frames)
        assert len(result.phases) == 7
        assert result.metrics.confidence > 0
        # Short clip lowers trust
        assert result.metrics.confidence < result.metrics.phase_confidence

    def test_low_confidence_is_rejected(self, swing_frames):
        params = AnalysisParameters().with_overrides(min_phase_confidence=0.9)
        with pytest.raises(LowConfidenceError) as exc_info:
            SwingAnalyzer(params).analyze_frames(swing_frames)
        assert exc_info.value.threshold == 0.9


class TestMissingLandmarks:

    def test_wrist_dropout_degrades_gracefully(self, analyzer, make_swing, analysis):
        dropped = analyzer.analyze_frames(make_swing(dropouts={"left_wrist": range(20, 26)}))

        assert dropped.degraded_frame_count == 6
        assert abs(dropped.overall_score - analysis.overall_score) < 10
        for value in numeric_metrics(dropped):
            assert not math.isnan(value)


class TestCoaching:

    def test_at_most_five_tips(self, analysis):
        assert 1 <= len(analysis.tips) <= 5
        priorities = [tip.priority for tip in analysis.tips]
        assert priorities == sorted(priorities)

    def test_club_tip_included(self, analyzer, swing_frames):
        result = analyzer.analyze_frames(swing_frames, club=GolfClub.DRIVER)
        assert any(tip.category == "Driver" for tip in result.tips)

    def test_summary_mentions_score(self, analysis):
        assert f"{analysis.overall_score:.0f}/100" in analysis.summary
        assert analysis.letter_grade in analysis.summary

    def test_top_tips(self, analysis):
        assert len(analysis.top_tips) <= 3
