"""Punish window bucketing and frame-advantage arithmetic."""

import pytest

from framecoach.core.frames.classifier import MoveClassifier
from framecoach.core.frames.punish import (
    PUNISH_BUCKETS,
    PunishWindowBuilder,
    bucket_for_startup,
    frame_advantage,
)


@pytest.fixture
def builder() -> PunishWindowBuilder:
    return PunishWindowBuilder()


@pytest.fixture
def punishable(make_move):
    opponent = [
        make_move("db+3+4", startup="i25", on_block="-31"),
        make_move("b+1+2", startup="i18", on_block="-12"),
        make_move("d+4", startup="i14", on_block="-10"),
        make_move("1,2", startup="i10", on_block="-1"),
    ]
    return MoveClassifier().punishable_moves(opponent)


class TestBuckets:
    def test_buckets_are_contiguous_and_disjoint_from_nine_up(self) -> None:
        for startup in range(9, 80):
            matches = [bucket for bucket in PUNISH_BUCKETS if bucket.contains(startup)]
            assert len(matches) == 1, startup

    @pytest.mark.parametrize(
        ("startup", "label"),
        [(9, "10f"), (10, "10f"), (11, "12f"), (12, "12f"), (13, "13f"), (14, "14f"), (15, "15f+"), (40, "15f+")],
    )
    def test_bucket_labels(self, startup: int, label: str) -> None:
        bucket = bucket_for_startup(startup)
        assert bucket is not None
        assert bucket.label == label

    def test_sub_nine_folds_into_fastest_bucket(self) -> None:
        assert bucket_for_startup(7).label == "10f"
        assert bucket_for_startup(1).label == "10f"

    def test_non_positive_startup_has_no_bucket(self) -> None:
        assert bucket_for_startup(0) is None
        assert bucket_for_startup(-3) is None


class TestBuildWindows:
    def test_empty_buckets_are_omitted(self, builder, punishable, make_move) -> None:
        player = [
            make_move("1", startup="i10"),
            make_move("df+1", startup="i13"),
        ]
        windows = builder.build_windows(punishable, player)
        assert [window.label for window in windows] == ["10f", "13f"]
        assert all(window.candidates for window in windows)

    def test_windows_are_fastest_first(self, builder, punishable, make_move) -> None:
        player = [
            make_move("uf+4", startup="i15"),
            make_move("f+2", startup="i12"),
            make_move("1", startup="i10"),
        ]
        windows = builder.build_windows(punishable, player)
        assert [window.label for window in windows] == ["10f", "12f", "15f+"]
        assert windows[-1].max_startup is None

    def test_candidate_cap_keeps_list_order(self, builder, punishable, make_move) -> None:
        player = [make_move(f"jab{i}", startup="10") for i in range(6)]
        (window,) = builder.build_windows(punishable, player)
        assert [candidate.move.command for candidate in window.candidates] == ["jab0", "jab1", "jab2"]
        assert [candidate.index for candidate in window.candidates] == [0, 1, 2]

    def test_custom_candidate_limit(self, punishable, make_move) -> None:
        player = [make_move(f"jab{i}", startup="10") for i in range(6)]
        (window,) = PunishWindowBuilder(candidate_limit=5).build_windows(punishable, player)
        assert len(window.candidates) == 5

    def test_non_numeric_startup_is_skipped(self, builder, punishable, make_move) -> None:
        player = [
            make_move("stance", startup=""),
            make_move("throw", startup="unused"),
            make_move("2", startup="i12"),
        ]
        windows = builder.build_windows(punishable, player)
        assert [window.label for window in windows] == ["12f"]
        assert windows[0].candidates[0].index == 2

    def test_no_timed_moves_means_no_windows(self, builder, punishable, make_move) -> None:
        assert builder.build_windows(punishable, [make_move("x", startup="")]) == ()

    def test_situations_list_guaranteed_punishes(self, builder, punishable, make_move) -> None:
        player = [make_move("1", startup="i10"), make_move("uf+4", startup="i15")]
        by_label = {window.label: window for window in builder.build_windows(punishable, player)}
        assert by_label["10f"].situations == (
            "db+3+4 (-31 on block)",
            "b+1+2 (-12 on block)",
            "d+4 (-10 on block)",
        )
        assert by_label["15f+"].situations == ("db+3+4 (-31 on block)",)

    def test_invalid_candidate_limit(self) -> None:
        with pytest.raises(ValueError):
            PunishWindowBuilder(candidate_limit=0)


class TestFrameAdvantage:
    def test_absolute_block_minus_startup(self, make_move) -> None:
        assert frame_advantage(make_move("db+3+4", on_block="-31"), make_move("1,1,2", startup="10")) == 21
        assert frame_advantage(make_move("d+4", on_block="-10"), make_move("uf+4", startup="i15")) == -5

    def test_non_numeric_side_is_unknown(self, make_move) -> None:
        assert frame_advantage(make_move("a", on_block="Launch"), make_move("b", startup="10")) is None
        assert frame_advantage(make_move("a", on_block="-14"), make_move("b", startup="")) is None

    def test_entries_cover_every_pairing(self, builder, punishable, make_move) -> None:
        player = [make_move("1", startup="i10"), make_move("f+2", startup="i12")]
        windows = builder.build_windows(punishable, player)
        entries = builder.frame_advantages(punishable, windows)
        assert len(entries) == punishable.size * 2
        first = entries[0]
        assert first.opponent_move.command == "db+3+4"
        assert first.punish_move.command == "1"
        assert first.window_label == "10f"
        assert first.advantage == 21
        assert first.advantage_label == "+21"
        assert first.is_known
