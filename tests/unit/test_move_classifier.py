"""MoveClassifier: inclusion rules, ranking, caps and determinism.

Pure domain logic only; no fetches involved.
"""

import pytest

from framecoach.contracts.matchup import ClassificationReason, ClassifiedSetKind
from framecoach.core.frames.classifier import MoveClassifier, key_move_reasons


@pytest.fixture
def classifier() -> MoveClassifier:
    return MoveClassifier()


class TestKeyMoveInclusion:
    def test_launcher_via_hit_or_counter_hit(self, make_move) -> None:
        assert ClassificationReason.LAUNCHER in key_move_reasons(
            make_move("df+2", on_hit="+31a (+21) Launch")
        )
        assert ClassificationReason.LAUNCHER in key_move_reasons(
            make_move("uf+4", on_hit="+8", on_counter_hit="Launch")
        )

    def test_fast_poke_threshold(self, make_move) -> None:
        assert ClassificationReason.FAST_POKE in key_move_reasons(make_move("1", startup="10"))
        assert ClassificationReason.FAST_POKE in key_move_reasons(make_move("d+1", startup="i12"))
        assert key_move_reasons(make_move("f+4", startup="13")) == ()

    def test_plus_on_block(self, make_move) -> None:
        assert key_move_reasons(make_move("b+1", startup="15", on_block="+1")) == (
            ClassificationReason.PLUS_ON_BLOCK,
        )
        assert key_move_reasons(make_move("b+2", startup="15", on_block="0")) == ()

    def test_special_property_from_notes(self, make_move) -> None:
        move = make_move("f+1+2", startup="16", on_block="-14", notes="Power Crush\nHeat Engager")
        assert key_move_reasons(move) == (ClassificationReason.SPECIAL_PROPERTY,)

    def test_multiple_reasons_keep_fixed_order(self, make_move) -> None:
        move = make_move("1,1,2", startup="10", on_block="+5", on_hit="Launch", notes="Homing")
        assert key_move_reasons(move) == (
            ClassificationReason.LAUNCHER,
            ClassificationReason.FAST_POKE,
            ClassificationReason.PLUS_ON_BLOCK,
            ClassificationReason.SPECIAL_PROPERTY,
        )

    def test_unknown_block_is_not_plus(self, make_move) -> None:
        assert key_move_reasons(make_move("b+3", startup="20", on_block="+??")) == ()


class TestKeyMoveRanking:
    def test_launchers_first_then_block_descending(self, classifier, make_move) -> None:
        moves = [
            make_move("poke", startup="10", on_block="+1"),
            make_move("plus", startup="15", on_block="+5"),
            make_move("launcher", startup="15", on_block="-13", on_hit="Launch"),
            make_move("unknown", startup="10", on_block="+??"),
            make_move("minus", startup="10", on_block="-5"),
        ]
        result = classifier.key_moves(moves)
        assert result.kind == ClassifiedSetKind.KEY_MOVES
        assert result.commands() == ["launcher", "plus", "poke", "minus", "unknown"]

    def test_ties_keep_original_order(self, classifier, make_move) -> None:
        moves = [
            make_move("a", on_block="+2"),
            make_move("b", on_block="+2"),
            make_move("l1", on_hit="Launch"),
            make_move("c", on_block="+2"),
            make_move("l2", on_counter_hit="Launch"),
        ]
        assert classifier.key_moves(moves).commands() == ["l1", "l2", "a", "b", "c"]

    def test_non_numeric_blocks_keep_relative_order(self, classifier, make_move) -> None:
        moves = [
            make_move("z", startup="10", on_block=""),
            make_move("y", startup="10", on_block="+??"),
            make_move("x", startup="10", on_block="KND"),
            make_move("w", startup="10", on_block="-1"),
        ]
        assert classifier.key_moves(moves).commands() == ["w", "z", "y", "x"]

    def test_unknown_block_does_not_break_comparator(self, classifier, make_move) -> None:
        moves = [make_move(f"m{i}", startup="10", on_block="+??" if i % 2 else f"{i}") for i in range(8)]
        result = classifier.key_moves(moves)
        assert result.commands() == ["m6", "m4", "m2", "m0", "m1", "m3", "m5", "m7"]

    def test_entries_reference_original_positions(self, classifier, make_move) -> None:
        moves = [make_move("slow", startup="20"), make_move("jab", startup="10")]
        result = classifier.key_moves(moves)
        assert result.moves[0].index == 1
        assert result.moves[0].move == moves[1]

    def test_duplicate_commands_are_distinct_entries(self, classifier, make_move) -> None:
        moves = [
            make_move("1,2", startup="10", on_block="+1"),
            make_move("1,2", startup="10", on_block="-1", notes="Heat"),
        ]
        result = classifier.key_moves(moves)
        assert [entry.index for entry in result.moves] == [0, 1]


class TestCaps:
    def test_key_moves_capped_at_twenty(self, classifier, make_move) -> None:
        moves = [make_move(f"jab{i}", startup="10") for i in range(40)]
        result = classifier.key_moves(moves)
        assert result.size == 20
        assert classifier.all_key_moves(moves).size == 40

    def test_punishable_capped_at_fifteen(self, classifier, make_move) -> None:
        moves = [make_move(f"unsafe{i}", on_block=f"-{10 + i}") for i in range(30)]
        result = classifier.punishable_moves(moves)
        assert result.size == 15
        assert result.commands()[0] == "unsafe29"

    def test_custom_limits(self, make_move) -> None:
        classifier = MoveClassifier(key_move_limit=2, punishable_move_limit=1)
        moves = [make_move(f"m{i}", startup="10", on_block=f"-{10 + i}") for i in range(5)]
        assert classifier.key_moves(moves).size == 2
        assert classifier.punishable_moves(moves).size == 1

    def test_invalid_limits(self) -> None:
        with pytest.raises(ValueError):
            MoveClassifier(key_move_limit=0)


class TestPunishableMoves:
    def test_threshold_is_minus_ten(self, classifier, make_move) -> None:
        moves = [
            make_move("safe", on_block="-9"),
            make_move("edge", on_block="-10"),
            make_move("launch", on_block="Launch"),
            make_move("blank", on_block=""),
        ]
        result = classifier.punishable_moves(moves)
        assert result.kind == ClassifiedSetKind.PUNISHABLE_MOVES
        assert result.commands() == ["edge"]
        assert result.moves[0].reasons == (ClassificationReason.PUNISHABLE,)

    def test_most_negative_first(self, classifier, make_move) -> None:
        moves = [
            make_move("mild", on_block="-10"),
            make_move("db+3+4", on_block="-31"),
            make_move("mid", on_block="-14~-13"),
            make_move("also-mild", on_block="-10"),
        ]
        assert classifier.punishable_moves(moves).commands() == [
            "db+3+4",
            "mid",
            "mild",
            "also-mild",
        ]


def test_classification_is_deterministic(classifier, make_move) -> None:
    moves = [
        make_move(f"m{i}", startup=str(8 + i % 7), on_block=str((i * 7) % 25 - 15), on_hit="Launch" if i % 5 == 0 else "")
        for i in range(50)
    ]
    first_key = classifier.key_moves(moves)
    first_punish = classifier.punishable_moves(moves)
    for _ in range(3):
        assert classifier.key_moves(list(moves)) == first_key
        assert classifier.punishable_moves(list(moves)) == first_punish
