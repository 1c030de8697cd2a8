"""
Tests for round validation.
"""

import pytest

from bagtag.core.models import Participant
from bagtag.core.validation import validate_round


def participant(pid, score, bagtag, name=None):
    return Participant(
        player_id=pid,
        player_name=name or f"Player {pid}",
        current_bagtag=bagtag,
        old_bagtag=bagtag,
        score=score,
    )


class TestParticipantCount:
    """Tests for the minimum participant rule."""

    def test_single_participant_fails(self):
        errors = validate_round([participant("a", 50, 1)])
        assert len(errors) == 1
        assert "At least 2" in errors[0]

    def test_no_participants_fails(self):
        assert validate_round([]) != []

    def test_two_participants_pass(self):
        assert validate_round([participant("a", 50, 1), participant("b", 60, 2)]) == []


class TestScoreBounds:
    """Tests for the inclusive 18-200 score range."""

    @pytest.mark.parametrize("score", [18, 19, 100, 199, 200])
    def test_in_range_scores_pass(self, score):
        errors = validate_round([participant("a", score, 1), participant("b", 60, 2)])
        assert errors == []

    @pytest.mark.parametrize("score", [17, 201, 0, -5])
    def test_out_of_range_score_names_player(self, score):
        errors = validate_round([
            participant("a", score, 1, name="Lars"),
            participant("b", 60, 2, name="Morten"),
        ])
        assert len(errors) == 1
        assert "Lars" in errors[0]
        assert "Morten" not in errors[0]

    def test_missing_score_names_player(self):
        errors = validate_round([
            participant("a", None, 1, name="Lars"),
            participant("b", 60, 2),
        ])
        assert len(errors) == 1
        assert errors[0].startswith("Lars")


class TestErrorCollection:
    """Tests that every rule is checked."""

    def test_reports_all_problems(self):
        errors = validate_round([participant("a", 201, 1, name="Lars")])
        # Too few participants and a bad score
        assert len(errors) == 2
        assert any("Lars" in e for e in errors)

    def test_one_error_per_bad_participant(self):
        errors = validate_round([
            participant("a", 10, 1, name="Lars"),
            participant("b", None, 2, name="Thacker"),
            participant("c", 300, 3, name="Morten"),
        ])
        assert len(errors) == 3
        for name in ("Lars", "Thacker", "Morten"):
            assert any(name in e for e in errors)

    def test_duplicate_scores_allowed(self):
        errors = validate_round([participant("a", 60, 1), participant("b", 60, 2), participant("c", 60, 3)])
        assert errors == []

    def test_duplicate_player_flagged_once(self):
        errors = validate_round([
            participant("a", 50, 1, name="Lars"),
            participant("a", 55, 1, name="Lars"),
            participant("b", 60, 2),
        ])
        assert errors == ["Lars: Listed more than once"]

    def test_does_not_modify_input(self):
        participants = [participant("a", 17, 1)]
        validate_round(participants)
        assert participants == [participant("a", 17, 1)]


class TestScoreType:
    """Tests for scores that are not whole numbers."""

    @pytest.mark.parametrize("score", ["55", 55.5, True])
    def test_non_integer_score_reported(self, score):
        errors = validate_round([
            participant("a", score, 1, name="Lars"),
            participant("b", 60, 2),
        ])
        assert len(errors) == 1
        assert errors[0].startswith("Lars: Score must be a whole number")


class TestCoreExports:
    """Tests for the functions exposed on ``bagtag.core``."""

    def test_validate_round_exposed(self):
        import bagtag.core

        assert bagtag.core.validate_round is validate_round

    def test_unknown_name(self):
        import bagtag.core

        with pytest.raises(AttributeError):
            bagtag.core.not_a_function
