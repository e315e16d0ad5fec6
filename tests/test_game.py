"""
Testing the game state machine: start, guesses, misses, win/loss and reveals.
"""

import pytest

from endless_history import config
from endless_history.exceptions import IllegalTransition, InvalidGuessFormat
from endless_history.game import GameState

from .conftest import make_secret


def started_game(year: str = "1969", count: int = 8) -> GameState:
    game = GameState()
    game.start(make_secret(year, count))
    return game


def play(game: GameState, guess: str):
    game.set_guess(guess)
    return game.submit()


def test_new_game_starts_active_and_empty():
    game = started_game()
    assert game.status == "active"
    assert game.guess == ""
    assert game.feedback == (False, False, False, False)
    assert game.misses == ()
    assert game.masked_year() == "XXXX"
    assert len(game.revealed_events()) == 1
    assert game.attempts_left == 5


def test_cannot_start_twice():
    game = started_game()
    with pytest.raises(IllegalTransition):
        game.start(make_secret("1500"))
    assert game.status == "active"


def test_commands_before_start_are_rejected():
    game = GameState()
    assert game.status is None
    with pytest.raises(IllegalTransition):
        game.set_guess("1969")
    with pytest.raises(IllegalTransition):
        game.submit()


def test_correct_guess_wins():
    game = started_game("1969")
    result = play(game, "1969")
    assert result.accepted is True
    assert result.status == "won"
    assert game.status == "won"
    assert game.feedback == (True, True, True, True)
    assert game.winning_guess == "1969"
    assert game.misses == ()
    # digit events are emitted on the winning submission as well
    assert [c.label for c in result.confirmed] == ["millennium", "century", "decade", "year"]


def test_miss_records_feedback_and_hint():
    game = started_game("1500")
    result = play(game, "1962")
    assert result.accepted is True
    assert result.status == "active"
    assert result.hint == "too recent"
    assert game.feedback == (True, False, False, False)
    assert game.misses == ("1962",)
    assert [(entry.guess, entry.hint) for entry in game.history()] == [("1962", "too recent")]
    assert game.masked_year() == "1XXX"
    assert len(game.revealed_events()) == 2


def test_five_misses_lose_exactly_on_the_fifth():
    game = started_game("1066")
    guesses = ["1000", "1100", "1200", "1300", "1400"]
    for count, guess in enumerate(guesses, start=1):
        result = play(game, guess)
        if count < 5:
            assert result.status == "active"
        else:
            assert result.status == "lost"
    assert game.status == "lost"
    assert len(game.misses) == 5
    assert len(game.revealed_events()) == 5
    assert game.attempts_left == 0


def test_no_guesses_after_game_over():
    game = started_game("1969")
    play(game, "1969")
    with pytest.raises(IllegalTransition):
        game.set_guess("1000")
    with pytest.raises(IllegalTransition):
        game.submit()
    assert game.status == "won"


def test_empty_and_duplicate_submissions_are_ignored():
    game = started_game("1066")
    empty = game.submit()
    assert empty.accepted is False
    assert empty.ignored_reason == "empty_guess"

    play(game, "1000")
    # same year typed unpadded is still the same guess
    again = play(game, "1000")
    assert again.accepted is False
    assert again.ignored_reason == "duplicate_guess"
    assert game.misses == ("1000",)
    assert game.status == "active"


def test_feedback_only_grows():
    game = started_game("1969")
    play(game, "1960")     # [T, T, T, F]
    before = game.feedback
    result = play(game, "2000")   # [F, F, F, F] on its own
    after = game.feedback
    assert result.confirmed == []
    for old, new in zip(before, after):
        assert new or not old
    assert after == (True, True, True, False)


def test_confirmed_events_only_report_new_digits():
    game = started_game("1969")
    first = play(game, "1900")
    assert [c.index for c in first.confirmed] == [0, 1]
    second = play(game, "1960")
    assert [c.index for c in second.confirmed] == [2]


def test_set_guess_rejects_bad_input_and_keeps_previous():
    game = started_game()
    game.set_guess("19")
    with pytest.raises(InvalidGuessFormat):
        game.set_guess("12345")
    with pytest.raises(InvalidGuessFormat):
        game.set_guess("19x")
    assert game.guess == "19"


def test_step_guess_moves_within_range(monkeypatch):
    monkeypatch.setattr(config, "MIN_YEAR", 1000)
    monkeypatch.setattr(config, "MAX_YEAR", 2023)
    game = started_game()

    assert game.step_guess(1) == "1000"
    assert game.step_guess(1) == "1001"
    assert game.step_guess(-1) == "1000"
    assert game.step_guess(-1) == "1000"

    game.set_guess("")
    assert game.step_guess(-1) == "2023"
    assert game.step_guess(1) == "2023"

    game.set_guess("42")
    assert game.step_guess(1) == "1000"


def test_end_of_game_details_only_when_over():
    game = started_game("1066", count=9)
    with pytest.raises(IllegalTransition):
        game.secret
    with pytest.raises(IllegalTransition):
        game.unseen_events()

    play(game, "1000")
    play(game, "1066")
    assert game.secret == "1066"
    # two events were shown (start + one miss)
    assert [e.description for e in game.unseen_events()] == [f"Event {i} of 1066" for i in range(3, 10)]
    assert game.wikipedia_url() == "https://en.wikipedia.org/wiki/AD_1066"


def test_wikipedia_url_drops_padding():
    game = started_game("0800")
    play(game, "800")
    assert game.status == "won"
    assert game.wikipedia_url() == "https://en.wikipedia.org/wiki/AD_800"
