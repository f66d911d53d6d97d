from typing import Optional, Tuple

from wordwheel.models import CORRECT, PASSED, WRONG, Feedback, SessionState
from .progression import advance
from .timer import check_expiry


def normalize_answer(value: str) -> str:
    return value.strip().casefold()


def answer_matches(submitted: str, expected: str) -> bool:
    return normalize_answer(submitted) == normalize_answer(expected)


def _begin_turn(state: Optional[SessionState], now: Optional[float]) -> Tuple[bool, bool]:
    """Return ``(ok, playable)`` for an incoming answer or pass.

    Missing and finished sessions are rejected. A session whose clock runs
    out during this check is accepted but not playable: the caller reports
    game over and the move is discarded.
    """
    if state is None or state.is_game_over:
        return False, False
    check_expiry(state, now)
    return True, not state.is_game_over


def submit_answer(state: Optional[SessionState], raw_answer: str, now: Optional[float] = None) -> Tuple[Optional[Feedback], bool]:
    ok, playable = _begin_turn(state, now)
    if not playable:
        return None, ok

    question = state.current_question
    is_correct = answer_matches(raw_answer, question.expected_answer)
    if is_correct:
        status = CORRECT
        state.correct_count += 1
    else:
        status = WRONG
        state.wrong_count += 1
    state.letter_status[question.letter] = status

    feedback = Feedback(letter=question.letter, status=status, correct=is_correct)
    advance(state)
    return feedback, True


def pass_question(state: Optional[SessionState], now: Optional[float] = None) -> Tuple[Optional[Feedback], bool]:
    """Mark the active letter passed and queue it for the revisit round.

    A letter may be passed again each time it comes back; there is no cap.
    """
    ok, playable = _begin_turn(state, now)
    if not playable:
        return None, ok

    question = state.current_question
    state.letter_status[question.letter] = PASSED
    state.pending_passes.append(state.current_index)

    feedback = Feedback(letter=question.letter, status=PASSED, correct=False)
    advance(state)
    return feedback, True
