from typing import Any, Dict, Tuple

from wordwheel.models import TYPE_GAME_OVER, TYPE_QUESTION, Feedback, SessionState


def game_over_view(state: SessionState) -> Dict[str, int]:
    # passedCount is what is still queued, not the number of passes ever made
    return {
        'correctCount': state.correct_count,
        'wrongCount': state.wrong_count,
        'passedCount': len(state.pending_passes),
    }


def question_view(state: SessionState) -> Dict[str, Any]:
    question = state.current_question
    return {
        'letter': question.letter,
        'question': question.prompt,
        'index': state.current_index,
        'lettersState': dict(state.letter_status),
        'timeRemaining': state.time_remaining,
    }


def timer_sync_view(state: SessionState) -> Dict[str, int]:
    return {'timeRemaining': state.time_remaining}


def feedback_view(feedback: Feedback) -> Dict[str, Any]:
    return feedback.to_dict()


def state_event(state: SessionState) -> Tuple[str, Dict[str, Any]]:
    """Pick the outbound message describing ``state``."""
    if state.is_game_over:
        return TYPE_GAME_OVER, game_over_view(state)
    return TYPE_QUESTION, question_view(state)
