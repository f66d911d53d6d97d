from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple
import time

# Game clock default (seconds)
GAME_DURATION_SEC = 300

# Letter status values
UNSET = 'unset'
CORRECT = 'correct'
WRONG = 'wrong'
PASSED = 'passed'

# Message kinds carried in the {"type", "payload"} envelope
TYPE_INIT = 'INIT'
TYPE_QUESTION = 'QUESTION'
TYPE_ANSWER = 'ANSWER'
TYPE_PASS = 'PASS'
TYPE_FEEDBACK = 'FEEDBACK'
TYPE_TIMER_SYNC = 'TIMER_SYNC'
TYPE_GAME_OVER = 'GAME_OVER'
TYPE_ERROR = 'ERROR'


@dataclass(frozen=True)
class Question:
    letter: str
    prompt: str
    expected_answer: str


@dataclass(frozen=True)
class Feedback:
    letter: str
    status: str
    correct: bool

    def to_dict(self):
        return {
            'letter': self.letter,
            'status': self.status,
            'correct': self.correct,
        }


@dataclass
class SessionState:
    """One player's progress through a question set.

    Owned by the SessionStore; anything handed out of the store is a copy
    made with ``snapshot()``.
    """
    session_id: str
    language: str
    questions: Tuple[Question, ...]
    current_index: int = 0
    letter_status: Dict[str, str] = field(default_factory=dict)
    correct_count: int = 0
    wrong_count: int = 0
    pending_passes: List[int] = field(default_factory=list)
    is_revisiting: bool = False
    start_time: float = field(default_factory=time.time)
    duration: int = GAME_DURATION_SEC
    time_remaining: Optional[int] = None
    is_game_over: bool = False

    def __post_init__(self):
        if not self.letter_status:
            self.letter_status = {q.letter: UNSET for q in self.questions}
        if self.time_remaining is None:
            self.time_remaining = self.duration

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    def snapshot(self) -> 'SessionState':
        return replace(
            self,
            letter_status=dict(self.letter_status),
            pending_passes=list(self.pending_passes),
        )
