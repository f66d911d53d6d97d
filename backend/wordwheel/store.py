"""In-memory registry of game sessions.

Every access goes through a single lock. Reads run the expiry check, which
can end a game, so they take the lock exclusively like writes do; this
keeps all operations on one session in lock-acquisition order.

States leave the store only as copies. The live object is touched solely
while the lock is held.
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from wordwheel.catalog import Catalog
from wordwheel.models import GAME_DURATION_SEC, Feedback, SessionState
from wordwheel.services.games.scoring import pass_question, submit_answer
from wordwheel.services.games.timer import check_expiry

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, catalog: Catalog, duration: int = GAME_DURATION_SEC,
                 clock: Callable[[], float] = time.time):
        self.catalog = catalog
        self.duration = duration
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, SessionState] = {}

    def __len__(self):
        with self._lock:
            return len(self._sessions)

    def get_or_create(self, session_id: str, language) -> Tuple[SessionState, bool]:
        """Return the session for ``session_id``, creating it if absent.

        An existing session is returned after its expiry check; a different
        ``language`` does not restart it. Unknown languages fall back to the
        catalog default.
        """
        with self._lock:
            state = self._sessions.get(session_id)
            if state is not None:
                check_expiry(state, self._clock())
                return state.snapshot(), False

            resolved, questions = self.catalog.resolve(language)
            state = SessionState(
                session_id=session_id,
                language=resolved,
                questions=questions,
                start_time=self._clock(),
                duration=self.duration,
            )
            self._sessions[session_id] = state
            logger.info(
                f"[session-create] session={session_id} language={resolved} requested={language} questions={len(questions)}"
            )
            return state.snapshot(), True

    def get(self, session_id: str) -> Tuple[Optional[SessionState], bool]:
        with self._lock:
            state = self._sessions.get(session_id)
            if state is None:
                return None, False
            check_expiry(state, self._clock())
            return state.snapshot(), True

    def submit_answer(self, session_id: str, answer) -> Tuple[Optional[Feedback], Optional[SessionState], bool]:
        with self._lock:
            state = self._sessions.get(session_id)
            feedback, ok = submit_answer(state, answer, now=self._clock())
            if not ok:
                return None, None, False
            self._log_if_finished(state)
            return feedback, state.snapshot(), True

    def pass_question(self, session_id: str) -> Tuple[Optional[Feedback], Optional[SessionState], bool]:
        with self._lock:
            state = self._sessions.get(session_id)
            feedback, ok = pass_question(state, now=self._clock())
            if not ok:
                return None, None, False
            self._log_if_finished(state)
            return feedback, state.snapshot(), True

    @staticmethod
    def _log_if_finished(state: SessionState) -> None:
        if state.is_game_over:
            logger.info(
                f"[session-over] session={state.session_id} correct={state.correct_count} "
                f"wrong={state.wrong_count} pending={len(state.pending_passes)} remaining={state.time_remaining}s"
            )
