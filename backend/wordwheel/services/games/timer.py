import time
from typing import Optional

from wordwheel.models import SessionState


def check_expiry(state: SessionState, now: Optional[float] = None) -> None:
    """Refresh ``time_remaining`` and end the game once the clock runs out.

    Outstanding and pending questions are left as they are.
    """
    if state.is_game_over:
        return
    if now is None:
        now = time.time()
    elapsed = int(now - state.start_time)
    state.time_remaining = max(0, state.duration - elapsed)
    if state.time_remaining == 0:
        state.is_game_over = True
