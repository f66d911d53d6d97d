import threading
from typing import Callable, Optional

from wordwheel.models import TYPE_GAME_OVER, TYPE_TIMER_SYNC
from wordwheel.store import SessionStore
from .projection import game_over_view, timer_sync_view


def run_timer_ticker(
    store: SessionStore,
    get_session_id: Callable[[], Optional[str]],
    emit: Callable[[str, dict], None],
    stop: threading.Event,
    interval: float,
    sleep: Callable[[float], None],
    logger=None,
) -> None:
    """Push the game clock to one connection until the game ends or ``stop`` is set.

    - Sessions that do not exist yet (no INIT received) are skipped
    - While the game runs, each tick emits TIMER_SYNC
    - On game over (clock or exhausted questions) emits GAME_OVER once and returns
    - Nothing is emitted after ``stop`` is set
    """
    ticks = 0
    while not stop.is_set():
        sleep(interval)
        if stop.is_set():
            break
        ticks += 1
        session_id = get_session_id()
        if not session_id:
            continue
        state, found = store.get(session_id)
        if not found:
            continue
        if state.is_game_over:
            emit(TYPE_GAME_OVER, game_over_view(state))
            if logger is not None:
                logger.info(f"[timer-over] session={session_id} ticks={ticks}")
            return
        emit(TYPE_TIMER_SYNC, timer_sync_view(state))
    if logger is not None:
        logger.info(f"[timer-stop] session={get_session_id()} ticks={ticks}")


def start_timer_ticker(app, socketio, sid: str, ctx: dict, namespace: str = '/ws') -> Optional[threading.Event]:
    """Start the per-connection ticker as a Socket.IO background task.

    ``ctx`` is the connection context; the ticker reads ``ctx['session_id']``
    on every tick so a session adopted by INIT is followed. Returns the stop
    event, or None when tickers are disabled (TESTING without
    ENABLE_TICKER_IN_TESTS).
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_TICKER_IN_TESTS'):
        return None

    store = app.extensions['session_store']
    interval = float(app.config.get('TIMER_TICK_SEC', 1))
    stop = threading.Event()

    def _emit(kind: str, payload: dict) -> None:
        socketio.emit('game_message', {'type': kind, 'payload': payload}, to=sid, namespace=namespace)

    app.logger.info(f"[timer-start] sid={sid} session={ctx.get('session_id')} interval={interval}s")
    socketio.start_background_task(
        run_timer_ticker,
        store,
        lambda: ctx.get('session_id'),
        _emit,
        stop,
        interval,
        socketio.sleep,
        app.logger,
    )
    return stop
