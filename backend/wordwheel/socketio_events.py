from flask import current_app, request
from flask_socketio import emit
from wordwheel import socketio
from wordwheel.models import TYPE_ANSWER, TYPE_FEEDBACK, TYPE_INIT, TYPE_PASS
from wordwheel.services.games.projection import feedback_view, state_event
from wordwheel.services.games.scheduler import start_timer_ticker
from typing import Dict, Any, Optional
import json
import uuid


# ---- Connection context ----
# sid -> {'session_id': str, 'stop': threading.Event | None}
_sid_to_ctx: Dict[str, Dict[str, Any]] = {}

def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore

def _store():
    return current_app.extensions['session_store']

def _send(kind: str, payload: dict) -> None:
    emit('game_message', {'type': kind, 'payload': payload})

def _send_state(state) -> None:
    kind, payload = state_event(state)
    _send(kind, payload)


def handle_connect(auth=None):
    cookie_name = current_app.config.get('SESSION_ID_COOKIE', 'session_id')
    session_id = request.cookies.get(cookie_name) or str(uuid.uuid4())
    ctx: Dict[str, Any] = {'session_id': session_id, 'stop': None}
    sid = _get_sid()
    _sid_to_ctx[sid] = ctx
    ctx['stop'] = start_timer_ticker(
        current_app._get_current_object(), socketio, sid, ctx, namespace=request.namespace
    )
    current_app.logger.info(f"[connect] sid={sid} session={session_id}")


def handle_disconnect(*args):
    ctx = _sid_to_ctx.pop(_get_sid(), None)
    if not ctx:
        return
    stop = ctx.get('stop')
    if stop is not None:
        stop.set()
    current_app.logger.info(f"[disconnect] sid={_get_sid()} session={ctx.get('session_id')}")


def _decode_envelope(data) -> Optional[Dict[str, Any]]:
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError as exc:
            current_app.logger.warning(f"[message-drop] sid={_get_sid()} undecodable: {exc}")
            return None
    if not isinstance(data, dict) or not isinstance(data.get('type'), str):
        current_app.logger.warning(f"[message-drop] sid={_get_sid()} malformed envelope")
        return None
    payload = data.get('payload')
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        current_app.logger.warning(f"[message-drop] sid={_get_sid()} type={data['type']} malformed payload")
        return None
    return {'type': data['type'], 'payload': payload}


def _text_field(kind: str, payload: Dict[str, Any], key: str) -> Optional[str]:
    """Return a string payload field, '' when absent or null, None when malformed."""
    value = payload.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        current_app.logger.warning(f"[message-drop] sid={_get_sid()} type={kind} field={key} not a string")
        return None
    return value


def handle_message(data):
    """Translate one inbound message into a store operation and reply.

    Malformed messages, unknown kinds and moves on missing or finished
    sessions are dropped without a reply.
    """
    msg = _decode_envelope(data)
    if msg is None:
        return
    ctx = _sid_to_ctx.get(_get_sid())
    if ctx is None:
        return
    kind, payload = msg['type'], msg['payload']

    if kind == TYPE_INIT:
        requested_id = _text_field(kind, payload, 'sessionId')
        language = _text_field(kind, payload, 'language')
        if requested_id is None or language is None:
            return
        if requested_id:
            ctx['session_id'] = requested_id
        state, created = _store().get_or_create(ctx['session_id'], language)
        current_app.logger.info(
            f"[init] session={state.session_id} language={state.language} created={created}"
        )
        _send_state(state)
        return

    if kind == TYPE_ANSWER:
        answer = _text_field(kind, payload, 'answer')
        if answer is None:
            return
        feedback, state, ok = _store().submit_answer(ctx['session_id'], answer)
    elif kind == TYPE_PASS:
        feedback, state, ok = _store().pass_question(ctx['session_id'])
    else:
        current_app.logger.warning(f"[message-drop] sid={_get_sid()} unknown type={kind}")
        return

    if not ok:
        return
    if feedback is not None:
        _send(TYPE_FEEDBACK, feedback_view(feedback))
    _send_state(state)


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('disconnect', handle_disconnect, namespace='/ws')
    socketio.on_event('game_message', handle_message, namespace='/ws')

    if testing:
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('disconnect', handle_disconnect, namespace='/')
        socketio.on_event('game_message', handle_message, namespace='/')
