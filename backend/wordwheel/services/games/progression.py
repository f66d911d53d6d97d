from wordwheel.models import SessionState


def advance(state: SessionState) -> None:
    """Select the next active question after an answer or a pass.

    The first round walks the questions in order. Once it is exhausted the
    session switches to revisiting and pulls passed questions oldest-first;
    an empty queue at that point ends the game. The switch and the first
    pull happen in the same call.
    """
    if state.is_game_over:
        return

    if not state.is_revisiting:
        state.current_index += 1
        if state.current_index >= len(state.questions):
            state.is_revisiting = True

    if state.is_revisiting:
        if not state.pending_passes:
            state.is_game_over = True
            return
        state.current_index = state.pending_passes.pop(0)
