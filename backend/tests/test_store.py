import threading

from wordwheel.models import CORRECT, PASSED, UNSET


def test_get_or_create_builds_fresh_session(store):
    state, created = store.get_or_create('s1', 'es')
    assert created
    assert state.language == 'es'
    assert state.current_index == 0
    assert state.letter_status == {'A': UNSET, 'B': UNSET, 'C': UNSET}
    assert state.time_remaining == 300
    assert len(store) == 1


def test_unknown_language_falls_back_to_english(store):
    state, created = store.get_or_create('s1', 'xx')
    assert created
    assert state.language == 'en'
    assert [q.letter for q in state.questions] == ['A', 'B']

    state, _ = store.get_or_create('s2', None)
    assert state.language == 'en'


def test_existing_session_keeps_its_language(store):
    store.get_or_create('s1', 'es')
    store.pass_question('s1')
    state, created = store.get_or_create('s1', 'en')
    assert not created
    assert state.language == 'es'
    assert state.letter_status['A'] == PASSED


def test_reopening_expired_session_reports_game_over(store, clock):
    store.get_or_create('s1', 'en')
    clock.advance(400)
    state, created = store.get_or_create('s1', 'en')
    assert not created
    assert state.is_game_over
    assert state.time_remaining == 0


def test_reopening_session_refreshes_remaining_time(store, clock):
    store.get_or_create('s1', 'en')
    clock.advance(45)
    state, _ = store.get_or_create('s1', 'en')
    assert state.time_remaining == 255
    assert not state.is_game_over


def test_get_missing_session(store):
    assert store.get('nope') == (None, False)


def test_get_runs_expiry_check(store, clock):
    store.get_or_create('s1', 'en')
    clock.advance(120)
    state, found = store.get('s1')
    assert found
    assert state.time_remaining == 180
    clock.advance(180)
    state, _ = store.get('s1')
    assert state.is_game_over
    assert state.time_remaining == 0


def test_returned_state_is_detached(store):
    state, _ = store.get_or_create('s1', 'en')
    state.letter_status['A'] = CORRECT
    state.pending_passes.append(1)
    state.is_game_over = True

    fresh, _ = store.get('s1')
    assert fresh.letter_status['A'] == UNSET
    assert fresh.pending_passes == []
    assert not fresh.is_game_over


def test_moves_on_missing_session_are_noops(store):
    assert store.submit_answer('ghost', 'x') == (None, None, False)
    assert store.pass_question('ghost') == (None, None, False)
    assert len(store) == 0


def test_timer_expiry_discards_in_flight_answer(store, clock):
    store.get_or_create('s1', 'en')
    clock.advance(300)
    feedback, state, ok = store.submit_answer('s1', 'ans1')
    assert ok
    assert feedback is None
    assert state.is_game_over
    assert state.correct_count == 0

    # Once over, further moves are dropped
    assert store.pass_question('s1') == (None, None, False)


def test_sessions_are_isolated(store):
    store.get_or_create('alice', 'en')
    store.get_or_create('bob', 'en')
    store.submit_answer('alice', 'ans1')
    store.pass_question('bob')

    alice, _ = store.get('alice')
    bob, _ = store.get('bob')
    assert alice.correct_count == 1 and alice.letter_status['A'] == CORRECT
    assert bob.correct_count == 0 and bob.letter_status['A'] == PASSED
    assert bob.pending_passes == [0]


def test_concurrent_moves_are_linearized(catalog, clock):
    from wordwheel.catalog import parse_catalog
    from wordwheel.store import SessionStore

    big = parse_catalog({
        'en': [{'letter': f'L{i}', 'question': f'q{i}', 'answer': f'a{i}'} for i in range(200)]
    })
    store = SessionStore(big, duration=300, clock=clock)
    session_ids = [f'p{n}' for n in range(4)]
    for sid in session_ids:
        store.get_or_create(sid, 'en')

    def play(sid):
        for _ in range(50):
            store.submit_answer(sid, 'wrong')
            store.get(sid)

    threads = [threading.Thread(target=play, args=(sid,)) for sid in session_ids for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    for sid in session_ids:
        state, _ = store.get(sid)
        # Two threads x 50 answers each, no lost updates
        assert state.wrong_count == 100
        assert state.current_index == 100
        assert sum(1 for s in state.letter_status.values() if s != UNSET) == 100
        assert len(state.letter_status) == 200
