from uwsgikit.response_state import ResponseFlag, ResponseState


def test_new_response_is_pending():
    state = ResponseState()
    assert state.is_pending() is True
    assert state.offset == 0
    assert state.header_offset == 0
    assert state.backpressure == bytearray()


def test_mark_done_clears_pending():
    state = ResponseState()
    state.mark_done()
    assert state.is_pending() is False
    assert not state.state & ResponseFlag.HTTP_RESPONSE_PENDING


def test_mark_done_drops_abort_and_writable_handlers():
    calls = []
    state = ResponseState(
        on_aborted=lambda: calls.append("aborted"),
        on_writable=lambda offset: True,
        on_data=lambda chunk, last: calls.append(chunk),
    )
    state.mark_done()
    assert state.on_aborted is None
    assert state.on_writable is None
    state.on_data(b"x", True)
    assert calls == [b"x"]


def test_mark_done_keeps_other_flags():
    state = ResponseState(
        state=ResponseFlag.HTTP_RESPONSE_PENDING
        | ResponseFlag.HTTP_CONNECTION_CLOSE
        | ResponseFlag.HTTP_STATUS_CALLED
    )
    state.mark_done()
    assert state.state == ResponseFlag.HTTP_CONNECTION_CLOSE | ResponseFlag.HTTP_STATUS_CALLED


def test_mark_done_is_idempotent():
    state = ResponseState(state=ResponseFlag.HTTP_END_CALLED | ResponseFlag.HTTP_RESPONSE_PENDING)
    state.mark_done()
    first = state.state
    state.mark_done()
    assert state.state == first
    assert state.is_pending() is False


def test_mark_done_with_every_flag_set_clears_only_pending():
    others = (
        ResponseFlag.HTTP_STATUS_CALLED
        | ResponseFlag.HTTP_WRITE_CALLED
        | ResponseFlag.HTTP_END_CALLED
        | ResponseFlag.HTTP_CONNECTION_CLOSE
    )
    state = ResponseState(state=others | ResponseFlag.HTTP_RESPONSE_PENDING)
    assert state.is_pending() is True
    state.mark_done()
    assert state.state == others
    assert state.is_pending() is False


def test_state_not_pending_without_flag():
    state = ResponseState(state=ResponseFlag.HTTP_WRITE_CALLED)
    assert state.is_pending() is False


def test_backpressure_not_shared_between_instances():
    first = ResponseState()
    second = ResponseState()
    first.backpressure.extend(b"buffered")
    assert second.backpressure == bytearray()
    assert first.backpressure == bytearray(b"buffered")