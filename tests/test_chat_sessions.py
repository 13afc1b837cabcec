from utils.chat_sessions import ChatSessionStore, is_exit_command


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_create_and_get():
    store = ChatSessionStore()
    session = store.create()
    assert session.session_id.startswith("session_")
    assert store.get(session.session_id) is session
    assert session.session_id in store
    assert len(store) == 1


def test_get_or_create_reuses_given_id():
    store = ChatSessionStore()
    session = store.get_or_create("session_abc")
    assert session.session_id == "session_abc"
    assert store.get_or_create("session_abc") is session


def test_least_recently_used_session_is_evicted():
    store = ChatSessionStore(max_sessions=2)
    first = store.create()
    second = store.create()
    store.get(first.session_id)
    store.create()

    assert first.session_id in store
    assert second.session_id not in store
    assert len(store) == 2


def test_idle_sessions_expire():
    clock = FakeClock()
    store = ChatSessionStore(ttl_seconds=60, clock=clock)
    session = store.create()

    clock.now += 30
    assert store.get(session.session_id) is session

    clock.now += 61
    assert store.get(session.session_id) is None
    assert len(store) == 0


def test_delete_reports_whether_session_existed():
    store = ChatSessionStore()
    session = store.create()
    assert store.delete(session.session_id) is True
    assert store.delete(session.session_id) is False
    assert store.delete(None) is False


def test_messages_include_system_instruction_and_history():
    store = ChatSessionStore()
    session = store.create()
    session.record_exchange("hi", "hello")

    messages = session.messages(pending="next")
    assert messages[0]["role"] == "system"
    assert [m["role"] for m in messages[1:]] == ["user", "assistant", "user"]


def test_exit_commands():
    assert is_exit_command(" Quit ")
    assert is_exit_command("EXIT")
    assert not is_exit_command("exit now")
