import pytest

from modbase.choicememory import (
    Choice,
    StandardButton,
    button_to_string,
    get_memory,
    query,
    set_callbacks,
    set_file_memory,
    set_window_memory,
)


class Store:
    def __init__(self):
        self.windows = {}
        self.files = {}

    def get(self, window, file):
        if file and (window, file) in self.files:
            return self.files[(window, file)]
        return self.windows.get(window, StandardButton.NO_BUTTON)

    def set_window(self, window, button):
        self.windows[window] = button

    def set_file(self, window, file, button):
        self.files[(window, file)] = button


@pytest.fixture
def store():
    s = Store()
    set_callbacks(s.get, s.set_window, s.set_file)
    yield s
    set_callbacks(None, None, None)


def test_button_to_string_known():
    assert button_to_string(StandardButton.YES) == "'yes' (0x4000)"


def test_button_to_string_none():
    assert button_to_string(StandardButton.NO_BUTTON) == "'none' (0x0)"


def test_button_to_string_unknown_is_hex_only():
    combined = StandardButton.YES | StandardButton.NO
    text = button_to_string(combined)
    assert text.startswith("0x")
    assert "'" not in text
    assert int(text, 16) == int(combined)


def test_button_to_string_accepts_plain_int():
    assert button_to_string(int(StandardButton.CANCEL)) == button_to_string(
        StandardButton.CANCEL
    )


def test_remembered_choice_skips_asking(store):
    store.windows["delete"] = StandardButton.YES

    def ask():
        raise AssertionError("should not ask")

    assert query("delete", ask) == StandardButton.YES


def test_answer_remembered_for_window(store):
    result = query("delete", lambda: Choice(StandardButton.NO, remember=True))
    assert result == StandardButton.NO
    assert store.windows == {"delete": StandardButton.NO}
    assert get_memory("delete") == StandardButton.NO


def test_answer_not_remembered_without_request(store):
    result = query("delete", lambda: Choice(StandardButton.YES))
    assert result == StandardButton.YES
    assert store.windows == {}
    assert get_memory("delete") == StandardButton.NO_BUTTON


def test_answer_remembered_for_file(store):
    result = query(
        "overwrite",
        lambda: Choice(StandardButton.YES, remember_file=True),
        file_name="a.ini",
    )
    assert result == StandardButton.YES
    assert store.files == {("overwrite", "a.ini"): StandardButton.YES}
    assert store.windows == {}
    assert get_memory("overwrite", "a.ini") == StandardButton.YES
    assert get_memory("overwrite", "b.ini") == StandardButton.NO_BUTTON


def test_file_memory_ignored_without_file_name(store):
    query("overwrite", lambda: Choice(StandardButton.YES, remember_file=True))
    assert store.files == {}


def test_cancel_is_never_remembered(store):
    result = query(
        "x",
        lambda: Choice(StandardButton.CANCEL, remember=True, remember_file=True),
        file_name="f",
    )
    assert result == StandardButton.CANCEL
    assert store.windows == {}
    assert store.files == {}


def test_second_query_uses_memory(store):
    calls = []

    def ask():
        calls.append(1)
        return Choice(StandardButton.IGNORE, remember=True)

    assert query("w", ask) == StandardButton.IGNORE
    assert query("w", ask) == StandardButton.IGNORE
    assert len(calls) == 1


def test_direct_setters(store):
    set_window_memory("w", StandardButton.OK)
    set_file_memory("w", "f", StandardButton.NO)
    assert get_memory("w") == StandardButton.OK
    assert get_memory("w", "f") == StandardButton.NO


def test_missing_callbacks_raise():
    set_callbacks(None, None, None)
    with pytest.raises(RuntimeError):
        get_memory("w")
    with pytest.raises(RuntimeError):
        set_window_memory("w", StandardButton.OK)
    with pytest.raises(RuntimeError):
        set_file_memory("w", "f", StandardButton.OK)