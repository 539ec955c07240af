import time

from liveascii.popup import Popup, Popups


def make_popup(duration=3.0, created_at=None):
    popup = Popup("hello", duration, (8, 3), (1, 2, 3))
    if created_at is not None:
        popup.created_at = created_at
    return popup


def test_new_popup_has_no_position():
    assert make_popup().position is None


def test_with_position_keeps_other_fields():
    popup = make_popup()
    placed = popup.with_position((4, 7))
    assert placed.position == (4, 7)
    assert placed.content == popup.content
    assert placed.created_at == popup.created_at


def test_zero_duration_is_expired():
    assert make_popup(duration=0.0).is_expired() is True


def test_fresh_popup_not_expired():
    assert make_popup(duration=60.0).is_expired() is False


def test_old_popup_is_expired():
    assert make_popup(duration=3.0, created_at=time.monotonic() - 10).is_expired() is True


def test_push_err_fields():
    popups = Popups()
    popups.push_err("boom")
    (popup,) = popups
    assert popup.content == "boom"
    assert popup.duration == 3.0
    assert popup.size == (len("boom") + 3, 3)
    assert popup.color == (230, 119, 119)


def test_push_msg_fields():
    popups = Popups()
    popups.push_msg("hi there")
    (popup,) = popups
    assert popup.duration == 4.0
    assert popup.size == (len("hi there") + 3, 3)
    assert popup.color == (128, 242, 176)


def test_width_counts_encoded_bytes():
    popups = Popups()
    popups.push_msg("é")
    assert popups.inner[0].size[0] == len("é".encode("utf-8")) + 3


def test_update_drops_only_expired():
    popups = Popups()
    stale = make_popup(duration=1.0, created_at=time.monotonic() - 5)
    fresh = make_popup(duration=60.0)
    popups.push(stale)
    popups.push(fresh)
    popups.update()
    assert popups.inner == [fresh]


def test_push_keeps_order():
    popups = Popups()
    popups.push_err("a")
    popups.push_msg("b")
    assert [p.content for p in popups] == ["a", "b"]
    assert len(popups) == 2