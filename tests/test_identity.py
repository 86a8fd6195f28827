"""Tests for the request identity and flash helpers."""

from src.services.flash import Flash, FlashType, flash_as_dict, pop_flash, push_flash
from src.services.identity import RequestContext, can_act_as


class TestRequestContext:
    """Tests for RequestContext."""

    def test_from_session(self):
        ctx = RequestContext.from_session({"logged_in": "alice"})
        assert ctx.identity == "alice"
        assert ctx.is_authenticated

    def test_from_empty_session(self):
        assert RequestContext.from_session({}).identity is None
        assert RequestContext.from_session({"logged_in": ""}).identity is None
        assert not RequestContext.from_session({}).is_authenticated


class TestCanActAs:
    """Tests for the ownership check."""

    def test_owner_matches(self):
        assert can_act_as(RequestContext("alice"), "alice")

    def test_other_user(self):
        assert not can_act_as(RequestContext("bob"), "alice")

    def test_anonymous(self):
        assert not can_act_as(RequestContext(), "alice")
        assert not can_act_as(RequestContext(), None)
        assert not can_act_as(RequestContext(""), "")


class TestFlash:
    """Tests for the one-shot flash channel."""

    def test_pop_returns_pushed_flash_once(self):
        session = {"logged_in": "alice"}
        push_flash(session, Flash.success("Saved"))

        assert pop_flash(session) == Flash(FlashType.SUCCESS, "Saved")
        assert pop_flash(session) is None
        assert session == {"logged_in": "alice"}

    def test_push_replaces_pending_flash(self):
        session = {}
        push_flash(session, Flash.success("first"))
        push_flash(session, Flash.fail("second"))

        assert pop_flash(session) == Flash.fail("second")

    def test_flash_as_dict(self):
        assert flash_as_dict(Flash.fail("nope")) == {"type": "fail", "text": "nope"}
        assert flash_as_dict(None) is None
