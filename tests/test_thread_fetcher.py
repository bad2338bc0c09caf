"""Tests for ThreadFetcher: thread ordering and read-state transitions."""

from datetime import datetime

import pytest
from sqlalchemy import create_engine, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import (
    InternalException,
    InvalidArgumentException,
    NotFoundException,
    UnauthorizedException,
)
from app.crud import crud_message, crud_user
from app.init_db import init_db
from app.models.message import Message
from app.services import message_composer, thread_fetcher, unread_counter


def _thread(db, viewer, other, product_ref=None):
    return thread_fetcher.get_thread(
        db, viewer_id=viewer.id, other_user_id=other.id, product_ref=product_ref
    )


def test_bulk_read_mark_scenario(db, send, alice, bob, listing):
    for text in ("is it available?", "still there?", "hello?"):
        send(alice, bob, text, product_ref=listing.id)
    send(bob, alice, "yes it is", product_ref=listing.id)
    assert unread_counter.count(db, viewer_id=bob.id) == 3

    thread = _thread(db, bob, alice)

    assert [m.content for m in thread] == ["is it available?", "still there?", "hello?", "yes it is"]
    created = [m.created_at for m in thread]
    assert created == sorted(created)
    assert all(m.read and m.read_at is not None for m in thread if m.sender_id == alice.id)
    # bob's own reply stays unread until alice opens the thread
    assert [m.read for m in thread if m.sender_id == bob.id] == [False]
    assert unread_counter.count(db, viewer_id=bob.id) == 0
    assert unread_counter.count(db, viewer_id=alice.id) == 1


def test_opening_is_idempotent(db, send, alice, bob):
    send(alice, bob, "one")
    send(alice, bob, "two")

    first = _thread(db, bob, alice)
    second = _thread(db, bob, alice)

    assert first == second
    assert unread_counter.count(db, viewer_id=bob.id) == 0


def test_read_at_is_set_once(db, send, alice, bob):
    send(alice, bob, "one")
    first_read_at = _thread(db, bob, alice)[0].read_at

    send(alice, bob, "two")
    thread = _thread(db, bob, alice)

    assert thread[0].read_at == first_read_at
    assert thread[1].read


def test_sender_opening_does_not_mark_read(db, send, alice, bob):
    send(alice, bob, "hi")
    _thread(db, alice, bob)
    assert unread_counter.count(db, viewer_id=bob.id) == 1


def test_other_pairs_are_untouched(db, send, alice, bob, carol):
    send(alice, bob, "from alice")
    send(carol, bob, "from carol")

    _thread(db, bob, alice)

    assert unread_counter.count(db, viewer_id=bob.id) == 1
    assert [m.content for m in _thread(db, bob, carol)] == ["from carol"]


def test_equal_timestamps_fall_back_to_insertion_order(db, send, alice, bob):
    ids = [send(alice, bob, text).id for text in ("a", "b", "c")]
    db.execute(update(Message).values(created_at=datetime(2025, 1, 1, 12, 0, 0)))
    db.commit()

    thread = _thread(db, bob, alice)
    assert [m.id for m in thread] == sorted(ids)


def test_meeting_round_trip(db, send, alice, bob):
    proposal = {
        "date": "2025-03-01",
        "timeOfDay": "14:30",
        "location": {"name": "Library", "coordinates": {"lat": -32.89, "lng": 151.70}},
    }
    sent = send(alice, bob, "meet at the library?", meeting_proposal=proposal)

    fetched = _thread(db, bob, alice)[0]

    assert fetched.meeting_proposal == sent.meeting_proposal
    assert fetched.meeting_proposal.model_dump(by_alias=True, mode="json") == proposal


class TestProductFilter:

    def test_filter_narrows_the_thread(self, db, send, alice, bob, listing, giveaway):
        send(alice, bob, "about the lamp", product_ref=listing.id)
        send(alice, bob, "about the books", product_ref=giveaway.id)
        send(alice, bob, "general")

        thread = _thread(db, bob, alice, product_ref=str(listing.id))
        assert [m.content for m in thread] == ["about the lamp"]

    def test_counterpart_scope_marks_whole_pair(self, db, send, alice, bob, listing, giveaway, read_mark_scope):
        read_mark_scope("counterpart")
        send(alice, bob, "about the lamp", product_ref=listing.id)
        send(alice, bob, "about the books", product_ref=giveaway.id)

        _thread(db, bob, alice, product_ref=listing.id)
        assert unread_counter.count(db, viewer_id=bob.id) == 0

    def test_product_scope_marks_only_filtered(self, db, send, alice, bob, listing, giveaway, read_mark_scope):
        read_mark_scope("product")
        send(alice, bob, "about the lamp", product_ref=listing.id)
        send(alice, bob, "about the books", product_ref=giveaway.id)

        _thread(db, bob, alice, product_ref=listing.id)
        assert unread_counter.count(db, viewer_id=bob.id) == 1

        _thread(db, bob, alice)
        assert unread_counter.count(db, viewer_id=bob.id) == 0


@pytest.mark.parametrize("other", ["bob", "", "0", "-1", "²", "9" * 25, 2**31])
def test_malformed_other_user_is_invalid(db, alice, other):
    with pytest.raises(InvalidArgumentException):
        thread_fetcher.get_thread(db, viewer_id=alice.id, other_user_id=other)


def test_malformed_product_ref_is_invalid(db, alice, bob):
    with pytest.raises(InvalidArgumentException):
        thread_fetcher.get_thread(db, viewer_id=alice.id, other_user_id=bob.id, product_ref="lamp")


def test_failed_open_leaves_read_state_unchanged(db, send, alice, bob, monkeypatch):
    send(alice, bob, "one")
    send(alice, bob, "two")

    def broken_select(*args, **kwargs):
        raise OperationalError("SELECT messages", {}, Exception("connection lost"))

    monkeypatch.setattr(crud_message, "get_thread", broken_select)

    with pytest.raises(InternalException):
        _thread(db, bob, alice)
    assert unread_counter.count(db, viewer_id=bob.id) == 2


class TestConcurrentOpen:
    """Two sessions opening the same thread against one file-backed database."""

    @pytest.fixture
    def file_sessions(self, tmp_path):
        file_engine = create_engine(
            f"sqlite:///{tmp_path / 'messages.db'}",
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        init_db(file_engine)
        factory = sessionmaker(autocommit=False, autoflush=False, bind=file_engine)
        yield factory
        file_engine.dispose()

    @pytest.fixture
    def pair(self, file_sessions):
        setup = file_sessions()
        try:
            users = [
                crud_user.create(setup, obj_in={"username": name, "email": f"{name}@example.com"})
                for name in ("alice", "bob")
            ]
            for text in ("one", "two", "three"):
                message_composer.send(setup, sender_id=users[0].id, recipient_id=users[1].id, content=text)
            yield users[0].id, users[1].id
        finally:
            setup.close()

    def test_each_message_is_marked_by_exactly_one_open(self, file_sessions, pair):
        alice_id, bob_id = pair
        first, second = file_sessions(), file_sessions()
        try:
            # second loads the thread before either open commits
            stale = crud_message.get_thread(second, viewer_id=bob_id, other_user_id=alice_id)
            assert [m.is_read for m in stale] == [False, False, False]

            first_read_at = datetime(2024, 1, 1, 12, 0, 0)
            marked_first = crud_message.mark_pair_read(
                first, recipient_id=bob_id, sender_id=alice_id, read_at=first_read_at
            )
            first.commit()

            marked_second = crud_message.mark_pair_read(
                second, recipient_id=bob_id, sender_id=alice_id, read_at=datetime(2024, 1, 1, 12, 0, 5)
            )
            second.commit()

            assert marked_first + marked_second == 3
            assert marked_second == 0

            thread = thread_fetcher.get_thread(second, viewer_id=bob_id, other_user_id=alice_id)
            assert [m.read_at for m in thread] == [first_read_at] * 3
        finally:
            first.close()
            second.close()

    def test_second_open_keeps_read_at_from_first(self, file_sessions, pair):
        alice_id, bob_id = pair
        first, second = file_sessions(), file_sessions()
        try:
            opened = thread_fetcher.get_thread(first, viewer_id=bob_id, other_user_id=alice_id)
            reopened = thread_fetcher.get_thread(second, viewer_id=bob_id, other_user_id=alice_id)

            assert all(m.read for m in opened)
            assert [m.read_at for m in reopened] == [m.read_at for m in opened]
            assert unread_counter.count(second, viewer_id=bob_id) == 0
        finally:
            first.close()
            second.close()


class TestMarkRead:

    def test_recipient_can_mark_read(self, db, send, alice, bob):
        message = send(alice, bob, "hi")

        marked = thread_fetcher.mark_read(db, viewer_id=bob.id, message_id=message.id)

        assert marked.read is True
        assert marked.read_at is not None
        assert unread_counter.count(db, viewer_id=bob.id) == 0

    def test_marking_twice_keeps_first_read_at(self, db, send, alice, bob):
        message = send(alice, bob, "hi")
        first = thread_fetcher.mark_read(db, viewer_id=bob.id, message_id=message.id)
        second = thread_fetcher.mark_read(db, viewer_id=bob.id, message_id=str(message.id))
        assert second.read_at == first.read_at

    def test_sender_cannot_mark_read(self, db, send, alice, bob):
        message = send(alice, bob, "hi")
        with pytest.raises(UnauthorizedException) as exc_info:
            thread_fetcher.mark_read(db, viewer_id=alice.id, message_id=message.id)
        assert exc_info.value.status_code == 403
        assert unread_counter.count(db, viewer_id=bob.id) == 1

    def test_third_party_cannot_mark_read(self, db, send, alice, bob, carol):
        message = send(alice, bob, "hi")
        with pytest.raises(UnauthorizedException):
            thread_fetcher.mark_read(db, viewer_id=carol.id, message_id=message.id)

    def test_unknown_message_is_not_found(self, db, bob):
        with pytest.raises(NotFoundException):
            thread_fetcher.mark_read(db, viewer_id=bob.id, message_id=12345)
