from src.ebd_registry.ebd_registry.core.enums import ChangeType
from src.ebd_registry.ebd_registry.core.events import ChangeFeed


def test_subscribers_only_get_their_table():
    feed = ChangeFeed()
    got = []
    feed.subscribe("registrations", got.append)

    feed.publish("students", ChangeType.INSERT, "1")
    feed.publish("registrations", ChangeType.DELETE, "abc")

    assert [(e.table, e.change, e.record_id) for e in got] == [("registrations", ChangeType.DELETE, "abc")]


def test_unsubscribe_stops_delivery():
    feed = ChangeFeed()
    got = []
    unsubscribe = feed.subscribe("registrations", got.append)
    unsubscribe()
    unsubscribe()

    feed.publish("registrations", ChangeType.INSERT)

    assert got == []
    assert feed.subscriber_count("registrations") == 0


def test_failing_listener_does_not_stop_others():
    feed = ChangeFeed()
    got = []

    def broken(event):
        raise RuntimeError("listener bug")

    feed.subscribe("registrations", broken)
    feed.subscribe("registrations", got.append)
    feed.publish("registrations", ChangeType.UPDATE, "x")

    assert len(got) == 1
