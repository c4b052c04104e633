import logging

import pytest

from db.store import SIDEBAR_COLLAPSED, STOCK_ITEMS, SUPPLIERS, CollectionStore


def test_absent_key_returns_default(store):
    assert store.read(STOCK_ITEMS) is None
    assert store.read(STOCK_ITEMS, []) == []


def test_write_replaces_the_whole_collection(store):
    store.write(SUPPLIERS, [{"id": 1, "legalName": "ABC Suppliers"}, {"id": 2, "legalName": "Mixers"}])
    store.write(SUPPLIERS, [{"id": 3, "legalName": "Fresh Produce"}])
    assert store.read(SUPPLIERS) == [{"id": 3, "legalName": "Fresh Produce"}]
    assert store.keys() == [SUPPLIERS]


def test_non_ascii_values_survive(store):
    store.write("note", "रु 1,200")
    assert store.read("note") == "रु 1,200"


def test_malformed_json_falls_back_to_default(store, write_raw, caplog):
    write_raw(STOCK_ITEMS, "[{not json")
    with caplog.at_level(logging.WARNING, logger="db.store"):
        assert store.read(STOCK_ITEMS, []) == []
    assert "not valid JSON" in caplog.text


@pytest.mark.parametrize("raw", ["null", '{"oops": 1}', '"tomatoes"', "42"])
def test_value_of_the_wrong_shape_falls_back_to_default(store, write_raw, caplog, raw):
    write_raw(STOCK_ITEMS, raw)
    with caplog.at_level(logging.WARNING, logger="db.store"):
        assert store.read(STOCK_ITEMS, []) == []
    assert "falling back to default" in caplog.text


def test_any_value_is_returned_without_a_default(store, write_raw):
    write_raw(SIDEBAR_COLLAPSED, '{"oops": 1}')
    assert store.read(SIDEBAR_COLLAPSED) == {"oops": 1}
    assert store.read(SIDEBAR_COLLAPSED, False) is False


def test_other_stores_on_the_channel_are_notified(session_factory, channel):
    writer = CollectionStore(session_factory, channel=channel)
    reader = CollectionStore(session_factory, channel=channel)
    seen_by_reader, seen_by_writer = [], []
    reader.subscribe(lambda key, value: seen_by_reader.append((key, value)))
    writer.subscribe(lambda key, value: seen_by_writer.append((key, value)))

    writer.write("sidebarCollapsed", True)

    assert seen_by_reader == [("sidebarCollapsed", True)]
    assert seen_by_writer == []
    # both stores see the same persisted value
    assert reader.read("sidebarCollapsed") is True


def test_unsubscribe_stops_notifications(session_factory, channel):
    writer = CollectionStore(session_factory, channel=channel)
    reader = CollectionStore(session_factory, channel=channel)
    seen = []

    def listener(key, value):
        seen.append(key)

    reader.subscribe(listener)
    writer.write("a", 1)
    reader.unsubscribe(listener)
    writer.write("b", 2)
    assert seen == ["a"]
