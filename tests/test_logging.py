import logging

from flashdeck.core.logging import DEFAULT_FORMAT, ContextFilter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "flashdeck.test", logging.INFO, __file__, 1, "Deck reshuffled", None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_filter_fills_missing_context():
    record = _record()
    assert ContextFilter().filter(record) is True
    assert record.deck_version == "-"
    assert record.source == "-"


def test_context_fields_appear_in_formatted_line():
    record = _record(deck_version=3, source="cards.xml")
    ContextFilter().filter(record)
    line = logging.Formatter(DEFAULT_FORMAT).format(record)
    assert "deck=3 src=cards.xml | Deck reshuffled" in line


def test_plain_record_formats_without_key_error():
    record = _record()
    ContextFilter().filter(record)
    line = logging.Formatter(DEFAULT_FORMAT).format(record)
    assert "deck=- src=- | Deck reshuffled" in line
