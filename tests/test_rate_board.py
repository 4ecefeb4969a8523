from datetime import datetime, timezone

import pytest

from conftest import FakeRateService, FakeTimer
from nbp_widget.models import ExchangeRateTable
from nbp_widget.services import NO_RATES_MESSAGE, NoRatesForDateError, RateBoard, RateServiceError


def _board(service, **kwargs):
    kwargs.setdefault("timer_factory", FakeTimer)
    kwargs.setdefault("discard_stale", False)
    kwargs.setdefault("copy_badge_ms", 1500)
    return RateBoard(service=service, date="2024-01-02", **kwargs)


def _other_table(date):
    return ExchangeRateTable(table="A", no=f"X/{date}", effective_date=date, rates=[])


def test_defaults_to_today_utc():
    board = RateBoard(service=FakeRateService(), timer_factory=FakeTimer)

    assert board.date == datetime.now(timezone.utc).date().isoformat()
    assert board.table is None
    assert board.loading is False
    assert board.error is None


def test_select_date_fetches_and_stores_table(table):
    service = FakeRateService({"2024-01-02": table})
    board = _board(service)

    board.select_date(" 2024-01-02 ")

    assert service.calls == ["2024-01-02"]
    assert board.date == "2024-01-02"
    assert board.table is table
    assert board.error is None
    assert board.loading is False


def test_loading_flag_is_set_during_fetch(table):
    seen = []
    board = None

    def observe():
        seen.append(board.loading)
        return table

    board = _board(FakeRateService({"2024-01-02": observe}))
    board.fetch_rates("2024-01-02")

    assert seen == [True]
    assert board.loading is False


def test_error_keeps_previous_table(table):
    service = FakeRateService(
        {"2024-01-02": table, "2024-01-06": NoRatesForDateError("2024-01-06", 404)}
    )
    board = _board(service)

    board.select_date("2024-01-02")
    board.select_date("2024-01-06")

    assert board.error == NO_RATES_MESSAGE
    assert board.table is table
    assert board.date == "2024-01-06"
    assert board.snapshot()["table"]["effectiveDate"] == "2024-01-02"


def test_successful_fetch_clears_previous_error(table):
    service = FakeRateService(
        {"2024-01-06": NoRatesForDateError("2024-01-06"), "2024-01-02": table}
    )
    board = _board(service)

    board.select_date("2024-01-06")
    board.select_date("2024-01-02")

    assert board.error is None
    assert board.table is table


def test_service_error_message_is_shown():
    board = _board(FakeRateService({"2024-01-02": RateServiceError("Connection refused")}))

    board.fetch_rates("2024-01-02")

    assert board.error == "Connection refused"
    assert board.loading is False


def test_unexpected_error_without_message_uses_generic_text():
    board = _board(FakeRateService({"2024-01-02": KeyError()}))

    board.fetch_rates("2024-01-02")

    assert board.error == "Failed to fetch rates"


def test_last_resolved_response_wins_by_default(table):
    board = None
    late = _other_table("2024-01-03")

    def slow_first():
        # A second date change resolves while the first request is in flight.
        board.select_date("2024-01-03")
        return table

    board = _board(FakeRateService({"2024-01-02": slow_first, "2024-01-03": late}))
    board.select_date("2024-01-02")

    assert board.date == "2024-01-03"
    assert board.table is table


def test_discard_stale_keeps_latest_request(table):
    board = None
    late = _other_table("2024-01-03")

    def slow_first():
        board.select_date("2024-01-03")
        return table

    board = _board(
        FakeRateService({"2024-01-02": slow_first, "2024-01-03": late}), discard_stale=True
    )
    board.select_date("2024-01-02")

    assert board.table is late
    assert board.loading is False


def test_discard_stale_drops_superseded_error(table):
    board = None

    def failing_first():
        board.select_date("2024-01-03")
        raise NoRatesForDateError("2024-01-06")

    board = _board(
        FakeRateService({"2024-01-06": failing_first, "2024-01-03": table}), discard_stale=True
    )
    board.select_date("2024-01-06")

    assert board.error is None
    assert board.table is table


def test_snapshot_rates_sorted_and_formatted(table):
    board = _board(FakeRateService({"2024-01-02": table}))
    board.fetch_rates("2024-01-02")

    rows = board.snapshot()["table"]["rates"]

    assert [row["code"] for row in rows] == ["EUR", "USD", "GBP", "CHF", "THB", "AUD", "JPY"]
    assert rows[0]["formatted"] == "4,3434"
    assert rows[0]["priority"] is True
    assert rows[-1]["formatted"] == "0,0279"
    assert rows[-1]["priority"] is False


def test_snapshot_without_table():
    assert _board(FakeRateService()).snapshot()["table"] is None


def test_copy_writes_clipboard_and_shows_badge():
    copied = []
    board = _board(FakeRateService(), clipboard=copied.append)

    text = board.copy_rate(4.2137)

    assert text == "4,2137"
    assert copied == ["4,2137"]
    assert board.copied_rate == "4,2137"

    timer = FakeTimer.instances[-1]
    assert timer.interval == pytest.approx(1.5)
    assert timer.started
    assert timer.daemon


def test_badge_clears_when_timer_fires():
    board = _board(FakeRateService())
    board.copy_rate(4.2137)

    FakeTimer.instances[-1].fire()

    assert board.copied_rate is None


def test_second_copy_rearms_timer():
    board = _board(FakeRateService())

    board.copy_rate(4.2137)
    board.copy_rate(3.9432)

    first, second = FakeTimer.instances
    assert first.cancelled
    assert not second.cancelled
    assert board.copied_rate == "3,9432"

    first.fire()
    assert board.copied_rate == "3,9432"
    second.fire()
    assert board.copied_rate is None


def test_old_timer_firing_after_cancel_keeps_new_badge():
    board = _board(FakeRateService())

    board.copy_rate(4.2137)
    board.copy_rate(3.9432)

    # threading.Timer.cancel() cannot stop a callback that is already running.
    first, second = FakeTimer.instances
    first.function()

    assert board.copied_rate == "3,9432"
    assert board.snapshot()["copied"] == "3,9432"

    second.function()
    assert board.copied_rate is None


def test_clipboard_failure_still_shows_badge():
    def broken(text):
        raise OSError("clipboard unavailable")

    board = _board(FakeRateService(), clipboard=broken)

    assert board.copy_rate(1.0) == "1,0000"
    assert board.copied_rate == "1,0000"


def test_snapshot_marks_copied_row(table):
    board = _board(FakeRateService({"2024-01-02": table}))
    board.fetch_rates("2024-01-02")
    board.copy_rate(4.3434)

    snapshot = board.snapshot()

    assert snapshot["copied"] == "4,3434"
    assert snapshot["copy_badge_ms"] == 1500
    copied_rows = [row["code"] for row in snapshot["table"]["rates"] if row["copied"]]
    assert copied_rows == ["EUR"]
