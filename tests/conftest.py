import pytest

from nbp_widget.models import ExchangeRateTable


# Trimmed copy of table A for 2024-01-02, in the order the API returns it.
TABLE_PAYLOAD = {
    "table": "A",
    "no": "001/A/NBP/2024",
    "effectiveDate": "2024-01-02",
    "rates": [
        {"currency": "bat (Tajlandia)", "code": "THB", "mid": 0.1155},
        {"currency": "dolar amerykański", "code": "USD", "mid": 3.9432},
        {"currency": "dolar australijski", "code": "AUD", "mid": 2.6819},
        {"currency": "euro", "code": "EUR", "mid": 4.3434},
        {"currency": "frank szwajcarski", "code": "CHF", "mid": 4.6806},
        {"currency": "funt szterling", "code": "GBP", "mid": 5.0118},
        {"currency": "jen (Japonia)", "code": "JPY", "mid": 0.027856},
    ],
}


class FakeTimer:
    """Stand-in for ``threading.Timer`` that only fires when told to."""

    instances = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.instances.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


class FakeRateService:
    """Returns canned tables or raises canned errors keyed by date."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def get_table(self, date):
        self.calls.append(date)
        outcome = self.responses[date]
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome()
        return outcome


@pytest.fixture
def table_payload():
    return {**TABLE_PAYLOAD, "rates": [dict(rate) for rate in TABLE_PAYLOAD["rates"]]}


@pytest.fixture
def table(table_payload):
    return ExchangeRateTable.from_payload(table_payload)


@pytest.fixture(autouse=True)
def reset_fake_timers():
    FakeTimer.instances = []
    yield
    FakeTimer.instances = []
