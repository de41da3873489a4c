"""Shared fixtures: a DomeClient wired to canned HTTP responses"""
import httpx
import pytest

from dome_api import DomeClient
from dome_api.config import Config

BASE_URL = "https://api.test/v1"
WALLET = "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb0"


class StubbedAPI:
    """Answers requests from a queue of (status, body) pairs and records them"""

    def __init__(self):
        self.requests = []
        self.responses = []

    def reply(self, body=None, status=200):
        self.responses.append((status, body))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.responses.pop(0) if self.responses else (200, {})
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body or "")

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_params(self) -> httpx.QueryParams:
        return self.last_request.url.params


@pytest.fixture
def stub():
    return StubbedAPI()


@pytest.fixture
def client(stub):
    dome = DomeClient(
        api_key="test_api_key",
        base_url=BASE_URL,
        transport=httpx.MockTransport(stub.handler),
    )
    yield dome
    dome.close()


@pytest.fixture
def no_configured_key(monkeypatch):
    """Make sure a DOME_API_KEY from the environment cannot leak into a test"""
    monkeypatch.setattr(Config, "DOME_API_KEY", None)


@pytest.fixture
def pnl_payload():
    """Five daily points: 10.00 -> 15.00 -> 12.00 -> 8.00 -> 20.00 dollars"""
    return {
        "granularity": "day",
        "start_time": 1726857600,
        "end_time": 1727203200,
        "wallet_address": WALLET,
        "pnl_over_time": [
            {"timestamp": 1726857600, "pnl_to_date": 1000},
            {"timestamp": 1726944000, "pnl_to_date": 1500},
            {"timestamp": 1727030400, "pnl_to_date": 1200},
            {"timestamp": 1727116800, "pnl_to_date": 800},
            {"timestamp": 1727203200, "pnl_to_date": 2000},
        ],
    }


@pytest.fixture
def candlestick_payload():
    """Wire shape: list of [candlestick_array, token_metadata] pairs"""
    return {
        "candlesticks": [
            [
                [
                    {
                        "end_period_ts": 1727827200,
                        "open_interest": 8456498,
                        "volume": 8346,
                        "price": {
                            "open": 0.0048,
                            "high": 0.0049,
                            "low": 0.0048,
                            "close": 0.0049,
                            "mean": 0.00485,
                            "previous": 0.0047,
                            "close_dollars": "0.0049",
                        },
                        "yes_ask": {"open": 0.00489, "close": 0.00482, "high": 0.0049, "low": 0.0048},
                        "yes_bid": {"open": 0.0047, "close": 0.0047, "high": 0.0048, "low": 0.0046},
                    },
                    {
                        "end_period_ts": 1727913600,
                        "open_interest": 8460000,
                        "volume": 1654,
                        "price": {"open": 0.0049, "high": 0.0052, "low": 0.0047, "close": 0.0051},
                    },
                ],
                {"token_id": "21742633143463906290569050155826241533067272736897614950488156847949938836455"},
            ]
        ]
    }
