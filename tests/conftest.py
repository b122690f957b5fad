"""Pytest configuration and fixtures."""

import pytest
import requests

from rwisapi import WaterQuality


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text if text is not None else ""
        self.encoding = None

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeSession:
    """Records GET calls and answers with a canned response."""

    def __init__(self, response=None):
        self.response = response or FakeResponse(envelope([]))
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params,
                           "headers": headers, "timeout": timeout})
        return self.response


def envelope(items, code="00", message="NORMAL SERVICE."):
    return {
        "response": {
            "header": {"resultCode": code, "resultMsg": message},
            "body": {
                "items": {"item": items},
                "numOfRows": 10,
                "pageNo": 1,
                "totalCount": len(items),
            },
        }
    }


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return WaterQuality("test-key", session=session, timeout=5)


QUALITY_ITEMS = [
    {
        "no": "1",
        "occrrncDt": "2015111911",
        "fcltyMngNm": "연초정수장",
        "fcltyMngNo": "4831012331",
        "fcltyAddr": "경남 거제시 연초면",
        "liIndDivName": "공업",
        "clVal": "0.675",
        "phVal": "7.2742",
        "tbVal": "0.0387",
        "chgDt": "2015111911",
        "phUnit": "PH",
        "tbUnit": "NTU",
        "clUnit": "MG/L",
    },
    {
        "no": "2",
        "occrrncDt": "2015111912",
        "fcltyMngNm": "연초정수장",
        "fcltyMngNo": "4831012331",
        "fcltyAddr": "경남 거제시 연초면",
        "liIndDivName": "공업",
        "clVal": "0.66",
        "phVal": "7.25",
        "tbVal": "0.04",
        "chgDt": "2015111912",
        "phUnit": "PH",
        "tbUnit": "NTU",
        "clUnit": "MG/L",
    },
]


def quality_options(**overrides):
    options = {
        "stDt": "2017-08-31",
        "stTm": "00",
        "edDt": "2017-08-31",
        "edTm": "24",
        "fcltyMngNo": 4824012333,
        "sujNo": 333,
        "liIndDiv": 1,
        "numOfRows": 2,
        "pageNo": 1,
    }
    options.update(overrides)
    return options
