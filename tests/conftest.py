import pytest
import requests


class FakeResponse:
    def __init__(self, status_code=200, text="", payload=None):
        self.status_code = status_code
        self.text = text
        self.payload = payload

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON object could be decoded")
        return self.payload


def make_row(number, title, section, matthew="", mark="", luke="", john=""):
    return {
        "gsx$no.": {"$t": number},
        "gsx$pericope": {"$t": title},
        "gsx$section": {"$t": section},
        "gsx$matthew": {"$t": matthew},
        "gsx$mark": {"$t": mark},
        "gsx$luke": {"$t": luke},
        "gsx$john": {"$t": john},
    }


@pytest.fixture
def fake_get(monkeypatch):
    """
    Replaces requests.get. Register responses with `fake_get.routes`, a list
    of (url substring, FakeResponse) pairs; requested URLs land in `fake_get.urls`.
    """
    def get(url, *args, **kwargs):
        get.urls.append(url)
        for fragment, response in get.routes:
            if fragment in url:
                if isinstance(response, Exception):
                    raise response
                return response
        return FakeResponse(status_code=404)

    get.urls = []
    get.routes = []
    monkeypatch.setattr(requests, "get", get)
    return get
