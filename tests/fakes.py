"""Stand-ins for the HTTP layer used by the generator and the job fetcher."""

import json

import requests


class FakeResponse:
    """Just enough of requests.Response for the generator and the job fetcher."""

    def __init__(self, status_code=200, body="", content_type="application/json"):
        self.status_code = status_code
        self.text = body
        self.headers = {"Content-Type": content_type} if content_type else {}

    @classmethod
    def json_body(cls, payload, status_code=200):
        return cls(status_code=status_code, body=json.dumps(payload))

    @classmethod
    def html(cls, body, status_code=200):
        return cls(status_code=status_code, body=body, content_type="text/html")

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeHttp:
    """Records calls; answers with a canned response or raises a canned error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def _answer(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def post(self, url, **kwargs):
        return self._answer("POST", url, kwargs)

    def get(self, url, **kwargs):
        return self._answer("GET", url, kwargs)
