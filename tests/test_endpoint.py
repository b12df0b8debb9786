import pytest

from kool.api_errors import ApiResponseError, MissingTokenError, UnexpectedResponseError
from kool.endpoint import DEFAULT_BASE_URL, FORM_CONTENT_TYPE, Endpoint, set_base_url


class FakeResponse:
    def __init__(self, status_code=200, content=b"", read_error=None):
        self.status_code = status_code
        self._content = content
        self._read_error = read_error
        self.closed = False

    @property
    def content(self):
        if self._read_error is not None:
            raise self._read_error
        return self._content

    def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, data=None, headers=None):
        self.calls.append({"method": method, "url": url, "data": data, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def base_url():
    set_base_url("base-url")
    yield "base-url"
    set_base_url(DEFAULT_BASE_URL)


def make_endpoint(method, session, token=True):
    env = {"KOOL_API_TOKEN": "token"} if token else {}
    return Endpoint(method, env=env, session=session)


def test_new_endpoint_defaults():
    e = Endpoint("GET", env={}, session=FakeSession())
    assert e.method == "GET"
    assert e.path == ""
    assert e.content_type == ""
    assert e.raw_body is None
    assert e.status_code == 0
    assert e.query == {}


def test_body_is_created_on_access_and_kept():
    e = Endpoint("POST", env={}, session=FakeSession())
    e.body["foo"] = "bar"
    e.body["foo2"] = "bar2"
    assert e.body == {"foo": "bar", "foo2": "bar2"}


def test_missing_token():
    session = FakeSession(response=FakeResponse(200, b"{}"))
    e = make_endpoint("GET", session, token=False)
    with pytest.raises(MissingTokenError):
        e.do_call()
    assert session.calls == []


def test_request_headers_and_http_error():
    session = FakeSession(error=ConnectionError("fake http error"))
    e = make_endpoint("GET", session)
    with pytest.raises(ConnectionError, match="fake http error"):
        e.do_call()
    headers = session.calls[0]["headers"]
    assert headers["Accept"] == "application/json"
    assert headers["Authorization"] == "Bearer token"


def test_do_call_get_url_and_content_type(base_url):
    session = FakeSession(error=ConnectionError("fake http error"))
    e = make_endpoint("GET", session)
    e.content_type = "content-type"
    e.path = "path"
    e.query["foo"] = "bar"
    with pytest.raises(ConnectionError):
        e.do_call()
    call = session.calls[0]
    assert call["url"] == "base-url/path?foo=bar"
    assert call["method"] == "GET"
    assert call["headers"]["Content-Type"] == "content-type"
    assert call["data"] is None


def test_do_call_bad_json_on_success():
    session = FakeSession(response=FakeResponse(200, b"test bad response"))
    e = make_endpoint("GET", session)
    with pytest.raises(UnexpectedResponseError, match="parse error"):
        e.do_call()
    assert e.status_code == 200


def test_do_call_bad_json_on_error_status():
    session = FakeSession(response=FakeResponse(400, b"still bad response"))
    e = make_endpoint("GET", session)
    with pytest.raises(UnexpectedResponseError, match="parse error"):
        e.do_call()
    assert e.status_code == 400


def test_do_call_api_error_message():
    session = FakeSession(response=FakeResponse(403, b'{"message":"err-message"}'))
    e = make_endpoint("GET", session)
    with pytest.raises(ApiResponseError, match="err-message") as info:
        e.do_call()
    assert info.value.status == 403
    assert e.status_code == 403


def test_do_call_success_verbose_closes_response(capsys):
    response = FakeResponse(200, b'{"foo":"bar"}')
    session = FakeSession(response=response)
    e = Endpoint(
        "GET",
        env={"KOOL_API_TOKEN": "token", "KOOL_VERBOSE": "1"},
        session=session,
    )
    assert e.do_call() == {"foo": "bar"}
    assert e.status_code == 200
    assert response.closed
    err = capsys.readouterr().err
    assert "api - calling URL:" in err
    assert "api - got response:" in err


def test_do_call_invalid_method():
    e = make_endpoint(" ", FakeSession())
    with pytest.raises(ValueError, match="invalid method"):
        e.do_call()


def test_do_call_read_body_error_closes_response():
    response = FakeResponse(200, read_error=OSError("read body error"))
    e = make_endpoint("GET", FakeSession(response=response))
    with pytest.raises(OSError, match="read body error"):
        e.do_call()
    assert response.closed


def test_empty_method_defaults_to_get():
    session = FakeSession(response=FakeResponse(200, b"{}"))
    e = make_endpoint("", session)
    assert e.do_call() == {}
    assert session.calls[0]["method"] == "GET"


def test_do_call_post_raw_body_then_form_body():
    session = FakeSession(response=FakeResponse(200, b'"response"'))
    e = make_endpoint("POST", session)
    e.raw_body = b""
    assert e.do_call() == "response"
    assert session.calls[0]["data"] == b""

    e.raw_body = None
    e.body["foo"] = "bar"
    assert e.do_call() == "response"
    assert e.content_type == FORM_CONTENT_TYPE
    assert session.calls[1]["data"] == "foo=bar"
    assert session.calls[1]["headers"]["Content-Type"] == FORM_CONTENT_TYPE


def test_post_without_body_sends_nothing():
    session = FakeSession(response=FakeResponse(200, b"{}"))
    e = make_endpoint("POST", session)
    e.do_call()
    assert session.calls[0]["data"] is None
    assert e.content_type == ""