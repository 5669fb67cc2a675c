from http import HTTPStatus
from typing import Dict

import pytest
from http_contract import (
    DecodeError,
    Mismatch,
    NotSupported,
    Slot,
    StatusCodeMismatch,
    Undefined,
    join,
    recv,
    send,
)
from tests.helpers.models import Account, Login, Site, Tagged

# --- code ---


def test_code_ok(mock_io):
    site = Slot(Site)
    pipeline = join(
        send.get("http://example.com/json"),
        send.accept_json(),
        recv.code(HTTPStatus.OK),
        recv.served_json(),
        recv.recv(site),
    )

    context = pipeline(mock_io())

    assert context.failure is None
    assert site.value.site == "example.com"


def test_code_no_match(mock_io):
    pipeline = join(
        send.get("http://example.com/other"),
        send.accept_json(),
        recv.code(200),
    )

    context = pipeline(mock_io())

    assert isinstance(context.failure, StatusCodeMismatch)
    assert isinstance(context.failure, Mismatch)
    assert context.failure.actual == 400
    assert context.failure.expected == (200,)
    assert "400" in str(context.failure) and "200" in str(context.failure)


def test_code_accepts_any_of_expected(mock_io):
    context = join(send.get("http://example.com/other"), recv.code(200, 201, 400))(mock_io())

    assert context.failure is None


def test_code_mismatch_stops_pipeline(service, mock_io):
    site = Slot(Site)
    pipeline = join(
        send.get("http://example.com/other"),
        recv.code(200),
        recv.served_json(),
        recv.recv(site),
    )

    context = pipeline(mock_io())

    assert isinstance(context.failure, StatusCodeMismatch)
    assert not site.is_set
    assert context.decoder is None
    assert service.calls == 1


# --- header ---


def test_header_is(mock_io):
    pipeline = join(
        send.get("http://example.com/json"),
        recv.code(200),
        recv.header("Content-Type").is_("application/json"),
    )

    assert pipeline(mock_io()).failure is None


def test_header_mismatch(mock_io):
    pipeline = join(
        send.get("http://example.com/json"),
        recv.code(200),
        recv.header("content-type").is_("foo/bar"),
    )

    context = pipeline(mock_io())

    assert isinstance(context.failure, Mismatch)
    assert context.failure.payload == "application/json"
    assert "foo/bar" in context.failure.diff


def test_header_is_missing(mock_io):
    context = join(send.get("http://example.com/json"), recv.header("x-missing").is_("1"))(mock_io())

    assert isinstance(context.failure, Mismatch)


def test_header_any(mock_io):
    context = join(send.get("http://example.com/json"), recv.header("CONTENT-TYPE").any())(mock_io())

    assert context.failure is None


def test_header_any_undefined(mock_io):
    pipeline = join(
        send.get("http://example.com/json"),
        send.accept_json(),
        recv.code(200),
        recv.header("x-content-type").any(),
    )

    context = pipeline(mock_io())

    assert isinstance(context.failure, Undefined)
    assert context.failure.type == "x-content-type"
    assert "x-content-type" in str(context.failure)


def test_header_string(mock_io):
    content = Slot()
    pipeline = join(
        send.get("http://example.com/json"),
        recv.code(200),
        recv.header("content-type").string(content),
    )

    context = pipeline(mock_io())

    assert context.failure is None
    assert content.value == "application/json"


def test_header_string_undefined_leaves_slot_unset(mock_io):
    value = Slot()
    context = join(send.get("http://example.com/json"), recv.header("x-request-id").string(value))(mock_io())

    assert isinstance(context.failure, Undefined)
    assert not value.is_set


def test_request_and_response_header_bindings_agree(mock_io):
    pipeline = join(
        send.post("http://example.com/echo"),
        send.header("Content-Type").is_("application/json"),
        send.send({"a": 1}),
        recv.code(200),
        recv.header("content-type").any(),
        recv.header("Content-Type").is_("application/json"),
    )

    assert pipeline(mock_io()).failure is None


# --- served ---


def test_served_json_mismatch(mock_io):
    context = join(send.get("http://example.com/form"), recv.served_json())(mock_io())

    assert isinstance(context.failure, Mismatch)
    assert context.failure.payload == "application/x-www-form-urlencoded"


def test_served_form_mismatch(mock_io):
    context = join(send.get("http://example.com/json"), recv.served_form())(mock_io())

    assert isinstance(context.failure, Mismatch)


def test_served_without_content_type(mock_io):
    pipeline = join(send.get("http://example.com/echo"), recv.served().json())

    context = pipeline(mock_io())

    assert isinstance(context.failure, Undefined)
    assert context.failure.type == "content-type"


def test_served_any_accepts_anything(mock_io):
    body = Slot(bytes)
    pipeline = join(
        send.get("http://example.com/text"),
        recv.code(200),
        recv.served().any(),
        recv.recv_bytes(body),
    )

    context = pipeline(mock_io())

    assert context.failure is None
    assert context.decoder == "any"
    assert body.value == b"hello"


# --- recv ---


def test_recv_form(mock_io):
    site = Slot(Site)
    pipeline = join(
        send.get("http://example.com/form"),
        recv.code(200),
        recv.served_form(),
        recv.recv(site),
    )

    context = pipeline(mock_io())

    assert context.failure is None
    assert site.value == Site(site="example.com")


def test_recv_infers_decoder_from_content_type(mock_io):
    site = Slot(Dict[str, str])
    context = join(send.get("http://example.com/json"), recv.recv(site))(mock_io())

    assert context.failure is None
    assert site.value == {"site": "example.com"}


def test_recv_after_served_any_is_not_supported(mock_io):
    site = Slot(Site)
    pipeline = join(send.get("http://example.com/json"), recv.served().any(), recv.recv(site))

    context = pipeline(mock_io())

    assert isinstance(context.failure, NotSupported)
    assert not site.is_set


def test_recv_unknown_content_type(mock_io):
    context = join(send.get("http://example.com/text"), recv.recv(Slot(str)))(mock_io())

    assert isinstance(context.failure, NotSupported)
    assert "text/plain" in str(context.failure)


def test_recv_malformed_json(mock_io):
    site = Slot(Site)
    pipeline = join(send.get("http://example.com/broken"), recv.served_json(), recv.recv(site))

    context = pipeline(mock_io())

    assert isinstance(context.failure, DecodeError)
    assert not site.is_set


def test_recv_shape_mismatch(mock_io):
    account = Slot(Account)
    pipeline = join(send.get("http://example.com/json"), recv.served_json(), recv.recv(account))

    context = pipeline(mock_io())

    assert isinstance(context.failure, DecodeError)
    assert not account.is_set


def test_recv_bytes_without_served(mock_io):
    body = Slot(bytes)
    context = join(send.get("http://example.com/json"), recv.recv_bytes(body))(mock_io())

    assert context.failure is None
    assert body.value == b'{"site":"example.com"}'


# --- round trips against the echo endpoint ---


@pytest.mark.parametrize(
    "value",
    [
        Site(site="example.com"),
        Tagged(tags=["a", "b"]),
        Account(userName="ann", age=42),
    ],
)
def test_json_round_trip(mock_io, value):
    target = Slot(type(value))
    pipeline = join(
        send.post("http://example.com/echo"),
        send.content_json(),
        send.send(value),
        recv.code(200),
        recv.served_json(),
        recv.recv(target),
    )

    context = pipeline(mock_io())

    assert context.failure is None
    assert target.value == value


def test_form_round_trip(mock_io, service):
    target = Slot(Login)
    pipeline = join(
        send.put("http://example.com/echo"),
        send.content_form(),
        send.send(Login(user="ann", password="p@ss word&more")),
        recv.code(200),
        recv.header("x-request-method").is_("PUT"),
        recv.served_form(),
        recv.recv(target),
    )

    context = pipeline(mock_io())

    assert context.failure is None
    assert target.value == Login(user="ann", password="p@ss word&more")
    assert service.calls == 1


def test_query_params_reach_the_service(mock_io):
    received = Slot(Dict[str, str])
    pipeline = join(
        send.get("http://example.com/query?page=2"),
        send.params({"q": "a b"}),
        recv.code(200),
        recv.served_json(),
        recv.recv(received),
    )

    context = pipeline(mock_io())

    assert context.failure is None
    assert received.value == {"page": "2", "q": "a b"}
