from __future__ import annotations

import json

import httpx
import pytest

from tmapi.adapters.http_client import HttpDispatcher, build_url, redact_url
from tmapi.core.domain.command import CommandRequest
from tmapi.core.domain.query import Predicate
from tmapi.core.errors import ProtocolError, ResponseDecodeError


def test_base_url(connection) -> None:
    assert connection.base_url == "https://tm.example.com/admin/api/7"


def test_record_id_is_appended_without_separator(connection) -> None:
    url = build_url(connection, CommandRequest(resource="subscriber", command="GET", record_id="42"))
    assert url == "https://tm.example.com/admin/api/7/subscriber/42?_method=GET&auth=a%40b.com%7Cp"


def test_url_without_record_id_ends_resource_with_slash(connection) -> None:
    url = build_url(connection, CommandRequest(resource="list", command="GET"))
    assert url.startswith("https://tm.example.com/admin/api/7/list/?_method=GET&")


def test_query_and_parameters_order(connection) -> None:
    request = CommandRequest(
        resource="subscriber",
        command="GET",
        parameters={"sort key": "id", "limit": "100"},
        query=["email-eq-x@y.com", Predicate("id", "gt", 5), "id-gt-5"],
    )
    url = build_url(connection, request)
    assert url.endswith(
        "?_method=GET&auth=a%40b.com%7Cp"
        "&query=email-eq-x%40y.com&query=id-gt-5&query=id-gt-5"
        "&sort%20key=id&limit=100"
    )


def test_parameter_values_are_not_escaped(connection) -> None:
    url = build_url(connection, CommandRequest(resource="list", command="GET", parameters={"sort": "a:b"}))
    assert url.endswith("&sort=a:b")


@pytest.mark.parametrize(
    ("command", "method"),
    [
        ("GET", "GET"),
        ("PUT", "POST"),
        ("POST", "POST"),
        ("CREATEORUPDATE", "POST"),
        ("TRIGGER", "POST"),
        ("get", "POST"),
    ],
)
def test_http_method_from_literal_verb(dispatcher, stub, command, method) -> None:
    dispatcher.dispatch(CommandRequest(resource="activity", command=command, record_id="1"))
    assert len(stub.requests) == 1
    assert stub.last.method == method
    assert stub.last.url.params["_method"] == command


def test_auth_parameter_decodes_to_credentials(dispatcher, stub) -> None:
    dispatcher.dispatch(CommandRequest(resource="list", command="GET"))
    assert stub.last.url.params["auth"] == "a@b.com|p"


def test_predicates_arrive_in_order(dispatcher, stub) -> None:
    predicates = ["email-like-%@y.com", "id-gt-5", "id-gt-5"]
    dispatcher.dispatch(CommandRequest(resource="subscriber", command="GET", query=predicates))
    assert stub.last.url.params.get_list("query") == predicates


def test_headers_without_body(dispatcher, stub, settings) -> None:
    dispatcher.dispatch(CommandRequest(resource="list", command="GET"))
    request = stub.last
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"] == settings.user_agent
    assert request.headers["Authorization"].startswith("Basic ")
    assert "Content-Type" not in request.headers
    assert request.content == b""
    assert request.extensions["timeout"]["read"] == 60.0


def test_body_sets_json_content_type_and_byte_length(dispatcher, stub) -> None:
    body = '[{"firstname":"Zoë"}]'
    dispatcher.dispatch(CommandRequest(resource="subscriber", command="PUT", record_id="42", body=body))
    request = stub.last
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Content-Length"] == str(len(body.encode("utf-8")))
    assert request.content == body.encode("utf-8")


def test_empty_body_is_not_sent(dispatcher, stub) -> None:
    dispatcher.dispatch(CommandRequest(resource="activity", command="QUEUE", record_id="1", body=""))
    assert "Content-Type" not in stub.last.headers


def test_list_fetch_returns_body_verbatim(dispatcher, stub) -> None:
    stub.body = '[{"id":1,"name":"A"}]'
    text = dispatcher.dispatch(
        CommandRequest(
            resource="list",
            command="GET",
            parameters={"sort": "id", "order": "asc", "offset": "0", "limit": "100"},
        )
    )
    assert text == '[{"id":1,"name":"A"}]'
    assert stub.last.method == "GET"
    assert stub.last.url.path == "/admin/api/7/list/"


def test_create_or_update_posts_body(dispatcher, stub) -> None:
    stub.body = '[{"id":9,"email":"x@y.com"}]'
    body = '[{"email":"x@y.com"}]'
    text = dispatcher.dispatch(CommandRequest(resource="subscriber", command="CREATEORUPDATE", body=body))
    assert stub.last.method == "POST"
    assert stub.last.content == body.encode("utf-8")
    assert text == '[{"id":9,"email":"x@y.com"}]'


def test_non_success_status_raises_protocol_error(dispatcher, stub) -> None:
    stub.status_code = 404
    stub.body = json.dumps({"error": "not found"})
    with pytest.raises(ProtocolError) as info:
        dispatcher.dispatch(CommandRequest(resource="subscriber", command="GET", record_id="1"))
    assert info.value.status_code == 404
    assert info.value.body == '{"error": "not found"}'
    assert info.value.resource == "subscriber"
    assert info.value.command == "GET"


def test_invalid_utf8_raises_decode_error(dispatcher, stub) -> None:
    stub.body = b"\xff\xfe\xfa"
    with pytest.raises(ResponseDecodeError):
        dispatcher.dispatch(CommandRequest(resource="list", command="GET"))


def test_transport_errors_propagate_unmodified(connection, settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    dispatcher = HttpDispatcher(connection, settings, client=client)
    with pytest.raises(httpx.ConnectError):
        dispatcher.dispatch(CommandRequest(resource="list", command="GET"))
    client.close()


def test_redact_url_hides_credentials() -> None:
    url = "https://h/admin/api/1/list/?_method=GET&auth=a%40b.com%7Cp&limit=1"
    assert redact_url(url) == "https://h/admin/api/1/list/?_method=GET&auth=***&limit=1"


def test_hash_in_parameter_value_truncates_query(connection, dispatcher, stub) -> None:
    request = CommandRequest(resource="list", command="GET", parameters={"sort": "a#b", "limit": "5"})
    assert build_url(connection, request).endswith("&sort=a#b&limit=5")
    dispatcher.dispatch(request)
    params = stub.last.url.params
    assert params["sort"] == "a"
    assert "limit" not in params
