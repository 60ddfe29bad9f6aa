#!/usr/bin/env python
# -*- encoding: utf-8 -*-

# Copyright 2011-2021, Nigel Small
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


from base64 import b64encode
from json import loads as json_loads

from pytest import mark, raises
from urllib3.exceptions import HTTPError, NewConnectionError

from neosimple.errors import InvalidArgument, MalformedResponse, NotFound, ServiceUnreachable
from neosimple.http import Response, Transport, HTTPTransport


class FakePoolResponse(object):

    def __init__(self, status, data=b"", headers=None):
        self.status = status
        self.data = data
        self.headers = headers or {}


class RecordingPool(object):

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def clear(self):
        pass


def test_response_content():
    response = Response("GET", "http://x/", 200, b'{"a": [1, 2]}')
    assert response.content == {"a": [1, 2]}


def test_response_with_empty_body_has_no_content():
    assert Response("DELETE", "http://x/", 204, b"").content is None
    assert Response("DELETE", "http://x/", 204, None).content is None


def test_response_with_invalid_json():
    response = Response("GET", "http://x/", 200, b"<html>")
    with raises(MalformedResponse):
        _ = response.content


def test_response_with_invalid_utf8():
    response = Response("GET", "http://x/", 200, b"\xff\xfe")
    with raises(MalformedResponse):
        _ = response.content


def test_status_error_uses_error_document():
    response = Response("GET", "http://x/node/5", 404, b'{"message": "Node 5 not found"}')
    error = response.status_error()
    assert isinstance(error, NotFound)
    assert error.message == "Node 5 not found"


def test_status_error_with_unparseable_body():
    response = Response("GET", "http://x/node/5", 500, b"Internal Server Error")
    error = response.status_error()
    assert error.status_code == 500
    assert "500" in error.message


def test_encode_body():
    assert Transport.encode(None) is None
    assert json_loads(Transport.encode({"name": "Zoë"}).decode("utf-8")) == {"name": "Zoë"}


@mark.parametrize("body", [{"x": object()}, {"x": float("nan")}, {"x": {1, 2}}])
def test_encode_rejects_non_json_body(body):
    with raises(InvalidArgument):
        Transport.encode(body)


def test_default_headers():
    transport = HTTPTransport("http://localhost:7474")
    assert transport.headers["Accept"] == "application/json"
    assert transport.headers["User-Agent"].startswith("neosimple/")
    assert "authorization" not in {key.lower() for key in transport.headers}


def test_basic_auth_header():
    transport = HTTPTransport("http://localhost:7474", auth=("neo4j", "secret"))
    expected = "Basic " + b64encode(b"neo4j:secret").decode("ascii")
    assert transport.headers["authorization"] == expected


def test_custom_user_agent():
    transport = HTTPTransport("http://localhost:7474", user_agent="tester/1.0")
    assert transport.headers["User-Agent"] == "tester/1.0"


@mark.asyncio
async def test_get_request():
    transport = HTTPTransport("http://localhost:7474")
    transport.http_pool = pool = RecordingPool(FakePoolResponse(200, b'{"node": "x"}'))
    response = await transport.request("GET", "http://localhost:7474/db/data/")
    assert response.status == 200
    assert response.content == {"node": "x"}
    method, url, kwargs = pool.calls[0]
    assert method == "GET"
    assert url == "http://localhost:7474/db/data/"
    assert kwargs["body"] is None
    assert "Content-Type" not in kwargs["headers"]
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["retries"] is False
    assert kwargs["redirect"] is False


@mark.asyncio
async def test_post_request_sends_json():
    transport = HTTPTransport("http://localhost:7474")
    transport.http_pool = pool = RecordingPool(FakePoolResponse(201, b'{}'))
    await transport.request("POST", "http://localhost:7474/db/data/node", {"name": "Fred"})
    _, _, kwargs = pool.calls[0]
    assert json_loads(kwargs["body"].decode("utf-8")) == {"name": "Fred"}
    assert kwargs["headers"]["Content-Type"].startswith("application/json")


@mark.asyncio
async def test_transport_failure_is_service_unreachable():
    transport = HTTPTransport("http://localhost:7474")
    cause = NewConnectionError(None, "Connection refused")
    transport.http_pool = RecordingPool(error=cause)
    with raises(ServiceUnreachable) as e:
        await transport.request("GET", "http://localhost:7474/db/data/")
    assert e.value.__cause__ is cause
    assert e.value.uri == "http://localhost:7474/db/data/"


@mark.asyncio
async def test_generic_http_error_is_service_unreachable():
    transport = HTTPTransport("http://localhost:7474")
    transport.http_pool = RecordingPool(error=HTTPError("boom"))
    with raises(ServiceUnreachable):
        await transport.request("DELETE", "http://localhost:7474/db/data/node/1")


@mark.asyncio
async def test_unencodable_body_fails_before_sending():
    transport = HTTPTransport("http://localhost:7474")
    transport.http_pool = pool = RecordingPool(FakePoolResponse(201, b'{}'))
    with raises(InvalidArgument):
        await transport.request("POST", "http://localhost:7474/db/data/node", {"x": object()})
    assert pool.calls == []
