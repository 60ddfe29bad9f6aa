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


""" HTTP collaborator interface and its urllib3 implementation.

The resource clients need only one thing from the network: issue a
request of a given method to an absolute URI, optionally with a JSON
body, and hand back the status code and the body. That contract is
captured by :class:`.Transport`; :class:`.HTTPTransport` fulfils it
using a urllib3 pool manager.
"""


from asyncio import get_running_loop
from functools import partial
from json import dumps as json_dumps, loads as json_loads
from logging import getLogger

from urllib3 import PoolManager, Timeout, make_headers
from urllib3.exceptions import HTTPError

from neosimple.config import ServiceProfile
from neosimple.errors import InvalidArgument, MalformedResponse, ServiceUnreachable, \
    UnexpectedStatus
from neosimple.meta import http_user_agent


__all__ = ["OK", "CREATED", "NO_CONTENT", "NOT_FOUND", "CONFLICT",
           "Response", "Transport", "HTTPTransport"]


log = getLogger(__name__)


OK = 200
CREATED = 201
NO_CONTENT = 204
NOT_FOUND = 404
CONFLICT = 409

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


class Response(object):
    """ Status and body of a completed HTTP exchange.
    """

    def __init__(self, method, uri, status, data=b"", headers=None):
        self.method = method
        self.uri = uri
        self.status = status
        self.data = data or b""
        self.headers = dict(headers or {})

    def __repr__(self):
        return "<Response %s %s status=%r>" % (self.method, self.uri, self.status)

    @property
    def content(self):
        """ The decoded JSON body, or :const:`None` if the body is
        empty.

        :raises MalformedResponse: if the body is not valid JSON
        """
        if not self.data:
            return None
        try:
            text = self.data.decode("utf-8")
            return json_loads(text)
        except ValueError as error:
            raise MalformedResponse("Response to %s %s is not valid "
                                    "JSON" % (self.method, self.uri)) from error

    def status_error(self):
        """ Build an :class:`.UnexpectedStatus` error describing this
        response, including any error document sent by the server.
        """
        try:
            content = self.content
        except MalformedResponse:
            content = None
        return UnexpectedStatus.hydrate(self.method, self.uri, self.status, content)


class Transport(object):
    """ Minimal interface for issuing JSON requests. Subclasses
    implement :meth:`.request`.
    """

    async def request(self, method, uri, body=None):
        """ Send a request and return a :class:`.Response`.

        :param method: HTTP method name
        :param uri: absolute URI of the target resource
        :param body: JSON-serialisable request body, or :const:`None`
        :raises ServiceUnreachable: if the request could not be completed
        """
        raise NotImplementedError

    async def close(self):
        pass

    @staticmethod
    def encode(body):
        """ Encode a request body as UTF-8 JSON.

        :raises InvalidArgument: if the body cannot be represented as JSON
        """
        if body is None:
            return None
        try:
            return json_dumps(body, ensure_ascii=False, separators=(",", ":"),
                              allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as error:
            raise InvalidArgument("Request body cannot be encoded as "
                                  "JSON: %s" % error) from error


class HTTPTransport(Transport):
    """ Transport backed by a urllib3 :class:`urllib3.PoolManager`.

    urllib3 performs blocking I/O, so each request runs in the event
    loop's default executor; several requests may therefore be in
    flight at once. Redirects are not followed and no request is ever
    retried.

    :param profile: a :class:`.ServiceProfile`, URI string, mapping or
        :const:`None`
    :param user_agent: overrides the default ``User-Agent`` header
    :param timeout: request timeout in seconds, or :const:`None` to
        wait indefinitely
    :param settings: individual profile overrides
    """

    def __init__(self, profile=None, user_agent=None, timeout=None, **settings):
        self.profile = ServiceProfile(profile, **settings)
        self.headers = {
            "Accept": "application/json",
            "User-Agent": user_agent or http_user_agent(),
        }
        if self.profile.auth:
            self.headers.update(make_headers(basic_auth=":".join(self.profile.auth)))
        self.http_pool = self._make_pool(self.profile, timeout)

    @staticmethod
    def _make_pool(profile, timeout):
        if timeout is None:
            timeout = Timeout.DEFAULT_TIMEOUT
        if profile.secure:
            from ssl import CERT_NONE, CERT_REQUIRED
            from certifi import where as cert_where
            return PoolManager(
                cert_reqs=CERT_REQUIRED if profile.verify else CERT_NONE,
                ca_certs=cert_where(),
                timeout=timeout,
            )
        else:
            return PoolManager(timeout=timeout)

    async def request(self, method, uri, body=None):
        data = self.encode(body)
        loop = get_running_loop()
        return await loop.run_in_executor(None, partial(self._request, method, uri, data))

    def _request(self, method, uri, data):
        headers = dict(self.headers)
        if data is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        log.debug("C: %s %s", method, uri)
        try:
            r = self.http_pool.request(method, uri, body=data, headers=headers,
                                       redirect=False, retries=False)
        except HTTPError as error:
            log.debug("C: %s %s failed (%s)", method, uri, error)
            raise ServiceUnreachable("HTTP %s %s failed: %s" % (method, uri, error),
                                     uri) from error
        log.debug("S: %d %s", r.status, uri)
        return Response(method, uri, r.status, r.data, r.headers)

    async def close(self):
        self.http_pool.clear()
