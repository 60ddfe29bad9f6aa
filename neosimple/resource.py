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


from collections.abc import Mapping
from logging import getLogger

from neosimple.addressing import check_entity_id, join_uri
from neosimple.errors import ConsistencyViolation, MalformedReference, MalformedResponse, \
    ServiceUnreachable
from neosimple.http import OK, NO_CONTENT, Transport
from neosimple.result import Result


__all__ = ["ResourceClient", "EntityClient", "json_object", "json_list", "no_content",
           "check_round_trip"]


log = getLogger(__name__)


class ResourceClient(object):
    """ Base class for clients of a family of REST resources.

    Every operation follows the same pipeline, implemented once by
    :meth:`._call`: resolve the service root, build the target URI,
    issue one request, check the status code and extract a value
    from the response. Failures at any stage after argument checking
    are returned as a failed :class:`.Result`.
    """

    def __init__(self, transport, loader):
        self.transport = transport
        self.loader = loader

    def __repr__(self):
        return "<%s uri=%r>" % (self.__class__.__name__, self.loader.uri)

    async def _call(self, method, path, body=None, expected=(OK,), extract=None):
        """ Carry out a single request.

        :param method: HTTP method name
        :param path: function mapping the :class:`.ServiceRoot` to the
            target URI
        :param body: JSON-serialisable request body, or a function
            mapping the :class:`.ServiceRoot` to one
        :param expected: status code, or tuple of status codes,
            signalling success
        :param extract: function mapping the :class:`.Response` to the
            result value; if omitted, the value is :const:`None`
        :rtype: :class:`.Result`
        :raises InvalidArgument: if a non-callable `body` cannot be
            encoded as JSON; this is checked before any request is sent
        """
        if isinstance(expected, int):
            expected = (expected,)
        if not callable(body):
            Transport.encode(body)
        resolved = await self.loader.resolve()
        if not resolved:
            return resolved
        root = resolved.value
        uri = path(root)
        if callable(body):
            body = body(root)
        try:
            response = await self.transport.request(method, uri, body)
        except ServiceUnreachable as error:
            return self._failure(method, uri, error)
        if response.status not in expected:
            return self._failure(method, uri, response.status_error())
        if extract is None:
            return Result.success(None)
        try:
            return Result.success(extract(response))
        except (MalformedResponse, MalformedReference, ConsistencyViolation) as error:
            return self._failure(method, uri, error)

    @staticmethod
    def _failure(method, uri, error):
        log.debug("%s %s failed: %s", method, uri, error)
        return Result.failure(error)


def json_object(response):
    """ Extract a JSON object body, treating an empty body as an
    empty object.
    """
    content = response.content
    if content is None:
        return {}
    if not isinstance(content, Mapping):
        raise MalformedResponse("Expected a JSON object from %s %s" % (response.method,
                                                                       response.uri))
    return content


def json_list(response):
    content = response.content
    if not isinstance(content, list):
        raise MalformedResponse("Expected a JSON array from %s %s" % (response.method,
                                                                      response.uri))
    return content


def no_content(value):
    """ Return an extractor which ignores the response and yields
    `value`.
    """
    return lambda response: value


def check_round_trip(requested, received, kind):
    if received != requested:
        raise ConsistencyViolation("Requested %s %d but received %s %d" % (kind, requested,
                                                                           kind, received))
    return received


class EntityClient(ResourceClient):
    """ Base class for clients of an entity collection, either nodes
    or relationships. Subclasses set :attr:`.category` and
    :attr:`.entity_class`.
    """

    category = None

    entity_class = None

    def _entity_uri(self, id):
        return lambda root: join_uri(root.collection(self.category), id)

    async def _get_entity(self, id):
        check_entity_id(id)

        def extract(response):
            entity = self.entity_class.hydrate(response.content)
            check_round_trip(id, entity.id, self.category)
            return entity

        return await self._call("GET", self._entity_uri(id), expected=OK, extract=extract)

    async def _delete_entity(self, id):
        check_entity_id(id)
        return await self._call("DELETE", self._entity_uri(id), expected=NO_CONTENT,
                                extract=no_content(id))
