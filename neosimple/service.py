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


from asyncio import ensure_future, shield
from collections import namedtuple
from collections.abc import Mapping
from logging import getLogger

from packaging.version import InvalidVersion, Version

from neosimple.errors import MalformedResponse, MalformedServiceRoot, ServiceUnreachable, \
    UnresolvedServiceRoot
from neosimple.http import OK
from neosimple.result import Result


__all__ = ["ServiceRoot", "ServiceRootLoader"]


log = getLogger(__name__)


RELATIONSHIP_TYPES_SUFFIX = "/types"


class ServiceRoot(namedtuple("ServiceRoot", ["uri", "node", "relationship", "relationship_types",
                                             "node_index", "relationship_index", "reference_node",
                                             "neo4j_version", "cypher", "batch",
                                             "extensions_info", "document"])):
    """ The base URIs advertised by a server's REST service root.

    A typical service root document looks like this::

        {
          "node" : "http://localhost:7474/db/data/node",
          "node_index" : "http://localhost:7474/db/data/index/node",
          "relationship_index" : "http://localhost:7474/db/data/index/relationship",
          "reference_node" : "http://localhost:7474/db/data/node/0",
          "relationship_types" : "http://localhost:7474/db/data/relationship/types",
          "extensions_info" : "http://localhost:7474/db/data/ext",
          "batch" : "http://localhost:7474/db/data/batch",
          "cypher" : "http://localhost:7474/db/data/cypher",
          "neo4j_version" : "1.9.2"
        }

    The relationship collection is not advertised directly; its URI
    is derived from ``relationship_types`` by removing the trailing
    ``/types``. The full decoded document, including anything not
    modelled here such as ``extensions``, is kept as :attr:`.document`.
    """

    __slots__ = ()

    required_fields = ("node", "relationship_types", "node_index", "relationship_index")

    optional_fields = ("reference_node", "neo4j_version", "cypher", "batch", "extensions_info")

    @classmethod
    def hydrate(cls, uri, document):
        """ Build a service root from a decoded service root document.

        :raises MalformedServiceRoot: if required URIs are missing or
            any advertised value is of the wrong type
        """
        if not isinstance(document, Mapping):
            raise MalformedServiceRoot("Service root at %s is not a JSON object" % uri)
        values = {}
        for key in cls.required_fields:
            value = document.get(key)
            if not isinstance(value, str) or not value:
                raise MalformedServiceRoot("Service root at %s has no %r URI" % (uri, key))
            values[key] = value
        for key in cls.optional_fields:
            value = document.get(key)
            if value is not None and not isinstance(value, str):
                raise MalformedServiceRoot("Service root field %r is not a string" % key)
            values[key] = value
        relationship_types = values["relationship_types"]
        if not relationship_types.endswith(RELATIONSHIP_TYPES_SUFFIX):
            raise MalformedServiceRoot("Cannot derive relationship URI from %r" % relationship_types)
        values["relationship"] = relationship_types[:-len(RELATIONSHIP_TYPES_SUFFIX)]
        return cls(uri=uri, document=dict(document), **values)

    def __hash__(self):
        return hash(self[:-1])

    @property
    def version(self):
        """ The server version as a :class:`packaging.version.Version`,
        or :const:`None` if not advertised or not parseable.
        """
        if self.neo4j_version is None:
            return None
        try:
            return Version(self.neo4j_version)
        except InvalidVersion:
            return None

    def index(self, category):
        """ Return the index collection URI for ``"node"`` or
        ``"relationship"``.
        """
        return self.node_index if category == "node" else self.relationship_index

    def collection(self, category):
        """ Return the entity collection URI for ``"node"`` or
        ``"relationship"``.
        """
        return self.node if category == "node" else self.relationship


class ServiceRootLoader(object):
    """ Lazily discovers, and then holds, the :class:`.ServiceRoot`
    for a single server.

    The loader has two states: unresolved and resolved. The first
    successful fetch moves it to resolved, after which the same
    :class:`.ServiceRoot` instance is returned forever. Concurrent
    callers arriving while a fetch is in flight all await that one
    fetch rather than issuing requests of their own. A failed fetch
    leaves the loader unresolved.
    """

    def __init__(self, transport, uri):
        self.transport = transport
        self.uri = uri
        self.__root = None
        self.__pending = None

    def __repr__(self):
        state = "resolved" if self.resolved else "unresolved"
        return "<%s uri=%r %s>" % (self.__class__.__name__, self.uri, state)

    @property
    def resolved(self):
        return self.__root is not None

    @property
    def current(self):
        """ The resolved service root.

        :raises UnresolvedServiceRoot: if the service root has not yet
            been resolved
        """
        if self.__root is None:
            raise UnresolvedServiceRoot("Service root at %s has not been resolved" % self.uri)
        return self.__root

    async def resolve(self):
        """ Return a :class:`.Result` holding the service root,
        fetching it first if necessary.
        """
        if self.__root is not None:
            return Result.success(self.__root)
        if self.__pending is None:
            self.__pending = ensure_future(self._fetch())
        return await shield(self.__pending)

    async def _fetch(self):
        try:
            result = await self._load()
            if result:
                self.__root = result.value
                log.debug("Resolved service root at %s (Neo4j %s)",
                          self.uri, result.value.neo4j_version or "unknown")
            else:
                log.debug("Failed to resolve service root at %s: %s", self.uri, result.error)
            return result
        finally:
            self.__pending = None

    async def _load(self):
        log.debug("Fetching service root from %s", self.uri)
        try:
            response = await self.transport.request("GET", self.uri)
        except ServiceUnreachable as error:
            return Result.failure(error)
        if response.status != OK:
            return Result.failure(response.status_error())
        try:
            document = response.content
        except MalformedResponse as error:
            return Result.failure(MalformedServiceRoot(error.message))
        try:
            return Result.success(ServiceRoot.hydrate(self.uri, document))
        except MalformedServiceRoot as error:
            return Result.failure(error)
