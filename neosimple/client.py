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


from logging import getLogger

from neosimple.config import ServiceProfile
from neosimple.http import HTTPTransport
from neosimple.indexes import IndexClient, check_category
from neosimple.nodes import NodeClient
from neosimple.properties import PropertyClient
from neosimple.relationships import RelationshipClient
from neosimple.service import ServiceRootLoader


__all__ = ["GraphClient"]


log = getLogger(__name__)


class GraphClient(object):
    """ Session object for a single Neo4j REST service.

    The client owns the transport and the lazily-resolved
    :class:`.ServiceRoot`, and exposes every resource operation as a
    coroutine returning a :class:`.Result`::

        async with GraphClient("http://localhost:7474") as client:
            created = await client.create_node({"name": "Fred"})
            node = (await client.get_node(created.value.id)).unwrap()

    Operations may be run concurrently against the same client.

    :param profile: a :class:`.ServiceProfile`, URI string, mapping or
        :const:`None` for the defaults
    :param transport: a :class:`.Transport` to use instead of a new
        :class:`.HTTPTransport`
    :param settings: profile overrides, plus ``user_agent`` and
        ``timeout`` for the default transport
    :raises TypeError: for ``user_agent``, ``timeout`` or any other
        transport setting when `transport` is supplied, since such a
        transport is already configured
    """

    def __init__(self, profile=None, transport=None, **settings):
        if transport is None:
            transport = HTTPTransport(profile, **settings)
            self.profile = transport.profile
        else:
            self.profile = ServiceProfile(profile, **settings)
        self.transport = transport
        self.loader = ServiceRootLoader(transport, self.profile.service_root_uri)
        self.nodes = NodeClient(transport, self.loader)
        self.relationships = RelationshipClient(transport, self.loader)
        self.node_properties = PropertyClient(transport, self.loader, "node")
        self.relationship_properties = PropertyClient(transport, self.loader, "relationship")
        self.node_indexes = IndexClient(transport, self.loader, "node")
        self.relationship_indexes = IndexClient(transport, self.loader, "relationship")
        log.debug("Created client for %s", self.profile.uri)

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.profile.uri)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self.transport.close()

    @property
    def service_root(self):
        """ The resolved :class:`.ServiceRoot`.

        :raises UnresolvedServiceRoot: if not yet resolved
        """
        return self.loader.current

    async def resolve_service_root(self):
        return await self.loader.resolve()

    # Nodes

    async def create_node(self, properties=None):
        return await self.nodes.create_node(properties)

    async def get_node(self, id):
        return await self.nodes.get_node(id)

    async def delete_node(self, id):
        return await self.nodes.delete_node(id)

    async def get_node_properties(self, id):
        return await self.node_properties.get_properties(id)

    async def set_node_properties(self, id, properties):
        return await self.node_properties.set_properties(id, properties)

    async def delete_node_properties(self, id):
        return await self.node_properties.delete_properties(id)

    async def get_node_property(self, id, key):
        return await self.node_properties.get_property(id, key)

    async def set_node_property(self, id, key, value):
        return await self.node_properties.set_property(id, key, value)

    async def delete_node_property(self, id, key):
        return await self.node_properties.delete_property(id, key)

    # Relationships

    async def create_relationship(self, start_id, end_id, type, properties=None):
        return await self.relationships.create_relationship(start_id, end_id, type, properties)

    async def get_relationship(self, id):
        return await self.relationships.get_relationship(id)

    async def delete_relationship(self, id):
        return await self.relationships.delete_relationship(id)

    async def get_directional_relationships(self, node_id, direction):
        return await self.relationships.get_directional_relationships(node_id, direction)

    async def get_incoming_relationships(self, node_id):
        return await self.relationships.get_incoming_relationships(node_id)

    async def get_outgoing_relationships(self, node_id):
        return await self.relationships.get_outgoing_relationships(node_id)

    async def list_relationship_types(self):
        return await self.relationships.list_relationship_types()

    async def get_relationship_properties(self, id):
        return await self.relationship_properties.get_properties(id)

    async def set_relationship_properties(self, id, properties):
        return await self.relationship_properties.set_properties(id, properties)

    async def delete_relationship_properties(self, id):
        return await self.relationship_properties.delete_properties(id)

    async def get_relationship_property(self, id, key):
        return await self.relationship_properties.get_property(id, key)

    async def set_relationship_property(self, id, key, value):
        return await self.relationship_properties.set_property(id, key, value)

    async def delete_relationship_property(self, id, key):
        return await self.relationship_properties.delete_property(id, key)

    # Indexes

    def indexes(self, category="node"):
        """ Return the :class:`.IndexClient` for ``"node"`` or
        ``"relationship"`` indexes.
        """
        if check_category(category) == "node":
            return self.node_indexes
        else:
            return self.relationship_indexes

    async def create_index(self, name, config=None, category="node"):
        return await self.indexes(category).create_index(name, config)

    async def delete_index(self, name, category="node"):
        return await self.indexes(category).delete_index(name)

    async def list_indexes(self, category="node"):
        return await self.indexes(category).list_indexes()

    async def add_entity_to_index(self, name, entity_id, key, value, category="node"):
        return await self.indexes(category).add_entity_to_index(name, entity_id, key, value)

    async def remove_index_entries(self, name, entity_id, key=None, value=None,
                                   category="node"):
        return await self.indexes(category).remove_index_entries(name, entity_id, key, value)

    async def find_exact(self, name, key, value, category="node"):
        return await self.indexes(category).find_exact(name, key, value)

    async def find_by_query(self, name, query, category="node", parameter=None):
        return await self.indexes(category).find_by_query(name, query, parameter)
