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


from neosimple.addressing import check_entity_id, check_name, check_properties, join_uri
from neosimple.data import Relationship
from neosimple.errors import InvalidArgument, MalformedResponse
from neosimple.http import CREATED, OK
from neosimple.resource import EntityClient, json_list


__all__ = ["Direction", "RelationshipClient"]


class Direction(object):
    """ Directions in which the relationships of a node can be
    listed.
    """

    INCOMING = "in"
    OUTGOING = "out"

    aliases = {
        "in": INCOMING,
        "incoming": INCOMING,
        "out": OUTGOING,
        "outgoing": OUTGOING,
    }

    @classmethod
    def check(cls, value):
        """ Normalise a direction, rejecting anything other than an
        incoming or outgoing direction.

        :raises InvalidArgument: for any other value
        """
        try:
            return cls.aliases[value]
        except (KeyError, TypeError):
            raise InvalidArgument("Direction must be 'in' or 'out', not %r" % (value,))


def _relationship_types(response):
    types = json_list(response)
    if not all(isinstance(t, str) for t in types):
        raise MalformedResponse("Relationship type list contains non-string values")
    return types


class RelationshipClient(EntityClient):
    """ Client for relationships, created through the
    ``/db/data/node/{id}/relationships`` resources and addressed
    individually under ``/db/data/relationship``.
    """

    category = "relationship"

    entity_class = Relationship

    async def create_relationship(self, start_id, end_id, type, properties=None):
        """ Create a relationship of a given type between two nodes.

        :param start_id: ID of the node from which the relationship
            originates
        :param end_id: ID of the node at which the relationship
            terminates
        :param type: relationship type name
        :param properties: mapping of property keys to values
        :return: :class:`.Result` holding the new :class:`.Relationship`
        """
        check_entity_id(start_id, "start_id")
        check_entity_id(end_id, "end_id")
        check_name(type, "type")
        properties = check_properties(properties)

        def path(root):
            return join_uri(root.node, start_id, "relationships")

        def body(root):
            return {
                "to": join_uri(root.node, end_id),
                "type": type,
                "data": properties,
            }

        return await self._call("POST", path, body, expected=CREATED,
                                extract=lambda r: Relationship.hydrate(r.content))

    async def get_relationship(self, id):
        return await self._get_entity(id)

    async def delete_relationship(self, id):
        return await self._delete_entity(id)

    async def get_directional_relationships(self, node_id, direction):
        """ List the incoming or outgoing relationships of a node.

        :param node_id: ID of the node
        :param direction: ``'in'`` or ``'out'`` (or ``'incoming'`` or
            ``'outgoing'``)
        :return: :class:`.Result` holding the list of relationship
            documents exactly as returned by the server
        :raises InvalidArgument: for any other direction
        """
        check_entity_id(node_id, "node_id")
        direction = Direction.check(direction)
        return await self._call("GET", lambda root: join_uri(root.node, node_id,
                                                             "relationships", direction),
                                expected=OK, extract=json_list)

    async def get_incoming_relationships(self, node_id):
        return await self.get_directional_relationships(node_id, Direction.INCOMING)

    async def get_outgoing_relationships(self, node_id):
        return await self.get_directional_relationships(node_id, Direction.OUTGOING)

    async def list_relationship_types(self):
        """ List the names of all relationship types known to the
        server.
        """
        return await self._call("GET", lambda root: join_uri(root.relationship, "types"),
                                expected=OK, extract=_relationship_types)
