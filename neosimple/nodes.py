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


from neosimple.addressing import check_properties
from neosimple.data import Node
from neosimple.http import CREATED
from neosimple.resource import EntityClient


__all__ = ["NodeClient"]


class NodeClient(EntityClient):
    """ Client for the node collection, ``/db/data/node``.
    """

    category = "node"

    entity_class = Node

    async def create_node(self, properties=None):
        """ Create a node, optionally with an initial set of
        properties.

        :param properties: mapping of property keys to values
        :return: :class:`.Result` holding the new :class:`.Node`
        :raises InvalidArgument: if `properties` is not a mapping
        """
        properties = check_properties(properties)
        return await self._call("POST", lambda root: root.node, properties,
                                expected=CREATED, extract=lambda r: Node.hydrate(r.content))

    async def get_node(self, id):
        """ Fetch a node by ID.

        :return: :class:`.Result` holding the :class:`.Node`; fails
            with :class:`.NotFound` if there is no such node
        """
        return await self._get_entity(id)

    async def delete_node(self, id):
        """ Delete a node by ID. A node that still has relationships
        cannot be deleted; the result then fails with
        :class:`.Conflict`.

        Index entries referring to the node are left in place.

        :return: :class:`.Result` holding the ID of the deleted node
        """
        return await self._delete_entity(id)
