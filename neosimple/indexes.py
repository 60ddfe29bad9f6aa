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


""" Legacy (explicit) indexes.

Indexes map key-value pairs to nodes or relationships. Entries are
added and removed explicitly; deleting an entity does not remove the
entries that refer to it.
"""


from collections.abc import Mapping
from urllib.parse import quote

from neosimple.addressing import check_entity_id, check_json, check_name, join_uri, self_id
from neosimple.data import hydrate_list
from neosimple.errors import InvalidArgument
from neosimple.http import CREATED, NO_CONTENT, OK
from neosimple.resource import ResourceClient, json_object, no_content


__all__ = ["IndexClient", "CATEGORIES", "check_category"]


CATEGORIES = ("node", "relationship")


def check_category(category):
    if category not in CATEGORIES:
        raise InvalidArgument("Index category must be 'node' or 'relationship', "
                              "not %r" % (category,))
    return category


def check_value(value, name="value"):
    if value is None:
        raise InvalidArgument("%s must not be null" % name)
    return check_json(value, name)


class IndexClient(ResourceClient):
    """ Client for the indexes of one category, either
    ``/db/data/index/node`` or ``/db/data/index/relationship``.

    :param category: ``"node"`` or ``"relationship"``
    """

    def __init__(self, transport, loader, category="node"):
        super(IndexClient, self).__init__(transport, loader)
        self.category = check_category(category)

    def _index_uri(self, *segments):
        return lambda root: join_uri(root.index(self.category), *segments)

    async def create_index(self, name, config=None):
        """ Create an index.

        :param name: name of the index, unique within its category
        :param config: index configuration, e.g.
            ``{"type": "fulltext", "provider": "lucene"}``
        :return: :class:`.Result` holding the index description
            returned by the server
        """
        check_name(name, "name")
        if config is None:
            config = {}
        elif not isinstance(config, Mapping):
            raise InvalidArgument("config must be a mapping, not %s" % type(config).__name__)
        body = {"name": name, "config": check_json(dict(config), "config")}
        return await self._call("POST", self._index_uri(), body, expected=CREATED,
                                extract=json_object)

    async def delete_index(self, name):
        check_name(name, "name")
        return await self._call("DELETE", self._index_uri(name), expected=NO_CONTENT,
                                extract=no_content(name))

    async def list_indexes(self):
        """ List all indexes in this category.

        :return: :class:`.Result` holding a dictionary mapping index
            names to their configuration
        """
        return await self._call("GET", self._index_uri(), expected=(OK, NO_CONTENT),
                                extract=json_object)

    async def add_entity_to_index(self, name, entity_id, key, value):
        """ Add an entry to an index.

        :param name: name of the index
        :param entity_id: ID of the node or relationship to index
        :param key: key under which to index the entity
        :param value: value under which to index the entity
        :return: :class:`.Result` holding the ID of the indexed entity,
            as reported by the server
        """
        check_name(name, "name")
        check_entity_id(entity_id, "entity_id")
        check_name(key, "key")
        check_value(value)

        def body(root):
            return {
                "key": key,
                "value": value,
                "uri": join_uri(root.collection(self.category), entity_id),
            }

        return await self._call("POST", self._index_uri(name), body, expected=(CREATED, OK),
                                extract=lambda r: self_id(r.content, "indexed"))

    async def remove_index_entries(self, name, entity_id, key=None, value=None):
        """ Remove the entries for an entity from an index. All entries
        are removed if only `entity_id` is given; a `key`, or a `key`
        and `value`, narrow the removal.

        :return: :class:`.Result` holding the ID of the entity
        """
        check_name(name, "name")
        check_entity_id(entity_id, "entity_id")
        segments = [name]
        if key is not None:
            segments.append(check_name(key, "key"))
            if value is not None:
                segments.append(value)
        elif value is not None:
            raise InvalidArgument("Cannot remove index entries by value without a key")
        segments.append(entity_id)
        return await self._call("DELETE", self._index_uri(*segments), expected=NO_CONTENT,
                                extract=no_content(entity_id))

    async def find_exact(self, name, key, value):
        """ Find all entities indexed under an exact key-value pair.

        :return: :class:`.Result` holding a list of :class:`.Node` or
            :class:`.Relationship` objects
        """
        check_name(name, "name")
        check_name(key, "key")
        check_value(value)
        return await self._call("GET", self._index_uri(name, key, value), expected=OK,
                                extract=lambda r: hydrate_list(r.content))

    async def find_by_query(self, name, query, parameter=None):
        """ Find all entities matching a query in the index provider's
        query language, e.g. ``"name:a* AND age:[20 TO 30]"`` for Lucene.

        The encoded query forms the whole query string of the request
        URI, as in ``/db/data/index/node/People?name%3Aa%2A``. Servers
        that expect a named parameter can be given one::

            await indexes.find_by_query("People", "name:a*", parameter="query")

        :param parameter: name of the URI query parameter to carry the
            query, or :const:`None` to send the query string bare
        :return: :class:`.Result` holding a list of :class:`.Node` or
            :class:`.Relationship` objects
        """
        check_name(name, "name")
        check_name(query, "query")
        query_string = quote(query, safe="")
        if parameter is not None:
            query_string = "%s=%s" % (quote(check_name(parameter, "parameter"), safe=""),
                                      query_string)

        def path(root):
            return join_uri(root.index(self.category), name) + "?" + query_string

        return await self._call("GET", path, expected=OK,
                                extract=lambda r: hydrate_list(r.content))
