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


from neosimple.addressing import check_entity_id, check_json, check_name, check_properties, \
    join_uri
from neosimple.errors import InvalidArgument
from neosimple.http import NO_CONTENT, OK
from neosimple.resource import ResourceClient, json_object, no_content


__all__ = ["PropertyClient"]


class PropertyClient(ResourceClient):
    """ Client for the property sub-resources of either nodes or
    relationships::

        <collection>/<id>/properties
        <collection>/<id>/properties/<key>

    :param category: ``"node"`` or ``"relationship"``
    """

    def __init__(self, transport, loader, category):
        super(PropertyClient, self).__init__(transport, loader)
        self.category = category

    def _properties_uri(self, id, *key):
        return lambda root: join_uri(root.collection(self.category), id, "properties", *key)

    async def get_properties(self, id):
        """ Fetch all properties of an entity.

        :return: :class:`.Result` holding a dictionary of properties
        """
        check_entity_id(id)
        return await self._call("GET", self._properties_uri(id), expected=(OK, NO_CONTENT),
                                extract=json_object)

    async def set_properties(self, id, properties):
        """ Replace all properties of an entity. Existing properties
        not present in `properties` are removed.

        :return: :class:`.Result` holding the properties set
        """
        check_entity_id(id)
        properties = check_properties(properties)
        return await self._call("PUT", self._properties_uri(id), properties,
                                expected=NO_CONTENT, extract=no_content(properties))

    async def delete_properties(self, id):
        """ Remove all properties from an entity.
        """
        check_entity_id(id)
        return await self._call("DELETE", self._properties_uri(id), expected=NO_CONTENT,
                                extract=no_content(id))

    async def get_property(self, id, key):
        """ Fetch a single property value. The result fails with
        :class:`.NotFound` if the property does not exist.
        """
        check_entity_id(id)
        check_name(key, "key")
        return await self._call("GET", self._properties_uri(id, key), expected=OK,
                                extract=lambda r: r.content)

    async def set_property(self, id, key, value):
        """ Set a single property value, leaving other properties
        untouched.
        """
        check_entity_id(id)
        check_name(key, "key")
        if value is None:
            raise InvalidArgument("Property values cannot be null; "
                                  "use delete_property to remove %r" % key)
        check_json(value)
        return await self._call("PUT", self._properties_uri(id, key), value,
                                expected=NO_CONTENT, extract=no_content(value))

    async def delete_property(self, id, key):
        """ Remove a single property.

        :return: :class:`.Result` holding a 2-tuple of `(id, key)`
        """
        check_entity_id(id)
        check_name(key, "key")
        return await self._call("DELETE", self._properties_uri(id, key), expected=NO_CONTENT,
                                extract=no_content((id, key)))
