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

from neosimple.addressing import self_id
from neosimple.errors import MalformedResponse


__all__ = ["Entity", "Node", "Relationship", "hydrate", "hydrate_list"]


class Entity(object):
    """ Base class for :class:`.Node` and :class:`.Relationship`.

    Entities are snapshots of a remote resource as described by a
    single response; they compare equal if they are of the same class
    and carry the same ID.
    """

    def __init__(self, id, properties=None, document=None):
        self.id = id
        self.properties = dict(properties or {})
        self.document = document

    def __eq__(self, other):
        return type(self) is type(other) and self.id == other.id

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self).__name__, self.id))

    def __getitem__(self, key):
        return self.properties[key]

    def __contains__(self, key):
        return key in self.properties

    @property
    def uri(self):
        if isinstance(self.document, Mapping):
            return self.document.get("self")
        return None

    @classmethod
    def _properties(cls, document):
        data = document.get("data", {})
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise MalformedResponse("Entity %r has non-object data" % document.get("self"))
        return data


class Node(Entity):

    def __repr__(self):
        return "Node(%r, %r)" % (self.id, self.properties)

    @classmethod
    def hydrate(cls, document):
        """ Build a :class:`.Node` from a node document.
        """
        return cls(self_id(document), cls._properties(document), document)


class Relationship(Entity):

    def __init__(self, id, type, start, end, properties=None, document=None):
        super(Relationship, self).__init__(id, properties, document)
        self.type = type
        self.start = start
        self.end = end

    def __repr__(self):
        return "Relationship(%r, %r, %r, %r, %r)" % (self.id, self.type, self.start,
                                                     self.end, self.properties)

    @classmethod
    def hydrate(cls, document):
        """ Build a :class:`.Relationship` from a relationship
        document, deriving the IDs of its start and end nodes.
        """
        id_ = self_id(document)
        type_ = document.get("type")
        if not isinstance(type_, str):
            raise MalformedResponse("Relationship %d has no type" % id_)
        return cls(id_, type_, self_id(document, "start"), self_id(document, "end"),
                   cls._properties(document), document)


def hydrate(document):
    """ Build a :class:`.Node` or :class:`.Relationship` from an
    entity document, depending on its shape.
    """
    if not isinstance(document, Mapping):
        raise MalformedResponse("Expected a JSON object, received %s" % type(document).__name__)
    if "type" in document and "start" in document:
        return Relationship.hydrate(document)
    else:
        return Node.hydrate(document)


def hydrate_list(content):
    if not isinstance(content, list):
        raise MalformedResponse("Expected a JSON array, received %s" % type(content).__name__)
    return [hydrate(document) for document in content]
