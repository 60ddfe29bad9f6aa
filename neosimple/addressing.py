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


""" Resource addressing and identity resolution.

Every node and relationship exposed by the REST API is identified by
the URI of its resource, for example
``http://localhost:7474/db/data/node/42``. The functions here derive the
numeric entity ID from such a URI and build the URIs of related
resources.
"""


from collections.abc import Mapping
from json import dumps as json_dumps
from urllib.parse import quote

from neosimple.errors import InvalidArgument, MalformedReference, MalformedResponse


__all__ = ["entity_id", "self_id", "join_uri", "quote_segment",
           "check_entity_id", "check_name", "check_properties", "check_json"]


def entity_id(uri):
    """ Extract the numeric ID from the trailing path segment of an
    entity URI.

    :param uri: resource URI, e.g. ``'http://localhost:7474/db/data/node/42'``
    :return: non-negative integer ID
    :raises MalformedReference: if `uri` does not end in such an integer
    """
    if not isinstance(uri, str) or not uri:
        raise MalformedReference("Entity reference must be a non-empty string, "
                                 "not %r" % (uri,), uri)
    if "/" not in uri:
        raise MalformedReference("Entity reference %r has no path segments" % uri, uri)
    segment = uri.rpartition("/")[-1]
    # ASCII digits only
    if not segment or not segment.isascii() or not segment.isdigit():
        raise MalformedReference("Entity reference %r does not end in a "
                                 "numeric ID" % uri, uri)
    return int(segment, 10)


def self_id(document, field="self"):
    """ Extract the entity ID from the URI held in `field` of a
    response document.

    :raises MalformedResponse: if the document is not an object or
        the field is absent
    :raises MalformedReference: if the URI does not end in an ID
    """
    if not isinstance(document, Mapping):
        raise MalformedResponse("Expected a JSON object, received %s" % type(document).__name__)
    try:
        uri = document[field]
    except KeyError:
        raise MalformedResponse("Response has no %r field" % field)
    if not isinstance(uri, str):
        raise MalformedResponse("Response field %r is not a string" % field)
    return entity_id(uri)


def quote_segment(segment):
    """ Percent-encode a value for use as a single URI path segment.
    """
    return quote(str(segment), safe="")


def join_uri(base, *segments):
    """ Append path segments to a base URI. Each segment is encoded
    in full, so that slashes and other reserved characters within
    index names, keys or values cannot alter the resource path.
    """
    return "/".join([base.rstrip("/")] + [quote_segment(segment) for segment in segments])


def check_entity_id(value, name="id"):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument("%s must be an integer, not %s" % (name, type(value).__name__))
    if value < 0:
        raise InvalidArgument("%s must be non-negative, not %d" % (name, value))
    return value


def check_name(value, name="name"):
    if not isinstance(value, str) or not value:
        raise InvalidArgument("%s must be a non-empty string" % name)
    return value


def check_properties(value, name="properties"):
    """ Check and copy a property mapping. :const:`None` is treated as
    an empty mapping.
    """
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidArgument("%s must be a mapping, not %s" % (name, type(value).__name__))
    for key in value:
        if not isinstance(key, str):
            raise InvalidArgument("%s keys must be strings, not %r" % (name, key))
    return check_json(dict(value), name)


def check_json(value, name="value"):
    """ Check that `value` can be sent as a JSON request body.
    NaN and infinite floats are rejected.
    """
    try:
        json_dumps(value, allow_nan=False)
    except (TypeError, ValueError) as error:
        raise InvalidArgument("%s cannot be represented as JSON: %s" % (name, error)) from error
    return value
