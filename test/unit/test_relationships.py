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


from pytest import fixture, mark, raises

from neosimple.data import Relationship
from neosimple.errors import InvalidArgument, MalformedResponse, NotFound, UnexpectedStatus
from neosimple.relationships import Direction


pytestmark = mark.asyncio


REL_URI = "http://localhost:7474/db/data/relationship"


@fixture
def nodes(server):
    return [server.create_node({"name": name}) for name in "abc"]


def node_id(document):
    return int(document["self"].rpartition("/")[-1])


async def test_create_relationship(client, server, nodes):
    a, b = node_id(nodes[0]), node_id(nodes[1])
    result = await client.create_relationship(a, b, "edge", {"k": "v"})
    assert result
    rel = result.value
    assert isinstance(rel, Relationship)
    assert rel.type == "edge"
    assert rel.start == a
    assert rel.end == b
    assert rel.properties == {"k": "v"}
    method, uri, body = server.requests[-1]
    assert method == "POST"
    assert uri == "http://localhost:7474/db/data/node/%d/relationships" % a
    assert body == {"to": "http://localhost:7474/db/data/node/%d" % b,
                    "type": "edge", "data": {"k": "v"}}


async def test_relationship_round_trip(client, nodes):
    a, b = node_id(nodes[0]), node_id(nodes[1])
    created = await client.create_relationship(a, b, "edge", {"k": "v"})
    fetched = await client.get_relationship(created.value.id)
    assert fetched.value.properties["k"] == "v"
    assert fetched.value.type == "edge"
    assert fetched.value == created.value


async def test_create_relationship_without_properties(client, nodes):
    a, b = node_id(nodes[0]), node_id(nodes[1])
    result = await client.create_relationship(a, b, "KNOWS")
    assert result.value.properties == {}


@mark.parametrize("args", [
    (-1, 1, "KNOWS"),
    (1, "2", "KNOWS"),
    (1, 2, ""),
    (1, 2, None),
    (1, 2, "KNOWS", "not a mapping"),
    (1, 2, "KNOWS", {"when": object()}),
])
async def test_create_relationship_rejects_bad_arguments(client, server, args):
    with raises(InvalidArgument):
        await client.create_relationship(*args)
    assert server.requests == []


async def test_create_relationship_to_missing_node(client, nodes):
    result = await client.create_relationship(node_id(nodes[0]), 9999, "KNOWS")
    assert isinstance(result.error, UnexpectedStatus)
    assert result.status_code == 400


async def test_get_missing_relationship(client):
    result = await client.get_relationship(9999)
    assert isinstance(result.error, NotFound)


async def test_relationship_document_without_type(client, server):
    server.override("GET", REL_URI + "/3", 200, {
        "self": REL_URI + "/3",
        "start": "http://localhost:7474/db/data/node/1",
        "end": "http://localhost:7474/db/data/node/2",
    })
    result = await client.get_relationship(3)
    assert isinstance(result.error, MalformedResponse)


async def test_delete_relationship(client, nodes):
    a, b = node_id(nodes[0]), node_id(nodes[1])
    rel = (await client.create_relationship(a, b, "KNOWS")).value
    deleted = await client.delete_relationship(rel.id)
    assert deleted.value == rel.id
    assert isinstance((await client.get_relationship(rel.id)).error, NotFound)
    assert await client.delete_node(a)


async def test_directional_relationships(client, nodes):
    a, b, c = (node_id(n) for n in nodes)
    ab = (await client.create_relationship(a, b, "KNOWS")).value
    ca = (await client.create_relationship(c, a, "LIKES")).value
    outgoing = await client.get_directional_relationships(a, "out")
    incoming = await client.get_directional_relationships(a, "in")
    assert [r["self"] for r in outgoing.value] == [ab.uri]
    assert [r["self"] for r in incoming.value] == [ca.uri]


async def test_directional_relationships_are_returned_verbatim(client, server, nodes):
    a, b = node_id(nodes[0]), node_id(nodes[1])
    await client.create_relationship(a, b, "KNOWS", {"since": 1999})
    result = await client.get_outgoing_relationships(a)
    assert result.value == [server.relationship_document(0)]


@mark.parametrize("direction", ["incoming", "outgoing", Direction.INCOMING, Direction.OUTGOING])
async def test_direction_aliases(client, server, nodes, direction):
    a = node_id(nodes[0])
    result = await client.get_directional_relationships(a, direction)
    assert result.value == []
    assert server.requests[-1][1].endswith("/relationships/" + Direction.check(direction))


@mark.parametrize("direction", ["all", "both", "IN", "", None, 1, True])
async def test_invalid_direction_is_rejected(client, server, nodes, direction):
    with raises(InvalidArgument):
        await client.get_directional_relationships(node_id(nodes[0]), direction)
    assert server.requests == []


async def test_incoming_and_outgoing_shortcuts(client, nodes):
    a, b = node_id(nodes[0]), node_id(nodes[1])
    await client.create_relationship(a, b, "KNOWS")
    assert len((await client.get_outgoing_relationships(a)).value) == 1
    assert len((await client.get_incoming_relationships(b)).value) == 1
    assert (await client.get_incoming_relationships(a)).value == []


async def test_directional_relationships_for_missing_node(client):
    result = await client.get_outgoing_relationships(9999)
    assert isinstance(result.error, NotFound)


async def test_list_relationship_types(client, nodes):
    a, b, c = (node_id(n) for n in nodes)
    await client.create_relationship(a, b, "KNOWS")
    await client.create_relationship(b, c, "LIKES")
    result = await client.list_relationship_types()
    assert sorted(result.value) == ["KNOWS", "LIKES"]


async def test_relationship_types_must_be_strings(client, server):
    server.override("GET", REL_URI + "/types", 200, ["KNOWS", 3])
    result = await client.list_relationship_types()
    assert isinstance(result.error, MalformedResponse)


async def test_relationship_types_must_be_a_list(client, server):
    server.override("GET", REL_URI + "/types", 200, {"types": ["KNOWS"]})
    result = await client.list_relationship_types()
    assert isinstance(result.error, MalformedResponse)
