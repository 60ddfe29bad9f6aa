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


import logging

from pytest import fixture

from fixtures.server import FakeServer
from neosimple import GraphClient


logging.getLogger("neosimple").setLevel(logging.DEBUG)


@fixture
def server():
    return FakeServer()


@fixture
def client(server):
    return GraphClient("http://localhost:7474", transport=server)
