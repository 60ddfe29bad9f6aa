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


from pytest import raises

from neosimple.errors import NotFound
from neosimple.result import Result


def test_success():
    result = Result.success(42)
    assert result
    assert result.ok
    assert result.value == 42
    assert result.error is None
    assert result.status_code is None
    assert result.unwrap() == 42


def test_failure():
    error = NotFound("gone", 404)
    result = Result.failure(error)
    assert not result
    assert not result.ok
    assert result.value is None
    assert result.error is error
    assert result.status_code == 404
    with raises(NotFound):
        result.unwrap()


def test_failure_requires_error():
    with raises(TypeError):
        _ = Result.failure(None)


def test_map():
    assert Result.success(2).map(lambda x: x * 3).value == 6
    failure = Result.failure(NotFound("gone", 404))
    assert failure.map(lambda x: x * 3) is failure


def test_equality():
    assert Result.success([1]) == Result.success([1])
    assert Result.success(1) != Result.success(2)


def test_repr():
    assert repr(Result.success(1)) == "<Result value=1>"
    assert repr(Result.failure(NotFound("gone", 404))).startswith("<Result error=")
