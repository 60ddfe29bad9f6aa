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


__all__ = ["Result"]


class Result(object):
    """ The outcome of a single operation: either a success carrying a
    value or a failure carrying a :class:`.GraphError`.

    A result is truthy on success and falsy on failure, so the usual
    pattern reads::

        result = await client.get_node(1)
        if result:
            print(result.value.properties)
        elif result.status_code == 404:
            print("No such node")

    Callers preferring exceptions can use :meth:`.unwrap`.
    """

    __slots__ = ("__value", "__error")

    @classmethod
    def success(cls, value=None):
        return cls(value, None)

    @classmethod
    def failure(cls, error):
        if error is None:
            raise TypeError("A failed result requires an error")
        return cls(None, error)

    def __init__(self, value, error):
        self.__value = value
        self.__error = error

    def __repr__(self):
        if self.__error is None:
            return "<Result value=%r>" % (self.__value,)
        else:
            return "<Result error=%r>" % (self.__error,)

    def __bool__(self):
        return self.__error is None

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return self.__value == other.value and self.__error is other.error

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = None

    @property
    def ok(self):
        """ :const:`True` if the operation succeeded.
        """
        return self.__error is None

    @property
    def value(self):
        """ The value produced by a successful operation, or
        :const:`None` on failure.
        """
        return self.__value

    @property
    def error(self):
        """ The error describing a failed operation, or :const:`None`
        on success.
        """
        return self.__error

    @property
    def status_code(self):
        """ The HTTP status code carried by the error, if any.
        """
        return getattr(self.__error, "status_code", None)

    def unwrap(self):
        """ Return the value on success, or raise the carried error.
        """
        if self.__error is not None:
            raise self.__error
        return self.__value

    def map(self, f):
        """ Apply `f` to the value of a successful result, returning a
        new result. Failures pass through unchanged.
        """
        if self.__error is not None:
            return self
        return Result.success(f(self.__value))
