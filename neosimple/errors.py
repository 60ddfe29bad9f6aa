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


__all__ = ["GraphError", "InvalidArgument", "ServiceUnreachable", "UnexpectedStatus",
           "NotFound", "Conflict", "MalformedResponse", "MalformedServiceRoot",
           "MalformedReference", "ConsistencyViolation", "UnresolvedServiceRoot"]


class GraphError(Exception):
    """ Base class for all errors reported by this library.
    """

    @property
    def message(self):
        return self.args[0] if self.args else None


class InvalidArgument(GraphError, ValueError):
    """ Raised when an argument fails a local precondition. This is
    always raised before any network activity takes place.
    """


class UnresolvedServiceRoot(GraphError, RuntimeError):
    """ Raised when the service root is read before it has been
    resolved.
    """


class ServiceUnreachable(GraphError):
    """ The HTTP transport failed to complete a request, for example
    due to a refused connection, a timeout or a DNS failure. The
    underlying transport error is available as ``__cause__``.
    """

    def __init__(self, message, uri=None):
        super(ServiceUnreachable, self).__init__(message)
        self.uri = uri


class UnexpectedStatus(GraphError):
    """ A request completed but returned a status code other than
    the one expected for that operation.

    Where the server supplies its usual JSON error document, the
    ``exception``, ``full_name`` and ``stack_trace`` attributes are
    populated from it.
    """

    @classmethod
    def hydrate(cls, method, uri, status_code, content=None):
        """ Build an error instance of the most specific class
        available for `status_code`.
        """
        error_cls = static_error_classes.get(status_code, cls)
        if isinstance(content, dict):
            data = dict(content)
        else:
            data = {}
        message = data.pop("message", None) or \
            "HTTP %s %s returned response %s" % (method, uri, status_code)
        return error_cls(message, status_code, method=method, uri=uri,
                         exception=data.get("exception"),
                         fullname=data.get("fullname"),
                         stacktrace=data.get("stacktrace"))

    def __init__(self, message, status_code, **kwargs):
        super(UnexpectedStatus, self).__init__(message)
        self.status_code = status_code
        self.method = kwargs.get("method")
        self.uri = kwargs.get("uri")
        self.exception = kwargs.get("exception")
        self.full_name = kwargs.get("fullname")
        self.stack_trace = kwargs.get("stacktrace")


class NotFound(UnexpectedStatus):
    """ The remote resource does not exist (HTTP 404).
    """


class Conflict(UnexpectedStatus):
    """ The request conflicts with the state of the remote resource
    (HTTP 409), e.g. deleting a node that still has relationships.
    """


class MalformedResponse(GraphError):
    """ The status code was as expected but the response body was
    missing, was not valid JSON or lacked a required field.
    """


class MalformedServiceRoot(MalformedResponse):
    """ The service root document is missing required URIs or holds
    values of the wrong type.
    """


class MalformedReference(GraphError):
    """ A resource URI could not be parsed into a numeric entity ID.
    """

    def __init__(self, message, reference=None):
        super(MalformedReference, self).__init__(message)
        self.reference = reference


class ConsistencyViolation(GraphError):
    """ A response contradicted the request that produced it, for
    example by describing a different entity to the one requested.
    """


static_error_classes = {
    404: NotFound,
    409: Conflict,
}
