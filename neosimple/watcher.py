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


""" Console output of client activity for interactive debugging.

The transport logs each request it sends as a ``C:`` line and each
response it receives as an ``S:`` line::

    watcher = watch()
    await client.get_node(1)

writes lines such as::

    2021-03-01 12:00:00,000  C: GET http://localhost:7474/db/data/node/1
    2021-03-01 12:00:00,004  S: 200 http://localhost:7474/db/data/node/1

"""


from logging import DEBUG, ERROR, WARNING, Formatter, StreamHandler, getLogger
from sys import stderr


__all__ = ["Watcher", "watch"]


class ColourFormatter(Formatter):
    """ Colours problems by severity and otherwise tells outgoing
    requests apart from incoming responses.
    """

    def format(self, record):
        from pansi import ansi
        s = super(ColourFormatter, self).format(record)
        if record.levelno >= ERROR:
            colour = "red"
        elif record.levelno >= WARNING:
            colour = "yellow"
        elif record.getMessage().startswith("S:"):
            colour = "green"
        else:
            colour = "cyan"
        return ("{%s}{}{_}" % colour).format(s, **ansi)


class Watcher(object):
    """ Streams the records of one logger, usually ``"neosimple"``,
    to a text stream.

    Only one watcher per logger is attached at a time; starting a
    second replaces the first.
    """

    handlers = {}

    def __init__(self, logger_name="neosimple", out=stderr):
        self.logger = getLogger(logger_name)
        self.handler = StreamHandler(out)
        self.handler.setFormatter(ColourFormatter("%(asctime)s  %(message)s"))

    def __enter__(self):
        self.watch()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def watch(self, level=DEBUG):
        previous = self.handlers.pop(self.logger.name, None)
        if previous is not None:
            self.logger.removeHandler(previous)
        self.handlers[self.logger.name] = self.handler
        self.logger.addHandler(self.handler)
        self.logger.setLevel(level)

    def stop(self):
        if self.handlers.get(self.logger.name) is self.handler:
            del self.handlers[self.logger.name]
        self.logger.removeHandler(self.handler)


def watch(logger_name="neosimple", level=DEBUG, out=stderr):
    """ Start watching a logger and return the :class:`.Watcher`.
    Call :meth:`.Watcher.stop` to detach it again.
    """
    watcher = Watcher(logger_name, out)
    watcher.watch(level)
    return watcher
