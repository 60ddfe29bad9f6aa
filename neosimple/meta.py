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


__all__ = ["__author__", "__email__", "__license__", "__package__", "__version__",
           "get_metadata", "http_user_agent"]

__author__ = "Nigel Small <technige@nige.tech>"
__email__ = "py2neo@nige.tech"
__license__ = "Apache License, Version 2.0"
__package__ = "neosimple"
__version__ = "1.0.0"


def get_metadata():
    """ Return the package metadata used by setup.py.
    """
    return {
        "name": __package__,
        "version": __version__,
        "description": "Asynchronous client for the Neo4j REST resource API",
        "author": __author__.partition(" <")[0],
        "author_email": __email__,
        "url": "https://py2neo.org/",
        "license": __license__,
        "python_requires": ">=3.7",
        "classifiers": [
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: Apache Software License",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3",
            "Topic :: Database",
            "Topic :: Software Development",
        ],
    }


def http_user_agent():
    """ Returns the default user agent sent over HTTP connections.
    """
    from sys import platform, version_info
    import urllib3
    fields = (__package__, __version__, urllib3.__version__,) + tuple(version_info) + (platform,)
    return "{}/{} urllib3/{} Python/{}.{}.{}-{}-{} ({})".format(*fields)
