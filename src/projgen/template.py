#
#  This file is part of projgen
#
#  Copyright (C) 2012 GarageGames, LLC
#
#  Permission is hereby granted, free of charge, to any person obtaining a copy
#  of this software and associated documentation files (the "Software"), to
#  deal in the Software without restriction, including without limitation the
#  rights to use, copy, modify, merge, publish, distribute, sublicense, and/or
#  sell copies of the Software, and to permit persons to whom the Software is
#  furnished to do so, subject to the following conditions:
#
#  The above copyright notice and this permission notice shall be included in
#  all copies or substantial portions of the Software.
#
#  THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
#  IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
#  FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
#  AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
#  LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
#  FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
#  IN THE SOFTWARE.
#

"""
Template engine used to render project, solution and other output files.

Templates are EmPy (http://www.alcyone.com/software/empy/) files; they are
looked up by name in a list of directories, the last of which is the
directory with the templates shipped with projgen.
"""

import os.path
import re
import uuid
from xml.sax.saxutils import escape, quoteattr

import em

import logging
logger = logging.getLogger("projgen.template")

from projgen.error import Error, TemplateNotFoundError
from projgen.pathutil import windows_path
from projgen.project import GUID


TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")


def xml_escape(value):
    return escape("" if value is None else str(value))

def xml_attr(value):
    return quoteattr("" if value is None else str(value))

def joined(items, sep=";"):
    return sep.join(str(x) for x in items if x)

def quote(value):
    """Quotes *value* for use in a command line or makefile, if needed."""
    value = "" if value is None else str(value)
    if not value or any(c in value for c in " \t\"'"):
        return '"%s"' % value.replace('"', '\\"')
    return value

# Namespace of GUIDs generated from within templates, e.g. for VS filters
NAMESPACE_TEMPLATE = uuid.UUID("{0E8A5B0C-3C7D-4A43-8C57-9A1B5E3F6D21}")

def make_guid(*parts):
    return GUID(NAMESPACE_TEMPLATE, "/".join(parts))

def make_var(name):
    """Returns *name* usable as part of a make variable name."""
    return re.sub(r"[^A-Za-z0-9_]", "_", name).upper()

_VS_HEADER_EXTS = ("h", "hh", "hpp", "hxx", "inl")

def vs_item_type(entry):
    """Returns MSBuild item type for a :class:`projgen.project.FileEntry`."""
    if entry.is_source:
        return "ClCompile"
    if entry.ext in _VS_HEADER_EXTS:
        return "ClInclude"
    if entry.ext == "rc":
        return "ResourceCompile"
    if entry.ext == "idl":
        return "Midl"
    return "None"

HELPERS = {
    "xml_escape":   xml_escape,
    "xml_attr":     xml_attr,
    "windows_path": windows_path,
    "joined":       joined,
    "quote":        quote,
    "make_guid":    make_guid,
    "make_var":     make_var,
    "vs_item_type": vs_item_type,
}


class TemplateEngine(object):
    """
    Renders named templates.

    Variables assigned with :meth:`assign` are visible in all subsequently
    rendered templates, in addition to per-render variables passed to
    :meth:`render`.
    """
    def __init__(self, search_path=None):
        self.search_path = list(search_path or []) + [TEMPLATES_DIR]
        self.variables = {}

    def add_search_dir(self, path):
        """Adds directory searched before the built-in templates."""
        self.search_path.insert(len(self.search_path) - 1, path)

    def assign(self, name, value):
        self.variables[name] = value

    def find(self, name):
        """
        Returns full path to the template *name*.
        Throws :class:`projgen.error.TemplateNotFoundError` if not found.
        """
        for d in self.search_path:
            fn = os.path.join(d, name)
            if os.path.isfile(fn):
                return fn
        raise TemplateNotFoundError("template \"%s\" not found" % name)

    def render(self, name, variables=None):
        """
        Renders template *name* and returns the result as a string.
        """
        filename = self.find(name)
        logger.debug("rendering %s", filename)
        with open(filename, "rt", encoding="utf-8") as f:
            source = f.read()
        namespace = dict(HELPERS)
        namespace.update(self.variables)
        if variables:
            namespace.update(variables)

        interpreter = _get_interpreter()
        interpreter.clear()
        interpreter.update(namespace)
        try:
            return interpreter.expand(source)
        except Error:
            interpreter.reset()
            raise
        except Exception as e:
            interpreter.reset()
            raise Error("error in template %s: %s: %s" % (filename, e.__class__.__name__, e))


_interpreter = None

def _get_interpreter():
    # EmPy checks its sys.stdout proxy whenever an interpreter is created,
    # so there is only one per process. It never touches sys.stdout itself.
    global _interpreter
    if _interpreter is None:
        _interpreter = em.Interpreter(output=em.NullFile(),
                                      options={em.OVERRIDE_OPT: False})
    return _interpreter
