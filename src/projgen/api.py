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
Extension points of the generator. Implementations register themselves
automatically when their class is defined, so importing a plugin module is
all that's needed to make it available.
"""

from abc import ABCMeta

from projgen.error import Error


# Metaclass used for all extensions in order to implement automatic
# extensions registration. For internal use only.
class _ExtensionMetaclass(ABCMeta):
    def __init__(cls, name, bases, dct):
        super(_ExtensionMetaclass, cls).__init__(name, bases, dct)

        # skip base classes, only register implementations:
        if name == "Extension":
            return
        if cls.__base__ is Extension:
            # initialize list of implementations for direct extensions:
            cls._implementations = {}
            return

        if cls.name is None:
            # helper class derived from an extension type, but not a fully
            # implemented extension
            return

        base = cls.__base__
        while base.__base__ is not Extension:
            base = base.__base__
        if cls.name in base._implementations:
            existing = base._implementations[cls.name]
            raise RuntimeError("conflicting implementations for %s \"%s\": %s.%s and %s.%s" %
                               (base.__name__,
                                cls.name,
                                cls.__module__, cls.__name__,
                                existing.__module__, existing.__name__))
        base._implementations[cls.name] = cls


# instances of all already requested extensions, keyed by (type,name)
_extension_instances = {}


class Extension(metaclass=_ExtensionMetaclass):
    """
    Base class for all projgen extensions.

    Extensions are singletons, there's always only one instance of given
    extension at runtime. Use the get() method called on appropriate extension
    type to obtain it. For example:

        activex = WebPlugin.get("activex")

    .. attribute:: name

       User-visible name of the extension.
    """

    @classmethod
    def get(cls, name=None):
        """
        Returns the instance of an extension.

        1. When called on an extension type class with *name* argument, it
           returns instance of extension with given name.

        2. When called without the *name* argument, it must be called on
           particular extension class and returns its (singleton) instance.
        """
        if name is None:
            assert cls.name is not None, \
                   "get() can only be called on fully implemented extension"
            name = cls.name
            while cls.__base__ is not Extension:
                cls = cls.__base__
        else:
            assert cls.name is None, \
                   "get(name) can only be called on extension base class"

        key = (cls, name)
        if key not in _extension_instances:
            try:
                impl = cls._implementations[name]
            except KeyError:
                raise Error("unknown %s \"%s\"" % (cls.__name__, name))
            _extension_instances[key] = impl()
        return _extension_instances[key]

    @classmethod
    def all(cls):
        """
        Returns iterator over instances of all implementations of this extension
        type.
        """
        for name in cls.all_names():
            yield cls.get(name)

    @classmethod
    def all_names(cls):
        """
        Returns names of all implementations of this extension type, sorted.
        """
        return sorted(cls._implementations.keys())

    name = None
    _implementations = {}
