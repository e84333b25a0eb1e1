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
Exceptions raised by the generator. Every error is fatal for the run: the
first one raised propagates up to :mod:`projgen.tool`, which reports it and
exits.

The :class:`error_context` helper attaches the location (typically the
build description script and line) to errors raised without one.
"""

import os.path
import traceback

import logging
logger = logging.getLogger("projgen.error")


class Error(Exception):
    """
    Base class for all projgen errors.

    When converted to string, the message is formatted in the usual way of
    compilers, as ``file:line: error``.

    .. attribute:: msg

        Error message to show to the user.

    .. attribute:: pos

        Location of the error as a string, e.g. ``libs/zlib.conf:12``.
        May be :const:`None`.
    """
    def __init__(self, msg, pos=None):
        super(Error, self).__init__(msg)
        self.msg = msg
        self.pos = pos

    def __str__(self):
        if self.pos:
            return "%s: %s" % (self.pos, self.msg)
        else:
            return self.msg


class ContextError(Error):
    """
    Raised when a configuration block is opened while another block of the
    same kind is already open, or when a handle passed to an ``end_*`` call
    isn't the currently open one.
    """
    pass


class NoContextError(Error):
    """
    Raised when an operation needs an open project (or solution, or module)
    and there is none.
    """
    pass


class TypeMismatchError(Error):
    """
    Raised when closing a project configuration with a different kind than
    the one it was opened with.
    """
    def __init__(self, expected, got, pos=None):
        text = "closing type mismatch: project is \"%s\", not \"%s\"" % (expected, got)
        super(TypeMismatchError, self).__init__(text, pos)
        self.expected = expected
        self.got = got


class UnresolvedProjectError(Error):
    """
    Raised when a solution references a project that was never configured.
    """
    pass


class UnresolvedDependencyError(Error):
    """
    Raised when a project depends on a project that was never configured.
    """
    pass


class TemplateNotFoundError(Error):
    """
    Raised by the template engine when a template file can't be found. The
    generator treats this as non-fatal and omits the output.
    """
    pass


class _ContextStack(object):
    """
    Helper class for keeping track of :class:`error_context` instances.
    """
    def __init__(self):
        self.stack = []

    def push(self, ctx):
        self.stack.append(ctx)

    def pop(self):
        self.stack.pop()

    @property
    def pos(self):
        for c in reversed(self.stack):
            p = c.pos
            if p: return p
        return None


_context_stack = _ContextStack()


class error_context(object):
    """
    Error context for adding positional information to exceptions thrown
    without one.

    The *context* is either a string (used as the position directly), a path
    of a build description script, or any object with ``pos`` attribute.
    When *script* is given, the line within that script that was executing
    when the error was raised is appended to the position.

    Usage:

    .. code-block:: python

       with error_context("libs/zlib.conf", script=True):
          ...execute the script...
    """
    def __init__(self, context, script=False):
        self.context = context
        self.script = script

    def __enter__(self):
        _context_stack.push(self)
        return self

    def __exit__(self, exc_type, exc_value, tb):
        _context_stack.pop()
        if isinstance(exc_value, Error) and exc_value.pos is None:
            if self.script:
                exc_value.pos = self._script_pos(tb)
            else:
                exc_value.pos = self.pos

    def _script_pos(self, tb):
        fn = os.path.abspath(self.context)
        line = None
        for frame in traceback.extract_tb(tb):
            if os.path.abspath(frame.filename) == fn:
                line = frame.lineno
        if line is None:
            return self.context
        return "%s:%d" % (self.context, line)

    @property
    def pos(self):
        c = self.context
        if isinstance(c, str):
            return c
        return getattr(c, "pos", None)


def warning(msg, *args, **kwargs):
    """
    Logs a warning.

    The function takes position arguments similarly to logging module's
    functions. It also accepts optional *pos* argument with position
    information; if not provided, the innermost :class:`error_context` is
    used.
    """
    text = msg % args
    pos = kwargs.get("pos", _context_stack.pos)
    logger.warning(text, extra={"pos": pos})
