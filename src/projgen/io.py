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
Helper classes for projgen I/O. Manages writing of output, detecting
changes, line endings conversions etc.
"""

import os
import os.path
import sys
from difflib import unified_diff

import logging
logger = logging.getLogger("projgen.io")


# Set to true to prevent any output from being written
dry_run = False

# Set to true to show diff with the existing file instead of updating it
diff_only = False

# Set to true to force writing of output files, even if they exist and would be
# unchanged.
force_output = False

# Number of created files
num_created = 0
# Number of modified files
num_modified = 0

EOL_WINDOWS = "win"
EOL_UNIX    = "unix"

_all_written_files = {}


def reset():
    """
    Forgets about files written so far and resets the counters. Called at
    the start of every generation run.
    """
    global num_created, num_modified
    num_created = 0
    num_modified = 0
    _all_written_files.clear()


class OutputFile(object):
    """
    File to be written by projgen.

    Example usage:

    ::

      f = io.OutputFile("game.sln", io.EOL_WINDOWS)
      f.write(body)
      f.commit()

    Notice the need to explicitly call commit().
    """
    def __init__(self, filename, eol, charset="utf-8", bom=False,
                 creator=None, create_for=None):
        """
        Creates output file.

        :param filename: Name of the output file. Should be either relative
                         to CWD or absolute; the latter is recommended.
        :param eol:      Line endings to use. One of EOL_WINDOWS and EOL_UNIX.
        :param charset:  Charset used to encode the text.
        :param bom:      Whether to write the UTF-8 byte order mark.
        :param creator:  Who is creating the file; typically a build target.
        :param create_for: Object the file is created for, e.g. a project.
        """
        filename = os.path.abspath(filename)
        if filename in _all_written_files:
            creator1, create_for1 = _all_written_files[filename]
            from projgen.error import Error
            raise Error("conflict in file %s, generated both by %s for %s and %s for %s" %
                        (filename, creator1, create_for1, creator, create_for))
        _all_written_files[filename] = (creator, create_for)

        self.filename = filename
        self.eol = eol
        self.charset = charset
        self.bom = bom
        self.text = ""

    def write(self, text):
        """
        Writes text to the output. Note that the changes don't take effect
        until you call commit().
        """
        self.text += text

    def _encoded(self):
        text = self.text
        if self.eol == EOL_WINDOWS:
            text = text.replace("\r\n", "\n").replace("\n", "\r\n")
        data = text.encode(self.charset)
        if self.bom:
            data = b"\xef\xbb\xbf" + data
        return data

    def commit(self):
        data = self._encoded()
        try:
            rel_fn = os.path.relpath(self.filename)
        except ValueError:
            # This can happen under Windows if the filename is on a different
            # drive from the current directory.
            rel_fn = self.filename

        if not force_output:
            try:
                with open(self.filename, "rb") as f:
                    old = f.read()
            except IOError:
                old = None
            if old == data:
                logger.info(".\t%s", rel_fn)
                return
            if diff_only:
                old_text = old.decode(self.charset, "replace") if old is not None else ""
                for line in unified_diff(old_text.splitlines(True),
                                         data.decode(self.charset).splitlines(True),
                                         os.path.join("old", rel_fn),
                                         os.path.join("new", rel_fn)):
                    sys.stdout.write(line)
                return
        else:
            old = None

        global num_created, num_modified
        if old is None:
            status = "A"
            num_created += 1
        else:
            status = "U"
            num_modified += 1

        logger.info("%s\t%s", status, rel_fn)

        if dry_run:
            return # nothing to do, just pretending to write output

        dirname = os.path.dirname(self.filename)
        if dirname and not os.path.isdir(dirname):
            os.makedirs(dirname)
        with open(self.filename, "wb") as f:
            f.write(data)
