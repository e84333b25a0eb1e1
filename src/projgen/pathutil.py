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
Pure path string algorithms used when emitting project files.

Paths in build descriptions are written relative to the build root, but the
generated project files live at different depths below it, so every path
is re-rooted (see :func:`reroot`) and normalized textually. None of these
functions touch the filesystem.
"""

import re


def normalize_slashes(path):
    """Returns *path* with backslashes replaced by forward slashes."""
    return path.replace("\\", "/")


def windows_path(path):
    """Returns *path* with forward slashes replaced by backslashes."""
    return path.replace("/", "\\")


_DRIVE_RE = re.compile(r"^[A-Za-z]:[/\\]")

def is_absolute_path(path):
    """
    Returns true if *path* is absolute, either in Unix form or as a Windows
    drive-letter or UNC path. Works the same regardless of the host OS.
    """
    if not path:
        return False
    return (path[0] in "/\\") or bool(_DRIVE_RE.match(path))


def collapse_path(path):
    """
    Collapses ``.`` and ``..`` components of *path* textually.

    Empty and ``.`` components are dropped. A ``..`` component removes the
    previously accepted component, unless it is the very first component of
    the input or the previously accepted component is itself ``..``; in those
    two cases it is kept.

    Note that a ``..`` which would climb above the start of the path is
    silently dropped, i.e. ``collapse_path("a/../../b") == "b"``.

    >>> collapse_path("./a/b/")
    'a/b'
    >>> collapse_path("a/b/../c")
    'a/c'
    """
    parts = path.split("/")
    out = []
    for i, p in enumerate(parts):
        if p == "" or p == ".":
            continue
        if p == ".." and i > 0 and (not out or out[-1] != ".."):
            if out:
                out.pop()
            continue
        out.append(p)
    return "/".join(out)


def reroot(path, base_dir):
    """
    Re-expresses *path*, given relative to the build root, relative to a
    file living in a directory from which the root is reached by *base_dir*
    (e.g. ``../../``). Absolute paths are returned unchanged, apart from
    slashes normalization.
    """
    path = normalize_slashes(path)
    if is_absolute_path(path):
        return path
    if not base_dir:
        return collapse_path(path)
    return collapse_path("%s/%s" % (normalize_slashes(base_dir), path))


class Leaf(object):
    """
    A file in the displayed files tree.

    .. attribute:: path

       Path of the file as written to the project file.
    """
    def __init__(self, path):
        self.path = path

    @property
    def name(self):
        return self.path.rsplit("/", 1)[-1]

    def __eq__(self, other):
        return isinstance(other, Leaf) and other.path == self.path

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.path)

    def __repr__(self):
        return "Leaf(%r)" % self.path


class Group(object):
    """
    A directory grouping in the displayed files tree (a "filter" in Visual
    Studio terms). Children are ordered and are either :class:`Leaf` or
    :class:`Group` instances.
    """
    def __init__(self, name, children=None):
        self.name = name
        self.children = list(children) if children else []

    def group(self, name):
        """Returns child group *name*, creating it if needed."""
        for c in self.children:
            if isinstance(c, Group) and c.name == name:
                return c
        g = Group(name)
        self.children.append(g)
        return g

    def groups(self):
        return [c for c in self.children if isinstance(c, Group)]

    def leaves(self):
        return [c for c in self.children if isinstance(c, Leaf)]

    def __eq__(self, other):
        return (isinstance(other, Group) and
                other.name == self.name and
                other.children == self.children)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __repr__(self):
        return "Group(%r, %r)" % (self.name, self.children)


def build_file_tree(paths, name=""):
    """
    Builds a :class:`Group` tree out of a list of (already re-rooted) file
    paths. Leading ``..`` components don't produce groups.
    """
    root = Group(name)
    for p in paths:
        parts = [x for x in p.split("/") if x not in ("", ".", "..")]
        node = root
        for d in parts[:-1]:
            node = node.group(d)
        node.children.append(Leaf(p))
    return root


def trim_file_list(node):
    """
    Returns a copy of the files tree *node* in which every chain of groups
    with a single child group is collapsed: the outermost group keeps its
    own name and takes over the contents of the innermost one. The top level
    node itself is kept as is and leaves are never modified.

    The function is idempotent.
    """
    children = list(node.children)
    i = 0
    while i < len(children):
        c = children[i]
        if (isinstance(c, Group) and len(c.children) == 1 and
                isinstance(c.children[0], Group)):
            only = c.children[0]
            children[i] = Group(c.name, only.children)
            # the lifted group may be collapsible again
            i = 0
            continue
        i += 1
    return Group(node.name, [trim_file_list(c) if isinstance(c, Group) else c
                             for c in children])


def iter_leaves(node):
    """Yields all :class:`Leaf` nodes of the tree, depth first."""
    for c in node.children:
        if isinstance(c, Group):
            for x in iter_leaves(c):
                yield x
        else:
            yield c


def iter_groups(node, prefix=""):
    """
    Yields ``(full_name, group)`` pairs for all groups under *node*, parents
    before children. Names are joined with backslashes, as Visual Studio
    expects filter names.
    """
    for c in node.groups():
        full = "%s\\%s" % (prefix, windows_path(c.name)) if prefix else windows_path(c.name)
        yield (full, c)
        for x in iter_groups(c, full):
            yield x
