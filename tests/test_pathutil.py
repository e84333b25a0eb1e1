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

from projgen.pathutil import (collapse_path, reroot, is_absolute_path,
                              normalize_slashes, windows_path, Leaf, Group,
                              build_file_tree, trim_file_list, iter_leaves,
                              iter_groups)


def test_collapse_path():
    assert collapse_path("./a/b/") == "a/b"
    assert collapse_path("a/b/../c") == "a/c"
    assert collapse_path("a//b/./c") == "a/b/c"
    assert collapse_path("") == ""

def test_collapse_path_leading_dotdot():
    assert collapse_path("../a") == "../a"
    assert collapse_path("../../a") == "../../a"
    assert collapse_path("../../a/../b") == "../../b"

def test_collapse_path_excess_dotdot_is_dropped():
    assert collapse_path("a/../../b") == "b"
    assert collapse_path("./../a") == "a"

def test_is_absolute_path():
    assert is_absolute_path("/usr/include")
    assert is_absolute_path("C:/Program Files")
    assert is_absolute_path("c:\\sdk")
    assert is_absolute_path("\\\\server\\share")
    assert not is_absolute_path("Engine/source")
    assert not is_absolute_path("../lib")
    assert not is_absolute_path("")

def test_slashes():
    assert normalize_slashes("a\\b\\c") == "a/b/c"
    assert windows_path("a/b/c") == "a\\b\\c"

def test_reroot():
    assert reroot("Engine/source/main.cpp", "../../../") == "../../../Engine/source/main.cpp"
    assert reroot("Engine\\lib\\zlib", "../../") == "../../Engine/lib/zlib"
    assert reroot("./game/../Engine", "../../") == "../../Engine"
    assert reroot("/opt/sdk/include", "../../") == "/opt/sdk/include"
    assert reroot("C:/DXSDK/Include", "../../") == "C:/DXSDK/Include"
    assert reroot("a/b", "") == "a/b"


def test_build_file_tree():
    tree = build_file_tree(["../../src/a.cpp", "../../src/core/b.cpp", "c.h"])
    assert tree == Group("", [
                        Group("src", [
                            Leaf("../../src/a.cpp"),
                            Group("core", [Leaf("../../src/core/b.cpp")]),
                        ]),
                        Leaf("c.h"),
                   ])
    assert [l.path for l in iter_leaves(tree)] == ["../../src/a.cpp",
                                                   "../../src/core/b.cpp",
                                                   "c.h"]

def test_trim_file_list_lifts_single_child_groups():
    tree = Group("", [
                Group("a", [
                    Group("b", [
                        Group("c", [Leaf("a/b/c/x.cpp"), Leaf("a/b/c/y.cpp")]),
                    ]),
                ]),
                Leaf("z.cpp"),
           ])
    trimmed = trim_file_list(tree)
    assert trimmed == Group("", [
                        Group("a", [Leaf("a/b/c/x.cpp"), Leaf("a/b/c/y.cpp")]),
                        Leaf("z.cpp"),
                      ])

def test_trim_file_list_keeps_groups_with_leaves():
    tree = Group("", [
                Group("a", [
                    Group("b", [Leaf("a/b/x.cpp")]),
                    Leaf("a/y.cpp"),
                ]),
           ])
    assert trim_file_list(tree) == tree

def test_trim_file_list_recurses():
    tree = Group("", [
                Group("src", [
                    Leaf("src/main.cpp"),
                    Group("platform", [
                        Group("win32", [Leaf("src/platform/win32/w.cpp")]),
                    ]),
                ]),
           ])
    trimmed = trim_file_list(tree)
    assert trimmed == Group("", [
                        Group("src", [
                            Leaf("src/main.cpp"),
                            Group("platform", [Leaf("src/platform/win32/w.cpp")]),
                        ]),
                      ])

def test_trim_file_list_is_idempotent():
    tree = build_file_tree(["a/b/c/d/x.cpp", "a/b/y.cpp", "e/f/g/z.cpp", "w.cpp"])
    once = trim_file_list(tree)
    twice = trim_file_list(once)
    assert once == twice
    # no group has a single group child anymore
    for name, g in iter_groups(once):
        assert not (len(g.children) == 1 and isinstance(g.children[0], Group))

def test_trim_file_list_does_not_modify_input():
    tree = build_file_tree(["a/b/x.cpp"])
    trim_file_list(tree)
    assert tree.children[0].name == "a"

def test_trim_file_list_never_touches_leaves():
    paths = ["a/b/c/x.cpp", "a/b/y.cpp", "q.cpp"]
    trimmed = trim_file_list(build_file_tree(paths))
    assert sorted(l.path for l in iter_leaves(trimmed)) == sorted(paths)

def test_iter_groups():
    tree = trim_file_list(build_file_tree(["src/a/x.cpp", "src/a/y.cpp", "src/b.cpp"]))
    assert [name for name, g in iter_groups(tree)] == ["src", "src\\a"]

def test_trimmed_group_keeps_parent_name_in_filters():
    tree = trim_file_list(build_file_tree(["engine/source/x.cpp",
                                           "engine/source/y.cpp"]))
    assert [name for name, g in iter_groups(tree)] == ["engine"]
    assert [l.path for l in iter_leaves(tree)] == ["engine/source/x.cpp",
                                                   "engine/source/y.cpp"]
