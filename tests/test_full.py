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

import os, os.path
import shutil
import pytest
from glob import glob

import projgen.dumper
import projgen.error
from projgen.generator import Generator, DEFAULT_CONFIG

from indir import in_directory

def do_get_testdir():
    import projects
    return os.path.dirname(projects.__file__)

@pytest.fixture(scope='session')
def testdir():
    return do_get_testdir()

def project_names():
    """
    This function returns the names of all sample trees under tests/projects
    directory, i.e. directories with buildFiles/config/project.conf.
    """
    confs = glob(os.path.join(do_get_testdir(), "*", *DEFAULT_CONFIG.split("/")))
    return sorted(os.path.basename(os.path.dirname(os.path.dirname(os.path.dirname(f))))
                  for f in confs)

def copy_tree(testdir, name, tmpdir):
    root = str(tmpdir.join(name))
    shutil.copytree(os.path.join(testdir, name), root)
    return root

def configure(root, platform="win32"):
    g = Generator(root, platform=platform)
    with in_directory(root):
        g.run_script(DEFAULT_CONFIG)
    return g


@pytest.mark.parametrize('name', project_names())
def test_full(testdir, tmpdir, name):
    """
    Runs the sample tree's configuration and compares resulting model with a
    copy saved in .model file.
    """
    model_file = os.path.join(testdir, name + ".model")
    root = copy_tree(testdir, name, tmpdir)

    print('configuring %s' % name)
    try:
        g = configure(root)
        as_text = projgen.dumper.dump_generator(g)
    except projgen.error.Error as e:
        as_text = "ERROR:\n%s" % str(e).replace("\\", "/")
    print("""
created model:
---
%s
---
""" % as_text)

    with open(model_file, "rt") as f:
        expected = f.read().strip()
    assert as_text.strip() == expected


def test_full_generate_windows(testdir, tmpdir):
    root = copy_tree(testdir, "game", tmpdir)
    g = configure(root, "win32")
    g.generate()

    vs_dir = os.path.join(root, "buildFiles", "VisualStudio 2010")
    for fn in ["Game.vcxproj", "Game.vcxproj.filters", "zlib.vcxproj",
               "lpng.vcxproj", "GameActiveX.vcxproj"]:
        assert os.path.isfile(os.path.join(vs_dir, "projects", fn))
    assert os.path.isfile(os.path.join(vs_dir, "Game.sln"))
    assert not os.path.exists(os.path.join(root, "buildFiles", "Make"))

    with open(os.path.join(vs_dir, "projects", "Game.vcxproj"), "rt", encoding="utf-8-sig") as f:
        game = f.read()
    assert "str.cpp" in game
    assert "main.cpp" in game
    assert "posixFile.cpp" not in game
    assert "00000000-0000-0000-0000-000000000010" in game

    with open(os.path.join(vs_dir, "projects", "GameActiveX.vcxproj"), "rt", encoding="utf-8-sig") as f:
        activex = f.read()
    assert "IEWebGamePlugin.idl" in activex

    assert os.path.isfile(os.path.join(root, "web", "source", "activex", "GameActiveX", "IEWebGamePlugin.rgs"))
    with open(os.path.join(root, "web", "sample", "index.html"), "rt") as f:
        page = f.read()
    assert "<title>Space Game</title>" in page
    assert 'id="SpaceGamePlugin"' in page


def test_full_generate_linux(testdir, tmpdir):
    root = copy_tree(testdir, "game", tmpdir)
    g = configure(root, "linux")
    g.generate()

    make_dir = os.path.join(root, "buildFiles", "Make")
    for fn in ["Game.mk", "zlib.mk", "lpng.mk"]:
        assert os.path.isfile(os.path.join(make_dir, "projects", fn))
    # no makefile template for plugins
    assert not os.path.exists(os.path.join(make_dir, "projects", "GameActiveX.mk"))
    assert os.path.isfile(os.path.join(make_dir, "Game.mk"))
    assert not os.path.exists(os.path.join(root, "buildFiles", "VisualStudio 2010"))

    with open(os.path.join(make_dir, "projects", "Game.mk"), "rt") as f:
        game = f.read()
    assert "posixFile.cpp" in game
    assert "../../Engine/source/core/util/str.cpp" in game

    with open(os.path.join(make_dir, "Game.mk"), "rt") as f:
        sln = f.read()
    assert "include projects/Game.mk" in sln
    assert "GameActiveX" not in sln
