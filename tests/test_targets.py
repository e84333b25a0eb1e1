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

import pytest

from projgen.error import Error
from projgen.project import Project
from projgen.targets import BuildTargets
from projgen import stdtargets


def make_target(targets=None, name="VS2010"):
    if targets is None:
        targets = BuildTargets()
    t = targets.register(name, "buildFiles/VS", "projects", "../../../",
                         "app.em", "sharedapp.em", "lib.em", "sharedlib.em",
                         "plugin.em", "sln.em", ".vcxproj")
    t.set_file_extensions(["cpp", ".h", "RC"])
    t.set_source_file_extensions(["cpp"])
    t.set_reject_patterns([r"/mac/", r"_test\.cpp$"])
    t.set_dont_compile_patterns([r"/unity/"])
    t.set_platforms(["win32"])
    return t


def test_register_and_lookup():
    targets = BuildTargets()
    t = make_target(targets)
    assert targets.get("VS2010") is t
    assert "VS2010" in targets
    assert targets.names() == ["VS2010"]
    assert len(targets) == 1

def test_duplicate_registration_fails():
    targets = BuildTargets()
    make_target(targets)
    with pytest.raises(Error):
        make_target(targets)

def test_unknown_target_fails():
    with pytest.raises(Error):
        BuildTargets().get("Xcode")

def test_clear():
    targets = BuildTargets()
    make_target(targets)
    targets.clear()
    assert len(targets) == 0

def test_predicates():
    t = make_target()
    assert t.supports_platform("win32")
    assert not t.supports_platform("linux")

    assert t.rule_reject("source/platform/mac/main.cpp")
    assert t.rule_reject("source\\core\\util_test.cpp")
    assert not t.rule_reject("source/core/util.cpp")

    assert t.allowed_file_ext("a/b.CPP")
    assert t.allowed_file_ext("a/b.rc")
    assert not t.allowed_file_ext("a/b.txt")
    assert not t.allowed_file_ext("Makefile")

    assert t.is_source_file("source/core/util.cpp")
    assert not t.is_source_file("source/core/util.h")
    assert t.dont_compile("source/unity/all.cpp")
    assert not t.is_source_file("source/unity/all.cpp")

def test_templates_per_kind():
    t = make_target()
    assert t.template_for(Project("a", Project.TYPE_APP)) == "app.em"
    assert t.template_for(Project("a", Project.TYPE_SHARED_APP)) == "sharedapp.em"
    assert t.template_for(Project("a", Project.TYPE_LIB)) == "lib.em"
    assert t.template_for(Project("a", Project.TYPE_SHARED_LIB)) == "sharedlib.em"
    assert t.template_for(Project("a", Project.TYPE_ACTIVEX)) == "plugin.em"
    assert t.template_for(Project("a", Project.TYPE_SAFARI)) == "plugin.em"
    assert t.template_for(Project("a", Project.TYPE_CSPROJECT)) is None

def test_file_paths():
    t = make_target()
    app = Project("game", Project.TYPE_APP)
    cs = Project("tools", Project.TYPE_CSPROJECT)
    assert t.extension_for(app) == ".vcxproj"
    assert t.extension_for(cs) == ".csproj"
    assert t.project_file_ref(app) == "projects/game.vcxproj"
    assert t.project_file_path("/root", app).replace("\\", "/") == \
           "/root/buildFiles/VS/projects/game.vcxproj"

def test_standard_targets():
    targets = BuildTargets()
    stdtargets.register_defaults(targets)
    assert targets.names() == ["VS2010", "Make"]
    vs = targets.get("VS2010")
    make = targets.get("Make")
    assert vs.supports_platform("win32")
    assert make.supports_platform("linux") and make.supports_platform("mac")
    assert vs.rule_reject("Engine/source/platformMac/mac/x.mm")
    assert vs.rule_reject("Engine/.svn/entries")
    assert make.rule_reject("Engine/source/platform/win32/winWindow.cpp")
    assert make.template_for(Project("p", Project.TYPE_ACTIVEX)) is None
