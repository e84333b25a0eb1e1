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

import logging
import os.path

import pytest

import projgen.io
from projgen.error import (Error, ContextError, NoContextError,
                           TypeMismatchError)
from projgen.generator import Generator
from projgen.project import Project


def write_lib(tmpdir, name, text):
    tmpdir.join("Tools", "projectGenerator", "libs", name + ".conf").write(text, ensure=True)

def write_module(tmpdir, name, text):
    tmpdir.join("Tools", "projectGenerator", "modules", name + ".inc").write(text, ensure=True)


def test_paths(tmpdir):
    g = Generator(str(tmpdir))
    assert g.get_engine_src_dir() == "Engine/source/"
    assert g.get_lib_src_dir() == "Engine/lib/"
    assert g.get_engine_bin_dir() == "Engine/bin/"
    assert g.get_generator_libs_path() == os.path.join(str(tmpdir), "Tools", "projectGenerator", "libs")
    assert g.get_generator_modules_path() == os.path.join(str(tmpdir), "Tools", "projectGenerator", "modules")

def test_flags():
    g = Generator()
    assert g.get_tool_build()
    g.set_tool_build(False)
    g.set_demo_build(True)
    g.set_watermark_build(True)
    g.set_purchase_screen_build(1)
    g.set_object_limit_build(True)
    g.set_time_out_build(True)
    g.set_dll_runtime(True)
    g.set_game_project_name("Game")
    assert not g.get_tool_build()
    assert g.get_demo_build()
    assert g.get_watermark_build()
    assert g.get_purchase_screen_build() is True
    assert g.get_object_limit_build()
    assert g.get_time_out_build()
    assert g.get_dll_runtime()
    assert g.get_game_project_name() == "Game"

def test_begin_returns_handle():
    g = Generator()
    prj = g.begin_lib_config("zlib")
    assert prj is g.lookup_project_by_name("zlib")
    assert g.in_project_config()
    assert not g.is_app()
    assert g.end_lib_config(prj) is prj
    assert not g.in_project_config()

def test_second_open_project_fails():
    g = Generator()
    g.begin_app_config("game")
    with pytest.raises(ContextError):
        g.begin_lib_config("zlib")
    assert list(g.projects.keys()) == ["game"]
    assert g.project_cur.name == "game"

def test_close_type_mismatch():
    g = Generator()
    g.begin_app_config("game")
    with pytest.raises(TypeMismatchError):
        g.end_lib_config()

def test_close_without_open_project():
    g = Generator()
    with pytest.raises(NoContextError):
        g.end_app_config()

def test_close_wrong_handle():
    g = Generator()
    a = g.begin_lib_config("a")
    g.end_lib_config(a)
    g.begin_lib_config("b")
    with pytest.raises(ContextError):
        g.end_lib_config(a)

def test_operation_without_project():
    g = Generator()
    with pytest.raises(NoContextError):
        g.add_src_dir("source")
    with pytest.raises(NoContextError):
        g.is_defined("X")

def test_duplicate_project():
    g = Generator()
    g.begin_lib_config("a")
    g.end_lib_config()
    with pytest.raises(Error):
        g.begin_lib_config("a")

def test_project_config_context_manager():
    g = Generator()
    with g.project_config("game", Project.TYPE_APP) as prj:
        g.add_project_define("A", "1")
        assert g.is_defined("A")
        assert g.is_app()
    assert not g.in_project_config()
    assert prj.defines == ["A=1"]
    assert prj.output_name_debug == "game_DEBUG"

def test_project_operations():
    g = Generator()
    prj = g.begin_app_config("game", guid="{11111111-2222-3333-4444-555555555555}")
    g.add_src_dir("Engine\\source\\core", True)
    g.add_src_file("main.cpp")
    g.add_project_defines(["A", "B"])
    g.disable_project_warning(4996)
    g.add_project_lib_dir("Engine\\lib")
    g.add_project_lib_input("zlib.lib", "zlib_DEBUG.lib")
    g.add_project_lib_input("png.lib")
    g.add_project_ignore_default_lib("LIBC")
    g.add_project_dependency("zlib")
    g.add_project_dependency("png")
    g.remove_project_dependency("png")
    g.add_project_reference("System.Xml", "2.0")
    g.copy_file_to_project("data/game.ico", "game.ico")
    g.set_project_module_definition_file("source\\game.def")
    g.set_project_subsystem("Console")
    g.set_project_guid("{aaaaaaaa-2222-3333-4444-555555555555}")
    g.end_app_config()

    assert prj.dir_list == [("Engine/source/core", True), ("main.cpp", False)]
    assert prj.defines == ["A", "B"]
    assert prj.disabled_warnings == ["4996"]
    assert prj.lib_dirs == ["Engine/lib"]
    assert prj.libs == ["zlib.lib", "png.lib"]
    assert prj.libs_debug == ["zlib_DEBUG.lib", "png.lib"]
    assert prj.libs_ignore == ["LIBC"]
    assert prj.dependencies == ["zlib"]
    assert prj.references == {"System.Xml": "2.0"}
    assert prj.file_copy_paths == [("data/game.ico", "game.ico")]
    assert prj.module_definition_file == "source/game.def"
    assert prj.subsystem == "Console"
    assert prj.guid == "AAAAAAAA-2222-3333-4444-555555555555"


def test_include_lib_outside_project(tmpdir):
    write_lib(tmpdir, "zlib", 'begin_lib_config("zlib")\nend_lib_config()\n')
    g = Generator(str(tmpdir))
    g.include_lib("zlib")
    assert "zlib" in g.projects
    # second request is ignored
    g.include_lib("zlib")
    assert list(g.lib_guard) == ["zlib"]

def test_include_lib_is_deferred(tmpdir):
    write_lib(tmpdir, "zlib",
              'begin_lib_config("zlib")\n'
              'add_include_path(get_lib_src_dir() + "zlib")\n'
              'end_lib_config()\n')
    g = Generator(str(tmpdir))
    game = g.begin_app_config("game")
    g.include_lib("zlib")
    g.include_lib("zlib")
    assert "zlib" not in g.projects
    assert game.lib_includes == ["zlib"]
    g.end_app_config()
    assert "zlib" in g.projects
    assert g.app_lib_includes == ["Engine/lib/zlib"]
    # the app closed before the library was applied
    assert game.includes == []

    game2 = g.begin_app_config("game2")
    g.include_lib("zlib")
    g.end_app_config()
    assert game2.includes == ["Engine/lib/zlib"]
    assert list(g.projects.keys()) == ["game", "zlib", "game2"]

def test_includes_propagate_to_apps():
    g = Generator()
    g.begin_lib_config("zlib")
    g.add_include_path("lib/zlib")
    g.end_lib_config()
    g.begin_shared_lib_config("sdl")
    g.add_include_path("lib/sdl")
    g.add_include_path("lib/zlib")
    g.end_shared_lib_config()
    g.begin_cs_project_config("tools")
    g.add_include_path("tools/include")
    g.end_cs_project_config()
    g.begin_shared_app_config("engine")
    g.add_include_path("Engine/source")
    g.end_shared_app_config()
    app = g.begin_app_config("game")
    g.add_include_path("lib/zlib")
    g.end_app_config()
    assert g.app_lib_includes == ["lib/zlib", "lib/sdl", "Engine/source"]
    assert app.includes == ["lib/zlib", "lib/sdl", "Engine/source"]

def test_modules(tmpdir, caplog):
    write_module(tmpdir, "core", 'begin_module("core")\nadd_src_dir(get_engine_src_dir() + "core")\nend_module()\n')
    g = Generator(str(tmpdir))
    prj = g.begin_app_config("game")
    g.include_module("core")
    g.end_app_config()
    assert prj.dir_list == [("Engine/source/core", False)]

    g.begin_module("a")
    with caplog.at_level(logging.WARNING):
        g.begin_module("b")
    assert "already in module" in caplog.text
    assert g.module_cur == "a"
    g.end_module()
    with pytest.raises(NoContextError):
        g.end_module()

def test_solutions():
    g = Generator()
    g.begin_lib_config("zlib")
    g.end_lib_config()
    sln = g.begin_solution("all")
    with pytest.raises(ContextError):
        g.begin_solution("other")
    g.add_solution_project_ref("zlib")
    g.add_solution_project_ref_ext("Tools", "tools/Tools.csproj", "{abc}")
    assert g.end_solution(sln) is sln
    assert sln.project_refs == ["zlib"]
    assert sln.project_ext_refs["Tools"].guid == "ABC"
    assert [t.name for t in sln.outputs] == ["VS2010", "Make"]
    with pytest.raises(NoContextError):
        g.end_solution()
    with pytest.raises(NoContextError):
        g.add_solution_project_ref("zlib")

def test_outputs_use_registered_targets():
    g = Generator()
    g.register_build_target("Custom", "out", "prj", "../../",
                            "a.em", "a.em", "a.em", "a.em", "a.em", "s.em", ".x")
    prj = g.begin_lib_config("zlib")
    g.end_lib_config()
    assert [t.name for t in prj.outputs] == ["Custom"]

def test_outputs_limited_by_targets_to_use():
    g = Generator()
    g.targets_to_use = set(["Make"])
    prj = g.begin_lib_config("zlib")
    g.end_lib_config()
    assert [t.name for t in prj.outputs] == ["Make"]

def test_np_plugin_has_uniform_output(tmpdir):
    g = Generator(str(tmpdir))
    prj = g.begin_np_plugin_config("NPGame")
    g.end_np_plugin_config()
    assert prj.type == Project.TYPE_SHARED_LIB
    assert prj.output_name_debug == prj.output_name == "NPGame"


def test_run_script(tmpdir):
    script = tmpdir.join("project.conf")
    script.write('set_game_project_name("Game")\n'
                 'with project_config("Game", TYPE_APP):\n'
                 '    add_src_file("main.cpp")\n'
                 'generator.custom_value = 42\n')
    g = Generator(str(tmpdir))
    g.run_script(str(script))
    assert g.get_game_project_name() == "Game"
    assert g.projects["Game"].dir_list == [("main.cpp", False)]
    assert g.custom_value == 42

def test_run_script_error_position(tmpdir):
    script = tmpdir.join("bad.conf")
    script.write('begin_lib_config("a")\n'
                 'begin_lib_config("b")\n')
    g = Generator(str(tmpdir))
    with pytest.raises(ContextError) as e:
        g.run_script(str(script))
    assert e.value.pos == "%s:2" % script

def test_run_script_python_error(tmpdir):
    script = tmpdir.join("bad.conf")
    script.write('\n'
                 'no_such_function()\n')
    g = Generator(str(tmpdir))
    with pytest.raises(Error) as e:
        g.run_script(str(script))
    assert "NameError" in e.value.msg
    assert e.value.pos == "%s:2" % script

def test_run_missing_script(tmpdir):
    g = Generator(str(tmpdir))
    with pytest.raises(Error):
        g.run_script(str(tmpdir.join("missing.conf")))

def test_include_project_code(tmpdir):
    g = Generator(str(tmpdir))
    # missing script is fine
    g.include_project_code()
    tmpdir.join("buildFiles", "config", "projectCode.conf").write(
            'set_demo_build(True)\n', ensure=True)
    g.include_project_code()
    assert g.get_demo_build()

def test_generate_with_open_project(tmpdir):
    g = Generator(str(tmpdir))
    g.begin_app_config("game")
    with pytest.raises(ContextError):
        g.generate()

CS_TEMPLATE = """\
@(project.name) @(project.guid)
@[for name, version in references]@
ref @(name) @(version)
@[end for]@
"""

def test_managed_project(tmpdir):
    tmpdir.join("Tools", "projectGenerator", "templates", "cs_proj.em").write(CS_TEMPLATE, ensure=True)
    g = Generator(str(tmpdir), platform="win32")
    t = g.register_build_target("VS", "buildFiles/VS", "projects", "../../../",
                                "vc2010_proj.em", "vc2010_proj.em", "vc2010_proj.em",
                                "vc2010_proj.em", "vc2010_proj.em", "vc2010_sln.em",
                                ".vcxproj", template_managed="cs_proj.em",
                                eol=projgen.io.EOL_WINDOWS)
    t.set_platforms(["win32"])

    prj = g.begin_cs_project_config("Tools", "{00000000-0000-0000-0000-000000000030}")
    g.add_project_reference("System.Xml", "2.0")
    g.end_cs_project_config(prj)
    assert t.extension_for(prj) == ".csproj"
    sln = g.begin_solution("Game")
    g.add_solution_project_ref("Tools")
    g.end_solution(sln)
    g.generate()

    out = tmpdir.join("buildFiles", "VS")
    assert sorted(os.listdir(str(out.join("projects")))) == ["Tools.csproj"]
    csproj = out.join("projects", "Tools.csproj").read("rb").decode("utf-8")
    assert csproj.startswith("Tools 00000000-0000-0000-0000-000000000030\r\n")
    assert "ref System.Xml 2.0\r\n" in csproj

    text = out.join("Game.sln").read("rb").decode("utf-8")
    assert ('Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = "Tools", '
            '"projects\\Tools.csproj", "{00000000-0000-0000-0000-000000000030}"') in text
