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
The generator facade. A :class:`Generator` holds all state of one
generation run: build targets, configured projects and solutions, the
currently open configuration blocks, library inclusion bookkeeping and
run-wide flags.

Build descriptions are Python scripts executed by :meth:`Generator.run_script`
with the facade's operations available as plain functions::

    begin_lib_config("zlib")
    add_src_dir(get_lib_src_dir() + "zlib")
    add_include_path(get_lib_src_dir() + "zlib")
    end_lib_config()
"""

import os.path
import sys
from contextlib import contextmanager

import logging
logger = logging.getLogger("projgen.generator")

import projgen.io
import projgen.plugins
from projgen import browsers, stdtargets
from projgen.error import (Error, ContextError, NoContextError,
                           TypeMismatchError, error_context, warning)
from projgen.plugins.webplugin import WebPlugin, WebDeployment, SamplePage
from projgen.pathutil import normalize_slashes
from projgen.project import Project, normalize_guid
from projgen.solution import Solution, PROJECT_KIND_NET
from projgen.targets import BuildTargets
from projgen.template import TemplateEngine, TEMPLATES_DIR
from projgen.utils import OrderedSet


# Location of the main build description, relative to the build root
DEFAULT_CONFIG = "buildFiles/config/project.conf"

# Optional project-specific script run by include_project_code()
PROJECT_CODE_CONFIG = "buildFiles/config/projectCode.conf"

# Generator's own data directory, relative to the build root
GENERATOR_DIR = "Tools/projectGenerator"


def default_platform():
    """Returns platform tag of the host system."""
    if sys.platform.startswith("win"):
        return "win32"
    elif sys.platform == "darwin":
        return "mac"
    else:
        return "linux"


class Generator(object):
    """
    State of one generation run and the operations used by build
    descriptions to modify it.

    .. attribute:: root_dir

       Absolute path to the build root. All paths in build descriptions are
       relative to it.

    .. attribute:: paths

       Dictionary of well-known directories, see :meth:`init`.

    .. attribute:: projects

       All configured projects, keyed by name, in configuration order.

    .. attribute:: solutions

       All configured solutions, keyed by name, in configuration order.

    .. attribute:: targets_to_use

       If not :const:`None`, set of build target names that projects and
       solutions are generated for; other registered targets are ignored.
    """

    # Operations exposed to build description scripts
    SCRIPT_API = (
        "set_game_project_name", "get_game_project_name",
        "set_tool_build", "get_tool_build",
        "set_watermark_build", "get_watermark_build",
        "set_purchase_screen_build", "get_purchase_screen_build",
        "set_demo_build", "get_demo_build",
        "set_object_limit_build", "get_object_limit_build",
        "set_time_out_build", "get_time_out_build",
        "set_dll_runtime", "get_dll_runtime",
        "get_generator_libs_path", "get_generator_modules_path",
        "get_engine_src_dir", "get_lib_src_dir", "get_engine_bin_dir",
        "register_build_target",
        "begin_module", "end_module", "include_module",
        "include_lib", "include_project_code",
        "begin_project_config", "end_project_config", "project_config",
        "begin_app_config", "end_app_config",
        "begin_shared_app_config", "end_shared_app_config",
        "begin_lib_config", "end_lib_config",
        "begin_shared_lib_config", "end_shared_lib_config",
        "begin_cs_project_config", "end_cs_project_config",
        "begin_active_x_config", "end_active_x_config",
        "begin_safari_config", "end_safari_config",
        "begin_np_plugin_config", "end_np_plugin_config",
        "in_project_config", "is_app", "lookup_project_by_name",
        "add_src_dir", "add_src_file", "add_include_path",
        "add_project_define", "add_project_defines", "is_defined",
        "disable_project_warning", "add_project_lib_dir",
        "add_project_lib_input", "add_project_ignore_default_lib",
        "add_project_dependency", "remove_project_dependency",
        "add_project_reference", "copy_file_to_project",
        "set_project_module_definition_file", "set_project_subsystem",
        "set_project_guid",
        "begin_solution", "end_solution",
        "add_solution_project_ref", "add_solution_project_ref_ext",
        "set_web_deployment", "browser_path",
    )

    def __init__(self, root_dir=None, platform=None):
        projgen.io.reset()
        self.root_dir = None
        self.paths = {}
        self.platform = platform or default_platform()
        self.targets = BuildTargets()
        self.targets_to_use = None
        self.projects = {}
        self.solutions = {}
        self.lib_guard = OrderedSet()
        self.app_lib_includes = []
        self.project_cur = None
        self.solution_cur = None
        self.module_cur = None

        self.game_project_name = None
        self.tool_build = True
        self.watermark_build = False
        self.purchase_screen_build = False
        self.demo_build = False
        self.object_limit_build = False
        self.time_out_build = False
        self.use_dll_runtime = False

        self.web_deployment = WebDeployment()
        self.sample_page = SamplePage()

        if root_dir is not None:
            self.init(root_dir)

    def init(self, root_dir):
        """
        Sets the build root and derives well-known paths from it:

        ``engineSrc``, ``engineLib``, ``engineBin``
            Engine directories, relative to the root (i.e. usable directly
            in build descriptions).
        ``libs``, ``modules``
            Directories with library (``<name>.conf``) and module
            (``<name>.inc``) scripts.
        ``templates``
            Directory with user templates, searched before the built-in ones.
        ``webTemplates``
            Directory with plugin scaffolding templates.
        """
        self.root_dir = os.path.abspath(root_dir)
        gen_dir = os.path.join(self.root_dir, GENERATOR_DIR)
        self.paths["engineSrc"] = "Engine/source/"
        self.paths["engineLib"] = "Engine/lib/"
        self.paths["engineBin"] = "Engine/bin/"
        self.paths["libs"] = os.path.join(gen_dir, "libs")
        self.paths["modules"] = os.path.join(gen_dir, "modules")
        self.paths["templates"] = os.path.join(gen_dir, "templates")
        user_web = os.path.join(gen_dir, "templates", "web")
        if os.path.isdir(user_web):
            self.paths["webTemplates"] = user_web
        else:
            self.paths["webTemplates"] = os.path.join(TEMPLATES_DIR, "web")
        logger.debug("build root: %s", self.root_dir)

    def _require_root(self):
        if self.root_dir is None:
            raise Error("generator wasn't initialized with build root")

    # Run-wide flags:

    def set_game_project_name(self, name):
        self.game_project_name = name

    def get_game_project_name(self):
        return self.game_project_name

    def set_tool_build(self, value):
        self.tool_build = bool(value)

    def get_tool_build(self):
        return self.tool_build

    def set_watermark_build(self, value):
        self.watermark_build = bool(value)

    def get_watermark_build(self):
        return self.watermark_build

    def set_purchase_screen_build(self, value):
        self.purchase_screen_build = bool(value)

    def get_purchase_screen_build(self):
        return self.purchase_screen_build

    def set_demo_build(self, value):
        self.demo_build = bool(value)

    def get_demo_build(self):
        return self.demo_build

    def set_object_limit_build(self, value):
        self.object_limit_build = bool(value)

    def get_object_limit_build(self):
        return self.object_limit_build

    def set_time_out_build(self, value):
        self.time_out_build = bool(value)

    def get_time_out_build(self):
        return self.time_out_build

    def set_dll_runtime(self, value):
        self.use_dll_runtime = bool(value)

    def get_dll_runtime(self):
        return self.use_dll_runtime

    def set_web_deployment(self, **settings):
        """Updates :class:`projgen.plugins.webplugin.WebDeployment` settings."""
        self.web_deployment.update(**settings)

    # Paths:

    def get_generator_libs_path(self):
        return self.paths["libs"]

    def get_generator_modules_path(self):
        return self.paths["modules"]

    def get_engine_src_dir(self):
        return self.paths["engineSrc"]

    def get_lib_src_dir(self):
        return self.paths["engineLib"]

    def get_engine_bin_dir(self):
        return self.paths["engineBin"]

    def browser_path(self, name):
        """Returns path to browser executable *name*, or :const:`None`."""
        return browsers.find_browser(name)

    # Build targets:

    def register_build_target(self, name, output_dir, project_dir, base_dir,
                              template_app, template_shared_app, template_lib,
                              template_shared_lib, template_plugin, template_sln,
                              output_ext, **kwargs):
        """
        Registers new build target and returns it. If the build description
        doesn't register any, the standard targets are used.
        """
        return self.targets.register(name, output_dir, project_dir, base_dir,
                                     template_app, template_shared_app,
                                     template_lib, template_shared_lib,
                                     template_plugin, template_sln,
                                     output_ext, **kwargs)

    def active_targets(self):
        """
        Returns build targets that closed projects and solutions are
        generated for.
        """
        if not len(self.targets):
            stdtargets.register_defaults(self.targets)
        targets = self.targets.all()
        if self.targets_to_use is not None:
            targets = [t for t in targets if t.name in self.targets_to_use]
        return targets

    # Scripts:

    def script_namespace(self):
        """
        Returns dictionary with globals for build description scripts.
        """
        ns = dict((name, getattr(self, name)) for name in self.SCRIPT_API)
        ns["generator"] = self
        ns["Project"] = Project
        ns["PROJECT_KIND_NET"] = PROJECT_KIND_NET
        for t in Project.ALL_TYPES:
            ns["TYPE_%s" % t.upper()] = t
        return ns

    def run_script(self, filename):
        """
        Executes build description script *filename*. Errors raised from it
        get the script's name and line as their position.
        """
        logger.debug("running script %s", filename)
        try:
            with open(filename, "rt", encoding="utf-8") as f:
                code = f.read()
        except IOError as e:
            raise Error("cannot read build description \"%s\": %s" % (filename, e.strerror))

        ns = self.script_namespace()
        ns["__file__"] = filename
        ns["__name__"] = "__projgen__"
        with error_context(filename, script=True) as ctx:
            try:
                exec(compile(code, filename, "exec"), ns)
            except Error:
                raise
            except Exception as e:
                err = Error("%s: %s" % (e.__class__.__name__, e))
                err.pos = ctx._script_pos(e.__traceback__)
                raise err from e

    def include_project_code(self):
        """Runs the project's own projectCode.conf script, if there is one."""
        self._require_root()
        fn = os.path.join(self.root_dir, PROJECT_CODE_CONFIG)
        if os.path.isfile(fn):
            self.run_script(fn)
        else:
            logger.debug("no %s, skipping", fn)

    # Modules:

    def begin_module(self, name):
        if self.module_cur:
            warning("cannot begin module \"%s\", already in module \"%s\"",
                    name, self.module_cur)
            return
        self.module_cur = name

    def end_module(self):
        if not self.module_cur:
            raise NoContextError("end_module() called with no active module")
        self.module_cur = None

    def include_module(self, name):
        """Runs the module script ``modules/<name>.inc``."""
        self.run_script(os.path.join(self.paths["modules"], name + ".inc"))

    # Libraries:

    def include_lib(self, name):
        """
        Applies library configuration ``libs/<name>.conf``, at most once per
        run. If a project is open, the library is applied only after that
        project is closed.
        """
        if name in self.lib_guard:
            return
        self.lib_guard.add(name)
        if self.in_project_config():
            logger.debug("deferring library %s until %s is closed",
                         name, self.project_cur.name)
            self.project_cur.lib_includes.append(name)
            return
        self._run_lib(name)

    def _run_lib(self, name):
        logger.debug("including library %s", name)
        self.run_script(os.path.join(self.paths["libs"], name + ".conf"))

    # Projects:

    def in_project_config(self):
        return self.project_cur is not None

    def is_app(self):
        """True if the open project is an application."""
        return self.project_cur is not None and self.project_cur.is_app()

    def lookup_project_by_name(self, name):
        return self.projects.get(name)

    def _project(self):
        if self.project_cur is None:
            raise NoContextError("no project configuration is open")
        return self.project_cur

    def begin_project_config(self, name, type, guid=None, game_dir="game", output_name=None):
        """
        Opens configuration of a new project and returns it. Only one project
        can be open at a time.
        """
        if self.project_cur is not None:
            raise ContextError("cannot begin project \"%s\": project \"%s\" is already open"
                               % (name, self.project_cur.name))
        if name in self.projects:
            raise Error("project \"%s\" is already defined" % name)
        prj = Project(name, type, guid, game_dir, output_name)
        logger.info("begin project: %s=%s", name, guid or "")
        self.projects[name] = prj
        self.project_cur = prj
        return prj

    def end_project_config(self, type, handle=None):
        """
        Closes the open project, which must be of given *type* (and be
        *handle*, if specified), and applies libraries it requested.
        """
        prj = self.project_cur
        if prj is None:
            raise NoContextError("cannot end %s project: no project is open" % type)
        if handle is not None and handle is not prj:
            raise ContextError("cannot end project \"%s\": project \"%s\" is open"
                               % (handle.name, prj.name))
        if prj.type != type:
            raise TypeMismatchError(prj.type, type)

        logger.info("end project %s", prj.name)
        prj.outputs = self.active_targets()
        prj.validate()

        if prj.type == Project.TYPE_APP:
            prj.add_includes(self.app_lib_includes)
        elif prj.contributes_includes():
            for inc in prj.includes:
                if inc not in self.app_lib_includes:
                    self.app_lib_includes.append(inc)

        self.project_cur = None
        for lib in prj.lib_includes:
            self._run_lib(lib)
        return prj

    @contextmanager
    def project_config(self, name, type, guid=None, game_dir="game", output_name=None):
        """
        Context manager wrapping :meth:`begin_project_config` and
        :meth:`end_project_config`::

            with project_config("game", Project.TYPE_APP) as prj:
                add_src_dir("source")
        """
        prj = self.begin_project_config(name, type, guid, game_dir, output_name)
        yield prj
        self.end_project_config(type, prj)

    def _begin_plugin_config(self, plugin, name, type, guid, game_dir, output_name):
        prj = self.begin_project_config(name, type, guid, game_dir, output_name)
        self._require_root()
        WebPlugin.get(plugin).process(self, prj)
        return prj

    def begin_app_config(self, name, guid=None, game_dir="game", output_name=None):
        return self.begin_project_config(name, Project.TYPE_APP, guid, game_dir, output_name)

    def end_app_config(self, handle=None):
        return self.end_project_config(Project.TYPE_APP, handle)

    def begin_shared_app_config(self, name, guid=None, game_dir="game", output_name=None):
        return self.begin_project_config(name, Project.TYPE_SHARED_APP, guid, game_dir, output_name)

    def end_shared_app_config(self, handle=None):
        return self.end_project_config(Project.TYPE_SHARED_APP, handle)

    def begin_lib_config(self, name, guid=None, game_dir="game", output_name=None):
        return self.begin_project_config(name, Project.TYPE_LIB, guid, game_dir, output_name)

    def end_lib_config(self, handle=None):
        return self.end_project_config(Project.TYPE_LIB, handle)

    def begin_shared_lib_config(self, name, guid=None, game_dir="game", output_name=None):
        return self.begin_project_config(name, Project.TYPE_SHARED_LIB, guid, game_dir, output_name)

    def end_shared_lib_config(self, handle=None):
        return self.end_project_config(Project.TYPE_SHARED_LIB, handle)

    def begin_cs_project_config(self, name, guid=None, game_dir="game", output_name=None):
        return self.begin_project_config(name, Project.TYPE_CSPROJECT, guid, game_dir, output_name)

    def end_cs_project_config(self, handle=None):
        return self.end_project_config(Project.TYPE_CSPROJECT, handle)

    def begin_active_x_config(self, name, guid=None, game_dir="game", output_name=None):
        return self._begin_plugin_config("activex", name, Project.TYPE_ACTIVEX,
                                         guid, game_dir, output_name)

    def end_active_x_config(self, handle=None):
        return self.end_project_config(Project.TYPE_ACTIVEX, handle)

    def begin_safari_config(self, name, guid=None, game_dir="game", output_name=None):
        return self._begin_plugin_config("safari", name, Project.TYPE_SAFARI,
                                         guid, game_dir, output_name)

    def end_safari_config(self, handle=None):
        return self.end_project_config(Project.TYPE_SAFARI, handle)

    def begin_np_plugin_config(self, name, guid=None, game_dir="game", output_name=None):
        prj = self.begin_project_config(name, Project.TYPE_SHARED_LIB, guid, game_dir, output_name)
        prj.set_uniform_output_file()
        self._require_root()
        WebPlugin.get("npapi").process(self, prj)
        return prj

    def end_np_plugin_config(self, handle=None):
        return self.end_project_config(Project.TYPE_SHARED_LIB, handle)

    # Operations on the open project:

    def add_src_dir(self, path, recurse=False):
        self._project().add_src_dir(path, recurse)

    def add_src_file(self, path):
        self._project().add_src_file(path)

    def add_include_path(self, path):
        self._project().add_include(path)

    def add_project_define(self, name, value=None):
        self._project().add_define(name, value)

    def add_project_defines(self, defines):
        """Adds list of bare defines."""
        prj = self._project()
        for d in defines:
            prj.add_define(d)

    def is_defined(self, name):
        return self._project().is_defined(name)

    def disable_project_warning(self, warning_id):
        self._project().disabled_warnings.append(str(warning_id))

    def add_project_lib_dir(self, path):
        self._project().lib_dirs.append(normalize_slashes(path))

    def add_project_lib_input(self, lib, lib_debug=None):
        self._project().add_lib_input(lib, lib_debug)

    def add_project_ignore_default_lib(self, lib):
        self._project().libs_ignore.append(lib)

    def add_project_dependency(self, name):
        self._project().add_dependency(name)

    def remove_project_dependency(self, name):
        self._project().remove_dependency(name)

    def add_project_reference(self, name, version=""):
        self._project().add_reference(name, version)

    def copy_file_to_project(self, source, dest):
        self._project().copy_file(source, dest)

    def set_project_module_definition_file(self, path):
        self._project().module_definition_file = normalize_slashes(path)

    def set_project_subsystem(self, subsystem):
        self._project().set_subsystem(subsystem)

    def set_project_guid(self, guid):
        self._project().guid = normalize_guid(guid)

    # Solutions:

    def _solution(self):
        if self.solution_cur is None:
            raise NoContextError("no solution is open")
        return self.solution_cur

    def begin_solution(self, name, guid=None):
        if self.solution_cur is not None:
            raise ContextError("cannot begin solution \"%s\": already in solution \"%s\""
                               % (name, self.solution_cur.name))
        if name in self.solutions:
            raise Error("solution \"%s\" is already defined" % name)
        sln = Solution(name, guid)
        self.solutions[name] = sln
        self.solution_cur = sln
        return sln

    def add_solution_project_ref(self, name):
        self._solution().add_project_ref(name)

    def add_solution_project_ref_ext(self, name, path, guid, kind=PROJECT_KIND_NET):
        self._solution().add_project_ref_ext(name, path, guid, kind)

    def end_solution(self, handle=None):
        sln = self.solution_cur
        if sln is None:
            raise NoContextError("end_solution() called with no active solution")
        if handle is not None and handle is not sln:
            raise ContextError("cannot end solution \"%s\": solution \"%s\" is open"
                               % (handle.name, sln.name))
        sln.set_outputs(self.active_targets())
        self.solution_cur = None
        return sln

    # Generation:

    def create_engine(self):
        """
        Creates template engine searching user templates (if any) before the
        built-in ones.
        """
        search = []
        user = self.paths.get("templates")
        if user and os.path.isdir(user):
            search.append(user)
        return TemplateEngine(search)

    def _assign_globals(self, engine):
        engine.assign("generator", self)
        engine.assign("platform", self.platform)
        engine.assign("game_project_name", self.game_project_name)
        engine.assign("tool_build", self.tool_build)
        engine.assign("watermark_build", self.watermark_build)
        engine.assign("purchase_screen_build", self.purchase_screen_build)
        engine.assign("demo_build", self.demo_build)
        engine.assign("object_limit_build", self.object_limit_build)
        engine.assign("time_out_build", self.time_out_build)
        engine.assign("use_dll_runtime", self.use_dll_runtime)
        engine.assign("web_deployment", self.web_deployment)

    def _check_closed(self):
        if self.project_cur is not None:
            raise ContextError("project \"%s\" was never closed" % self.project_cur.name)
        if self.solution_cur is not None:
            raise ContextError("solution \"%s\" was never closed" % self.solution_cur.name)

    def generate_projects(self, engine):
        self._require_root()
        self._check_closed()
        self._assign_globals(engine)
        for name, prj in self.projects.items():
            logger.info("processing project '%s'...", name)
            prj.generate(engine, self.platform, self.root_dir, self.projects)

    def generate_solutions(self, engine):
        self._require_root()
        self._check_closed()
        self._assign_globals(engine)
        for name, sln in self.solutions.items():
            logger.info("generating solution: %s", name)
            with error_context(str(sln)):
                sln.generate(engine, self.platform, self.root_dir, self.projects,
                             startup=self.game_project_name)

    def write_sample_page(self):
        """
        Writes the sample page embedding all configured web plugins. Does
        nothing if it was already written or there are no plugins.
        """
        self._require_root()
        if self.sample_page.written or not self.sample_page.fragments:
            return False
        template = os.path.join(self.paths["webTemplates"], "sample", "index.html")
        try:
            with open(template, "rt", encoding="utf-8") as f:
                text = f.read()
        except IOError:
            warning("sample page template \"%s\" not found, skipping", template)
            return False
        filename = os.path.join(self.root_dir, "web", "sample", "index.html")
        return self.sample_page.write(filename, text, self.web_deployment)

    def generate(self, engine=None):
        """
        Generates everything: projects, solutions and the sample page.
        """
        if engine is None:
            engine = self.create_engine()
        self.generate_projects(engine)
        self.generate_solutions(engine)
        self.write_sample_page()
