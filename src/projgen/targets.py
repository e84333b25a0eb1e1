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
Build targets describe one output toolchain/platform combination, e.g.
"Visual Studio 2010 for Win32": which templates to render for each kind of
project, where to put the results and which files belong in the projects.
"""

import os.path
import re

import logging
logger = logging.getLogger("projgen.targets")

from projgen.error import Error
from projgen.io import EOL_WINDOWS
from projgen.pathutil import normalize_slashes
from projgen.project import Project
from projgen.utils import memoized


@memoized
def _compile(pattern):
    return re.compile(pattern)


def _ext_of(path):
    ext = os.path.splitext(path)[1]
    return ext[1:].lower() if ext else ""


def _normalize_exts(exts):
    return [e.lstrip(".").lower() for e in exts]


class BuildTarget(object):
    """
    Description of one output toolchain.

    .. attribute:: name

       Unique name of the target, e.g. ``VS2010``.

    .. attribute:: output_dir

       Directory, relative to the build root, where solution files go.

    .. attribute:: project_dir

       Subdirectory of :attr:`output_dir` where project files go.

    .. attribute:: base_dir

       Path leading from the project files' directory back to the build
       root, e.g. ``../../../``. Used to re-root all paths.

    .. attribute:: templates

       Dictionary of project template file names, keyed by project type.
    """
    def __init__(self, name, output_dir, project_dir, base_dir,
                 template_app, template_shared_app, template_lib,
                 template_shared_lib, template_plugin, template_sln,
                 output_ext, solution_ext=".sln", template_managed=None,
                 managed_ext=".csproj", filters_template=None,
                 eol=EOL_WINDOWS, bom=False):
        self.name = name
        self.output_dir = normalize_slashes(output_dir)
        self.project_dir = normalize_slashes(project_dir)
        self.base_dir = normalize_slashes(base_dir)
        self.templates = {
            Project.TYPE_APP:        template_app,
            Project.TYPE_SHARED_APP: template_shared_app,
            Project.TYPE_LIB:        template_lib,
            Project.TYPE_SHARED_LIB: template_shared_lib,
            Project.TYPE_ACTIVEX:    template_plugin,
            Project.TYPE_SAFARI:     template_plugin,
            Project.TYPE_CSPROJECT:  template_managed,
        }
        self.solution_template = template_sln
        self.filters_template = filters_template
        self.output_ext = output_ext
        self.solution_ext = solution_ext
        self.managed_ext = managed_ext
        self.eol = eol
        self.bom = bom
        self.file_exts = []
        self.source_file_exts = []
        self.reject_patterns = []
        self.dont_compile_patterns = []
        self.platforms = []

    def __str__(self):
        return "build target %s" % self.name

    def set_file_extensions(self, exts):
        """Sets extensions of files accepted into projects (e.g. ``["cpp", "h"]``)."""
        self.file_exts = _normalize_exts(exts)

    def set_source_file_extensions(self, exts):
        """Sets extensions of files that are compiled, not just listed."""
        self.source_file_exts = _normalize_exts(exts)

    def set_reject_patterns(self, patterns):
        """Sets regular expressions; matching paths are left out of projects."""
        self.reject_patterns = list(patterns)

    def set_dont_compile_patterns(self, patterns):
        """Sets regular expressions; matching files are listed, but not compiled."""
        self.dont_compile_patterns = list(patterns)

    def set_platforms(self, platforms):
        self.platforms = list(platforms)

    def supports_platform(self, platform):
        return platform in self.platforms

    def rule_reject(self, path):
        path = normalize_slashes(path)
        for p in self.reject_patterns:
            if _compile(p).search(path):
                return True
        return False

    def allowed_file_ext(self, path):
        return _ext_of(path) in self.file_exts

    def dont_compile(self, path):
        path = normalize_slashes(path)
        for p in self.dont_compile_patterns:
            if _compile(p).search(path):
                return True
        return False

    def is_source_file(self, path):
        return _ext_of(path) in self.source_file_exts and not self.dont_compile(path)

    def template_for(self, project):
        """
        Returns name of the template used for *project*'s kind, or
        :const:`None` if this target doesn't generate such projects.
        """
        return self.templates.get(project.type)

    def extension_for(self, project):
        """Returns extension of the project file generated for *project*."""
        if project.type == Project.TYPE_CSPROJECT:
            return self.managed_ext
        return self.output_ext

    def project_file_path(self, root_dir, project):
        """Returns full path of the project file for *project*."""
        return os.path.join(root_dir, self.output_dir, self.project_dir,
                            project.name + self.extension_for(project))

    def project_file_ref(self, project):
        """
        Returns path of *project*'s file relative to the solution
        directory, with forward slashes.
        """
        fn = project.name + self.extension_for(project)
        if self.project_dir:
            return "%s/%s" % (self.project_dir.rstrip("/"), fn)
        return fn

    def solution_file_path(self, root_dir, solution):
        return os.path.join(root_dir, self.output_dir,
                            solution.name + self.solution_ext)


class BuildTargets(object):
    """
    Registry of build targets of a generator run, in registration order.
    """
    def __init__(self):
        self._targets = {}

    def register(self, name, output_dir, project_dir, base_dir,
                 template_app, template_shared_app, template_lib,
                 template_shared_lib, template_plugin, template_sln,
                 output_ext, **kwargs):
        """
        Creates and stores a new :class:`BuildTarget` and returns it, so that
        it can be configured further.
        """
        if name in self._targets:
            raise Error("build target \"%s\" is already registered" % name)
        t = BuildTarget(name, output_dir, project_dir, base_dir,
                        template_app, template_shared_app, template_lib,
                        template_shared_lib, template_plugin, template_sln,
                        output_ext, **kwargs)
        logger.debug("registered %s", t)
        self._targets[name] = t
        return t

    def get(self, name):
        try:
            return self._targets[name]
        except KeyError:
            raise Error("unknown build target \"%s\"" % name)

    def all(self):
        return list(self._targets.values())

    def names(self):
        return list(self._targets.keys())

    def __len__(self):
        return len(self._targets)

    def __contains__(self, name):
        return name in self._targets

    def clear(self):
        self._targets.clear()
