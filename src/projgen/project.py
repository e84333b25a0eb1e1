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
Projects are the compilation or packaging units of the generated output:
each of them becomes one project file per applicable build target.
"""

import os
import os.path
import shutil
import uuid

import logging
logger = logging.getLogger("projgen.project")

import projgen.io
from projgen.error import (Error, UnresolvedDependencyError,
                           TemplateNotFoundError, error_context, warning)
from projgen.io import OutputFile
from projgen.pathutil import (normalize_slashes, is_absolute_path, reroot,
                              build_file_tree, trim_file_list, iter_groups)
from projgen.utils import filter_duplicates


# Namespace constant for generated GUIDs
NAMESPACE_PROJECT = uuid.UUID("{4C3D8C2E-0F1A-4D0B-9D5A-2B6E1F7C9A10}")

def GUID(namespace, data):
    """
    Generates stable GUID in given namespace for given data (typically,
    project name).
    """
    return str(uuid.uuid5(namespace, str(data))).upper()


def normalize_guid(guid):
    """Returns *guid* upper-cased and without braces."""
    return guid.strip().strip("{}").upper()


# Directories never descended into when scanning for sources
IGNORED_DIRS = frozenset([".", "..", ".svn", "_svn", "CVS", ".git"])


class FileEntry(object):
    """
    A file as listed in a generated project.

    .. attribute:: path

       Path relative to the project file.

    .. attribute:: source

       Path as declared, relative to the build root.

    .. attribute:: is_source

       True if the file is compiled, false if it is only listed (headers,
       resources etc.).
    """
    def __init__(self, path, source, is_source):
        self.path = path
        self.source = source
        self.is_source = is_source

    @property
    def ext(self):
        return os.path.splitext(self.path)[1][1:].lower()

    def __repr__(self):
        return "FileEntry(%r, %s)" % (self.path, self.is_source)


class Project(object):
    """
    Accumulated configuration of one project.

    Projects are only modified while they are open, i.e. between the
    generator's ``begin_*_config`` and ``end_*_config`` calls; after that,
    they are only read.

    .. attribute:: name

       Unique name of the project; also the base name of generated files.

    .. attribute:: type

       One of the ``TYPE_*`` constants.

    .. attribute:: dir_list

       Ordered list of ``(path, recurse)`` pairs with source files and
       directories to scan, relative to the build root.

    .. attribute:: lib_includes

       Names of libraries requested while the project was open; they are
       applied after the project is closed.

    .. attribute:: outputs

       Build targets the project is generated for, fixed when the project
       is closed.
    """

    TYPE_APP        = "app"
    TYPE_SHARED_APP = "sharedapp"
    TYPE_LIB        = "lib"
    TYPE_SHARED_LIB = "sharedlib"
    TYPE_ACTIVEX    = "activex"
    TYPE_SAFARI     = "safari"
    TYPE_CSPROJECT  = "csproj"

    ALL_TYPES = (TYPE_APP, TYPE_SHARED_APP, TYPE_LIB, TYPE_SHARED_LIB,
                 TYPE_ACTIVEX, TYPE_SAFARI, TYPE_CSPROJECT)

    def __init__(self, name, type, guid=None, game_dir="game", output_name=None):
        if type not in self.ALL_TYPES:
            raise Error("unknown project type \"%s\" of project \"%s\"" % (type, name))
        self.name = name
        self.type = type
        self.guid = normalize_guid(guid) if guid else None
        self.game_dir = normalize_slashes(game_dir or "game")
        self.output_name = output_name or None
        self.output_name_debug = None
        self.uniform_output_file = False

        self.dir_list = []
        self.includes = []
        self.defines = []
        self.disabled_warnings = []
        self.lib_dirs = []
        self.libs = []
        self.libs_debug = []
        self.libs_ignore = []
        self.dependencies = []
        self.lib_includes = []
        self.references = {}
        self.file_copy_paths = []
        self.module_definition_file = None
        self.subsystem = None
        self.web_plugin = None
        self.outputs = []

    def __str__(self):
        return "project %s" % self.name

    def __repr__(self):
        return "<Project %s (%s)>" % (self.name, self.type)

    # Kind queries:

    def is_app(self):
        return self.type in (self.TYPE_APP, self.TYPE_SHARED_APP)

    def is_lib(self):
        return self.type == self.TYPE_LIB

    def is_shared_lib(self):
        return self.type in (self.TYPE_SHARED_LIB, self.TYPE_ACTIVEX,
                             self.TYPE_SAFARI)

    def is_managed(self):
        return self.type == self.TYPE_CSPROJECT

    def contributes_includes(self):
        """
        True if the project's include paths are made available to
        application projects closed after it.
        """
        return self.type in (self.TYPE_LIB, self.TYPE_SHARED_LIB,
                             self.TYPE_ACTIVEX, self.TYPE_SAFARI,
                             self.TYPE_SHARED_APP)

    # Accumulation:

    def add_src_dir(self, path, recurse=False):
        self.dir_list.append((normalize_slashes(path).rstrip("/"), recurse))

    def add_src_file(self, path):
        self.dir_list.append((normalize_slashes(path), False))

    def add_include(self, path):
        self.includes.append(normalize_slashes(path))

    def add_includes(self, paths):
        """Adds those of *paths* that aren't already present."""
        for p in paths:
            if p not in self.includes:
                self.includes.append(p)

    def add_define(self, name, value=None):
        """Adds define *name*, bare if *value* is empty, zero or missing."""
        if not value:
            self.defines.append(name)
        else:
            self.defines.append("%s=%s" % (name, value))

    def is_defined(self, name):
        """
        Returns true if *name* was defined, either as bare symbol or with a
        value.
        """
        for d in self.defines:
            if d == name or d.startswith(name + "="):
                return True
        return False

    def add_lib_input(self, lib, lib_debug=None):
        self.libs.append(lib)
        self.libs_debug.append(lib_debug if lib_debug else lib)

    def add_dependency(self, name):
        self.dependencies.append(name)

    def remove_dependency(self, name):
        self.dependencies = [d for d in self.dependencies if d != name]

    def add_reference(self, name, version=""):
        self.references[name] = version

    def copy_file(self, source, dest):
        self.file_copy_paths.append((normalize_slashes(source),
                                     normalize_slashes(dest)))

    def set_subsystem(self, subsystem):
        self.subsystem = subsystem

    def set_uniform_output_file(self):
        """Use the same output file name in all configurations."""
        self.uniform_output_file = True

    # Validation:

    def validate(self):
        """
        Called when the project is closed. Fills in defaults and removes
        duplicates; doesn't depend on any build target.
        """
        if not self.output_name:
            self.output_name = self.name
        if self.uniform_output_file:
            self.output_name_debug = self.output_name
        else:
            self.output_name_debug = self.output_name + "_DEBUG"
        if not self.guid:
            self.guid = GUID(NAMESPACE_PROJECT, self.name)
        self.includes = list(filter_duplicates(self.includes))
        self.defines = list(filter_duplicates(self.defines))

    def validate_dependencies(self, projects):
        """
        Checks that all dependencies are known projects and returns them, as
        :class:`Project` instances, in declaration order.

        :param projects: Mapping of names to all configured projects.
        """
        deps = []
        for d in filter_duplicates(self.dependencies):
            try:
                deps.append(projects[d])
            except KeyError:
                raise UnresolvedDependencyError(
                        "project \"%s\" depends on unknown project \"%s\"" % (self.name, d))
        return deps

    # Generation:

    def collect_files(self, target, root_dir):
        """
        Returns list of all files, relative to the build root, that belong to
        this project in *target*.
        """
        files = []
        for path, recurse in self.dir_list:
            full = path if is_absolute_path(path) else os.path.join(root_dir, path)
            if os.path.isdir(full):
                files += self._scan_dir(target, root_dir, path, recurse)
            elif not target.rule_reject(path):
                files.append(path)
        return list(filter_duplicates(files))

    def _scan_dir(self, target, root_dir, path, recurse):
        full = path if is_absolute_path(path) else os.path.join(root_dir, path)
        found = []
        subdirs = []
        for entry in sorted(os.listdir(full)):
            if entry in IGNORED_DIRS:
                continue
            rel = "%s/%s" % (path, entry) if path else entry
            if os.path.isdir(os.path.join(full, entry)):
                if recurse and not target.rule_reject(rel + "/"):
                    subdirs.append(rel)
                continue
            if target.rule_reject(rel):
                logger.debug("%s: rejected %s", target.name, rel)
                continue
            if not target.allowed_file_ext(rel):
                continue
            found.append(rel)
        for d in subdirs:
            found += self._scan_dir(target, root_dir, d, recurse)
        return found

    def template_variables(self, target, platform, root_dir, projects):
        """
        Returns dictionary with everything the project templates use.
        """
        base = target.base_dir
        entries = [FileEntry(reroot(f, base), f, target.is_source_file(f))
                   for f in self.collect_files(target, root_dir)]
        tree = trim_file_list(build_file_tree([e.path for e in entries]))
        deps = [projects[d] for d in filter_duplicates(self.dependencies)
                if d in projects]
        mdef = self.module_definition_file
        return {
            "project":           self,
            "target":            target,
            "platform":          platform,
            "files":             entries,
            "sources":           [e for e in entries if e.is_source],
            "headers":           [e for e in entries if not e.is_source],
            "file_tree":         tree,
            "groups":            list(iter_groups(tree)),
            "includes":          [reroot(p, base) for p in self.includes],
            "lib_dirs":          [reroot(p, base) for p in self.lib_dirs],
            "defines":           self.defines,
            "libs":              self.libs,
            "libs_debug":        self.libs_debug,
            "libs_ignore":       self.libs_ignore,
            "disabled_warnings": self.disabled_warnings,
            "dependencies":      deps,
            "references":        sorted(self.references.items()),
            "module_definition_file": reroot(mdef, base) if mdef else None,
            "game_dir":          reroot(self.game_dir, base),
            "output_name":       self.output_name,
            "output_name_debug": self.output_name_debug,
            "subsystem":         self.subsystem,
            "project_ref":       lambda p: target.project_file_ref(p).rsplit("/", 1)[-1],
        }

    def generate(self, engine, platform, root_dir, projects=None):
        """
        Writes project files for all build targets of this project that
        support *platform*.

        :param engine:   :class:`projgen.template.TemplateEngine` to render
                         with; it already contains run-wide variables.
        :param projects: Mapping of all configured projects, used to look up
                         dependencies' GUIDs. Unknown dependencies are skipped
                         here; they are reported when generating solutions.
        """
        if projects is None:
            projects = {}
        for target in self.outputs:
            if not target.supports_platform(platform):
                continue
            template = target.template_for(self)
            if not template:
                logger.debug("%s: no template for %s projects, skipping %s",
                             target.name, self.type, self.name)
                continue
            with error_context(str(self)):
                self._generate_for_target(engine, target, template, platform,
                                          root_dir, projects)

    def _generate_for_target(self, engine, target, template, platform, root_dir, projects):
        variables = self.template_variables(target, platform, root_dir, projects)
        filename = target.project_file_path(root_dir, self)
        try:
            text = engine.render(template, variables)
        except TemplateNotFoundError as e:
            warning("%s: %s, not generating %s", target.name, e.msg, filename)
            return
        f = OutputFile(filename, target.eol, bom=target.bom,
                       creator=target, create_for=self)
        f.write(text)
        f.commit()

        if target.filters_template:
            try:
                text = engine.render(target.filters_template, variables)
            except TemplateNotFoundError as e:
                warning("%s: %s", target.name, e.msg)
            else:
                f = OutputFile(filename + ".filters", target.eol, bom=target.bom,
                               creator=target, create_for=self)
                f.write(text)
                f.commit()

        self._copy_files(os.path.dirname(filename), root_dir)

    def _copy_files(self, project_dir, root_dir):
        for src, dst in self.file_copy_paths:
            full_src = src if is_absolute_path(src) else os.path.join(root_dir, src)
            full_dst = os.path.join(project_dir, dst)
            if not os.path.isfile(full_src):
                warning("file \"%s\" to copy into project \"%s\" doesn't exist", src, self.name)
                continue
            logger.info("C\t%s", os.path.relpath(full_dst))
            if projgen.io.dry_run:
                continue
            dst_dir = os.path.dirname(full_dst)
            if dst_dir and not os.path.isdir(dst_dir):
                os.makedirs(dst_dir)
            shutil.copyfile(full_src, full_dst)
