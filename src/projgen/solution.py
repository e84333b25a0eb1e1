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
Solutions aggregate projects into one IDE solution (or top level makefile)
per build target.
"""

import uuid

import logging
logger = logging.getLogger("projgen.solution")

from projgen.error import UnresolvedProjectError, TemplateNotFoundError, warning
from projgen.io import OutputFile
from projgen.project import Project, GUID, normalize_guid
from projgen.utils import filter_duplicates


NAMESPACE_SOLUTION  = uuid.UUID("{2D0C29E0-512F-47BE-9AC4-F4CAE74AE16E}")

# Kinds of projects, as used in solution files
PROJECT_KIND_C      = "8BC9CEB8-8B4A-11D0-8D11-00A0C91BC942"
PROJECT_KIND_NET    = "FAE04EC0-301F-11D3-BF4B-00C04F79EFBC"


def project_kind(project):
    """Returns the solution-level kind GUID of a configured project."""
    if project.type == Project.TYPE_CSPROJECT:
        return PROJECT_KIND_NET
    return PROJECT_KIND_C


class ExternalProjectRef(object):
    """
    Reference to a project file not generated by projgen, e.g. a hand
    written C# project.
    """
    def __init__(self, name, path, guid, kind=PROJECT_KIND_NET):
        self.name = name
        self.path = path
        self.guid = normalize_guid(guid)
        self.kind = normalize_guid(kind)

    def __repr__(self):
        return "ExternalProjectRef(%r, %r, %r)" % (self.name, self.path, self.guid)


class Solution(object):
    """
    Ordered collection of references to projects.

    .. attribute:: project_refs

       Names of referenced projects, in the order they were added.

    .. attribute:: project_ext_refs

       Dictionary of :class:`ExternalProjectRef`, keyed by name.
    """
    def __init__(self, name, guid=None):
        self.name = name
        self.guid = normalize_guid(guid) if guid else GUID(NAMESPACE_SOLUTION, name)
        self.project_refs = []
        self.project_ext_refs = {}
        self.outputs = []

    def __str__(self):
        return "solution %s" % self.name

    def add_project_ref(self, name):
        self.project_refs.append(name)

    def add_project_ref_ext(self, name, path, guid, kind=PROJECT_KIND_NET):
        self.project_ext_refs[name] = ExternalProjectRef(name, path, guid, kind)

    def set_outputs(self, targets):
        self.outputs = list(targets)

    def ordered_project_refs(self, startup=None):
        """
        Returns project names in output order: the *startup* project first,
        if it is referenced, and the rest in the order of addition.
        """
        refs = list(filter_duplicates(self.project_refs))
        if startup and startup in refs:
            refs.remove(startup)
            refs.insert(0, startup)
        return refs

    def resolve_projects(self, projects, startup=None):
        """
        Returns list of referenced :class:`Project` objects, in output order,
        after checking that they and their dependencies exist.
        """
        resolved = []
        for name in self.ordered_project_refs(startup):
            try:
                prj = projects[name]
            except KeyError:
                raise UnresolvedProjectError(
                        "solution \"%s\" references unknown project \"%s\"" % (self.name, name))
            resolved.append(prj)
        for prj in resolved:
            prj.validate_dependencies(projects)
        return resolved

    def generate(self, engine, platform, root_dir, projects, startup=None):
        """
        Writes solution files for all build targets that support *platform*
        and have a solution template.

        Projects the target has no template for are left out. All project
        references are resolved before anything is written, so an
        invalid solution produces no files at all.
        """
        resolved = self.resolve_projects(projects, startup)

        for target in self.outputs:
            if not target.supports_platform(platform):
                continue
            if not target.solution_template:
                logger.debug("%s: no solution template, skipping %s",
                             target.name, self.name)
                continue
            variables = {
                "solution":      self,
                "target":        target,
                "platform":      platform,
                "projects":      [p for p in resolved if target.template_for(p)],
                "external_refs": list(self.project_ext_refs.values()),
                "project_path":  lambda p, t=target: t.project_file_ref(p),
                "project_kind":  project_kind,
                "project_deps":  lambda p: p.validate_dependencies(projects),
            }
            filename = target.solution_file_path(root_dir, self)
            try:
                text = engine.render(target.solution_template, variables)
            except TemplateNotFoundError as e:
                warning("%s: %s, not generating %s", target.name, e.msg, filename)
                continue
            f = OutputFile(filename, target.eol, bom=target.bom,
                           creator=target, create_for=self)
            f.write(text)
            f.commit()
