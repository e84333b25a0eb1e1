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
Helpers for dumping the configured model into human-readable form.
"""


def dump_generator(generator):
    """
    Returns string with dumped, human-readable description of all projects
    and solutions configured in *generator*.
    """
    out = ""
    flags = _dump_flags(generator)
    if flags:
        out += "flags {\n"
        out += _indent(flags)
        out += "}\n"
    if generator.lib_guard:
        out += "libraries {\n"
        out += _indent("\n".join(generator.lib_guard))
        out += "}\n"
    for prj in generator.projects.values():
        out += dump_project(prj)
    for sln in generator.solutions.values():
        out += dump_solution(sln)
    return out.strip()


def dump_project(project):
    """
    Returns string with dumped description of *project*, a
    :class:`projgen.project.Project` instance.
    """
    out = "%s %s {\n" % (project.type, project.name)
    out += _indent(_dump_vars([
        ("guid",              project.guid),
        ("game_dir",          project.game_dir),
        ("output_name",       project.output_name),
        ("output_name_debug", project.output_name_debug),
        ("subsystem",         project.subsystem),
        ("module_definition_file", project.module_definition_file),
        ("web_plugin",        project.web_plugin),
        ("outputs",           [t.name for t in project.outputs]),
    ]))
    lists = [
        ("sources",      ["%s%s" % (p, " (recursive)" if r else "") for p, r in project.dir_list]),
        ("includes",     project.includes),
        ("defines",      project.defines),
        ("disabled_warnings", project.disabled_warnings),
        ("lib_dirs",     project.lib_dirs),
        ("libs",         project.libs),
        ("libs_ignore",  project.libs_ignore),
        ("dependencies", project.dependencies),
        ("references",   ["%s %s" % (n, v) if v else n for n, v in sorted(project.references.items())]),
        ("copy",         ["%s -> %s" % (s, d) for s, d in project.file_copy_paths]),
    ]
    for name, items in lists:
        if items:
            out += _indent("%s {\n%s}\n" % (name, _indent("\n".join(items))))
    out += "}\n"
    return out


def dump_solution(solution):
    """
    Returns string with dumped description of *solution*, a
    :class:`projgen.solution.Solution` instance.
    """
    out = "solution %s {\n" % solution.name
    out += _indent(_dump_vars([
        ("guid",    solution.guid),
        ("outputs", [t.name for t in solution.outputs]),
    ]))
    if solution.project_refs:
        out += _indent("projects {\n%s}\n" % _indent("\n".join(solution.project_refs)))
    if solution.project_ext_refs:
        ext = ["%s = %s {%s}" % (r.name, r.path, r.guid)
               for r in solution.project_ext_refs.values()]
        out += _indent("external {\n%s}\n" % _indent("\n".join(ext)))
    out += "}\n"
    return out


def _dump_flags(generator):
    names = ["game_project_name", "tool_build", "watermark_build",
             "purchase_screen_build", "demo_build", "object_limit_build",
             "time_out_build", "use_dll_runtime"]
    return _dump_vars((n, getattr(generator, n)) for n in names)


def _dump_vars(pairs):
    out = ""
    for name, value in pairs:
        if value is None or value == []:
            continue
        if isinstance(value, list):
            value = ", ".join(value)
        out += "%s = %s\n" % (name, value)
    return out


def _indent(text):
    lines = text.split("\n")
    out = ""
    for x in lines:
        if x != "":
            x = "  %s" % x
            out += "%s\n" % x
    return out
