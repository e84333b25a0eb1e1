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
Standard build targets, used when the build description doesn't register
any of its own.
"""

from projgen.io import EOL_WINDOWS, EOL_UNIX


SOURCE_EXTS = ["c", "cc", "cpp", "cxx", "m", "mm", "asm"]
HEADER_EXTS = ["h", "hh", "hpp", "hxx", "inl"]
RESOURCE_EXTS = ["rc", "idl", "rgs", "def", "ico", "plist", "cs"]

# Version control metadata and platform code not built on the target
COMMON_REJECTS = [r"(^|/)\.svn/", r"(^|/)_svn/", r"(^|/)CVS/", r"(^|/)\.git/"]


def register_defaults(targets):
    """
    Registers standard targets into *targets*, a
    :class:`projgen.targets.BuildTargets` instance.
    """
    vs = targets.register("VS2010",
                          output_dir="buildFiles/VisualStudio 2010",
                          project_dir="projects",
                          base_dir="../../../",
                          template_app="vc2010_proj.em",
                          template_shared_app="vc2010_proj.em",
                          template_lib="vc2010_proj.em",
                          template_shared_lib="vc2010_proj.em",
                          template_plugin="vc2010_proj.em",
                          template_sln="vc2010_sln.em",
                          output_ext=".vcxproj",
                          filters_template="vc2010_filters.em",
                          eol=EOL_WINDOWS,
                          bom=True)
    vs.set_file_extensions(SOURCE_EXTS + HEADER_EXTS + RESOURCE_EXTS)
    vs.set_source_file_extensions(SOURCE_EXTS)
    vs.set_reject_patterns(COMMON_REJECTS + [r"(^|/)(mac|linux|posix|unix|x11)/",
                                             r"\.(m|mm)$"])
    vs.set_dont_compile_patterns([r"\.cs$"])
    vs.set_platforms(["win32"])

    # make runs from the output directory, not from the projects directory
    make = targets.register("Make",
                            output_dir="buildFiles/Make",
                            project_dir="projects",
                            base_dir="../../",
                            template_app="make_proj.em",
                            template_shared_app="make_proj.em",
                            template_lib="make_proj.em",
                            template_shared_lib="make_proj.em",
                            template_plugin=None,
                            template_sln="make_sln.em",
                            output_ext=".mk",
                            solution_ext=".mk",
                            eol=EOL_UNIX)
    make.set_file_extensions(SOURCE_EXTS + HEADER_EXTS)
    make.set_source_file_extensions(SOURCE_EXTS)
    make.set_reject_patterns(COMMON_REJECTS + [r"(^|/)(win32|windows|directx|d3d9)/",
                                               r"\.(asm|m|mm)$"])
    make.set_platforms(["linux", "mac"])
    return [vs, make]
