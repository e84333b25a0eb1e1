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
Browser plugin packaging. Each :class:`WebPlugin` implementation copies a
few template files into the web source tree, substituting deployment
settings (identifiers, versions, MIME type...) for placeholder tokens, and
contributes a fragment to the shared sample page embedding the plugin.
"""

import os.path
import uuid

import logging
logger = logging.getLogger("projgen.webplugin")

from projgen.api import Extension
from projgen.error import Error, warning
from projgen.io import OutputFile, EOL_WINDOWS, EOL_UNIX
from projgen.project import normalize_guid


NAMESPACE_WEB = uuid.UUID("{7E0F33B1-6E5D-4C77-A0F4-6F1F3B2C8D42}")


class WebDeployment(object):
    """
    Run-wide settings of the web deployment, shared by all plugin kinds.

    GUIDs that aren't set explicitly are derived from the product name, so
    they are stable between runs.
    """

    FIELDS = ("company", "product_name", "plugin_name", "description",
              "mime_type", "version", "bundle_id", "typelib_guid",
              "class_guid", "interface_guid", "app_guid")

    def __init__(self, **settings):
        self.company = "My Company"
        self.product_name = "My Game"
        self.plugin_name = "MyGamePlugin"
        self.description = "My Game Web Plugin"
        self.mime_type = "application/x-mygame"
        self.version = "1.0.0.0"
        self.bundle_id = "com.mycompany.mygame"
        self.typelib_guid = None
        self.class_guid = None
        self.interface_guid = None
        self.app_guid = None
        self.update(**settings)

    def update(self, **settings):
        for key, value in settings.items():
            if key not in self.FIELDS:
                raise Error("unknown web deployment setting \"%s\"" % key)
            setattr(self, key, value)

    @property
    def version_dotted(self):
        """Version with exactly four components, e.g. ``1.0.2.0``."""
        parts = str(self.version).replace(",", ".").split(".")
        parts = [p.strip() or "0" for p in parts][:4]
        parts += ["0"] * (4 - len(parts))
        return ".".join(parts)

    @property
    def version_comma(self):
        """Version in resource script form, e.g. ``1,0,2,0``."""
        return self.version_dotted.replace(".", ",")

    def guid(self, role):
        """Returns the GUID for *role* (``typelib``, ``class``...)."""
        value = getattr(self, "%s_guid" % role)
        if value:
            return normalize_guid(value)
        return str(uuid.uuid5(NAMESPACE_WEB, "%s/%s" % (self.product_name, role))).upper()


class SamplePage(object):
    """
    Buffer for the sample HTML page embedding all configured plugins. It
    can only be written once per run.
    """
    def __init__(self):
        self.fragments = []
        self.written = False

    def add(self, kind, fragment):
        self.fragments.append((kind, fragment))

    def render(self, template_text, deployment):
        body = "\n".join(fragment for kind, fragment in self.fragments)
        text = template_text.replace("__EMBED_FRAGMENTS__", body)
        text = text.replace("__PRODUCT_NAME__", deployment.product_name)
        return text

    def write(self, filename, template_text, deployment):
        """
        Writes the page to *filename*, unless it was written already or there
        are no fragments. Returns true if the file was written.
        """
        if self.written or not self.fragments:
            return False
        f = OutputFile(filename, EOL_UNIX, create_for="sample page")
        f.write(self.render(template_text, deployment))
        f.commit()
        self.written = True
        return True


class WebPlugin(Extension):
    """
    Base class for browser plugin scaffolding.

    .. attribute:: subdir

       Subdirectory of both the web templates directory and the
       ``web/source`` output directory used by this plugin kind. Each project
       gets its own directory below the latter.

    .. attribute:: files

       List of ``(template, destination)`` file names.

    .. attribute:: project_files

       Extensions of generated files that are added to the plugin's project.
    """
    subdir = None
    files = []
    project_files = ("idl", "rgs", "rc", "def", "plist")
    eol = EOL_WINDOWS

    def replacements(self, deployment):
        """
        Returns ordered list of ``(token, value)`` pairs substituted in the
        templates.
        """
        return [
            ("__PLUGIN_NAME__",      deployment.plugin_name),
            ("__PRODUCT_NAME__",     deployment.product_name),
            ("__COMPANY__",          deployment.company),
            ("__DESCRIPTION__",      deployment.description),
            ("__MIME_TYPE__",        deployment.mime_type),
            ("__VERSION_DOTTED__",   deployment.version_dotted),
            ("__VERSION_COMMA__",    deployment.version_comma),
            ("__TYPELIB_GUID__",     deployment.guid("typelib")),
            ("__CLASS_GUID__",       deployment.guid("class")),
            ("__INTERFACE_GUID__",   deployment.guid("interface")),
            ("__APP_GUID__",         deployment.guid("app")),
            ("__BUNDLE_ID__",        deployment.bundle_id),
        ]

    def substitute(self, text, deployment):
        for token, value in self.replacements(deployment):
            text = text.replace(token, str(value))
        return text

    def embed_fragment(self, deployment):
        """Returns HTML fragment embedding the plugin in the sample page."""
        raise NotImplementedError

    def output_dir(self, project):
        """Output directory of *project*'s files, relative to the build root."""
        return "web/source/%s/%s" % (self.subdir, project.name)

    def process(self, generator, project):
        """
        Generates the plugin's files for *project*, adds them to it and
        contributes to the sample page.
        """
        deployment = generator.web_deployment
        templates_dir = os.path.join(generator.paths["webTemplates"], self.subdir)
        out_dir = self.output_dir(project)

        for template, dest in self.files:
            src = os.path.join(templates_dir, template)
            try:
                with open(src, "rt", encoding="utf-8") as f:
                    text = f.read()
            except IOError:
                warning("%s plugin template \"%s\" not found, skipping", self.name, src)
                continue
            rel = "%s/%s" % (out_dir, dest)
            out = OutputFile(os.path.join(generator.root_dir, rel), self.eol,
                             creator="%s plugin" % self.name, create_for=project)
            out.write(self.substitute(text, deployment))
            out.commit()
            if os.path.splitext(dest)[1][1:].lower() in self.project_files:
                project.add_src_file(rel)

        project.web_plugin = self.name
        generator.sample_page.add(self.name, self.embed_fragment(deployment))
        logger.debug("processed %s plugin for %s", self.name, project.name)
