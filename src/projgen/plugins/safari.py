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
Safari plugin bundle for Mac OS X.
"""

from projgen.io import EOL_UNIX
from projgen.plugins.webplugin import WebPlugin


class SafariWebPlugin(WebPlugin):
    name = "safari"
    subdir = "safari"
    eol = EOL_UNIX
    files = [
        ("Info.plist", "Info.plist"),
    ]

    def embed_fragment(self, deployment):
        return ('<script type="text/javascript">\n'
                'if (navigator.vendor && navigator.vendor.indexOf("Apple") != -1)\n'
                '    document.write(\'<embed id="%s_safari" type="%s" width="800" height="600"/>\');\n'
                '</script>' % (deployment.plugin_name, deployment.mime_type))
