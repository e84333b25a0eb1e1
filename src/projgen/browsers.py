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
Locating installed web browsers, used to launch the web plugin sample page.

Browser locations are read from the Windows registry; on other systems the
lookups return :const:`None`.
"""

import sys

import logging
logger = logging.getLogger("projgen.browsers")

if sys.platform == "win32":
    import winreg


# Registry keys with browser executables' paths, keyed by browser name
BROWSER_KEYS = {
    "ie":      r"SOFTWARE\Microsoft\Windows\CurrentVersion\App Paths\IEXPLORE.EXE",
    "firefox": r"SOFTWARE\Microsoft\Windows\CurrentVersion\App Paths\firefox.exe",
    "chrome":  r"SOFTWARE\Microsoft\Windows\CurrentVersion\App Paths\chrome.exe",
    "safari":  r"SOFTWARE\Microsoft\Windows\CurrentVersion\App Paths\Safari.exe",
    "opera":   r"SOFTWARE\Microsoft\Windows\CurrentVersion\App Paths\opera.exe",
}


def query_registry(key, value=""):
    """
    Returns string *value* (default value if empty) of HKEY_LOCAL_MACHINE
    subkey *key*, or :const:`None` if it doesn't exist or the registry isn't
    available.
    """
    if sys.platform != "win32":
        return None
    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, key) as h:
            data, _ = winreg.QueryValueEx(h, value)
    except OSError:
        logger.debug("registry key %s not found", key)
        return None
    return data


def find_browser(name):
    """Returns path to the executable of browser *name*, or :const:`None`."""
    key = BROWSER_KEYS.get(name.lower())
    if key is None:
        return None
    return query_registry(key)
