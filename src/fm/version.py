# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import re

from fm.constants import CAP_APPNAME

VERSION = '0.3.0'

#pylint: disable=line-too-long
# from https://semver.org/
SEMVER_RE = r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
#pylint: enable=line-too-long

def parseVersion(ver):
    """ Return result of re.match """
    return re.match(SEMVER_RE, ver)

def checkFormat(ver):
    """ check format of version """
    return bool(parseVersion(ver))

def current():
    """ Get current version """
    return VERSION

def fullText():
    """ Text for the '--version' option """
    return '%s %s' % (CAP_APPNAME, current())
