# coding=utf-8
#

# pylint: skip-file

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import sys

from fm.check import CheckResult
from fm.combination import FeatureCombination
from fm.constants import TAG_ALWAYS, TAG_REQUIRES_CROSS

PYTHON = sys.executable

def pyCmd(code):
    """ Command line to run python code in a subprocess """
    return [PYTHON, '-c', code]

NO_DEFAULT = FeatureCombination('no-default-features',
                                ['--no-default-features'], [TAG_ALWAYS])
DEFAULT = FeatureCombination('default-features', [], [TAG_REQUIRES_CROSS])

class SpyChecker(object):
    """
    Checker which records all calls and returns results with exit codes
    from the map 'combination name -> exit code' (0 by default)
    """

    def __init__(self, exitcodes = None, echo = False):
        self.exitcodes = exitcodes if exitcodes else {}
        self.calls = []
        self.echo = echo

    def __call__(self, index, target, combination):
        self.calls.append((index, target, combination.name))
        exitcode = self.exitcodes.get(combination.name, 0)
        return CheckResult(
            index = index,
            combination = combination,
            target = target,
            cmdline = ['check', target] + list(combination.flags),
            exitcode = exitcode,
            output = 'output of %s\n' % combination.name,
            duration = 0.0,
        )

    @property
    def names(self):
        return [x[2] for x in self.calls]
