# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import sys
import time

from fm import log
from fm.constants import TARGET_ENV_VAR
from fm.pyutils import struct
from fm.utils import toList, substVars, runCmd
from fm.error import FeatMatrixError, ProcessInterrupted, ProcessTimeoutExpired
from fm.error import SpawnError

CheckResult = struct('CheckResult',
            'index, combination, target, cmdline, exitcode, output, duration')

def _success(self):
    return self.exitcode == 0

CheckResult.success = property(_success)

def buildCmdLine(command, targetArgs, target, flags):
    """
    Make command line for one check as a list of strings.
    Variables $TARGET/${TARGET} in targetArgs are replaced with target.
    """

    svars = { TARGET_ENV_VAR: target }
    cmdline = toList(command)
    cmdline.extend(substVars(x, svars) for x in toList(targetArgs))
    cmdline.extend(flags)
    return cmdline

def _echoLine(line, err = False):
    stream = sys.stderr if err else sys.stdout
    stream.write(line)
    stream.flush()

class Checker(object):
    """
    Callable which runs the external check command for one combination.
    Output of the command is echoed line by line and captured.
    """

    def __init__(self, command, targetArgs, cwd = None, env = None, echo = True):
        self._command = toList(command)
        self._targetArgs = toList(targetArgs)
        self._cwd = cwd
        self._env = None
        if env:
            self._env = dict(os.environ)
            self._env.update(env)
        self._echo = echo

    @property
    def echo(self):
        """ True if output of commands goes to the console """
        return self._echo

    def cmdline(self, target, combination):
        """ Get command line for the combination """
        return buildCmdLine(self._command, self._targetArgs,
                            target, combination.flags)

    def __call__(self, index, target, combination):

        cmdline = self.cmdline(target, combination)
        log.debug("Running %r", cmdline)

        outCallback = _echoLine if self._echo else lambda line, err: None

        started = time.monotonic()
        try:
            result = runCmd(cmdline, cwd = self._cwd, env = self._env,
                            stdErrToOut = True, outCallback = outCallback)
        except (ProcessInterrupted, ProcessTimeoutExpired):
            raise
        except FeatMatrixError as ex:
            raise SpawnError(index, combination.name, cmdline,
                             ex = ex.ex or ex) from ex

        return CheckResult(
            index = index,
            combination = combination,
            target = target,
            cmdline = cmdline,
            exitcode = result.exitcode,
            output = result.stdout or '',
            duration = time.monotonic() - started,
        )

class DryRunChecker(Checker):
    """
    Checker which only prints command lines
    """

    def __call__(self, index, target, combination):
        cmdline = self.cmdline(target, combination)
        log.info(' '.join(cmdline))
        return CheckResult(
            index = index,
            combination = combination,
            target = target,
            cmdline = cmdline,
            exitcode = 0,
            output = '',
            duration = 0.0,
        )
