# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import sys
import signal
import re
import shlex
import subprocess
import threading

from fm.pyutils import stringtype, struct
from fm.error import FeatMatrixError, ProcessTimeoutExpired, ProcessInterrupted

_RE_SUBST_VARS = re.compile(r"\$(\w+)|\$\{\s*(\w+)\s*\}", re.ASCII)

def platform():
    """
    Return current system platform. It is always 'windows' for MS Windows.
    """

    result = sys.platform
    if result.startswith('win32'):
        result = 'windows' # pragma: no cover
    elif result.startswith('linux'):
        result = 'linux'
    return result

PLATFORM = platform()

def toList(val):
    """
    Convert val to list.
    If val is string then it is split with shell-like syntax.
    Returns list as is if val is list or tuple.
    """

    if val is None:
        return []
    if isinstance(val, stringtype):
        return shlex.split(val)
    return list(val)

def uniqueListWithOrder(lst):
    """
    Return new list with preserved the original order of the list
    """

    used = set()
    return [x for x in lst if x not in used and (used.add(x) or True)]

def envValToBool(rawVal):
    """
    Return env val as native bool value.
    Returns False if not recognized.
    """

    result = False
    if rawVal:
        try:
            # value from os.environ is a string but it may be a digit
            result = bool(int(rawVal))
        except ValueError:
            result = rawVal in ('true', 'True', 'yes')

    return result

def substVars(strval, svars):
    """
    Substitute variables in format $VAR or ${VAR} in the string.
    Unknown variables are left as is.
    """

    if '$' not in strval:
        return strval

    def replaceVar(match):
        foundName = match.group(1) or match.group(2)
        if foundName in svars:
            return svars[foundName]
        return match.group(0)

    return _RE_SUBST_VARS.sub(replaceVar, strval)

ProcCmdResult = struct('ProcCmdResult', 'exitcode, stdout, stderr')

def _forwardedSignals():
    signums = [signal.SIGINT, signal.SIGTERM]
    sighup = getattr(signal, 'SIGHUP', None)
    if sighup is not None:
        signums.append(sighup)
    return signums

class ProcCmd(object):
    """
    Class to run external command in a subprocess.
    Signals SIGINT/SIGTERM/SIGHUP which current process receives while the
    child process is running are forwarded to the process group of the child.
    """

    def __init__(self, cmdLine, shell = False, captureOutput = False,
                                        stdErrToOut = True, outCallback = None):

        """
        Parameter outCallback can be used to handle stdout/stderr line by line
        without waiting for a process to exit. Also if outCallback is not None
        then it means that captureOutput is True. If stdErrToOut is True it means
        that captureOutput is True as well.
        """

        self._origCmdLine = cmdLine

        cmdAsStr = isinstance(cmdLine, stringtype)
        if shell and not cmdAsStr:
            cmdLine = ' '.join(shlex.quote(x) for x in cmdLine)
        elif not shell and cmdAsStr and PLATFORM != 'windows':
            cmdLine = shlex.split(cmdLine)

        self._cmdLine = cmdLine
        self._outCallback = outCallback
        self._proc = None
        self._timeoutExpired = False
        self._receivedSignal = None
        self._popenArgs = {
            'shell' : shell,
            'stdout' : None,
            'stderr' : None,
            'universal_newlines' : True,
            # output of a check command is not always valid UTF-8
            'encoding' : 'utf-8',
            'errors' : 'replace',
        }

        if captureOutput or outCallback is not None:
            self._popenArgs['stdout'] = subprocess.PIPE
            self._popenArgs['stderr'] = subprocess.PIPE

        if stdErrToOut:
            self._popenArgs['stdout'] = subprocess.PIPE
            self._popenArgs['stderr'] = subprocess.STDOUT

        # Use 'start_new_session' to change the process(forked) group id to itself
        # so os.killpg with proc.pid can be used.
        # This parameter does nothing on Windows.
        self._popenArgs['start_new_session'] = True

    def _communicate(self):

        callback = self._outCallback
        if callback is None:
            stdout, stderr = self._proc.communicate()
            return ProcCmdResult(self._proc.returncode, stdout, stderr)

        proc = self._proc
        chunks = { 'stdout' : [], 'stderr' : [] }
        while True:
            noData = True
            if proc.stdout:
                line = proc.stdout.readline()
                if line:
                    noData = False
                    chunks['stdout'].append(line)
                    callback(line, err = False)
            if proc.stderr:
                line = proc.stderr.readline()
                if line:
                    noData = False
                    chunks['stderr'].append(line)
                    callback(line, err = True)
            if noData and proc.poll() is not None:
                break

        if proc.stdout:
            proc.stdout.close()
        if proc.stderr:
            proc.stderr.close()

        stdout = ''.join(chunks['stdout']) if proc.stdout else None
        stderr = ''.join(chunks['stderr']) if proc.stderr else None
        return ProcCmdResult(proc.returncode, stdout, stderr)

    def _sendSignal(self, signum):
        proc = self._proc
        if proc is None or proc.poll() is not None:
            return
        try:
            if hasattr(os, 'killpg'):
                os.killpg(proc.pid, signum)
            elif signum == getattr(signal, 'SIGKILL', None):
                proc.kill() # pragma: no cover
            else:
                proc.terminate() # pragma: no cover
        except ProcessLookupError:
            # it has already exited
            pass

    def _terminate(self, gracePeriod):
        proc = self._proc
        if proc is None or proc.poll() is not None:
            return

        self._sendSignal(signal.SIGTERM)
        try:
            proc.wait(gracePeriod)
        except subprocess.TimeoutExpired:
            self._sendSignal(getattr(signal, 'SIGKILL', signal.SIGTERM))
            proc.wait()

    def _onSignal(self, signum, _frame):
        self._receivedSignal = signum
        self._sendSignal(signum)

    def _setSignalHandlers(self):
        # signal handlers can be set in the main thread only
        if threading.current_thread() is not threading.main_thread():
            return {}

        oldHandlers = {}
        for signum in _forwardedSignals():
            oldHandlers[signum] = signal.signal(signum, self._onSignal)
        return oldHandlers

    @staticmethod
    def _restoreSignalHandlers(oldHandlers):
        for signum, handler in oldHandlers.items():
            signal.signal(signum, handler)

    def run(self, cwd = None, env = None, timeout = None, gracePeriod = 5.0):
        """
        Run command.
        Returns ProcCmdResult.
        Raises ProcessInterrupted if a forwarded signal was received while
        the command was running.
        """

        # pylint: disable = too-many-branches

        kwargs = self._popenArgs
        kwargs.update({
            'cwd' : cwd,
            'env' : env,
        })

        timer = None
        oldHandlers = {}
        self._receivedSignal = None
        try:
            oldHandlers = self._setSignalHandlers()
            self._proc = subprocess.Popen(self._cmdLine, **kwargs)
            if self._receivedSignal is not None:
                self._sendSignal(self._receivedSignal)

            if timeout is not None:
                self._timeoutExpired = False

                def killProc(self):
                    self._sendSignal(getattr(signal, 'SIGKILL', signal.SIGTERM))
                    self._timeoutExpired = True

                timer = threading.Timer(timeout, killProc, args = [self])
                # allow entire program to exit on unexpected exception like KeyboardInterrupt
                timer.daemon = True
                timer.start()

            try:
                result = self._communicate()
            except BaseException:
                self._terminate(gracePeriod)
                raise

            if self._timeoutExpired:
                raise ProcessTimeoutExpired(self._origCmdLine, timeout,
                                                    result.stdout)

            if self._receivedSignal is not None:
                raise ProcessInterrupted(self._origCmdLine, self._receivedSignal)

        except (OSError, subprocess.SubprocessError) as ex:
            raise FeatMatrixError(str(ex), ex) from ex
        finally:
            if timer:
                timer.cancel()
            self._restoreSignalHandlers(oldHandlers)

            # release Popen object
            self._proc = None

        return result

def runCmd(cmdLine, cwd = None, env = None, shell = False, timeout = None,
            captureOutput = False, stdErrToOut = False, outCallback = None):
    """
    Run external command in a subprocess.
    Parameter outCallback can be used to handle stdout/stderr line by line
    without waiting for a process to exit. Also if outCallback is not None then
    it means that captureOutput is True. If stdErrToOut is True it means
    that captureOutput is True as well.
    Returns ProcCmdResult.
    """

    # pylint: disable = too-many-arguments

    procCmd = ProcCmd(cmdLine, shell, captureOutput, stdErrToOut, outCallback)
    return procCmd.run(cwd, env, timeout)
