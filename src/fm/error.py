# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import traceback

class FeatMatrixError(Exception):
    """Base class for all FeatMatrix errors"""

    def __init__(self, msg = None, ex = None):
        if msg is None:
            msg = ''
        if ex and not msg:
            msg = str(ex)
        super(FeatMatrixError, self).__init__(msg)

        self.msg = msg
        self.ex = ex
        self.fullmsg = msg
        if ex is not None:
            lines = traceback.format_exception(type(ex), ex, ex.__traceback__)
            self.fullmsg = '%s\n%s' % (msg, ''.join(lines).rstrip())

    def __str__(self):
        return str(self.msg)

class FeatMatrixLogicError(FeatMatrixError):
    """Some logic/programming error"""

class ConfigurationError(FeatMatrixError):
    """Required input is missing or malformed"""

    def __init__(self, msg = None, ex = None, confpath = None):
        if msg is None:
            msg = str(ex) if ex else ''
        if confpath and msg:
            _msg = "Error in the file %r:" % confpath
            for line in msg.splitlines():
                _msg += "\n  %s" % line
            msg = _msg
        self.confpath = confpath
        super(ConfigurationError, self).__init__(msg, ex)

class ConfigurationTypeError(ConfigurationError):
    """Invalid config param type error"""

class ConfigurationValueError(ConfigurationError):
    """Invalid config param value error"""

class CheckFailure(FeatMatrixError):
    """ External check returned non-zero exit code """

    def __init__(self, index, name, exitcode, output = None,
                        cmdline = None, msg = None, ex = None):
        self.index = index
        self.name = name
        self.exitcode = exitcode
        self.output = output
        self.cmdline = cmdline
        # partial fm.runner.RunReport, it's set by the runner
        self.report = None
        if not msg:
            msg = "Check %r failed with exit code %r." % (name, exitcode)
        super(CheckFailure, self).__init__(msg, ex)

class SpawnError(CheckFailure):
    """ External check command could not be started """

    def __init__(self, index, name, cmdline, reason = None, ex = None):
        msg = "Check %r: command %r could not be started" % \
                (name, cmdline)
        if reason is None and ex is not None:
            reason = str(ex)
        if reason:
            msg += ': %s' % reason
        super(SpawnError, self).__init__(index, name, None, None,
                                         cmdline, msg, ex)

class ProcessTimeoutExpired(FeatMatrixError):
    """ Raised when a timeout expires while waiting for a process """

    def __init__(self, cmd, timeout, output, msg = None):
        self.cmd = cmd
        self.timeout = timeout
        self.output = output

        if not msg:
            msg = "Timeout (%d sec.) for command expired." % timeout
            msg += "\nCommand: %r" % cmd
            if output:
                msg += '\nCaptured output:\n'
                msg += output
        super(ProcessTimeoutExpired, self).__init__(msg)

class ProcessInterrupted(FeatMatrixError):
    """ Raised when a signal was received while waiting for a process """

    def __init__(self, cmd, signum, msg = None):
        self.cmd = cmd
        self.signum = signum

        if not msg:
            msg = "Interrupted by signal %d." % signum
            msg += "\nCommand: %r" % cmd
        super(ProcessInterrupted, self).__init__(msg)
