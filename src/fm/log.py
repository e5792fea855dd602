# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import sys
import logging

from fm.constants import APPNAME, PLATFORM, ON_TTY_ENV_VAR
from fm.utils import envValToBool

colorSettings = {
    'USE'    : 1,
    'BOLD'   : '\x1b[01;1m',
    'RED'    : '\x1b[01;31m',
    'GREEN'  : '\x1b[32m',
    'YELLOW' : '\x1b[33m',
    'PINK'   : '\x1b[35m',
    'BLUE'   : '\x1b[01;34m',
    'CYAN'   : '\x1b[36m',
    'GREY'   : '\x1b[37m',
    'NORMAL' : '\x1b[0m',
}

class _Colors(object):
    """
    Access to terminal colors: colors.RED or colors('RED').
    Returns an empty string if colors are disabled.
    """

    def __call__(self, name):
        if not colorSettings['USE']:
            return ''
        return colorSettings.get(name, '')

    def __getattr__(self, name):
        return self(name)

colors = _Colors()

_levelColors = {
    logging.DEBUG   : 'CYAN',
    logging.INFO    : 'NORMAL',
    logging.WARNING : 'YELLOW',
    logging.ERROR   : 'RED',
}

class _Formatter(logging.Formatter):

    def format(self, record):
        msg = record.getMessage()
        c1 = getattr(record, 'c1', None)
        if c1 is None:
            c1 = colors(_levelColors.get(record.levelno, 'NORMAL'))
        c2 = getattr(record, 'c2', colors.NORMAL)
        if not c1:
            return msg
        return '%s%s%s' % (c1, msg, c2)

_state = {
    'verbose' : 0,
}

class _StderrHandler(logging.StreamHandler):
    """
    Handler which always writes into current sys.stderr
    """

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, _):
        pass

def _makeLogger():
    _logger = logging.getLogger(APPNAME)
    _logger.propagate = False
    _logger.setLevel(logging.DEBUG)
    if not _logger.handlers:
        handler = _StderrHandler()
        handler.setFormatter(_Formatter())
        _logger.addHandler(handler)
    return _logger

logger = _makeLogger()

def debug(*args, **kwargs):
    """ Log debug message. It's shown only with verbose > 0 """
    if _state['verbose'] > 0:
        logger.debug(*args, **kwargs)

def info(*args, **kwargs):
    """ Log info message """
    logger.info(*args, **kwargs)

def warn(*args, **kwargs):
    """ Log warning message """
    logger.warning(*args, **kwargs)

def error(*args, **kwargs):
    """ Log error message """
    logger.error(*args, **kwargs)

def pprint(color, msg, **kwargs):
    """ Log message with selected color """
    info(msg, extra = { 'c1': colors(color) }, **kwargs)

def enableColorsByCli(colorArg):
    """
    Set up log colors by arg from CLI
    """

    setting = {'yes' : 2, 'auto' : 1, 'no' : 0}[colorArg]
    if setting == 1:
        onTTY = os.environ.get(ON_TTY_ENV_VAR)
        if onTTY:
            onTTY = envValToBool(onTTY)
        else:
            onTTY = sys.stderr.isatty() or sys.stdout.isatty()
        if not onTTY:
            setting = 0

    if setting == 1:
        defaultTerm = 'dumb'
        if PLATFORM == 'windows':
            defaultTerm = ''
        if os.environ.get('TERM', defaultTerm) in ('dumb', 'emacs'):
            setting = 0

    colorSettings['USE'] = 1 if setting else 0

def colorsEnabled():
    """ Return True if color output is enabled """
    return bool(colorSettings['USE'])

def verbose():
    """ Get current verbose level """
    return _state['verbose']

def setVerbose(value):
    """ Set current verbose level """
    _state['verbose'] = value

def printStep(*args, **kwargs):
    """
    Log some step of the matrix run
    """

    extra = kwargs.get('extra', {})
    if 'c1' not in extra:
        extra.update({ 'c1': colors.CYAN })
        kwargs.update({'extra' : extra})
    info(*args, **kwargs)
