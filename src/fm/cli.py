# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import sys
import argparse

from fm.constants import CAP_APPNAME, CLI_NAME, TARGET_ENV_VAR
from fm.constants import CONFIG_ENV_VAR, NATIVE_TARGETS_ENV_VAR, VERBOSE_ENV_VAR
from fm.constants import MATRIXCONF_FILENAMES, EXIT_CONF_ERROR
from fm.pyutils import struct
from fm.autodict import AutoDict as _AutoDict
from fm import version

ParsedCommand = struct('ParsedCommand', 'name, args, orig')

"""
Object of ParsedCommand after last parsing of command line.
"""
selected = None

"""
Contains configurable 'options'
"""
config = _AutoDict()

class Option(_AutoDict):
    """ Class to set up an option for CLI """

    NOTARGPARSE_FIELDS = ('names', )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setdefault('action', 'store')
        self.setdefault('default', None)

# Declarative list of options in CLI
config.options = [
    Option(
        names = ['-h', '--help'],
        action = 'help',
        help = 'show this help message and exit',
    ),
    Option(
        names = ['--version'],
        action = 'version',
        help = 'print version of %s and exit' % CAP_APPNAME,
    ),
    Option(
        names = ['-c', '--config'],
        metavar = 'PATH',
        help = 'set matrix config file, by default %s is searched in the '
               'current directory and the built-in matrix is used if it is '
               'not found (env: %s)' % \
                    (' or '.join(MATRIXCONF_FILENAMES), CONFIG_ENV_VAR),
    ),
    Option(
        names = ['-n', '--dry-run'],
        action = 'store_true',
        default = False,
        help = 'print command lines of checks without running them',
    ),
    Option(
        names = ['-l', '--list'],
        action = 'store_true',
        default = False,
        help = 'print selected and skipped feature combinations and exit',
    ),
    Option(
        names = ['-v', '--verbose'],
        action = 'count',
        default = 0,
        help = 'verbosity level -v -vv or -vvv (env: %s)' % VERBOSE_ENV_VAR,
    ),
    Option(
        names = ['--color'],
        choices = ('yes', 'no', 'auto'),
        default = 'auto',
        help = 'whether to use colors (yes/no/auto)',
    ),
]

class _ArgumentParser(argparse.ArgumentParser):

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_CONF_ERROR, '%s: error: %s\n' % (self.prog, message))

class CmdLineParser(object):
    """
    CLI parser
    """

    def __init__(self, progName, defaults = None):

        self._defaults = defaults if defaults else {}
        self._command = None

        epilog = 'The target is read from the environment variable %s.' % \
                    TARGET_ENV_VAR
        epilog += ' Env var %s can be used to override native targets.' % \
                    NATIVE_TARGETS_ENV_VAR

        self._parser = _ArgumentParser(
            prog = progName,
            description = '%s: run the external check command for each '
                          'feature combination of the target, stopping at '
                          'the first failure.' % CAP_APPNAME,
            epilog = epilog,
            add_help = False,
        )
        self._addOptions()

    def _addOptions(self):
        for opt in config.options:
            kwargs = _AutoDict()
            for k, v in opt.items():
                if v is None or k in Option.NOTARGPARSE_FIELDS:
                    continue
                kwargs[k] = v

            if opt.action == 'version':
                kwargs.version = version.fullText()

            optName = opt.names[-1].replace('-', '', 2).replace('-', '_')
            default = self._defaults.get(optName)
            if default is not None:
                kwargs['default'] = default

            self._parser.add_argument(*opt.names, **kwargs)

    def parse(self, args = None):
        """ Parse command line args """

        if args is None:
            args = sys.argv[1:]

        parsedArgs = self._parser.parse_args(args)
        self._command = ParsedCommand(
            name = 'run',
            args = _AutoDict(vars(parsedArgs)),
            orig = args,
        )
        return self._command

    @property
    def command(self):
        """ current command after last parsing of command line"""
        return self._command

def parseAll(args, defaults = None):
    """
    Parse all command line args with CmdLineParser and save selected
    command as object of ParsedCommand in global var 'selected' of this module.
    Param 'args' is a full list of args including the program name.
    Returns selected command as object of ParsedCommand.
    """

    # pylint: disable = global-statement
    global selected

    parser = CmdLineParser(CLI_NAME, defaults)
    selected = parser.parse(args[1:])
    return selected
