# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import sys
import os

from fm.constants import TARGET_ENV_VAR, CONFIG_ENV_VAR, VERBOSE_ENV_VAR
from fm.constants import NATIVE_TARGETS_ENV_VAR
from fm.constants import EXIT_OK, EXIT_CHECK_FAILED, EXIT_CONF_ERROR
from fm.constants import EXIT_INTERRUPTED
from fm.utils import toList
from fm import log
from fm.error import FeatMatrixError, ConfigurationError, CheckFailure
from fm.error import ProcessInterrupted

def readTarget(environ):
    """
    Get target from the environment.
    Raises ConfigurationError if it's not set or empty.
    """

    target = environ.get(TARGET_ENV_VAR, '').strip()
    if not target:
        msg = "Environment variable %s is not set or empty" % TARGET_ENV_VAR
        raise ConfigurationError(msg)
    return target

def makeCliDefaults(environ):
    """
    Get defaults for CLI options from the environment
    """

    defaults = {}
    confpath = environ.get(CONFIG_ENV_VAR)
    if confpath:
        defaults['config'] = confpath

    verbose = environ.get(VERBOSE_ENV_VAR)
    if verbose:
        try:
            defaults['verbose'] = int(verbose)
        except ValueError as ex:
            msg = "Environment variable %s should be integer" % VERBOSE_ENV_VAR
            raise ConfigurationError(msg, ex) from ex

    return defaults

def applyEnvToConf(conf, environ):
    """
    Apply values from the environment to the loaded matrix config
    """

    nativeTargets = environ.get(NATIVE_TARGETS_ENV_VAR)
    if nativeTargets:
        conf.nativeTargets = toList(nativeTargets.replace(',', ' '))
        log.debug("Native targets from %s: %r", NATIVE_TARGETS_ENV_VAR,
                  conf.nativeTargets)

def printPlan(target, selected, skipped):
    """
    Print planned and skipped combinations
    """

    log.printStep('Feature combinations for the target %r:' % target)
    for index, combination in enumerate(selected):
        log.info('  %d. %s %s', index + 1, combination.name,
                 ' '.join(combination.flags))
    for combination in skipped:
        log.pprint('GREY', '  -  %s (skipped)' % combination.name)

def _handleFailure(ex, echoed):
    log.error(ex.msg)
    if ex.output and not echoed:
        sys.stderr.write(ex.output)
        if not ex.output.endswith('\n'):
            sys.stderr.write('\n')
        sys.stderr.flush()

    report = ex.report
    if report is not None:
        log.error("Stopped at %d/%d, remaining combinations were not checked",
                  ex.index + 1, report.planned)

def _run(args, environ, checker):

    from fm import cli
    from fm.check import Checker, DryRunChecker
    from fm.matrixconf import loader
    from fm.select import selectCombinations
    from fm.runner import runMatrix

    cmd = cli.parseAll(args, makeCliDefaults(environ))
    cliArgs = cmd.args

    log.enableColorsByCli(cliArgs.color)
    log.setVerbose(cliArgs.verbose)

    # it must be before any spawned process
    target = readTarget(environ)

    conf = loader.load(cliArgs.config)
    applyEnvToConf(conf, environ)

    if cliArgs.list:
        selected, skipped = selectCombinations(target, conf.combinations,
                                        conf.nativeTargets, conf.skipRules)
        printPlan(target, selected, skipped)
        return EXIT_OK

    if checker is None:
        checkerClass = DryRunChecker if cliArgs.dry_run else Checker
        checker = checkerClass(conf.command, conf.targetArgs,
                               cwd = conf.cwd, env = conf.env)

    try:
        runMatrix(target, conf.combinations, conf.nativeTargets,
                  checker, conf.skipRules)
    except CheckFailure as ex:
        _handleFailure(ex, getattr(checker, 'echo', False))
        return EXIT_CHECK_FAILED

    return EXIT_OK

def run(args = None, environ = None, checker = None):
    """
    Run checks of the feature matrix.
    Returns exit code of the process.
    """

    if args is None:
        args = sys.argv
    if environ is None:
        environ = os.environ

    try:
        return _run(args, environ, checker)
    except FeatMatrixError as ex:
        if log.verbose() > 1:
            log.pprint('RED', ex.fullmsg)
        log.error(ex.msg)
        if isinstance(ex, ConfigurationError):
            return EXIT_CONF_ERROR
        if isinstance(ex, ProcessInterrupted):
            return 128 + ex.signum
        return EXIT_CHECK_FAILED
    except KeyboardInterrupt:
        log.pprint('RED', 'Interrupted')
        return EXIT_INTERRUPTED

def main():
    """ Entry point of the 'run-matrix' command """
    sys.exit(run())
