# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import pytest

from fm import check
from fm.error import SpawnError, CheckFailure
from fm.combination import FeatureCombination
from tests.common import PYTHON, NO_DEFAULT

def testBuildCmdLine():
    cmdline = check.buildCmdLine(['cargo', 'check'], ['--target', '$TARGET'],
                                 'thumbv6m-none-eabi', ('--no-default-features', ))
    assert cmdline == ['cargo', 'check', '--target', 'thumbv6m-none-eabi',
                       '--no-default-features']

    cmdline = check.buildCmdLine('cargo check', '--target=${TARGET}',
                                 'wasm32-unknown-unknown', ())
    assert cmdline == ['cargo', 'check', '--target=wasm32-unknown-unknown']

    cmdline = check.buildCmdLine('make check', [], 'host', ['A=1'])
    assert cmdline == ['make', 'check', 'A=1']

def testCheckResultSuccess():
    result = check.CheckResult(index = 0, combination = NO_DEFAULT,
                               target = 't', cmdline = [], exitcode = 0,
                               output = '', duration = 0.0)
    assert result.success
    result.exitcode = 2
    assert not result.success

def _pyChecker(code, **kwargs):
    return check.Checker([PYTHON, '-c', code], [], **kwargs)

def testCheckerSuccess(capfd):

    code = 'import sys; print(" ".join(sys.argv[1:]))'
    checker = check.Checker([PYTHON, '-c', code], ['--target', '$TARGET'])
    assert checker.echo
    comb = FeatureCombination('nodef', ['--no-default-features'])

    result = checker(3, 'thumbv6m-none-eabi', comb)

    assert result.success
    assert result.index == 3
    assert result.combination == comb
    assert result.target == 'thumbv6m-none-eabi'
    assert result.cmdline == [PYTHON, '-c', code, '--target',
                              'thumbv6m-none-eabi', '--no-default-features']
    assert result.output == '--target thumbv6m-none-eabi --no-default-features\n'
    assert result.duration >= 0

    # output is echoed
    captured = capfd.readouterr()
    assert '--target thumbv6m-none-eabi --no-default-features' in captured.out

def testCheckerFailure(capfd):

    code = 'import sys; sys.stderr.write("error: oops\\n"); sys.exit(101)'
    checker = _pyChecker(code, echo = False)
    result = checker(0, 'host', NO_DEFAULT)

    assert not result.success
    assert result.exitcode == 101
    assert result.output == 'error: oops\n'

    captured = capfd.readouterr()
    assert 'oops' not in captured.out
    assert 'oops' not in captured.err

def testCheckerInvalidUtf8Output():

    code = 'import sys; sys.stdout.buffer.write(b"error: \\xff\\xfe\\n"); ' \
           'sys.exit(101)'
    checker = _pyChecker(code, echo = False)
    result = checker(0, 'host', NO_DEFAULT)

    assert not result.success
    assert result.exitcode == 101
    assert result.output == 'error: \ufffd\ufffd\n'

def testCheckerEnvAndCwd(tmpdir):

    code = 'import os; print(os.getcwd()); print(os.environ["FM_CHECK_MODE"])'
    cwd = str(tmpdir.realpath())
    checker = _pyChecker(code, cwd = cwd, env = { 'FM_CHECK_MODE': 'strict' },
                         echo = False)
    result = checker(0, 'host', NO_DEFAULT)
    assert result.output.splitlines() == [cwd, 'strict']
    # it doesn't change env of the current process
    assert 'FM_CHECK_MODE' not in os.environ

def testCheckerSpawnError():

    checker = check.Checker(['fm-not-existing-command-qwerty'], ['$TARGET'])
    with pytest.raises(SpawnError) as cm:
        checker(1, 'host', NO_DEFAULT)

    ex = cm.value
    assert isinstance(ex, CheckFailure)
    assert ex.index == 1
    assert ex.name == 'no-default-features'
    assert ex.exitcode is None
    assert ex.cmdline == ['fm-not-existing-command-qwerty', 'host',
                          '--no-default-features']
    assert 'could not be started' in ex.msg

def testDryRunChecker(mocker):

    runCmd = mocker.patch('fm.check.runCmd')
    checker = check.DryRunChecker(['cargo', 'check'], ['--target', '$TARGET'])
    result = checker(0, 'thumbv6m-none-eabi', NO_DEFAULT)

    assert not runCmd.called
    assert result.success
    assert result.cmdline == ['cargo', 'check', '--target', 'thumbv6m-none-eabi',
                              '--no-default-features']
