# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name, redefined-outer-name

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import signal
import textwrap
import pytest

from fm import starter, log
from fm.constants import CLI_NAME, EXIT_OK, EXIT_CHECK_FAILED, EXIT_CONF_ERROR
from fm.constants import EXIT_INTERRUPTED
from fm.error import ConfigurationError, ProcessInterrupted, SpawnError
from tests.common import SpyChecker, PYTHON

NATIVE_TARGETS_ENV = { 'FEATMATRIX_NATIVE_TARGETS': 'host-native' }

@pytest.fixture
def workdir(tmpdir, monkeypatch):
    # no matrix config in the current directory
    monkeypatch.chdir(str(tmpdir.realpath()))
    return tmpdir

def _run(checker, target = None, args = None, extraEnv = None):
    environ = dict(NATIVE_TARGETS_ENV)
    if target is not None:
        environ['TARGET'] = target
    if extraEnv:
        environ.update(extraEnv)
    args = [CLI_NAME, '--color', 'no'] + (args if args else [])
    return starter.run(args, environ, checker)

def testReadTarget():
    assert starter.readTarget({ 'TARGET': 'thumbv6m-none-eabi' }) == \
                                                'thumbv6m-none-eabi'
    assert starter.readTarget({ 'TARGET': ' host \n' }) == 'host'
    for environ in ({}, { 'TARGET': '' }, { 'TARGET': '  \t' }):
        with pytest.raises(ConfigurationError):
            starter.readTarget(environ)

def testMakeCliDefaults():
    assert starter.makeCliDefaults({}) == {}
    environ = { 'FEATMATRIX_CONFIG': 'a.yaml', 'FEATMATRIX_VERBOSE': '2' }
    assert starter.makeCliDefaults(environ) == { 'config': 'a.yaml', 'verbose': 2 }
    with pytest.raises(ConfigurationError):
        starter.makeCliDefaults({ 'FEATMATRIX_VERBOSE': 'high' })

@pytest.mark.usefixtures("workdir")
class TestScenarios(object):

    def testHostTargetOneCheck(self, spyChecker):
        assert _run(spyChecker, 'host-native') == EXIT_OK
        assert spyChecker.names == ['no-default-features']

    def testCrossTargetBothChecks(self, spyChecker):
        assert _run(spyChecker, 'cross-arch') == EXIT_OK
        assert spyChecker.names == ['no-default-features', 'default-features']
        assert [x[1] for x in spyChecker.calls] == ['cross-arch', 'cross-arch']

    def testCrossTargetFirstFails(self, capsys):
        checker = SpyChecker({ 'no-default-features': 1 })
        assert _run(checker, 'cross-arch') == EXIT_CHECK_FAILED
        assert checker.names == ['no-default-features']

        err = capsys.readouterr().err
        assert "Check 'no-default-features' failed" in err
        # captured output of the failed check is shown as it wasn't echoed
        assert 'output of no-default-features' in err
        assert 'Stopped at 1/2' in err

    def testCrossTargetSecondFails(self):
        checker = SpyChecker({ 'default-features': 1 })
        assert _run(checker, 'cross-arch') == EXIT_CHECK_FAILED
        assert checker.names == ['no-default-features', 'default-features']

    def testEchoedOutputIsNotRepeated(self, capsys):
        checker = SpyChecker({ 'no-default-features': 1 }, echo = True)
        assert _run(checker, 'cross-arch') == EXIT_CHECK_FAILED
        err = capsys.readouterr().err
        assert 'output of no-default-features' not in err

    @pytest.mark.parametrize("target", [None, '', '   '])
    def testEmptyTarget(self, spyChecker, mocker, target):
        runCmd = mocker.patch('fm.check.runCmd')
        assert _run(spyChecker, target) == EXIT_CONF_ERROR
        assert _run(None, target) == EXIT_CONF_ERROR
        assert not spyChecker.calls
        assert not runCmd.called

    def testDefaultNativeTarget(self, spyChecker):
        environ = { 'TARGET': 'x86_64-unknown-linux-gnu' }
        ecode = starter.run([CLI_NAME, '--color', 'no'], environ, spyChecker)
        assert ecode == EXIT_OK
        assert spyChecker.names == ['no-default-features']

def testConfigFile(workdir, spyChecker):

    workdir.join('matrix.yaml').write(textwrap.dedent("""
        native-targets: [host-*]
        combinations:
          - name: minimal
            flags: --no-default-features
          - name: embedded
            flags: --features=embedded
            tags: target:thumb*
        generate:
          features: [std]
          tags: requires-cross
        """))

    # env var has priority over the config file
    assert _run(spyChecker, 'host-native') == EXIT_OK
    assert spyChecker.names == ['minimal']

    spyChecker.calls.clear()
    ecode = starter.run([CLI_NAME, '--color', 'no'],
                        { 'TARGET': 'thumbv6m-none-eabi' }, spyChecker)
    assert ecode == EXIT_OK
    assert spyChecker.names == ['minimal', 'embedded', 'features:std']

    spyChecker.calls.clear()
    ecode = starter.run([CLI_NAME, '--color', 'no'],
                        { 'TARGET': 'host-arm' }, spyChecker)
    assert ecode == EXIT_OK
    assert spyChecker.names == ['minimal']

def testConfigFileFromOptionAndEnv(workdir, spyChecker):
    confdir = workdir.mkdir('conf')
    path = str(confdir.join('checks.yaml'))
    confdir.join('checks.yaml').write(textwrap.dedent("""
        combinations:
          - name: only-one
        """))

    assert _run(spyChecker, 'cross-arch', ['-c', path]) == EXIT_OK
    assert spyChecker.names == ['only-one']

    spyChecker.calls.clear()
    extraEnv = { 'FEATMATRIX_CONFIG': path }
    assert _run(spyChecker, 'cross-arch', extraEnv = extraEnv) == EXIT_OK
    assert spyChecker.names == ['only-one']

@pytest.mark.usefixtures("workdir")
def testInvalidConfigFile(spyChecker):
    assert _run(spyChecker, 'cross-arch', ['-c', 'notexisting.yaml']) == \
                                                            EXIT_CONF_ERROR

    with open('matrix.yaml', 'w') as file:
        file.write('command: 1\n')
    assert _run(spyChecker, 'cross-arch') == EXIT_CONF_ERROR
    assert not spyChecker.calls

def testConfigFileNotUtf8(workdir, spyChecker):
    workdir.join('matrix.yaml').write_binary(b'command: \xff\xfe\n')
    assert _run(spyChecker, 'cross-arch') == EXIT_CONF_ERROR
    assert not spyChecker.calls

@pytest.mark.usefixtures("workdir")
def testListOption(spyChecker, capsys):
    assert _run(spyChecker, 'host-native', ['--list']) == EXIT_OK
    assert not spyChecker.calls
    err = capsys.readouterr().err
    assert 'no-default-features' in err
    assert 'default-features (skipped)' in err

@pytest.mark.usefixtures("workdir")
def testDryRun(mocker, capsys):
    runCmd = mocker.patch('fm.check.runCmd')
    assert _run(None, 'cross-arch', ['--dry-run']) == EXIT_OK
    assert not runCmd.called
    err = capsys.readouterr().err
    assert 'cargo check --target cross-arch --no-default-features' in err

def testRealProcesses(workdir, capfd):

    code = 'import sys; print("checked", *sys.argv[1:]); ' \
           'sys.exit(5 if "--fail" in sys.argv else 0)'
    workdir.join('matrix.yaml').write(textwrap.dedent("""
        command: [%r, -c, %r]
        target-args: --target=$TARGET
        combinations:
          - name: first
          - name: second
            flags: --fail
          - name: third
        """ % (PYTHON, code)))

    assert _run(None, 'cross-arch') == EXIT_CHECK_FAILED
    captured = capfd.readouterr()
    assert 'checked --target=cross-arch\n' in captured.out
    assert 'checked --target=cross-arch --fail\n' in captured.out
    assert 'third' not in captured.out
    assert "Check 'second' failed with exit code 5" in captured.err

@pytest.mark.usefixtures("workdir")
def testSpawnErrorExitCode(capsys):

    def checker(index, target, combination):
        raise SpawnError(index, combination.name, ['cargo'], 'not found')

    assert _run(checker, 'cross-arch') == EXIT_CHECK_FAILED
    assert 'could not be started' in capsys.readouterr().err

@pytest.mark.usefixtures("workdir")
def testInterrupted():

    def interrupted(index, target, combination):
        raise KeyboardInterrupt

    assert _run(interrupted, 'cross-arch') == EXIT_INTERRUPTED

    def terminated(index, target, combination):
        raise ProcessInterrupted(['cargo'], signal.SIGTERM)

    assert _run(terminated, 'cross-arch') == 128 + signal.SIGTERM

@pytest.mark.usefixtures("workdir")
def testVerboseFromEnv(spyChecker):
    assert _run(spyChecker, 'host-native',
                extraEnv = { 'FEATMATRIX_VERBOSE': '2' }) == EXIT_OK
    assert log.verbose() == 2
    assert _run(spyChecker, 'host-native',
                extraEnv = { 'FEATMATRIX_VERBOSE': 'x' }) == EXIT_CONF_ERROR

def testMain(workdir, monkeypatch, mocker):
    mocker.patch('fm.check.runCmd')
    monkeypatch.setattr(os, 'environ', { 'TARGET': 'cross-arch' })
    monkeypatch.setattr('sys.argv', [CLI_NAME, '--dry-run', '--color', 'no'])
    with pytest.raises(SystemExit) as cm:
        starter.main()
    assert cm.value.code == EXIT_OK
