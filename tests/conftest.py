# coding=utf-8
#

# pylint: skip-file

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import pytest

from fm import log
from fm.constants import TARGET_ENV_VAR, CONFIG_ENV_VAR, VERBOSE_ENV_VAR
from fm.constants import NATIVE_TARGETS_ENV_VAR, ON_TTY_ENV_VAR
from tests.common import SpyChecker

@pytest.fixture(autouse = True)
def resetLogState():
    verbose = log.verbose()
    useColors = log.colorSettings['USE']
    log.colorSettings['USE'] = 0
    yield
    log.setVerbose(verbose)
    log.colorSettings['USE'] = useColors

@pytest.fixture(autouse = True)
def unsetEnviron(monkeypatch):
    varnames = (TARGET_ENV_VAR, CONFIG_ENV_VAR, VERBOSE_ENV_VAR,
                NATIVE_TARGETS_ENV_VAR, ON_TTY_ENV_VAR)
    for v in varnames:
        monkeypatch.delenv(v, raising = False)

@pytest.fixture
def spyChecker():
    return SpyChecker()
