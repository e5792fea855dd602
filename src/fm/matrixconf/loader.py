# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

__all__ = [
    'MatrixConf',
    'findConfFile',
    'makeDefault',
    'fromData',
    'load',
]

import os

from fm import log
from fm.constants import MATRIXCONF_FILENAMES, DEFAULT_CHECK_COMMAND
from fm.constants import DEFAULT_TARGET_ARGS, DEFAULT_NATIVE_TARGETS
from fm.constants import DEFAULT_FEATURE_FLAG
from fm.error import ConfigurationError
from fm.utils import toList, uniqueListWithOrder
from fm.combination import FeatureCombination, generateCombinations
from fm.combination import DEFAULT_COMBINATIONS
from fm.matrixconf import yaml
from fm.matrixconf.validator import Validator

isfile = os.path.isfile
joinpath = os.path.join

class MatrixConf(object):
    """
    Ready to use matrix config
    """

    # pylint: disable = too-many-instance-attributes, too-many-arguments

    def __init__(self, command, targetArgs, nativeTargets, combinations,
                 skipRules = None, cwd = None, env = None, path = None):
        self.command = toList(command)
        self.targetArgs = toList(targetArgs)
        self.nativeTargets = uniqueListWithOrder(toList(nativeTargets))
        self.combinations = tuple(combinations)
        self.skipRules = dict(skipRules) if skipRules else {}
        self.cwd = cwd
        self.env = dict(env) if env else {}
        self.path = path

    def __repr__(self):
        return 'MatrixConf(path=%r, command=%r, combinations=%r)' % \
                (self.path, self.command, [x.name for x in self.combinations])

def findConfFile(dirpath):
    """
    Find matrix config file in the directory.
    Returns None if file was not found.
    """

    for name in MATRIXCONF_FILENAMES:
        filepath = joinpath(dirpath, name)
        if isfile(filepath):
            return filepath
    return None

def makeDefault():
    """
    Make config which does the same as a plain CI script:
    'cargo check --no-default-features' for all targets and
    'cargo check' for all targets except native ones.
    """

    return MatrixConf(DEFAULT_CHECK_COMMAND, DEFAULT_TARGET_ARGS,
                      DEFAULT_NATIVE_TARGETS, DEFAULT_COMBINATIONS)

def _makeCombinations(data):
    combinations = []
    for params in data.get('combinations', []):
        combinations.append(FeatureCombination(params['name'],
                    params.get('flags', ()), params.get('tags', ())))

    params = data.get('generate')
    if params:
        combinations.extend(generateCombinations(
            params['features'],
            mode = params.get('mode', 'each'),
            noDefaultFeatures = params.get('no-default-features', True),
            featureFlag = params.get('feature-flag', DEFAULT_FEATURE_FLAG),
            tags = params.get('tags', ()),
        ))

    return combinations

def fromData(data, confpath = None):
    """
    Validate data of config and make MatrixConf object.
    Missed params are taken from the default config.
    """

    Validator(confpath).validate(data)

    try:
        if 'combinations' in data or 'generate' in data:
            combinations = _makeCombinations(data)
        else:
            combinations = DEFAULT_COMBINATIONS
    except ConfigurationError as ex:
        raise ConfigurationError(ex.msg, confpath = confpath) from ex

    if not combinations:
        raise ConfigurationError("There are no feature combinations",
                                 confpath = confpath)

    names = [x.name for x in combinations]
    duplicates = sorted(set(x for x in names if names.count(x) > 1))
    if duplicates:
        msg = "Combination names are not unique: %s" % ', '.join(duplicates)
        raise ConfigurationError(msg, confpath = confpath)

    cwd = data.get('cwd')
    if cwd and confpath and not os.path.isabs(cwd):
        cwd = os.path.normpath(joinpath(os.path.dirname(confpath), cwd))

    return MatrixConf(
        command = data.get('command', DEFAULT_CHECK_COMMAND),
        targetArgs = data.get('target-args', DEFAULT_TARGET_ARGS),
        nativeTargets = data.get('native-targets', DEFAULT_NATIVE_TARGETS),
        combinations = combinations,
        skipRules = data.get('skip-rules'),
        cwd = cwd,
        env = data.get('env'),
        path = confpath,
    )

def load(filepath = None, startdir = None):
    """
    Load matrix config from filepath or find it in startdir.
    Returns default config if filepath is None and no file was found.
    """

    if filepath is None:
        filepath = findConfFile(startdir if startdir else os.getcwd())
        if filepath is None:
            log.debug("No matrix config file found, default matrix is used")
            return makeDefault()
    elif not isfile(filepath):
        raise ConfigurationError("Matrix config file %r doesn't exist" % filepath)

    filepath = os.path.abspath(filepath)
    log.debug("Loading matrix config %r", filepath)
    return fromData(yaml.load(filepath), filepath)
