# coding=utf-8
#

"""
 Copyright (c) 2019 Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from fm import utils

APPNAME = 'featmatrix'
CAP_APPNAME = 'FeatMatrix'
CLI_NAME = 'run-matrix'
AUTHOR = 'FeatMatrix developers'

# environment variables
TARGET_ENV_VAR = 'TARGET'
CONFIG_ENV_VAR = 'FEATMATRIX_CONFIG'
NATIVE_TARGETS_ENV_VAR = 'FEATMATRIX_NATIVE_TARGETS'
VERBOSE_ENV_VAR = 'FEATMATRIX_VERBOSE'
ON_TTY_ENV_VAR = 'FEATMATRIX_ON_TTY'

MATRIXCONF_NAME = 'matrix'
MATRIXCONF_EXTS = ['.yaml', '.yml']
MATRIXCONF_FILENAMES = ['%s%s' % (MATRIXCONF_NAME, x) for x in MATRIXCONF_EXTS]

# plain CI script: 'cargo check --target $TARGET [--no-default-features]'
DEFAULT_CHECK_COMMAND = ['cargo', 'check']
DEFAULT_TARGET_ARGS = ['--target', '$TARGET']
DEFAULT_NATIVE_TARGETS = ['x86_64-unknown-linux-gnu']
DEFAULT_FEATURE_FLAG = '--features=$FEATURES'
NO_DEFAULT_FEATURES_FLAG = '--no-default-features'

# combination tags
TAG_ALWAYS = 'always'
TAG_REQUIRES_CROSS = 'requires-cross'
TAG_NATIVE_ONLY = 'native-only'
TAG_TARGET_PREFIX = 'target:'
TAG_NOT_TARGET_PREFIX = 'not-target:'
KNOWN_PLAIN_TAGS = (TAG_ALWAYS, TAG_REQUIRES_CROSS, TAG_NATIVE_ONLY)
KNOWN_TAG_PREFIXES = (TAG_TARGET_PREFIX, TAG_NOT_TARGET_PREFIX)

# rules which can be assigned to plain tags in the 'skip-rules' config param
RULE_SKIP_ON_NATIVE = 'skip-on-native'
RULE_SKIP_ON_CROSS = 'skip-on-cross'
RULE_IGNORE = 'ignore'
KNOWN_SKIP_RULES = (RULE_SKIP_ON_NATIVE, RULE_SKIP_ON_CROSS, RULE_IGNORE)
DEFAULT_SKIP_RULES = {
    TAG_ALWAYS : RULE_IGNORE,
    TAG_REQUIRES_CROSS : RULE_SKIP_ON_NATIVE,
    TAG_NATIVE_ONLY : RULE_SKIP_ON_CROSS,
}

GENERATE_MODES = ('each', 'powerset', 'all')

# process exit codes
EXIT_OK = 0
EXIT_CHECK_FAILED = 1
EXIT_CONF_ERROR = 2
EXIT_INTERRUPTED = 130


PLATFORM = utils.platform()
