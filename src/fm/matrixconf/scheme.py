# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from fm.constants import KNOWN_PLAIN_TAGS, KNOWN_SKIP_RULES, GENERATE_MODES
from fm.error import ConfigurationValueError
from fm.combination import isValidTag
from fm.utils import toList

class AnyStrKey(object):
    """ Any amount of string keys"""
    __slots__ = ()

    def __eq__(self, other):
        if not isinstance(other, AnyStrKey):
            # don't attempt to compare against unrelated types
            return NotImplemented # pragma: no cover
        return True

    def __hash__(self):
        # necessary for instances to behave sanely in dicts and sets.
        return hash(self.__class__)

ANYSTR_KEY = AnyStrKey()

def _checkNotEmpty(value, fullkey):
    if not toList(value):
        msg = "Value cannot be empty for the param %r." % fullkey
        raise ConfigurationValueError(msg)

def _checkTags(value, fullkey):
    for tag in toList(value):
        if not isValidTag(tag):
            msg = "Value %r is invalid tag for the param %r." % (tag, fullkey)
            raise ConfigurationValueError(msg)

_STR_OR_LIST = { 'type': ('str', 'list-of-strs') }

_combinationScheme = {
    'name' : { 'type': 'str', 'required' : True, 'allowed' : _checkNotEmpty },
    'flags' : _STR_OR_LIST,
    'tags' : { 'type': ('str', 'list-of-strs'), 'allowed' : _checkTags },
}

confscheme = {
    'command' : { 'type': ('str', 'list-of-strs'), 'allowed' : _checkNotEmpty },
    'target-args' : _STR_OR_LIST,
    'native-targets' : _STR_OR_LIST,
    'skip-rules' : {
        'type' : 'dict',
        'vars' : {
            tag : { 'type': 'str', 'allowed' : KNOWN_SKIP_RULES }
            for tag in KNOWN_PLAIN_TAGS
        },
    },
    'cwd' : { 'type': 'str' },
    'env' : {
        'type' : 'dict',
        'vars' : { ANYSTR_KEY : { 'type': 'str' } },
    },
    'combinations' : {
        'type' : 'list',
        'vars-type' : 'dict',
        'dict-vars' : _combinationScheme,
    },
    'generate' : {
        'type' : 'dict',
        'vars' : {
            'features' : {
                'type': ('str', 'list-of-strs'),
                'required' : True,
                'allowed' : _checkNotEmpty,
            },
            'mode' : { 'type': 'str', 'allowed' : GENERATE_MODES },
            'no-default-features' : { 'type': 'bool' },
            'feature-flag' : { 'type': ('str', 'list-of-strs'),
                               'allowed' : _checkNotEmpty },
            'tags' : { 'type': ('str', 'list-of-strs'), 'allowed' : _checkTags },
        },
    },
}
