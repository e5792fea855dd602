# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from fm.error import ConfigurationError, ConfigurationTypeError
from fm.error import ConfigurationValueError
from fm.pyutils import maptype, stringtype
from fm.utils import toList
from fm.matrixconf.scheme import ANYSTR_KEY, confscheme

class ConfigurationSubTypeError(ConfigurationTypeError):
    """Invalid config param type error in a nested param"""

class Validator(object):
    """
    Validator for structure of a matrix config.
    """

    __slots__ = ('_confpath', )

    _typeHandlerNames = {
        'bool' : '_handleBool',
        'str'  : '_handleStr',
        'dict' : '_handleDict',
        'list' : '_handleList',
        'complex' : '_handleComplex',
        'list-of-strs' : '_handleListOfStrs',
    }

    def __init__(self, confpath = None):
        self._confpath = confpath

    @staticmethod
    def _getHandler(typeName):
        if not isinstance(typeName, stringtype):
            typeName = 'complex' if len(typeName) > 1 else typeName[0]
        return getattr(Validator, Validator._typeHandlerNames[typeName])

    @staticmethod
    def _checkAllowed(value, allowed, fullkey):
        if allowed is None:
            return
        if callable(allowed):
            allowed(value, fullkey)
        elif value not in allowed:
            msg = "Value `%r` is invalid for the param %r." % (value, fullkey)
            msg = '%s Allowed values: %s' % (msg, str(list(allowed))[1:-1])
            raise ConfigurationValueError(msg)

    def _handleComplex(self, value, schemeAttrs, fullkey):

        types = schemeAttrs['type']
        for _type in types:
            try:
                handler = Validator._getHandler(_type)
                handler(self, value, schemeAttrs, fullkey)
            except ConfigurationSubTypeError:
                # it's an error from a sub type
                raise
            except ConfigurationTypeError:
                pass
            else:
                return

        typeswitch = {
            'str'         : 'string',
            'list-of-strs': 'list of strings',
            'dict'        : 'dict/another map type',
        }
        typeNames = [ typeswitch.get(_type, _type) for _type in types ]

        msg = "Value `%r` is invalid for the param %r." % (value, fullkey)
        msg += " It should be %s." % " or ".join(typeNames)
        raise ConfigurationTypeError(msg)

    def _handleBool(self, value, _, fullkey):
        if not isinstance(value, bool):
            msg = "Param %r should be bool" % fullkey
            raise ConfigurationTypeError(msg)

    def _handleStr(self, value, schemeAttrs, fullkey):
        if not isinstance(value, stringtype):
            msg = "Param %r should be string" % fullkey
            raise ConfigurationTypeError(msg)
        self._checkAllowed(value, schemeAttrs.get('allowed'), fullkey)

    def _handleListOfStrs(self, value, schemeAttrs, fullkey):

        types = schemeAttrs['type']
        if isinstance(types, stringtype):
            types = [types]
        if 'str' in types and isinstance(value, stringtype):
            value = toList(value)

        if not isinstance(value, (list, tuple)):
            msg = "Value `%r` is invalid for the param %r." % (value, fullkey)
            msg += " It should be list of strings"
            raise ConfigurationTypeError(msg)

        for elem in value:
            if not isinstance(elem, stringtype):
                msg = "Value `%r` is invalid for the param %r." % (elem, fullkey)
                msg += " It should be string"
                raise ConfigurationTypeError(msg)

        allowed = schemeAttrs.get('allowed')
        if callable(allowed):
            allowed(value, fullkey)
        elif allowed is not None:
            for elem in value:
                self._checkAllowed(elem, allowed, fullkey)

    def _handleList(self, value, schemeAttrs, fullkey):

        if not isinstance(value, (list, tuple)):
            msg = "Value `%r` is invalid for the param %r." % (value, fullkey)
            msg += " It should be list"
            raise ConfigurationTypeError(msg)

        varsType = schemeAttrs.get('vars-type')
        if not varsType:
            return

        elemScheme = { 'type': varsType }
        if varsType == 'dict':
            elemScheme['vars'] = schemeAttrs.get('dict-vars', {})
        handler = Validator._getHandler(varsType)

        for i, elem in enumerate(value):
            try:
                handler(self, elem, elemScheme, '%s.[%d]' % (fullkey, i))
            except ConfigurationTypeError as ex:
                raise ConfigurationSubTypeError(ex.msg, ex) from ex

    def _handleDict(self, value, schemeAttrs, fullkey):

        if not isinstance(value, maptype):
            msg = "Value `%r` is invalid for the param %r." % (value, fullkey)
            msg += " It should be dict"
            raise ConfigurationTypeError(msg)

        varsScheme = schemeAttrs.get('vars', {})
        for key, val in value.items():
            _fullkey = '%s.%s' % (fullkey, key) if fullkey else key
            if not isinstance(key, stringtype):
                msg = "Type of key `%r` is invalid. In %r this key should be string." \
                    % (key, fullkey)
                raise ConfigurationTypeError(msg)

            attrs = varsScheme.get(key, varsScheme.get(ANYSTR_KEY))
            if attrs is None:
                msg = "Unknown name %r for the param %r." % (key, _fullkey)
                msg += " Allowed names: %s" % str(sorted(
                            x for x in varsScheme if x is not ANYSTR_KEY))[1:-1]
                raise ConfigurationValueError(msg)

            try:
                self._validate(val, attrs, _fullkey)
            except ConfigurationTypeError as ex:
                if not fullkey:
                    raise
                raise ConfigurationSubTypeError(ex.msg, ex) from ex

        for key, attrs in varsScheme.items():
            if attrs.get('required', False) and key not in value:
                _fullkey = '%s.%s' % (fullkey, key) if fullkey else key
                msg = "Param %r is required" % _fullkey
                raise ConfigurationValueError(msg)

    def _validate(self, value, schemeAttrs, fullkey):
        handler = Validator._getHandler(schemeAttrs['type'])
        handler(self, value, schemeAttrs, fullkey)

    def validate(self, data):
        """
        Validate data of matrix config. Raises ConfigurationError with
        path of the config file if something is wrong.
        """

        try:
            self._handleDict(data, { 'vars': confscheme }, '')
        except ConfigurationError as ex:
            if self._confpath is None:
                raise
            raise ex.__class__(ex.msg, confpath = self._confpath) from ex
