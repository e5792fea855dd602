# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

class AutoDict(dict):
    """
    This class provides dot notation and auto creation of items.
    It's for internal use only: CLI declarations and parsed CLI args.
    """

    def __missing__(self, key):
        val = AutoDict()
        self[key] = val
        return val

    def __getattr__(self, name):
        return self[name] # this calls __missing__ if name doesn't exist

    def __setattr__(self, name, value):
        self[name] = value

    def __copy__(self):
        return self.copy()

    def copy(self):
        """ shallow copy """
        return AutoDict(super(AutoDict, self).copy())
