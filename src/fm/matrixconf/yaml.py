# coding=utf-8
#

"""
 Copyright (c) 2021, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

__all__ = [
    'load',
]

import io

import yaml as pyyaml

from fm.error import ConfigurationError
from fm.pyutils import maptype

try:
    YamlLoader = pyyaml.CSafeLoader
except AttributeError:
    YamlLoader = pyyaml.SafeLoader

class StringIO(io.StringIO):
    """
    Customized StringIO
    """

    def __init__(self, data, name = '<file>'):
        super().__init__(data)
        # it's used in pyyaml for error reports
        self.name = name

def load(filepath):
    """
    Load YAML matrix config. Returns dict.
    """

    # config file should not be very big so it's loaded completely in memory
    try:
        with io.open(filepath, 'rt', encoding = 'utf-8') as fstream:
            stream = StringIO(fstream.read(), fstream.name)
    except OSError as ex:
        msg = "File %r can not be read: %s" % (filepath, ex.strerror or ex)
        raise ConfigurationError(msg, ex) from ex
    except UnicodeDecodeError as ex:
        msg = "File is not valid UTF-8 text: %s" % ex
        raise ConfigurationError(msg, ex, confpath = filepath) from ex

    try:
        loader = YamlLoader(stream)
        try:
            data = loader.get_single_data()
        finally:
            loader.dispose()
    except pyyaml.YAMLError as ex:
        raise ConfigurationError(ex = ex, confpath = filepath) from ex

    if data is None:
        raise ConfigurationError("File %r has no config data" % filepath)

    if not isinstance(data, maptype):
        raise ConfigurationError("File %r has invalid structure" % filepath)

    return dict(data)
