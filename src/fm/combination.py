# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from itertools import combinations as _subsets

from fm.constants import KNOWN_PLAIN_TAGS, KNOWN_TAG_PREFIXES, TAG_ALWAYS
from fm.constants import TAG_REQUIRES_CROSS, NO_DEFAULT_FEATURES_FLAG
from fm.constants import DEFAULT_FEATURE_FLAG, GENERATE_MODES
from fm.pyutils import stringtype
from fm.utils import toList, substVars
from fm.error import ConfigurationError, ConfigurationValueError

def isValidTag(tag):
    """
    Return True if tag is known: plain tag or prefixed tag with a pattern
    """

    if tag in KNOWN_PLAIN_TAGS:
        return True
    for prefix in KNOWN_TAG_PREFIXES:
        if tag.startswith(prefix) and len(tag) > len(prefix):
            return True
    return False

class FeatureCombination(object):
    """
    Named set of command line flags for one check with tags which are
    used to decide whether the combination is applicable for a target.
    Objects of this class are immutable.
    """

    __slots__ = ('_name', '_flags', '_tags')

    def __init__(self, name, flags = (), tags = ()):

        if not isinstance(name, stringtype) or not name.strip():
            raise ConfigurationValueError("Combination name cannot be empty")

        flags = tuple(toList(flags))
        tags = frozenset(toList(tags))
        for val in flags + tuple(tags):
            if not isinstance(val, stringtype):
                msg = "Combination %r: value %r should be string" % (name, val)
                raise ConfigurationValueError(msg)

        for tag in sorted(tags):
            if not isValidTag(tag):
                msg = "Combination %r: unknown tag %r." % (name, tag)
                msg += " Known tags: %s" % ', '.join(KNOWN_PLAIN_TAGS)
                msg += ", %s<pattern>" % '<pattern>, '.join(KNOWN_TAG_PREFIXES)
                raise ConfigurationValueError(msg)

        object.__setattr__(self, '_name', name.strip())
        object.__setattr__(self, '_flags', flags)
        object.__setattr__(self, '_tags', tags)

    def __setattr__(self, name, value):
        raise AttributeError("%s is immutable" % self.__class__.__name__)

    @property
    def name(self):
        """ Name of the combination """
        return self._name

    @property
    def flags(self):
        """ Tuple of command line flags """
        return self._flags

    @property
    def tags(self):
        """ Frozenset of tags """
        return self._tags

    def __eq__(self, other):
        if not isinstance(other, FeatureCombination):
            return NotImplemented
        return (self._name, self._flags, self._tags) == \
                (other._name, other._flags, other._tags)

    def __hash__(self):
        return hash((self._name, self._flags, self._tags))

    def __repr__(self):
        return '%s(name=%r, flags=%r, tags=%r)' % (self.__class__.__name__,
                self._name, list(self._flags), sorted(self._tags))

DEFAULT_COMBINATIONS = (
    FeatureCombination('no-default-features',
                       [NO_DEFAULT_FEATURES_FLAG], [TAG_ALWAYS]),
    FeatureCombination('default-features', [], [TAG_REQUIRES_CROSS]),
)

def _featureSets(features, mode):
    if mode == 'each':
        return [(x, ) for x in features]
    if mode == 'all':
        return [tuple(features)]
    # powerset: by size and then in the order of declaration
    result = []
    for size in range(len(features) + 1):
        result.extend(_subsets(features, size))
    return result

def generateCombinations(features, mode = 'each', noDefaultFeatures = True,
                         featureFlag = DEFAULT_FEATURE_FLAG, tags = ()):
    """
    Generate list of FeatureCombination objects from the list of features.
    Param 'mode' can be 'each' (one combination per feature), 'all' (one
    combination with all features) or 'powerset' (all subsets of features,
    including empty one).
    Param 'featureFlag' is a template where $FEATURES is replaced with
    the comma-separated list of features.
    """

    if mode not in GENERATE_MODES:
        msg = "Unknown mode %r to generate combinations." % mode
        msg += " Allowed modes: %s" % ', '.join(GENERATE_MODES)
        raise ConfigurationValueError(msg)

    features = toList(features)
    if len(set(features)) != len(features):
        raise ConfigurationValueError("Features for generation have duplicates")
    if not features:
        raise ConfigurationError("No features for generation of combinations")

    result = []
    for featureSet in _featureSets(features, mode):
        flags = []
        if noDefaultFeatures:
            flags.append(NO_DEFAULT_FEATURES_FLAG)
        if featureSet:
            joined = ','.join(featureSet)
            flags.extend(substVars(x, { 'FEATURES': joined }) \
                                    for x in toList(featureFlag))
            name = 'features:%s' % joined
        else:
            name = 'features:<none>'
        result.append(FeatureCombination(name, flags, tags))

    return result
