# coding=utf-8
#

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from fnmatch import fnmatchcase

from fm.constants import TAG_TARGET_PREFIX, TAG_NOT_TARGET_PREFIX
from fm.constants import DEFAULT_SKIP_RULES, RULE_SKIP_ON_NATIVE
from fm.constants import RULE_SKIP_ON_CROSS, RULE_IGNORE
from fm.error import FeatMatrixLogicError

def isNativeTarget(target, nativeTargets):
    """
    Return True if target matches any name/pattern from nativeTargets
    """
    return any(fnmatchcase(target, x) for x in nativeTargets)

def _makeRules(skipRules):
    rules = dict(DEFAULT_SKIP_RULES)
    if skipRules:
        rules.update(skipRules)
    return rules

def _checkPlainTag(tag, rules, native):
    rule = rules.get(tag)
    if rule is None:
        raise FeatMatrixLogicError("Programming error: no rule for tag %r" % tag)
    if rule == RULE_SKIP_ON_NATIVE:
        return not native
    if rule == RULE_SKIP_ON_CROSS:
        return native
    if rule == RULE_IGNORE:
        return True
    raise FeatMatrixLogicError("Programming error: unknown rule %r" % rule)

def isIncluded(target, combination, nativeTargets, skipRules = None):
    """
    Return True if the combination should be checked for the target.
    Combination is included only if all constraints from its tags are met.
    Several 'target:<pattern>' tags mean that any of them must match.
    """

    rules = _makeRules(skipRules)
    native = isNativeTarget(target, nativeTargets)

    targetPatterns = []
    for tag in sorted(combination.tags):
        if tag.startswith(TAG_TARGET_PREFIX):
            targetPatterns.append(tag[len(TAG_TARGET_PREFIX):])
            continue
        if tag.startswith(TAG_NOT_TARGET_PREFIX):
            if fnmatchcase(target, tag[len(TAG_NOT_TARGET_PREFIX):]):
                return False
            continue
        if not _checkPlainTag(tag, rules, native):
            return False

    if targetPatterns and not any(fnmatchcase(target, x) for x in targetPatterns):
        return False

    return True

def selectCombinations(target, combinations, nativeTargets, skipRules = None):
    """
    Split combinations into included and skipped ones for the target.
    Order of combinations is preserved in both lists.
    Returns tuple (selected, skipped).
    """

    selected, skipped = [], []
    for combination in combinations:
        if isIncluded(target, combination, nativeTargets, skipRules):
            selected.append(combination)
        else:
            skipped.append(combination)
    return selected, skipped
