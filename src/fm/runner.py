# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from fm import log
from fm.pyutils import stringtype
from fm.error import ConfigurationError, CheckFailure
from fm.combination import FeatureCombination
from fm.select import selectCombinations

class RunState(object):
    """
    State of one run of the MatrixRunner:
    pending -> checking(i) -> succeeded | failed(i)
    """

    PENDING = 'pending'
    CHECKING = 'checking'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'

    __slots__ = ('kind', 'index')

    def __init__(self, kind, index = None):
        self.kind = kind
        self.index = index

    @property
    def terminal(self):
        """ True if the state is terminal """
        return self.kind in (self.SUCCEEDED, self.FAILED)

    def __eq__(self, other):
        if not isinstance(other, RunState):
            return NotImplemented
        return (self.kind, self.index) == (other.kind, other.index)

    def __hash__(self):
        return hash((self.kind, self.index))

    def __repr__(self):
        if self.index is None:
            return 'RunState(%s)' % self.kind
        return 'RunState(%s(%d))' % (self.kind, self.index)

    @classmethod
    def pending(cls):
        return cls(cls.PENDING)

    @classmethod
    def checking(cls, index):
        return cls(cls.CHECKING, index)

    @classmethod
    def succeeded(cls):
        return cls(cls.SUCCEEDED)

    @classmethod
    def failed(cls, index):
        return cls(cls.FAILED, index)

class RunReport(object):
    """
    Ordered results of checks for one target.
    If the run failed then results is a prefix of the planned sequence
    and the last result is the failed one.
    """

    def __init__(self, target, planned, skipped = None):
        self.target = target
        self.planned = planned
        self.skipped = list(skipped) if skipped else []
        self.results = []
        self.state = RunState.pending()

    @property
    def succeeded(self):
        """ True if all planned checks passed """
        return self.state.kind == RunState.SUCCEEDED

    def __len__(self):
        return len(self.results)

    def __iter__(self):
        return iter(self.results)

    def __repr__(self):
        return 'RunReport(target=%r, state=%r, results=%d/%d)' % \
                (self.target, self.state, len(self.results), self.planned)

def _validateInput(target, combinations):

    if not isinstance(target, stringtype) or not target.strip():
        raise ConfigurationError("Target cannot be empty")

    if not combinations:
        raise ConfigurationError("List of feature combinations cannot be empty")

    for combination in combinations:
        if not isinstance(combination, FeatureCombination):
            msg = "Value %r is not a feature combination" % (combination, )
            raise ConfigurationError(msg)

class MatrixRunner(object):
    """
    Runs checks for feature combinations one by one and stops
    at the first failure.
    """

    def __init__(self, checker):
        """
        Param 'checker' is a callable (index, target, combination) -> CheckResult
        """
        self._checker = checker
        self._state = RunState.pending()

    @property
    def state(self):
        """ State of the current/last run """
        return self._state

    def _setState(self, report, state):
        self._state = state
        report.state = state

    def run(self, target, combinations, skipped = None):
        """
        Run checks for all combinations in the order they are supplied.
        Returns RunReport if all checks passed.
        Raises CheckFailure (or SpawnError) on the first failed check.
        """

        _validateInput(target, combinations)

        combinations = list(combinations)
        total = len(combinations)
        report = RunReport(target, total, skipped)
        self._setState(report, RunState.pending())

        for index, combination in enumerate(combinations):
            self._setState(report, RunState.checking(index))
            log.printStep('[%d/%d] %s (target: %s)', index + 1, total,
                          combination.name, target)

            try:
                result = self._checker(index, target, combination)
            except BaseException as ex:
                # SpawnError, interruption, timeout
                self._setState(report, RunState.failed(index))
                ex.report = report
                raise

            report.results.append(result)
            if not result.success:
                self._setState(report, RunState.failed(index))
                ex = CheckFailure(index, combination.name, result.exitcode,
                                  result.output, result.cmdline)
                ex.report = report
                raise ex

            log.debug("Check %r passed in %.2f sec.", combination.name,
                      result.duration)

        self._setState(report, RunState.succeeded())
        log.pprint('GREEN', 'All %d checks passed for the target %r' % \
                   (total, target))
        return report

def runMatrix(target, combinations, nativeTargets, checker, skipRules = None):
    """
    Select combinations applicable for the target and run them.
    Returns RunReport. Raises CheckFailure on the first failed check.
    """

    _validateInput(target, combinations)

    selected, skipped = selectCombinations(target, combinations,
                                           nativeTargets, skipRules)
    for combination in skipped:
        log.info("Skipping %r for the target %r", combination.name, target)

    runner = MatrixRunner(checker)
    if not selected:
        log.warn("No feature combinations are applicable for the target %r",
                 target)
        report = RunReport(target, 0, skipped)
        report.state = RunState.succeeded()
        return report

    return runner.run(target, selected, skipped)
