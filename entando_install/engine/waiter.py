import enum
import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from entando_install.records import Record, ResourceRef

logger = logging.getLogger("entando_install.engine")


class WaitOutcome(enum.Enum):
    SATISFIED = "satisfied"
    ABORTED = "aborted"


class Decision(enum.Enum):
    RETRY = "retry"
    ABORT = "abort"


@dataclass(frozen=True)
class CheckResult:
    satisfied: bool
    reason: str = ""

    @classmethod
    def ok(cls) -> "CheckResult":
        return cls(True)

    @classmethod
    def missing(cls, reason: str) -> "CheckResult":
        return cls(False, reason)


def wait_until(
    check: Callable[[], CheckResult],
    on_unsatisfied: Callable[[CheckResult], Decision],
) -> WaitOutcome:
    """Evaluate ``check`` until it is satisfied or ``on_unsatisfied`` gives up.

    There is no retry limit and no sleep between attempts: every retry follows
    a remediation the operator agreed to.
    """
    attempt = 0
    while True:
        attempt += 1
        result = check()
        if result.satisfied:
            logger.debug("precondition satisfied after %s check(s)", attempt)
            return WaitOutcome.SATISFIED
        logger.debug("precondition unsatisfied (attempt %s): %s", attempt, result.reason)
        if on_unsatisfied(result) is Decision.ABORT:
            return WaitOutcome.ABORTED


def namespace_exists(gateway, namespace: str) -> Callable[[], CheckResult]:
    def check() -> CheckResult:
        if gateway.read_namespace(namespace) is not None:
            return CheckResult.ok()
        return CheckResult.missing(f"namespace '{namespace}' does not exist")
    return check


def resources_exist(gateway, records: Iterable[Record]) -> Callable[[], CheckResult]:
    records = list(records)

    def check() -> CheckResult:
        for record in records:
            if gateway.read_resource(record) is None:
                return CheckResult.missing(f"{ResourceRef.of(record).name} not found")
        return CheckResult.ok()
    return check
