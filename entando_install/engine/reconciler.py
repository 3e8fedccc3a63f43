import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from entando_install.errors import ClusterError, ClusterWriteFailure
from entando_install.records import ResourceRef, default_namespace, is_resource

logger = logging.getLogger("entando_install.engine")

CREATED = "created"
PATCHED = "patched"


@dataclass
class ResourceOutcome:
    ref: ResourceRef
    action: str
    error: Optional[ClusterError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ApplyResult:
    outcomes: List[ResourceOutcome] = field(default_factory=list)

    @property
    def applied(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failure(self) -> Optional[ResourceOutcome]:
        for o in self.outcomes:
            if not o.ok:
                return o
        return None

    @property
    def summary(self) -> str:
        created = sum(1 for o in self.outcomes if o.ok and o.action == CREATED)
        patched = sum(1 for o in self.outcomes if o.ok and o.action == PATCHED)
        failed = len(self.outcomes) - created - patched
        return f"created={created} patched={patched} failed={failed}"

    def raise_for_failure(self) -> None:
        failed = self.failure
        if failed is None:
            return
        if isinstance(failed.error, ClusterWriteFailure):
            raise failed.error
        raise ClusterWriteFailure(failed.ref, failed.action, failed.error.status, failed.error.reason)


class Reconciler:
    """Applies resource records one at a time: patch when present, create otherwise.

    The first record that cannot be written stops the pass. Records already
    applied in the pass stay applied.
    """

    def __init__(self, gateway):
        self.gateway = gateway

    def apply(self, targets: Iterable[Any], namespace: str) -> ApplyResult:
        result = ApplyResult()
        for record in targets:
            if not is_resource(record):
                continue
            default_namespace(record, namespace)
            outcome = self._apply_one(record)
            result.outcomes.append(outcome)
            if not outcome.ok:
                logger.error("Stopping: %s", outcome.error)
                break
        logger.debug("apply pass finished: %s", result.summary)
        return result

    def _apply_one(self, record) -> ResourceOutcome:
        ref = ResourceRef.of(record)
        try:
            live = self.gateway.read_resource(record)
        except ClusterError as e:
            return ResourceOutcome(ref, "reading", e)

        if live is not None:
            return self._patch(ref, record)

        logger.info("Creating %s", ref.name)
        try:
            self.gateway.create_resource(record)
        except ClusterError as e:
            if e.status == 409:
                # created by someone else since the read; converge onto it
                logger.info("%s appeared concurrently, patching instead", ref.name)
                return self._patch(ref, record)
            return ResourceOutcome(ref, "creating", e)
        return ResourceOutcome(ref, CREATED)

    def _patch(self, ref: ResourceRef, record) -> ResourceOutcome:
        logger.info("Patching %s", ref.name)
        try:
            self.gateway.patch_resource(record)
        except ClusterError as e:
            return ResourceOutcome(ref, "patching", e)
        return ResourceOutcome(ref, PATCHED)
