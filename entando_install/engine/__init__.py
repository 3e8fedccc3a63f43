from .reconciler import ApplyResult, Reconciler, ResourceOutcome
from .version import choose_version, paginate, resolve
from .waiter import CheckResult, Decision, WaitOutcome, namespace_exists, resources_exist, wait_until

__all__ = [
    "ApplyResult",
    "Reconciler",
    "ResourceOutcome",
    "choose_version",
    "paginate",
    "resolve",
    "CheckResult",
    "Decision",
    "WaitOutcome",
    "namespace_exists",
    "resources_exist",
    "wait_until",
]
