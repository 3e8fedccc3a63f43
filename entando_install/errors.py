from typing import Optional


class InstallError(Exception):
    """Base class for every condition that ends an installation run."""


class InstallAborted(InstallError):
    """The operator chose to stop. Not a failure."""

    def __init__(self, message: str = "installation aborted by the operator"):
        super().__init__(message)


class PreconditionAbort(InstallAborted):
    pass


class EmptyCatalog(InstallError):
    def __init__(self, source: Optional[str] = None):
        msg = "no Entando versions are available to choose from"
        if source:
            msg = f"{msg} ({source})"
        super().__init__(msg)


class RemoteFetchFailure(InstallError):
    def __init__(self, name: str, url: str, reason: str = ""):
        self.name = name
        self.url = url
        msg = f"failed fetching {name} from {url}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ClusterError(InstallError):
    def __init__(self, ref, action: str, status: Optional[int] = None, reason: str = ""):
        self.ref = ref
        self.action = action
        self.status = status
        self.reason = reason
        msg = f"error while {action} {ref}"
        if status:
            msg = f"{msg} (HTTP {status})"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ClusterWriteFailure(ClusterError):
    pass


class ProjectFileError(InstallError):
    def __init__(self, path: str, reason: str = "", action: str = "creating"):
        self.path = path
        msg = f"error while {action} '{path}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ManifestError(InstallError):
    def __init__(self, name: str, reason: str = ""):
        self.name = name
        msg = f"{name} is not a valid manifest"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
