from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class InstallContext:
    namespace: str
    version: Optional[str] = None
    project: Optional[str] = None
    hostname: Optional[str] = None
    tls: bool = False
    local: bool = False
    kube_context: Optional[str] = None
    project_path: Optional[Path] = None


@dataclass
class InstallFlags:
    """Answers given on the command line; anything left unset is asked for."""

    entando_version: Optional[str] = None
    namespace: Optional[str] = None
    project: Optional[str] = None
    hostname: Optional[str] = None
    tls: bool = False
    local: bool = False
