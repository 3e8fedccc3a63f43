import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from entando_install import manifests
from entando_install.engine.context import InstallContext
from entando_install.errors import ProjectFileError

logger = logging.getLogger("entando_install.project")


def project_folder_name(project: str, namespace: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    stamp = f"{now.year}-{now.month}-{now.day}_{now.hour}_{now.minute}_{now.second}"
    return f"entando-{project}-{namespace}-{stamp}"


def create_project_dir(base: str, project: str, namespace: str, now: Optional[datetime] = None) -> Path:
    folder = project_folder_name(project, namespace, now)
    path = Path(base) / folder
    logger.info("Creating %s", folder)
    try:
        path.mkdir()
    except OSError as e:
        raise ProjectFileError(folder, e.strerror or str(e)) from e
    return Path(os.path.realpath(path))


def write_project_files(ctx: InstallContext, namespace_resources: str, operator_sample: str) -> Dict[str, Path]:
    """Generate every manifest the operator may apply, in the order they are written."""
    files = [
        ("Generating the Operator ConfigMap", manifests.OPERATOR_CONFIG_FILE,
         lambda: manifests.operator_config(operator_sample, ctx.project, ctx.tls, ctx.local)),
        ("Generating the base EntandoApp manifest", manifests.app_file(ctx.project),
         lambda: manifests.app_manifest(ctx.project, ctx.namespace, ctx.hostname)),
        ("Generating the postgres-sql secret", manifests.POSTGRES_SECRET_FILE,
         manifests.postgres_secret_manifest),
        ("Generating the TLS certificate request", manifests.tls_cert_file(ctx.project),
         lambda: manifests.dump_document(manifests.tls_certificate(ctx.project, ctx.namespace, ctx.hostname))),
        ("Generating the file to restart the installation in case it stops", manifests.REDEPLOY_FILE,
         lambda: manifests.dump_document(manifests.redeploy_patch())),
        ("Saving a backup of the namespace resources", manifests.NAMESPACE_RESOURCES_FILE,
         lambda: namespace_resources),
    ]

    written: Dict[str, Path] = {}
    for title, name, render in files:
        logger.info(title)
        target = ctx.project_path / name
        try:
            target.write_text(render())
        except OSError as e:
            raise ProjectFileError(str(target), e.strerror or str(e)) from e
        written[name] = target
    return written


def read_project_file(ctx: InstallContext, name: str) -> str:
    source = ctx.project_path / name
    try:
        return source.read_text()
    except OSError as e:
        raise ProjectFileError(str(source), e.strerror or str(e), action="reading") from e
