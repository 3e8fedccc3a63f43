import argparse
import logging
import os
import sys

from entando_install.engine.context import InstallFlags
from entando_install.errors import InstallError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="entando-install",
        description="Guided installation of Entando into a Kubernetes cluster. "
                    "All the flags are optional and only serve to bypass the provided guided inputs.",
    )
    parser.add_argument("-v", "--entando-version", help="The version of Entando to install")
    parser.add_argument("-n", "--namespace", help="The namespace in which to install Entando")
    parser.add_argument("-p", "--project", help="The name of the project to deploy")
    parser.add_argument("-H", "--hostname", help="The hostname to use for the Entando app")
    parser.add_argument("-t", "--tls", action="store_true", help="Use TLS for the Entando app")
    parser.add_argument(
        "-l",
        "--local",
        action="store_true",
        help="Install into a local environment (e.g. minikube, k3s) instead of a cluster",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (overrides --log-level to DEBUG)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    debug = args.debug or os.getenv("DEBUG", "false").lower() == "true"
    level_name = "DEBUG" if debug else args.log_level.upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger = logging.getLogger("entando_install.cmd")
    logger.debug("Starting entando-install with level %s", level_name)

    flags = InstallFlags(
        entando_version=args.entando_version,
        namespace=args.namespace,
        project=args.project,
        hostname=args.hostname,
        tls=args.tls,
        local=args.local,
    )

    from .main import main as install_main

    try:
        install_main(flags)
    except InstallError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
