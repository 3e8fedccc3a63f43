import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from entando_install import config, fetch, manifests, project
from entando_install.errors import InstallAborted, PreconditionAbort
from entando_install.records import valid_records

from .context import InstallContext, InstallFlags
from .reconciler import ApplyResult, Reconciler
from .version import choose_version
from .waiter import CheckResult, Decision, WaitOutcome, namespace_exists, resources_exist, wait_until

logger = logging.getLogger("entando_install.engine")

APPLY_YES = "Yes, please"
APPLY_WITH_NAMESPACE = "Yes, and re-apply namespace resources too"
APPLY_NO = "No, I will do it myself"


@dataclass
class Release:
    version: str
    cluster_resources: str
    namespace_resources: str
    operator_config: str


class Installer:
    """Walks the operator through one Entando installation.

    Every answer collected along the way ends up in the ``InstallContext``
    handed from step to step.
    """

    def __init__(self, gateway, prompter, fetch_text: Callable[[str, str], str] = fetch.fetch_text,
                 fetch_tags: Callable[[str], List[str]] = fetch.fetch_tags):
        self.gateway = gateway
        self.prompter = prompter
        self.reconciler = Reconciler(gateway)
        self.fetch_text = fetch_text
        self.fetch_tags = fetch_tags

    def run(self, flags: InstallFlags, kube_context: Optional[str] = None) -> InstallContext:
        ctx = InstallContext(namespace=self.ask_namespace(flags), kube_context=kube_context)

        self.ensure_namespace(ctx)
        print(f"\nThe target namespace is: {ctx.namespace}")

        tags = self.fetch_tags(config.TAGS_URL)
        ctx.version = choose_version(flags.entando_version, tags, self.prompter)
        print(f"\nThe selected Entando version is {ctx.version}")

        release = self.fetch_release(ctx.version)

        self.ensure_crds(ctx, manifests.parse_all_documents(release.cluster_resources, manifests.CLUSTER_RESOURCES_FILE))
        print("\nEntando CRDs are installed, so we can go on.\n")

        self.guard_existing_app(ctx)

        self.prompter.confirm_or_abort(
            f"Namespace-scoped resources for Entando {ctx.version} will be applied to the namespace "
            f"{ctx.namespace}. Continue? (They will be patched if already existing)"
        )
        print(f"\nNow installing namespace-scoped resources for Entando {ctx.version}...\n")
        self.apply(manifests.parse_all_documents(release.namespace_resources, manifests.NAMESPACE_RESOURCES_FILE), ctx)

        self.prepare_project(ctx, flags)
        self.ask_deployment_options(ctx, flags)

        project.write_project_files(ctx, release.namespace_resources, release.operator_config)
        print("\nAll resources have been created!\n")

        answer = self.prompter.select(
            "Now, do you want this program to apply the resources and start the deployment? "
            "(If you want, you can go edit the files now, before applying them)",
            [APPLY_YES, APPLY_WITH_NAMESPACE, APPLY_NO],
        )
        if answer == APPLY_NO:
            self.print_manual_steps(ctx)
        else:
            self.apply_generated(ctx, reapply_namespace=answer == APPLY_WITH_NAMESPACE)
            print("\nAll done! The deployment should be under way!")
            print(f"\nYou can check the created resources in '{ctx.project_path}'.")

        self.print_reminders(ctx)
        return ctx

    def ask_namespace(self, flags: InstallFlags) -> str:
        if flags.namespace:
            return flags.namespace.lower()
        print("")
        return self.prompter.text("Enter the target namespace:").lower()

    def ensure_namespace(self, ctx: InstallContext) -> None:
        def remediate(result: CheckResult) -> Decision:
            print("")
            if not self.prompter.confirm(f"The namespace '{ctx.namespace}' does not exist. Do you want to create it?"):
                return Decision.ABORT
            logger.info("Creating namespace '%s'", ctx.namespace)
            self.gateway.create_namespace(ctx.namespace)
            return Decision.RETRY

        if wait_until(namespace_exists(self.gateway, ctx.namespace), remediate) is WaitOutcome.ABORTED:
            raise PreconditionAbort(f"namespace '{ctx.namespace}' is required")

    def fetch_release(self, version: str) -> Release:
        return Release(
            version=version,
            namespace_resources=self.fetch_text(
                config.release_url(config.NAMESPACE_RESOURCES_URL, version), manifests.NAMESPACE_RESOURCES_FILE),
            cluster_resources=self.fetch_text(
                config.release_url(config.CLUSTER_RESOURCES_URL, version), manifests.CLUSTER_RESOURCES_FILE),
            operator_config=self.fetch_text(
                config.release_url(config.OPERATOR_CONFIG_URL, version), manifests.OPERATOR_CONFIG_FILE),
        )

    def ensure_crds(self, ctx: InstallContext, docs: List[Any]) -> None:
        crds = valid_records(docs)

        def remediate(result: CheckResult) -> Decision:
            logger.warning("Checking Entando CRDs failed: %s", result.reason)
            print("")
            if not self.prompter.confirm(
                "One or more of the Entando CRDs are missing. "
                "Do you have cluster permission and do you want to install them?"
            ):
                return Decision.ABORT
            self.apply(crds, ctx)
            return Decision.RETRY

        logger.info("Checking Entando CRDs")
        if wait_until(resources_exist(self.gateway, crds), remediate) is WaitOutcome.ABORTED:
            raise PreconditionAbort("the Entando CRDs are required")

    def guard_existing_app(self, ctx: InstallContext) -> None:
        apps = self.gateway.list_resources(config.ENTANDO_APP_API_VERSION, config.ENTANDO_APP_KIND, ctx.namespace)
        if apps:
            name = apps[0].metadata.name
            print(f"It appears an EntandoApp called '{name}' already exists in namespace '{ctx.namespace}'.")
            raise InstallAborted(f"EntandoApp '{name}' already exists in namespace '{ctx.namespace}'")

    def prepare_project(self, ctx: InstallContext, flags: InstallFlags) -> None:
        print("")
        cwd = os.getcwd()
        if self.prompter.confirm(f"You are here: '{cwd}'. Do you want to create a directory here?"):
            base = cwd
        elif self.prompter.confirm("Do you want to specify a custom path?"):
            base = self.prompter.text("Enter your custom path:")
        else:
            raise InstallAborted()

        if flags.project:
            ctx.project = flags.project
        else:
            print("")
            ctx.project = self.prompter.text("Please, specify a project name:")
        print(f"\nThe project name is '{ctx.project}'\n")

        ctx.project_path = project.create_project_dir(base, ctx.project, ctx.namespace)
        print(f"\nThe directory has been created here: '{ctx.project_path}'")

    def ask_deployment_options(self, ctx: InstallContext, flags: InstallFlags) -> None:
        if flags.hostname:
            ctx.hostname = flags.hostname
        else:
            print("")
            ctx.hostname = self.prompter.text("Please, enter the ingress hostname you want to use:")
        print(f"\nThe selected hostname is '{ctx.hostname}'")

        if flags.tls:
            ctx.tls = True
        else:
            print("")
            ctx.tls = self.prompter.confirm("Would you like to use TLS for your Entando installation?")
        print(f"\nYou chose {'' if ctx.tls else 'not '}to use TLS.")

        if flags.local:
            ctx.local = True
        else:
            print("")
            ctx.local = self.prompter.select(
                "Are you installing Entando in a Kubernetes cluster or in a local environment (e.g. minikube, k3s)?",
                [("Kubernetes cluster", False), ("Local environment", True)],
            )
        print(f"\nYou are installing Entando in a {'local environment' if ctx.local else 'Kubernetes cluster'}.\n")

    def apply_generated(self, ctx: InstallContext, reapply_namespace: bool = False) -> None:
        names = []
        if reapply_namespace:
            names.append(manifests.NAMESPACE_RESOURCES_FILE)
        names.append(manifests.OPERATOR_CONFIG_FILE)
        if ctx.tls:
            names.append(manifests.tls_cert_file(ctx.project))
        names.append(manifests.app_file(ctx.project))
        names.append(manifests.POSTGRES_SECRET_FILE)

        print("")
        for name in names:
            logger.debug("applying %s", name)
            self.apply(manifests.parse_all_documents(project.read_project_file(ctx, name), name), ctx)

    def apply(self, docs: List[Any], ctx: InstallContext) -> ApplyResult:
        result = self.reconciler.apply(docs, ctx.namespace)
        result.raise_for_failure()
        logger.info("Applied %s resource(s): %s", result.applied, result.summary)
        return result

    def print_manual_steps(self, ctx: InstallContext) -> None:
        print("\nUnderstood!")
        print(f"\nYou can check the created resources in '{ctx.project_path}' and execute:")
        print(f"\n  kubectl apply -f {manifests.app_file(ctx.project)}")
        print("\nBe sure to edit and apply the other configuration files to your liking, "
              f"if needed (e.g.: '{manifests.OPERATOR_CONFIG_FILE}').")
        print("\nExample:")
        print(f"\n  kubectl apply -f {manifests.OPERATOR_CONFIG_FILE} -n {ctx.namespace}")

    def print_reminders(self, ctx: InstallContext) -> None:
        rule = "-" * 78
        print(f"\n{rule}")
        print("\nIf you need to restart the deployment of Entando after an error, execute this:")
        print(f"\n  kubectl patch enap {ctx.project} --type merge --patch-file {manifests.REDEPLOY_FILE}")
        print(f"\n{rule}")
        print("\n* REMINDER\n* Please, note that this program does not change your environment's "
              "Kubernetes configuration (e.g.: context, namespace).")
        print("* As such, you may need to run")
        if ctx.kube_context:
            print(f"*\n*   kubectl config use-context {ctx.kube_context}")
            print("*\n* and/or")
        print(f"*\n*   kubectl config set-context --current --namespace={ctx.namespace}")
        print("*\n* before executing the apply commands, in case your context at the start "
              "of the execution was different.")
        print("\nThank you for having used this tool! Have a good rest of the day!\n")
