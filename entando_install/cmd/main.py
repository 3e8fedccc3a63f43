import logging
from typing import Optional

from entando_install.config import SUSPICIOUS_CONTEXT
from entando_install.engine.context import InstallFlags
from entando_install.engine.runner import Installer
from entando_install.errors import InstallAborted
from entando_install.kube import ClusterGateway, api_host, get_k8s_api_clients, list_kube_contexts
from entando_install.prompts import Prompter

logger = logging.getLogger("entando_install.cmd")


def select_kube_context(prompter: Prompter) -> Optional[str]:
    contexts, current = list_kube_contexts()
    if current is None:
        logger.info("No kubeconfig context found, using the in-cluster configuration")
        return None

    if current == SUSPICIOUS_CONTEXT:
        host = api_host(get_k8s_api_clients(current))
        print("\nWARNING:")
        print(f"The loaded context '{current}' and base path '{host}' might indicate "
              "that your Kube Config isn't set correctly.")
        prompter.confirm_or_abort("Is this configuration correct and do you still wish to continue?")

    print(f"\nYour current context is: {current}\n")
    if not prompter.confirm("Is this the context you want to use?"):
        print("")
        current = prompter.select("What context would you like to use?", contexts)

    print(f"\nThe selected context is {current}")
    return current


def main(flags: InstallFlags) -> None:
    print("\nWelcome! Let's install Entando together!")
    print("\n* NOTE")
    print("* This tool loads your initial Kubernetes configuration, but any subsequent change in context "
          "is only limited in scope to the execution environment.")

    prompter = Prompter()
    try:
        kube_context = select_kube_context(prompter)
        gateway = ClusterGateway(get_k8s_api_clients(kube_context))
        Installer(gateway, prompter).run(flags, kube_context=kube_context)
    except InstallAborted as e:
        logger.info("%s", e)
        print("\nExiting the program.\nHave a good rest of the day!\n")
