import logging
from typing import List, Optional, Sequence

from entando_install.config import VERSION_PAGE_SIZE
from entando_install.errors import EmptyCatalog

logger = logging.getLogger("entando_install.engine")

NEXT_PAGE = "__next_page__"
PREVIOUS_PAGE = "__previous_page__"


def resolve(requested: Optional[str], catalog: Sequence[str]) -> Optional[str]:
    """Match a requested version against the catalog, tolerating a missing ``v`` prefix.

    Returns ``None`` when there is no match; the caller then has to ask.
    """
    if not catalog:
        raise EmptyCatalog()
    if not requested:
        return None
    if requested in catalog:
        return requested
    prefixed = f"v{requested}"
    if prefixed in catalog:
        return prefixed
    return None


def paginate(catalog: Sequence[str], page_size: int = VERSION_PAGE_SIZE) -> List[List[str]]:
    if page_size < 1:
        raise ValueError("page_size must be positive")
    return [list(catalog[i:i + page_size]) for i in range(0, len(catalog), page_size)]


def choose_version(
    requested: Optional[str],
    catalog: Sequence[str],
    prompter,
    page_size: int = VERSION_PAGE_SIZE,
) -> str:
    version = resolve(requested, catalog)
    if version is not None:
        return version

    if requested:
        print(f"\nThe Entando version you specified ({requested}) could not be found.\n")
    else:
        print("")

    pages = paginate(catalog, page_size)
    index = 0
    while True:
        choices = [(tag, tag) for tag in pages[index]]
        if index > 0:
            choices.insert(0, ("<< previous versions", PREVIOUS_PAGE))
        if index < len(pages) - 1:
            choices.append((">> more versions", NEXT_PAGE))
        answer = prompter.select("What version of Entando do you wish to install?", choices)
        if answer == NEXT_PAGE:
            index += 1
        elif answer == PREVIOUS_PAGE:
            index -= 1
        else:
            logger.debug("version %s chosen from page %s/%s", answer, index + 1, len(pages))
            return answer
