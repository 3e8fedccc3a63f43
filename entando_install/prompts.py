"""Interactive questions asked during an installation, built on questionary.

Every prompt that is cancelled (Ctrl-C / Ctrl-D) ends the run the same way as
answering "No" to a question the installer cannot continue without.
"""

from typing import Any, Sequence, Tuple, Union

import questionary
from questionary import Choice, Style

from entando_install.errors import InstallAborted

ChoiceSpec = Union[str, Tuple[str, Any]]

custom_style = Style(
    [
        ("qmark", "fg:#00a0e0 bold"),
        ("question", "bold"),
        ("answer", "fg:#00a0e0 bold"),
        ("pointer", "fg:#00a0e0 bold"),
        ("highlighted", "fg:#00a0e0 bold"),
    ]
)

YES_NO = [("Yes", True), ("No", False)]


class Prompter:
    def select(self, message: str, choices: Sequence[ChoiceSpec]) -> Any:
        q = questionary.select(message, choices=[_choice(c) for c in choices], style=custom_style)
        return _answer(q.ask())

    def confirm(self, message: str) -> bool:
        return bool(self.select(message, YES_NO))

    def confirm_or_abort(self, message: str) -> None:
        if not self.confirm(message):
            raise InstallAborted()

    def text(self, message: str) -> str:
        return _answer(questionary.text(message, style=custom_style).ask()).strip()


def _choice(spec: ChoiceSpec) -> Choice:
    if isinstance(spec, tuple):
        title, value = spec
        return Choice(title=title, value=value)
    return Choice(title=spec, value=spec)


def _answer(value):
    if value is None:
        raise InstallAborted()
    return value
