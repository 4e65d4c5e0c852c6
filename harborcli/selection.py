"""Interactive prompts: pick one item from a list, fill in text, confirm."""

from __future__ import annotations

import getpass
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TextIO, TypeVar

T = TypeVar("T")

InputFunc = Callable[[str], str]
Validator = Callable[[str], object]

_SELECT_PROMPT = "Choose (number, j/k to move, enter to select, q to quit): "
_QUIT_KEYS = {"q", "esc", "ctrl+c"}
_DOWN_KEYS = {"j", "down"}
_UP_KEYS = {"k", "up"}


@dataclass
class SelectionModel:
    """A list of items with a cursor and, once chosen, the choice."""

    items: list[str]
    construct: str
    index: int = 0
    choice: str = ""

    @property
    def title(self) -> str:
        return "Select an " + self.construct

    def move(self, delta: int) -> int:
        """Move the cursor by ``delta``, staying inside the list."""
        if not self.items:
            self.index = 0
        else:
            self.index = max(0, min(len(self.items) - 1, self.index + delta))
        return self.index

    def select(self) -> str:
        """Take the item under the cursor as the choice and return it."""
        if self.items:
            self.choice = self.items[self.index]
        return self.choice

    def render(self) -> str:
        """Return the list as text, or nothing once a choice is made."""
        if self.choice:
            return ""
        lines = ["", f"  {self.title}", ""]
        for position, item in enumerate(self.items):
            label = f"{position + 1}. {item}"
            if position == self.index:
                lines.append(f"  > {label}")
            else:
                lines.append(f"    {label}")
        return "\n".join(lines)


def run_selection(
    items: Sequence[str],
    construct: str,
    input_func: Optional[InputFunc] = None,
    output: Optional[TextIO] = None,
) -> str:
    """Let the user pick one of ``items``; return it, or "" if they quit."""
    model = SelectionModel(list(items), construct)
    out = output if output is not None else sys.stdout
    read = input_func or input
    while True:
        out.write(model.render() + "\n")
        try:
            key = read(_SELECT_PROMPT)
        except EOFError:
            return ""
        key = key.strip().lower()
        if key in ("", "enter"):
            return model.select()
        if key in _QUIT_KEYS:
            return ""
        if key in _DOWN_KEYS:
            model.move(1)
            continue
        if key in _UP_KEYS:
            model.move(-1)
            continue
        if key.isdigit() and 1 <= int(key) <= len(model.items):
            model.index = int(key) - 1
            return model.select()
        out.write(f"unrecognised input: {key}\n")


def ask_text(
    title: str,
    validate: Optional[Validator] = None,
    description: str = "",
    default: str = "",
    secret: bool = False,
    input_func: Optional[InputFunc] = None,
) -> str:
    """Ask for a line of text until ``validate`` accepts it.

    ``validate`` raises ValueError to reject a value. An empty answer takes
    ``default`` when one is given. EOFError from the input propagates.
    """
    read = input_func or (getpass.getpass if secret else input)
    prompt = title + (f" [{default}]" if default else "") + ": "
    if description:
        print(description)
    while True:
        value = read(prompt)
        if not value and default:
            value = default
        if validate is not None:
            try:
                validate(value)
            except ValueError as exc:
                print(f"  {exc}")
                continue
        return value


def ask_choice(
    title: str,
    options: Sequence[tuple[str, T]],
    validate: Optional[Callable[[T], object]] = None,
    input_func: Optional[InputFunc] = None,
) -> T:
    """Ask the user to pick one of ``(label, value)`` options; return the value.

    An empty answer picks the first option.
    """
    read = input_func or input
    print(title)
    for position, (label, _) in enumerate(options, start=1):
        print(f"  {position}. {label}")
    prompt = f"Select [1-{len(options)}]: " if options else "Select: "
    while True:
        answer = read(prompt).strip()
        if not answer:
            value = options[0][1] if options else ""
        elif answer.isdigit() and 1 <= int(answer) <= len(options):
            value = options[int(answer) - 1][1]
        else:
            print(f"  please enter a number between 1 and {len(options)}")
            continue
        if validate is not None:
            try:
                validate(value)
            except ValueError as exc:
                print(f"  {exc}")
                continue
        return value


def ask_confirm(
    title: str,
    affirmative: str = "Yes",
    negative: str = "No",
    input_func: Optional[InputFunc] = None,
) -> bool:
    """Ask a yes/no question; an empty answer means no."""
    read = input_func or input
    yes = {affirmative.lower(), affirmative[:1].lower(), "y", "yes"}
    no = {negative.lower(), negative[:1].lower(), "n", "no", ""}
    while True:
        answer = read(f"{title} [{affirmative}/{negative}]: ").strip().lower()
        if answer in yes:
            return True
        if answer in no:
            return False
        print(f"  please answer {affirmative} or {negative}")


def confirm_elevation(input_func: Optional[InputFunc] = None) -> bool:
    """Ask whether a user should be made an administrator."""
    return ask_confirm(
        "Are you sure to elevate the user to admin role?", "Yes", "No", input_func
    )