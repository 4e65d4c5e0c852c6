"""Tables and pickers for tag immutability rules."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console

from .models import ImmutableRule, ImmutableSelector
from .selection import InputFunc, run_selection
from .tables import Column, print_table

IMMUTABLE_COLUMNS = [
    Column("ID", 12),
    Column("Repository", 30),
    Column("Tag", 30),
]


def _describe(selector: ImmutableSelector) -> str:
    return f"{selector.decoration} {selector.pattern}"


def _scope_descriptions(rule: ImmutableRule) -> list[str]:
    return [
        _describe(selector)
        for selectors in rule.scope_selectors.values()
        for selector in selectors
    ]


def _tag_descriptions(rule: ImmutableRule) -> list[str]:
    return [_describe(selector) for selector in rule.tag_selectors]


def immutable_rule_rows(rules: Sequence[ImmutableRule]) -> list[list[str]]:
    """Build one table row per rule: id, repository selectors, tag selectors."""
    return [
        [
            str(rule.id),
            " ".join(_scope_descriptions(rule)),
            " ".join(_tag_descriptions(rule)),
        ]
        for rule in rules
    ]


def list_immutable_rules(rules: Sequence[ImmutableRule], console: Optional[Console] = None) -> None:
    """Print a table of immutability rules."""
    print_table(IMMUTABLE_COLUMNS, immutable_rule_rows(rules), console)


def immutable_rule_choices(rules: Sequence[ImmutableRule]) -> list[tuple[str, int]]:
    """Return the label shown for each rule together with the rule's id.

    A rule is described by its last repository/tag selector combination;
    rules without any combination are not offered.
    """
    choices = []
    for rule in rules:
        labels = [
            f"for the {scope}, tags {tag}"
            for scope in _scope_descriptions(rule)
            for tag in _tag_descriptions(rule)
        ]
        if labels:
            choices.append((labels[-1], rule.id))
    return choices


def select_immutable_rule(
    rules: Sequence[ImmutableRule], input_func: Optional[InputFunc] = None
) -> int:
    """Let the user pick a rule; return its id, or 0 if none."""
    choices = immutable_rule_choices(rules)
    ids = dict(choices)
    choice = run_selection([label for label, _ in choices], "Immutable Rule", input_func)
    return ids.get(choice, 0)