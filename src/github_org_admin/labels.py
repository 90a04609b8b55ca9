"""Canonical label set and the label diff.

A repository is considered correctly labelled when every label in `WANTED_LABELS`
exists with the same color and description. Labels are identified by name only;
GitHub enforces name uniqueness per repository.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Label:
    name: str
    color: str
    description: str = ""

    def matches(self, other: Label) -> bool:
        """Return True when `other` has the same color and description."""

        return self.color.lower() == other.color.lower() and (self.description or "") == (
            other.description or ""
        )


WANTED_LABELS: tuple[Label, ...] = (
    Label(
        name="backwards-incompatible",
        color="eb6420",
        description="This change will lead to a major version bump for the next release",
    ),
    Label(name="bug", color="0e8a16", description="Something isn't working"),
    Label(
        name="documentation",
        color="006b75",
        description="Improvements or additions to documentation",
    ),
    Label(
        name="duplicate",
        color="cccccc",
        description="This issue or pull request already exists",
    ),
    Label(name="enhancement", color="0052cc", description="New feature or request"),
    Label(name="good first issue", color="7057ff", description="Good for newcomers"),
    Label(name="help wanted", color="159818", description="Extra attention is needed"),
    Label(name="invalid", color="e4e669", description="This doesn't seem right"),
    Label(name="modulesync", color="fbca04", description="PR related to modulesync"),
    Label(name="question", color="cc317c", description="Further information is requested"),
    Label(name="security", color="b60205", description="Related to a security issue"),
    Label(name="skip-changelog", color="343e4c", description="Excluded from CHANGELOG"),
    Label(name="wontfix", color="ffffff", description="This will not be worked on"),
)


@dataclass(frozen=True, slots=True)
class LabelDiff:
    """Result of comparing the wanted labels with a repository's labels."""

    missing: tuple[Label, ...] = ()
    incorrect: tuple[Label, ...] = ()
    extra: tuple[Label, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not (self.missing or self.incorrect or self.extra)


def diff_labels(
    wanted: Sequence[Label],
    current: Sequence[Label],
    *,
    keep: Iterable[str] = (),
) -> LabelDiff:
    """Classify labels into missing, incorrect and extra.

    Args:
        wanted: The canonical labels.
        current: The labels currently defined on the repository.
        keep: Names that must never be reported as extra, even if unwanted.

    Returns:
        `missing` and `incorrect` hold wanted records (in wanted order), `extra`
        holds current records (in server order).
    """
    current_by_name = {label.name: label for label in current}
    wanted_names = {label.name for label in wanted}
    protected = set(keep)

    missing: list[Label] = []
    incorrect: list[Label] = []
    for label in wanted:
        existing = current_by_name.get(label.name)
        if existing is None:
            missing.append(label)
        elif not label.matches(existing):
            incorrect.append(label)

    extra = [
        label
        for label in current
        if label.name not in wanted_names and label.name not in protected
    ]

    return LabelDiff(missing=tuple(missing), incorrect=tuple(incorrect), extra=tuple(extra))


def label_names(labels: Iterable[Label]) -> list[str]:
    return [label.name for label in labels]
