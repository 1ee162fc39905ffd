from __future__ import annotations

from collections.abc import Iterator

from rubima.bytecode import Label
from rubima.errors import ParseError


class LabelRegistry:
    """Creates labels on first sight and hands back the same object afterwards.

    Identities come from one counter starting at 1, bumped once per new name.
    """

    def __init__(self) -> None:
        self._labels: dict[str, Label] = {}
        self._next_identity = 1

    def define(self, name: str) -> Label:
        label = self._labels.get(name)
        if label is None:
            label = Label(name=name, identity=self._next_identity)
            self._next_identity += 1
            self._labels[name] = label
        return label

    def resolve(self, label: Label, position: int) -> Label:
        if label.resolved:
            raise ParseError(f"duplicate label definition :{label.name}")
        if position < 0:
            raise ValueError(f"label position must be non-negative, got {position}")
        label.position = position
        return label

    def get(self, name: str) -> Label | None:
        return self._labels.get(name)

    def unresolved(self) -> list[Label]:
        return [label for label in self if not label.resolved]

    def as_dict(self) -> dict[str, Label]:
        return dict(self._labels)

    def __contains__(self, name: object) -> bool:
        return name in self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[Label]:
        # dict order is insertion order, which is identity order
        return iter(self._labels.values())
