"""Dataclasses describing key events, bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Literal, Mapping, Optional

HistoryPolicy = Literal["batch", "force"]

MODIFIER_ORDER = ("alt", "ctrl", "meta", "shift")


def make_token(key: str, modifiers: tuple[str, ...] = ()) -> str:
    """Canonical ``mod+mod+key`` form; modifiers sorted and de-duplicated."""

    mods = sorted({m.strip().lower() for m in modifiers if m.strip()})
    if len(key) == 1 and ({"ctrl", "meta"} & set(mods)):
        key = key.lower()
    return "+".join([*mods, key])


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Abstract key event: a logical key name plus modifier flags."""

    key: str
    shift: bool = False
    alt: bool = False
    ctrl: bool = False
    meta: bool = False

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "KeyEvent":
        """Build from ``{key, shiftKey, altKey, ctrlKey, metaKey}``."""

        return cls(
            key=str(data["key"]),
            shift=bool(data.get("shiftKey", False)),
            alt=bool(data.get("altKey", False)),
            ctrl=bool(data.get("ctrlKey", False)),
            meta=bool(data.get("metaKey", False)),
        )

    @property
    def modifiers(self) -> tuple[str, ...]:
        flags = (self.alt, self.ctrl, self.meta, self.shift)
        return tuple(name for name, on in zip(MODIFIER_ORDER, flags) if on)

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)

    @property
    def is_printable(self) -> bool:
        return len(self.key) == 1 and not (self.ctrl or self.meta)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean session flag a binding requires (``flag`` or ``!flag``)."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:].strip(), False)
        return cls(expr, True)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A command handler plus how its result enters history."""

    id: str
    handler: Callable[..., object]
    history: Optional[HistoryPolicy] = None
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if self.history not in (None, "batch", "force"):
            raise ValueError(f"Unknown history policy '{self.history}'")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key token with an action, gated by ``when`` clauses."""

    id: str
    token: str
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.token:
            raise ValueError("binding token cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        *mods, key = self.token.split("+")
        object.__setattr__(self, "token", make_token(key, tuple(mods)))
        object.__setattr__(
            self,
            "when",
            tuple(
                clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
                for clause in self.when
            ),
        )

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = [
    "ActionRef",
    "Binding",
    "HistoryPolicy",
    "KeyEvent",
    "WhenClause",
    "make_token",
]
