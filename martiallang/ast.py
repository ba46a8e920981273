"""Syntax tree for martial system declarations.

Several ``.martial`` files can be parsed and combined into one system.
Each file yields a :class:`MartialFile` holding its top-level declarations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class RolesDecl:
    """A roles declaration, e.g. ``roles { Top, Bottom, Neutral }``.

    Roles from several declarations and files are merged.
    """

    roles: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class State:
    """A state declaration, e.g. ``state Mount roles { Top, Bottom }``.

    ``allowed_roles`` of ``None`` means every declared role is valid.
    """

    name: str
    allowed_roles: Optional[list[str]] = None


@dataclass(frozen=True)
class StateRef:
    """A state taken in a given role, e.g. ``Mount[Top]``."""

    state: str
    role: str

    def __str__(self) -> str:
        return f"{self.state}[{self.role}]"


@dataclass(frozen=True)
class SequenceStep:
    """One action of a sequence with its transition.

    Example: ``KneeCut: Headquarters[Top] -> SideControl[Top]``.
    """

    action_name: str
    from_: StateRef
    to: StateRef


@dataclass(frozen=True)
class Sequence:
    """An ordered progression of actions."""

    name: str
    steps: list[SequenceStep] = field(default_factory=list)


@dataclass(frozen=True)
class GroupDecl:
    """A named cluster of related states."""

    name: str
    states: list[str] = field(default_factory=list)


Declaration = Union[RolesDecl, State, Sequence, GroupDecl]


@dataclass(frozen=True)
class MartialFile:
    """The declarations of one parsed file, in source order."""

    declarations: list[Declaration] = field(default_factory=list)