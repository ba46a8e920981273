"""Semantic checks over the declarations of one or more parsed files.

The validator merges roles across files, rejects duplicate states,
sequences and groups, and checks that every reference resolves and that
each sequence forms an unbroken chain of transitions.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from martiallang.ast import (
    Declaration,
    GroupDecl,
    MartialFile,
    RolesDecl,
    Sequence,
    State,
    StateRef,
)


class SemanticError(Exception):
    """Raised when declarations are inconsistent."""

    def __init__(self, message: str, context: str) -> None:
        super().__init__(message, context)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return f"Semantic error in {self.context}: {self.message}"


@dataclass
class MartialSystem:
    """A complete, validated martial system."""

    name: str
    roles: set[str] = field(default_factory=set)
    states: dict[str, State] = field(default_factory=dict)
    sequences: dict[str, Sequence] = field(default_factory=dict)
    groups: dict[str, list[str]] = field(default_factory=dict)


def _listing(names: Iterable[str]) -> str:
    return ", ".join(names)


class SemanticValidator:
    """Collects declarations from several files and validates them as a whole."""

    def __init__(self) -> None:
        self._roles: set[str] = set()
        self._states: dict[str, State] = {}
        self._sequences: dict[str, Sequence] = {}
        self._groups: dict[str, list[str]] = {}

    def add_file(self, file: MartialFile) -> None:
        """Add every declaration of a parsed file."""
        for declaration in file.declarations:
            self._add_declaration(declaration)

    def _add_declaration(self, declaration: Declaration) -> None:
        if isinstance(declaration, RolesDecl):
            self.add_roles(declaration)
        elif isinstance(declaration, State):
            self.add_state(declaration)
        elif isinstance(declaration, Sequence):
            self.add_sequence(declaration)
        elif isinstance(declaration, GroupDecl):
            self.add_group(declaration)
        else:
            raise TypeError(f"not a declaration: {declaration!r}")

    def add_roles(self, roles_decl: RolesDecl) -> None:
        """Merge the roles of a declaration into the known roles."""
        for role in roles_decl.roles:
            if not role:
                raise SemanticError("Role name cannot be empty", "roles declaration")
            self._roles.add(role)

    def add_state(self, state: State) -> None:
        """Register a state; its name must be new."""
        if not state.name:
            raise SemanticError("State name cannot be empty", "state declaration")
        if state.name in self._states:
            raise SemanticError(
                f"State '{state.name}' is already defined", f"state {state.name}"
            )
        self._states[state.name] = state

    def add_sequence(self, sequence: Sequence) -> None:
        """Register a sequence; its name must be new."""
        if not sequence.name:
            raise SemanticError(
                "Sequence name cannot be empty", "sequence declaration"
            )
        if sequence.name in self._sequences:
            raise SemanticError(
                f"Sequence '{sequence.name}' is already defined",
                f"sequence {sequence.name}",
            )
        self._sequences[sequence.name] = sequence

    def add_group(self, group: GroupDecl) -> None:
        """Register a group; its name must be new."""
        if not group.name:
            raise SemanticError("Group name cannot be empty", "group declaration")
        if group.name in self._groups:
            raise SemanticError(
                f"Group '{group.name}' is already defined", f"group {group.name}"
            )
        self._groups[group.name] = list(group.states)

    def validate(self, system_name: str) -> MartialSystem:
        """Check everything collected so far and return the system."""
        if not self._roles:
            raise SemanticError(
                "No roles defined. At least one role declaration is required.",
                system_name,
            )
        self._validate_states()
        self._validate_sequences()
        self._validate_groups()
        return MartialSystem(
            name=system_name,
            roles=set(self._roles),
            states=dict(self._states),
            sequences=dict(self._sequences),
            groups={name: list(states) for name, states in self._groups.items()},
        )

    def _undefined_role(self, role: str, context: str) -> SemanticError:
        return SemanticError(
            f"Role '{role}' is not defined. "
            f"Available roles: {_listing(sorted(self._roles))}",
            context,
        )

    def _undefined_state(self, state: str, context: str) -> SemanticError:
        return SemanticError(
            f"State '{state}' is not defined. "
            f"Available states: {_listing(self._states)}",
            context,
        )

    def _validate_states(self) -> None:
        for state_name, state in self._states.items():
            if state.allowed_roles is None:
                continue
            context = f"state {state_name}"
            for role in state.allowed_roles:
                if role not in self._roles:
                    raise self._undefined_role(role, context)
            seen: set[str] = set()
            for role in state.allowed_roles:
                if role in seen:
                    raise SemanticError(
                        f"Role '{role}' appears multiple times", context
                    )
                seen.add(role)

    def _validate_groups(self) -> None:
        for group_name, states in self._groups.items():
            context = f"group {group_name}"
            if not states:
                raise SemanticError(
                    "Group must contain at least one state", context
                )
            for state_name in states:
                if state_name not in self._states:
                    raise self._undefined_state(state_name, context)

    def _validate_sequences(self) -> None:
        for seq_name, sequence in self._sequences.items():
            if not sequence.steps:
                raise SemanticError(
                    "Sequence must have at least one step", f"sequence {seq_name}"
                )
            previous = None
            for number, step in enumerate(sequence.steps, start=1):
                context = f"sequence {seq_name} step {number} ({step.action_name})"
                self._validate_state_ref(step.from_, context)
                self._validate_state_ref(step.to, context)
                if previous is not None and (
                    previous.to.state != step.from_.state
                    or previous.to.role != step.from_.role
                ):
                    raise SemanticError(
                        "Step chain is broken: previous step ends at "
                        f"{previous.to.state}[{previous.to.role}], "
                        "but this step starts at "
                        f"{step.from_.state}[{step.from_.role}]",
                        context,
                    )
                previous = step

    def _validate_state_ref(self, state_ref: StateRef, context: str) -> None:
        state = self._states.get(state_ref.state)
        if state is None:
            raise self._undefined_state(state_ref.state, context)
        if state_ref.role not in self._roles:
            raise self._undefined_role(state_ref.role, context)
        allowed = state.allowed_roles
        if allowed is not None and state_ref.role not in allowed:
            raise SemanticError(
                f"Role '{state_ref.role}' is not allowed for state "
                f"'{state_ref.state}'. Allowed roles: {_listing(allowed)}",
                context,
            )