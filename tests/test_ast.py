import dataclasses

import pytest

from martiallang.ast import (
    GroupDecl,
    MartialFile,
    RolesDecl,
    Sequence,
    SequenceStep,
    State,
    StateRef,
)


def test_state_without_restrictions_allows_all_roles():
    state = State("Mount")
    assert state.name == "Mount"
    assert state.allowed_roles is None


def test_state_with_restrictions_keeps_order():
    state = State("Mount", ["Top", "Bottom"])
    assert state.allowed_roles == ["Top", "Bottom"]


def test_state_ref_equality_is_structural():
    assert StateRef("Mount", "Top") == StateRef("Mount", "Top")
    assert StateRef("Mount", "Top") != StateRef("Mount", "Bottom")


def test_state_ref_text_form():
    assert str(StateRef("Mount", "Top")) == "Mount[Top]"


def test_state_ref_is_hashable():
    refs = {StateRef("Mount", "Top"), StateRef("Mount", "Top")}
    assert len(refs) == 1


def test_sequence_holds_steps_in_order():
    first = SequenceStep("Stack", StateRef("OpenGuard", "Top"), StateRef("HalfGuard", "Top"))
    second = SequenceStep(
        "KneeSlice", StateRef("HalfGuard", "Top"), StateRef("SideControl", "Top")
    )
    seq = Sequence("GuardPass", [first, second])
    assert [s.action_name for s in seq.steps] == ["Stack", "KneeSlice"]
    assert seq.steps[0].to == seq.steps[1].from_


def test_default_collections_are_not_shared():
    a = RolesDecl()
    b = RolesDecl()
    a.roles.append("Top")
    assert b.roles == []


def test_declarations_are_immutable():
    group = GroupDecl("ClosedGuardFamily", ["ClosedGuard"])
    with pytest.raises(dataclasses.FrozenInstanceError):
        group.name = "Other"
    assert group.name == "ClosedGuardFamily"
    assert group.states == ["ClosedGuard"]


def test_martial_file_keeps_declaration_order():
    decls = [
        RolesDecl(["Top", "Bottom"]),
        State("Mount"),
        GroupDecl("G", ["Mount"]),
        Sequence("S", []),
    ]
    mf = MartialFile(decls)
    assert mf.declarations == decls
    assert MartialFile(list(decls)) == mf