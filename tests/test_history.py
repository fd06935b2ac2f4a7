import pytest

from elibrary import Action, ActionKind, ActionLog


def test_new_log_is_empty():
    log = ActionLog()

    assert log.is_empty()
    assert len(log) == 0
    assert log.pop() is None
    assert log.entries() == []


def test_pop_is_lifo():
    log = ActionLog()
    first = Action(ActionKind.BORROW, "1984")
    second = Action(ActionKind.RETURN, "1984")
    log.push(first)
    log.push(second)

    assert log.entries() == [second, first]
    assert log.pop() is second
    assert log.pop() is first
    assert log.pop() is None
    assert log.is_empty()


def test_entries_is_a_snapshot():
    log = ActionLog()
    log.push(Action(ActionKind.BORROW, "Dune"))
    log.entries().clear()

    assert len(log) == 1


@pytest.mark.parametrize("kind, expected", [
    (ActionKind.BORROW, True),
    (ActionKind.RETURN, False),
])
def test_inverse_availability(kind, expected):
    assert kind.inverse_availability() is expected


def test_action_is_immutable():
    action = Action(ActionKind.BORROW, "Dune")

    with pytest.raises(AttributeError):
        action.item_key = "Emma"
    assert action.to_dict() == {"kind": "borrow", "item_key": "Dune"}
