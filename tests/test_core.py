"""Tests for the event bus and the screen state machine."""

from neondash.core.events import Event, EventBus, EventType, game_over_event, level_event
from neondash.core.state import State, StateMachine


def test_subscribe_and_unsubscribe():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(EventType.LEVEL_CHANGED, seen.append)

    bus.emit(level_event(2))
    unsubscribe()
    bus.emit(level_event(3))

    assert [e.data["level"] for e in seen] == [2]


def test_failing_handler_does_not_block_others():
    bus = EventBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.GAME_OVER, broken)
    bus.subscribe(EventType.GAME_OVER, seen.append)
    bus.emit(game_over_event(10.0, 2))

    assert seen[0].data == {"score": 10.0, "orbs": 2}


def test_subscribe_all_and_history():
    bus = EventBus(history_limit=3)
    seen = []
    bus.subscribe_all(seen.append)

    for i in range(5):
        bus.emit(Event(EventType.SCORE_UPDATED, data={"score": float(i)}))

    assert len(seen) == 5
    history = bus.get_history(limit=10)
    assert [e.data["score"] for e in history] == [2.0, 3.0, 4.0]

    bus.clear_history()
    assert bus.get_history() == []


def test_valid_transitions():
    machine = StateMachine()
    assert machine.state is State.START
    assert machine.transition(State.SHOP)
    assert machine.transition(State.START)
    assert machine.transition(State.PLAYING)
    assert machine.transition(State.GAMEOVER, last_score=12.5)
    assert machine.context.last_score == 12.5
    assert machine.transition(State.PLAYING)


def test_invalid_transition_is_ignored():
    machine = StateMachine()
    assert not machine.transition(State.GAMEOVER)
    machine.transition(State.SHOP)
    assert not machine.transition(State.PLAYING)
    assert machine.state is State.SHOP


def test_listeners_and_reset():
    machine = StateMachine()
    changes = []
    machine.add_listener(lambda old, new, ctx: changes.append((old, new)))

    machine.transition(State.PLAYING)
    machine.transition(State.GAMEOVER, high_score=80.0)
    machine.reset()

    assert changes == [
        (State.START, State.PLAYING),
        (State.PLAYING, State.GAMEOVER),
        (State.GAMEOVER, State.START),
    ]
    assert machine.context.high_score == 80.0
