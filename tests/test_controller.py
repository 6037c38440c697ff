import pytest

from stackconquer_cpu.controller import OpponentController, TurnState
from stackconquer_cpu.errors import OpponentNotReadyError
from stackconquer_cpu.events import EventBus, EventType
from stackconquer_cpu.types import FailureKind, ProposedMove


def _controller(config):
    bus = EventBus()
    events = []
    bus.subscribe(EventType.MOVE_ACCEPTED, events.append)
    bus.subscribe(EventType.SCRIPT_ERROR, events.append)
    return OpponentController(config, events=bus), events


def _returning(write_script, expression: str) -> str:
    return write_script(f"def make_move(n):\n    return {expression}\n")


def test_place_stone_move_is_accepted(config, write_script):
    controller, events = _controller(config)
    assert controller.load_script(_returning(write_script, "[-1, 2, 5]"))
    result = controller.request_move([""] * 6, possible_move_count=3)
    assert result.move == ProposedMove(-1, 2, 5)
    assert len(events) == 1
    event = events[0]
    assert event.event_type is EventType.MOVE_ACCEPTED
    assert (event.player_id, event.from_index, event.count, event.to_index) == (2, -1, 2, 5)
    assert controller.state is TurnState.IDLE


def test_two_element_array_is_shape_error(config, write_script):
    controller, events = _controller(config)
    assert controller.load_script(_returning(write_script, "[1, 2]"))
    result = controller.request_move([""] * 16, possible_move_count=1)
    assert result.failure.kind is FailureKind.MOVE_SHAPE
    assert [e.kind for e in events] == [FailureKind.MOVE_SHAPE]


def test_target_outside_board_is_range_error(config, write_script):
    controller, events = _controller(config)
    assert controller.load_script(_returning(write_script, "[-1, 1, 16]"))
    result = controller.request_move([""] * 16, possible_move_count=1)
    assert result.failure.kind is FailureKind.MOVE_RANGE
    assert events[0].event_type is EventType.SCRIPT_ERROR


def test_missing_entry_point_refuses_requests(config, write_script):
    controller, events = _controller(config)
    marker = write_script("")
    path = write_script(
        f"""
        def other(n):
            open({marker!r}, "w").write("called")
            return [-1, 1, 0]
        """
    )
    result = controller.load_script(path)
    assert result.failure.kind is FailureKind.SCRIPT_CONTRACT
    assert [e.kind for e in events] == [FailureKind.SCRIPT_CONTRACT]
    with pytest.raises(OpponentNotReadyError):
        controller.request_move([""] * 16, possible_move_count=1)
    assert open(marker).read() == ""
    assert len(events) == 1


def test_script_exception_emits_error_and_keeps_board(config, write_script):
    controller, events = _controller(config)
    path = write_script(
        """
        import json

        def make_move(n):
            board = json.loads(board_json)
            raise RuntimeError("no idea for %d cells" % len(board))
        """
    )
    assert controller.load_script(path)
    snapshot = ["", "1", "", "22"]
    before = list(snapshot)
    result = controller.request_move(snapshot, possible_move_count=2)
    assert not result.ok
    assert snapshot == before
    assert len(events) == 1
    error = events[0]
    assert error.kind is FailureKind.SCRIPT_RUNTIME
    assert error.line == 5
    assert "RuntimeError: no idea for 4 cells" in error.message
    assert controller.last_result is result


def test_end_to_end_stack_move(config, write_script):
    controller, events = _controller(config)
    path = write_script(
        """
        import json

        def make_move(n):
            board = json.loads(board_json)
            source = next(i for i, cell in enumerate(board) if cell)
            target = 7 if board[7] == "" else None
            log("moving from %d to %s" % (source, target))
            return [source, 1, target]
        """
    )
    assert controller.load_script(path)
    snapshot = [""] * 16
    snapshot[3] = "21"
    result = controller.request_move(snapshot, possible_move_count=5)
    assert result.move == ProposedMove(3, 1, 7)
    assert events[0].event_type is EventType.MOVE_ACCEPTED


def test_script_may_retry_after_failure(config, write_script):
    controller, _ = _controller(config)
    path = write_script(
        """
        attempts = []

        def make_move(n):
            attempts.append(n)
            if len(attempts) == 1:
                return "pass"
            return [-1, 1, 0]
        """
    )
    assert controller.load_script(path)
    assert controller.request_move([""], 1).failure.kind is FailureKind.MOVE_SHAPE
    assert controller.request_move([""], 1).ok


def test_legal_moves_are_bound(config, write_script):
    controller, _ = _controller(config)
    path = write_script(
        """
        import json

        def make_move(n):
            return json.loads(legal_moves_json)[n - 1]
        """
    )
    assert controller.load_script(path)
    result = controller.request_move([""] * 10, 2, legal_moves=[(-1, 1, 4), (4, 1, 9)])
    assert result.move == ProposedMove(4, 1, 9)


def test_failed_reload_blocks_further_requests(config, write_script):
    controller, _ = _controller(config)
    assert controller.load_script(_returning(write_script, "[-1, 1, 0]"))
    assert controller.request_move([""], 1).ok
    assert not controller.load_script(write_script("def make_move(n) pass\n"))
    with pytest.raises(OpponentNotReadyError):
        controller.request_move([""], 1)


def test_hostile_sequences_are_rejected_with_event(config, write_script):
    controller, events = _controller(config)
    path = write_script(
        """
        class Stubborn(list):
            def __iter__(self):
                raise ValueError("nope")

        answers = [range(2**64), Stubborn([1, 1, 1])]

        def make_move(n):
            return answers.pop(0)
        """
    )
    assert controller.load_script(path)
    first = controller.request_move([""] * 16, 1)
    second = controller.request_move([""] * 16, 1)
    assert first.failure.kind is FailureKind.MOVE_SHAPE
    assert second.failure.kind is FailureKind.MOVE_SHAPE
    assert [e.kind for e in events] == [FailureKind.MOVE_SHAPE, FailureKind.MOVE_SHAPE]
    assert controller.state is TurnState.IDLE


def test_base_exception_in_script_is_runtime_error(config, write_script):
    controller, events = _controller(config)
    path = write_script(
        """
        class Quit(BaseException):
            pass

        def make_move(n):
            raise Quit()
        """
    )
    assert controller.load_script(path)
    result = controller.request_move([""] * 16, 1)
    assert result.failure.kind is FailureKind.SCRIPT_RUNTIME
    assert result.failure.line == 5
    assert "Quit" in result.failure.message
    assert [e.kind for e in events] == [FailureKind.SCRIPT_RUNTIME]
