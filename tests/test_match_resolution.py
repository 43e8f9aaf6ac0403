import pytest

from board_helpers import BASE_ROWS, assert_settled, board_codes, build_game, place_board
from haul.components.resolution_state import ResolutionPhase
from haul.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_GRAVITY_APPLIED,
    EVENT_GRAVITY_COMPLETE,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
    EVENT_SPIN_COMPLETE,
    EVENT_SWAP_COMPLETE,
    EVENT_SWAP_REJECTED,
    EVENT_SWAP_STARTED,
)
from haul.utils.invariants import InvariantError

# Swapping (2, 0) with (2, 1) lines up three silvers on the top row.
SWAP_ROWS = ["ssbcsgbc"] + BASE_ROWS[1:]
TOP_RUN_ROWS = ["ssscsgbc"] + BASE_ROWS[1:]


def test_clearing_top_row_run_schedules_three_refills_and_no_moves():
    game = build_game()
    place_board(game, TOP_RUN_ROWS)
    applied = game.record(EVENT_GRAVITY_APPLIED)
    refills = game.record(EVENT_REFILL_COMPLETED)
    cleared = game.record(EVENT_MATCH_CLEARED)

    entities = game.engine.detect_clears()
    count = game.engine.clear_and_apply_gravity(entities)

    assert count == 3
    assert len(game.scheduler) == 3
    assert game.engine.phase is ResolutionPhase.SETTLING
    assert cleared[0]["entities"] == sorted(entities)
    assert cleared[0]["types"] == ["silver"] * 3
    assert applied == [{"moved": [], "columns": 0}]
    assert len(refills[0]["new_entities"]) == 3
    assert refills[0]["cells"] == [(0, 0), (1, 0), (2, 0)]
    # Refills start one cell above their target.
    config = game.board.config
    for entity, (col, row) in zip(refills[0]["new_entities"], refills[0]["cells"]):
        assert game.board.rect(entity).top_left() == config.cell_origin(col, row - 1)

    game.settle()
    assert_settled(game)
    assert game.engine.input_allowed


def test_swap_into_run_runs_full_cascade():
    game = build_game()
    place_board(game, SWAP_ROWS)
    started = game.record(EVENT_SWAP_STARTED)
    found = game.record(EVENT_MATCH_FOUND)
    refills = game.record(EVENT_REFILL_COMPLETED)
    applied = game.record(EVENT_GRAVITY_APPLIED)
    complete = game.record(EVENT_CASCADE_COMPLETE)

    a = game.board.coin_at(2, 0)
    b = game.board.coin_at(2, 1)
    assert game.engine.swap(a, b)
    assert started == [{"a": a, "b": b}]
    assert game.engine.phase is ResolutionPhase.SWAPPING
    assert not game.engine.input_allowed

    # Tick until the spin barrier releases; the gravity barrier is then live.
    while not refills:
        game.scheduler.tick(1 / 30)
    assert len(game.scheduler) == 3
    assert found[0]["size"] == 3
    assert applied[0]["moved"] == []
    assert b not in game.board.layer

    game.settle()
    assert len(complete) == 1
    assert complete[0]["depth"] >= 1
    assert_settled(game)
    assert game.engine.phase is ResolutionPhase.IDLE


def test_swap_without_match_completes_at_depth_zero():
    game = build_game()
    place_board(game, BASE_ROWS)
    found = game.record(EVENT_MATCH_FOUND)
    spun = game.record(EVENT_SPIN_COMPLETE)
    gravity = game.record(EVENT_GRAVITY_COMPLETE)
    swapped = game.record(EVENT_SWAP_COMPLETE)
    complete = game.record(EVENT_CASCADE_COMPLETE)

    assert game.engine.swap(game.board.coin_at(0, 0), game.board.coin_at(0, 1))
    game.settle()

    assert len(swapped) == 1
    assert found == [] and spun == [] and gravity == []
    assert complete == [{"depth": 0}]
    codes = board_codes(game)
    # No swap-back: the exchanged coins stay where they landed.
    assert codes[0][0] == 'b'
    assert codes[1][0] == 's'
    assert_settled(game)


def test_swap_refused_while_busy():
    game = build_game()
    place_board(game, BASE_ROWS)
    rejected = game.record(EVENT_SWAP_REJECTED)
    assert game.engine.swap(game.board.coin_at(0, 0), game.board.coin_at(0, 1))
    assert not game.engine.swap(game.board.coin_at(5, 5), game.board.coin_at(5, 6))
    assert rejected[-1]["reason"] == "busy"
    assert len(game.scheduler) == 2


@pytest.mark.parametrize("cells,reason", [
    (((0, 0), (0, 2)), "not_adjacent"),
    (((0, 0), (1, 1)), "not_adjacent"),
    (((3, 3), (3, 3)), "same_coin"),
])
def test_invalid_swaps_rejected(cells, reason):
    game = build_game()
    place_board(game, BASE_ROWS)
    rejected = game.record(EVENT_SWAP_REJECTED)
    (ca, ra), (cb, rb) = cells
    assert not game.engine.swap(game.board.coin_at(ca, ra), game.board.coin_at(cb, rb))
    assert rejected[0]["reason"] == reason
    assert game.engine.input_allowed
    assert len(game.scheduler) == 0


def test_swap_with_missing_coin_rejected():
    game = build_game()
    place_board(game, BASE_ROWS)
    rejected = game.record(EVENT_SWAP_REJECTED)
    assert not game.engine.swap(game.board.coin_at(0, 0), None)
    assert rejected[0]["reason"] == "missing"


def test_empty_spin_resolves_synchronously():
    game = build_game()
    place_board(game, BASE_ROWS)
    complete = game.record(EVENT_CASCADE_COMPLETE)
    gravity = game.record(EVENT_GRAVITY_COMPLETE)
    assert game.engine.spin_coins([]) == 0
    # Zero-count barriers fire at once, so the whole chain ran without a tick.
    assert gravity == [{"count": 0}]
    assert complete == [{"depth": 0}]
    assert len(game.scheduler) == 0
    assert game.engine.input_allowed


def test_spin_barrier_counts_each_coin_once():
    game = build_game()
    place_board(game, TOP_RUN_ROWS)
    entities = sorted(game.engine.detect_clears())
    assert game.engine.spin_coins(entities + entities[:1]) == 3
    assert len(game.scheduler) == 3


def test_gravity_bookkeeping_mismatch_raises():
    game = build_game()
    rows = list(BASE_ROWS)
    rows[4] = "sgbc.gbc"
    place_board(game, rows)
    with pytest.raises(InvariantError):
        game.engine.clear_and_apply_gravity([game.board.coin_at(0, 7)])


def test_completion_out_of_phase_raises():
    game = build_game()
    place_board(game, BASE_ROWS)
    with pytest.raises(InvariantError):
        game.bus.emit(EVENT_SPIN_COMPLETE, entities=[])
