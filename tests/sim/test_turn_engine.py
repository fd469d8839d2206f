"""Tests for TurnEngine.resolve_move."""

import pytest

from witch_rogue.sim.core.game_state import GameStatus
from witch_rogue.sim.core.grid import CARDINALS, Direction, Position
from witch_rogue.sim.core.rng import GameRNG
from witch_rogue.sim.dungeon.level_manager import LevelManager
from witch_rogue.sim.turn_engine import MoveOutcome, TurnEngine


@pytest.fixture
def engine() -> TurnEngine:
    return TurnEngine()


# ---------------------------------------------------------------------------
# Blocked / ignored
# ---------------------------------------------------------------------------

class TestBlockedMoves:
    def test_wall_blocks(self, engine, make_state):
        state = make_state(player=(1, 5))
        result = engine.resolve_move(state, Direction.LEFT)
        assert result.outcome is MoveOutcome.BLOCKED
        assert state.player.position == Position(1, 5)
        assert state.player.hp == state.player.max_hp
        assert state.turn == 0

    def test_grid_edge_blocks(self, engine, make_state, open_grid):
        state = make_state(player=(0, 0), grid=open_grid(0, 0, 39, 24))
        for direction in (Direction.UP, Direction.LEFT):
            result = engine.resolve_move(state, direction)
            assert result.outcome is MoveOutcome.BLOCKED
        assert state.player.position == Position(0, 0)

    def test_blocked_move_does_not_step_monsters(self, engine, make_state, scripted_rng):
        state = make_state(player=(1, 5), monsters=[(5, 5)])
        rng = scripted_rng(chances=[True], choices=[Direction.RIGHT])
        engine.resolve_move(state, Direction.LEFT, rng)
        assert state.monsters[0].position == Position(5, 5)

    @pytest.mark.parametrize(
        "status",
        [GameStatus.DEFEATED, GameStatus.VICTORIOUS, GameStatus.LEVEL_CLEARED],
    )
    def test_ignored_when_not_in_progress(self, engine, make_state, status):
        state = make_state(golds=[(11, 10)])
        state.status = status
        result = engine.resolve_move(state, Direction.RIGHT)
        assert result.outcome is MoveOutcome.IGNORED
        assert result.status is status
        assert state.player.position == Position(10, 10)
        assert len(state.golds) == 1


# ---------------------------------------------------------------------------
# Moving, picking up, bumping
# ---------------------------------------------------------------------------

class TestPlayerActions:
    def test_plain_move(self, engine, make_state):
        state = make_state()
        result = engine.resolve_move(state, Direction.DOWN)
        assert result.outcome is MoveOutcome.MOVED
        assert result.events == ["step"]
        assert state.player.position == Position(10, 11)
        assert state.turn == 1

    def test_accepts_vector(self, engine, make_state):
        state = make_state()
        engine.resolve_move(state, (1, 0))
        assert state.player.position == Position(11, 10)

    def test_rejects_non_unit_vector(self, engine, make_state):
        with pytest.raises(ValueError):
            engine.resolve_move(make_state(), (2, 0))

    def test_pick_up_gold(self, engine, make_state):
        state = make_state(golds=[(11, 10), (30, 20)])
        result = engine.resolve_move(state, Direction.RIGHT)
        assert result.outcome is MoveOutcome.PICKED_UP
        assert result.gold_picked == 1
        assert "coin" in result.events
        assert state.player.position == Position(11, 10)
        assert state.player.gold == 1
        assert state.total_gold == 1
        assert [g.position for g in state.golds] == [Position(30, 20)]
        assert result.status is GameStatus.IN_PROGRESS

    def test_bump_monster_damages_and_stays(self, engine, make_state):
        state = make_state(level=6, monsters=[(11, 10)])
        result = engine.resolve_move(state, Direction.RIGHT)
        assert result.outcome is MoveOutcome.DAMAGED
        assert result.damage_taken == 7
        assert state.player.position == Position(10, 10)
        assert state.player.hp == state.player.max_hp - 7
        assert state.player_hit
        assert "hit" in result.events
        assert state.monsters[0].position == Position(11, 10)

    def test_monster_on_gold_is_a_bump(self, engine, make_state):
        state = make_state(monsters=[(11, 10)], golds=[(11, 10)])
        result = engine.resolve_move(state, Direction.RIGHT)
        assert result.outcome is MoveOutcome.DAMAGED
        assert len(state.golds) == 1

    def test_monsters_step_after_bump(self, engine, make_state, scripted_rng):
        state = make_state(monsters=[(11, 10), (20, 20)])
        rng = scripted_rng(chances=[False, True], choices=[Direction.UP])
        engine.resolve_move(state, Direction.RIGHT, rng)
        assert state.monsters[1].position == Position(20, 19)

    def test_hit_flag_cleared_next_turn(self, engine, make_state):
        state = make_state(monsters=[(11, 10)])
        engine.resolve_move(state, Direction.RIGHT)
        assert state.player_hit
        engine.resolve_move(state, Direction.LEFT)
        assert not state.player_hit


# ---------------------------------------------------------------------------
# Ambush and terminal transitions
# ---------------------------------------------------------------------------

class TestTerminalTransitions:
    def test_ambush_after_move(self, engine, make_state, scripted_rng):
        state = make_state(level=1, monsters=[(12, 10)])
        rng = scripted_rng(chances=[True], choices=[Direction.LEFT])
        result = engine.resolve_move(state, Direction.RIGHT, rng)
        assert result.outcome is MoveOutcome.MOVED
        assert result.ambushes == 1
        assert result.damage_taken == 4
        assert state.player.position == Position(11, 10)
        assert state.monsters[0].position == Position(12, 10)

    def test_defeat_on_same_turn(self, engine, make_state):
        state = make_state(hp=5, monsters=[(11, 10)])
        result = engine.resolve_move(state, Direction.RIGHT)
        assert state.player.hp == 0
        assert result.status is GameStatus.DEFEATED
        assert state.status is GameStatus.DEFEATED
        assert result.summary is MoveOutcome.DIED

    def test_defeat_by_ambush_on_same_turn(self, engine, make_state, scripted_rng):
        state = make_state(hp=2, monsters=[(12, 10)])
        rng = scripted_rng(chances=[True], choices=[Direction.LEFT])
        result = engine.resolve_move(state, Direction.RIGHT, rng)
        assert result.status is GameStatus.DEFEATED
        assert state.player.hp == 0

    def test_last_gold_clears_level(self, engine, make_state):
        state = make_state(golds=[(10, 11)])
        result = engine.resolve_move(state, Direction.DOWN)
        assert result.outcome is MoveOutcome.PICKED_UP
        assert result.status is GameStatus.LEVEL_CLEARED
        assert result.summary is MoveOutcome.LEVEL_CLEARED

    def test_dying_on_last_gold_is_defeat(self, engine, make_state, scripted_rng):
        state = make_state(hp=1, golds=[(11, 10)], monsters=[(12, 10)])
        rng = scripted_rng(chances=[True], choices=[Direction.LEFT])
        result = engine.resolve_move(state, Direction.RIGHT, rng)
        assert result.status is GameStatus.DEFEATED

    def test_moves_after_defeat_ignored(self, engine, make_state):
        state = make_state(hp=1, monsters=[(11, 10)])
        engine.resolve_move(state, Direction.RIGHT)
        result = engine.resolve_move(state, Direction.DOWN)
        assert result.outcome is MoveOutcome.IGNORED
        assert state.player.position == Position(10, 10)


# ---------------------------------------------------------------------------
# Properties over generated levels
# ---------------------------------------------------------------------------

class TestInvariantsOverRandomPlay:
    @pytest.mark.parametrize("seed", range(8))
    def test_random_walk_invariants(self, engine, seed):
        manager = LevelManager(GameRNG(seed))
        state = manager.start_level(1 + seed * 3)
        walker = GameRNG(seed + 1000)

        for _ in range(400):
            if not state.accepts_input:
                break
            gold_before = len(state.golds)
            result = engine.resolve_move(state, walker.random_choice(CARDINALS))

            pos = state.player.position
            assert 0 <= pos.x < 40 and 0 <= pos.y < 25
            assert state.grid.is_floor(pos)
            assert 0 <= state.player.hp <= state.player.max_hp

            cells = [m.position for m in state.monsters]
            assert len(cells) == len(set(cells))
            assert pos not in cells

            gold_after = len(state.golds)
            assert gold_after <= gold_before
            assert (gold_after < gold_before) == (result.outcome is MoveOutcome.PICKED_UP)

            if state.player.hp == 0:
                assert result.status is GameStatus.DEFEATED
            elif gold_after == 0:
                assert result.status is GameStatus.LEVEL_CLEARED

    def test_same_seed_same_turns(self, engine):
        moves = [Direction.RIGHT, Direction.DOWN, Direction.LEFT, Direction.UP] * 10
        a = LevelManager(GameRNG(3)).new_session()
        b = LevelManager(GameRNG(3)).new_session()
        for move in moves:
            engine.resolve_move(a, move)
            engine.resolve_move(b, move)
        assert a.player == b.player
        assert a.monsters == b.monsters
        assert a.golds == b.golds
