"""Tests for the monster wandering step."""

from witch_rogue.sim.core.grid import Direction, Position
from witch_rogue.sim.core.rng import GameRNG
from witch_rogue.sim.mechanics.monster_ai import step_monsters


class TestStepMonsters:
    def test_monster_moves_when_chance_hits(self, make_state, scripted_rng):
        state = make_state(monsters=[(5, 5)])
        rng = scripted_rng(chances=[True], choices=[Direction.RIGHT])
        assert step_monsters(state, rng) == (0, 0)
        assert state.monsters[0].position == Position(6, 5)

    def test_monster_stays_when_chance_misses(self, make_state, scripted_rng):
        state = make_state(monsters=[(5, 5)])
        step_monsters(state, scripted_rng(chances=[False]))
        assert state.monsters[0].position == Position(5, 5)

    def test_blocked_by_wall(self, make_state, scripted_rng):
        state = make_state(monsters=[(1, 1)], player=(5, 5))
        rng = scripted_rng(chances=[True], choices=[Direction.UP])
        step_monsters(state, rng)
        assert state.monsters[0].position == Position(1, 1)

    def test_blocked_by_grid_edge(self, make_state, scripted_rng, open_grid):
        grid = open_grid(0, 0, 39, 24)
        state = make_state(monsters=[(0, 0)], grid=grid)
        rng = scripted_rng(chances=[True], choices=[Direction.LEFT])
        step_monsters(state, rng)
        assert state.monsters[0].position == Position(0, 0)

    def test_blocked_by_other_monster(self, make_state, scripted_rng):
        state = make_state(monsters=[(5, 5), (6, 5)])
        rng = scripted_rng(chances=[True, False], choices=[Direction.RIGHT])
        step_monsters(state, rng)
        assert [m.position for m in state.monsters] == [Position(5, 5), Position(6, 5)]

    def test_two_monsters_never_share_a_tile(self, make_state, scripted_rng):
        """Both aim for (6, 5); the second must be refused."""
        state = make_state(monsters=[(5, 5), (7, 5)])
        rng = scripted_rng(
            chances=[True, True], choices=[Direction.RIGHT, Direction.LEFT],
        )
        step_monsters(state, rng)
        assert [m.position for m in state.monsters] == [Position(6, 5), Position(7, 5)]

    def test_vacated_tile_can_be_taken(self, make_state, scripted_rng):
        state = make_state(monsters=[(5, 5), (4, 5)])
        rng = scripted_rng(
            chances=[True, True], choices=[Direction.RIGHT, Direction.RIGHT],
        )
        step_monsters(state, rng)
        assert [m.position for m in state.monsters] == [Position(6, 5), Position(5, 5)]

    def test_ambush_hurts_player_and_monster_stays(self, make_state, scripted_rng):
        state = make_state(level=4, player=(6, 5), monsters=[(5, 5)])
        rng = scripted_rng(chances=[True], choices=[Direction.RIGHT])
        ambushes, hp_lost = step_monsters(state, rng)
        assert (ambushes, hp_lost) == (1, 5)
        assert state.monsters[0].position == Position(5, 5)
        assert state.player.hp == state.player.max_hp - 5
        assert state.player_hit

    def test_several_ambushes_in_one_turn(self, make_state, scripted_rng):
        state = make_state(level=1, player=(6, 6), monsters=[(5, 6), (7, 6), (6, 5)])
        rng = scripted_rng(
            chances=[True, True, True],
            choices=[Direction.RIGHT, Direction.LEFT, Direction.DOWN],
        )
        ambushes, hp_lost = step_monsters(state, rng)
        assert ambushes == 3
        assert hp_lost == 12
        assert state.player.hp == 18

    def test_monsters_may_step_onto_gold(self, make_state, scripted_rng):
        state = make_state(monsters=[(5, 5)], golds=[(6, 5)])
        rng = scripted_rng(chances=[True], choices=[Direction.RIGHT])
        step_monsters(state, rng)
        assert state.monsters[0].position == Position(6, 5)
        assert len(state.golds) == 1

    def test_random_wandering_keeps_invariants(self, make_state):
        state = make_state(level=20, player=(20, 12), monsters=[(x, 5) for x in range(5, 30, 2)])
        rng = GameRNG(8)
        for _ in range(200):
            step_monsters(state, rng)
            cells = [m.position for m in state.monsters]
            assert len(cells) == len(set(cells))
            assert all(state.grid.is_floor(c) for c in cells)
            assert state.player.position not in cells
