from ecs.components.tile import Tile
from ecs.systems.game_over import is_game_over
from ecs.systems.grid_ops import can_merge
from ecs.systems.movement import MovementSystem
from ecs.utils.direction import Direction
from tests.helpers import board_world, values


def test_not_over_while_any_cell_is_empty():
    _, world = board_world([[2, 4], [8, 0]])
    assert is_game_over(world) is False


def test_not_over_with_empty_cell_and_no_pairs():
    _, world = board_world([[2, 4, 2], [4, 2, 4], [2, 4, 0]])
    assert is_game_over(world) is False


def test_diagonal_pairs_do_not_merge():
    _, world = board_world([[2, 4], [4, 2]])
    assert is_game_over(world) is True


def test_vertical_pair_keeps_game_alive():
    _, world = board_world([[2, 4], [2, 8]])
    assert is_game_over(world) is False


def test_horizontal_pair_keeps_game_alive():
    _, world = board_world([[2, 4, 4, 2]])
    assert is_game_over(world) is False


def test_full_board_without_pairs_is_over():
    _, world = board_world([[2, 4, 8, 16]])
    assert is_game_over(world) is True


def test_merge_opens_the_board_again():
    bus, world = board_world([[2, 4, 4, 2]])
    movement = MovementSystem(world, bus)
    assert movement.move(Direction.LEFT) is True
    assert values(world) == [[2, 8, 2, 0]]
    assert is_game_over(world) is False


def test_merge_predicate_respects_lock():
    assert can_merge(Tile(value=4, cell=0), Tile(value=4, cell=1)) is True
    assert can_merge(Tile(value=4, cell=0), Tile(value=4, cell=1, locked=True)) is False
    assert can_merge(Tile(value=4, cell=0), Tile(value=8, cell=1)) is False
    assert can_merge(Tile(value=4, cell=0), None) is False


def test_full_two_by_two_without_pairs_is_over():
    _, world = board_world([[2, 4], [8, 16]])
    assert is_game_over(world) is True
