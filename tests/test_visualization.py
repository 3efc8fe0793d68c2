import pygame

from blockfall.visualization.human_play import build_parser, key_bindings
from blockfall.visualization.renderer import Renderer


def test_keys_map_to_engine_operations(game):
    bindings = key_bindings(game)
    assert bindings[pygame.K_LEFT] == game.move_left
    assert bindings[pygame.K_SPACE] == game.hard_drop
    assert bindings[pygame.K_z] == bindings[pygame.K_x] == game.rotate
    assert bindings[pygame.K_p] == game.pause


def test_window_fits_board_and_panel():
    renderer = Renderer(cell_size=10, margin=5, panel_cells=6)
    assert renderer.window_size(20, 10) == (5 * 3 + 16 * 10, 5 * 2 + 200)


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.name is None
    assert args.scores == "scores.json"
    assert args.cell_size == 28
