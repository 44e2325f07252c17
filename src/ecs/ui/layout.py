from ecs.constants import TILE_SIZE, BOTTOM_MARGIN, BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT, SCORE_BAR_HEIGHT

def compute_board_geometry(window_width: int, window_height: int, cols: int, rows: int):
    """Return (tile_size, start_x, start_y) for a cols x rows board.

    Tiles scale down to fit the percentage caps but never exceed TILE_SIZE.
    start_x/start_y are the board's bottom-left corner.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - SCORE_BAR_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / cols
    tile_by_h = max_board_h / rows
    tile_size = int(min(tile_by_w, tile_by_h, TILE_SIZE))
    if tile_size < 20:
        tile_size = 20
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_center(x: int, y: int, rows: int, tile_size: int, start_x: float, start_y: float):
    """Screen centre of grid cell (x, y); grid row 0 is drawn at the top."""
    screen_row = rows - 1 - y
    return (
        start_x + x * tile_size + tile_size / 2,
        start_y + screen_row * tile_size + tile_size / 2,
    )
