import pytest
from gestures.events import Click, DragReorder, DwellClick, ScrollDelta, SwipeSelect
from gestures.surface import TileSurface
from ui.tiles import DEFAULT_TILES, Tile, TileBoard


@pytest.fixture
def board():
    return TileBoard()


def test_board_is_a_tile_surface(board):
    assert isinstance(board, TileSurface)


def test_default_layout(board):
    rects = board.tile_rects()
    assert list(rects) == [tile.id for tile in DEFAULT_TILES]

    mail = rects["mail"]
    assert mail.left == pytest.approx(24.0)
    assert mail.top == pytest.approx(24.0)
    assert mail.right - mail.left == pytest.approx(296.0)
    assert mail.bottom - mail.top == pytest.approx(96.0)

    # Fourth tile wraps to the second row
    notes = rects["notes"]
    assert notes.left == pytest.approx(24.0)
    assert notes.top == pytest.approx(132.0)


def test_hit_test(board):
    assert board.hit_test(board.center_of("stats")) == "stats"
    # Gap between the first two columns
    assert board.hit_test((326 / 960, 72 / 640)) is None
    assert board.hit_test((0.5, 0.95)) is None


def test_view_transform(board):
    board.set_view(2.0, 0.0, 0.0)
    mail = board.tile_rects()["mail"]
    assert mail.right - mail.left == pytest.approx(592.0)

    board.set_view(1.0, 320.0, 0.0)
    mail = board.tile_rects()["mail"]
    assert mail.left == pytest.approx(344.0)
    # The old mail center is now left of the whole grid
    assert board.hit_test((172 / 960, 72 / 640)) is None


def test_toggle(board):
    board.toggle("code")
    assert board.active_tile == "code"
    board.toggle("code")
    assert board.active_tile is None


def test_cycle_wraps(board):
    board.cycle("right")
    assert board.active_tile == "media"

    board.toggle("media")
    board.toggle("mail")
    board.cycle("left")
    assert board.active_tile == "chat"


def test_reorder_moves_tile(board):
    board.reorder("mail", "tasks")
    assert board.tile_ids[:4] == ["media", "tasks", "mail", "notes"]

    board.reorder("mail", "media")
    assert board.tile_ids[:3] == ["mail", "media", "tasks"]


def test_reorder_ignores_unknown_and_same(board):
    before = board.tile_ids
    board.reorder("mail", "mail")
    board.reorder("mail", "nope")
    board.reorder("nope", "mail")
    assert board.tile_ids == before


def test_apply_events(board):
    board.apply([Click(tile_id="docs")])
    assert board.active_tile == "docs"

    board.apply([SwipeSelect(direction="right")])
    assert board.active_tile == "music"

    board.apply([DwellClick(tile_id="music")])
    assert board.active_tile is None

    # Continuous and reorder events do not touch selection or order
    before = board.tile_ids
    board.apply([ScrollDelta(dx=1.0, dy=2.0), DragReorder(from_tile_id="mail", to_tile_id="chat")])
    assert board.active_tile is None
    assert board.tile_ids == before


def test_custom_tiles():
    board = TileBoard(tiles=[Tile("a", "A", ""), Tile("b", "B", "")])
    assert board.tile_ids == ["a", "b"]
    assert board.get("b").title == "B"
    assert board.get("zzz") is None
