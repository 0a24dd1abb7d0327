from __future__ import annotations

from fruit_catcher.config import CONFIG, PALETTE
from fruit_catcher.engine.clock import FrameClock
from fruit_catcher.engine.core import GameEngine
from fruit_catcher.engine.items import Item, ItemKind
from fruit_catcher.render import DrawImage, FillRect, Glyph, Line, RecordingSurface, Text
from fruit_catcher.render.scene import BASKET_GLYPH, RESTART_HINT, TITLE


def _draw(engine: GameEngine) -> RecordingSurface:
    surface = RecordingSurface()
    surface.draw(engine.render_frame())
    return surface


def test_idle_engine_draws_only_background():
    surface = _draw(GameEngine(scheduler=FrameClock()))
    assert surface.last == [FillRect(0, 0, 800, 600, PALETTE.sky)]


def test_background_image_replaces_fill():
    engine = GameEngine(scheduler=FrameClock(), background_image="images/background.png")
    assert engine.render_frame() == [DrawImage("images/background.png", 0, 0, 800, 600)]


def test_active_frame_has_lanes_items_basket_and_hud(engine):
    engine.start()
    engine.state.items.append(Item(lane=2, y=100, kind=ItemKind.BOMB))
    engine.receive_lane_input("left")
    surface = _draw(engine)

    lines = surface.of_type(Line)
    assert [(l.x1, l.x2) for l in lines] == [(CONFIG.lane_width, CONFIG.lane_width), (2 * CONFIG.lane_width, 2 * CONFIG.lane_width)]

    glyphs = surface.of_type(Glyph)
    assert Glyph(ItemKind.BOMB.glyph, CONFIG.lane_center_x(2), 100, 60) in glyphs
    assert Glyph(BASKET_GLYPH, CONFIG.lane_center_x(0), 520, 90) in glyphs

    texts = {t.text: t for t in surface.of_type(Text)}
    assert texts["Score: 0"].align == "left"
    assert (texts["Score: 0"].x, texts["Score: 0"].y) == (10, 25)
    assert texts["Time: 30"].align == "right"
    assert texts["Time: 30"].x == 790
    assert texts["Time: 30"].color == PALETTE.text


def test_time_turns_red_in_last_five_seconds(engine, clock):
    engine.start()
    clock.advance(24.0)
    assert _draw(engine).of_type(Text)[-1].color == PALETTE.text
    clock.advance(1.0)
    last = _draw(engine).of_type(Text)[-1]
    assert last.text == "Time: 5"
    assert last.color == PALETTE.alert


def test_stopped_engine_without_summary_draws_background(engine):
    engine.start()
    engine.stop()
    assert len(engine.render_frame()) == 1


def test_summary_overlay_lists_leaderboard(engine, table):
    table.record_score(120)
    table.record_score(80)
    engine.start()
    engine.state.items.append(Item(lane=1, y=520, kind=ItemKind.BANANA))
    engine.update()
    engine.stop()
    engine.show_summary()

    surface = _draw(engine)
    texts = surface.texts()
    assert TITLE in texts
    assert "Your Score: 30" in texts
    assert texts.index("1. 120 pts (2024-05-01 12:30:00)") < texts.index("2. 80 pts (2024-05-01 12:30:00)")
    assert "3. 30 pts (2024-05-01 12:30:00)" in texts

    rows = [t for t in surface.of_type(Text) if t.text[:2] in {"1.", "2.", "3."}]
    assert [r.y for r in rows] == [200, 240, 280]
    assert rows[0].color == PALETTE.top_rank
    assert rows[1].color == PALETTE.text
    # No gameplay elements behind the overlay
    assert surface.of_type(Glyph) == []


def test_restart_hint_blinks(engine):
    engine.start()
    engine.stop()
    engine.show_summary()
    engine.state.frame_count = 29
    assert RESTART_HINT in _draw(engine).texts()
    engine.state.frame_count = 30
    assert RESTART_HINT not in _draw(engine).texts()
    engine.state.frame_count = 60
    assert RESTART_HINT in _draw(engine).texts()


def test_rendering_does_not_mutate_state(engine):
    engine.start()
    for _ in range(90):
        engine.update()
    before = engine.snapshot()
    for _ in range(5):
        engine.render_frame()
    assert engine.snapshot() == before
