from dataclasses import dataclass

Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class GameConfig:
    """Fixed rules and layout of the game.

    Distances are in canvas units (top-left origin, y grows downwards).
    Rates are in frames, times in whole seconds.
    """

    lanes: int = 3
    canvas_width: int = 800
    canvas_height: int = 600

    # Basket sits at a fixed height; items within +/- catch_band of it are caught
    basket_y: int = 520
    catch_band: int = 60

    # Items appear just above the visible area
    spawn_y: float = -20.0

    # Difficulty ramp
    base_spawn_rate: int = 60
    min_spawn_rate: int = 20
    base_speed: float = 5.0
    speed_ramp: float = 0.1
    max_speed: float = 15.0

    time_limit: int = 30
    alert_time: int = 5

    # Presentation
    item_glyph_size: int = 60
    basket_glyph_size: int = 90
    hud_height: int = 40
    blink_period: int = 60
    summary_size: int = 5

    @property
    def lane_width(self) -> float:
        return self.canvas_width / self.lanes

    def lane_center_x(self, lane: int) -> float:
        return lane * self.lane_width + self.lane_width / 2


@dataclass(frozen=True)
class Palette:
    # RGBA
    sky: Color = (135, 206, 235, 255)
    lane_line: Color = (255, 255, 255, 128)
    hud_background: Color = (0, 0, 0, 128)
    overlay: Color = (0, 0, 0, 204)
    text: Color = (255, 255, 255, 255)
    alert: Color = (255, 0, 0, 255)
    title: Color = (255, 215, 0, 255)
    top_rank: Color = (255, 255, 0, 255)
    hint: Color = (0, 255, 0, 255)


CONFIG = GameConfig()
PALETTE = Palette()
