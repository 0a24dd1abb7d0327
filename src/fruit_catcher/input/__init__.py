from .lanes import QUIT, RESTART, LaneKeyMapper, ScriptedLaneSource, parse_lane_signal

__all__ = ["parse_lane_signal", "LaneKeyMapper", "ScriptedLaneSource", "RESTART", "QUIT"]
