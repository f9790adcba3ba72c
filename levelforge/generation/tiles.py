# Cell values centralized for modular imports
OPEN = 0
WALL = 1

# Maze layouts
CENTER_OUT = "center-out"
OUT_OUT = "out-out"
LAYOUTS = (CENTER_OUT, OUT_OUT)

# Flag tags
TEAM_A = "team-a"
TEAM_B = "team-b"
NEUTRAL = "neutral"

__all__ = ["OPEN", "WALL", "CENTER_OUT", "OUT_OUT", "LAYOUTS", "TEAM_A", "TEAM_B", "NEUTRAL"]
