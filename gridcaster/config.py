import math

# Screen settings
# Size of the first-person view in pixels (the minimap is drawn to its right)
SCREEN_WIDTH = 640
SCREEN_HEIGHT = 320
FPS = 60

# Camera settings
# Field of view angle (in radians)
FOV = math.pi / 3

# Controls
# "pressed": one step per key press, "held": continuous motion while a key is down
CONTROL_MODE = "pressed"
# Distance moved per key press (grid cells)
MOVE_STEP = 0.5
# Rotation per key press (radians)
TURN_STEP = math.pi / 16
# Movement speed in grid cells per second while a key is held
MOVE_SPEED = 3.0
# Rotation speed in radians per second while a key is held
ROT_SPEED = 2.0

# Shading
# Grey level of a wall at distance zero; fades to black at one grid width
MAX_SHADE = 192

# Colors
BACKGROUND_COLOR = (0, 0, 0)
MAP_BACKGROUND_COLOR = (255, 255, 255)
MAP_GRID_COLOR = (0, 0, 0)
MAP_WALL_COLOR = (128, 128, 128)
MAP_CAMERA_COLOR = (0, 128, 0)
MAP_FOV_COLOR = (255, 0, 0)
# Segments used to approximate the camera marker on the minimap
MAP_CAMERA_SEGMENTS = 24

# World file: JSON definition of the grid (relative to the package directory)
WORLD_FILE = "worlds/default.json"

# Key repeat while a key is held in "pressed" mode (milliseconds)
KEY_REPEAT_DELAY = 500
KEY_REPEAT_INTERVAL = 50
