from __future__ import annotations

# Window
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS_CAP = 60  # 0 = uncapped

# App
APP_VERSION = "0.3.0"

# Terrain
MAP_SIZE = 2  # chunks per side
CHUNK_SIZE = 32  # tiles per chunk side (must be even when MAP_SIZE > 1)
OUTER_RADIUS = 1.0  # hex center -> corner
NOISE_SCALE = 3.0  # tile coordinates are divided by this before sampling
DEFAULT_SEED = 1

# Stitching
DEFAULT_SEAMS = True  # skirts across chunk boundaries
DEFAULT_SKIP_FLAT_QUADS = False  # keep zero-height skirts by default

# Index buffer is uint32
MAX_INDEX = 2**32 - 1

# Rendering
WIREFRAME = True
FOV_DEG = 60.0
NEAR = 0.1
FAR = 1000.0
LIGHT_DIR = (0.0, 1.0, 0.0)  # light sits straight above, looking down
CLEAR_COLOR = (0.08, 0.09, 0.12)
WIREFRAME_COLOR = (1.0, 1.0, 1.0)
DEFAULT_GIZMOS = True

# Camera
CAMERA_START_HEIGHT = 50.0
ORBIT_SENSITIVITY = 0.005  # rad per pixel
ZOOM_STEP = 0.9
