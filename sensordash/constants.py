"""
Hard-coded colours, timings, paddings & fonts so every module can import them
without circular dependencies.
"""
from pathlib import Path
import pygame

# -------- colours --------
GREEN, DIM, BLACK, RED = (0, 255, 0), (0, 90, 0), (0, 0, 0), (255, 0, 0)
LIME, WHITE, YELLOW    = (50, 205, 50), (255, 255, 255), (255, 255, 0)
GRID                   = (0, 128, 0)
PANEL_BG               = (12, 12, 12)

# -------- polling --------
POLL_INTERVAL_MS  = 250                 # fixed tick, starts at launch
FETCH_TIMEOUT_SEC = 2.0
DATA_TIMEOUT_SEC  = 1.0                 # gap that triggers DATA-LOSS banner

# -------- series --------
WINDOW_LEN   = 20                       # IR / DHT sliding window
SWEEP_R      = (0, 100)                 # sweep-line radii, never changed
RADAR_R_MAX  = 100
RADAR_R_TICK = 20
RADAR_A_MAX  = 180
RADAR_A_TICK = 22.5
IR_MARGIN, TEMP_MARGIN, HUM_MARGIN = 1, 1, 5

# -------- layout --------
WIN_SIZE   = (1100, 750)
HEADER_H   = 60
FOOTER_H   = 60
PANEL_PAD  = 12

pygame.font.init()
FONT       = pygame.font.SysFont("monospace", 18)
MID_FONT   = pygame.font.SysFont("monospace", 14)
SMALL_FONT = pygame.font.SysFont("monospace", 11)
BIG_FONT   = pygame.font.SysFont("monospace", 48)

# -------- dirs --------
ROOT      = Path(__file__).resolve().parent.parent
LOG_DIR   = ROOT / "log"
CFG_PATH  = ROOT / "sensordash_config.json"
