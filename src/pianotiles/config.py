"""Global constants and default settings."""

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS = 60
WINDOW_TITLE = "Piano Tiles"

# World space spans [-SCENE_SCALE, SCENE_SCALE] vertically, y up
SCENE_SCALE = 10.0

# Keyboard layout, in unscaled key units
WHITE_KEY_WIDTH = 0.45
WHITE_KEY_HEIGHT = 2.6
WHITE_KEY_GAP = 0.05
BLACK_KEY_WIDTH = WHITE_KEY_WIDTH * 0.6
BLACK_KEY_HEIGHT = WHITE_KEY_HEIGHT * 0.62

# Tempo
DEFAULT_BPM = 80.0
DEFAULT_TRAVEL_BEATS = 2.0
DEFAULT_FALL_SPEED = 0.015  # world units per frame, until a schedule is built

# Difficulty: (label, travel beats)
DIFFICULTY_OPTIONS = [
    ("Easy", 3),
    ("Medium", 2),
    ("Hard", 1),
]
DEFAULT_DIFFICULTY_INDEX = 1

# Audio samples
SAMPLE_BASE_URL = "https://gleitz.github.io/midi-js-soundfonts/FluidR3_GM/acoustic_grand_piano-mp3"
SAMPLE_EXTENSION = "mp3"
SAMPLE_FETCH_TIMEOUT = 10.0  # seconds
MASTER_GAIN = 0.6
ATTACK_SECONDS = 0.01
RELEASE_SECONDS = 0.7
MIXER_CHANNELS = 32
