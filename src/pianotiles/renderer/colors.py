"""Color palette."""

# RGB tuples
BG = (18, 18, 24)
WHITE_KEY = (245, 245, 245)
WHITE_KEY_ACTIVE = (149, 195, 255)
BLACK_KEY = (17, 17, 17)
BLACK_KEY_ACTIVE = (94, 201, 255)
KEY_LABEL_LIGHT = (235, 235, 235)
KEY_LABEL_DARK = (40, 40, 40)
TILE = (66, 135, 245)
TILE_ACTIVE = (66, 245, 239)
HIT_BAND = (80, 220, 100)
HUD_TEXT = (220, 220, 220)
HUD_DIM = (120, 120, 140)
