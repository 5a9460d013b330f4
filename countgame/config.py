import os


class Config:
    # --- Arena ---
    ARENA_WIDTH = float(os.environ.get('COUNTGAME_ARENA_WIDTH', '400'))
    ARENA_HEIGHT = float(os.environ.get('COUNTGAME_ARENA_HEIGHT', '600'))
    # Boundary box of an item (clamping) and base diameter (collisions)
    ITEM_FOOTPRINT = float(os.environ.get('COUNTGAME_ITEM_FOOTPRINT', '50'))
    BASE_ITEM_SIZE = float(os.environ.get('COUNTGAME_BASE_ITEM_SIZE', '48'))
    # Arena units per second at speed 1.0
    VELOCITY_SCALE = float(os.environ.get('COUNTGAME_VELOCITY_SCALE', '100'))

    # --- Economy ---
    DAILY_CREDIT_AMOUNT = int(os.environ.get('COUNTGAME_DAILY_CREDIT_AMOUNT', '10'))
    GAME_COST = int(os.environ.get('COUNTGAME_GAME_COST', '1'))
    INITIAL_LIVES = int(os.environ.get('COUNTGAME_INITIAL_LIVES', '3'))

    # --- Drivers (seconds) ---
    COUNTDOWN_PERIOD_SEC = float(os.environ.get('COUNTGAME_COUNTDOWN_PERIOD_SEC', '1.0'))
    MOTION_PERIOD_SEC = float(os.environ.get('COUNTGAME_MOTION_PERIOD_SEC', '0.016'))
