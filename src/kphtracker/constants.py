# Retention window for kill buckets, in hours.
DEFAULT_RETENTION_HOURS = 24
MIN_RETENTION_HOURS = 1
MAX_RETENTION_HOURS = 168

# Window used for the "recent" kills-per-hour figure, in minutes.
DEFAULT_RECENT_WINDOW_MINUTES = 15
MIN_RECENT_WINDOW_MINUTES = 5
MAX_RECENT_WINDOW_MINUTES = 120

# The retention sweep runs once every N ticks (one game tick is ~0.6s).
DEFAULT_SWEEP_INTERVAL_TICKS = 100

# Slayer task creature id -> task name as reported by the game client.
SLAYER_TASK_NAMES = {
    1: "Crawling Hands",
    2: "Cave bugs",
    3: "Cave crawlers",
    4: "Banshees",
    5: "Cave slimes",
    6: "Rock slugs",
    7: "Desert lizards",
    8: "Cockatrices",
    9: "Pyrefiends",
    10: "Mogres",
    11: "Harpie bug swarms",
    12: "Wall beasts",
    13: "Killerwatts",
    14: "Molanisks",
    15: "Basilisks",
    16: "Sea snakes",
    17: "Turoth",
    18: "Fever spiders",
    19: "Infernal mages",
    20: "Brine rats",
    21: "Bloodvelds",
    22: "Jellies",
    23: "Spiritual rangers",
    24: "Spiritual warriors",
    25: "Dust devils",
    26: "Aberrant spectres",
    27: "Spiritual mages",
    28: "Kurasks",
    29: "Skeletal wyverns",
    30: "Gargoyles",
    31: "Nechryaels",
    32: "Abyssal demons",
    33: "Cave krakens",
    34: "Dark beasts",
    35: "Smoke devils",
    36: "Drakes",
    37: "Wyrms",
    38: "Hydras",
}

# Lower-cased task name -> NPC name fragments that also count towards the task.
SLAYER_TASK_ALIASES = {
    "bloodvelds": ("bloodveld", "mutated bloodveld"),
    "gargoyles": ("gargoyle", "grotesque guardians"),
    "abyssal demons": ("abyssal demon", "greater abyssal demon"),
    "dust devils": ("dust devil", "choke devil"),
    "nechryaels": ("nechryael", "greater nechryael"),
    "cave krakens": ("cave kraken", "kraken"),
    "smoke devils": ("smoke devil", "thermonuclear smoke devil"),
    "drakes": ("drake",),
    "wyrms": ("wyrm",),
    "hydras": ("hydra", "alchemical hydra"),
}

# Overlay colour tiers (RGB).
COLOR_TITLE = (255, 255, 255)
COLOR_TEXT = (192, 192, 192)
COLOR_HIGHLIGHT = (255, 255, 0)
COLOR_SLAYER = (255, 0, 255)
COLOR_GREEN = (0, 255, 0)
COLOR_YELLOW = (255, 255, 0)
COLOR_ORANGE = (255, 200, 0)
COLOR_RED = (255, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_CYAN = (0, 255, 255)

KPH_HIGH = 100.0
KPH_MEDIUM = 50.0
PROGRESS_TIERS = (75.0, 50.0, 25.0)
GP_PER_HOUR_HIGH = 2_000_000
GP_PER_HOUR_MEDIUM = 1_000_000
GP_PER_HOUR_LOW = 500_000
