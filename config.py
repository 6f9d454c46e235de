"""
Game configuration and constants.
"""

import os

# Round types
LETTERS = "letters"
NUMBERS = "numbers"
MIXED = "mixed"
ROUND_TYPES = [LETTERS, NUMBERS]
GAME_TYPES = [LETTERS, NUMBERS, MIXED]

# Round states (initiated -> started -> active -> completed)
INITIATED = "initiated"
STARTED = "started"
ACTIVE = "active"
COMPLETED = "completed"
ROUND_STATES = [INITIATED, STARTED, ACTIVE, COMPLETED]

# Letter frequency tables (Spanish, roughly per mille)
VOWEL_WEIGHTS = {"A": 12, "E": 13, "I": 6, "O": 9, "U": 4}
CONSONANT_WEIGHTS = {
    "S": 8, "R": 7, "N": 7, "D": 6, "L": 5, "C": 5, "T": 5, "M": 3,
    "P": 3, "B": 2, "G": 1, "V": 1, "Y": 1, "Q": 1, "H": 1, "F": 1,
    "Z": 1, "J": 1, "X": 1,
}
VOWEL_COUNT = 5
CONSONANT_COUNT = 4

# Number pool
LARGE_NUMBERS = [25, 50, 75, 100]
SMALL_NUMBERS = list(range(1, 11)) * 2
LARGE_COUNT = 2
SMALL_COUNT = 4
TARGET_MIN = 100
TARGET_MAX = 999

# Operators; ASCII aliases are normalised to the display symbols
ADD = "+"
SUB = "-"
MUL = "×"
DIV = "÷"
OPERATORS = [ADD, SUB, MUL, DIV]
OPERATOR_ALIASES = {"*": MUL, "x": MUL, "X": MUL, "/": DIV, ":": DIV}

# Numbers scoring: (max distance to target, points), first match wins
NUMBERS_SCORE_TIERS = [(0, 10), (5, 7), (10, 5), (25, 3), (50, 1)]

# Error kinds reported back to the surrounding application
EMPTY_SUBMISSION = "EmptySubmission"
INVALID_WORD = "InvalidWord"
INVALID_OPERATION = "InvalidOperation"
ILLEGAL_SELECTION = "IllegalSelection"
NO_ACTIVE_ROUND = "NoActiveRound"
NOT_CONFIGURED = "NotConfigured"
OUT_OF_TURN = "OutOfTurn"
INVALID_CONFIG = "InvalidConfig"
WRONG_PHASE = "WrongPhase"

# Setup limits
MIN_PLAYERS = 2
MAX_PLAYERS = 4
MIN_ROUNDS = 1
MAX_ROUNDS = 10
LETTERS_DURATION_RANGE = (15, 120)
NUMBERS_DURATION_RANGE = (15, 180)

# New-game defaults
DEFAULT_PLAYER_NAMES = ["Jugador 1", "Jugador 2"]
DEFAULT_ROUNDS = 3
DEFAULT_GAME_TYPE = MIXED
DEFAULT_LETTERS_DURATION = 60
DEFAULT_NUMBERS_DURATION = 90

# Static data and app wiring, overridable from the environment
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DICTIONARY_PATH = os.environ.get(
    "LETRAS_DICTIONARY_PATH", os.path.join(BASE_DIR, "data", "palabras.txt")
)
SNAPSHOT_PATH = os.environ.get("LETRAS_SNAPSHOT_PATH", ".letras_cifras.json")
SEED = os.environ.get("LETRAS_SEED")
LOG_LEVEL = os.environ.get("LETRAS_LOG_LEVEL", "INFO")

# Colors for plotting
COLOR_SEQUENCE = ["#e41a1c", "#377eb8", "#4daf4a", "#ff7f00"]
