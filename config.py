# ===== BOT SETTINGS =====
# Name shown in the log for both sides (agent id is appended)
BOT_NAME = "PlanningBot"

# ===== MAP SETTINGS =====
# GridWorld dimensions in tiles. Structures and mines take a 3x3 footprint,
# so anything below 16x16 leaves very few build sites.
MAP_WIDTH = 30
MAP_HEIGHT = 30

# Starting gold for each agent. Kept below the price of two barracks so a
# worker gets trained early (training a worker is what sets the gather route).
STARTING_GOLD = 600

# ===== MATCH SETTINGS =====
# A match is a series of rounds; every round starts from a fresh map.
ROUNDS = 3

# A round ends when one side has no units left, or after this many ticks
TICKS_PER_ROUND = 2000

# Seed for map obstacles and for the agents' attack-everything target picks.
# Set to None for a different match every run.
SEED = 7

# ===== DECISION CORE =====
# How the dispatcher turns scores into handler calls:
#   "running_max": fire every action whose score sets a new running maximum
#                   while scanning the fixed action order (default)
#   "argmax":      fire only the single best action (first one on ties)
DISPATCH_MODE = "running_max"

# When True, a build site chosen earlier in a tick is skipped by later
# build commands in the same tick. Off by default: the simulation rejects
# the losing command instead.
RESERVE_BUILD_SITES = False

# ===== OUTPUT =====
# When True, the console also shows DEBUG lines (every score, every command).
# The log file always records DEBUG.
RUN_VERBOSE = False
