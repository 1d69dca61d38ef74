# =============================================================================
# BLOCKCITY CONSTANTS
# =============================================================================
# Centralized constants for the block city generator. This file contains all
# layout dimensions, zoning thresholds and traffic parameters used throughout
# the system.
# =============================================================================

# =============================================================================
# GENERATION DEFAULTS
# =============================================================================

DEFAULT_SEED = 42                       # Seed used when none is given
DEFAULT_GRID_RADIUS = 10                # Blocks generated for bx, bz in [-r, r]
MAX_GRID_RADIUS = 200                   # Hard cap on the grid radius (401 x 401 blocks)
MAX_SEED = 2 ** 64                      # Seeds are unsigned 64-bit integers

# =============================================================================
# BLOCK GRID
# =============================================================================

BLOCK_WIDTH = 5.5                       # Block footprint along X (world units)
BLOCK_DEPTH = 4.0                       # Block footprint along Z (world units)

# =============================================================================
# ZONING
# =============================================================================

NOISE_SCALE = 0.025                     # World offset -> noise space factor
ZONE_THRESHOLDS = (0.45, 0.60, 0.70)    # Rural < 0.45 <= Low < 0.60 <= Medium < 0.70 <= High
NOISE_SEED_SALT = "zoning-noise"        # Salt used to derive the noise seed from the city seed

# =============================================================================
# ROADS
# =============================================================================

ROAD_X_SCALE = 4.5                      # Straight road stretch along X
ROAD_Z_SCALE = 3.0                      # Straight road stretch along Z
ROAD_X_OFFSET = (2.75, 0.0, 0.0)        # Local position of the X straight road
ROAD_Z_OFFSET = (0.0, 0.0, 2.0)         # Local position of the Z straight road
LANE_OFFSET = 0.15                      # Distance of each lane from the road centre line
X_LANE_START = 0.3                      # X lanes span local X in [0.3, 5.2]
X_LANE_END = 5.2
Z_LANE_START = 0.75                     # Z lanes span local Z in [0.75, 3.25]
Z_LANE_END = 3.25

# =============================================================================
# TRAFFIC
# =============================================================================

CAR_DENSITY = 0.75                      # A slot spawns a car when the draw exceeds this
CAR_SPEED = 2.0                         # Car speed (units / second)
CAR_SCALE = 0.15                        # Uniform car mesh scale
X_LANE_SLOTS = 9                        # Car slots per X lane
Z_LANE_SLOTS = 6                        # Car slots per Z lane
CAR_SLOT_START = 0.75                   # Local coordinate of the first car slot
CAR_SLOT_PITCH = 0.5                    # Distance between placed car slots
X_LANE_STAGGER = 0.55                   # Initial distance_traveled step on X lanes
Z_LANE_STAGGER = 0.5                    # Initial distance_traveled step on Z lanes

# =============================================================================
# BLOCK CONTENT
# =============================================================================

# Low density
LOW_TREE_ROWS_X = (0.75, 4.75)          # The two tree rows flanking the central strip
LOW_ROW_START = 0.75                    # Local Z of the first tree / fence
LOW_TREES_PER_ROW = 9
LOW_TREE_PITCH = 0.3
LOW_FENCE_X = 2.75
LOW_FENCES = 7
LOW_FENCE_PITCH = 0.4
LOW_BUILDING_SLOTS = 2
LOW_BUILDING_PITCH = 1.8
LOW_BUILDING_FRONT_Z = 1.25
LOW_BUILDING_REAR_Z = 2.75

# Medium density
MEDIUM_BUILDING_SLOTS = 5
MEDIUM_BUILDING_PITCH = 0.9
MEDIUM_BUILDING_FRONT_Z = 1.0
MEDIUM_BUILDING_REAR_Z = 3.0
MEDIUM_TREE_Z = (1.75, 2.25)
MEDIUM_TREE_PAIRS = 2
MEDIUM_TREE_PAIR_PITCH = 0.5
MEDIUM_PATH_STONES = 11
MEDIUM_PATH_START = 0.75
MEDIUM_PATH_PITCH = 0.4
MEDIUM_PATH_HEIGHT = 0.02
MEDIUM_PATH_Z = 2.0
MEDIUM_PATH_SCALE = (1.0, 2.0, 1.0)

# High density
HIGH_BUILDING_SLOTS = 3
HIGH_BUILDING_START = 1.25
HIGH_BUILDING_PITCH = 1.5
HIGH_BUILDING_FRONT_Z = 1.25
HIGH_BUILDING_REAR_Z = 2.75

# Ground tile materials
GROUND_GRASS = 0
GROUND_PAVED = 1
