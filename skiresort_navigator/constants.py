"""Configuration constants for Ski Resort Navigator.

All configurable parameters are centralized here for easy tuning.

Classes:
    IdConfig: Separators and prefixes for node/edge/route IDs
    DifficultyConfig: Difficulty order, weight multipliers, tag aliases
    GraphConfig: Graph construction parameters (connections, lift weight)
    RouteConfig: Route materialization and planner cache parameters
    NameConfig: Generated labels for nodes and edges
"""

# Earth's radius in meters (WGS84 spherical approximation)
EARTH_RADIUS_M = 6_371_000


class IdConfig:
    """ID building blocks for graph entities.

    Node IDs look like "piste_top-123", "lift_station-77-0".
    Edge IDs look like "piste-123", "lift-77", "connection-<from>-<to>".
    """

    SEPARATOR = "-"
    PISTE_EDGE_PREFIX = "piste"
    LIFT_EDGE_PREFIX = "lift"
    CONNECTION_EDGE_PREFIX = "connection"
    ROUTE_PREFIX = "route"


class DifficultyConfig:
    """Piste difficulty ordering and routing cost multipliers."""

    # Ordered from easiest to hardest
    DIFFICULTIES = ["easy", "intermediate", "expert"]

    # Rank used to find the hardest piste on a route
    RANKS = {
        "easy": 0,
        "intermediate": 1,
        "expert": 2,
    }
    assert set(RANKS.keys()) == set(DIFFICULTIES)

    # Edge weight = distance × multiplier (biases search toward easier terrain)
    WEIGHT_MULTIPLIERS = {
        "easy": 1,
        "intermediate": 2,
        "expert": 5,
    }
    assert set(WEIGHT_MULTIPLIERS.keys()) == set(DIFFICULTIES)

    # Accepted spellings: OSM piste:difficulty tags and European piste colors
    ALIASES = {
        "novice": "easy",
        "easy": "easy",
        "blue": "easy",
        "intermediate": "intermediate",
        "red": "intermediate",
        "advanced": "expert",
        "expert": "expert",
        "freeride": "expert",
        "black": "expert",
    }
    assert set(ALIASES.values()) == set(DIFFICULTIES)

    # Unknown or missing tags are treated as the easiest level
    FALLBACK = "easy"

    # Separator for difficulty filter strings ("easy,expert")
    FILTER_SEPARATOR = ","


# Harder pistes must always cost more per meter
assert all(
    DifficultyConfig.WEIGHT_MULTIPLIERS[easier] < DifficultyConfig.WEIGHT_MULTIPLIERS[harder]
    for easier, harder in zip(DifficultyConfig.DIFFICULTIES, DifficultyConfig.DIFFICULTIES[1:])
), "Weight multipliers must grow with difficulty"


class GraphConfig:
    """Navigation graph construction parameters."""

    # Maximum distance (meters) between nodes of different features to link them on foot
    # Inclusive: nodes exactly at the threshold are connected
    CONNECTION_THRESHOLD_M = 50.0

    # Absolute tolerance (meters) on the threshold comparison; haversine rounding can
    # put a pair placed exactly at the threshold a few ULPs above it
    DISTANCE_TOLERANCE_M = 1e-6

    # Walking is slower than any ride
    CONNECTION_WEIGHT_FACTOR = 2.0

    # Fixed weight for lift edges (nominal 5 minute ride, independent of length)
    LIFT_WEIGHT = 300.0

    # Used when a piste has neither usable geometry nor a length attribute
    DEFAULT_PISTE_LENGTH_M = 500.0

    # Below this node count a plain pairwise scan is used for connection search
    SPATIAL_INDEX_MIN_NODES = 200

    # Relative slack on the KD-tree search radius; candidates are re-checked with haversine
    SPATIAL_INDEX_RADIUS_SLACK = 1e-6


assert GraphConfig.CONNECTION_WEIGHT_FACTOR > 1.0, "Walking must be slower than skiing"


class RouteConfig:
    """Route materialization and planner parameters."""

    # Nominal speed applied to the whole route distance (lifts and walking included)
    SKI_SPEED_KMH = 10.0

    # Added per lift ride on top of its distance at SKI_SPEED_KMH
    LIFT_RIDE_MINUTES = 5

    # Estimates never go below this
    MIN_ESTIMATED_MINUTES = 1

    # Visible route step kinds (connections are never steps)
    STEP_KIND_PISTE = "piste"
    STEP_KIND_LIFT = "lift"

    # RoutePlanner result cache
    CACHE_MAXSIZE = 256
    CACHE_TTL_S = 300  # 5 minutes


class NameConfig:
    """Generated display labels."""

    PISTE_TOP_SUFFIX = "(Top)"
    PISTE_BOTTOM_SUFFIX = "(Bottom)"
    LIFT_BOTTOM_SUFFIX = "Bottom"
    LIFT_TOP_SUFFIX = "Top"
    LIFT_MIDDLE_SUFFIX = "Station"
    CONNECTION_NAME = "Connection"
    UNNAMED_PISTE = "Unnamed Piste"
    UNNAMED_LIFT = "Unnamed Lift"
