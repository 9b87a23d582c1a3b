import json
import re
from dataclasses import dataclass, fields
from datetime import timedelta

# Dimensions contrôlées (nom interne -> clé JSON de l'en-tête X-Query-Limits)
QUERY_TIMEOUT = "query_timeout"
MAX_QUERY_LOOKBACK = "max_query_lookback"
MAX_QUERY_LENGTH = "max_query_length"
MAX_ENTRIES_LIMIT_PER_QUERY = "max_entries_limit_per_query"

DIMENSIONS = (QUERY_TIMEOUT, MAX_QUERY_LOOKBACK, MAX_QUERY_LENGTH, MAX_ENTRIES_LIMIT_PER_QUERY)
DURATION_DIMENSIONS = frozenset({QUERY_TIMEOUT, MAX_QUERY_LOOKBACK, MAX_QUERY_LENGTH})

DIMENSION_TO_HEADER_KEY = {
    QUERY_TIMEOUT: "queryTimeout",
    MAX_QUERY_LOOKBACK: "maxQueryLookback",
    MAX_QUERY_LENGTH: "maxQueryLength",
    MAX_ENTRIES_LIMIT_PER_QUERY: "maxEntriesLimitPerQuery",
}

# Syntaxe Prometheus: 1y2w3d4h5m6s7ms (y = 365d)
_DURATION_RE = re.compile(
    r"^(?:(\d+)y)?(?:(\d+)w)?(?:(\d+)d)?(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?(?:(\d+)ms)?$"
)
_UNITS = (
    ("y", timedelta(days=365)),
    ("w", timedelta(weeks=1)),
    ("d", timedelta(days=1)),
    ("h", timedelta(hours=1)),
    ("m", timedelta(minutes=1)),
    ("s", timedelta(seconds=1)),
    ("ms", timedelta(milliseconds=1)),
)


def check_dimension(dimension: str) -> str:
    if dimension not in DIMENSIONS:
        raise ValueError(f"unknown query limit dimension: {dimension!r}")
    return dimension


def parse_duration(raw: str) -> timedelta:
    """'1h30m' -> timedelta(hours=1, minutes=30). '0' est accepté."""
    if not isinstance(raw, str):
        raise ValueError(f"duration must be a string, got {type(raw).__name__}")
    if raw == "0":
        return timedelta(0)
    m = _DURATION_RE.match(raw)
    if not raw or not m:
        raise ValueError(f"not a valid duration string: {raw!r}")
    total = timedelta(0)
    try:
        for (_, unit), amount in zip(_UNITS, m.groups()):
            if amount:
                total += int(amount) * unit
    except OverflowError as e:
        raise ValueError(f"duration out of range: {raw!r}") from e
    return total


def format_duration(value: timedelta) -> str:
    if value < timedelta(0):
        raise ValueError("negative durations cannot be formatted")
    if not value:
        return "0s"
    remaining = value
    out = []
    for suffix, unit in _UNITS:
        n, remaining = divmod(remaining, unit)
        if n:
            out.append(f"{n}{suffix}")
    return "".join(out)


def format_value(dimension: str, value):
    """Représentation JSON d'une valeur (durées en syntaxe Prometheus)."""
    if dimension in DURATION_DIMENSIONS:
        return format_duration(value)
    return value


@dataclass(frozen=True)
class QueryLimits:
    """
    Limites préférées portées par une requête. Chaque champ est optionnel:
    une valeur nulle (timedelta(0) / 0) = pas d'override sur cette dimension.
    """
    query_timeout: timedelta = timedelta(0)
    max_query_lookback: timedelta = timedelta(0)
    max_query_length: timedelta = timedelta(0)
    max_entries_limit_per_query: int = 0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            zero = timedelta(0) if f.name in DURATION_DIMENSIONS else 0
            if value < zero:
                raise ValueError(f"{f.name} must not be negative")

    def value(self, dimension: str):
        return getattr(self, check_dimension(dimension))

    def is_set(self, dimension: str) -> bool:
        return bool(self.value(dimension))

    def overridden(self) -> list[str]:
        return [d for d in DIMENSIONS if self.is_set(d)]


def parse_query_limits_header(raw: str) -> QueryLimits:
    """
    Décode la valeur de X-Query-Limits, ex:
      {"maxQueryLookback":"30d","maxEntriesLimitPerQuery":1000}
    Clés inconnues ignorées; clé absente => pas d'override.
    """
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"query limits header is not valid JSON: {e.msg}") from e
    if not isinstance(payload, dict):
        raise ValueError("query limits header must be a JSON object")

    values = {}
    for dimension, key in DIMENSION_TO_HEADER_KEY.items():
        if key not in payload or payload[key] is None:
            continue
        raw_value = payload[key]
        if dimension in DURATION_DIMENSIONS:
            values[dimension] = parse_duration(raw_value)
        else:
            if isinstance(raw_value, bool) or not isinstance(raw_value, int):
                raise ValueError(f"{key} must be an integer")
            values[dimension] = raw_value
    return QueryLimits(**values)


def format_query_limits_header(limits: QueryLimits) -> str:
    payload = {
        DIMENSION_TO_HEADER_KEY[d]: format_value(d, limits.value(d))
        for d in limits.overridden()
    }
    return json.dumps(payload, separators=(",", ":"))
