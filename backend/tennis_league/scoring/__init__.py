"""League points tables used by the standings calculator."""

from .points import (
    NO_POINTS,
    POINTS_TABLES,
    PointsFunction,
    PointsTable,
    SetBasedPoints,
    WinLossPoints,
    count_sets,
    get_points_table,
    points_for_player,
)

__all__ = [
    "NO_POINTS",
    "POINTS_TABLES",
    "PointsFunction",
    "PointsTable",
    "SetBasedPoints",
    "WinLossPoints",
    "count_sets",
    "get_points_table",
    "points_for_player",
]
