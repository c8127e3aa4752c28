from burrow.models.grid import Grid
from burrow.models.pieces import ROOM_COLUMNS, Cell, Kind

__all__ = ["Cell", "Grid", "Kind", "ROOM_COLUMNS"]
