from burrow.engine.loader.loader import (
    EXAMPLE,
    EXTENDED_EXAMPLE,
    PuzzleFormatError,
    PuzzleLoader,
)

__all__ = ["EXAMPLE", "EXTENDED_EXAMPLE", "PuzzleFormatError", "PuzzleLoader"]
