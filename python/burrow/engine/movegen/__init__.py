from burrow.engine.movegen.generator import Move, MoveGenerator

__all__ = ["Move", "MoveGenerator"]
