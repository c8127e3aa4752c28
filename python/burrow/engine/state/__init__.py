from burrow.engine.state.state import State

__all__ = ["State"]
