from burrow.engine.solver.solver import SearchOptions, SearchResult, Solver

__all__ = ["SearchOptions", "SearchResult", "Solver"]
