"""Generation errors.

Bounded integer errors live in :mod:`cavern.dungeon.bounded_int`; this module
covers failures of the generation pipeline itself.
"""


class GenerationFailed(RuntimeError):
    """A floor could not be generated from the current random state."""

    def __init__(self, message: str, attempts: int | None = None):
        self.attempts = attempts
        super().__init__(message if attempts is None else f"{message} (after {attempts} attempts)")


class NoPathFound(GenerationFailed):
    def __init__(self, start, goal):
        self.start = start
        self.goal = goal
        super().__init__(f"no path found from {tuple(start)} to {tuple(goal)}")


class BuilderConsumed(RuntimeError):
    """A floor builder was used after it already transitioned to its next state."""


__all__ = ["GenerationFailed", "NoPathFound", "BuilderConsumed"]
