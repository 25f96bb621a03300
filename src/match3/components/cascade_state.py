from dataclasses import dataclass


@dataclass(slots=True)
class CascadeState:
    """Progress of the cascade started by the most recent move."""

    cascade_active: bool = False
    cascade_depth: int = 0
    matches_resolved: int = 0
