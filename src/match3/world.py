from esper import World

from match3.components.board import BoardGrid
from match3.components.cascade_state import CascadeState


def create_world(rows: int, cols: int) -> World:
    """Create the world backing one board: a BoardGrid entity and the shared CascadeState.

    Cell entities are added by ``board_ops.populate_board``.
    """
    world = World()
    world.create_entity(BoardGrid(rows=rows, cols=cols))
    world.create_entity(CascadeState())
    return world
