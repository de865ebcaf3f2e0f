"""Grid generation and resolution refinement."""

from boscora_lib.grid.generator import filter_intersecting, generate_grid, make_square_grid
from boscora_lib.grid.refiner import RefinementResult, initial_side_km, refine_grid

__all__ = [
    "make_square_grid",
    "filter_intersecting",
    "generate_grid",
    "RefinementResult",
    "initial_side_km",
    "refine_grid",
]
