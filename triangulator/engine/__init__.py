from .geometry import GridGeometry
from .registry import StructureRegistry
from .session import SelectionStateMachine, SessionSnapshot
from .targeting import compute_heatmap

__all__ = [
    "GridGeometry",
    "SelectionStateMachine",
    "SessionSnapshot",
    "StructureRegistry",
    "compute_heatmap",
]
