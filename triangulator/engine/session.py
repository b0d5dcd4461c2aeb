"""Pointer/mode events -> structure placement, deletion and probe marking.

``SelectionStateMachine`` is the single owner of all mutable overlay state:
the structure registry, the current heatmap, the probe flag and point, the
last known pointer position and the interaction state (``Idle`` or
``Dragging(anchor)``). Nothing else writes these fields; the renderer only
ever sees the immutable ``SessionSnapshot`` returned by ``dispatch``.

Transitions:

  * ``PointerMove`` updates the pointer; while dragging, the snapshot carries
    a live preview rectangle from the anchor to the current cell.
  * ``PointerDown`` (probe off, idle) anchors a drag at the current cell.
  * ``PointerUp`` (probe off, dragging) commits ``Structure(anchor, cell)``.
  * ``DoubleClick`` removes every structure containing the current cell and
    forces ``Idle``, cancelling any drag.
  * ``PointerDown``/``PointerUp`` with probe on move the probe point instead.
  * ``ModeToggle`` flips probe mode. Turning it on abandons a drag; turning it
    off leaves the probe point where it was.
  * ``ClearRequested`` empties everything and returns to ``Idle``.

Each event is handled to completion, including the heatmap recompute after
any registry change, before ``dispatch`` returns. The heatmap is always
computed from a registry snapshot taken after the mutation; the remaining
fields are built in locals and committed together at the end of the handler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from .geometry import GridGeometry
from .registry import StructureRegistry
from .targeting import compute_heatmap
from .types import (
    CellIndex,
    ClearRequested,
    DoubleClick,
    Dragging,
    Event,
    HeatmapSample,
    Idle,
    InteractionState,
    ModeToggle,
    PixelPoint,
    PointerDown,
    PointerMove,
    PointerUp,
    Structure,
    TargetingParams,
)

logger = logging.getLogger(__name__)

HeatmapFn = Callable[
    [Sequence[Structure], GridGeometry, TargetingParams],
    list[HeatmapSample],
]


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the renderer needs after one event, frozen."""

    selected_cell: CellIndex | None
    interaction: InteractionState
    structures: tuple[Structure, ...]
    heatmap: tuple[HeatmapSample, ...]
    probe_mode: bool
    probe_point: PixelPoint | None
    preview: Structure | None = None


class SelectionStateMachine:
    def __init__(
        self,
        geometry: GridGeometry,
        params: TargetingParams | None = None,
        heatmap_fn: HeatmapFn = compute_heatmap,
    ) -> None:
        self.geometry = geometry
        self.params = params if params is not None else TargetingParams()
        self._heatmap_fn = heatmap_fn
        self.registry = StructureRegistry()
        self._heatmap: tuple[HeatmapSample, ...] = ()
        self._interaction: InteractionState = Idle()
        self._probe_mode = False
        self._probe_point: PixelPoint | None = None
        self._pointer: PixelPoint | None = None

    def _cell_at(self, pointer: PixelPoint | None) -> CellIndex | None:
        if pointer is None:
            return None
        return self.geometry.pixel_to_cell(pointer.x, pointer.y)

    @property
    def current_cell(self) -> CellIndex | None:
        return self._cell_at(self._pointer)

    def _recompute(self, structures: Sequence[Structure]) -> tuple:
        return tuple(self._heatmap_fn(structures, self.geometry, self.params))

    def dispatch(self, event: Event) -> SessionSnapshot:
        """Apply one input event and recompute the heatmap if needed.

        Args:
            event: Any of the six event kinds from ``types.py``.

        Returns:
            The frozen state after the event.

        Raises:
            TypeError: if ``event`` is not a known event kind.
        """
        interaction = self._interaction
        probe_mode = self._probe_mode
        probe_point = self._probe_point
        pointer = self._pointer
        heatmap = self._heatmap

        if isinstance(event, PointerMove):
            pointer = PixelPoint(event.x, event.y)

        elif isinstance(event, (PointerDown, PointerUp)):
            cell = self._cell_at(pointer)
            if pointer is None or cell is None:
                # no position seen yet
                pass
            elif probe_mode:
                # probe and placement are mutually exclusive
                probe_point = pointer
            elif isinstance(event, PointerDown):
                if isinstance(interaction, Idle):
                    interaction = Dragging(anchor=cell)
            elif isinstance(interaction, Dragging):
                structure = Structure(start=interaction.anchor, end=cell)
                self.registry.add(structure)
                logger.debug("Committed structure %s", structure)
                heatmap = self._recompute(self.registry.snapshot())
                interaction = Idle()

        elif isinstance(event, DoubleClick):
            cell = self._cell_at(pointer)
            if cell is not None:
                before = len(self.registry)
                remaining = self.registry.remove_containing(cell)
                logger.debug(
                    "Removed %d structure(s) containing %s",
                    before - len(remaining),
                    cell,
                )
                heatmap = self._recompute(remaining)
            interaction = Idle()

        elif isinstance(event, ModeToggle):
            probe_mode = event.probe
            if probe_mode and isinstance(interaction, Dragging):
                interaction = Idle()

        elif isinstance(event, ClearRequested):
            self.registry.clear()
            logger.debug("Cleared all structures")
            heatmap = ()
            probe_point = None
            interaction = Idle()

        else:
            raise TypeError(f"Unknown event: {event!r}")

        self._interaction = interaction
        self._probe_mode = probe_mode
        self._probe_point = probe_point
        self._pointer = pointer
        self._heatmap = heatmap
        return self.snapshot()

    def snapshot(self) -> SessionSnapshot:
        cell = self.current_cell
        preview = None
        if isinstance(self._interaction, Dragging) and cell is not None:
            preview = Structure(start=self._interaction.anchor, end=cell)
        return SessionSnapshot(
            selected_cell=cell,
            interaction=self._interaction,
            structures=self.registry.snapshot(),
            heatmap=self._heatmap,
            probe_mode=self._probe_mode,
            probe_point=self._probe_point,
            preview=preview,
        )
