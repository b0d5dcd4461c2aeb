"""Tkinter GUI for the triangulation grid overlay.

The window is a fixed-size canvas plus a small control row:

  * drag with the left button to place a rectangular structure,
  * double-click a cell to delete every structure covering it,
  * tick "Probe" to mark a free pixel location instead of placing structures,
  * "Clear" removes all structures, the heatmap and the probe marker.

Tk events are translated into engine events by ``events_for_tk`` and fed to
a single ``SelectionStateMachine``. After every dispatch the returned
snapshot is painted by ``GridRenderer`` and swapped onto the canvas.
Everything runs on the Tk main loop; each event (including the heatmap
recompute) finishes before the next is processed.
"""

from __future__ import annotations

import argparse
import logging
import sys
import tkinter as tk
from tkinter import messagebox, ttk

from PIL import ImageTk

from ..engine.config_io import load_config, save_config
from ..engine.geometry import GridGeometry
from ..engine.session import SelectionStateMachine, SessionSnapshot
from ..engine.types import (
    ClearRequested,
    DoubleClick,
    Event,
    ModeToggle,
    OverlayConfig,
    PointerDown,
    PointerMove,
    PointerUp,
)
from ..logging_config import setup_logging
from .render import GridRenderer

logger = logging.getLogger(__name__)

_TK_EVENT_KINDS = ("motion", "press", "release", "double")


def events_for_tk(kind: str, x: float, y: float) -> list[Event]:
    """Translate one Tk canvas event into the engine events it implies.

    Button events carry their own coordinates, so the pointer is moved there
    before the button event is dispatched.
    """
    if kind == "motion":
        return [PointerMove(x, y)]
    if kind == "press":
        return [PointerMove(x, y), PointerDown()]
    if kind == "release":
        return [PointerMove(x, y), PointerUp()]
    if kind == "double":
        return [PointerMove(x, y), DoubleClick()]
    raise ValueError(
        f"Unknown Tk event kind {kind!r}; expected one of {_TK_EVENT_KINDS}"
    )


class App:
    def __init__(self, config: OverlayConfig | None = None):
        self.config = config if config is not None else OverlayConfig()
        self.geometry = GridGeometry(self.config.grid)
        self.machine = SelectionStateMachine(
            self.geometry, self.config.targeting
        )
        self.renderer = GridRenderer(
            self.geometry, self.config.probe_radius_cells
        )

        self.root = tk.Tk()
        self.root.title("Triangulator")
        self.root.resizable(False, False)

        style = ttk.Style()
        style.theme_use("clam")

        self.canvas = tk.Canvas(
            self.root,
            width=self.geometry.width,
            height=self.geometry.height,
            highlightthickness=0,
        )
        self.canvas.pack(side=tk.TOP, padx=5, pady=5)

        controls = ttk.Frame(self.root, padding=(5, 2))
        controls.pack(side=tk.BOTTOM, fill=tk.X)

        ttk.Button(controls, text="Clear", command=self._on_clear).pack(
            side=tk.LEFT
        )
        self.probe_var = tk.BooleanVar(value=False)
        ttk.Checkbutton(
            controls,
            text="Probe",
            variable=self.probe_var,
            command=self._on_probe_toggled,
        ).pack(side=tk.LEFT, padx=(10, 0))
        self.status_label = ttk.Label(controls, text="")
        self.status_label.pack(side=tk.RIGHT)

        self._photo = None  # prevent GC

        self.canvas.bind("<Motion>", lambda e: self._on_canvas("motion", e))
        self.canvas.bind("<B1-Motion>", lambda e: self._on_canvas("motion", e))
        self.canvas.bind(
            "<ButtonPress-1>", lambda e: self._on_canvas("press", e)
        )
        self.canvas.bind(
            "<ButtonRelease-1>", lambda e: self._on_canvas("release", e)
        )
        self.canvas.bind(
            "<Double-Button-1>", lambda e: self._on_canvas("double", e)
        )

        self._show(self.machine.snapshot())

    # -- event handling --

    def _dispatch(self, events: list[Event]) -> None:
        snapshot = None
        for event in events:
            snapshot = self.machine.dispatch(event)
        if snapshot is not None:
            self._show(snapshot)

    def _on_canvas(self, kind, event):
        self._dispatch(events_for_tk(kind, event.x, event.y))

    def _on_probe_toggled(self):
        self._dispatch([ModeToggle(bool(self.probe_var.get()))])

    def _on_clear(self):
        self._dispatch([ClearRequested()])

    # -- rendering --

    def _show(self, snapshot: SessionSnapshot) -> None:
        img = self.renderer.render(snapshot)
        self._photo = ImageTk.PhotoImage(img)
        self.canvas.delete("all")
        self.canvas.create_image(0, 0, image=self._photo, anchor="nw")
        self.status_label.config(text=_status_text(snapshot))

    def run(self):
        self.root.mainloop()


def _status_text(snapshot: SessionSnapshot) -> str:
    parts = [f"Structures: {len(snapshot.structures)}"]
    if snapshot.heatmap:
        best = max(s.score for s in snapshot.heatmap)
        parts.append(f"Candidates: {len(snapshot.heatmap)} (best {best:.2f})")
    if snapshot.selected_cell is not None:
        c = snapshot.selected_cell
        parts.append(f"Cell: ({c.x_index}, {c.y_index})")
    return "  ".join(parts)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Grid overlay for triangulating a hidden target."
    )
    parser.add_argument(
        "--config", help="JSON file with grid and targeting settings"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument(
        "--save-config",
        metavar="PATH",
        help="Write the effective settings to PATH as JSON and exit",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    config = OverlayConfig()
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as e:
            logger.error("Could not load config %s: %s", args.config, e)
            messagebox.showerror("Config Error", str(e))
            sys.exit(1)

    if args.save_config:
        save_config(config, args.save_config)
        logger.info("Wrote config to %s", args.save_config)
        return

    grid = config.grid
    logger.info(
        "Starting overlay: %dx%d px, %dx%d cells",
        grid.canvas_width,
        grid.canvas_height,
        grid.cells_x,
        grid.cells_y,
    )
    App(config).run()


if __name__ == "__main__":
    main()
