# utils/walk_visualizer.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Graphviz rendering of the emitted part of a commit graph

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

from model.cursor import Cursor
from model.object_id import ObjectId
from utils.logger import get_logger

# Conditional import of graphviz
try:
    from graphviz import Digraph

    GRAPHVIZ_AVAILABLE = True
except ImportError:
    GRAPHVIZ_AVAILABLE = False

if TYPE_CHECKING:
    from store.base import NodeStore

logger = get_logger()

ROLLOVER_COLOR = "palegreen"
OFFSET_COLOR = "lightgrey"


def build_walk_graph(emitted: Sequence[Tuple[Cursor, ObjectId]], store: "NodeStore") -> "Digraph":
    """
    Build a Digraph of the emitted records, newest at the top. Each node is
    labelled with its emission index, short id and printed cursor; nodes
    whose cursor starts a fresh root (offset 0) are highlighted. Edges point
    from a record to those of its parents that were also emitted, so a
    skipped or truncated walk draws only what was printed.
    """
    dot = Digraph(comment="cursorlog walk", format="dot")
    dot.attr(rankdir="TB", nodesep="0.4", ranksep="0.4")
    dot.attr("node", shape="box", style="filled", fontname="monospace", fontsize="10")

    emitted_ids = {oid for _, oid in emitted}

    for index, (cursor, oid) in enumerate(emitted):
        color = ROLLOVER_COLOR if cursor.offset == 0 else OFFSET_COLOR
        label = f"#{index} {oid.short()}\n{cursor.root.short()}+{cursor.offset}"
        dot.node(oid.hex(), label, fillcolor=color)

    for _, oid in emitted:
        record = store.fetch(oid)
        for position, parent in enumerate(record.parents):
            if parent not in emitted_ids:
                continue
            # first-parent edges solid, merged-in parents dashed
            style = "solid" if position == 0 else "dashed"
            dot.edge(oid.hex(), parent.hex(), style=style)

    return dot


def render_walk_graph(
    emitted: Sequence[Tuple[Cursor, ObjectId]],
    store: "NodeStore",
    output_path: Path,
    fmt: str = "dot",
) -> Optional[Path]:
    """
    Write the walk graph to `output_path`. The "dot" format saves Graphviz
    source and needs no Graphviz executables; any other format is rendered
    with the `dot` binary and saved next to `output_path` with the format's
    extension.

    Returns:
        Path of the written file, or None if graphviz is unavailable or
        rendering failed
    """
    if not GRAPHVIZ_AVAILABLE:
        logger.warning("Graphviz library not installed. Skipping walk graph. "
                       "To enable, install graphviz: pip install graphviz")
        return None

    dot = build_walk_graph(emitted, store)
    output_path = Path(output_path)

    if fmt == "dot":
        written = Path(dot.save(filename=output_path.name, directory=str(output_path.parent)))
        logger.info(f"Walk graph source saved to {written}")
        return written

    try:
        dot.format = fmt
        written = Path(dot.render(str(output_path), view=False, cleanup=True))
    except Exception as e:
        logger.warning(f"Failed to render walk graph to {output_path}.{fmt}: {e}. "
                       "Ensure Graphviz executables (dot) are in your system's PATH.")
        return None

    logger.info(f"Walk graph saved to {written}")
    return written

