"""External engine package: UCI protocol helpers and the Qt process bridge."""

from chesstui.engine.qt_bridge import UciProcess
from chesstui.engine.search import Evaluation, IEngine, NoopEngine

__all__ = [
    "Evaluation",
    "IEngine",
    "NoopEngine",
    "UciProcess",
]
