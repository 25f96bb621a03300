import sys, os

# Ensure src and the repo root are on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from tests.helpers import EventRecorder, ScriptedGenerator, scripted_board

__all__ = [
    "EventRecorder",
    "ScriptedGenerator",
    "scripted_board",
]
