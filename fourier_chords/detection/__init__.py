"""Detection layer - Turns a live sample stream into note names.

- Engine configuration
- Note resolution against the note table
- Streaming engine (accumulate, analyze, publish)
- Presentation hand-off (latest-notes mailbox, diagnostic log)
"""

from .config import EngineConfig
from .resolver import NoteResolver
from .mailbox import NoteMailbox, NoteSnapshot, DiagnosticLog
from .engine import NoteDetectionEngine, EngineState, PassContext, PassResult

__all__ = [
    "EngineConfig",
    "NoteResolver",
    "NoteMailbox",
    "NoteSnapshot",
    "DiagnosticLog",
    "NoteDetectionEngine",
    "EngineState",
    "PassContext",
    "PassResult",
]
