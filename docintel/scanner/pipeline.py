import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar

from docintel.analysis.models import StructuralAnalysis
from docintel.scoring.models import ScanResult


class ScanState(str, Enum):
    RECEIVED = "received"
    EXTRACTING = "extracting"
    ANALYZING = "analyzing"
    COMPILING = "compiling"
    COMPLETE = "complete"
    FAILED = "failed"


TERMINAL_STATES = frozenset({ScanState.COMPLETE, ScanState.FAILED})


@dataclass(slots=True)
class ScanContext:
    document_id: str
    file_path: Path
    mime_type: str
    state: ScanState = ScanState.RECEIVED
    history: list[ScanState] = field(default_factory=lambda: [ScanState.RECEIVED])
    extracted_text: str = ""
    analysis: StructuralAnalysis | None = None
    result: ScanResult | None = None
    started_at: float = field(default_factory=time.monotonic)
    error_message: str = ""

    def transition(self, state: ScanState) -> None:
        """Move to a new state. FAILED and COMPLETE are absorbing."""
        if self.state in TERMINAL_STATES:
            raise ValueError(f"Scan {self.document_id} is already {self.state.value}")
        self.state = state
        self.history.append(state)

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.started_at) * 1000)


class ScanStep(ABC):
    """One stage of a scan, run while the context is in ``state``."""

    state: ClassVar[ScanState]

    @abstractmethod
    def run(self, context: ScanContext) -> ScanContext:
        raise NotImplementedError
