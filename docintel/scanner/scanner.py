"""Scan orchestration: extract, analyze, compile, always clean up."""

from pathlib import Path

from docintel.analysis.factory import AnalyzerFactory
from docintel.config.settings import Settings
from docintel.extraction.factory import ExtractorFactory
from docintel.logging.logger import Log
from docintel.scanner.pipeline import ScanContext, ScanState, ScanStep
from docintel.scanner.steps import AnalyzeStep, CompileStep, ExtractTextStep
from docintel.scoring.compiler import ScoreCompiler
from docintel.scoring.models import ScanResult


class DocumentScanner:
    """Runs the scan state machine over a temporary upload.

    The upload file is owned by the scan and is deleted on every exit path.
    A ScanResult is returned only when the scan reaches COMPLETE; otherwise
    the originating error propagates.
    """

    def __init__(self, steps: list[ScanStep]) -> None:
        self._steps = steps

    def scan(self, document_id: str, file_path: Path, mime_type: str) -> ScanResult:
        context = ScanContext(
            document_id=document_id,
            file_path=Path(file_path),
            mime_type=mime_type,
        )
        return self.run(context)

    def run(self, context: ScanContext) -> ScanResult:
        Log.info(f"Scan {context.document_id}: started ({context.mime_type})")
        try:
            for step in self._steps:
                context.transition(step.state)
                context = step.run(context)
            if context.result is None:
                raise ValueError(f"Scan {context.document_id} finished without a result")
            context.transition(ScanState.COMPLETE)
            Log.info(f"Scan {context.document_id}: complete in {context.elapsed_ms()} ms")
            return context.result
        except Exception as exc:
            failed_in = context.state.value
            context.error_message = str(exc)
            context.result = None
            if context.state is not ScanState.FAILED:
                context.state = ScanState.FAILED
                context.history.append(ScanState.FAILED)
            Log.error(f"Scan {context.document_id}: failed while {failed_in}: {exc}")
            raise
        finally:
            _remove_temp_file(context)


def _remove_temp_file(context: ScanContext) -> None:
    try:
        context.file_path.unlink(missing_ok=True)
    except OSError as exc:
        Log.warning(
            f"Scan {context.document_id}: could not remove temp file "
            f"{context.file_path}: {exc}"
        )


def build_scanner(settings: Settings) -> DocumentScanner:
    """Build a DocumentScanner with the configured adapters."""
    text_extractor = ExtractorFactory.create(settings, allow_plain_text=False)
    analyzer = AnalyzerFactory.create(settings)
    return DocumentScanner(
        steps=[
            ExtractTextStep(text_extractor),
            AnalyzeStep(analyzer),
            CompileStep(ScoreCompiler()),
        ]
    )
