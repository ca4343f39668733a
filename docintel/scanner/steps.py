from docintel.analysis.base import BaseStructuralAnalyzer
from docintel.extraction.text_extractor import TextExtractor
from docintel.logging.logger import Log
from docintel.scanner.pipeline import ScanContext, ScanState, ScanStep
from docintel.scoring.compiler import ScoreCompiler


class ExtractTextStep(ScanStep):
    state = ScanState.EXTRACTING

    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: ScanContext) -> ScanContext:
        context.extracted_text = self._text_extractor.extract_file(
            context.file_path, context.mime_type
        )
        Log.info(
            f"Scan {context.document_id}: extracted {len(context.extracted_text)} chars"
        )
        return context


class AnalyzeStep(ScanStep):
    state = ScanState.ANALYZING

    def __init__(self, analyzer: BaseStructuralAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: ScanContext) -> ScanContext:
        context.analysis = self._analyzer.analyze(context.extracted_text)
        return context


class CompileStep(ScanStep):
    state = ScanState.COMPILING

    def __init__(self, compiler: ScoreCompiler) -> None:
        self._compiler = compiler

    def run(self, context: ScanContext) -> ScanContext:
        if context.analysis is None:
            raise ValueError("ScanContext.analysis must be set before compiling")
        context.result = self._compiler.compile_analysis(
            context.document_id,
            context.analysis,
            elapsed_ms=context.elapsed_ms(),
        )
        Log.info(
            f"Scan {context.document_id}: score {context.result.total_score}, "
            f"tier {context.result.risk_tier.value}, "
            f"recommendation {context.result.recommendation.value}"
        )
        return context
