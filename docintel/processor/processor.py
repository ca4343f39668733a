from pathlib import Path

from docintel.chunking.chunker import Chunker
from docintel.config.settings import Settings
from docintel.database.repositories.chunk_repository import ChunkRepository
from docintel.database.repositories.documents_repository import DocumentsRepository
from docintel.embedding.factory import EmbedderFactory
from docintel.extraction.factory import ExtractorFactory
from docintel.logging.logger import Log
from docintel.processor.file_loader import FileLoader
from docintel.processor.pipeline import DocumentContext, PipelineStep
from docintel.processor.steps import (
    ExtractTextStep,
    IndexChunksStep,
    LoadDocumentStep,
    MarkDocumentFailedStep,
    MarkDocumentProcessedStep,
    ReplaceChunksStep,
)
from docintel.retrieval.chunk_store import ChunkStore


class DocumentProcessor:
    """Orchestrates the knowledge-base indexing pipeline.

    Pipeline: load -> extract -> drop old chunks -> chunk and embed -> mark processed.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, document_id: int, job_id: int) -> list[int]:
        """Run the pipeline for a document and return the stored chunk IDs."""
        Log.info(f"Processing document {document_id} for job {job_id}")
        context = DocumentContext(document_id=document_id, job_id=job_id)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            self._failed_step.run(context)
            raise
        return context.chunk_ids


def build_processor(
    settings: Settings,
    files_root: Path | None = None,
) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters."""
    file_loader = FileLoader(files_root=files_root or settings.files_root)
    doc_repo = DocumentsRepository()
    chunk_store = ChunkStore(
        chunker=Chunker(settings.chunk_size, settings.chunk_overlap),
        embedder=EmbedderFactory.create(settings),
        chunk_repo=ChunkRepository(),
    )
    steps: list[PipelineStep] = [
        LoadDocumentStep(file_loader=file_loader, doc_repo=doc_repo),
        ExtractTextStep(ExtractorFactory.create(settings)),
        ReplaceChunksStep(chunk_store),
        IndexChunksStep(chunk_store),
        MarkDocumentProcessedStep(doc_repo),
    ]
    return DocumentProcessor(steps=steps, failed_step=MarkDocumentFailedStep(doc_repo))
