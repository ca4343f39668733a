from docintel.database.repositories.documents_repository import DocumentsRepository
from docintel.extraction.text_extractor import TextExtractor
from docintel.logging.logger import Log
from docintel.processor.file_loader import FileLoader
from docintel.processor.pipeline import DocumentContext, PipelineStep
from docintel.retrieval.chunk_store import ChunkStore


class LoadDocumentStep(PipelineStep):
    def __init__(self, file_loader: FileLoader, doc_repo: DocumentsRepository) -> None:
        self._file_loader = file_loader
        self._doc_repo = doc_repo

    def run(self, context: DocumentContext) -> DocumentContext:
        document = self._doc_repo.find_by_id(context.document_id)
        context.document = document
        context.raw_bytes = self._file_loader.load(document)
        Log.info(f"Loaded {len(context.raw_bytes)} bytes for document {context.document_id}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: DocumentContext) -> DocumentContext:
        if context.document is None:
            raise ValueError("DocumentContext.document must be set before extraction")
        context.extracted_text = self._text_extractor.extract(
            context.raw_bytes, context.document.mime_type
        )
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from document {context.document_id}"
        )
        return context


class ReplaceChunksStep(PipelineStep):
    """Drops chunks left over from an earlier run of the same document."""

    def __init__(self, chunk_store: ChunkStore) -> None:
        self._chunk_store = chunk_store

    def run(self, context: DocumentContext) -> DocumentContext:
        context.deleted_chunks = self._chunk_store.delete_document_chunks(context.document_id)
        return context


class IndexChunksStep(PipelineStep):
    def __init__(self, chunk_store: ChunkStore) -> None:
        self._chunk_store = chunk_store

    def run(self, context: DocumentContext) -> DocumentContext:
        context.chunk_ids = self._chunk_store.process_document(
            context.document_id, context.extracted_text
        )
        return context


class MarkDocumentProcessedStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: DocumentContext) -> DocumentContext:
        self._doc_repo.mark_processed(context.document_id)
        Log.info(
            f"Document {context.document_id} processed: {len(context.chunk_ids)} chunks"
        )
        return context


class MarkDocumentFailedStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: DocumentContext) -> DocumentContext:
        # Nothing to stamp when the record itself could not be loaded.
        if context.document is not None:
            self._doc_repo.mark_processed(context.document_id, error=context.error_message)
        Log.error(f"Document {context.document_id} failed: {context.error_message}")
        return context
