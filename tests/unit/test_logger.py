import io
import logging

from docintel.logging.logger import Log


class TestLog:
    def test_configure_sets_level_once(self) -> None:
        Log.configure("debug")
        Log.configure("warning")
        logger = logging.getLogger("docintel")
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_messages_use_configured_format(self) -> None:
        Log.configure("info")
        handler = logging.getLogger("docintel").handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        stream = io.StringIO()
        previous = handler.setStream(stream)
        try:
            Log.info("Document 7 processed")
            Log.debug("hidden")
        finally:
            handler.setStream(previous)
        output = stream.getvalue()
        assert "[INFO] Document 7 processed" in output
        assert "hidden" not in output
