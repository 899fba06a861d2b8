import logging

from opentelemetry import trace

from .config import EngagespotSettings


_NO_TRACE = "-"
_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | trace_id=%(trace_id)s span_id=%(span_id)s | %(message)s"


class TraceContextFilter(logging.Filter):
    """Attach the active OpenTelemetry trace/span ids to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            record.trace_id = format(span_context.trace_id, "032x")
            record.span_id = format(span_context.span_id, "016x")
        else:
            record.trace_id = _NO_TRACE
            record.span_id = _NO_TRACE
        return True


def _has_trace_filter(filterer: logging.Filterer) -> bool:
    return any(isinstance(f, TraceContextFilter) for f in filterer.filters)


def configure_logging(settings: EngagespotSettings) -> None:
    """Configure root logging level and format, adding trace ids to each handler."""

    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)
    root_logger = logging.getLogger()
    context_filter = TraceContextFilter()
    if not _has_trace_filter(root_logger):
        root_logger.addFilter(context_filter)
    for handler in root_logger.handlers:
        if not _has_trace_filter(handler):
            handler.addFilter(context_filter)
