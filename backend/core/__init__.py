# Core module exports
from core.config import settings, get_settings
from core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    engine_logger,
    qa_logger,
    adaptive_logger,
)
