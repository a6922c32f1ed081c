# Core module exports
from core.config import get_settings
from core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    unbind_context,
    generate_request_id,
    with_request_id,
    api_logger,
    validation_logger,
    auth_logger,
)
