import threading
import time

import psutil
from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.middleware_factory import lambda_handler_decorator

# Initialize logger once at import
logger = Logger(service="sigstamp")


def describe_event(event) -> dict:
    """Summarize a command event without its binary payloads."""
    if isinstance(event, dict):
        return {
            "type": event.get("type"),
            "fields": sorted(k for k in event if k != "type"),
        }
    return {"type": getattr(event, "type", type(event).__name__)}


@lambda_handler_decorator
def logging_middleware(handler, event, context):
    """Middleware to automatically handle structured logging of session commands."""
    vm_start = psutil.virtual_memory()
    system_info_start = {
        "memory_available_mb": vm_start.available // (1024 * 1024),
        "memory_percent_used": vm_start.percent,
        "active_threads": threading.active_count(),
    }
    logger.info(
        "Received command",
        extra={"command": describe_event(event), "system_info": system_info_start},
    )

    started = time.perf_counter()
    try:
        response = handler(event, context)

        vm_end = psutil.virtual_memory()
        logger.info(
            "Command executed",
            extra={
                "command": describe_event(event),
                "ok": getattr(response, "ok", None),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                "system_info": {
                    "memory_available_mb": vm_end.available // (1024 * 1024),
                    "memory_percent_used": vm_end.percent,
                },
            },
        )
        return response
    except Exception:
        logger.exception("Error processing command")
        # Re-raise the exception to be handled by the error handler middleware
        raise
