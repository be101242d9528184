"""Error handling helpers for catalogue operations that failed on every backend."""
from typing import Any, Dict
import logging

from src.integrations.contracts.interfaces import ProductNotFoundError
from src.integrations.contracts.outcomes import Failed

logger = logging.getLogger(__name__)


class ErrorHandler:
    def status_code_for(self, failed: Failed) -> int:
        if isinstance(failed.error, ProductNotFoundError):
            return 404
        return 502

    def handle_failure(self, failed: Failed, operation: str) -> Dict[str, Any]:
        if isinstance(failed.error, ProductNotFoundError):
            logger.info("Catalogue %s: %s", operation, failed.error)
            return {
                "error": "not_found",
                "message": str(failed.error),
                "metadata": {"operation": operation, "product_id": failed.error.product_id},
            }

        logger.error("Catalogue %s failed on every backend: %s", operation, failed.error, exc_info=failed.error)
        return {
            "error": "storage_unavailable",
            "message": "The catalogue could not be updated. Please try again later.",
            "metadata": {
                "operation": operation,
                "error": str(failed.error),
                "remote_error": str(failed.remote_error) if failed.remote_error else None,
            },
        }
