"""Application entry point for the QuizBank service."""

from __future__ import annotations

from quizbank.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quizbank.core.catalog_seed import create_sample_store
from quizbank.core.quiz_manager import QuizManager
from quizbank.server.api_server import run_api_server
from quizbank.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, seed the catalog and serve the API."""
    logger = configure_logging()
    logger.info("Starting QuizBank service…")

    catalog = create_sample_store()
    logger.info(
        "Catalog loaded: %d subjects",
        len(catalog.list_subjects()),
    )
    quiz_manager = QuizManager(catalog=catalog)
    logger.info("API available at http://%s:%d/api/subjects", DEFAULT_HOST, DEFAULT_PORT)
    run_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)


if __name__ == "__main__":
    main()
