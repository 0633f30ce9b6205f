import os

import uvicorn

from college_scorecard.config import settings
from college_scorecard.scorecard_api import api_key_problem
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="server")


def warn_on_missing_api_key() -> None:
    """
    Log a clear message at startup if the data.gov key is missing or a placeholder.
    Requests still start; search and lookup answer 503 until a key is set
    via SCORECARD_API_KEY.
    """
    problem = api_key_problem(settings.api_key)
    if problem:
        logger.warning("%s; set SCORECARD_API_KEY before calling the API.", problem)


if __name__ == "__main__":
    warn_on_missing_api_key()

    uvicorn.run(
        "college_scorecard.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
