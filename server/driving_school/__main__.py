"""
Run the API server.

    python -m driving_school
"""
import sys

from driving_school.config import settings
from driving_school.lifecycle import serve
from driving_school.logger import setup_logger


def main() -> int:
    setup_logger(level=settings.log_level)
    return serve(settings)


if __name__ == "__main__":
    sys.exit(main())
