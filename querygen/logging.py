"""Log setup for command-line runs.

Records may carry a ``schema`` field naming the schema container the
run works on; records without one show ``-``.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [schema=%(schema)s] - %(message)s"


class SchemaContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "schema"):
            record.schema = "-"
        return super().format(record)


def configure_logging(level: int = logging.INFO) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SchemaContextFormatter(LOG_FORMAT))
    logging.basicConfig(level=level, handlers=[handler])
