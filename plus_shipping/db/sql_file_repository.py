"""
File system sink for generated SQL.
"""

import logging
from pathlib import Path
from typing import Optional

from plus_shipping.core.config import get_settings

logger = logging.getLogger(__name__)


class FileSystemSQLRepository:
    """Writes SQL text to ``<output_dir>/<filename>`` as UTF-8."""

    def __init__(self, default_output_dir: Optional[str | Path] = None):
        self.default_output_dir = Path(default_output_dir or get_settings().SQL_OUTPUT_DIR)

    def save(self, sql: str, filename: str, output_dir: Optional[str | Path] = None) -> Path:
        """
        Save SQL to a file, creating the directory if needed.

        Existing files are overwritten.

        Returns:
            Path: Path of the written file
        """
        directory = Path(output_dir) if output_dir else self.default_output_dir
        directory.mkdir(parents=True, exist_ok=True)

        filepath = directory / filename
        filepath.write_text(sql, encoding="utf-8")

        logger.info(f"SQL written to {filepath} ({len(sql.encode('utf-8'))} bytes)")
        return filepath
