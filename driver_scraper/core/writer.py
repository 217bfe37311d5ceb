"""
JSON output of the scraped driver list.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from ..models import DriverRecord


class JsonWriter:
    """Writes driver records to a JSON file."""

    def __init__(self, indent: int = 4, logger: Optional[logging.Logger] = None):
        self.indent = indent
        self.logger = logger or logging.getLogger(__name__)

    def dumps(self, records: List[DriverRecord]) -> str:
        """Serialize records in their given order."""
        return json.dumps([record.to_dict() for record in records], indent=self.indent, ensure_ascii=False)

    def write(self, records: List[DriverRecord], path: str) -> Path:
        """
        Write records to ``path``, creating missing parent directories.

        Args:
            records: Records in output order
            path: Destination file

        Returns:
            Path that was written
        """
        output_path = Path(path)
        self.logger.info(f"Saving {len(records)} records to {output_path}...")
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.dumps(records))

        return output_path
