# =============================================================================
# utils/csv_utils.py - Credentials report writer
# =============================================================================

import csv
from typing import List, Dict, Any, Optional
import logging


class CSVHandler:
    """CSV output for provisioning reports"""

    @staticmethod
    def write_csv(data: List[Dict[str, Any]], output_path: str,
                  fieldnames: Optional[List[str]] = None) -> None:
        logger = logging.getLogger(__name__)

        if not data:
            logger.warning(f"No accounts to write, {output_path} not created")
            return

        with open(output_path, 'w', newline='', encoding='utf-8') as file:
            writer = csv.DictWriter(file, fieldnames=fieldnames or list(data[0]))
            writer.writeheader()
            writer.writerows(data)

        logger.info(f"Wrote {len(data)} accounts to {output_path}")
