# ingres/workflow/knowledge_ingestion.py
import logging
from typing import Dict, Optional

from ingres.errors import BadRequestError
from ingres.knowledge.seed_data import SEED_TABLES

logger = logging.getLogger(__name__)

INGEST_ACTION = "ingest"


def ingest_knowledge(action: Optional[str], database) -> Dict:
    """Upsert every bundled seed table; the first failing table aborts the run."""

    if action != INGEST_ACTION:
        raise BadRequestError("Invalid action")

    logger.info("Starting PDF knowledge ingestion process")

    stats = {}

    for table, rows, on_conflict, stats_key in SEED_TABLES:

        database.upsert(table, rows, on_conflict=on_conflict)

        stats[stats_key] = len(rows)

        logger.info(
            "Seed table upserted",
            extra={"table": table, "rows": len(rows)},
        )

    logger.info("Successfully ingested all PDF knowledge data")

    return {
        "success": True,
        "message": "Knowledge base successfully populated from PDF data",
        "stats": stats,
    }
