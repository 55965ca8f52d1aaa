from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from sqlmodel import Session, select

from dritu.server.entities import ENTITIES
from dritu.server.models import Client, Product, Quotation, QuotationStatus
from dritu.server.repository import Repository
from dritu.server.schemas.quotation import QuotationCreate, QuotationLineIn
from dritu.services.quotation_service import create_quotation

logger = logging.getLogger(__name__)

# Project root, the directory holding knowledge/
ROOT = Path(__file__).resolve().parents[2]
SEEDS_PATH = ROOT / "knowledge" / "seeds" / "initial_data.yaml"


@lru_cache(maxsize=4)
def load_seed_data(path: Path = SEEDS_PATH) -> Dict[str, Any]:
    """
    Reads the seed YAML once. A missing file means "nothing to seed".
    A broken file raises, so a typo does not silently start an empty dashboard.
    """
    if not path.exists():
        logger.warning("Seed file %s not found, skipping seeding", path)
        return {}

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Seed file {path} must hold a mapping of entity -> records")
    return data


def _seed_quotations(session: Session, records: List[Dict[str, Any]]) -> int:
    created = 0
    for rec in records:
        client = session.exec(select(Client).where(Client.name == rec.get("client"))).first()
        if client is None:
            logger.warning("Seed quotation skipped, unknown client %r", rec.get("client"))
            continue

        lines: List[QuotationLineIn] = []
        for item in rec.get("lines") or []:
            product = session.exec(select(Product).where(Product.name == item.get("product"))).first()
            if product is None:
                logger.warning("Seed quotation line skipped, unknown product %r", item.get("product"))
                continue
            lines.append(QuotationLineIn(product_id=product.id, quantity=item.get("quantity") or 1))

        if not lines:
            continue

        quote_date: Optional[date] = rec.get("quote_date")
        q = create_quotation(
            payload=QuotationCreate(client_id=client.id, lines=lines),
            session=session,
            today=quote_date,
        )
        if rec.get("status"):
            q.status = QuotationStatus(rec["status"])
            session.add(q)
            session.commit()
        created += 1
    return created


def seed_database(session: Session, data: Optional[Dict[str, Any]] = None) -> Dict[str, int]:
    """
    Writes seed records into every table that is still empty, the same way
    the dashboard screens stored their initial data on first use.
    Returns the number of created records per entity key.
    """
    data = load_seed_data() if data is None else data
    counts: Dict[str, int] = {}

    for entity in ENTITIES:
        records = data.get(entity.key) or []
        repo = Repository(session, entity.model)
        if not records or repo.count() > 0:
            continue
        for rec in records:
            repo.create(entity.prepare_data(rec))
        counts[entity.key] = len(records)

    if data.get("quotations") and Repository(session, Quotation).count() == 0:
        counts["quotations"] = _seed_quotations(session, data["quotations"])

    if counts:
        logger.info("Seeded: %s", counts)
    return counts
