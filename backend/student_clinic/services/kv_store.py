"""Prefixed key/value overlay on top of the relational store.

Keys are namespaced strings such as ``user:<subject>``. ``scan_by_prefix``
returns values in insertion order; callers re-sort as needed.
"""
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from ..models.kv_entry import KvEntry


def put(db: Session, key: str, value: Any) -> None:
    entry = db.get(KvEntry, key)
    if entry is None:
        db.add(KvEntry(key=key, value=value))
    else:
        entry.value = value
    db.commit()


def get(db: Session, key: str) -> Optional[Any]:
    entry = db.get(KvEntry, key)
    return entry.value if entry else None


def scan_by_prefix(db: Session, prefix: str) -> List[Any]:
    entries = (
        db.query(KvEntry)
        .filter(KvEntry.key.startswith(prefix, autoescape=True))
        .order_by(KvEntry.created_at, KvEntry.key)
        .all()
    )
    return [entry.value for entry in entries]
