"""
Verification Ledger — append-only, hash-chained record of scenario runs.

Behavioral Contract:
- Append-only. No record is ever modified or deleted.
- Each record is signed (SHA-256 over its canonical JSON) and chained to
  the signature of the record before it.
- Queryable by scenario, by failed expectation, and by recency.
"""

import hashlib
import json
import logging
import sqlite3
from typing import List, Optional

from regress_kernel.models.ledger import VerificationRecord

logger = logging.getLogger(__name__)


def _sign(record: VerificationRecord) -> str:
    """Hash the record with its signature field blanked out."""
    record_dict = record.model_dump(mode="json")
    record_dict["signature"] = ""
    record_bytes = json.dumps(record_dict, sort_keys=True, default=str).encode()
    return hashlib.sha256(record_bytes).hexdigest()


class VerificationLedger:
    """
    Append-only verification ledger on SQLite.
    Use ":memory:" for a throwaway ledger.
    """

    def __init__(self, db_path: str = ":memory:"):
        self.db_path = db_path
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        """Create the ledger table if it doesn't exist."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS verification (
                id TEXT PRIMARY KEY,
                scenario TEXT NOT NULL,
                underdetermined INTEGER NOT NULL,
                expectation_met INTEGER NOT NULL,
                recorded_at TEXT NOT NULL,
                signature TEXT NOT NULL,
                prior_record_hash TEXT,
                record_json TEXT NOT NULL
            )
        """)
        self._conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_verification_scenario ON verification(scenario)
        """)
        self._conn.commit()

    def append(self, record: VerificationRecord) -> VerificationRecord:
        """Sign the record, chain it to the latest entry and store it."""
        chained = record.model_copy(update={"prior_record_hash": self._get_latest_hash()})
        signed = chained.model_copy(update={"signature": _sign(chained)})

        self._conn.execute(
            """
            INSERT INTO verification (
                id, scenario, underdetermined, expectation_met, recorded_at,
                signature, prior_record_hash, record_json
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                signed.id,
                signed.scenario,
                int(signed.underdetermined),
                int(signed.expectation_met),
                signed.recorded_at.isoformat(),
                signed.signature,
                signed.prior_record_hash,
                signed.model_dump_json(),
            ),
        )
        self._conn.commit()
        logger.info("Ledger append %s for scenario %s", signed.id, signed.scenario)
        return signed

    def _get_latest_hash(self) -> Optional[str]:
        """Get the signature of the most recent record."""
        row = self._conn.execute(
            "SELECT signature FROM verification ORDER BY rowid DESC LIMIT 1"
        ).fetchone()
        return row["signature"] if row else None

    def _deserialize(self, row: sqlite3.Row) -> VerificationRecord:
        return VerificationRecord.model_validate_json(row["record_json"])

    def get_by_id(self, record_id: str) -> Optional[VerificationRecord]:
        row = self._conn.execute(
            "SELECT record_json FROM verification WHERE id = ?", (record_id,)
        ).fetchone()
        return self._deserialize(row) if row else None

    def query_by_scenario(self, scenario: str) -> List[VerificationRecord]:
        """All runs of a given scenario, oldest first."""
        rows = self._conn.execute(
            "SELECT record_json FROM verification WHERE scenario = ? ORDER BY rowid",
            (scenario,),
        ).fetchall()
        return [self._deserialize(r) for r in rows]

    def query_failures(self) -> List[VerificationRecord]:
        """All runs whose underdetermination result differed from the expectation."""
        rows = self._conn.execute(
            "SELECT record_json FROM verification WHERE expectation_met = 0 ORDER BY rowid"
        ).fetchall()
        return [self._deserialize(r) for r in rows]

    def query_recent(self, limit: int = 50) -> List[VerificationRecord]:
        rows = self._conn.execute(
            "SELECT record_json FROM verification ORDER BY rowid DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [self._deserialize(r) for r in reversed(rows)]

    def verify_chain_integrity(self) -> bool:
        """Verify no records have been tampered with."""
        rows = self._conn.execute(
            "SELECT record_json, signature FROM verification ORDER BY rowid"
        ).fetchall()

        prior_sig = None
        for row in rows:
            record = self._deserialize(row)
            if record.signature != row["signature"] or record.signature != _sign(record):
                logger.warning("Ledger record %s fails signature check", record.id)
                return False
            if record.prior_record_hash != prior_sig:
                logger.warning("Ledger record %s breaks the chain", record.id)
                return False
            prior_sig = record.signature

        return True

    def count(self) -> int:
        row = self._conn.execute("SELECT COUNT(*) as cnt FROM verification").fetchone()
        return row["cnt"]

    def close(self) -> None:
        self._conn.close()
