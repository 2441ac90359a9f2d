"""
Loads translation entries and consensus records from a JSON export.

Accepted shapes:
- {"entries": [...], "consensus": [...]}
- [...]  (entries only)

Rows without both texts are skipped. Entry rows without a status are treated
as approved, since exports carry vetted data.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from .exceptions import ConfigurationError
from .models import (
    FREQUENCY_RANKS,
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    ConsensusRecord,
    TranslationEntry,
)

logger = logging.getLogger(__name__)

STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)


class TranslationDataLoader:
    """
    Reads a seed export into engine records.
    """
    def __init__(self, path: str):
        self.path = path

    def load(self) -> Tuple[List[TranslationEntry], List[ConsensusRecord]]:
        """
        :return: (entries, consensus records)
        :raises ConfigurationError: If the file is missing or not valid JSON
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read seed file '{self.path}': {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Seed file '{self.path}' is not valid JSON: {e}") from e

        if isinstance(data, list):
            entry_rows, consensus_rows = data, []
        elif isinstance(data, dict):
            entry_rows = data.get("entries") or []
            consensus_rows = data.get("consensus") or []
        else:
            raise ConfigurationError(f"Seed file '{self.path}' must hold a JSON object or array")

        entries = [e for e in (self._parse_entry(row) for row in entry_rows) if e]
        records = [r for r in (self._parse_consensus(row) for row in consensus_rows) if r]

        skipped = len(entry_rows) + len(consensus_rows) - len(entries) - len(records)
        if skipped:
            logger.warning(f"Skipped {skipped} malformed rows in {self.path}")
        logger.info(f"Loaded {len(entries)} entries and {len(records)} consensus records from {self.path}")
        return entries, records

    def _parse_entry(self, row: Any) -> Optional[TranslationEntry]:
        if not isinstance(row, dict):
            return None

        english = self._clean_text(row.get("english_text"))
        tangkhul = self._clean_text(row.get("tangkhul_text"))
        if not english or not tangkhul:
            return None

        status = self._clean_text(row.get("status")) or STATUS_APPROVED
        if status not in STATUSES:
            return None

        frequency = self._clean_text(row.get("frequency"))
        entry = TranslationEntry(
            english_text=english,
            tangkhul_text=tangkhul,
            status=status,
            confidence_score=self._parse_int(row.get("confidence_score")),
            part_of_speech=self._clean_text(row.get("part_of_speech")),
            tags=self._parse_list(row.get("tags")),
            grammar_features=row.get("grammar_features") or {},
            frequency=frequency if frequency in FREQUENCY_RANKS else None,
            is_golden_data=bool(row.get("is_golden_data")),
            category=self._clean_text(row.get("category")),
            context=self._clean_text(row.get("context")),
        )

        if row.get("id"):
            entry.id = str(row["id"])
        created_at = self._parse_datetime(row.get("created_at"))
        if created_at:
            entry.created_at = created_at
        return entry

    def _parse_consensus(self, row: Any) -> Optional[ConsensusRecord]:
        if not isinstance(row, dict):
            return None

        # Consensus rows are keyed by surface form; keep the raw text
        english = row.get("english_text")
        tangkhul = row.get("tangkhul_text")
        if not isinstance(english, str) or not isinstance(tangkhul, str):
            return None
        if not english.strip() or not tangkhul.strip():
            return None

        record = ConsensusRecord(
            english_text=english,
            tangkhul_text=tangkhul,
            submission_count=self._parse_int(row.get("submission_count")) or 0,
            expert_votes=self._parse_int(row.get("expert_votes")) or 0,
            reviewer_votes=self._parse_int(row.get("reviewer_votes")) or 0,
            contributor_votes=self._parse_int(row.get("contributor_votes")) or 0,
            is_golden_data=bool(row.get("is_golden_data")),
        )

        score = self._parse_float(row.get("agreement_score"))
        record.agreement_score = score if score is not None else round(record.agreement_ratio() * 100, 2)
        return record

    def _clean_text(self, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return None
        value = value.strip()
        return value if value else None

    def _parse_int(self, value: Any) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    def _parse_float(self, value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    def _parse_list(self, value: Any) -> List[str]:
        if not value:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [str(v).strip() for v in value if str(v).strip()]

    def _parse_datetime(self, value: Any) -> Optional[datetime]:
        if not isinstance(value, str):
            return None
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
