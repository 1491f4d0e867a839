# ingres/storage/local_documents.py
"""
Documents kept on the user's side only (never uploaded to the database).

Each record carries its metadata plus the raw file content, stored
base64-encoded inside the key-value store under a `local_document:` key.
"""

import base64
import json
import logging
import random
import string
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union


logger = logging.getLogger(__name__)

KEY_PREFIX = "local_document:"

_ID_ALPHABET = string.digits + string.ascii_lowercase

# Fields callers may change after the document is saved
EDITABLE_FIELDS = ("title", "category", "tags", "location", "description", "is_local_only")


def _split_tags(tags: Union[str, List[str], None]) -> List[str]:

    if tags is None:
        return []

    if isinstance(tags, str):
        tags = tags.split(",")

    return [t.strip() for t in tags if t and t.strip()]


def _new_document_id() -> str:

    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(8))

    return f"{int(time.time() * 1000)}_{suffix}"


@dataclass
class LocalDocumentRecord:
    id: str
    title: str
    original_name: str
    file_name: str
    file_path: str
    file_size: int
    mime_type: str
    category: str = "Other"
    tags: List[str] = field(default_factory=list)
    location: str = ""
    description: str = ""
    upload_date: str = ""
    is_local_only: bool = True
    ai_summary: Optional[str] = None
    content: bytes = b""

    def to_json(self) -> str:

        data = asdict(self)
        data["content"] = base64.b64encode(self.content).decode("ascii")

        return json.dumps(data, ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str) -> "LocalDocumentRecord":

        data = json.loads(raw)
        data["content"] = base64.b64decode(data.get("content") or "")

        return cls(**data)


class LocalDocuments:

    def __init__(self, store):
        self._store = store

    def save(
        self,
        filename: str,
        content: bytes,
        mime_type: Optional[str] = None,
        metadata: Optional[Dict] = None,
    ) -> LocalDocumentRecord:

        metadata = metadata or {}

        doc_id = _new_document_id()

        record = LocalDocumentRecord(
            id=doc_id,
            title=metadata.get("title") or filename.split(".")[0],
            original_name=filename,
            file_name=filename,
            file_path=f"local://{doc_id}",
            file_size=len(content),
            mime_type=mime_type or "application/octet-stream",
            category=metadata.get("category") or "Other",
            tags=_split_tags(metadata.get("tags")),
            location=metadata.get("location") or "",
            description=metadata.get("description") or "",
            upload_date=datetime.now(timezone.utc).isoformat(),
            content=content,
        )

        self._store.set_item(KEY_PREFIX + doc_id, record.to_json())

        logger.info(
            "Local document saved",
            extra={"doc_id": doc_id, "file_size": record.file_size},
        )

        return record

    def get(self, doc_id: str) -> Optional[LocalDocumentRecord]:

        raw = self._store.get_item(KEY_PREFIX + doc_id)

        if raw is None:
            return None

        try:
            return LocalDocumentRecord.from_json(raw)

        except (ValueError, TypeError) as e:

            logger.error(
                "Local document unreadable",
                extra={"doc_id": doc_id, "error": str(e)},
            )
            return None

    def remove(self, doc_id: str):
        self._store.remove_item(KEY_PREFIX + doc_id)

    def update_metadata(self, doc_id: str, updates: Dict) -> Optional[LocalDocumentRecord]:

        record = self.get(doc_id)

        if record is None:
            return None

        for name in EDITABLE_FIELDS:

            if updates.get(name) is None:
                continue

            value = updates[name]

            if name == "tags":
                value = _split_tags(value)

            setattr(record, name, value)

        self._store.set_item(KEY_PREFIX + doc_id, record.to_json())

        return record

    def list(self) -> List[LocalDocumentRecord]:

        records = []

        for key in self._store.keys():

            if not key.startswith(KEY_PREFIX):
                continue

            record = self.get(key[len(KEY_PREFIX):])

            if record:
                records.append(record)

        return sorted(records, key=lambda r: r.upload_date, reverse=True)
