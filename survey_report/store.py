"""
Response stores.

Two variants share one contract (``save``, ``list``, ``get_by_id``,
``clear_all``): a JSON file on local disk and a SQLAlchemy row store. Neither
provides locking across concurrent writers; the last write wins. Stored
responses are never replaced: saving an id that is already present raises
``StoreError``.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from sqlalchemy import Column, DateTime, String, Text, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .models import Response

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A store operation failed. The underlying error is chained as ``__cause__``."""


class ResponseStore:
    def save(self, response: Response) -> None:
        raise NotImplementedError

    def list(self) -> List[Response]:
        raise NotImplementedError

    def get_by_id(self, response_id: str) -> Optional[Response]:
        raise NotImplementedError

    def clear_all(self) -> None:
        raise NotImplementedError


# -----------------------------
# Local JSON file
# -----------------------------

class LocalResponseStore(ResponseStore):
    """All responses as one JSON array in a file. Reads never raise."""

    def __init__(self, path: str = "survey_responses.json"):
        self.path = Path(path)

    def _read(self) -> List[Response]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return [Response.from_dict(d) for d in raw]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Could not read local store %s: %s: %s", self.path, e.__class__.__name__, e)
            return []

    def _write(self, responses: List[Response]) -> None:
        try:
            text = json.dumps([r.to_dict() for r in responses], ensure_ascii=False, indent=2)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error("Could not write local store %s: %s", self.path, e)
            raise StoreError(f"Could not write {self.path}") from e

    def save(self, response: Response) -> None:
        responses = self._read()
        if any(r.id == response.id for r in responses):
            logger.error("Response %s is already stored in %s", response.id, self.path)
            raise StoreError(f"Response {response.id} already exists")
        responses.append(response)
        self._write(responses)

    def list(self) -> List[Response]:
        return self._read()

    def get_by_id(self, response_id: str) -> Optional[Response]:
        for r in self._read():
            if r.id == response_id:
                return r
        return None

    def clear_all(self) -> None:
        self._write([])


# -----------------------------
# SQL rows
# -----------------------------

Base = declarative_base()


class ResponseRow(Base):
    __tablename__ = "survey_responses"

    id = Column(String(36), primary_key=True)
    created_at = Column(DateTime, default=datetime.now, index=True)
    payload = Column(Text, nullable=False)  # Response.to_dict() as JSON


def _decode(response_id: str, payload: str) -> Response:
    try:
        return Response.from_dict(json.loads(payload))
    except (ValueError, KeyError, TypeError) as e:
        logger.error("Stored response %s is unreadable: %s: %s", response_id, e.__class__.__name__, e)
        raise StoreError(f"Stored response {response_id} is unreadable") from e


class SqlResponseStore(ResponseStore):
    def __init__(self, url: str = "sqlite:///survey.db", echo: bool = False):
        self.url = url
        try:
            self.engine = create_engine(url, echo=echo)
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.error("Could not open response database %s: %s", url, e)
            raise StoreError(f"Could not open {url}") from e
        self.Session = sessionmaker(bind=self.engine)

    def save(self, response: Response) -> None:
        row = ResponseRow(
            id=response.id,
            created_at=response.created_at,
            payload=json.dumps(response.to_dict(), ensure_ascii=False),
        )
        try:
            with self.Session.begin() as session:
                session.add(row)
        except SQLAlchemyError as e:
            logger.error("Could not save response %s: %s", response.id, e)
            raise StoreError(f"Could not save response {response.id}") from e

    def list(self) -> List[Response]:
        try:
            with self.Session() as session:
                rows = session.query(ResponseRow).order_by(ResponseRow.created_at).all()
                payloads = [(row.id, row.payload) for row in rows]
        except SQLAlchemyError as e:
            logger.error("Could not list responses: %s", e)
            raise StoreError("Could not list responses") from e
        return [_decode(response_id, p) for response_id, p in payloads]

    def get_by_id(self, response_id: str) -> Optional[Response]:
        try:
            with self.Session() as session:
                row = session.get(ResponseRow, response_id)
                payload = row.payload if row is not None else None
        except SQLAlchemyError as e:
            logger.error("Could not load response %s: %s", response_id, e)
            raise StoreError(f"Could not load response {response_id}") from e
        if payload is None:
            return None
        return _decode(response_id, payload)

    def clear_all(self) -> None:
        try:
            with self.Session.begin() as session:
                session.query(ResponseRow).delete()
        except SQLAlchemyError as e:
            logger.error("Could not clear responses: %s", e)
            raise StoreError("Could not clear responses") from e
