"""Database access for Peanuts characters."""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from alertlab.extensions import db
from alertlab.peanuts.models import Peanuts

logger = logging.getLogger(__name__)


class PeanutsRepository:
    """Key-value persistence of characters by their integer id.

    Every write commits on its own, there are no multi-record transactions.
    Database errors roll the session back and propagate to the caller.
    """

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def find_by_id(self, peanuts_id: int) -> Peanuts | None:
        return self.session.get(Peanuts, peanuts_id)

    def save(self, peanuts: Peanuts) -> Peanuts:
        """Insert a new character or overwrite the one stored at its id.

        A character carrying an id that is not in the table is inserted as a
        copy under a freshly assigned id; ids are never handed out twice.

        Returns the persisted instance, which is not necessarily the object
        passed in when ``peanuts`` carries an id but is detached.
        """
        try:
            if peanuts.id is None:
                self.session.add(peanuts)
                persisted = peanuts
            elif self.session.get(Peanuts, peanuts.id) is None:
                persisted = Peanuts(
                    name=peanuts.name, description=peanuts.description
                )
                self.session.add(persisted)
            else:
                persisted = self.session.merge(peanuts)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Saving Peanuts character failed")
            raise

        logger.debug("Saved Peanuts character id=%s", persisted.id)
        return persisted

    def delete_all(self) -> int:
        try:
            deleted = self.session.execute(delete(Peanuts)).rowcount
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        logger.info("Deleted %s Peanuts characters", deleted)
        return deleted

    def count(self) -> int:
        return self.session.execute(
            select(func.count()).select_from(Peanuts)
        ).scalar_one()
