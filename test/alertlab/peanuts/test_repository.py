"""Tests for the character store."""

import pytest
from sqlalchemy.exc import IntegrityError

from alertlab.peanuts.models import Peanuts
from alertlab.peanuts.repository import PeanutsRepository


class TestPeanutsRepository:
    @pytest.fixture(autouse=True)
    def repository(self, session):
        self.session = session
        self.repository = PeanutsRepository()

    def test_save_assigns_id(self):
        saved = self.repository.save(
            Peanuts(name="Charlie Brown", description="The main character")
        )

        assert saved.id is not None

    def test_saved_character_can_be_found(self):
        saved = self.repository.save(
            Peanuts(name="Charlie Brown", description="The main character")
        )
        saved_id = saved.id
        self.session.expunge_all()

        found = self.repository.find_by_id(saved_id)

        assert found is not saved
        assert found.id == saved_id
        assert found.name == "Charlie Brown"
        assert found.description == "The main character"

    def test_ids_are_unique(self):
        ids = {
            self.repository.save(Peanuts(name=name)).id
            for name in ("Lucy", "Linus", "Sally", "Pig-Pen")
        }

        assert len(ids) == 4

    def test_find_missing_returns_none(self):
        assert self.repository.find_by_id(999) is None

    def test_save_with_id_overwrites(self):
        saved = self.repository.save(Peanuts(name="Schroeder", description="Plays piano"))
        saved_id = saved.id
        self.session.expunge_all()

        updated = self.repository.save(
            Peanuts.from_dict(
                {
                    "id": saved_id,
                    "name": "Schroeder",
                    "description": "Beethoven enthusiast who plays piano",
                }
            )
        )

        assert updated.id == saved_id
        assert self.repository.count() == 1
        self.session.expunge_all()
        found = self.repository.find_by_id(saved_id)
        assert found.description == "Beethoven enthusiast who plays piano"

    def test_save_of_loaded_character_updates_in_place(self):
        saved = self.repository.save(Peanuts(name="Sally"))
        saved.description = "Charlie Brown's little sister"

        updated = self.repository.save(saved)

        assert updated is saved
        assert self.repository.count() == 1
        assert updated.description == "Charlie Brown's little sister"

    def test_count_and_delete_all(self):
        for name in ("Snoopy", "Woodstock", "Marcie"):
            self.repository.save(Peanuts(name=name))

        assert self.repository.count() == 3
        assert self.repository.delete_all() == 3
        assert self.repository.count() == 0

    def test_ids_are_not_reused_after_delete(self):
        first = self.repository.save(Peanuts(name="Franklin")).id
        self.repository.delete_all()

        second = self.repository.save(Peanuts(name="Franklin")).id

        assert second > first

    def test_resaving_a_deleted_character_gets_a_new_id(self):
        first = self.repository.save(Peanuts(name="Franklin")).id
        self.repository.delete_all()

        resaved = self.repository.save(
            Peanuts.from_dict({"id": first, "name": "Franklin"})
        )

        assert resaved.id != first
        assert resaved.name == "Franklin"
        assert self.repository.find_by_id(first) is None
        assert self.repository.count() == 1

    def test_save_with_unknown_id_inserts_a_copy(self):
        saved = self.repository.save(
            Peanuts.from_dict(
                {"id": 4242, "name": "Shermy", "description": "An early regular"}
            )
        )

        assert saved.id != 4242
        assert self.repository.find_by_id(4242) is None
        found = self.repository.find_by_id(saved.id)
        assert found.description == "An early regular"

    def test_failed_save_rolls_back_and_raises(self):
        with pytest.raises(IntegrityError):
            self.repository.save(Peanuts(name=None))

        # The session is usable again after the rollback.
        assert self.repository.count() == 0
        assert self.repository.save(Peanuts(name="Rerun")).id is not None
