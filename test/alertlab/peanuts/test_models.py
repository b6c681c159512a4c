"""Tests for the Peanuts model."""

import pytest
from sqlalchemy import BigInteger
from sqlalchemy.dialects import postgresql, sqlite

from alertlab.peanuts.models import Peanuts


class TestPeanutsModel:
    def test_new_character_has_no_id(self):
        snoopy = Peanuts(name="Snoopy", description="Charlie Brown's pet beagle")

        assert snoopy.id is None

    def test_id_cannot_be_assigned(self):
        snoopy = Peanuts(name="Snoopy")

        with pytest.raises(AttributeError):
            snoopy.id = 7

    def test_id_is_not_a_constructor_argument(self):
        with pytest.raises(AttributeError):
            Peanuts(id=7, name="Snoopy")

    def test_from_dict_restores_id(self):
        lucy = Peanuts.from_dict(
            {"id": 3, "name": "Lucy", "description": "Bossy and opinionated"}
        )

        assert lucy.id == 3
        assert lucy.name == "Lucy"
        assert lucy.description == "Bossy and opinionated"

    def test_from_dict_description_is_optional(self):
        linus = Peanuts.from_dict({"id": 4, "name": "Linus"})

        assert linus.description is None

    def test_to_dict(self):
        woodstock = Peanuts.from_dict(
            {"id": 2, "name": "Woodstock", "description": "Snoopy's best friend"}
        )

        assert woodstock.to_dict() == {
            "id": 2,
            "name": "Woodstock",
            "description": "Snoopy's best friend",
        }

    def test_repr(self):
        schroeder = Peanuts.from_dict({"id": 5, "name": "Schroeder"})

        assert "Schroeder" in repr(schroeder)
        assert "5" in repr(schroeder)

    def test_id_column_is_64_bit(self):
        column_type = Peanuts.__table__.c.id.type

        assert isinstance(column_type, BigInteger)
        assert column_type.compile(dialect=postgresql.dialect()) == "BIGINT"
        assert column_type.compile(dialect=sqlite.dialect()) == "INTEGER"
