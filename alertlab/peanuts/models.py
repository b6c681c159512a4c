from alertlab.extensions import db

NAME_MAX_LENGTH = 100


class Peanuts(db.Model):
    """A Peanuts character, e.g. Snoopy or Charlie Brown."""

    __tablename__ = "peanuts"
    # Keep SQLite from handing out the id of a deleted row again.
    __table_args__ = {"sqlite_autoincrement": True}

    # Assigned by the database on first flush. Exposed read-only through
    # the ``id`` property below.
    _id = db.Column(
        "id",
        db.BigInteger().with_variant(db.Integer, "sqlite"),
        primary_key=True,
    )

    name = db.Column(db.String(NAME_MAX_LENGTH), nullable=False)

    description = db.Column(db.Text, nullable=True)

    @property
    def id(self):
        return self._id

    @classmethod
    def from_dict(cls, data):
        """Rebuild a character from its ``to_dict`` form (e.g. a cache hit).

        The result is not attached to a session.
        """
        peanuts = cls(name=data["name"], description=data.get("description"))
        peanuts._id = data.get("id")
        return peanuts

    def to_dict(self):
        """Serialise for JSON responses and the character cache."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
        }

    def __repr__(self):
        return f"<Peanuts {self.id} [{self.name}]>"
