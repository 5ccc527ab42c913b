from datetime import datetime, timezone

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, String, create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, validates

from ..utils.id_generator import generate_pk, new_sk

Base = declarative_base()

# Fields every entity carries; always part of a projection.
BASE_FIELDS = ("id", "pk", "sk", "deleted", "archived", "created_at", "updated_at")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntityMixin:
    """
    Common columns for every specification-queryable entity.

    Mix in before ``Base``::

        class Author(EntityMixin, Base):
            __tablename__ = "authors"
            first_name = Column(String)
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    sk = Column("sk", String(36), unique=True, nullable=False)  # Random secondary key, fixed at creation
    pk = Column("pk", BigInteger, unique=True, nullable=False)  # Derived short key, fixed at creation
    deleted = Column(Boolean, nullable=False, default=False)
    archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    def __init__(self, **kwargs):
        kwargs.setdefault("sk", new_sk())
        kwargs.setdefault("pk", generate_pk(kwargs["sk"]))
        kwargs.setdefault("deleted", False)
        kwargs.setdefault("archived", False)
        now = utc_now()
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        super().__init__(**kwargs)

    @validates("id", "sk", "pk", "created_at")
    def _validate_immutable(self, key, value):
        current = self.__dict__.get(key)
        if current is None and key not in self.__dict__ and inspect(self).has_identity:
            current = getattr(self, key)  # expired after commit; reload before comparing
        if current is not None and current != value:
            raise ValueError(f"{type(self).__name__}.{key} is immutable once set")
        return value

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, EntityMixin) or type(self) is not type(other):
            return False
        return self.id is not None and self.id == other.id

    def __hash__(self):
        return hash(self.id) if self.id is not None else 0

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} sk={self.sk}>"


def create_all(engine: Engine | str) -> Engine:
    if isinstance(engine, str):
        engine = create_engine(engine, future=True)
    Base.metadata.create_all(engine)
    return engine
