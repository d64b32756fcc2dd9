# backend/pharmatwin/db.py
import datetime

from sqlalchemy import create_engine, Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import declarative_base, sessionmaker

from pharmatwin.config import DATABASE_URL, DEFAULT_LANGUAGE, DEFAULT_THEME

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()

PREFERENCE_DEFAULTS = {"language": DEFAULT_LANGUAGE, "theme": DEFAULT_THEME}


class ClientPreference(Base):
    __tablename__ = "client_preferences"
    __table_args__ = (UniqueConstraint("client_id", "key", name="uq_client_key"),)

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(String, index=True, nullable=False)
    key = Column(String, nullable=False)
    value = Column(String, nullable=False)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)


Base.metadata.create_all(bind=engine)


def read_preferences(db, client_id: str) -> dict:
    prefs = dict(PREFERENCE_DEFAULTS)
    rows = db.query(ClientPreference).filter(ClientPreference.client_id == client_id).all()
    for r in rows:
        if r.key in prefs:
            prefs[r.key] = r.value
    return prefs


def write_preferences(db, client_id: str, values: dict) -> dict:
    """Upsert the given keys; caller owns commit/rollback."""
    for key, value in values.items():
        row = db.query(ClientPreference).filter(
            ClientPreference.client_id == client_id, ClientPreference.key == key
        ).first()
        if row:
            row.value = value
        else:
            db.add(ClientPreference(client_id=client_id, key=key, value=value))
    db.flush()
    return read_preferences(db, client_id)
