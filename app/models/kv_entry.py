# app/models/kv_entry.py

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class KVEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String(320), primary_key=True)
    value = Column(Text, nullable=False)
