from sqlalchemy import JSON, BigInteger, Column, String, Text

from pastemd.core.db import Base


class Paste(Base):
    __tablename__ = "pastes"

    id = Column(String(64), primary_key=True)
    url = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    date_published = Column(BigInteger, nullable=False)
    date_edited = Column(BigInteger, nullable=False)
    metadata_json = Column("metadata", JSON, nullable=False, default=dict)


class View(Base):
    """One row per (url, username) pair that has been counted"""
    __tablename__ = "views"

    url = Column(String(255), primary_key=True)
    username = Column(String(255), primary_key=True)
