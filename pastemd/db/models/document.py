from sqlalchemy import JSON, BigInteger, Column, String

from pastemd.core.db import Base


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(64), primary_key=True)
    namespace = Column(String(255), primary_key=True, index=True)
    content = Column(JSON, nullable=True)
    timestamp = Column(BigInteger, nullable=False)
    metadata_json = Column("metadata", JSON, nullable=True)
