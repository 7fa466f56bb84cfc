"""
SQLAlchemy ORM Models
Database table definitions using SQLAlchemy ORM.
"""

from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class MerchantStore(Base):
    """
    Merchant store model.

    Every stored asset belongs to a store, addressed by its code.
    """
    __tablename__ = 'merchant_stores'

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(100), unique=True, index=True, nullable=False,
                  comment='Store code used in asset paths and URLs')
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, comment='Store contact email')
    domain_name = Column(String(255), nullable=True)
    default_language = Column(String(10), nullable=False, server_default='en')
    currency = Column(String(3), nullable=False, server_default='USD')

    # Audit
    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP, nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<MerchantStore(id={self.id}, code={self.code})>"
