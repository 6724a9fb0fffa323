"""
Parcel database model.

One row per tracked shipment. Status is kept as a plain string column so
the store accepts whatever status the caller sets.
"""

from sqlalchemy import Column, Integer, String
from tracker.app.db.session import Base
from tracker.app.models.parcel_enums import ParcelStatus


class Parcel(Base):
    """
    Parcel model for the tracker.
    
    ``number`` is assigned by the database on insert. ``client`` is an
    opaque owner id and is not linked to any other table.
    """
    __tablename__ = "parcel"
    
    number = Column(Integer, primary_key=True, autoincrement=True)
    client = Column(Integer, nullable=False, index=True)
    status = Column(String(32), nullable=False, default=ParcelStatus.REGISTERED.value)
    address = Column(String, nullable=False)
    
    # RFC3339 UTC string, written once at creation
    created_at = Column(String(32), nullable=False)
    
    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status}')>"
