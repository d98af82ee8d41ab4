from sqlalchemy import Column, String, DateTime, func
from . import Base

class Member(Base):
    __tablename__ = 'members'
    id = Column(String(255), primary_key=True)
    hashed_password = Column(String, nullable=False)
    display_name = Column(String(150), nullable=True, index=True)
    status_message = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default='USER')  # USER, ADMIN
    created_at = Column(DateTime(timezone=True), server_default=func.now())
