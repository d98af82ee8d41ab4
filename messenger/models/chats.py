from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index, func
from . import Base

class PersonalChat(Base):
    __tablename__ = 'personal_chats'
    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(String(255), ForeignKey('members.id', ondelete='CASCADE'), index=True, nullable=False)
    receiver_id = Column(String(255), ForeignKey('members.id', ondelete='CASCADE'), index=True, nullable=False)
    # canonical unordered pair of sender/receiver, see conversation.canonicalize
    group_key = Column(String(530), index=True, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    is_read = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False)
    __table_args__ = (
        Index('ix_personal_chats_group_receiver', 'group_key', 'receiver_id'),
    )

    def __repr__(self):
        return f'<PersonalChat id={self.id} {self.sender_id}->{self.receiver_id}>'
