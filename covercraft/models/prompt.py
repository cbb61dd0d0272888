from sqlalchemy import Boolean, Column, DateTime, Index, String, Text, func
from datetime import datetime

from covercraft.db.session import Base
from covercraft.models.cover_letter import generate_uuid


class PromptTemplate(Base):
    """Named instruction template. user_id NULL marks the global scope."""

    __tablename__ = "custom_prompts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    prompt_text = Column(Text, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_custom_prompts_owner_default", "user_id", "is_default"),
    )

    def __repr__(self):
        return f"<PromptTemplate {self.name} owner={self.user_id} default={self.is_default}>"
