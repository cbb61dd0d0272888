from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func
from datetime import datetime

from covercraft.db.session import Base
from covercraft.models.cover_letter import generate_uuid


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    filename = Column(String(255))
    original_filename = Column(String(255))
    file_size = Column(Integer)
    file_type = Column(String(255))
    storage_path = Column(String(1024), nullable=False)
    resume_text = Column(Text, nullable=False, default="")
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
