from sqlalchemy import Column, DateTime, String, Text, func
from datetime import datetime
import uuid

from covercraft.db.session import Base


def generate_uuid():
    return str(uuid.uuid4())


class CoverLetter(Base):
    __tablename__ = "cover_letters"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    template_name = Column(String(255), nullable=False)
    template_description = Column(Text, nullable=False)
    cover_letter_content = Column(Text, nullable=False)
    # Resume text the letter was generated from, if the caller kept it
    resume_text = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow)
