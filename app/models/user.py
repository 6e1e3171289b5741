# app/models/user.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    JSON,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime
from uuid import uuid4


Base = declarative_base()


def _new_id() -> str:
    return uuid4().hex


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, index=True, default=_new_id)
    username = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    # Practice stats, owned by the profile service
    total_solved = Column(Integer, default=0)
    rating = Column(Integer, default=1200)

    # Relationships
    ai_interactions = relationship("AIInteraction", back_populates="user")


class Problem(Base):
    __tablename__ = "problems"
    id = Column(String, primary_key=True, index=True, default=_new_id)
    title = Column(String, nullable=False)
    description = Column(Text, default="") # Rich text, may contain HTML
    difficulty = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class AIInteraction(Base):
    __tablename__ = "ai_interactions"
    id = Column(String, primary_key=True, index=True, default=_new_id)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String, nullable=False, index=True)

    # Inputs that produced this interaction; shape depends on `type`
    context = Column(JSON, default=lambda: {})
    query = Column(String, nullable=True)
    response = Column(Text, nullable=False)

    # Metrics
    tokens_used = Column(Integer, default=0)
    response_time = Column(Integer, default=0) # ms, measured by the caller

    # {"helpful": bool, "rating": number, "comment": str}, set after creation
    feedback = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationship
    user = relationship("User", back_populates="ai_interactions")
