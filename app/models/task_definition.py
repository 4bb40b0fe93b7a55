from datetime import datetime
from sqlalchemy import Integer, String, Text, Boolean, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from app.db.base import Base


class Track(str, enum.Enum):
    linkedin = "linkedin"
    github = "github"
    career = "career"


class TaskDefinition(Base):
    """Catalogue entry for a weekly task; assigned to users as UserTask rows."""

    __tablename__ = "task_definitions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    track: Mapped[str] = mapped_column(
        Enum(Track, name="track_enum"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    points_base: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 1 = Monday ... 7 = Sunday
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
