# app/models/category.py
import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, Uuid, func
from sqlalchemy.orm import relationship
from app.core.database import Base

# Colors a new category can be given; picked at random on creation
CATEGORY_COLORS = [
    "#8B5CF6", "#3B82F6", "#10B981", "#F59E0B", "#EF4444",
    "#EC4899", "#6366F1", "#14B8A6", "#F97316",
]

class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    # Assigned once at creation, never updated
    color = Column(String(length=7), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="categories")
    goals = relationship("Goal", back_populates="category", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Category name={self.name} user_id={self.user_id}>"
