# app/crud/category.py
import random
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.core.db_utils import with_db_retry
from app.models.category import Category, CATEGORY_COLORS
from typing import List, Optional
import uuid
from app.schemas.category import CategoryCreate

@with_db_retry()
async def get_categories_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Category]:
    result = await db.execute(select(Category).where(Category.user_id == user_id))
    return result.scalars().all()

@with_db_retry()
async def get_category_ids_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[uuid.UUID]:
    result = await db.execute(select(Category.id).where(Category.user_id == user_id))
    return list(result.scalars().all())

@with_db_retry()
async def get_category_by_id(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    # Owner-scoped: another user's category resolves to None
    result = await db.execute(
        select(Category).where(Category.id == category_id, Category.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_category_for_user(user_id: uuid.UUID, cat_in: CategoryCreate, db: AsyncSession) -> Category:
    new_cat = Category(
        name=cat_in.name.strip(),
        color=random.choice(CATEGORY_COLORS),
        user_id=user_id,
    )
    db.add(new_cat)
    await db.commit()
    await db.refresh(new_cat)
    return new_cat
