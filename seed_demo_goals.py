#!/usr/bin/env python3
"""
Standalone script to create a demo user with categories and goals
Usage: python seed_demo_goals.py [email]

Prints a bearer token that can be used against /api/v1/sync-goals.
"""

import asyncio
import sys
from datetime import timedelta
from sqlalchemy import select
from app.core.auth import User, create_access_token
from app.core.clock import system_now
from app.core.database import AsyncSessionLocal, Base, engine
from app.crud.category import create_category_for_user, get_categories_for_user
from app.crud.goal import create_goal, set_goal_completed
from app.models.goal import Timeframe
from app.schemas.category import CategoryCreate
from app.schemas.goal import GoalCreate

DEMO_GOALS = {
    "Health": [
        ("Drink 2L of water", Timeframe.daily),
        ("Run three times", Timeframe.weekly),
        ("Book a checkup", Timeframe.monthly),
    ],
    "Learning": [
        ("Read for 20 minutes", Timeframe.daily),
        ("Finish one course module", Timeframe.weekly),
        ("Read a book", Timeframe.monthly),
    ],
}

async def seed(email: str):
    print("Seeding demo goals...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    now = system_now()
    today = now.date()

    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalars().first()
            if user:
                print(f"User with email {email} already exists, reusing it")
            else:
                user = User(email=email)
                session.add(user)
                await session.commit()
                await session.refresh(user)

            existing = {c.name for c in await get_categories_for_user(user.id, session)}
            for name, goals in DEMO_GOALS.items():
                if name in existing:
                    continue
                category = await create_category_for_user(user.id, CategoryCreate(name=name), session)
                print(f"📁 {category.name} ({category.color})")
                for title, timeframe in goals:
                    # Anchor weekly/monthly goals a period back so the first sync has work to do
                    on_date = today if timeframe == Timeframe.daily else today - timedelta(days=35)
                    goal = await create_goal(
                        category.id,
                        GoalCreate(title=title, timeframe=timeframe, on_date=on_date),
                        today,
                        session,
                    )
                    await set_goal_completed(goal, True, now, session)
                    print(f"   🎯 [{timeframe.value}] {title}")

            token = create_access_token(str(user.id))
            print(f"✅ Demo data ready for {email}")
            print(f"🔑 Bearer token: {token}")

    finally:
        await engine.dispose()

if __name__ == "__main__":
    asyncio.run(seed(sys.argv[1] if len(sys.argv) > 1 else "demo@example.com"))
