#!/usr/bin/env python3
"""
Script to verify that the goal tracker tables exist and report anchor health
"""
import asyncio
import sys
import platform
from sqlalchemy import inspect, text
from app.core.database import engine

EXPECTED_TABLES = ("users", "categories", "goals")

async def verify_database():
    """Check tables, migration status and goal anchors"""

    try:
        async with engine.connect() as conn:
            print("🔗 Connected to database successfully!")

            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            print("\n📋 Tables:")
            missing = [t for t in EXPECTED_TABLES if t not in tables]
            for table in EXPECTED_TABLES:
                print(f"   {'❌' if table in missing else '✅'} {table}")

            print("\n🔄 Migration status:")
            if "alembic_version" in tables:
                result = await conn.execute(text("SELECT version_num FROM alembic_version"))
                version = result.fetchone()
                print(f"   ✅ Current Alembic version: {version[0] if version else 'none'}")
            else:
                print("   ⚠️  No alembic_version table (tables created by the app on startup?)")

            if missing:
                print(f"\n❌ Missing tables: {', '.join(missing)}")
                sys.exit(1)

            # Weekly/monthly goals without an anchor get healed by the next sync
            print("\n📊 Goal statistics:")
            result = await conn.execute(text("""
                SELECT timeframe,
                       COUNT(*),
                       SUM(CASE WHEN completed THEN 1 ELSE 0 END),
                       SUM(CASE
                             WHEN timeframe = 'weekly' AND week_start_date IS NULL THEN 1
                             WHEN timeframe = 'monthly' AND month_start_date IS NULL THEN 1
                             WHEN timeframe = 'daily' AND goal_date IS NULL THEN 1
                             ELSE 0 END)
                FROM goals
                GROUP BY timeframe
                ORDER BY timeframe
            """))
            for timeframe, total, completed, unanchored in result.fetchall():
                print(f"   📈 {timeframe}: {total} goals, {completed or 0} completed, {unanchored or 0} without anchor")

        print("\n✅ Database verification completed successfully!")

    finally:
        await engine.dispose()

def main():
    """Main function with proper asyncio handling"""
    if platform.system() == 'Windows':
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

    try:
        asyncio.run(verify_database())
    except Exception as e:
        print(f"❌ Database verification failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
