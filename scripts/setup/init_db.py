# scripts/setup/init_db.py
"""
Initialize database — creates all tables and seeds the fixed lookup rows
(alert taxonomy + the dashboard siren).
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text

from app.config import settings
from app.database import SessionLocal, create_tables, engine
from app.models import AlertType, Siren

ALERT_TYPES = {
    1: "Fire",
    2: "Medical emergency",
    3: "Robbery",
    4: "Traffic accident",
    5: "Intrusion",
    6: "Natural disaster",
    7: "Other",
    settings.PANIC_ALERT_TYPE_ID: "Panic button",
}


def seed(db):
    added = 0
    for type_id, description in ALERT_TYPES.items():
        if db.query(AlertType).filter(AlertType.id == type_id).first() is None:
            db.add(AlertType(id=type_id, description=description))
            added += 1
    if db.query(Siren).filter(Siren.id == settings.DASHBOARD_SIREN_ID).first() is None:
        db.add(Siren(id=settings.DASHBOARD_SIREN_ID, description="Dashboard siren", state=0))
        added += 1
    db.commit()
    return added


def main():
    print("🗄️  Alarm DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {engine.url.render_as_string(hide_password=True)}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()

    db = SessionLocal()
    try:
        print(f"🌱 Seeded {seed(db)} lookup row(s)")
    finally:
        db.close()

    tables = sorted(inspect(engine).get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host 0.0.0.0 --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
