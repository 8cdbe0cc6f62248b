"""
Create the tee-sheet schema from the ORM metadata.

    python scripts/init_db.py            # create missing tables
    python scripts/init_db.py --demo     # ... and seed a demo course

Tables are created once from teesheet.models; there are no incremental
patch migrations.
"""

import argparse
import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from sqlalchemy import text

from teesheet.database import SessionLocal, engine
from teesheet.models import (
    Base,
    GolfCourseInstances,
    TeeSheets,
    TeeSheetTemplates,
    Timeframes,
)


def create_schema() -> None:
    Base.metadata.create_all(engine)
    print(f"Schema ready: {', '.join(sorted(Base.metadata.tables))}")


def seed_demo() -> None:
    db = SessionLocal()
    try:
        if db.query(GolfCourseInstances).count():
            print("Demo data skipped: courses already exist")
            return

        course = GolfCourseInstances(name="Demo Golf Club", timezone="America/Denver")
        sheet = TeeSheets(course=course, name="Main", daily_release_local="07:00")
        template = TeeSheetTemplates(
            tee_sheet=sheet,
            name="Weekday",
            color="#2E7D32",
            interval_mins=10,
            is_default=1,
        )
        template.timeframes = [
            Timeframes(position=0, start_time_local="07:00", end_time_local="08:00"),
            Timeframes(position=1, start_time_local="09:00", end_time_local="11:00"),
        ]
        db.add(course)
        db.commit()
        print(f"Demo course created: tee_sheet_id={sheet.id}")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--demo", action="store_true", help="seed a demo course")
    args = parser.parse_args()

    create_schema()
    with engine.connect() as conn:
        print("DB OK:", conn.execute(text("SELECT 1")).scalar())
    if args.demo:
        seed_demo()


if __name__ == "__main__":
    main()
