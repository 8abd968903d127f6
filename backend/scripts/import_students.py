"""CLI script to load students from a JSON file into the backend DB.

The file holds a list of objects with the same fields as the
`addStudent` body (`name`, `password`, `branch`, `percentage`, `phone`,
`email`). Invalid records are reported and skipped.

Usage: python scripts/import_students.py students.json [--dry-run]
"""
import sys
import argparse
import json
import pathlib
# Ensure `backend/` is on sys.path so `student_app` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from pydantic import ValidationError
from sqlmodel import Session
from student_app.database import engine, create_db_and_tables
from student_app import services
from student_app.schemas import StudentIn


def main(path: pathlib.Path, dry_run: bool = False) -> int:
    """Validate every record in `path` and store the valid ones.

    Returns the number of students created (or that would be created
    with `dry_run`).
    """
    records = json.loads(path.read_text(encoding='utf-8'))
    if not isinstance(records, list):
        print(f'{path}: expected a JSON list of students')
        return 0
    create_db_and_tables()
    created = 0
    with Session(engine) as session:
        svc = services.StudentService(session)
        for idx, rec in enumerate(records):
            try:
                payload = StudentIn.model_validate(rec)
            except ValidationError as e:
                print(f'record {idx}: skipped, {e.error_count()} validation error(s)')
                continue
            if not dry_run:
                student = svc.add(payload)
                print(f'record {idx}: created id {student.id}')
            created += 1
    print(f'Total created students: {created}')
    return created


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('path', type=pathlib.Path, help='JSON file with a list of students')
    parser.add_argument('--dry-run', action='store_true', help='Validate only, write nothing')
    args = parser.parse_args()
    main(args.path, dry_run=args.dry_run)
