import importlib.util
import json
import uuid
from pathlib import Path

from sqlmodel import Session, select

from student_app import models
from student_app.database import engine

SCRIPT = Path(__file__).resolve().parents[1] / 'scripts' / 'import_students.py'


def _load_script():
    spec = importlib.util.spec_from_file_location('import_students', SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _names(name):
    with Session(engine) as session:
        return session.exec(select(models.Student).where(models.Student.name == name)).all()


def test_import_skips_invalid_records_and_honours_dry_run(tmp_path):
    name = f'imp{uuid.uuid4().hex[:8]}'
    records = [
        {'name': name, 'password': '53451124', 'branch': 'IT', 'percentage': '88',
         'phone': '1505552388', 'email': 'goodjob@gmail.com'},
        {'name': 'x', 'password': 'short', 'branch': '', 'percentage': '1000',
         'phone': '1', 'email': 'nope'},
    ]
    path = tmp_path / 'students.json'
    path.write_text(json.dumps(records), encoding='utf-8')
    script = _load_script()

    assert script.main(path, dry_run=True) == 1
    assert _names(name) == []

    assert script.main(path) == 1
    stored = _names(name)
    assert len(stored) == 1
    assert stored[0].percentage == '88'
    assert stored[0].password_hash != '53451124'


def test_import_rejects_non_list_file(tmp_path):
    path = tmp_path / 'students.json'
    path.write_text(json.dumps({'name': 'tommy'}), encoding='utf-8')
    assert _load_script().main(path) == 0
