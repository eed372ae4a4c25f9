"""Fill every section for the first patient (lowest id with role 'patient')."""
import sys

from calmtunes.cli import execute
from calmtunes.config import Settings
from calmtunes.db import Database
from calmtunes.migrations import ALL_SCRIPTS, MigrationScript
from calmtunes.runner import MigrationRunner
from calmtunes.seeds.patient_data import add_patient_test_data, first_patient_id
from calmtunes.seeds.users import ensure_sample_patients


async def add_test_data(settings: Settings) -> int:
    print("🎨 Adding test data for the first patient...\n")
    summary = {}

    async def seed(conn) -> None:
        patient_id = await first_patient_id(conn)
        if patient_id is None:
            # 환자가 없으면 샘플 환자부터 생성
            await ensure_sample_patients(conn)
            patient_id = await first_patient_id(conn)
        summary["patient_id"] = patient_id
        summary["added"] = await add_patient_test_data(conn, patient_id)

    steps = list(ALL_SCRIPTS) + [MigrationScript(name="add_patient_test_data", apply=seed)]
    async with Database(settings) as database:
        result = await MigrationRunner(database).run(steps)

    if result.ok:
        print("\n🎉 Test data added successfully!")
        print(f"📋 Summary for patient ID {summary['patient_id']}:")
        for table, added in summary["added"].items():
            print(f"  - {table}: {added} added")
    return result.exit_code


def main() -> int:
    return execute(add_test_data)


if __name__ == "__main__":
    sys.exit(main())
