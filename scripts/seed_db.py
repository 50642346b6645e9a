"""
Seed script for demo complaints in Firestore.

Usage:
  - Dry run (default): python scripts/seed_db.py
  - Apply to configured Firestore: python scripts/seed_db.py --apply
  - Custom seed file: python scripts/seed_db.py --seed ./demo_complaints.json --apply

Behavior:
  - Loads a JSON list of complaints (built-in demo set when no file is given).
  - Validates each entry as a Complaint (status defaults to "submitted").
  - Adds each one to the `complaints` collection through ComplaintRepository.

NOTE: Ensure `FIREBASE_CREDENTIALS_PATH` is set in `.env` before applying.
"""

import argparse
import json
import os
from datetime import datetime, timedelta, timezone
from typing import List

from safety_hub.config.firebase import get_db
from safety_hub.models.complaint import Complaint
from safety_hub.services.complaint_service import ComplaintRepository

DEMO_COMPLAINTS = [
    {
        "userId": "demo-user-1",
        "userEmail": "demo1@example.com",
        "complaint": "Followed from the metro exit to the main road late at night.",
        "location": "19.0760, 72.8777",
    },
    {
        "userId": "demo-user-2",
        "userEmail": "demo2@example.com",
        "complaint": "Repeated catcalling near the bus stop every evening.",
        "location": "Location not available",
        "status": "in-progress",
    },
    {
        "userId": "demo-user-1",
        "userEmail": "demo1@example.com",
        "complaint": "Streetlights out on the lane behind the college.",
        "location": "28.6139, 77.2090",
        "status": "resolved",
    },
]


def load_seed(path: str) -> List[dict]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def build_complaints(entries: List[dict]) -> List[Complaint]:
    now = datetime.now(timezone.utc)
    complaints = []
    for offset, entry in enumerate(entries):
        entry = dict(entry)
        entry.setdefault("timestamp", (now - timedelta(hours=offset)).isoformat())
        complaints.append(Complaint.model_validate(entry))
    return complaints


def write_to_db(repository: ComplaintRepository, complaints: List[Complaint], apply: bool = False):
    for complaint in complaints:
        print(f"Preparing: [{complaint.status.value}] {complaint.user_email}: {complaint.complaint[:50]}")
        if not apply:
            continue
        complaint_id = repository.create(complaint)
        print(f"Wrote: complaints/{complaint_id}")


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write seed to Firestore instead of dry-run")
    parser.add_argument("--seed", help="Path to a JSON list of complaints")
    args = parser.parse_args()

    if args.seed:
        if not os.path.exists(args.seed):
            print(f"Seed file not found: {args.seed}")
            return
        entries = load_seed(args.seed)
    else:
        entries = DEMO_COMPLAINTS

    complaints = build_complaints(entries)

    if args.apply:
        write_to_db(ComplaintRepository(get_db()), complaints, apply=True)
        print("Seeding completed.")
    else:
        write_to_db(None, complaints)
        print("Dry run complete. Re-run with --apply to write to Firestore.")


if __name__ == "__main__":
    main()
