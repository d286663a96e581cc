#!/usr/bin/env python3
"""
Seed test data for verifying the back office locally.

Creates sales reps plus a handful of records of every kind:
  1. RFPs (pending, processed, legacy "En cours") with LinkedIn links
  2. Needs (open, in progress, filled)
  3. Prospects with and without a CV
  4. Client-need profiles matched to open needs
  5. Reference marketplace entries

Rows are inserted directly, so no notification jobs are scheduled.

Usage:
    python scripts/seed_test_data.py          # seed all scenarios
    python scripts/seed_test_data.py --clear  # wipe seeded data first

Requires: DATABASE_URL set (or defaults to sqlite:///local.db).
"""
import sys
import os
import uuid
import argparse
from datetime import datetime, timezone, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from app.config import STATUS_TO_PROCESS, STATUS_PROCESSED
from app.database import get_session, engine, Base
from app.models.client_need import ClientNeed
from app.models.linkedin_link import LinkedInLink
from app.models.need import Need
from app.models.prospect import Prospect
from app.models.reference import Reference
from app.models.rfp import RFP
from app.models.sales_rep import SalesRep


SALES_REPS = [
    {'code': 'JDU', 'name': 'Jean Dupont',   'email': 'jean.dupont@example.com',   'is_admin': True},
    {'code': 'AMA', 'name': 'Alice Martin',  'email': 'alice.martin@example.com',  'is_admin': False},
    {'code': 'PDU', 'name': 'Pierre Durand', 'email': 'pierre.durand@example.com', 'is_admin': False},
]

# Prefix for seeded IDs so we can clear them
SEED_PREFIX = 'seed-'

# Children first so foreign keys never dangle
SEEDED_MODELS = [LinkedInLink, ClientNeed, Prospect, Reference, RFP, Need, SalesRep]


def make_id():
    return SEED_PREFIX + str(uuid.uuid4())


def _midnight(days_ago):
    day = datetime.now(timezone.utc) - timedelta(days=days_ago)
    return day.replace(hour=0, minute=0, second=0, microsecond=0)


# ── Scenarios ────────────────────────────────────────────────────────────────

def seed_sales_reps(session):
    reps = []
    for r in SALES_REPS:
        existing = session.query(SalesRep).filter_by(code=r['code']).first()
        if existing:
            reps.append(existing)
            continue
        rep = SalesRep(id=make_id(), **r)
        session.add(rep)
        reps.append(rep)
    session.flush()
    print(f'  [1] Sales reps: {", ".join(r.code for r in reps)}')
    return reps


def seed_rfps(session, reps):
    rows = [
        ('Acme', 'Développeur Java senior', 'Lille', 650, STATUS_TO_PROCESS, 1),
        ('Globex', 'Data engineer Spark', 'Paris', 700, STATUS_TO_PROCESS, 3),
        ('Initech', 'Chef de projet MOA', 'Lyon', None, STATUS_PROCESSED, 10),
        ('Umbrella', 'DevOps Kubernetes', 'Remote', 600, 'En cours', 20),
    ]
    rfps = []
    for i, (client, mission, location, rate, status, age) in enumerate(rows):
        created = _midnight(age)
        rfp = RFP(
            id=make_id(), client=client, mission=mission, location=location,
            max_rate=rate, status=status, created_at=created,
            start_date=created + timedelta(days=30),
            assigned_to=reps[i % len(reps)].id, is_read=age > 5,
        )
        session.add(rfp)
        rfps.append(rfp)
    session.flush()

    for rfp in rfps[:2]:
        for handle in ('marie-lefevre', 'thomas-bernard'):
            session.add(LinkedInLink(id=make_id(), rfp_id=rfp.id,
                                     url=f'https://www.linkedin.com/in/{handle}'))
    print(f'  [2] RFPs: {len(rfps)} (4 LinkedIn links)')
    return rfps


def seed_needs(session, reps):
    rows = [
        ('Développeur Python', 'Acme', 'Ouvert'),
        ('Architecte cloud', 'Globex', 'En cours'),
        ('Scrum master', 'Initech', 'Pourvu'),
    ]
    needs = []
    for title, client, status in rows:
        need = Need(id=make_id(), title=title, client=client, status=status,
                    location='Lille', skills='Python, AWS', created_by=reps[0].email)
        session.add(need)
        needs.append(need)
    session.flush()
    print(f'  [3] Needs: {len(needs)}')
    return needs


def seed_prospects(session, reps):
    rows = [
        ('Acme', 'Immédiate', 550, None, 'cv-marie.pdf'),
        ('Globex', '1 mois', None, 52000, None),
        ('Initech', None, None, None, None),
    ]
    for i, (account, availability, rate, salary, file_name) in enumerate(rows):
        session.add(Prospect(
            id=make_id(), target_account=account, availability=availability,
            daily_rate=rate, salary_expectations=salary, residence='Lille',
            file_name=file_name,
            file_url=f'https://files.example.com/cvs/{file_name}' if file_name else None,
            text_content='' if file_name else 'Profil transmis par message',
            assigned_to=reps[i % len(reps)].id, status=STATUS_TO_PROCESS,
        ))
    print(f'  [4] Prospects: {len(rows)}')


def seed_client_needs(session, reps, needs):
    open_needs = [n for n in needs if n.status in ('Ouvert', 'En cours')]
    for i, need in enumerate(open_needs):
        session.add(ClientNeed(
            id=make_id(), selected_need_id=need.id, selected_need_title=need.title,
            availability='Immédiate', daily_rate=600 + 50 * i, mobility='France',
            assigned_to=reps[i % len(reps)].id, status=STATUS_TO_PROCESS,
        ))
    print(f'  [5] Client-need profiles: {len(open_needs)}')


def seed_references(session, reps):
    rows = [('Acme', 'Développeur Python', 'Sophie Laurent'), ('Globex', 'Architecte cloud', None)]
    for i, (client, need, tech_name) in enumerate(rows):
        session.add(Reference(
            id=make_id(), client=client, need=need, tech_name=tech_name,
            assigned_to=reps[i % len(reps)].id, created_by=reps[0].email,
        ))
    print(f'  [6] References: {len(rows)}')


# ── Clear / Main ─────────────────────────────────────────────────────────────

def clear_seeded_data(session):
    """Remove every row whose id carries the seed prefix."""
    total = 0
    for model in SEEDED_MODELS:
        total += session.query(model).filter(model.id.like(f'{SEED_PREFIX}%')).delete(synchronize_session=False)
    session.commit()

    if not total:
        print('No seeded data found.')
        return
    print(f'Cleared {total} seeded rows.')


def main():
    parser = argparse.ArgumentParser(description='Seed test data for local verification')
    parser.add_argument('--clear', action='store_true', help='Clear seeded data before (or instead of) seeding')
    parser.add_argument('--clear-only', action='store_true', help='Only clear, do not re-seed')
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        # Ensure tables exist (for SQLite local dev)
        Base.metadata.create_all(engine)

        session = get_session()
        try:
            if args.clear or args.clear_only:
                clear_seeded_data(session)
                if args.clear_only:
                    return

            print('Seeding test data...')
            reps = seed_sales_reps(session)
            seed_rfps(session, reps)
            needs = seed_needs(session, reps)
            seed_prospects(session, reps)
            seed_client_needs(session, reps, needs)
            seed_references(session, reps)
            session.commit()
            print('\nDone! Sign in as jean.dupont@example.com to verify.')

        except Exception as e:
            session.rollback()
            print(f'Error: {e}')
            raise
        finally:
            session.close()


if __name__ == '__main__':
    main()
