# Overview: Idempotent schema creation and seed data for a fresh installation.

"""
Seed Service

Every function may be run repeatedly: rows are inserted only when absent.
- users: by user_id
- tax rates: by tax_name
- staff, customers: only when the table is empty
"""

from __future__ import annotations

from ..extensions import db
from ..models import Customer, Staff, TaxRate, User
from ..time_utils import utcnow
from .auth_service import hash_password
from .tax_rate_service import generate_next_tax_code


SYSTEM_USER = "system"

DEFAULT_USERS = [
    ("00001", "user1@example.com", "password1"),
    ("00002", "user2@example.com", "password2"),
]

DEFAULT_TAX_RATES = [
    # (tax_name, rate, calculation_type)
    ("10%", 10, 3),
    ("8%(軽減税率)", 8, 3),
    ("8%(経過措置)", 8, 3),
    ("非課税", 0, 3),
    ("対象外", 0, 3),
]

DEFAULT_STAFF = [
    {
        "staff_code": "00001",
        "staff_name": "山田 太郎",
        "email": "yamada@example.com",
        "department": "営業部",
        "position": "部長",
        "phone_number": "0312345678",
    },
    {
        "staff_code": "00002",
        "staff_name": "鈴木 一郎",
        "email": "suzuki@example.com",
        "department": "営業部",
        "position": "課長",
        "phone_number": "0312345679",
    },
    {
        "staff_code": "00003",
        "staff_name": "佐藤 花子",
        "email": "sato@example.com",
        "department": "営業部",
        "position": "主任",
        "phone_number": "0312345680",
    },
]

DEFAULT_CUSTOMER = {
    "customer_code": "0000000000000001",
    "customer_name": "サンプル株式会社",
    "department_name": "営業部",
    "honorific": "御中",
    "postal_code": "1000001",
    "address1": "東京都千代田区千代田1-1",
    "address2": "千代田ビル10F",
    "phone_number": "0312345678",
    "fax_number": "0312345679",
    "email": "sample@example.com",
    "invoice_number": "1234567890123",
    "invoice_issuance": "有",
    "invoice_method": "郵送",
    "closing_day": "末日",
    "payment_day": "翌月末日",
    "tax_processing": "請求書単位",
    "tax_rounding": "切捨て",
}


def seed_users() -> int:
    created = 0
    for user_id, email, password in DEFAULT_USERS:
        if db.session.query(User).filter_by(user_id=user_id).first():
            continue
        if db.session.query(User).filter_by(email=email).first():
            continue
        db.session.add(User(user_id=user_id, email=email, password_hash=hash_password(password)))
        # Flush so a later generate call sees this row
        db.session.flush()
        created += 1
    db.session.commit()
    return created


def seed_tax_rates(created_by: str = DEFAULT_USERS[0][0]) -> int:
    created = 0
    for tax_name, rate, calculation_type in DEFAULT_TAX_RATES:
        if db.session.query(TaxRate).filter_by(tax_name=tax_name).first():
            continue
        now = utcnow()
        db.session.add(TaxRate(
            tax_code=generate_next_tax_code(),
            tax_name=tax_name,
            rate=rate,
            calculation_type=calculation_type,
            created_by=created_by,
            updated_by=created_by,
            created_at=now,
            updated_at=now,
        ))
        db.session.flush()
        created += 1
    db.session.commit()
    return created


def seed_staff() -> int:
    if db.session.query(Staff).count():
        return 0
    now = utcnow()
    for row in DEFAULT_STAFF:
        db.session.add(Staff(**row, is_active=True, created_by=SYSTEM_USER, created_at=now, updated_at=now))
    db.session.commit()
    return len(DEFAULT_STAFF)


def seed_customers() -> int:
    if db.session.query(Customer).count():
        return 0
    first_staff = db.session.query(Staff).order_by(Staff.id.asc()).first()
    db.session.add(Customer(
        **DEFAULT_CUSTOMER,
        staff_id=first_staff.id if first_staff else None,
        created_by=SYSTEM_USER,
        created_at=utcnow(),
        updated_at=None,
    ))
    db.session.commit()
    return 1


def initialize_database() -> dict:
    """Create missing tables and insert missing seed rows. Returns counts created."""
    db.create_all()
    return {
        "users": seed_users(),
        "tax_rates": seed_tax_rates(),
        "staff": seed_staff(),
        "customers": seed_customers(),
    }
