"""
Test configuration and fixtures for LoanLink backend tests.
"""
import os

os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from typing import AsyncGenerator
from datetime import datetime, timezone

from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from loanlink.core.database import Database, get_db
from loanlink.core.security import create_access_token
from loanlink.modules.payments.services import get_payment_gateway
from main import app


# ============================================================
# Database Fixtures
# ============================================================

@pytest.fixture
def db() -> Database:
    """Fresh in-memory document store for each test"""
    client = AsyncMongoMockClient()
    return Database(client["loanlink_test"])


class FakePaymentGateway:
    """Records requested intents instead of calling Stripe"""

    def __init__(self):
        self.amounts = []

    async def create_payment_intent(self, amount_cents: int) -> str:
        self.amounts.append(amount_cents)
        return f"pi_test_{amount_cents}_secret_abc"


@pytest.fixture
def payment_gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
async def client(db, payment_gateway) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and payment overrides"""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================================
# User Fixtures
# ============================================================

async def _insert_user(db: Database, email: str, role: str, name: str) -> dict:
    user = {
        "email": email,
        "name": name,
        "role": role,
        "status": "active",
        "createdAt": datetime.now(timezone.utc),
    }
    result = await db.users.insert_one(user)
    user["_id"] = result.inserted_id
    return user


@pytest.fixture
async def borrower(db):
    return await _insert_user(db, "borrower@example.com", "borrower", "Bora Borrower")


@pytest.fixture
async def manager(db):
    return await _insert_user(db, "manager@example.com", "manager", "Mona Manager")


@pytest.fixture
async def admin(db):
    return await _insert_user(db, "admin@example.com", "admin", "Ada Admin")


def bearer(email: str) -> dict:
    """Authorization header carrying a fresh token for ``email``"""
    token = create_access_token({"email": email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_headers():
    return bearer


@pytest.fixture
def borrower_headers(borrower):
    return bearer(borrower["email"])


@pytest.fixture
def manager_headers(manager):
    return bearer(manager["email"])


@pytest.fixture
def admin_headers(admin):
    return bearer(admin["email"])


# ============================================================
# Loan / Application Fixtures
# ============================================================

@pytest.fixture
async def test_loan(db):
    loan = {
        "title": "Small Business Starter",
        "category": "business",
        "interestRate": 8.5,
        "maxLimit": 5000,
        "showOnHome": True,
        "createdAt": datetime.now(timezone.utc),
    }
    result = await db.loans.insert_one(loan)
    loan["_id"] = result.inserted_id
    return loan


@pytest.fixture
async def pending_application(db, borrower, test_loan):
    application = {
        "borrowerEmail": borrower["email"],
        "loanId": str(test_loan["_id"]),
        "status": "pending",
        "feeStatus": "unpaid",
        "appliedAt": datetime.now(timezone.utc),
    }
    result = await db.applications.insert_one(application)
    application["_id"] = result.inserted_id
    return application
