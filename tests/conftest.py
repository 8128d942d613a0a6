"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from bizledger.api.dependencies import get_today
from bizledger.api.main import create_app
from bizledger.domain.models import Transaction, TransactionType
from bizledger.infrastructure.cache import result_cache


TODAY = date(2024, 6, 15)


@pytest.fixture(autouse=True)
def clear_result_cache():
    """Each test starts with an empty result cache"""
    result_cache.clear()
    yield
    result_cache.clear()


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client with a pinned reference date"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Six months of steady trading: sales in, rent and supplies out"""
    transactions = []

    for month in range(1, 7):
        transactions.append(
            Transaction(
                id=f"sale_{month}",
                date=date(2024, month, 5),
                amount=3000.0,
                category="Sales",
            )
        )
        transactions.append(
            Transaction(
                id=f"rent_{month}",
                date=date(2024, month, 1),
                amount=-1200.0,
                category="Rent",
            )
        )
        transactions.append(
            Transaction(
                id=f"supplies_{month}",
                date=date(2024, month, 12),
                amount=300.0,
                type=TransactionType.EXPENSE,  # labelled by the caller, sign ignored
                category="Supplies",
            )
        )

    return transactions


@pytest.fixture
def seasonal_transactions() -> list[Transaction]:
    """
    Two years where even calendar months earn 2000 and odd months 1000,
    with a flat 500 expense every month.
    """
    transactions = []

    for year in (2022, 2023):
        for month in range(1, 13):
            transactions.append(
                Transaction(
                    id=f"inc_{year}_{month}",
                    date=date(year, month, 10),
                    amount=2000.0 if month % 2 == 0 else 1000.0,
                    type=TransactionType.INCOME,
                    category="Sales",
                )
            )
            transactions.append(
                Transaction(
                    id=f"exp_{year}_{month}",
                    date=date(year, month, 12),
                    amount=-500.0,
                    category="Overheads",
                )
            )

    return transactions
