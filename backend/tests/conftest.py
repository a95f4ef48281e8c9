"""Shared test fixtures.

Every test gets a fresh in-memory SQLite database so tests are fully isolated.
LLM calls go through tests.fixtures.FakeLLMClient, so no test ever reaches the Anthropic API.
"""

import json
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import funding_advisor.models  # noqa: F401
from funding_advisor.database import Base
from funding_advisor.domain.errors import ProviderFailureError
from funding_advisor.models.company import CompanyModel
from funding_advisor.models.company_case import CompanyCaseModel
from funding_advisor.models.investor_report import InvestorReportModel
from tests.fixtures import FakeLLMClient


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(db_engine) -> Session:
    session = sessionmaker(bind=db_engine)()
    yield session
    session.close()


@pytest.fixture()
def failing_llm() -> FakeLLMClient:
    return FakeLLMClient(error=ProviderFailureError("LLM provider call failed: boom"))


# ── Convenience fixtures ─────────────────────────────────────────────────

@pytest.fixture()
def sample_company(db: Session) -> CompanyModel:
    company = CompanyModel(
        name="Acme Oy",
        business_id="1234567-8",
        country="Finland",
        city="Helsinki",
        employee_count=None,
        stage="seed",
        revenue_eur=1_200_000.0,
        description="Industrial IoT sensors.",
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture()
def sample_case(db: Session, sample_company: CompanyModel) -> CompanyCaseModel:
    case = CompanyCaseModel(
        company_id=sample_company.id,
        case_title="Quick lookup",
        company_summary_text="Acme builds industrial IoT sensors.",
        created_at=datetime(2025, 1, 10, 9, 0, 0),
    )
    db.add(case)
    db.commit()
    db.refresh(case)
    return case


@pytest.fixture()
def sample_report(db: Session, sample_company: CompanyModel) -> InvestorReportModel:
    report = InvestorReportModel(
        company_id=sample_company.id,
        company_name=sample_company.name,
        recommendation=json.dumps({"search_summary": "a", "recommended_investors": []}),
        created_at=datetime(2025, 1, 11, 9, 0, 0),
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    return report
