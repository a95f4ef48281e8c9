"""Unit tests for the history feed and company profiles."""

import json
from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Session

from funding_advisor.engines.history_assembler import clamp_history_limit
from funding_advisor.models.company import CompanyModel
from funding_advisor.models.company_case import CompanyCaseModel
from funding_advisor.models.investor_report import InvestorReportChangeModel, InvestorReportModel
from funding_advisor.repositories.case_repo import CaseRepository
from funding_advisor.repositories.company_repo import CompanyRepository
from funding_advisor.repositories.investor_report_repo import (
    InvestorReportChangeRepository,
    InvestorReportRepository,
)
from funding_advisor.services.history_service import HistoryService

BASE = datetime(2025, 3, 1, 12, 0, 0)


@pytest.fixture()
def service(db: Session) -> HistoryService:
    return HistoryService(
        db,
        CompanyRepository(db),
        CaseRepository(db),
        InvestorReportRepository(db),
        InvestorReportChangeRepository(db),
    )


def _seed_feed(db: Session, company: CompanyModel, cases: int, reports: int) -> None:
    """Cases at even minutes, reports at odd minutes."""
    for i in range(cases):
        db.add(CompanyCaseModel(
            company_id=company.id,
            case_title="Quick lookup",
            company_summary_text=f"case {i}",
            created_at=BASE + timedelta(minutes=2 * i),
        ))
    for i in range(reports):
        db.add(InvestorReportModel(
            company_id=company.id,
            company_name=company.name,
            recommendation=json.dumps({"search_summary": f"report {i}"}),
            created_at=BASE + timedelta(minutes=2 * i + 1),
        ))
    db.commit()


class TestClampHistoryLimit:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 20),
            ("abc", 20),
            ("", 20),
            (True, 20),
            ("nan", 20),
            (5, 5),
            ("5", 5),
            ("7.9", 7),
            (0, 1),
            (-10, 1),
            (1000, 100),
            ("100", 100),
        ],
    )
    def test_clamp(self, raw, expected):
        assert clamp_history_limit(raw) == expected

    def test_custom_bounds(self):
        assert clamp_history_limit(None, default=10, maximum=50) == 10
        assert clamp_history_limit(75, default=10, maximum=50) == 50


class TestRecentHistory:
    def test_merges_newest_first_and_truncates(self, service, sample_company, db):
        _seed_feed(db, sample_company, cases=3, reports=4)

        feed = service.recent_history(5)

        assert len(feed) == 5
        timestamps = [entry.created_at for entry in feed]
        assert timestamps == sorted(timestamps, reverse=True)
        assert [entry.entry_type for entry in feed] == [
            "investment_report",
            "investment_report",
            "lookup",
            "investment_report",
            "lookup",
        ]

    def test_empty_feed(self, service):
        assert service.recent_history() == []

    def test_lookup_entry_shape(self, service, sample_case):
        entry = service.recent_history()[0]

        assert entry.entry_type == "lookup"
        assert entry.case_id == sample_case.id
        assert entry.company_name == "Acme Oy"
        assert entry.summary == "Acme builds industrial IoT sensors."
        assert entry.metrics.name == "Acme Oy"
        assert entry.metrics.business_id == "1234567-8"
        assert entry.metrics.summary == "Acme builds industrial IoT sensors."
        assert entry.manual_change_log == []

    def test_report_entry_includes_change_rows(self, service, sample_report, db):
        db.add_all([
            InvestorReportChangeModel(
                report_id=sample_report.id, json_path="$.a", from_value="1", to_value="2",
                changed_at=datetime(2025, 1, 1),
            ),
            InvestorReportChangeModel(
                report_id=sample_report.id, json_path="$.b", from_value="1", to_value="2",
                changed_at=datetime(2025, 2, 1),
            ),
        ])
        db.commit()

        entry = service.recent_history()[0]

        assert entry.entry_type == "investment_report"
        assert entry.investment_report == {"search_summary": "a", "recommended_investors": []}
        assert [c.json_path for c in entry.manual_change_log] == ["$.b", "$.a"]

    def test_corrupt_report_payload_is_none(self, service, sample_report, db):
        sample_report.recommendation = "{oops"
        db.commit()

        entry = service.recent_history()[0]

        assert entry.investment_report is None

    def test_company_change_log_attached(self, service, sample_case, sample_company, db):
        sample_company.manual_change_log = json.dumps([
            {"column": "city", "from": "Helsinki", "to": "Espoo", "changedAt": "2025-01-01T00:00:00.000Z"}
        ])
        db.commit()

        entry = service.recent_history()[0]

        assert entry.manual_change_log[0].to_value == "Espoo"

    def test_camel_case_serialization(self, service, sample_case):
        dumped = service.recent_history()[0].model_dump(by_alias=True)

        assert dumped["entryType"] == "lookup"
        assert "caseId" in dumped and "manualChangeLog" in dumped
        assert "funding_need_type_guess" in dumped["metrics"]


class TestCompanyProfile:
    def test_unknown_company(self, service):
        assert service.company_profile(42) is None

    def test_without_cases_uses_description(self, service, sample_company):
        profile = service.company_profile(sample_company.id)

        assert profile.created_at is None
        assert profile.metrics.summary == "Industrial IoT sensors."

    def test_latest_case_wins(self, service, sample_company, sample_case, db):
        newer = CompanyCaseModel(
            company_id=sample_company.id,
            case_title="Detailed profile",
            company_summary_text="Newer summary",
            created_at=sample_case.created_at + timedelta(days=1),
        )
        db.add(newer)
        db.commit()

        profile = service.company_profile(sample_company.id)

        assert profile.created_at == newer.created_at
        assert profile.metrics.summary == "Newer summary"
