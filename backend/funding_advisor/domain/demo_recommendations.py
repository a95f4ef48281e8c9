"""Placeholder recommendation rows attached to every lookup case.

Real matching of public programmes and investors is not implemented yet;
each case gets one demo funding programme, and detailed lookups also get
one demo investor, so the frontend has something to render.
"""

from typing import Any, Dict, List

DEMO_FUNDING_PROGRAM: Dict[str, Any] = {
    "kind": "funding_program",
    "name": "Example public R&D funding programme (demo)",
    "provider": "Business Finland (demo)",
    "url": "https://www.businessfinland.fi/",
    "stage_match": None,
    "funding_type": "grant",
    "instrument_category": "national",
    "min_amount_eur": 50000,
    "max_amount_eur": 500000,
    "geography_focus": "FI",
    "sector_focus": "general innovation",
    "score": 0.8,
    "rank": 1,
    "explanation_text": (
        "Demo recommendation: in the real system this would represent a specific "
        "public funding instrument that matches the company profile."
    ),
    "raw_metadata_json": None,
}

DEMO_INVESTOR: Dict[str, Any] = {
    "kind": "investor",
    "name": "Example Nordic VC fund (demo)",
    "provider": "Demo Capital Partners",
    "url": "https://example-vc.demo/",
    "stage_match": "seed",
    "funding_type": "equity",
    "instrument_category": "private",
    "min_amount_eur": 250000,
    "max_amount_eur": 2000000,
    "geography_focus": "Nordic",
    "sector_focus": "technology, digital",
    "score": 0.75,
    "rank": 2,
    "explanation_text": (
        "Demo investor recommendation: in the real system, investors would be "
        "filtered and ranked based on stage, ticket size and sector focus."
    ),
    "raw_metadata_json": None,
}


def build_demo_recommendations(case_id: int, detailed: bool) -> List[Dict[str, Any]]:
    """Row values for the demo recommendations of one case."""
    rows = [dict(DEMO_FUNDING_PROGRAM, case_id=case_id)]
    if detailed:
        rows.append(dict(DEMO_INVESTOR, case_id=case_id))
    return rows
