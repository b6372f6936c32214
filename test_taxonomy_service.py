"""
Test Taxonomy Service (CSV loading with pandas)
"""

import pytest

from advisor_match.models import ClientNeed
from advisor_match.services.taxonomy_service import TaxonomyService


@pytest.fixture(scope="module")
def taxonomy() -> TaxonomyService:
    return TaxonomyService()


def test_loads_bundled_taxonomy(taxonomy):
    assert len(taxonomy.domains) == 7
    assert len(taxonomy.subtopics) == 25

    subtopic = taxonomy.get_subtopic("sub-income-tax")
    assert subtopic.name == "Income Tax Planning"
    assert subtopic.domain.name == "Tax"
    assert subtopic.default_weight == 1.0
    assert subtopic.is_active is True


def test_unknown_subtopic(taxonomy):
    assert taxonomy.get_subtopic("sub-missing") is None


def test_subtopics_for_domain_in_display_order(taxonomy):
    estate = taxonomy.subtopics_for_domain("dom-estate")
    assert [s.id for s in estate] == [
        "sub-estate-basic",
        "sub-wealth-transfer",
        "sub-charitable-giving",
        "sub-family-governance",
    ]


def test_attach_resolves_names(taxonomy):
    needs = [
        ClientNeed(subtopic_id="sub-wealth-transfer", importance=8),
        ClientNeed(subtopic_id="sub-missing", importance=3),
    ]
    attached = taxonomy.attach(needs)

    assert attached[0].subtopic_name == "Wealth Transfer"
    assert attached[0].domain_name == "Estate"
    assert attached[0].importance == 8
    assert attached[1].subtopic_name == "Unknown"
    # originals are left untouched
    assert needs[0].subtopic is None


def test_custom_csv_paths(tmp_path):
    domains = tmp_path / "domains.csv"
    domains.write_text("domain_id,name,description,display_order,is_active\ndom-x,Custom,,1,True\n")
    subtopics = tmp_path / "subtopics.csv"
    subtopics.write_text(
        "subtopic_id,domain_id,name,description,default_weight,display_order,is_active\n"
        "sub-x2,dom-x,Second,,0.5,2,True\n"
        "sub-x1,dom-x,First,Desc,1.0,1,True\n"
        "sub-x3,dom-x,Retired,,1.0,3,False\n"
    )

    service = TaxonomyService(str(domains), str(subtopics))

    assert service.domains["dom-x"].description is None
    assert [s.id for s in service.subtopics_for_domain("dom-x")] == ["sub-x1", "sub-x2"]
    assert len(service.subtopics_for_domain("dom-x", active_only=False)) == 3
    # inactive subtopics stay resolvable
    assert service.get_subtopic("sub-x3").name == "Retired"
