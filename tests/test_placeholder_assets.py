"""Placeholder selection tests."""

import xml.etree.ElementTree as ET

import pytest

from services.placeholder_assets import PLACEHOLDER_CATEGORIES, PLACEHOLDER_SVG, placeholder_for


@pytest.mark.parametrize("description,kind,caption", [
    ("Planets orbiting the sun", "illustration", "Space and Planets"),
    ("the planetary orbit", "illustration", "Space and Planets"),
    ("A court ruling on appeal", "illustration", "Legal Process"),
    ("Mahkeme kararı", "illustration", "Legal Process"),
    ("Lesson plan for teachers", "illustration", "Learning Process"),
    ("Şirket yönetimi", "illustration", "Business Process"),
    ("Something unrelated", "illustration", "Educational Visual"),
    ("Each step of onboarding", "diagram", "Process Diagram"),
    ("Organization chart", "diagram", "Structure Diagram"),
    ("Customer flow through checkout", "diagram", "Flow Diagram"),
    ("Compare two options", "diagram", "Comparison Diagram"),
    ("", "diagram", "Diagram Outline"),
])
def test_keyword_matched_caption(description, kind, caption):
    assert caption in placeholder_for(description, kind)


def test_whole_word_match_for_short_keywords():
    # "sun" inside "sunday" is not a hit
    assert "Space and Planets" not in placeholder_for("sunday brunch", "illustration")


def test_headings_follow_kind():
    assert "Preparing visual..." in placeholder_for("", "illustration")
    assert "Preparing diagram..." in placeholder_for("", "diagram")


def test_unknown_kind_returns_fixed_placeholder():
    assert placeholder_for("court", "video") == PLACEHOLDER_SVG


def test_all_placeholders_are_well_formed():
    svgs = [PLACEHOLDER_SVG, placeholder_for("", "illustration"), placeholder_for("", "diagram")]
    for kind, categories in PLACEHOLDER_CATEGORIES.items():
        for keywords, _, _ in categories:
            svgs.append(placeholder_for(keywords[0], kind))

    for svg in svgs:
        root = ET.fromstring(svg)
        assert root.tag == "{http://www.w3.org/2000/svg}svg"
        assert root.get("viewBox") == "0 0 500 300"
