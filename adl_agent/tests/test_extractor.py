"""
Tests for Decision Extractor

Tests the ordered delimiter chain: bracket, curly, paren, speech, simple.
"""

import pytest


class TestDelimiterForms:
    """Each form recovers exactly the enclosed text, trimmed"""

    @pytest.mark.parametrize("text,expected", [
        ("@adl ['Use Kafka for events']", "Use Kafka for events"),
        ('@ADL ["Use Kafka for events"]', "Use Kafka for events"),
        ("@adl [Use Kafka for events]", "Use Kafka for events"),
        ("   @adl   [   Use Kafka for events   ]   ", "Use Kafka for events"),
        ('@adl [Adopt "Kafka"]', 'Adopt "Kafka"'),
        ('@adl ["Kafka" is our event bus]', '"Kafka" is our event bus'),
        ("@adl ['Kafka' is our event bus]", "'Kafka' is our event bus"),
        ("@adl [ \"'Kafka' is our event bus\" ]", "'Kafka' is our event bus"),
    ])
    def test_bracket_form(self, text, expected):
        from adl_agent.capture.extractor import find_decision

        match = find_decision(text)

        assert match is not None
        assert match.decision == expected
        assert match.form == "bracket"

    def test_curly_form(self):
        from adl_agent.capture.extractor import find_decision

        match = find_decision("@adl {  Move billing to Postgres }")

        assert match.decision == "Move billing to Postgres"
        assert match.form == "curly"

    def test_paren_form(self):
        from adl_agent.capture.extractor import find_decision

        match = find_decision("@ADL ( Retire the legacy CRM )")

        assert match.decision == "Retire the legacy CRM"
        assert match.form == "paren"

    def test_speech_form(self):
        from adl_agent.capture.extractor import find_decision

        match = find_decision("ADL we will use Kafka for events END ADL")

        assert match.decision == "we will use Kafka for events"
        assert match.form == "speech"

    def test_speech_form_spans_lines(self):
        from adl_agent.capture.extractor import extract_decision

        text = "adl we will\nuse Kafka\nfor events\nend adl"

        assert extract_decision(text) == "we will\nuse Kafka\nfor events"

    def test_simple_form(self):
        from adl_agent.capture.extractor import find_decision

        match = find_decision("@adl Use Kafka for events")

        assert match.decision == "Use Kafka for events"
        assert match.form == "simple"

    def test_simple_form_stops_at_field_key(self):
        from adl_agent.capture.extractor import extract_decision

        assert extract_decision('@adl Use Kafka author:"Jo" status:"Accepted"') == "Use Kafka"
        assert extract_decision('@adl Use Kafka Title:"Kafka"') == "Use Kafka"

    def test_case_is_preserved(self):
        from adl_agent.capture.extractor import extract_decision

        assert extract_decision("@ADL [Adopt GraphQL for the BFF]") == "Adopt GraphQL for the BFF"


class TestPriority:
    """Higher priority forms win"""

    def test_bracket_before_curly(self):
        from adl_agent.capture.extractor import find_decision

        assert find_decision("@adl [Bracketed] @adl {Curly}").form == "bracket"

    def test_curly_before_paren(self):
        from adl_agent.capture.extractor import find_decision

        assert find_decision("@adl {Curly} @adl (Paren)").form == "curly"

    def test_speech_before_simple(self):
        from adl_agent.capture.extractor import find_decision

        match = find_decision("@adl we will use Kafka end adl")

        assert match.form == "speech"
        assert match.decision == "we will use Kafka"

    def test_pattern_order(self):
        from adl_agent.capture.extractor import DECISION_PATTERNS

        assert [p.form for p in DECISION_PATTERNS] == ["bracket", "curly", "paren", "speech", "simple"]


class TestNoMatch:
    """Inputs without a decision payload yield None"""

    @pytest.mark.parametrize("text", [
        None,
        "",
        "   ",
        "hello team",
        "@adl",
        "@adl [",
        "@adl [ ]",
        "@adl ((",
        '@adl author:"Jo"',
        "adl we will migrate",
    ])
    def test_returns_none(self, text):
        from adl_agent.capture.extractor import extract_decision

        assert extract_decision(text) is None

    @pytest.mark.parametrize("text", [
        "@adl [We decided to adopt Kubernetes]",
        "@adl {Retire the legacy CRM}",
        "@adl (Move billing to Postgres)",
        "adl we will use Kafka end adl",
        "@adl Use Kafka for events",
    ])
    def test_no_double_extraction(self, text):
        """Re-running extraction on an extracted decision finds nothing"""
        from adl_agent.capture.extractor import extract_decision

        decision = extract_decision(text)

        assert decision
        assert extract_decision(decision) is None
