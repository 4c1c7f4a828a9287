"""
Unit tests for FactExtractor.

Tests alias expansion, pattern precedence, value rejection and the
FactNotFound diagnostics.
"""

import pytest

from storefront_qa.core.errors import FactNotFound
from storefront_qa.core.fact_extractor import FactExtractor
from storefront_qa.core.models import Fact, FactSource


class TestAliasExpansion:
    """Test alias expansion."""

    def test_expands_from_table(self, make_page):
        """Key forms first, then table aliases, de-duplicated ignoring case."""
        extractor = FactExtractor(make_page("<p></p>"))

        assert extractor.expand_aliases("rpm") == [
            "rpm",
            "Speed",
            "No-load speed",
            "Speed (RPM)",
            "Rotational Speed",
            "No Load Speed",
            "Speed Range",
        ]

    def test_unknown_key_expands_to_itself(self, make_page):
        extractor = FactExtractor(make_page("<p></p>"))

        assert extractor.expand_aliases("Amperage") == ["Amperage"]

    def test_custom_alias_table(self, make_page):
        """The alias table is injectable."""
        extractor = FactExtractor(make_page("<p></p>"), aliases={"runtime": ("Run time",)})

        assert extractor.expand_aliases("runtime") == ["runtime", "Run time"]


class TestPatternPrecedence:
    """Test which structural pattern wins."""

    @pytest.mark.asyncio
    async def test_no_load_speed_row(self, make_page):
        page = make_page("<table><tr><th>No-load speed</th><td>0–1500/min</td></tr></table>")

        fact = await FactExtractor(page).extract("rpm")

        assert fact.to_dict() == {"key": "rpm", "value": "0–1500/min", "source": "tabular"}

    @pytest.mark.asyncio
    async def test_rpm_from_table_by_alias(self, pdp_snapshot):
        """'rpm' finds the 'No-load speed' row through the 'Speed' alias."""
        extractor = FactExtractor(pdp_snapshot)

        fact = await extractor.extract("rpm")

        assert fact.value == "0-1500/min"
        assert fact.source == FactSource.TABULAR
        assert fact.alias == "Speed"

    @pytest.mark.asyncio
    async def test_table_beats_definition_list(self, pdp_snapshot):
        """Voltage is in both; the table value is returned."""
        extractor = FactExtractor(pdp_snapshot)

        fact = await extractor.extract("voltage")

        assert fact.value == "18 V"
        assert fact.source == FactSource.TABULAR

    @pytest.mark.asyncio
    async def test_definition_list(self, pdp_snapshot):
        extractor = FactExtractor(pdp_snapshot)

        fact = await extractor.extract("weight")

        assert fact.value == "3.4 lbs"
        assert fact.source == FactSource.DEFINITION_LIST

    @pytest.mark.asyncio
    async def test_label_in_parent_text(self, pdp_snapshot):
        """'Torque:' in a <strong>, value after it in the parent <li>."""
        extractor = FactExtractor(pdp_snapshot)

        fact = await extractor.extract("torque")

        assert fact.value == "1,150 in.-lbs."
        assert fact.source == FactSource.LABEL_SIBLING

    @pytest.mark.asyncio
    async def test_label_next_sibling(self, make_page):
        """Value in the element right after the label."""
        page = make_page(
            '<div class="spec"><span>Battery type</span><span>Lithium-ion</span></div>'
        )
        extractor = FactExtractor(page)

        fact = await extractor.extract("battery type")

        assert fact.value == "Lithium-ion"
        assert fact.source == FactSource.LABEL_SIBLING

    @pytest.mark.asyncio
    async def test_raw_text_last_resort(self, pdp_snapshot):
        """Text only present in the markup is found by the raw scan."""
        extractor = FactExtractor(pdp_snapshot)

        fact = await extractor.extract("runtime")

        assert fact.value == "60 min"
        assert fact.source == FactSource.RAW_TEXT

    @pytest.mark.asyncio
    async def test_definition_value_stops_at_next_term(self, make_page):
        """A term without a definition does not borrow the next term's."""
        page = make_page(
            "<dl><dt>Color</dt><dt>Weight</dt><dd>3.4 lbs</dd></dl>"
        )
        extractor = FactExtractor(page)

        assert await extractor.observed_pairs() == [
            {"term": "Color", "definition": ""},
            {"term": "Weight", "definition": "3.4 lbs"},
        ]


class TestValueRejection:
    """Test that label-leaking and empty values never surface."""

    @pytest.mark.asyncio
    async def test_value_containing_alias_falls_through(self, make_page):
        """A single-cell row echoes the label; the definition list answers."""
        page = make_page(
            "<table><tr><td>Amperage</td></tr></table>"
            "<dl><dt>Amperage</dt><dd>5 A</dd></dl>"
        )
        extractor = FactExtractor(page)

        fact = await extractor.extract("amperage")

        assert fact.value == "5 A"
        assert fact.source == FactSource.DEFINITION_LIST

    @pytest.mark.asyncio
    async def test_empty_table_value_falls_through(self, make_page):
        """An empty cell is rejected and the label pattern answers."""
        page = make_page(
            "<div><span>Color</span><span>Blue</span></div>"
            "<table><tr><th>Color</th><td></td></tr></table>"
        )
        extractor = FactExtractor(page)

        fact = await extractor.extract("color")

        assert fact.value == "Blue"
        assert fact.source == FactSource.LABEL_SIBLING

    @pytest.mark.asyncio
    async def test_later_alias_after_rejection(self, make_page):
        """'RPM' in the value cell is rejected; 'Speed' in the header accepts it."""
        page = make_page(
            "<table><tr><th>Rotational Speed</th><td>0-2100 RPM</td></tr></table>"
        )
        extractor = FactExtractor(page)

        fact = await extractor.extract("rpm")

        assert fact.value == "0-2100 RPM"
        assert fact.alias == "Speed"
        assert fact.source == FactSource.TABULAR


class TestNotFound:
    """Test absent facts."""

    @pytest.mark.asyncio
    async def test_diagnostics_list_observed_pairs(self, pdp_snapshot):
        """FactNotFound carries every table row and definition pair."""
        extractor = FactExtractor(pdp_snapshot)

        with pytest.raises(FactNotFound) as exc_info:
            await extractor.extract("battery life")

        error = exc_info.value
        assert error.key == "battery life"
        assert {"header": "No-load speed", "data": "0-1500/min"} in error.diagnostics
        assert {"term": "Weight", "definition": "3.4 lbs"} in error.diagnostics
        assert len(error.diagnostics) == 5

    @pytest.mark.asyncio
    async def test_get_value_returns_none(self, pdp_snapshot, caplog):
        """get_value() logs and returns None instead of raising."""
        extractor = FactExtractor(pdp_snapshot)

        with caplog.at_level("INFO"):
            value = await extractor.get_value("battery life")

        assert value is None
        assert "Could not find spec for key 'battery life'" in caplog.text

    @pytest.mark.asyncio
    async def test_get_value_returns_value(self, pdp_snapshot):
        extractor = FactExtractor(pdp_snapshot)

        assert await extractor.get_value("chuck size") == "1/2 In."

    def test_fact_to_dict(self):
        fact = Fact(key="rpm", value="0-1500/min", source=FactSource.TABULAR, alias="Speed")

        assert fact.to_dict() == {"key": "rpm", "value": "0-1500/min", "source": "tabular"}
