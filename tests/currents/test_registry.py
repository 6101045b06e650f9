"""Tests for the data source catalogue and selection."""

from __future__ import annotations

import logging

import pytest

from drft.currents.models import TidalParams
from drft.currents.registry import DEFAULT_SOURCES, DataSource, SourceRegistry, SourceSelection
from drft.track.models import BoundingBox

BOX = BoundingBox(4.2, 52.0, 4.3, 52.1)


def _source(source_id: str, **params) -> DataSource:
    return DataSource(
        id=source_id,
        name=source_id.upper(),
        description="",
        info_url="https://example.invalid/",
        quality_description="",
        params=TidalParams(**params),
    )


class TestDefaultCatalogue:
    def test_order_and_ids(self):
        assert SourceRegistry().ids() == ["rws", "cmems"]

    def test_metadata(self):
        rws = SourceRegistry().get("rws")
        assert rws.name == "RWS (Matroos)"
        assert rws.info_url == "https://waterinfo.rws.nl/"
        cmems = SourceRegistry().get("cmems")
        assert cmems.params == TidalParams(0.25, 0.8, 0.1)

    def test_sources_differ_only_in_params(self):
        rws, cmems = DEFAULT_SOURCES
        a = rws.get_grid(BOX, 0, 0.05)
        b = cmems.get_grid(BOX, 0, 0.05)
        assert [v.position for v in a] == [v.position for v in b]
        assert a[0].speed != b[0].speed

    def test_default_resolution(self):
        grid = DEFAULT_SOURCES[0].get_grid(BoundingBox(4.2, 52.0, 4.25, 52.02), 0)
        assert len(grid) == 6 * 3


class TestRegistry:
    def test_empty_registry_rejected(self):
        with pytest.raises(ValueError):
            SourceRegistry([])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            SourceRegistry([_source("a"), _source("a")])

    def test_get_unknown_is_none(self):
        assert SourceRegistry().get("nope") is None

    def test_resolve_unknown_falls_back_to_first(self, caplog):
        reg = SourceRegistry([_source("a"), _source("b")])
        with caplog.at_level(logging.WARNING, logger="drft.currents.registry"):
            src = reg.resolve("nope")
        assert src.id == "a"
        assert "Unknown data source" in caplog.text

    def test_contains_and_len(self):
        reg = SourceRegistry([_source("a"), _source("b")])
        assert "b" in reg
        assert "c" not in reg
        assert len(reg) == 2
        assert [s.id for s in reg] == ["a", "b"]


class TestSelection:
    def test_initially_first_source(self):
        sel = SourceSelection(SourceRegistry())
        assert sel.active_id == "rws"

    def test_initial_id(self):
        sel = SourceSelection(SourceRegistry(), "cmems")
        assert sel.active_id == "cmems"

    def test_last_write_wins(self):
        sel = SourceSelection(SourceRegistry())
        sel.select("cmems")
        sel.select("rws")
        sel.select("cmems")
        assert sel.active_id == "cmems"

    def test_unknown_id_selects_first(self):
        sel = SourceSelection(SourceRegistry(), "cmems")
        assert sel.select("bogus").id == "rws"
        assert sel.active_id == "rws"

    def test_switch_resamples_from_new_source(self):
        sel = SourceSelection(SourceRegistry())
        before = sel.active.get_grid(BOX, 0, 0.05)
        sel.select("cmems")
        after = sel.active.get_grid(BOX, 0, 0.05)
        assert before != after
