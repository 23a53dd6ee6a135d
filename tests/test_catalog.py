"""
Tests for the model catalog.

Tests:
- Descriptor validation
- Catalog construction and lookups
- Read-only guarantees
- JSON loading and saving
"""

import json
from dataclasses import FrozenInstanceError

import pytest

from modelrouter.catalog import (
    DEFAULT_MODELS,
    ModelCatalog,
    ModelDescriptor,
    Tier,
    TIER_ORDER,
    catalog_from_dict,
    create_default_catalog,
    load_catalog,
    save_catalog,
)
from modelrouter.errors import CatalogError, RouterError


class TestModelDescriptor:
    """Tests for descriptor validation."""

    @pytest.mark.parametrize("kwargs", [
        {"name": ""},
        {"provider": ""},
        {"cost_tier": 0},
        {"cost_tier": 6},
        {"context_window": 0},
        {"max_tokens": -1},
    ])
    def test_invalid_fields(self, make_model, kwargs):
        name = kwargs.pop("name", "m")
        with pytest.raises(CatalogError):
            make_model(name, **kwargs)

    def test_catalog_error_is_router_error(self, make_model):
        with pytest.raises(RouterError):
            make_model("m", cost_tier=9)

    def test_frozen(self, make_model):
        model = make_model("m")
        with pytest.raises(FrozenInstanceError):
            model.cost_tier = 5

    def test_connection_is_read_only(self, make_model):
        model = make_model("m", connection={"base_url": "http://localhost"})
        with pytest.raises(TypeError):
            model.connection["base_url"] = "http://elsewhere"

    def test_nested_connection_is_read_only(self, make_model):
        model = make_model("m", connection={"headers": {"x-key": "1"}, "scopes": ["a"]})

        with pytest.raises(TypeError):
            model.connection["headers"]["x-key"] = "2"
        with pytest.raises(AttributeError):
            model.connection["scopes"].append("b")

    def test_connection_is_copied(self, make_model):
        headers = {"x-key": "1"}
        model = make_model("m", connection={"headers": headers})
        headers["x-key"] = "2"

        assert model.connection["headers"]["x-key"] == "1"

    def test_nested_connection_to_dict(self, make_model):
        model = make_model("m", connection={"headers": {"x-key": "1"}, "scopes": ["a"]})
        data = json.loads(json.dumps(model.to_dict()))

        assert data["connection"] == {"headers": {"x-key": "1"}, "scopes": ["a"]}

    def test_domains_become_tuple(self, make_model):
        model = make_model("m", specialized_domains=["math", "science"])
        assert model.specialized_domains == ("math", "science")
        assert model.has_domain("SCIENCE")
        assert not model.has_domain("search")


class TestModelCatalog:
    """Tests for catalog construction and lookups."""

    def test_default_catalog(self, catalog):
        assert len(catalog) == 19
        assert tuple(catalog.tiers) == TIER_ORDER
        assert catalog.models_for_tier(Tier.BASELINE)[0].name == "gpt-4o-mini"

    def test_missing_tiers_are_empty(self, make_model, make_catalog):
        catalog = make_catalog({Tier.BASELINE: [make_model("m")]})
        assert catalog.models_for_tier(Tier.SUPERIOR) == ()

    def test_string_tier_keys(self, make_model):
        catalog = ModelCatalog({"standard": [make_model("m")]})
        assert catalog.tier_of("m") == Tier.STANDARD

    def test_unknown_tier(self, make_model):
        with pytest.raises(CatalogError):
            ModelCatalog({"premium": [make_model("m")]})

    def test_duplicate_in_tier(self, make_model):
        with pytest.raises(CatalogError):
            ModelCatalog({Tier.BASELINE: [make_model("m"), make_model("m")]})

    def test_same_name_in_two_tiers(self, make_model):
        catalog = ModelCatalog({
            Tier.BASELINE: [make_model("m")],
            Tier.STANDARD: [make_model("m")],
        })
        assert len(catalog) == 2
        assert catalog.tier_of("m") == Tier.BASELINE

    def test_non_descriptor_entry(self):
        with pytest.raises(CatalogError):
            ModelCatalog({Tier.BASELINE: [{"name": "m"}]})

    def test_find(self, catalog):
        assert catalog.find("tavily-search").provider == "tavily"
        assert catalog.find("missing") is None
        assert catalog.tier_of("missing") is None

    def test_tiers_are_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog.tiers[Tier.BASELINE] = ()

    def test_builtin_headers_are_not_shared_state(self):
        haiku = create_default_catalog().find("claude-3-5-haiku-latest")
        with pytest.raises(TypeError):
            haiku.connection["headers"]["anthropic-version"] = "1999-01-01"

        sonnet = create_default_catalog().find("claude-3-5-sonnet-latest")
        assert sonnet.connection["headers"] == {"anthropic-version": "2023-06-01"}

    def test_builtin_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_MODELS[Tier.BASELINE] = ()
        assert all(isinstance(pool, tuple) for pool in DEFAULT_MODELS.values())
        with pytest.raises(AttributeError):
            DEFAULT_MODELS[Tier.BASELINE].append(None)
        assert len(create_default_catalog()) == 19

    def test_source_list_changes_do_not_leak(self, make_model):
        models = [make_model("m")]
        catalog = ModelCatalog({Tier.BASELINE: models})
        models.append(make_model("n"))
        assert len(catalog) == 1


class TestCatalogLoader:
    """Tests for JSON catalog files."""

    def test_round_trip(self, catalog, tmp_path):
        path = tmp_path / "catalog.json"
        save_catalog(catalog, path)
        loaded = load_catalog(path)

        assert len(loaded) == len(catalog)
        assert [m.name for m in loaded.all_models()] == [m.name for m in catalog.all_models()]
        assert loaded.find("o1").specialized_domains == ("reasoning", "planning")

    def test_tiers_wrapper(self):
        catalog = catalog_from_dict({"tiers": {"baseline": [{
            "name": "m", "provider": "p", "max_tokens": 10,
            "context_window": 100, "cost_tier": 1,
        }]}})
        assert catalog.find("m").context_window == 100

    @pytest.mark.parametrize("data", [
        {"premium": []},
        {"baseline": [{"name": "m", "provider": "p", "max_tokens": 10,
                       "context_window": -5, "cost_tier": 1}]},
        {"baseline": [{"name": "m", "provider": "p", "max_tokens": 10,
                       "context_window": 100, "cost_tier": 7}]},
        {"baseline": [{"name": "m"}]},
        {"baseline": []},
        [],
    ])
    def test_invalid_data(self, data):
        with pytest.raises(CatalogError):
            catalog_from_dict(data)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json")
        with pytest.raises(CatalogError):
            load_catalog(path)
