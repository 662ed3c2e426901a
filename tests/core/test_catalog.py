from pathlib import Path

from transfer_planner.core.catalog import ItemCatalog


def test_bundled_catalog_loads():
    catalog = ItemCatalog.load()
    assert len(catalog) > 0
    assert catalog.resolve("OakLog") == 2
    assert catalog.resolve("oaklog") == 2
    assert "IronOre" in catalog


def test_resolve_numeric_ids_and_unknowns():
    catalog = ItemCatalog({"Stone": 20, "Wheat": 50})
    assert catalog.resolve("20") == 20
    assert catalog.resolve(50) == 50
    assert catalog.resolve("21") is None
    assert catalog.resolve("Dirt") is None
    assert catalog.name_of(20) == "Stone"
    assert catalog.name_of(999) == "999"


def test_load_skips_bad_entries(tmp_path: Path):
    path = tmp_path / "items.yaml"
    path.write_text("Stone: 20\nBroken: [1, 2]\nFlag: true\nGem: gem-01\n", encoding="utf-8")
    catalog = ItemCatalog.load(path)
    assert catalog.items() == {"Stone": 20, "Gem": "gem-01"}


def test_missing_or_invalid_file_gives_empty_catalog(tmp_path: Path):
    assert len(ItemCatalog.load(tmp_path / "missing.yaml")) == 0
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")
    assert len(ItemCatalog.load(bad)) == 0
