"""
Tests for FileDrugStore.

Covers catalogue ordering, CRUD with rename, reorder, duplicate, backup
import and seeding from the bundled catalogue.
"""

import json

import pytest

from chemodose.schemas import Drug, ReorderItem
from chemodose.storage import (
    DrugExistsError,
    DrugNotFoundError,
    DrugStore,
    DrugStoreError,
    FileDrugStore,
    load_default_drugs,
)


def _drug(drug_id, name, sort_order=0, category=""):
    return Drug(id=drug_id, name=name, sort_order=sort_order, category=category)


class TestFileLayout:
    def test_directory_path_gets_filename(self, tmp_path):
        assert FileDrugStore(tmp_path).path == tmp_path / "drugs.json"

    def test_explicit_file_path(self, tmp_path):
        path = tmp_path / "catalogue.json"
        assert FileDrugStore(path).path == path

    def test_implements_protocol(self, store):
        assert isinstance(store, DrugStore)

    def test_missing_file_is_empty(self, store):
        assert store.list_drugs() == []
        assert store.count() == 0

    def test_written_file_is_json_array(self, store, sample_drug):
        store.create_drug(sample_drug)
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert [d["id"] for d in data] == ["006"]
        assert not store.path.with_suffix(".json.tmp").exists()

    def test_corrupt_file(self, store):
        store.path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DrugStoreError, match="corrupt"):
            store.list_drugs()


class TestQueries:
    def test_sorted_by_order_then_name(self, store):
        store.create_drug(_drug("b", "Beta", 1))
        store.create_drug(_drug("c", "Alpha", 1))
        store.create_drug(_drug("a", "Zeta", 0))

        assert [d.id for d in store.list_drugs()] == ["a", "c", "b"]

    def test_query_matches_name_or_category(self, store):
        store.create_drug(_drug("1", "Adriamycin", category="Doxorubicin"))
        store.create_drug(_drug("2", "Oncovin", category="Vincristine"))

        assert [d.id for d in store.list_drugs("DOXO")] == ["1"]
        assert [d.id for d in store.list_drugs("onco")] == ["2"]
        assert store.list_drugs("zzz") == []

    def test_get_drug(self, store, sample_drug):
        store.create_drug(sample_drug)
        assert store.get_drug("006") == sample_drug
        assert store.get_drug("missing") is None


class TestMutations:
    def test_create_duplicate_id(self, store, sample_drug):
        store.create_drug(sample_drug)
        with pytest.raises(DrugExistsError):
            store.create_drug(sample_drug)

    def test_update_in_place(self, store, sample_drug):
        store.create_drug(sample_drug)
        store.update_drug("006", sample_drug.model_copy(update={"name": "Doxo"}))
        assert store.get_drug("006").name == "Doxo"

    def test_update_renames(self, store, sample_drug):
        store.create_drug(sample_drug)
        store.update_drug("006", sample_drug.model_copy(update={"id": "600"}))

        assert store.get_drug("006") is None
        assert store.get_drug("600").name == "Adriamycin"

    def test_rename_onto_existing_id(self, store, sample_drug):
        store.create_drug(sample_drug)
        store.create_drug(_drug("007", "Ara-C"))
        with pytest.raises(DrugExistsError, match="New ID '007' already exists"):
            store.update_drug("006", sample_drug.model_copy(update={"id": "007"}))

    def test_update_missing(self, store, sample_drug):
        with pytest.raises(DrugNotFoundError):
            store.update_drug("006", sample_drug)

    def test_delete(self, store, sample_drug):
        store.create_drug(sample_drug)
        assert store.delete_drug("006") is True
        assert store.delete_drug("006") is False
        assert store.count() == 0

    def test_reorder_ignores_unknown_ids(self, store):
        store.create_drug(_drug("a", "A", 0))
        store.create_drug(_drug("b", "B", 1))

        updated = store.reorder(
            [
                ReorderItem(id="b", sort_order=0),
                ReorderItem(id="a", sort_order=1),
                ReorderItem(id="ghost", sort_order=2),
            ]
        )

        assert updated == 2
        assert [d.id for d in store.list_drugs()] == ["b", "a"]

    def test_duplicate(self, store, sample_drug):
        store.create_drug(sample_drug)
        copy = store.duplicate_drug("006")

        assert copy.id.startswith("006_copy_")
        assert copy.name == "Adriamycin (Copy)"
        assert copy.formulas == sample_drug.formulas
        assert store.count() == 2

    def test_duplicate_missing(self, store):
        with pytest.raises(DrugNotFoundError):
            store.duplicate_drug("nope")


class TestImportAndSeed:
    def test_import_skips_existing(self, store, sample_drug):
        store.create_drug(sample_drug.model_copy(update={"name": "Local edit"}))
        summary = store.import_drugs([sample_drug, _drug("new", "New")])

        assert summary.created == ["new"]
        assert summary.skipped == ["006"]
        assert store.get_drug("006").name == "Local edit"

    def test_import_duplicate_ids_within_backup(self, store):
        summary = store.import_drugs([_drug("x", "First"), _drug("x", "Second")])
        assert summary.to_dict() == {"created": ["x"], "skipped": ["x"]}
        assert store.get_drug("x").name == "First"

    def test_default_catalogue(self):
        drugs = load_default_drugs()
        assert len(drugs) == 12
        assert drugs[0].id == "006"
        assert all("weight" in d.field_ids() for d in drugs)

    def test_seed_if_empty(self, store):
        assert store.seed_if_empty() == 12
        assert store.seed_if_empty() == 0
        assert store.list_drugs()[0].id == "006"

    def test_seed_skipped_when_not_empty(self, store):
        store.create_drug(_drug("mine", "Mine"))
        assert store.seed_if_empty() == 0
        assert store.count() == 1
