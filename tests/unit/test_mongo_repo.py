import asyncio
import re

import pytest
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from medassist.domain.errors import DuplicateMedicationError
from medassist.infra.repo.mongo_repo import MongoInventoryRepo

from conftest import med


###############################################################################
# Motor stand-ins: just enough of find/find_one/insert_one/create_index to run
# the repo's real filters ($regex with $options, $gt) and projection.
###############################################################################
def _matches(doc, flt) -> bool:
    for field, cond in flt.items():
        value = doc.get(field)
        if not isinstance(cond, dict):
            if value != cond:
                return False
            continue
        if "$regex" in cond:
            flags = re.I if "i" in cond.get("$options", "") else 0
            if value is None or not re.search(cond["$regex"], value, flags):
                return False
        if "$gt" in cond and not (value is not None and value > cond["$gt"]):
            return False
    return True


def _project(doc, projection):
    return {k: v for k, v in doc.items() if projection.get(k) == 1}


class FakeCursor:
    def __init__(self, docs):
        self.docs = list(docs)

    def sort(self, key, direction=ASCENDING):
        self.docs.sort(key=lambda d: d[key], reverse=direction != ASCENDING)
        return self

    async def __aiter__(self):
        for d in self.docs:
            yield d


class FakeCollection:
    def __init__(self):
        self.docs = []
        self.indexes = []
        self._next_id = 1

    async def create_index(self, keys, unique=False):
        self.indexes.append((keys, unique))
        return "_".join(f"{k}_{d}" for k, d in keys)

    async def insert_one(self, doc):
        for keys, unique in self.indexes:
            fields = [k for k, _ in keys]
            if unique and any(all(d.get(f) == doc.get(f) for f in fields) for d in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error index: {fields}")
        self.docs.append({"_id": self._next_id, **doc})
        self._next_id += 1

    async def find_one(self, flt, projection):
        for d in self.docs:
            if _matches(d, flt):
                return _project(d, projection)
        return None

    def find(self, flt, projection):
        # natural order is not insertion order; callers must sort
        hits = [_project(d, {**projection, "_id": 1}) for d in reversed(self.docs) if _matches(d, flt)]
        return _ProjectedCursor(hits, projection)


class _ProjectedCursor(FakeCursor):
    """Sorts on fields the projection hides, then drops them on iteration."""

    def __init__(self, docs, projection):
        super().__init__(docs)
        self.projection = projection

    async def __aiter__(self):
        for d in self.docs:
            yield _project(d, self.projection)


class FakeClient(dict):
    def __missing__(self, db_name):
        db = self[db_name] = _FakeDb()
        return db


class _FakeDb(dict):
    def __missing__(self, coll_name):
        coll = self[coll_name] = FakeCollection()
        return coll


def _repo(*records, indexed=True):
    repo = MongoInventoryRepo(client=FakeClient())
    if indexed:
        asyncio.run(repo.ensure_indexes())
    for r in records:
        asyncio.run(repo.insert(r))
    return repo


###############################################################################
def test_uses_given_database_and_collection():
    client = FakeClient()
    repo = MongoInventoryRepo(db_name="pharmacy", coll_name="stock", client=client)
    assert repo.coll is client["pharmacy"]["stock"]


def test_ensure_indexes_creates_unique_name_key():
    repo = _repo()
    assert ([("name_key", ASCENDING)], True) in repo.coll.indexes


def test_exact_lookup_is_case_insensitive_and_trimmed():
    repo = _repo(med("Paracetamol", 4))
    rec = asyncio.run(repo.find_exact("  PARACETAMOL "))
    assert rec is not None and rec.name == "Paracetamol"
    assert asyncio.run(repo.find_exact("Paracetamol 500")) is None
    assert asyncio.run(repo.find_exact("aracetamol")) is None


def test_regex_metacharacters_in_names_are_literal():
    repo = _repo(med("C++", 2), med("Cxx", 2))
    assert asyncio.run(repo.find_exact("C++")).name == "C++"
    assert asyncio.run(repo.find_exact("C..")) is None
    assert asyncio.run(repo.find_exact(".*")) is None


def test_in_stock_lookup_requires_positive_quantity():
    repo = _repo(med("Ibuprofen", 0), med("Cetirizine", 3))
    assert asyncio.run(repo.find_exact_in_stock("ibuprofen")) is None
    assert asyncio.run(repo.find_exact("ibuprofen")).quantity_in_stock == 0
    assert asyncio.run(repo.find_exact_in_stock("cetirizine")).name == "Cetirizine"


def test_blank_name_never_queries():
    repo = _repo(med("Aspirin", 1))
    assert asyncio.run(repo.find_exact("  ")) is None
    assert asyncio.run(repo.find_exact_in_stock("")) is None


def test_list_all_keeps_insertion_order_and_hides_internal_fields():
    repo = _repo(med("Zyrtec", 1), med("Amoxicillin", 0), med("Ibuprofen", 5))
    records = asyncio.run(repo.list_all())
    assert [r.name for r in records] == ["Zyrtec", "Amoxicillin", "Ibuprofen"]
    stored = repo.coll.docs[0]
    assert stored["name_key"] == "zyrtec" and "_id" in stored


def test_duplicate_key_becomes_duplicate_medication_error():
    repo = _repo(med("Ibuprofen", 1))
    with pytest.raises(DuplicateMedicationError) as ei:
        asyncio.run(repo.insert(med("IBUPROFEN", 2)))
    assert isinstance(ei.value.__cause__, DuplicateKeyError)
    assert len(repo.coll.docs) == 1
