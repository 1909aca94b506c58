from bson import ObjectId

from vitrina.repositories import resource_repo as repo


async def test_find_one_and_public_view(db):
    doc = await repo.insert(db, "admin", {"username": "root", "password_hash": "x", "bio": None})
    assert "bio" not in doc

    found = await repo.find_one(db, "admin", {"username": "root"})
    assert found["_id"] == doc["_id"]
    assert await repo.find_one(db, "admin", {"username": "nobody"}) is None

    out = repo.public({**found, "friends": [ObjectId()]})
    assert out["id"] == str(doc["_id"])
    assert "password_hash" not in out
    assert isinstance(out["friends"][0], str)


async def test_invalid_ids_resolve_to_none(db):
    assert repo.to_object_id("nope") is None
    assert await repo.get_by_id(db, "brand", "nope") is None
    assert await repo.delete_by_id(db, "brand", "nope") is None
