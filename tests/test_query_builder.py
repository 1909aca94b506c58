from datetime import datetime

import pytest
from bson import ObjectId

from vitrina.core.exceptions import ValidationError
from vitrina.repositories import resource_repo as repo
from vitrina.services.query_builder import (
    ListQuery,
    build_filter,
    build_sort,
    parse_bool,
    parse_datetime,
    parse_ids,
    populate,
    run_page,
)
from vitrina.services.resources import BRAND, CATEGORY, COMMENT, LEAD, POST, PRODUCT


def test_empty_query_has_no_constraints():
    assert build_filter(ListQuery(), BRAND) == {}


def test_parse_bool_is_explicit():
    assert parse_bool("true") is True
    assert parse_bool("False") is False
    assert parse_bool(None) is None
    assert parse_bool("") is None
    with pytest.raises(ValidationError):
        parse_bool("maybe")


def test_parse_ids_splits_commas_and_rejects_garbage():
    a, b = ObjectId(), ObjectId()
    assert parse_ids(f"{a}, {b},", "brand") == [a, b]
    with pytest.raises(ValidationError):
        parse_ids(f"{a},nope", "brand")


def test_parse_datetime_accepts_zulu_and_dates():
    assert parse_datetime("2024-01-02T03:04:05Z", "x") == datetime(2024, 1, 2, 3, 4, 5)
    assert parse_datetime("2024-01-02", "x") == datetime(2024, 1, 2)
    with pytest.raises(ValidationError):
        parse_datetime("yesterday", "x")


def test_search_is_an_or_over_every_localized_field():
    f = build_filter(ListQuery(search="phone"), PRODUCT)
    fields = [next(iter(clause)) for clause in f["$or"]]
    assert fields == [
        "title.uz", "title.ru", "title.en",
        "short_description.uz", "short_description.ru", "short_description.en",
        "description.uz", "description.ru", "description.en",
    ]
    assert f["$or"][0]["title.uz"] == {"$regex": "phone", "$options": "i"}


def test_search_input_is_escaped():
    f = build_filter(ListQuery(search="a.b*"), LEAD)
    assert f["$or"][0]["name"]["$regex"] == r"a\.b\*"


def test_filters_combine():
    author = ObjectId()
    start, end = datetime(2024, 1, 1), datetime(2024, 2, 1)
    q = ListQuery(
        is_active=True,
        status="published",
        refs={"author": [author]},
        date_ranges={"published_at": (start, end), "scheduled_at": (None, end)},
    )
    assert build_filter(q, POST) == {
        "is_active": True,
        "status": "published",
        "author": {"$in": [author]},
        "published_at": {"$gte": start, "$lte": end},
        "scheduled_at": {"$lte": end},
    }


def test_status_ignored_for_resources_without_status():
    assert build_filter(ListQuery(status="new"), BRAND) == {}


def test_sort_defaults_to_newest_first():
    assert build_sort(ListQuery(), BRAND) == [("created_at", -1), ("_id", -1)]
    assert build_sort(ListQuery(sort_by_created_at="asc"), BRAND) == [("created_at", 1), ("_id", 1)]


def test_sort_rate_is_primary_when_given():
    assert build_sort(ListQuery(sort_rate="desc"), COMMENT)[0] == ("rate", -1)
    assert build_sort(ListQuery(sort_rate="asc"), PRODUCT)[0] == ("rate", 1)
    # marcas no ordenan por rate
    assert build_sort(ListQuery(sort_rate="desc"), BRAND)[0] == ("created_at", -1)


def test_skip_from_page_and_limit():
    assert ListQuery(page=3, limit=5).skip == 10


async def test_run_page_counts_all_matches(db):
    for i in range(12):
        await repo.insert(db, "brand", {"name": {"en": f"b{i}"}, "is_active": True})
    await repo.insert(db, "brand", {"name": {"en": "off"}, "is_active": False})

    sizes = []
    for page in (1, 2, 3):
        res = await run_page(db, BRAND, ListQuery(is_active=True, page=page, limit=5))
        assert res["count"] == 12
        assert res["pages"] == 3
        sizes.append(len(res["items"]))
    assert sizes == [5, 5, 2]

    res = await run_page(db, BRAND, ListQuery(is_active=True, page=4, limit=5))
    assert res["items"] == []
    assert res["count"] == 12


async def test_run_page_search_matches_any_language(db):
    await repo.insert(db, "brand", {"name": {"uz": "Olma", "ru": "Яблоко", "en": "Apple"}, "is_active": True})
    await repo.insert(db, "brand", {"name": {"uz": "Nok", "ru": "Груша", "en": "Pear"}, "is_active": True})
    res = await run_page(db, BRAND, ListQuery(search="яблоко"))
    assert [i["name"]["en"] for i in res["items"]] == ["Apple"]
    res = await run_page(db, BRAND, ListQuery(search="olm"))
    assert res["count"] == 1


async def test_populate_keeps_only_active_refs(db):
    active = await repo.insert(db, "brand", {"name": {"en": "On"}, "is_active": True})
    inactive = await repo.insert(db, "brand", {"name": {"en": "Off"}, "is_active": False})
    docs = [{"brand": active["_id"]}, {"brand": inactive["_id"]}, {"brand": ObjectId()}]
    await populate(db, docs, CATEGORY.populate)
    assert docs[0]["brand"]["name"] == {"en": "On"}
    assert docs[1]["brand"] is None
    assert docs[2]["brand"] is None


async def test_populate_many_drops_inactive(db):
    on = await repo.insert(db, "tag", {"name": {"en": "on"}, "is_active": True})
    off = await repo.insert(db, "tag", {"name": {"en": "off"}, "is_active": False})
    docs = [{"tags": [on["_id"], off["_id"]]}]
    await populate(db, docs, [r for r in POST.populate if r.field == "tags"])
    assert [t["_id"] for t in docs[0]["tags"]] == [on["_id"]]
