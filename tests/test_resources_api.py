from bson import ObjectId

from tests.conftest import API


def name(en, uz=None, ru=None):
    return {"en": en, "uz": uz or f"{en}-uz", "ru": ru or f"{en}-ru"}


async def test_brand_list_pagination_and_active_filter(client, admin_headers):
    for i in range(12):
        r = await client.post(f"{API}/brands", json={"name": name(f"brand{i}")}, headers=admin_headers)
        assert r.status_code == 201
    await client.post(f"{API}/brands", json={"name": name("hidden"), "is_active": False}, headers=admin_headers)

    r = await client.get(f"{API}/brands", params={"isActive": "true", "page": 2, "limit": 5})
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 12
    assert body["pages"] == 3
    assert len(body["items"]) == 5
    # más nuevos primero: la página 2 empieza en brand6
    assert body["items"][0]["name"]["en"] == "brand6"

    r = await client.get(f"{API}/brands", params={"isActive": "true", "page": 3, "limit": 5})
    assert len(r.json()["items"]) == 2

    r = await client.get(f"{API}/brands", params={"isActive": "nope"})
    assert r.status_code == 400


async def test_brand_name_required_and_unique(client, admin_headers):
    r = await client.post(f"{API}/brands", json={"name": {"en": " "}}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Brand name is required"

    r = await client.post(f"{API}/brands", json={"name": name("Acme")}, headers=admin_headers)
    brand_id = r.json()["item"]["id"]
    assert r.json()["message"] == "Brand created successfully"

    r = await client.post(f"{API}/brands", json={"name": {"ru": "Acme-ru"}}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Brand already exists"

    r = await client.put(f"{API}/brands/{brand_id}", json={"is_active": False}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Brand name is required"

    r = await client.put(f"{API}/brands/{brand_id}", json={"name": name("Acme"), "is_active": False}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["item"]["is_active"] is False


async def test_single_get_and_missing_ids(client, admin_headers):
    r = await client.get(f"{API}/brands/{ObjectId()}")
    assert r.status_code == 404
    assert r.json()["message"] == "Brand not found"
    r = await client.get(f"{API}/brands/not-an-id")
    assert r.status_code == 404
    r = await client.delete(f"{API}/tags/{ObjectId()}", headers=admin_headers)
    assert r.status_code == 404


async def test_search_across_languages(client, admin_headers):
    await client.post(f"{API}/tags", json={"name": {"uz": "Yangilik", "ru": "Новости", "en": "News"}}, headers=admin_headers)
    await client.post(f"{API}/tags", json={"name": {"uz": "Sport", "ru": "Спорт", "en": "Sports"}}, headers=admin_headers)
    r = await client.get(f"{API}/tags", params={"search": "новост"})
    assert [t["name"]["en"] for t in r.json()["items"]] == ["News"]
    r = await client.get(f"{API}/tags", params={"search": "yangi"})
    assert r.json()["count"] == 1


async def test_category_brand_filter_and_populate(client, admin_headers):
    on = (await client.post(f"{API}/brands", json={"name": name("On")}, headers=admin_headers)).json()["item"]["id"]
    off = (
        await client.post(f"{API}/brands", json={"name": name("Off"), "is_active": False}, headers=admin_headers)
    ).json()["item"]["id"]
    await client.post(f"{API}/categories", json={"name": name("Phones"), "brand": on}, headers=admin_headers)
    await client.post(f"{API}/categories", json={"name": name("Cables"), "brand": off}, headers=admin_headers)

    r = await client.get(f"{API}/categories", params={"brand": on})
    items = r.json()["items"]
    assert [c["name"]["en"] for c in items] == ["Phones"]
    assert items[0]["brand"] == {"id": on, "name": name("On")}

    r = await client.get(f"{API}/categories", params={"brand": f"{on},{off}"})
    by_name = {c["name"]["en"]: c for c in r.json()["items"]}
    assert by_name["Cables"]["brand"] is None

    r = await client.get(f"{API}/categories", params={"brand": "bad"})
    assert r.status_code == 400

    r = await client.post(f"{API}/categories", json={"name": name("X"), "brand": "bad"}, headers=admin_headers)
    assert r.status_code == 400


async def test_brands_filter_attaches_active_categories(client, admin_headers):
    b1 = (await client.post(f"{API}/brands", json={"name": name("B1")}, headers=admin_headers)).json()["item"]["id"]
    await client.post(f"{API}/brands", json={"name": name("B2"), "is_active": False}, headers=admin_headers)
    await client.post(f"{API}/categories", json={"name": name("C1"), "brand": b1}, headers=admin_headers)
    await client.post(f"{API}/categories", json={"name": name("C2"), "brand": b1, "is_active": False}, headers=admin_headers)

    r = await client.get(f"{API}/brands/filter")
    assert r.status_code == 200
    brands = r.json()
    assert [b["name"]["en"] for b in brands] == ["B1"]
    assert [c["name"]["en"] for c in brands[0]["categories"]] == ["C1"]


async def test_brand_delete_unsets_category_brand(client, admin_headers, db):
    b = (await client.post(f"{API}/brands", json={"name": name("B")}, headers=admin_headers)).json()["item"]["id"]
    c = (await client.post(f"{API}/categories", json={"name": name("C"), "brand": b}, headers=admin_headers)).json()["item"]["id"]
    r = await client.delete(f"{API}/brands/{b}", headers=admin_headers)
    assert r.json() == {"message": "Brand deleted successfully"}
    doc = await db["category"].find_one({"_id": ObjectId(c)})
    assert "brand" not in doc


async def test_products_sort_by_rate(client, admin_headers):
    for title, rate in (("low", 1), ("high", 5), ("mid", 3)):
        await client.post(f"{API}/products", json={"title": name(title), "rate": rate}, headers=admin_headers)
    r = await client.get(f"{API}/products", params={"sortRate": "desc"})
    assert [p["title"]["en"] for p in r.json()["items"]] == ["high", "mid", "low"]
    r = await client.get(f"{API}/products", params={"sortRate": "asc"})
    assert [p["title"]["en"] for p in r.json()["items"]] == ["low", "mid", "high"]


async def test_lead_public_create_and_status_change(client, admin_headers):
    r = await client.post(f"{API}/leads", json={"name": "Bob", "phone": "+998901234567", "text": "call me"})
    assert r.status_code == 201
    lead = r.json()["item"]
    assert lead["status"] == "new"

    r = await client.get(f"{API}/leads")
    assert r.status_code == 401

    r = await client.put(f"{API}/leads/status/{lead['id']}", params={"status": "called"}, headers=admin_headers)
    assert r.status_code == 200
    item = r.json()["item"]
    assert item["status"] == "called"
    assert item["name"] == "Bob"

    r = await client.put(f"{API}/leads/status/{lead['id']}", params={"status": "bogus"}, headers=admin_headers)
    assert r.status_code == 400

    r = await client.get(f"{API}/leads", params={"status": "called"}, headers=admin_headers)
    assert r.json()["count"] == 1


async def test_notifications_are_admin_only_and_signed(client, admin_headers, user_headers, admin_login, tokens):
    r = await client.post(f"{API}/notifications", json={"message": "deploy"}, headers=user_headers)
    assert r.status_code == 404
    r = await client.post(f"{API}/notifications", json={"message": "deploy"}, headers=admin_headers)
    assert r.status_code == 201

    r = await client.get(f"{API}/notifications", headers=admin_headers)
    item = r.json()["items"][0]
    assert item["sender"]["id"] == tokens.verify(admin_login["access_token"])["sub"]
    assert item["sender"]["username"] == "root"


async def test_client_single_get_is_admin_only(client, admin_headers):
    r = await client.post(f"{API}/clients", json={"name": name("Client")}, headers=admin_headers)
    client_id = r.json()["item"]["id"]
    r = await client.get(f"{API}/clients/{client_id}")
    assert r.status_code == 401
    r = await client.get(f"{API}/clients/{client_id}", headers=admin_headers)
    assert r.json()["name"]["en"] == "Client"
    r = await client.get(f"{API}/clients")
    assert r.json()["count"] == 1


async def test_page_beyond_limit_is_rejected(client):
    r = await client.get(f"{API}/brands", params={"page": 10**12})
    assert r.status_code == 400
    r = await client.get(f"{API}/brands", params={"page": 0})
    assert r.status_code == 400
