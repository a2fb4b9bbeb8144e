import workflows
from motivation_generator import TEMPLATE_MOTIVATIONS


def _generate_motivations(api, client_id, brief="Premium cold brew for commuters"):
    return api.post(f"/api/clients/{client_id}/motivations/generate", data={"brief": brief})


def test_generate_motivations_stores_unapproved_rows(api, fake_supabase, brand):
    response = _generate_motivations(api, brand["id"])

    assert response.status_code == 201
    motivations = response.json()["motivations"]
    assert [m["content"] for m in motivations] == TEMPLATE_MOTIVATIONS
    assert all(m["is_approved"] is False for m in motivations)
    assert all(row["user_id"] == "user-1234567890" for row in fake_supabase.tables["strategic_motivations"])


def test_generate_motivations_requires_brief(api, brand):
    response = _generate_motivations(api, brand["id"], brief="   ")

    assert response.status_code == 400
    assert response.json()["error"] == "Please enter a client brief"


def test_generate_motivations_rejects_bad_url(api, brand):
    response = api.post(
        f"/api/clients/{brand['id']}/motivations/generate",
        data={"brief": "Cold brew", "website_url": "not-a-url"},
    )
    assert response.status_code == 400


def test_brief_sources_reach_the_generator(api, brand, monkeypatch):
    seen = {}

    def fake_generate(context):
        seen["context"] = context
        return ["Own the morning commute"]

    monkeypatch.setattr(workflows, "generate_motivation_texts", fake_generate)
    monkeypatch.setattr("app.fetch_page_text", lambda url, timeout: "Handcrafted in small batches")

    response = api.post(
        f"/api/clients/{brand['id']}/motivations/generate",
        data={"brief": "Cold brew", "website_url": "https://acme.example.com"},
    )

    assert response.json()["count"] == 1
    assert "SOURCE: CLIENT BRIEF\nCold brew" in seen["context"]
    assert "SOURCE: WEBSITE\nHandcrafted in small batches" in seen["context"]


def test_approve_motivation_persists(api, brand):
    motivation = _generate_motivations(api, brand["id"]).json()["motivations"][0]

    response = api.post(f"/api/clients/{brand['id']}/motivations/{motivation['id']}/approve")
    assert response.json()["motivation"]["is_approved"] is True

    listed = api.get(f"/api/clients/{brand['id']}/motivations").json()["motivations"]
    assert [m["is_approved"] for m in listed].count(True) == 1


def test_generate_copy_variations(api, fake_supabase, brand):
    motivation = _generate_motivations(api, brand["id"]).json()["motivations"][1]

    response = api.post(
        f"/api/clients/{brand['id']}/copy-variations/generate",
        json={
            "motivation_id": motivation["id"],
            "tone": "Enthusiastic",
            "length": "long",
            "count": 3,
            "include_cta": True,
        },
    )

    assert response.status_code == 201
    variations = response.json()["copy_variations"]
    assert len(variations) == 3
    assert variations[0]["content"] == (
        "Simplify complex processes to save time and reduce stress with a excited and energetic tone."
        " This copy is detailed and comprehensive. Call now to learn more about our exclusive offers!"
    )
    assert [v["variation_number"] for v in variations] == [1, 2, 3]
    assert all(v["tone"] == "Enthusiastic" and v["length"] == "long" for v in variations)


def test_copy_count_is_bounded(api, brand):
    motivation = _generate_motivations(api, brand["id"]).json()["motivations"][0]

    response = api.post(
        f"/api/clients/{brand['id']}/copy-variations/generate",
        json={"motivation_id": motivation["id"], "count": 11},
    )
    assert response.status_code == 422


def test_copy_needs_motivation_of_same_client(api, brand, other_brand):
    motivation = _generate_motivations(api, other_brand["id"]).json()["motivations"][0]

    response = api.post(
        f"/api/clients/{brand['id']}/copy-variations/generate",
        json={"motivation_id": motivation["id"]},
    )
    assert response.status_code == 404


def test_list_and_approve_copy_variations(api, brand):
    motivations = _generate_motivations(api, brand["id"]).json()["motivations"]
    for motivation in motivations[:2]:
        api.post(
            f"/api/clients/{brand['id']}/copy-variations/generate",
            json={"motivation_id": motivation["id"], "count": 2},
        )

    everything = api.get(f"/api/clients/{brand['id']}/copy-variations").json()
    assert everything["count"] == 4

    filtered = api.get(
        f"/api/clients/{brand['id']}/copy-variations",
        params={"motivation_id": motivations[0]["id"]},
    ).json()["copy_variations"]
    assert len(filtered) == 2

    approved = api.post(f"/api/clients/{brand['id']}/copy-variations/{filtered[0]['id']}/approve")
    assert approved.json()["copy_variation"]["is_approved"] is True
