def test_import_template_cleans_dynamic_fields(api, brand):
    response = api.post(
        f"/api/clients/{brand['id']}/templates",
        json={
            "name": "Promo 15s",
            "creatomate_id": " tmpl-123 ",
            "aspect_ratio": "9:16",
            "dynamic_fields": ["Headline", " Headline ", "", "Logo"],
        },
    )

    assert response.status_code == 201
    template = response.json()["template"]
    assert template["creatomate_id"] == "tmpl-123"
    assert template["aspect_ratio"] == "9:16"
    assert template["dynamic_fields"] == ["Headline", "Logo"]


def test_import_template_defaults_to_landscape(api, brand):
    template = api.post(
        f"/api/clients/{brand['id']}/templates",
        json={"name": "Default", "creatomate_id": "tmpl-1"},
    ).json()["template"]

    assert template["aspect_ratio"] == "16:9"
    assert template["dynamic_fields"] == []


def test_import_template_requires_external_id(api, brand):
    response = api.post(
        f"/api/clients/{brand['id']}/templates",
        json={"name": "Promo", "creatomate_id": "   "},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Creatomate Template ID is required"


def test_list_and_delete_templates(api, brand, other_brand):
    mine = api.post(
        f"/api/clients/{brand['id']}/templates", json={"name": "Mine", "creatomate_id": "a"}
    ).json()["template"]
    api.post(f"/api/clients/{other_brand['id']}/templates", json={"name": "Theirs", "creatomate_id": "b"})

    listed = api.get(f"/api/clients/{brand['id']}/templates").json()
    assert [t["name"] for t in listed["templates"]] == ["Mine"]

    assert api.delete(f"/api/clients/{brand['id']}/templates/{mine['id']}").status_code == 200
    assert api.get(f"/api/clients/{brand['id']}/templates").json()["count"] == 0
