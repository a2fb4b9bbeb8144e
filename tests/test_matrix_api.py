import pytest


@pytest.fixture
def matrix(api, brand):
    response = api.post(
        f"/api/clients/{brand['id']}/matrices",
        json={"name": "Summer Launch", "description": "Q3 campaign"},
    )
    assert response.status_code == 201
    return response.json()["matrix"]


def _add_item(api, client_id, matrix_id, **overrides):
    body = {
        "platform_id": "instagram",
        "format_id": "story",
        "template_id": "tmpl-1",
        "copy_id": "copy-1",
        "asset_ids": ["asset-1", "asset-2"],
    }
    body.update(overrides)
    return api.post(f"/api/clients/{client_id}/matrices/{matrix_id}/items", json=body)


def test_new_item_starts_as_draft(api, brand, matrix):
    response = _add_item(api, brand["id"], matrix["id"])

    assert response.status_code == 201
    item = response.json()["item"]
    assert item["status"] == "draft"
    assert item["asset_ids"] == ["asset-1", "asset-2"]
    assert item["platform_name"] == "Instagram"
    assert item["format_name"] == "Story"


def test_item_requires_platform_format_template_and_copy(api, brand, matrix):
    assert _add_item(api, brand["id"], matrix["id"], copy_id="").status_code == 422


def test_unknown_platform_id_is_shown_as_is(api, brand, matrix):
    item = _add_item(api, brand["id"], matrix["id"], platform_id="snapchat").json()["item"]
    assert item["platform_name"] == "snapchat"


@pytest.mark.parametrize("sequence", [
    ["approved", "draft"],
    ["rejected", "approved"],
    ["in_review", "rejected", "in_review"],
])
def test_status_has_no_transition_rules(api, brand, matrix, sequence):
    item = _add_item(api, brand["id"], matrix["id"]).json()["item"]
    url = f"/api/clients/{brand['id']}/matrices/{matrix['id']}/items/{item['id']}"

    for status in sequence:
        response = api.patch(url, json={"status": status})
        assert response.status_code == 200
        assert response.json()["item"]["status"] == status


def test_unknown_status_is_rejected(api, brand, matrix):
    item = _add_item(api, brand["id"], matrix["id"]).json()["item"]
    url = f"/api/clients/{brand['id']}/matrices/{matrix['id']}/items/{item['id']}"

    assert api.patch(url, json={"status": "published"}).status_code == 422


@pytest.mark.parametrize("field", ["platform_id", "format_id", "template_id", "copy_id"])
def test_update_cannot_blank_required_reference(api, brand, matrix, field):
    item = _add_item(api, brand["id"], matrix["id"]).json()["item"]
    url = f"/api/clients/{brand['id']}/matrices/{matrix['id']}/items/{item['id']}"

    assert api.patch(url, json={field: ""}).status_code == 422
    assert api.get(f"/api/clients/{brand['id']}/matrices/{matrix['id']}").json()["items"][0][field] == item[field]


def test_update_other_fields_keeps_status(api, brand, matrix):
    item = _add_item(api, brand["id"], matrix["id"]).json()["item"]
    url = f"/api/clients/{brand['id']}/matrices/{matrix['id']}/items/{item['id']}"

    updated = api.patch(url, json={"format_id": "reel", "asset_ids": []}).json()["item"]

    assert updated["format_id"] == "reel"
    assert updated["asset_ids"] == []
    assert updated["status"] == "draft"


def test_open_matrix_returns_items(api, brand, matrix):
    _add_item(api, brand["id"], matrix["id"])
    _add_item(api, brand["id"], matrix["id"], platform_id="linkedin", format_id="post")

    payload = api.get(f"/api/clients/{brand['id']}/matrices/{matrix['id']}").json()

    assert payload["matrix"]["name"] == "Summer Launch"
    assert [i["platform_name"] for i in payload["items"]] == ["Instagram", "LinkedIn"]


def test_remove_item(api, brand, matrix):
    item = _add_item(api, brand["id"], matrix["id"]).json()["item"]
    url = f"/api/clients/{brand['id']}/matrices/{matrix['id']}/items/{item['id']}"

    assert api.delete(url).status_code == 200
    assert api.get(f"/api/clients/{brand['id']}/matrices/{matrix['id']}").json()["items"] == []
    assert api.delete(url).status_code == 404


def test_matrix_of_another_client_is_hidden(api, brand, other_brand, matrix):
    assert api.get(f"/api/clients/{other_brand['id']}/matrices/{matrix['id']}").status_code == 404
    assert _add_item(api, other_brand["id"], matrix["id"]).status_code == 404
    assert api.get(f"/api/clients/{other_brand['id']}/matrices").json()["count"] == 0


def test_execution_lifecycle(api, brand, matrix):
    created = api.post(f"/api/clients/{brand['id']}/executions", json={"matrix_id": matrix["id"]})
    assert created.status_code == 201
    execution = created.json()["execution"]
    assert execution["status"] == "pending"

    updated = api.patch(
        f"/api/clients/{brand['id']}/executions/{execution['id']}",
        json={"status": "completed", "output_url": "https://cdn.example.com/render.mp4"},
    ).json()["execution"]
    assert updated["status"] == "completed"
    assert updated["output_url"] == "https://cdn.example.com/render.mp4"

    assert api.get(f"/api/clients/{brand['id']}/executions").json()["count"] == 1


def test_matrix_configuration_needs_client_template(api, brand, other_brand):
    template = api.post(
        f"/api/clients/{brand['id']}/templates",
        json={"name": "Promo", "creatomate_id": "tmpl-9", "dynamic_fields": ["Headline"]},
    ).json()["template"]

    created = api.post(
        f"/api/clients/{brand['id']}/matrix-configurations",
        json={"template_id": template["id"], "field_configurations": {"Headline": ["A", "B"]}},
    )
    assert created.status_code == 201
    assert created.json()["configuration"]["field_configurations"] == {"Headline": ["A", "B"]}

    foreign = api.post(
        f"/api/clients/{other_brand['id']}/matrix-configurations",
        json={"template_id": template["id"]},
    )
    assert foreign.status_code == 404
    assert api.get(f"/api/clients/{brand['id']}/matrix-configurations").json()["count"] == 1
