"""
End-to-end checks for the element routes: save -> reconcile -> sequence -> assemble.
"""
from content_tree.extensions import db
from content_tree.models.element import Element
from content_tree.models.audit_log import AuditLog


def _save(client, headers, payload):
    return client.post("/api/v1/elements", json=payload, headers=headers)


def _section_tree(client, headers, section_id):
    response = client.get(f"/api/v1/sections/{section_id}/tree", headers=headers)
    assert response.status_code == 200
    return response.get_json()


def test_health_is_public(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_missing_tenant_header(client, auth_headers, section):
    headers = {"Authorization": auth_headers["Authorization"]}

    response = client.get(f"/api/v1/sections/{section.id}/tree", headers=headers)

    assert response.status_code == 400


def test_tenant_mismatch_is_forbidden(client, auth_headers, other_tenant, section):
    headers = dict(auth_headers, **{"X-Tenant-ID": other_tenant.id})

    response = client.get(f"/api/v1/sections/{section.id}/tree", headers=headers)

    assert response.status_code == 403


def test_row_save_builds_columns(client, auth_headers, section):
    response = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "row",
        "answers": {"columns": "4,8"},
    })

    assert response.status_code == 200
    row = response.get_json()[0]
    assert row["sort"] == 1

    tree = _section_tree(client, auth_headers, section.id)
    columns = tree["elements"][0]["elements"]
    assert [c["element_type"] for c in columns] == ["column", "column"]
    assert [c["answers"]["size"] for c in columns] == [4, 8]
    assert [c["sort"] for c in columns] == [1, 2]


def test_editor_scenario(client, auth_headers, section):
    """Row 4,8 -> text in each column -> reshape to 6,6 -> delete -> resequence."""
    row = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "row",
        "answers": {"columns": "4,8"},
    }).get_json()[0]
    left, right = _section_tree(client, auth_headers, section.id)["elements"][0]["elements"]

    _save(client, auth_headers, [
        {"parent_id": left["id"], "element_type": "text", "answers": {"text": "Left"}},
    ])
    _save(client, auth_headers, [
        {"parent_id": right["id"], "element_type": "text", "answers": {"text": "Right"}},
    ])

    reshaped = dict(row, answers={"columns": "6,6"})
    assert _save(client, auth_headers, reshaped).status_code == 200

    tree = _section_tree(client, auth_headers, section.id)
    columns = tree["elements"][0]["elements"]
    assert [c["id"] for c in columns] == [left["id"], right["id"]]
    assert [c["answers"]["size"] for c in columns] == [6, 6]
    assert columns[0]["elements"][0]["answers"]["text"] == "Left"

    footer = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "text",
    }).get_json()[0]
    assert footer["sort"] == 2

    response = client.delete(f"/api/v1/elements/{row['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert len(response.get_json()["deleted"]) == 5

    tree = _section_tree(client, auth_headers, section.id)
    assert [e["id"] for e in tree["elements"]] == [footer["id"]]
    assert tree["elements"][0]["sort"] == 1


def test_saving_at_existing_sort_inserts_before(client, auth_headers, section):
    first = _save(client, auth_headers, {"section_id": section.id, "element_type": "text"}).get_json()[0]
    second = _save(client, auth_headers, {"section_id": section.id, "element_type": "text"}).get_json()[0]

    inserted = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "image",
        "sort": 2,
    }).get_json()[0]

    tree = _section_tree(client, auth_headers, section.id)
    assert [e["id"] for e in tree["elements"]] == [first["id"], inserted["id"], second["id"]]
    assert [e["sort"] for e in tree["elements"]] == [1, 2, 3]


def test_unknown_parent_writes_nothing(client, auth_headers, section):
    response = _save(client, auth_headers, [
        {"section_id": section.id, "element_type": "text"},
        {"parent_id": "does-not-exist", "element_type": "text"},
    ])

    assert response.status_code == 404
    assert response.get_json()["error"] == "NodeNotFound"
    assert Element.query.count() == 0
    assert AuditLog.query.count() == 0


def test_element_without_owner_is_rejected(client, auth_headers):
    response = _save(client, auth_headers, {"element_type": "text"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvariantViolation"


def test_moving_element_under_its_descendant_is_rejected(client, auth_headers, section):
    row = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "row",
        "answers": {"columns": "12"},
    }).get_json()[0]
    column = _section_tree(client, auth_headers, section.id)["elements"][0]["elements"][0]

    response = _save(client, auth_headers, dict(row, parent_id=column["id"]))

    assert response.status_code == 400


def test_strict_mode_rejects_malformed_row(app, client, auth_headers, section):
    app.config["STRICT_LAYOUT_SPECS"] = True

    response = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "row",
        "answers": {"columns": "4,x"},
    })

    assert response.status_code == 400
    assert response.get_json()["error"] == "MalformedLayoutSpec"
    assert Element.query.count() == 0


def test_lenient_mode_saves_empty_row(client, auth_headers, section):
    response = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "row",
        "answers": {"columns": "4,x"},
    })

    assert response.status_code == 200
    row_id = response.get_json()[0]["id"]
    assert Element.query.filter_by(parent_id=row_id).count() == 0


def test_duplicate_element_route(client, auth_headers, section):
    row = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "carousel",
        "answers": {"slides": 2},
    }).get_json()[0]
    after = _save(client, auth_headers, {"section_id": section.id, "element_type": "text"}).get_json()[0]

    response = client.post(f"/api/v1/elements/{row['id']}/duplicate", headers=auth_headers)

    assert response.status_code == 201
    clone = response.get_json()
    assert clone["id"] != row["id"]
    assert len(clone["elements"]) == 2

    tree = _section_tree(client, auth_headers, section.id)
    assert [e["id"] for e in tree["elements"]] == [row["id"], clone["id"], after["id"]]


def test_non_admin_cannot_save(client, auth_headers, tenant, section):
    from flask_jwt_extended import create_access_token

    token = create_access_token(
        identity="user-2",
        additional_claims={"tenant_id": tenant.id, "role": "editor"},
    )
    headers = dict(auth_headers, Authorization=f"Bearer {token}")

    response = _save(client, headers, {"section_id": section.id, "element_type": "text"})

    assert response.status_code == 403
    assert db.session.query(Element).count() == 0


def _root_texts(client, headers, section_id, count):
    return [
        _save(client, headers, {"section_id": section_id, "element_type": "text"}).get_json()[0]
        for _ in range(count)
    ]


def _root_ids_and_sorts(client, headers, section_id):
    elements = _section_tree(client, headers, section_id)["elements"]
    return [e["id"] for e in elements], [e["sort"] for e in elements]


def test_moving_element_down_lands_at_target(client, auth_headers, section):
    a, b, c = _root_texts(client, auth_headers, section.id, 3)

    assert _save(client, auth_headers, dict(a, sort=3)).status_code == 200

    ids, sorts = _root_ids_and_sorts(client, auth_headers, section.id)
    assert ids == [b["id"], c["id"], a["id"]]
    assert sorts == [1, 2, 3]


def test_moving_element_down_one_slot_among_four(client, auth_headers, section):
    a, b, c, d = _root_texts(client, auth_headers, section.id, 4)

    _save(client, auth_headers, dict(a, sort=3))

    ids, sorts = _root_ids_and_sorts(client, auth_headers, section.id)
    assert ids == [b["id"], c["id"], a["id"], d["id"]]
    assert sorts == [1, 2, 3, 4]


def test_moving_element_up_lands_at_target(client, auth_headers, section):
    a, b, c, d = _root_texts(client, auth_headers, section.id, 4)

    _save(client, auth_headers, dict(d, sort=2))

    ids, sorts = _root_ids_and_sorts(client, auth_headers, section.id)
    assert ids == [a["id"], d["id"], b["id"], c["id"]]
    assert sorts == [1, 2, 3, 4]


def test_moving_column_content_down(client, auth_headers, section):
    _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "row",
        "answers": {"columns": "12"},
    })
    column = _section_tree(client, auth_headers, section.id)["elements"][0]["elements"][0]
    first, second = [
        _save(client, auth_headers, {"parent_id": column["id"], "element_type": "text"}).get_json()[0]
        for _ in range(2)
    ]

    _save(client, auth_headers, dict(first, sort=2))

    column = _section_tree(client, auth_headers, section.id)["elements"][0]["elements"][0]
    assert [e["id"] for e in column["elements"]] == [second["id"], first["id"]]
    assert [e["sort"] for e in column["elements"]] == [1, 2]


def test_numeric_string_sort_is_accepted(client, auth_headers, section):
    first = _save(client, auth_headers, {"section_id": section.id, "element_type": "text"}).get_json()[0]

    response = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "image",
        "sort": "1",
    })

    assert response.status_code == 200
    inserted = response.get_json()[0]
    ids, sorts = _root_ids_and_sorts(client, auth_headers, section.id)
    assert ids == [inserted["id"], first["id"]]
    assert sorts == [1, 2]


def test_non_integer_sort_is_rejected(client, auth_headers, section):
    response = _save(client, auth_headers, {
        "section_id": section.id,
        "element_type": "text",
        "sort": "first",
    })

    assert response.status_code == 400
    assert response.get_json()["error"] == "ValidationError"
    assert Element.query.count() == 0
