def test_create_project_makes_owner_a_member(client, owner, project):
    owner_id, headers = owner
    assert project["owner_id"] == owner_id
    assert project["name"] == "Rocket"

    members = client.get(f"/projects/{project['id']}/members", headers=headers).json()
    assert [m["user_id"] for m in members] == [owner_id]


def test_initial_projection_is_created(client, owner, project):
    _, headers = owner
    active = client.get(f"/projects/{project['id']}/projections/active", headers=headers)
    assert active.status_code == 200
    body = active.json()
    assert body["valuation"] == 100000
    assert body["work_hours_until_completion"] == 500
    assert body["implied_hour_value"] == 200


def test_project_without_financials_has_no_projection(client, owner):
    _, headers = owner
    created = client.post("/projects/", json={"name": "Side gig"}, headers=headers).json()
    resp = client.get(f"/projects/{created['id']}/projections/active", headers=headers)
    assert resp.status_code == 404


def test_partial_initial_projection_defaults_missing_side_to_zero(client, owner):
    _, headers = owner
    created = client.post("/projects/", json={"name": "Valued", "initial_valuation": 5000}, headers=headers).json()
    body = client.get(f"/projects/{created['id']}/projections/active", headers=headers).json()
    assert body["work_hours_until_completion"] == 0
    assert body["implied_hour_value"] == 0


def test_negative_financials_are_rejected(client, owner):
    _, headers = owner
    resp = client.post("/projects/", json={"name": "Bad", "initial_valuation": -1}, headers=headers)
    assert resp.status_code == 422


def test_list_projects_covers_owned_and_member_projects(client, owner, project, make_user):
    _, owner_headers = owner
    mate_id, mate_headers = make_user("mate@example.com")

    client.post(f"/projects/{project['id']}/members", json={"email": "mate@example.com"}, headers=owner_headers)
    own = client.post("/projects/", json={"name": "Mate's own"}, headers=mate_headers).json()

    ids = [p["id"] for p in client.get("/projects/", headers=mate_headers).json()]
    assert ids == sorted({project["id"], own["id"]})


def test_non_members_cannot_see_project(client, project, make_user):
    _, stranger = make_user("stranger@example.com")
    assert client.get(f"/projects/{project['id']}", headers=stranger).status_code == 403
    assert client.get("/projects/9999", headers=stranger).status_code == 404


def test_only_owner_can_rename(client, owner, project, make_user):
    _, owner_headers = owner
    _, mate_headers = make_user("mate@example.com")
    client.post(f"/projects/{project['id']}/members", json={"email": "mate@example.com"}, headers=owner_headers)

    denied = client.patch(f"/projects/{project['id']}", json={"name": "Hijacked"}, headers=mate_headers)
    assert denied.status_code == 403

    ok = client.patch(
        f"/projects/{project['id']}",
        json={"name": "Rocket v2", "logo_url": "https://cdn.example.com/logo.png"},
        headers=owner_headers,
    )
    assert ok.status_code == 200
    assert ok.json()["name"] == "Rocket v2"
    assert ok.json()["logo_url"] == "https://cdn.example.com/logo.png"


def test_ownership_transfer_requires_membership(client, owner, project, make_user):
    _, owner_headers = owner
    mate_id, mate_headers = make_user("mate@example.com")

    resp = client.patch(f"/projects/{project['id']}", json={"owner_id": mate_id}, headers=owner_headers)
    assert resp.status_code == 400

    client.post(f"/projects/{project['id']}/members", json={"email": "mate@example.com"}, headers=owner_headers)
    resp = client.patch(f"/projects/{project['id']}", json={"owner_id": mate_id}, headers=owner_headers)
    assert resp.status_code == 200
    assert resp.json()["owner_id"] == mate_id

    # the previous owner lost write access
    again = client.patch(f"/projects/{project['id']}", json={"name": "Mine"}, headers=owner_headers)
    assert again.status_code == 403


def test_member_management(client, owner, project, make_user):
    owner_id, owner_headers = owner
    mate_id, _ = make_user("mate@example.com")
    pid = project["id"]

    added = client.post(f"/projects/{pid}/members", json={"email": "mate@example.com", "equity": 10}, headers=owner_headers)
    assert added.status_code == 201
    assert added.json()["equity"] == 10

    # adding again updates instead of duplicating
    client.post(f"/projects/{pid}/members", json={"email": "mate@example.com", "equity": 12}, headers=owner_headers)
    members = client.get(f"/projects/{pid}/members", headers=owner_headers).json()
    assert [m["email"] for m in members] == ["mate@example.com", "owner@example.com"]

    updated = client.patch(f"/projects/{pid}/members/{mate_id}", json={"equity": 20}, headers=owner_headers)
    assert updated.json()["equity"] == 20

    assert client.delete(f"/projects/{pid}/members/{owner_id}", headers=owner_headers).status_code == 400
    assert client.delete(f"/projects/{pid}/members/{mate_id}", headers=owner_headers).status_code == 204
    assert len(client.get(f"/projects/{pid}/members", headers=owner_headers).json()) == 1


def test_unknown_member_email(client, owner, project):
    _, headers = owner
    resp = client.post(f"/projects/{project['id']}/members", json={"email": "ghost@example.com"}, headers=headers)
    assert resp.status_code == 404


def test_delete_project(client, owner, project):
    _, headers = owner
    assert client.delete(f"/projects/{project['id']}", headers=headers).status_code == 204
    assert client.get(f"/projects/{project['id']}", headers=headers).status_code == 404
