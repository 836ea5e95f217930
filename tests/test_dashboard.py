from datetime import date, datetime, timedelta, timezone

import pytest

from speed_equity.models.daily_entry import DailyEntry


@pytest.fixture
def team(client, owner, project, make_user):
    """Owner with 60% equity and a teammate with 25%."""
    owner_id, owner_headers = owner
    mate_id, mate_headers = make_user("mate@example.com")
    pid = project["id"]
    client.post(f"/projects/{pid}/members", json={"email": "mate@example.com", "equity": 25}, headers=owner_headers)
    client.patch(f"/projects/{pid}/members/{owner_id}", json={"equity": 60}, headers=owner_headers)
    return pid, (owner_id, owner_headers), (mate_id, mate_headers)


def test_project_dashboard_matches_checkin_feedback(client, team):
    pid, (_, owner_headers), (_, mate_headers) = team

    shown = []
    for headers, worked, wasted in [(owner_headers, 4, 1), (mate_headers, 2.5, 0.5)]:
        resp = client.post(
            "/checkins/",
            json={"project_id": pid, "hours_worked": worked, "hours_wasted": wasted},
            headers=headers,
        )
        shown.append(resp.json()["earnings"])

    dash = client.get(f"/dashboard/projects/{pid}", headers=owner_headers).json()
    assert dash["implied_hour_value"] == 200
    assert dash["total_hours_worked"] == 6.5
    assert dash["total_hours_wasted"] == 1.5
    assert dash["sweat_equity_earned"] == sum(e["money_made"] for e in shown)
    assert dash["money_lost"] == sum(e["money_lost"] for e in shown)
    assert dash["project_progress"] == pytest.approx(6.5 / 506.5)


def test_project_dashboard_without_projection(client, owner):
    _, headers = owner
    pid = client.post("/projects/", json={"name": "Unvalued"}, headers=headers).json()["id"]
    client.post("/checkins/", json={"project_id": pid, "hours_worked": 8}, headers=headers)

    dash = client.get(f"/dashboard/projects/{pid}", headers=headers).json()
    assert dash["implied_hour_value"] is None
    assert dash["active_valuation"] is None
    assert dash["sweat_equity_earned"] == 0
    assert dash["money_lost"] == 0
    assert dash["active_weeks_to_goal"] is None


def test_weeks_to_goal_uses_active_member_plans(client, team):
    pid, (_, owner_headers), (_, mate_headers) = team
    client.post(f"/projects/{pid}/member-projections", json={"planned_hours_per_week": 30}, headers=owner_headers)
    client.post(f"/projects/{pid}/member-projections", json={"planned_hours_per_week": 20}, headers=mate_headers)

    dash = client.get(f"/dashboard/projects/{pid}", headers=mate_headers).json()
    assert dash["active_planned_hours_per_week"] == 50
    assert dash["active_weeks_to_goal"] == 10


def test_member_dashboard(client, team):
    pid, (owner_id, owner_headers), (mate_id, mate_headers) = team
    client.post("/checkins/", json={"project_id": pid, "hours_worked": 6, "hours_wasted": 2}, headers=owner_headers)
    client.post("/checkins/", json={"project_id": pid, "hours_worked": 2}, headers=mate_headers)

    me = client.get(f"/dashboard/projects/{pid}/me", headers=mate_headers).json()
    assert me["user_id"] == mate_id
    assert me["equity"] == 25
    assert me["member_hours_worked"] == 2
    assert me["member_money_made"] == 400
    assert me["member_money_lost"] == 0
    assert me["member_sweat_equity_earned_weighted"] == 100
    assert me["potential_equity_value"] == 25000
    assert me["contribution_pct"] == 25
    assert me["team_hours_worked"] == 8

    owner_view = client.get(f"/dashboard/projects/{pid}/me", headers=owner_headers).json()
    assert owner_view["member_money_lost"] == 400
    assert owner_view["contribution_pct"] == 75


def test_hours_series_last_seven_days(client, team, db):
    pid, (owner_id, owner_headers), (mate_id, _) = team
    start = date.today() - timedelta(days=20)
    inserted = datetime.now(timezone.utc) - timedelta(days=30)
    for i in range(9):
        db.add(DailyEntry(project_id=pid, created_by=owner_id, entry_date=start + timedelta(days=i),
                          hours_worked=1 + i, hours_wasted=0, inserted_at=inserted))
    db.add(DailyEntry(project_id=pid, created_by=mate_id, entry_date=start + timedelta(days=8),
                      hours_worked=5, hours_wasted=0, inserted_at=inserted))
    db.commit()

    series = client.get(f"/dashboard/projects/{pid}/hours", headers=owner_headers).json()
    assert len(series) == 7
    assert series[0]["date"] == str(start + timedelta(days=2))
    assert series[-1] == {"date": str(start + timedelta(days=8)), "my": 9, "team": 14}


def test_dashboard_requires_membership(client, project, make_user):
    _, stranger = make_user("stranger@example.com")
    assert client.get(f"/dashboard/projects/{project['id']}", headers=stranger).status_code == 403
    assert client.get(f"/dashboard/projects/{project['id']}/me", headers=stranger).status_code == 403


def test_removed_member_plans_no_longer_count(client, team):
    pid, (owner_id, owner_headers), (mate_id, mate_headers) = team
    client.post(f"/projects/{pid}/member-projections", json={"planned_hours_per_week": 10}, headers=owner_headers)
    client.post(f"/projects/{pid}/member-projections", json={"planned_hours_per_week": 40}, headers=mate_headers)

    assert client.delete(f"/projects/{pid}/members/{mate_id}", headers=owner_headers).status_code == 204

    dash = client.get(f"/dashboard/projects/{pid}", headers=owner_headers).json()
    assert dash["active_planned_hours_per_week"] == 10
    assert dash["active_weeks_to_goal"] == 50

    rows = client.get(f"/projects/{pid}/member-projections", headers=owner_headers).json()
    assert [r["user_id"] for r in rows] == [owner_id]
