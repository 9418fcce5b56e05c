import datetime as dt

from app.db.models.production import ProductionEntry


def _add_entries(db, project, rows):
    for d, piles, racking, modules in rows:
        db.add(ProductionEntry(project_id=project.id, date=d, piles=piles, racking_tables=racking, modules=modules))
    db.commit()


def test_healthz(client):
    r = client.get("/healthz", headers={"X-Request-ID": "abc123"})
    assert r.json() == {"status": "ok"}
    assert r.headers["x-request-id"] == "abc123"
    assert client.get("/healthz").headers["x-request-id"]


def test_garbage_token_rejected(client):
    assert client.get("/projects", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_login_and_me(client, admin_user):
    r = client.post("/auth/login", json={"login": "admin", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["access_token"]
    assert r.json()["role"] == "admin"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["login"] == "admin"


def test_login_rejects_bad_password(client, admin_user):
    r = client.post("/auth/login", json={"login": "admin", "password": "nope"})
    assert r.status_code == 401


def test_requires_token(client, project):
    assert client.get("/projects").status_code == 401


def test_project_crud(client, admin_headers):
    payload = {
        "code": "SF-2",
        "name": "Mesa Ridge",
        "total_piles": 1000,
        "total_racking_tables": 250,
        "total_modules": 9000,
        "planned_start_date": "2024-02-01",
        "planned_end_date": "2024-05-01",
        "planned_modules_per_day": 100,
    }
    r = client.post("/projects", json=payload, headers=admin_headers)
    assert r.status_code == 200
    pid = r.json()["id"]
    assert r.json()["status"] == "active"

    r = client.put(f"/projects/{pid}", json={"total_modules": 9500}, headers=admin_headers)
    assert r.json()["total_modules"] == 9500
    assert r.json()["name"] == "Mesa Ridge"

    assert [p["code"] for p in client.get("/projects", headers=admin_headers).json()] == ["SF-2"]
    assert client.delete(f"/projects/{pid}", headers=admin_headers).status_code == 200
    assert client.get(f"/projects/{pid}", headers=admin_headers).status_code == 404


def test_project_code_must_be_unique(client, project, admin_headers):
    payload = {"code": "DUP", "name": "First", "planned_start_date": "2024-01-01", "planned_end_date": "2024-02-01"}
    assert client.post("/projects", json=payload, headers=admin_headers).status_code == 200
    r = client.post("/projects", json={**payload, "name": "Second"}, headers=admin_headers)
    assert r.status_code == 409

    # renaming onto a taken code is rejected, keeping its own code is not
    assert client.put(f"/projects/{project.id}", json={"code": "DUP"}, headers=admin_headers).status_code == 409
    r = client.put(f"/projects/{project.id}", json={"code": "SF-1", "name": "Sunfield II"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["name"] == "Sunfield II"


def test_project_rejects_negative_targets(client, admin_headers):
    payload = {
        "code": "BAD",
        "name": "Bad",
        "total_modules": -5,
        "planned_start_date": "2024-02-01",
        "planned_end_date": "2024-05-01",
    }
    assert client.post("/projects", json=payload, headers=admin_headers).status_code == 422


def test_installer_cannot_create_project(client, installer_headers):
    payload = {"code": "X", "name": "X", "planned_start_date": "2024-01-01", "planned_end_date": "2024-01-02"}
    assert client.post("/projects", json=payload, headers=installer_headers).status_code == 403


def test_installer_logs_production(client, project, installer_headers, installer_user):
    r = client.post(
        "/production",
        json={"project_id": project.id, "date": "2024-01-05", "piles": 12, "racking_tables": 3, "modules": 80, "crew": "Crew A"},
        headers=installer_headers,
    )
    assert r.status_code == 200
    assert r.json()["user_id"] == installer_user.id

    listed = client.get("/production", params={"project_id": project.id}, headers=installer_headers).json()
    assert len(listed) == 1
    assert listed[0]["modules"] == 80


def test_production_rejects_negative_counts(client, project, installer_headers):
    r = client.post(
        "/production",
        json={"project_id": project.id, "date": "2024-01-05", "modules": -1},
        headers=installer_headers,
    )
    assert r.status_code == 422


def test_production_date_filter(client, db_session, project, admin_headers):
    _add_entries(db_session, project, [(dt.date(2024, 1, d), 1, 1, 10) for d in (2, 3, 4, 5)])
    r = client.get(
        "/production",
        params={"project_id": project.id, "date_from": "2024-01-03", "date_to": "2024-01-04"},
        headers=admin_headers,
    )
    assert sorted(e["date"] for e in r.json()) == ["2024-01-03", "2024-01-04"]


def test_sync_is_idempotent(client, db_session, project, installer_headers):
    items = [
        {"project_id": project.id, "date": "2024-01-04", "modules": 50, "local_id": "l-1", "device_id": "tab-7"},
        {"project_id": project.id, "date": "2024-01-05", "modules": 60, "local_id": "l-2", "device_id": "tab-7"},
        {"project_id": 999, "date": "2024-01-05", "modules": 60, "local_id": "l-3", "device_id": "tab-7"},
    ]
    first = client.post("/production/sync", json={"items": items}, headers=installer_headers).json()["results"]
    assert [r["success"] for r in first] == [True, True, False]
    assert not any(r["duplicate"] for r in first)

    again = client.post("/production/sync", json={"items": items[:2]}, headers=installer_headers).json()["results"]
    assert all(r["duplicate"] for r in again)
    assert [r["id"] for r in again] == [r["id"] for r in first[:2]]
    assert db_session.query(ProductionEntry).count() == 2


def test_forecast_endpoint(client, db_session, project, admin_headers):
    _add_entries(db_session, project, [(dt.date(2024, 1, 6), 10, 5, 500)])
    r = client.get(f"/forecast/{project.id}", headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["days_elapsed"] == 5
    assert body["actual_progress"][5] == 50.0
    assert body["planned_progress"][5] == 50.0
    assert body["schedule_health"] == "green"
    assert body["projected_completion_date"] == "2024-01-07"
    assert body["remaining_work"] == {"piles": 190, "racking": 95, "modules": 500}


def test_forecast_unknown_project(client, admin_headers):
    assert client.get("/forecast/404", headers=admin_headers).status_code == 404


def test_progress_and_stats(client, db_session, project, admin_headers):
    _add_entries(db_session, project, [(dt.date(2024, 1, 2), 50, 25, 100), (dt.date(2024, 1, 6), 50, 25, 150)])
    pc = client.get(f"/forecast/{project.id}/progress", headers=admin_headers).json()
    assert pc == {"piles": 50.0, "racking": 50.0, "modules": 25.0, "overall": 35.0}

    today = client.get(f"/forecast/{project.id}/stats", params={"period": "today"}, headers=admin_headers).json()
    assert today == {"piles": 50, "racking": 25, "modules": 150}
    week = client.get(f"/forecast/{project.id}/stats", params={"period": "week"}, headers=admin_headers).json()
    assert week["modules"] == 250
    assert client.get(f"/forecast/{project.id}/stats", params={"period": "year"}, headers=admin_headers).status_code == 422


def test_summary(client, db_session, project, admin_headers):
    _add_entries(db_session, project, [(dt.date(2024, 1, 6), 10, 5, 500)])
    body = client.get(f"/forecast/{project.id}/summary", headers=admin_headers).json()
    assert body["as_of"] == "2024-01-06"
    assert body["today"]["modules"] == 500
    assert body["forecast"]["schedule_health"] == "green"


def test_weekly_report_json_and_csv(client, db_session, project, admin_headers):
    _add_entries(
        db_session,
        project,
        [
            (dt.date(2023, 12, 20), 5, 0, 0),
            (dt.date(2024, 1, 2), 20, 4, 100),
            (dt.date(2024, 1, 2), 10, 2, 50),
            (dt.date(2024, 1, 5), 30, 6, 150),
        ],
    )
    r = client.get("/reports/project", params={"project_id": project.id, "type": "weekly"}, headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["period"] == {"type": "weekly", "start": "2023-12-30", "end": "2024-01-06"}
    assert len(body["production"]["entries"]) == 3
    assert body["production"]["totals"] == {"piles": 60, "racking": 12, "modules": 300}
    assert body["production"]["days_worked"] == 2
    assert body["production"]["daily_average"] == {"piles": 30, "racking": 6, "modules": 150}
    assert body["installed_to_date"]["piles"] == 65
    assert body["qc"] == {"total": 0, "passed": 0, "failed": 0, "pass_rate": 100, "open_issues": 0}

    r = client.get(
        "/reports/project",
        params={"project_id": project.id, "type": "weekly", "format": "csv"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "DAILY PRODUCTION" in r.text


def test_custom_report_period(client, project, admin_headers):
    r = client.get(
        "/reports/project",
        params={"project_id": project.id, "type": "custom", "date_from": "2024-01-02", "date_to": "2024-01-04"},
        headers=admin_headers,
    )
    assert r.json()["period"]["start"] == "2024-01-02"
    assert r.json()["production"]["days_worked"] == 0


def test_exports(client, db_session, project, admin_headers, installer_headers):
    _add_entries(db_session, project, [(dt.date(2024, 1, 3), 10, 5, 200)])
    r = client.get("/reports/export/forecast.xlsx", params={"project_id": project.id}, headers=admin_headers)
    assert r.status_code == 200
    assert r.content[:2] == b"PK"

    r = client.get("/reports/export/summary.pdf", params={"project_id": project.id}, headers=admin_headers)
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")

    r = client.get("/reports/export/summary.pdf", params={"project_id": project.id}, headers=installer_headers)
    assert r.status_code == 403


def test_admin_creates_user(client, admin_headers):
    r = client.post(
        "/admin/users",
        json={"login": "crew.lead", "password": "hunter22", "role": "installer"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["role"] == "installer"
    assert client.post(
        "/admin/users",
        json={"login": "crew.lead", "password": "hunter22", "role": "installer"},
        headers=admin_headers,
    ).status_code == 409


def test_report_type_is_validated(client, project, admin_headers):
    r = client.get("/reports/project", params={"project_id": project.id, "type": "yearly"}, headers=admin_headers)
    assert r.status_code == 422
    r = client.get("/reports/project", params={"project_id": project.id, "type": "monthly"}, headers=admin_headers)
    assert r.json()["period"] == {"type": "monthly", "start": "2023-12-06", "end": "2024-01-06"}
    assert r.json()["forecast"]["schedule_health"] in ("green", "yellow", "red")
