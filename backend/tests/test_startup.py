from app.startup import StartupValidator


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "environment": "test"}


def test_root(client):
    assert "running" in client.get("/").json()["message"]


def test_startup_checks_pass_with_schema(db_session):
    passed, errors, warnings = StartupValidator().validate_all()

    assert passed is True
    assert errors == []
    assert not any("Missing database tables" in w for w in warnings)


def test_missing_tables_reported():
    validator = StartupValidator()

    assert validator.check_required_tables() is True
    assert any("Missing database tables" in w for w in validator.warnings)
