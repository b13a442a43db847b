def test_health_ok(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_lifespan_builds_payment_provider(client, app):
    from shopcurator.payments import PaymentProvider
    assert isinstance(app.state.payment_provider, PaymentProvider)


def test_cors_preflight_allows_any_origin(client):
    res = client.options(
        "/api/scrape",
        headers={"origin": "https://front.example.com", "access-control-request-method": "POST"},
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"
