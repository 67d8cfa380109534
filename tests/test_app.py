from conftest import auth, make_token


async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["service"] == "RecipeBox Backend Service"


async def test_liveness(client):
    response = await client.get("/health/live")

    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_responses_carry_request_id_and_security_headers(client):
    response = await client.get("/recipes/categories", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "X-Process-Time" in response.headers


async def test_account_responses_are_not_cached(client):
    response = await client.get("/users/u1", headers=auth(make_token("u1")))

    assert response.headers["Cache-Control"] == "no-store"


async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/no-such-route")

    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Not Found", "status": 404}}


async def test_untrusted_host_is_rejected(client):
    response = await client.get("/", headers={"Host": "evil.example.com"})

    assert response.status_code == 400
