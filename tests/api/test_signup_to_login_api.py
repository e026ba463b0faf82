"""End to end — migrate, register, look up, rename and log in over HTTP."""


async def test_full_account_lifecycle(bare_client):
    assert (await bare_client.post("/api/v1/migrations")).status_code == 201

    created = await bare_client.post("/api/v1/users", json={
        "username": "sam", "email": "sam@example.com", "password": "s3cret",
    })
    assert created.status_code == 201
    user_id = created.json()["id"]

    duplicate = await bare_client.post("/api/v1/users", json={
        "username": "SAM", "email": "other@example.com", "password": "x",
    })
    assert duplicate.status_code == 400

    found = await bare_client.get("/api/v1/users/Sam")
    assert found.json()["id"] == user_id

    renamed = await bare_client.patch("/api/v1/users/sam", json={
        "username": "samuel", "password": "n3w-secret",
    })
    assert renamed.status_code == 200
    assert renamed.json()["username"] == "samuel"

    old_password = await bare_client.post("/api/v1/sessions", json={
        "email": "sam@example.com", "password": "s3cret",
    })
    assert old_password.status_code == 401

    login = await bare_client.post("/api/v1/sessions", json={
        "email": "sam@example.com", "password": "n3w-secret",
    })
    assert login.status_code == 201
    assert login.json()["user_id"] == user_id
    assert login.cookies["session_id"] == login.json()["token"]
