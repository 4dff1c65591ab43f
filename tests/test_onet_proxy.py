import base64

import httpx

from careerquest.services.onet_proxy import OnetProxy


def _basic(user, password):
    return "Basic " + base64.b64encode(f"{user}:{password}".encode()).decode()


async def test_forward_injects_credentials_and_client(proxy, fake_onet):
    fake_onet.add("mnm/careers", {"start": 1, "end": 20, "total": 0, "career": []})

    result = await proxy.forward("mnm/careers", {"sort": "name", "start": 1, "end": 20})

    assert result.status_code == 200
    assert result.body["total"] == 0

    sent = fake_onet.requests[0]
    assert sent.headers["authorization"] == _basic("onet-user", "onet-pass")
    assert sent.headers["accept"] == "application/json"
    assert sent.headers["user-agent"] == "CareerQuest/1.0"
    assert sent.url.params["client"] == "careerquest"
    assert sent.url.params["sort"] == "name"
    assert "path" not in sent.url.params


async def test_forward_keeps_caller_client_param(proxy, fake_onet):
    fake_onet.add("mnm/browse", {"industry": []})

    await proxy.forward("mnm/browse", [("client", "someone-else")])

    assert fake_onet.requests[0].url.params.get_list("client") == ["someone-else"]


async def test_upstream_error_keeps_status(proxy, fake_onet):
    fake_onet.add("mnm/careers/00-0000.00/report", lambda request: httpx.Response(404, text="no such career"))

    result = await proxy.forward("mnm/careers/00-0000.00/report")

    assert result.status_code == 404
    assert not result.ok
    assert result.body == {"error": "O*NET API returned error: 404 Not Found"}


async def test_transport_failure_is_500(settings):
    def broken(request):
        raise httpx.ConnectError("connection refused", request=request)

    proxy = OnetProxy(settings, transport=httpx.MockTransport(broken))
    result = await proxy.forward("mnm/careers")

    assert result.status_code == 500
    assert result.body["error"].startswith("Failed to fetch data from O*NET Web Services")


async def test_non_json_body_is_500(proxy, fake_onet):
    fake_onet.add("mnm/browse", lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    result = await proxy.forward("mnm/browse")

    assert result.status_code == 500


async def test_missing_path(proxy, fake_onet):
    result = await proxy.forward(None)

    assert result.status_code == 400
    assert result.body == {"error": "Path parameter is required"}
    assert fake_onet.requests == []


async def test_rejects_paths_leaving_the_service(proxy, fake_onet):
    for path in ("https://evil.example.com/x", "/etc/passwd", "mnm/../../admin"):
        result = await proxy.forward(path)
        assert result.status_code == 400
    assert fake_onet.requests == []


async def test_route_passes_body_through(client, fake_onet):
    fake_onet.add("mnm/search", {"keyword": "nurse", "start": 1, "end": 20, "total": 1,
                                 "career": [{"code": "29-1141.00", "title": "Registered Nurses"}]})

    response = await client.get("/api/onet", params={"path": "mnm/search", "keyword": "nurse"})

    assert response.status_code == 200
    assert response.json()["career"][0]["code"] == "29-1141.00"
    assert fake_onet.requests[0].url.params["keyword"] == "nurse"


async def test_route_propagates_upstream_status(client, fake_onet):
    fake_onet.add("mnm/careers", lambda request: httpx.Response(503))

    response = await client.get("/api/onet", params={"path": "mnm/careers"})

    assert response.status_code == 503
    assert response.json() == {"error": "O*NET API returned error: 503 Service Unavailable"}


async def test_route_requires_path(client):
    response = await client.get("/api/onet")

    assert response.status_code == 400
    assert response.json() == {"error": "Path parameter is required"}
