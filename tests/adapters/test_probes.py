# tests/adapters/test_probes.py
import httpx
import pytest

from kvapi.adapters.probes import HttpReachabilityProbe, StoreHealthProbe

def transport_returning(status_code: int, seen: list = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(str(request.url))
        return httpx.Response(status_code, json={"services": {}})
    return httpx.MockTransport(handler)

@pytest.mark.asyncio
class TestHttpReachabilityProbe:

    async def test_success_hits_health_path(self):
        seen = []
        probe = HttpReachabilityProbe("localstack", "http://localhost:4566", transport=transport_returning(200, seen))

        result = await probe.check()

        assert result.ok is True
        assert result.message == "localstack ok"
        assert seen == ["http://localhost:4566/_localstack/health"]

    async def test_non_2xx_is_unreachable(self):
        probe = HttpReachabilityProbe("localstack", "http://localhost:4566", transport=transport_returning(503))

        result = await probe.check()

        assert result.ok is False
        assert result.message == "localstack unreachable"

    async def test_transport_error_is_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        probe = HttpReachabilityProbe("localstack", "http://nowhere:1", transport=httpx.MockTransport(handler))

        result = await probe.check()

        assert result.ok is False

    async def test_default_timeout(self):
        assert HttpReachabilityProbe("localstack", "http://x").timeout == 0.3

@pytest.mark.asyncio
class TestStoreHealthProbe:

    async def test_healthy_store(self, mock_store):
        result = await StoreHealthProbe("dynamodb", mock_store).check()
        assert (result.ok, result.message) == (True, "dynamodb ok")

    async def test_unhealthy_store(self, mock_store):
        mock_store.health_check.return_value = False
        result = await StoreHealthProbe("dynamodb", mock_store).check()
        assert (result.ok, result.message) == (False, "dynamodb unreachable")
