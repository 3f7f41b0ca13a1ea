"""RequestsTransport 单元测试."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
import requests
from requests.adapters import HTTPAdapter

from elasticroute.connection.models import ClientConfig, HTTPMethod, SSLConfig
from elasticroute.connection.transport import (
    RequestsTransport,
    TransportResponse,
    _NoHostnameCheckAdapter,
)


@pytest.fixture
def session() -> MagicMock:
    """创建假的 requests.Session."""
    return MagicMock(spec=requests.Session)


def mounted_https_adapter(session: MagicMock):
    """返回最后一次挂载到 https:// 的适配器."""
    return [c.args[1] for c in session.mount.call_args_list if c.args[0] == "https://"][-1]


class TestConfigure:
    """配置映射测试."""

    def test_default_config(self, session) -> None:
        """测试默认配置."""
        RequestsTransport(ClientConfig(), session=session)
        assert session.verify is True
        assert session.cert is None
        assert session.auth is None
        assert session.proxies == {}
        assert type(mounted_https_adapter(session)) is HTTPAdapter

    def test_ssl_and_proxy_mapping(self, session) -> None:
        """测试 SSL 与代理配置映射."""
        config = ClientConfig(
            proxies={"https": "https://proxy.host:8080"},
            ssl=SSLConfig(ca_info="myca.pem", cert_file="c.pem", key_file="k.pem"),
            username="elastic",
            password="changeme",
        )
        RequestsTransport(config, session=session)
        assert session.verify == "myca.pem"
        assert session.cert == ("c.pem", "k.pem")
        assert session.auth == ("elastic", "changeme")
        assert session.proxies == {"https": "https://proxy.host:8080"}

    def test_verify_peer_disabled(self, session) -> None:
        """测试关闭证书校验."""
        config = ClientConfig(ssl=SSLConfig(verify_peer=False, ca_info="myca.pem"))
        RequestsTransport(config, session=session)
        assert session.verify is False

    def test_verify_host_disabled_mounts_adapter(self, session) -> None:
        """测试只关闭主机名校验时挂载专用适配器."""
        RequestsTransport(ClientConfig(ssl=SSLConfig(verify_host=False)), session=session)
        assert isinstance(mounted_https_adapter(session), _NoHostnameCheckAdapter)

    def test_connect_timeout_tuple(self, session) -> None:
        """测试设置连接超时时使用 (connect, read) 元组."""
        session.request.return_value = MagicMock(
            status_code=200, headers={}, text="", elapsed=timedelta(seconds=0.1)
        )
        transport = RequestsTransport(
            ClientConfig(request_timeout=30, connect_timeout=1), session=session
        )
        transport.perform(HTTPMethod.GET, "http://es:9200/")
        assert session.request.call_args.kwargs["timeout"] == (1, 30)

    def test_replaced_adapter_is_closed(self, session) -> None:
        """测试重新配置时关闭被替换的 https 适配器."""
        transport = RequestsTransport(ClientConfig(), session=session)
        first = mounted_https_adapter(session)
        with patch.object(HTTPAdapter, "close") as close:
            transport.configure(ClientConfig(ssl=SSLConfig(verify_host=False)))
        close.assert_called_once_with()
        assert mounted_https_adapter(session) is not first


class TestEnvironment:
    """环境变量隔离测试."""

    def test_trust_env_disabled(self, session) -> None:
        RequestsTransport(session=session)
        assert session.trust_env is False

    def test_environment_does_not_override_config(self, monkeypatch) -> None:
        """测试环境变量中的代理与 CA 不覆盖客户端配置."""
        monkeypatch.setenv("HTTP_PROXY", "http://env-proxy:1")
        monkeypatch.setenv("HTTPS_PROXY", "http://env-proxy:1")
        monkeypatch.setenv("REQUESTS_CA_BUNDLE", "/env/ca.pem")
        config = ClientConfig(
            proxies={"http": "http://configured:8080"},
            ssl=SSLConfig(verify_peer=False),
        )
        transport = RequestsTransport(config)
        try:
            settings = transport.session.merge_environment_settings(
                "http://es:9200/", {}, None, None, None
            )
        finally:
            transport.close()
        assert settings["proxies"] == {"http": "http://configured:8080"}
        assert settings["verify"] is False


class TestPerform:
    """perform 方法测试."""

    def test_successful_request(self, session) -> None:
        """测试正常请求."""
        session.request.return_value = MagicMock(
            status_code=201,
            headers={"content-type": "application/json"},
            text='{"ok": true}',
            elapsed=timedelta(milliseconds=250),
        )
        transport = RequestsTransport(ClientConfig(request_timeout=5), session=session)
        response = transport.perform(
            HTTPMethod.POST, "http://es:9200/i/_search", {"X": "1"}, '{"q": "ü"}'
        )
        session.request.assert_called_once_with(
            "POST",
            "http://es:9200/i/_search",
            headers={"X": "1"},
            data='{"q": "ü"}'.encode("utf-8"),
            timeout=5,
        )
        assert response.status_code == 201
        assert response.is_success is True
        assert response.json() == {"ok": True}
        assert response.elapsed == pytest.approx(0.25)
        assert response.error is None

    def test_empty_body_sends_no_data(self, session) -> None:
        """测试空请求体不发送数据."""
        session.request.return_value = MagicMock(
            status_code=200, headers={}, text="", elapsed=timedelta(0)
        )
        RequestsTransport(session=session).perform(HTTPMethod.HEAD, "http://es:9200/")
        assert session.request.call_args.kwargs["data"] is None

    @pytest.mark.parametrize(
        "error",
        [
            requests.exceptions.ConnectionError("refused"),
            requests.exceptions.ConnectTimeout("timeout"),
            requests.exceptions.SSLError("handshake"),
        ],
    )
    def test_transport_error_returns_status_zero(self, session, error) -> None:
        """测试传输层异常被转换为状态码 0."""
        session.request.side_effect = error
        response = RequestsTransport(session=session).perform(
            HTTPMethod.GET, "http://es:9200/"
        )
        assert response.status_code == 0
        assert response.error == str(error)
        assert response.is_success is False

    def test_close(self, session) -> None:
        """测试关闭 Session."""
        RequestsTransport(session=session).close()
        session.close.assert_called_once()


class TestTransportResponse:
    """TransportResponse 测试."""

    def test_invalid_json_raises_value_error(self) -> None:
        """测试非法 JSON 抛出 ValueError."""
        with pytest.raises(ValueError):
            TransportResponse(status_code=200, text="Not Found").json()
