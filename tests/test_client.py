"""Tests for the OrkaClient and its namespaces."""

import io
from unittest.mock import MagicMock, patch

import httpx
import pytest

from orka import (
    AuthConfigurationError,
    AuthenticationError,
    ClientError,
    ConfigurationError,
    OrkaClient,
    ServerError,
)
from orka.models import Image, RemoteImage, User, VMResource

BASE_URL = "http://orka.test"


def _sent(mock_request, index=-1):
    """Return (method, url, kwargs) of a recorded httpx.Client.request call."""
    call = mock_request.call_args_list[index]
    method, url = call[0]
    return method, url, call[1]


class TestOrkaClientInit:
    def test_init_with_explicit_values(self):
        client = OrkaClient("http://orka.test/", token="tok", license_key="lic")
        assert client._base_url == "http://orka.test"
        assert client._credentials.token == "tok"
        client.close()

    def test_init_without_url_raises(self):
        with pytest.raises(ConfigurationError):
            OrkaClient(token="tok")

    def test_init_from_env(self, monkeypatch):
        monkeypatch.setenv("ORKA_API_URL", "http://env.test")
        monkeypatch.setenv("ORKA_TOKEN", "env-tok")
        client = OrkaClient()
        assert client._base_url == "http://env.test"
        assert client._credentials.token == "env-tok"
        client.close()

    def test_init_without_credentials_is_allowed(self):
        with OrkaClient(BASE_URL) as client:
            assert client._credentials.token is None
            assert client._credentials.license_key is None

    def test_repr(self, client):
        assert repr(client) == "<OrkaClient 'http://orka.test'>"


class TestRequests:
    def test_headers_follow_requirement(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({"nodes": []})) as mock_request:
            client.nodes.list().eager()
            method, url, kwargs = _sent(mock_request)

        assert method == "GET"
        assert url == f"{BASE_URL}/resources/node/list"
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert "orka-licensekey" not in kwargs["headers"]

    def test_admin_request_sends_both_credentials(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({"nodes": []})) as mock_request:
            client.nodes.list(admin=True).eager()
            _, url, kwargs = _sent(mock_request)

        assert url == f"{BASE_URL}/resources/node/list/all"
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["headers"]["orka-licensekey"] == "lic"

    def test_no_auth_endpoint_sends_no_credentials(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({"api_version": "1.7.0"})) as mock_request:
            assert client.get_api_version() == "1.7.0"
            _, url, kwargs = _sent(mock_request)

        assert url == f"{BASE_URL}/health-check"
        assert "Authorization" not in kwargs["headers"]
        assert "orka-licensekey" not in kwargs["headers"]

    def test_missing_credential_sends_nothing(self, make_response):
        client = OrkaClient(BASE_URL, token="tok")
        with patch.object(httpx.Client, "request", return_value=make_response({})) as mock_request:
            with pytest.raises(AuthConfigurationError):
                client.logs.delete()
            mock_request.assert_not_called()
        client.close()

    def test_auth_error(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response(status_code=401, text="Unauthorized")):
            with pytest.raises(AuthenticationError) as exc_info:
                client.tokens.info()
        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "401: Unauthorized"

    def test_client_error(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response(status_code=400, text="Bad name")):
            with pytest.raises(ClientError):
                client.images.get("ci.img").delete()

    def test_server_error(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response(status_code=500, text="oops")):
            with pytest.raises(ServerError):
                client.users.list().eager()

    def test_empty_success_body(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response()):
            assert client.tokens.revoke() is None


class TestLaziness:
    def test_get_makes_no_request(self, client):
        with patch.object(httpx.Client, "request") as mock_request:
            user = client.users.get("alice@example.com")
            node = client.nodes.get("mini-1")
            mock_request.assert_not_called()
        assert isinstance(user, User)
        assert node.name == "mini-1"

    def test_list_defers_until_consumed(self, client, make_response):
        body = {"user_groups": {"admins": ["alice@example.com"], "$ungrouped": ["bob@example.com"]}}
        with patch.object(httpx.Client, "request", return_value=make_response(body)) as mock_request:
            users = client.users.list()
            mock_request.assert_not_called()

            emails = [u.email for u in users]
            groups = {u.email: u.group for u in users}

        assert sorted(emails) == ["alice@example.com", "bob@example.com"]
        assert groups == {"alice@example.com": "admins", "bob@example.com": None}
        assert mock_request.call_count == 1

    def test_lazy_user_lookup(self, client, make_response):
        body = {"user_groups": {"admins": ["alice@example.com"]}}
        with patch.object(httpx.Client, "request", return_value=make_response(body)) as mock_request:
            user = client.users.get("alice@example.com")
            assert user.group == "admins"
            _, url, kwargs = _sent(mock_request)

        assert url == f"{BASE_URL}/users"
        assert kwargs["headers"]["orka-licensekey"] == "lic"
        assert "Authorization" not in kwargs["headers"]


class TestUsersNamespace:
    def test_create(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({})) as mock_request:
            user = client.users.create("carol@example.com", "secret", group="ops")
            method, url, kwargs = _sent(mock_request)

        assert method == "POST"
        assert url == f"{BASE_URL}/users"
        assert kwargs["json"] == {"email": "carol@example.com", "password": "secret", "group": "ops"}
        assert user.loaded
        assert user.group == "ops"

    def test_update_credentials_requires_something(self, client):
        with pytest.raises(ValueError):
            client.users.update_credentials()

    def test_change_group(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({})) as mock_request:
            client.users.get("alice@example.com").remove_group()
            _, url, kwargs = _sent(mock_request)

        assert url == f"{BASE_URL}/users/groups/$ungrouped"
        assert kwargs["json"] == ["alice@example.com"]


class TestTokensNamespace:
    def test_create_needs_no_credentials(self, make_response):
        client = OrkaClient(BASE_URL)
        with patch.object(httpx.Client, "request", return_value=make_response({"token": "new"})) as mock_request:
            assert client.tokens.create("alice@example.com", "secret") == "new"
            _, url, kwargs = _sent(mock_request)
        client.close()

        assert url == f"{BASE_URL}/token"
        assert kwargs["json"] == {"email": "alice@example.com", "password": "secret"}

    def test_info(self, client, make_response):
        body = {"authenticated": True, "is_token_revoked": False, "email": "alice@example.com"}
        with patch.object(httpx.Client, "request", return_value=make_response(body)):
            info = client.tokens.info()
        assert info.authenticated is True
        assert info.token_revoked is False
        assert info.user.email == "alice@example.com"


class TestVMResources:
    def test_list_uses_expand_and_admin_path(self, client, make_response):
        body = {
            "virtual_machine_resources": [
                {
                    "virtual_machine_name": "ci",
                    "vm_deployment_status": "Not Deployed",
                    "owner": "alice@example.com",
                    "cpu": 6,
                    "vcpu": 6,
                    "base_image": "ventura.img",
                    "image": "ci",
                }
            ]
        }
        with patch.object(httpx.Client, "request", return_value=make_response(body)) as mock_request:
            vms = client.vm_resources.list(user="alice@example.com").to_list()
            _, url, kwargs = _sent(mock_request)

        assert url == f"{BASE_URL}/resources/vm/list/alice@example.com"
        assert kwargs["params"] == {"expand": ""}
        assert kwargs["headers"]["orka-licensekey"] == "lic"
        assert vms[0].deployed is False
        assert vms[0].base_image.name == "ventura.img"
        assert vms[0].owner.email == "alice@example.com"

    def test_delete_all_instances_ignores_nothing_deployed(self, client, make_response):
        response = make_response(status_code=500, text='{"message": "No VMs with that name are currently deployed"}')
        with patch.object(httpx.Client, "request", return_value=response):
            client.vm_resources.get("ci").delete_all_instances()

    def test_delete_all_instances_raises_other_errors(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response(status_code=500, text="disk full")):
            with pytest.raises(ServerError):
                client.vm_resources.get("ci").delete_all_instances()

    def test_delete_all_instances_client_error_not_benign(self, client, make_response):
        response = make_response(status_code=400, text="No VMs with that name are currently deployed")
        with patch.object(httpx.Client, "request", return_value=response):
            with pytest.raises(ClientError):
                client.vm_resources.get("ci").delete_all_instances()

    def test_exec_on_node_requires_node(self, client):
        with pytest.raises(ValueError):
            client.vm_resources.get("ci").start_all_on_node(None)

    def test_deploy(self, client, make_response):
        body = {
            "ram": "16G",
            "vcpu": "6",
            "host_cpu": "6",
            "ip": "10.0.0.5",
            "ssh_port": "8822",
            "screen_share_port": "5999",
            "vm_id": "abc123",
            "io_boost": False,
            "use_saved_state": "N/A",
            "gpu_passthrough": "N/A",
            "vnc_port": "6000",
        }
        with patch.object(httpx.Client, "request", return_value=make_response(body)) as mock_request:
            result = client.vm_resources.get("ci").deploy(node=client.nodes.get("mini-1"), vm_metadata={"a": "b"})
            _, url, kwargs = _sent(mock_request)

        assert url == f"{BASE_URL}/resources/vm/deploy"
        assert kwargs["json"] == {
            "orka_vm_name": "ci",
            "orka_node_name": "mini-1",
            "vm_metadata": {"items": [{"key": "a", "value": "b"}]},
        }
        assert result.ssh_port == 8822
        assert result.use_saved_state is False
        assert result.vnc_port == 6000
        assert isinstance(result.resource, VMResource)
        assert result.resource.name == "abc123"


class TestMiscEndpoints:
    def test_license_key_valid(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({})) as mock_request:
            assert client.is_license_key_valid() is True
            _, _, kwargs = _sent(mock_request)
        assert kwargs["json"] == {"licenseKey": "lic"}

    def test_license_key_invalid(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response(status_code=401, text="nope")):
            assert client.is_license_key_valid("bad") is False

    def test_license_key_required(self):
        client = OrkaClient(BASE_URL)
        with pytest.raises(ValueError):
            client.is_license_key_valid()
        client.close()

    def test_password_requirements(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({"password_length": 6})):
            assert client.get_password_requirements().length == 6

    def test_default_base_image(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({"default_base_image": "ventura.img"})):
            image = client.get_default_base_image()
        assert isinstance(image, Image)
        assert image.name == "ventura.img"
        assert not image.loaded

    def test_logs_limit(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({"logs": []})) as mock_request:
            assert len(client.logs.list(limit=5)) == 0
            method, url, kwargs = _sent(mock_request)
        assert method == "POST"
        assert url == f"{BASE_URL}/logs/query"
        assert kwargs["params"] == {"limit": 5}


class TestImagesAndFiles:
    def test_list_remote(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({"images": ["sonoma.img"]})):
            remote = client.images.list_remote().first()
        assert isinstance(remote, RemoteImage)
        assert remote.name == "sonoma.img"

    def test_rename_returns_new_handle(self, client, make_response):
        with patch.object(httpx.Client, "request", return_value=make_response({})) as mock_request:
            image = client.images.get("old.img")
            renamed = image.rename("new.img")
            _, _, kwargs = _sent(mock_request)
        assert kwargs["json"] == {"image": "old.img", "new_name": "new.img"}
        assert image.name == "old.img"
        assert renamed.name == "new.img"

    def test_upload_from_path(self, client, make_response, tmp_path):
        path = tmp_path / "disk.img"
        path.write_bytes(b"data")
        with patch.object(httpx.Client, "request", return_value=make_response({})) as mock_request:
            image = client.images.upload(path)
            _, url, kwargs = _sent(mock_request)

        assert url == f"{BASE_URL}/resources/image/upload"
        name, _, content_type = kwargs["files"]["image"]
        assert name == "disk.img"
        assert content_type == "application/x-iso9660-image"
        assert image.name == "disk.img"

    def test_upload_file_object_needs_name(self, client):
        with pytest.raises(ValueError):
            client.isos.upload(io.BytesIO(b"data"))

    def test_download(self, client):
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.status_code = 200
        mock_response.iter_bytes.return_value = iter([b"ab", b"cd"])
        stream = MagicMock()
        stream.__enter__.return_value = mock_response

        out = io.BytesIO()
        with patch.object(httpx.Client, "stream", return_value=stream) as mock_stream:
            written = client.images.get("ci.img").download(out)

        assert written == 4
        assert out.getvalue() == b"abcd"
        args, kwargs = mock_stream.call_args
        assert args == ("GET", f"{BASE_URL}/resources/image/download/ci.img")
        assert kwargs["headers"]["Authorization"] == "Bearer tok"

    def test_download_error(self, client):
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.status_code = 404
        mock_response.text = "not found"
        stream = MagicMock()
        stream.__enter__.return_value = mock_response

        with patch.object(httpx.Client, "stream", return_value=stream):
            with pytest.raises(ClientError):
                client.images.get("ci.img").download(io.BytesIO())
