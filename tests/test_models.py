"""Tests for model deserialization and the requests model methods send."""

from datetime import datetime, timezone

import pytest

from orka import UnrecognisedStateError
from orka.auth.types import TOKEN, TOKEN_AND_LICENSE
from orka.models import (
    ISO,
    Image,
    KubeAccount,
    LogEntry,
    Node,
    PortMapping,
    ProtocolPortMapping,
    Scheduler,
    VMConfiguration,
    VMInstance,
    VMResource,
)
from orka.models.types import count_or_zero, parse_timestamp

INSTANCE = {
    "virtual_machine_id": "ci-abc12",
    "virtual_machine_name": "ci",
    "owner": "alice@example.com",
    "node_location": "mini-1",
    "node_status": "READY",
    "virtual_machine_ip": "10.0.0.5",
    "vnc_port": "6000",
    "screen_sharing_port": "5900",
    "ssh_port": "8822",
    "cpu": 6,
    "vcpu": 6,
    "gpu": "N/A",
    "RAM": "16G",
    "base_image": "ventura.img",
    "image": "ci",
    "configuration_template": "default",
    "vm_status": "running",
    "io_boost": True,
    "reserved_ports": [{"host_port": 8080, "guest_port": 80, "protocol": "tcp"}],
    "creation_timestamp": "2023-01-02T03:04:05Z",
    "tag": "",
}


def _request(conn):
    """The (method, path, kwargs) of the last conn.request call."""
    args, kwargs = conn.request.call_args
    return args[0], args[1], kwargs


class TestValueTypes:
    def test_parse_timestamp_with_z(self):
        assert parse_timestamp("2023-01-02T03:04:05Z") == datetime(2023, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "value, microsecond",
        [
            ("2023-01-02T03:04:05.5Z", 500000),
            ("2023-01-02T03:04:05.12345Z", 123450),
            ("2023-01-02T03:04:05.123456789Z", 123456),
        ],
    )
    def test_parse_timestamp_any_fraction(self, value, microsecond):
        parsed = parse_timestamp(value)
        assert parsed.microsecond == microsecond
        assert parsed.tzinfo == timezone.utc

    def test_parse_timestamp_garbage(self):
        with pytest.raises(UnrecognisedStateError):
            parse_timestamp("yesterday")

    def test_bad_timestamp_keeps_snapshot(self, conn):
        image = Image.from_dict({"image": "ventura.img", "modified": "2023-01-02T03:04:05Z"}, conn=conn)
        conn.send.return_value = {"image_attributes": [{"image": "ventura.img", "modified": "last week"}]}
        with pytest.raises(UnrecognisedStateError):
            image.refresh()
        assert image.modification_time.year == 2023

    def test_count_or_zero(self):
        assert count_or_zero("N/A") == 0
        assert count_or_zero(None) == 0
        assert count_or_zero("2") == 2

    def test_port_mapping_str(self):
        assert str(PortMapping(host_port=8080, guest_port=80)) == "8080:80"

    def test_protocol_port_mapping_default(self):
        mapping = ProtocolPortMapping.from_dict({"host_port": "1", "guest_port": "2"})
        assert mapping == ProtocolPortMapping(host_port=1, guest_port=2, protocol="tcp")

    def test_scheduler_parse(self):
        assert Scheduler.parse(None) is Scheduler.DEFAULT
        assert Scheduler.parse("most-allocated") is Scheduler.MOST_ALLOCATED
        with pytest.raises(UnrecognisedStateError):
            Scheduler.parse("round-robin")


class TestVMConfiguration:
    def test_deserialize_placeholders(self, conn):
        conn.send.return_value = {
            "configs": [
                {
                    "orka_vm_name": "ci",
                    "owner": "alice@example.com",
                    "orka_base_image": "ventura.img",
                    "orka_cpu_core": 6,
                    "vcpu_count": 6,
                    "iso_image": "None",
                    "attached_disk": "None",
                    "system_serial": "N/A",
                    "tag": "",
                    "scheduler": "most-allocated",
                    "memory": "automatic",
                }
            ]
        }
        config = VMConfiguration("ci", conn=conn)

        assert config.owner.email == "alice@example.com"
        assert config.base_image.name == "ventura.img"
        assert config.iso_image is None
        assert config.attached_disk is None
        assert config.system_serial is None
        assert config.tag is None
        assert config.scheduler is Scheduler.MOST_ALLOCATED
        assert config.memory is None

        request = conn.send.call_args[0][0]
        assert request.path == "resources/vm/configs/ci"
        assert request.requirement == TOKEN

    def test_deserialize_attachments(self, conn):
        config = VMConfiguration.from_dict(
            {
                "orka_vm_name": "ci",
                "owner": "alice@example.com",
                "orka_base_image": "ventura.img",
                "iso_image": "install.iso",
                "attached_disk": "extra.img",
                "system_serial": "C02XYZ",
                "tag": "arm",
                "memory": 16,
            },
            conn=conn,
        )
        assert isinstance(config.iso_image, ISO)
        assert isinstance(config.attached_disk, Image)
        assert config.system_serial == "C02XYZ"
        assert config.tag == "arm"
        assert config.scheduler is Scheduler.DEFAULT
        assert config.memory == 16

    def test_delete_saved_state(self, conn):
        VMConfiguration("ci", conn=conn).delete_saved_state()
        method, path, kwargs = _request(conn)
        assert (method, path) == ("DELETE", "resources/vm/configs/ci/delete-state")


class TestVMResource:
    def test_deployed_resource_has_instances(self, conn):
        resource = VMResource.from_dict(
            {"virtual_machine_name": "ci", "vm_deployment_status": "Deployed", "status": [INSTANCE]},
            conn=conn,
        )
        assert resource.deployed is True
        assert resource.owner is None
        [instance] = resource.instances
        assert instance.id == "ci-abc12"
        assert instance.node.name == "mini-1"

    def test_unknown_status_raises(self, conn):
        with pytest.raises(UnrecognisedStateError):
            VMResource.from_dict({"virtual_machine_name": "ci", "vm_deployment_status": "Weird"}, conn=conn)

    def test_deploy_serializes_options(self, conn):
        conn.request.return_value = {
            "vcpu": "6",
            "host_cpu": "6",
            "ssh_port": "8822",
            "screen_share_port": "5999",
            "vm_id": "abc",
            "vnc_port": "N/A",
        }
        result = VMResource("ci", conn=conn).deploy(
            reserved_ports=[PortMapping(host_port=8080, guest_port=80)],
            iso_image=ISO("install.iso", conn=conn),
            scheduler="most-allocated",
            tag="arm",
            tag_required=True,
        )

        method, path, kwargs = _request(conn)
        assert (method, path) == ("POST", "resources/vm/deploy")
        assert kwargs["auth"] == TOKEN
        assert kwargs["json"] == {
            "orka_vm_name": "ci",
            "reserved_ports": ["8080:80"],
            "iso_image": "install.iso",
            "tag": "arm",
            "tag_required": True,
            "scheduler": "most-allocated",
        }
        assert result.vnc_port is None
        assert result.io_boost is False

    def test_configuration_deploy_delegates(self, conn):
        conn.request.return_value = {
            "vcpu": 3,
            "host_cpu": 3,
            "ssh_port": 8822,
            "screen_share_port": 5999,
            "vm_id": "abc",
        }
        VMConfiguration("ci", conn=conn).deploy(replicas=2)
        _, path, kwargs = _request(conn)
        assert path == "resources/vm/deploy"
        assert kwargs["json"] == {"orka_vm_name": "ci", "replicas": 2}

    def test_admin_delete_needs_license(self, conn):
        VMResource("ci", conn=conn, admin=True).delete_all_instances(node="mini-1")
        method, path, kwargs = _request(conn)
        assert (method, path) == ("DELETE", "resources/vm/delete")
        assert kwargs["auth"] == TOKEN_AND_LICENSE
        assert kwargs["json"] == {"orka_vm_name": "ci", "orka_node_name": "mini-1"}

    def test_exec_on_node(self, conn):
        VMResource("ci", conn=conn).revert_all_on_node(Node("mini-1", conn=conn))
        _, path, kwargs = _request(conn)
        assert path == "resources/vm/exec/revert"
        assert kwargs["json"] == {"orka_vm_name": "ci", "orka_node_name": "mini-1"}


class TestVMInstance:
    def test_parses_fields(self, conn):
        instance = VMInstance(INSTANCE, conn=conn)
        assert instance.ssh_port == 8822
        assert instance.gpu_count == 0
        assert instance.tag is None
        assert instance.reserved_ports == [ProtocolPortMapping(host_port=8080, guest_port=80)]
        assert instance.creation_time.year == 2023
        assert instance.config.name == "ci"
        conn.send.assert_not_called()

    def test_unavailable_ports_are_none(self, conn):
        conn.send.return_value = {
            "virtual_machine_resources": [
                {
                    "virtual_machine_name": "ci",
                    "vm_deployment_status": "Deployed",
                    "status": [{**INSTANCE, "vnc_port": "N/A", "screen_sharing_port": "N/A"}],
                }
            ]
        }
        [instance] = VMResource("ci", conn=conn).instances
        assert instance.vnc_port is None
        assert instance.screen_sharing_port is None
        assert instance.ssh_port == 8822

    def test_power_operations_use_instance_id(self, conn):
        VMInstance(INSTANCE, conn=conn).suspend()
        _, path, kwargs = _request(conn)
        assert path == "resources/vm/exec/suspend"
        assert kwargs["json"] == {"orka_vm_name": "ci-abc12"}

    def test_disks(self, conn):
        conn.request.return_value = {
            "drives": [{"type": "file", "device": "disk", "target": "vda", "source": "/images/ci.img"}]
        }
        disks = VMInstance(INSTANCE, conn=conn).disks()
        conn.request.assert_not_called()
        assert disks.first().target == "vda"

    def test_resize_image(self, conn):
        image = VMInstance(INSTANCE, conn=conn).resize_image(
            username="admin", password="pw", image_name="big.img", image_size="100G"
        )
        _, path, kwargs = _request(conn)
        assert path == "resources/image/resize"
        assert kwargs["json"]["new_image_size"] == "100G"
        assert image.name == "big.img"


class TestImage:
    def test_deserialize(self, conn):
        image = Image.from_dict(
            {
                "image": "ventura.img",
                "image_size": "90G",
                "modified": "2023-01-02T03:04:05Z",
                "date_added": "N/A",
                "owner": "alice@example.com",
            },
            conn=conn,
        )
        assert image.size == "90G"
        assert image.creation_time is None
        assert image.modification_time.year == 2023

    def test_checksum_in_progress(self, conn):
        conn.request.return_value = {}
        assert Image("ventura.img", conn=conn).checksum() is None

    def test_download_to_directory(self, conn, tmp_path):
        conn.download.return_value = 0
        Image("ventura.img", conn=conn).download(tmp_path)
        args, kwargs = conn.download.call_args
        assert args[0] == "resources/image/download/ventura.img"
        assert args[1].name == str(tmp_path / "ventura.img")


class TestNode:
    def test_gpu_na_means_zero(self, conn):
        node = Node.from_dict({"name": "mini-1", "available_gpu": "N/A", "hostIP": "10.0.0.1"}, conn=conn)
        assert node.available_gpu_count == 0
        assert node.host_ip == "10.0.0.1"

    def test_reserved_ports_filtered_by_node(self, conn):
        conn.request.return_value = {
            "reserved_ports": [
                {"host_port": 8080, "guest_port": 80, "orka_node_name": "mini-1"},
                {"host_port": 9090, "guest_port": 90, "orka_node_name": "mini-2"},
            ]
        }
        ports = Node("mini-1", conn=conn).reserved_ports()
        assert [str(p) for p in ports] == ["8080:80"]

    def test_dedicate_to_group(self, conn):
        node = Node.from_dict({"name": "mini-1", "orka_group": None}, conn=conn)
        node.dedicate_to_group("ops")
        _, path, kwargs = _request(conn)
        assert path == "resources/node/groups/ops"
        assert kwargs["json"] == ["mini-1"]
        assert node.orka_group == "ops"


class TestKubeAccount:
    def test_kubeconfig_cached(self, conn):
        conn.request.return_value = {"kubeconfig": "apiVersion: v1"}
        account = KubeAccount("builder", conn=conn)
        assert account.kubeconfig() == "apiVersion: v1"
        assert account.kubeconfig() == "apiVersion: v1"
        assert conn.request.call_count == 1

    def test_regenerate_replaces_cache(self, conn):
        account = KubeAccount("builder", conn=conn, kubeconfig="old")
        conn.request.return_value = {"kubeconfig": "new"}
        assert account.regenerate() == "new"
        assert account.kubeconfig() == "new"
        assert conn.request.call_count == 1


class TestLogEntry:
    ENTRY = {
        "logVersion": "1.0",
        "id": "log-1",
        "createdAt": "2023-01-02T03:04:05.000Z",
        "request": {"method": "POST", "url": "/resources/vm/deploy", "headers": {}, "body": {}},
        "response": {"statusCode": 200, "headers": {}, "body": {}},
        "user": {"email": "alice@example.com", "id": "u1"},
    }

    def test_from_dict(self):
        entry = LogEntry.from_dict(self.ENTRY)
        assert entry.request.method == "POST"
        assert entry.response.status_code == 200
        assert entry.user.email == "alice@example.com"

    def test_unknown_version(self):
        with pytest.raises(UnrecognisedStateError):
            LogEntry.from_dict({**self.ENTRY, "logVersion": "2.0"})
