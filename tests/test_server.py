import json
import threading
import urllib.error
import urllib.request

import pytest

from provaalert.server import (
    Alert,
    AlertmanagerRequest,
    InvalidAlertRequest,
    alert_names,
    make_server,
    parse_alert_request,
    parse_args,
)

SAMPLE = {
    "receiver": "webhook",
    "status": "firing",
    "groupKey": "ignored",
    "alerts": [
        {
            "status": "firing",
            "labels": {"alertname": "HighCPU", "severity": "critical"},
            "annotations": {"summary": "cpu is high"},
        },
        {"status": "resolved", "labels": {"instance": "node-a"}, "annotations": {}},
    ],
}


@pytest.fixture
def server_url():
    server = make_server("127.0.0.1", 0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()
    thread.join()


def _post(url, body):
    request = urllib.request.Request(url, data=body, method="POST")
    try:
        with urllib.request.urlopen(request, timeout=5) as response:
            return response.status, response.read().decode()
    except urllib.error.HTTPError as exc:
        return exc.code, exc.read().decode()


def test_parse_sample_request():
    request = parse_alert_request(json.dumps(SAMPLE).encode())
    assert request.receiver == "webhook"
    assert request.status == "firing"
    assert len(request.alerts) == 2
    assert request.alerts[0].labels["severity"] == "critical"
    assert request.alerts[0].annotations == {"summary": "cpu is high"}
    assert request.alerts[1].status == "resolved"


def test_alert_names_uses_empty_for_missing_label():
    request = parse_alert_request(json.dumps(SAMPLE))
    assert alert_names(request) == ["HighCPU", ""]


def test_missing_fields_take_defaults():
    request = parse_alert_request(b"{}")
    assert request == AlertmanagerRequest()
    assert alert_names(request) == []


def test_null_alert_is_empty():
    assert Alert.from_dict(None) == Alert()


def test_trailing_data_after_first_value_is_ignored():
    request = parse_alert_request(b'{"receiver": "r"} trailing')
    assert request.receiver == "r"


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"   ",
        b"not json",
        b"[1, 2]",
        b'{"receiver": 5}',
        b'{"alerts": {}}',
        b'{"alerts": [{"labels": {"alertname": 1}}]}',
        b'{"alerts": ["x"]}',
    ],
)
def test_invalid_bodies_are_rejected(body):
    with pytest.raises(InvalidAlertRequest):
        parse_alert_request(body)


def test_invalid_request_is_value_error():
    with pytest.raises(ValueError):
        AlertmanagerRequest.from_dict("text")


def test_post_alert_accepted(server_url, capsys):
    status, text = _post(server_url + "/alert", json.dumps(SAMPLE).encode())
    assert status == 200
    assert text == "alert ricevuto"
    assert "Alert ricevuto: HighCPU" in capsys.readouterr().out


def test_post_invalid_body_is_bad_request(server_url):
    status, text = _post(server_url + "/alert", b"{broken")
    assert status == 400
    assert text.strip() == "invalid request"


def test_post_other_path_not_found(server_url):
    status, _ = _post(server_url + "/other", b"{}")
    assert status == 404


def test_parse_args_defaults():
    options = parse_args([])
    assert options.metrics_addr == "0"
    assert options.probe_addr == ":8081"
    assert options.leader_elect is False
    assert options.metrics_secure is True
    assert options.webhook_cert_name == "tls.crt"
    assert options.metrics_cert_key == "tls.key"
    assert options.enable_http2 is False


def test_parse_args_boolean_forms():
    options = parse_args(["--leader-elect", "--metrics-secure=false", "-enable-http2=true"])
    assert options.leader_elect is True
    assert options.metrics_secure is False
    assert options.enable_http2 is True


def test_parse_args_rejects_bad_boolean():
    with pytest.raises(SystemExit):
        parse_args(["--metrics-secure=maybe"])