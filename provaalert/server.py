"""HTTP receiver for Alertmanager webhook notifications."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Mapping, Sequence
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

ALERT_PATH = "/alert"
LISTEN_HOST = ""
LISTEN_PORT = 8080
ACCEPTED_REPLY = "alert ricevuto"
INVALID_REPLY = "invalid request"


class InvalidAlertRequest(ValueError):
    """Raised when a webhook body is not a valid Alertmanager notification."""


def _string_field(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidAlertRequest(f"{key} must be a string, got {type(value).__name__}")
    return value


def _string_map(data: Mapping[str, Any], key: str) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidAlertRequest(f"{key} must be an object, got {type(value).__name__}")
    result: dict[str, str] = {}
    for name, item in value.items():
        if item is None:
            item = ""
        if not isinstance(item, str):
            raise InvalidAlertRequest(f"{key}.{name} must be a string")
        result[name] = item
    return result


@dataclass
class Alert:
    """One alert inside a notification."""

    status: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Alert:
        """Build from a decoded JSON object; unknown fields are ignored."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise InvalidAlertRequest(f"alert must be an object, got {type(data).__name__}")
        return cls(
            status=_string_field(data, "status"),
            labels=_string_map(data, "labels"),
            annotations=_string_map(data, "annotations"),
        )

    @property
    def name(self) -> str:
        return self.labels.get("alertname", "")


@dataclass
class AlertmanagerRequest:
    """The part of an Alertmanager webhook notification that is used."""

    receiver: str = ""
    status: str = ""
    alerts: list[Alert] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AlertmanagerRequest:
        """Build from a decoded JSON object; unknown fields are ignored."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise InvalidAlertRequest(
                f"request must be an object, got {type(data).__name__}"
            )
        raw_alerts = data.get("alerts")
        if raw_alerts is None:
            raw_alerts = []
        if not isinstance(raw_alerts, list):
            raise InvalidAlertRequest(
                f"alerts must be an array, got {type(raw_alerts).__name__}"
            )
        return cls(
            receiver=_string_field(data, "receiver"),
            status=_string_field(data, "status"),
            alerts=[Alert.from_dict(item) for item in raw_alerts],
        )


def parse_alert_request(body: bytes | str) -> AlertmanagerRequest:
    """Decode the first JSON value of a webhook body into a request."""
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    text = text.lstrip()
    if not text:
        raise InvalidAlertRequest("empty request body")
    try:
        data, _ = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError as exc:
        raise InvalidAlertRequest(f"malformed JSON: {exc}") from exc
    return AlertmanagerRequest.from_dict(data)


def alert_names(request: AlertmanagerRequest) -> list[str]:
    """Return the ``alertname`` label of every alert, empty where missing."""
    return [alert.name for alert in request.alerts]


class AlertHandler(BaseHTTPRequestHandler):
    """Serves the alert webhook endpoint."""

    def _reply(self, status: HTTPStatus, text: str) -> None:
        payload = text.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def _read_body(self) -> bytes:
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = 0
        return self.rfile.read(length) if length > 0 else b""

    def do_POST(self) -> None:
        """Accept an Alertmanager notification and report each alert."""
        if urlsplit(self.path).path != ALERT_PATH:
            self._reply(HTTPStatus.NOT_FOUND, "404 page not found\n")
            return
        try:
            request = parse_alert_request(self._read_body())
        except InvalidAlertRequest:
            self._reply(HTTPStatus.BAD_REQUEST, INVALID_REPLY + "\n")
            return

        logger.info("🚨 Ricevuto alert: %s", request)
        for name in alert_names(request):
            print("Alert ricevuto:", name)

        self._reply(HTTPStatus.OK, ACCEPTED_REPLY)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(host: str, port: int) -> ThreadingHTTPServer:
    """Create a server bound to host and port that serves the alert endpoint."""
    return ThreadingHTTPServer((host, port), AlertHandler)


_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value {text!r}")


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    """Parse the command-line options of the controller."""
    parser = argparse.ArgumentParser(prog="provaalert")

    def option(name: str, **kwargs: Any) -> None:
        parser.add_argument(f"-{name}", f"--{name}", **kwargs)

    def flag(name: str, default: bool, help_text: str) -> None:
        option(name, type=_parse_bool, nargs="?", const=True, default=default, help=help_text)

    option(
        "metrics-bind-address",
        dest="metrics_addr",
        default="0",
        help="The address the metrics endpoint binds to. "
        "Use :8443 for HTTPS or :8080 for HTTP, or leave as 0 to disable the metrics service.",
    )
    option(
        "health-probe-bind-address",
        dest="probe_addr",
        default=":8081",
        help="The address the probe endpoint binds to.",
    )
    flag(
        "leader-elect",
        False,
        "Enable leader election for controller manager. "
        "Enabling this will ensure there is only one active controller manager.",
    )
    flag(
        "metrics-secure",
        True,
        "If set, the metrics endpoint is served securely via HTTPS. "
        "Use --metrics-secure=false to use HTTP instead.",
    )
    option("webhook-cert-path", default="", help="The directory that contains the webhook certificate.")
    option("webhook-cert-name", default="tls.crt", help="The name of the webhook certificate file.")
    option("webhook-cert-key", default="tls.key", help="The name of the webhook key file.")
    option("metrics-cert-path", default="", help="The directory that contains the metrics server certificate.")
    option("metrics-cert-name", default="tls.crt", help="The name of the metrics server certificate file.")
    option("metrics-cert-key", default="tls.key", help="The name of the metrics server key file.")
    flag("enable-http2", False, "If set, HTTP/2 will be enabled for the metrics and webhook servers")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the alert webhook receiver and serve until interrupted."""
    parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    try:
        server = make_server(LISTEN_HOST, LISTEN_PORT)
    except OSError as exc:
        logger.critical("%s", exc)
        return 1
    logger.info("✅ Controller in ascolto su :%d...", LISTEN_PORT)
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())