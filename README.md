# provaalert

A small receiver for Alertmanager webhook notifications, together with a
minimal model of an `Instance` resource (group `prova.prova`, version
`v1alpha1`), an in-memory store for it and a reconciler.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Receiving alerts

Start the webhook receiver:

```
provaalert
```

It listens on port 8080 on all interfaces and accepts `POST` requests on
`/alert` whose body is an Alertmanager webhook payload:

```json
{
  "receiver": "default",
  "status": "firing",
  "alerts": [
    {
      "status": "firing",
      "labels": {"alertname": "HighLatency"},
      "annotations": {"summary": "Latency above threshold"}
    }
  ]
}
```

Only `receiver`, `status` and, for each alert, `status`, `labels` and
`annotations` are read; other fields are ignored. Each received payload is
logged, and the line `Alert ricevuto: <alertname>` is printed for every alert
in it (with an empty name where the label is missing).

- A valid payload is answered with `200` and the text `alert ricevuto`.
- A body that is empty, is not JSON, or has fields of the wrong type is
  answered with `400` and `invalid request`.
- A `POST` to any other path is answered with `404`.

Stop the receiver with Ctrl-C. If the port cannot be bound, the command logs
the error and exits with status 1.

### Options

`provaalert --help` lists the accepted options. Each can be written with one
or two leading dashes:

| Option | Default |
| --- | --- |
| `--metrics-bind-address` | `0` |
| `--health-probe-bind-address` | `:8081` |
| `--leader-elect` | `false` |
| `--metrics-secure` | `true` |
| `--webhook-cert-path` | empty |
| `--webhook-cert-name` | `tls.crt` |
| `--webhook-cert-key` | `tls.key` |
| `--metrics-cert-path` | empty |
| `--metrics-cert-name` | `tls.crt` |
| `--metrics-cert-key` | `tls.key` |
| `--enable-http2` | `false` |

The boolean options may be given alone (meaning true) or with a value such as
`--metrics-secure=false`; accepted values are `1`, `t`, `true`, `0`, `f`,
`false` and their capitalised forms. The options are parsed and checked, but
they do not change how the receiver runs.

## Using it from Python

```python
from provaalert.server import parse_alert_request, alert_names

request = parse_alert_request(body_bytes)  # raises InvalidAlertRequest
for name in alert_names(request):
    print(name)
```

`parse_alert_request` returns an `AlertmanagerRequest` holding a list of
`Alert` objects; both also have a `from_dict()` class method for already
decoded JSON.

To embed the receiver in your own program, `make_server(host, port)` returns
a `ThreadingHTTPServer` bound to that address with `AlertHandler` installed;
call `serve_forever()` on it. `parse_args(argv)` parses the options described
above.

### Resource model

`provaalert.types` holds `GroupVersion` (with `api_version()`), and
`ObjectMeta`, `InstanceSpec`, `InstanceStatus`, `Instance` and
`InstanceList`, each convertible with `to_dict()` and `from_dict()`.
`Instance.from_dict` and `InstanceList.from_dict` raise `ValueError` when the
mapping names a different `kind` or `apiVersion`.

### Store and reconciler

`provaalert.controller` provides:

- `InstanceStore`, an in-memory store keyed by `Request(name, namespace)`,
  with `get`, `create` and `delete`. `get` and `delete` raise
  `NotFoundError` for missing objects; `create` raises `ValueError` for an
  unnamed or already stored object. Objects are copied on the way in and out.
- `InstanceReconciler(store)`, whose `reconcile(request)` logs the request
  and returns an empty `Result` (no requeue).

## What it does not do

- It does not talk to a Kubernetes cluster: the store lives only in memory
  and nothing is persisted.
- The reconciler makes no changes, and received alerts are not applied to
  any `Instance`.
- No metrics endpoint, health probes, leader election, TLS or webhook
  certificates are served, whatever options are given.