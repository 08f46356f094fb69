"""Serialize a log record the way the ingress-nginx controller prints it."""

import json

from ingress_faker.models import LogRecord

LINE_PREFIX = "ingress-nginx-controller controller "


def record_to_dict(record: LogRecord) -> dict:
    http = record.http
    nginx = record.nginx
    return {
        "ts": record.ts.isoformat(),
        "http": {
            "request_id": http.request_id,
            "method": http.method,
            "status_code": http.status_code,
            "url": http.url,
            "host": http.host,
            "uri": http.uri,
            "request_time": http.request_time,
            "user_agent": http.user_agent,
            "protocol": http.protocol,
            "trace_session_id": http.trace_session_id,
            "server_protocol": http.server_protocol,
            "content_type": http.content_type,
            "bytes_sent": http.bytes_sent,
        },
        "nginx": {
            "x-forward-for": nginx.x_forward_for,
            "remote_addr": nginx.remote_addr,
            "http_referrer": nginx.http_referrer,
        },
    }


def format_json(record: LogRecord) -> str:
    return json.dumps(record_to_dict(record), separators=(",", ":"), allow_nan=False)


def format_line(record: LogRecord) -> str:
    """Return the full output line, prefix included, without a newline."""
    return LINE_PREFIX + format_json(record)
