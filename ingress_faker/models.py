"""Log record data model and the assembler that fills it from a field source."""

from dataclasses import dataclass
from datetime import datetime

from ingress_faker.fields import join_url

PROTOCOL = "HTTP/1.1"
CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class HttpInfo:
    request_id: str
    method: str
    status_code: int
    url: str
    host: str
    uri: str
    request_time: float
    user_agent: str
    bytes_sent: str
    protocol: str = PROTOCOL
    trace_session_id: str = ""
    server_protocol: str = PROTOCOL
    content_type: str = CONTENT_TYPE


@dataclass(frozen=True)
class NginxInfo:
    x_forward_for: str
    remote_addr: str
    http_referrer: str


@dataclass(frozen=True)
class LogRecord:
    ts: datetime
    http: HttpInfo
    nginx: NginxInfo


def make_record(source, now: datetime | None = None) -> LogRecord:
    """Draw every field from *source* and stamp the wall-clock time."""
    ts = now or datetime.now().astimezone()
    status_code = source.status_code()
    host = source.host()
    path = source.path()
    ip = source.ip()
    return LogRecord(
        ts=ts,
        http=HttpInfo(
            request_id=source.request_id(),
            method=source.method(),
            status_code=status_code,
            url=join_url(host, path),
            host=host,
            uri=path,
            request_time=source.request_time(),
            user_agent=source.user_agent(),
            bytes_sent=source.bytes_sent(status_code),
        ),
        nginx=NginxInfo(
            x_forward_for=ip,
            remote_addr=ip,
            http_referrer=source.referrer(),
        ),
    )
