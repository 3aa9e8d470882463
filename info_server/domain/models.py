"""Typed domain models shared across runtime layers.

This module provides the snapshot contract rendered by the root endpoint.
"""

from dataclasses import dataclass, field

NO_PARAMETER_NAME = "_NO_PARAMETER_NAME_"
UNKNOWN_HOSTNAME = "#unknown#"


@dataclass(frozen=True)
class RuntimeInfo:
    """Process and runtime snapshot reported to callers.

    Static fields are collected once when the root handler is built;
    `param_name`, `remote_addr`, `headers` and `uptime` are set per request
    on a copy of the static snapshot.

    Attributes:
        hostname: Host name reported by the kernel.
        pid: Process id of the server.
        ppid: Process id of the server's parent.
        uid: Numeric user id of the server process.
        appname: Name of this application.
        version: Version of this application.
        param_name: Value of the `name` query parameter or the sentinel.
        remote_addr: Remote client address as `host:port`.
        os: Operating system identifier.
        arch: Machine architecture identifier.
        runtime: Python implementation and version.
        num_threads: Number of live threads, as a decimal string.
        num_cpu: Number of logical CPUs, as a decimal string.
        uptime: Elapsed time since server start.
        env_vars: Environment variables as `KEY=VALUE` entries.
        headers: Inbound request headers keyed by canonical name.
    """

    hostname: str
    pid: int
    ppid: int
    uid: int
    appname: str
    version: str
    param_name: str = NO_PARAMETER_NAME
    remote_addr: str = ""
    os: str = ""
    arch: str = ""
    runtime: str = ""
    num_threads: str = ""
    num_cpu: str = ""
    uptime: str = ""
    env_vars: list[str] = field(default_factory=list)
    headers: dict[str, list[str]] = field(default_factory=dict)
