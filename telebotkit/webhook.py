"""Receiving updates through a webhook."""

from __future__ import annotations

import json
import logging
import ssl
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Mapping, Optional, Union

from .constants import TelebotError
from .media import MediaFile
from .update import Update

_log = logging.getLogger(__name__)

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


@dataclass
class WebhookTLS:
    """Key and certificate paths for a TLS listener."""

    key: str = ""
    cert: str = ""


@dataclass
class WebhookEndpoint:
    """Public address the server sends updates to, with an optional self-signed cert."""

    public_url: str = ""
    cert: str = ""


def _header(headers: Any, name: str) -> str:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


@dataclass
class Webhook:
    """Webhook settings and status.

    With an empty ``listen`` no server is started and requests are expected to
    be fed to ``handle_request`` by the caller.
    """

    listen: str = ""
    max_connections: int = 0
    allowed_updates: list[str] = field(default_factory=list)
    ip: str = ""
    drop_updates: bool = False
    secret_token: str = ""

    has_custom_cert: bool = False
    pending_updates: int = 0
    error_unixtime: int = 0
    error_message: str = ""
    sync_error_unixtime: int = 0

    tls: Optional[WebhookTLS] = None
    endpoint: Optional[WebhookEndpoint] = None

    _dest: Any = field(default=None, init=False, repr=False, compare=False)
    _bot: Any = field(default=None, init=False, repr=False, compare=False)

    def files(self) -> dict[str, MediaFile]:
        """Certificate to upload when registering the webhook, if any."""
        files: dict[str, MediaFile] = {}
        if self.tls is not None:
            files["certificate"] = MediaFile(file_local=self.tls.cert)
        if self.endpoint is not None:
            if self.endpoint.cert:
                files["certificate"] = MediaFile(file_local=self.endpoint.cert)
            else:
                # A proxy in front holds a public certificate; nothing to upload.
                files.pop("certificate", None)
        return files

    def params(self) -> dict[str, str]:
        """Request parameters for registering the webhook."""
        params: dict[str, str] = {}
        if self.max_connections:
            params["max_connections"] = str(self.max_connections)
        if self.allowed_updates:
            params["allowed_updates"] = json.dumps(self.allowed_updates, separators=(",", ":"))
        if self.ip:
            params["ip_address"] = self.ip
        if self.drop_updates:
            params["drop_pending_updates"] = "true"
        if self.secret_token:
            params["secret_token"] = self.secret_token

        scheme = "https://" if self.tls is not None else "http://"
        params["url"] = scheme + self.listen
        if self.endpoint is not None:
            params["url"] = self.endpoint.public_url
        return params

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Webhook":
        return cls(
            listen=data.get("url", ""),
            max_connections=data.get("max_connections", 0),
            allowed_updates=list(data.get("allowed_updates") or []),
            ip=data.get("ip_address", ""),
            drop_updates=data.get("drop_pending_updates", False),
            secret_token=data.get("secret_token", ""),
            has_custom_cert=data.get("has_custom_certificate", False),
            pending_updates=data.get("pending_update_count", 0),
            error_unixtime=data.get("last_error_date", 0),
            error_message=data.get("last_error_message", ""),
            sync_error_unixtime=data.get("last_synchronization_error_date", 0),
        )

    def _debug(self, err: Exception) -> None:
        debug = getattr(self._bot, "debug", None)
        if debug is not None:
            debug(err)
        else:
            _log.debug("telebot: %s", err)

    def handle_request(self, headers: Any, body: Union[bytes, str]) -> bool:
        """Decode one incoming request into an update; True if it was queued."""
        if self._dest is None:
            raise TelebotError("telebot: webhook is not polling")
        if self.secret_token and _header(headers, SECRET_HEADER) != self.secret_token:
            self._debug(TelebotError("invalid secret token in request"))
            return False
        try:
            data = json.loads(body)
            if not isinstance(data, Mapping):
                raise ValueError("update is not an object")
            update = Update.from_dict(data)
        except (ValueError, TypeError, AttributeError) as err:
            self._debug(TelebotError(f"cannot decode update: {err}"))
            return False
        self._dest.put(update)
        return True

    def poll(self, bot: Any, dest: Any, stop: threading.Event) -> None:
        """Register the webhook and serve requests until stop is set."""
        try:
            bot.set_webhook(self)
        except Exception as err:
            bot.on_error(err, None)
            stop.set()
            return

        self._dest = dest
        self._bot = bot

        if not self.listen:
            stop.wait()
            return

        host, _, port = self.listen.rpartition(":")
        server = ThreadingHTTPServer((host, int(port or 0)), self._request_handler())
        if self.tls is not None:
            context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
            context.load_cert_chain(self.tls.cert, self.tls.key)
            server.socket = context.wrap_socket(server.socket, server_side=True)

        def shutdown() -> None:
            stop.wait()
            server.shutdown()

        threading.Thread(target=shutdown, daemon=True).start()
        try:
            server.serve_forever()
        finally:
            server.server_close()

    def _request_handler(self) -> type:
        webhook = self

        class _Handler(BaseHTTPRequestHandler):
            def _serve(self) -> None:
                length = int(self.headers.get("Content-Length") or 0)
                body = self.rfile.read(length)
                webhook.handle_request(self.headers, body)
                self.send_response(200)
                self.end_headers()

            do_POST = _serve
            do_GET = _serve
            do_PUT = _serve

            def log_message(self, format: str, *args: Any) -> None:
                # Route access logs to the module logger instead of stderr.
                _log.debug("%s - " + format, self.address_string(), *args)

        return _Handler